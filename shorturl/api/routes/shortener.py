from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from loguru import logger

from shorturl.api import schemas
from shorturl.api.dependencies import get_redirect_service, get_shortener_service
from shorturl.services.exceptions import (
    CollisionExhaustedError,
    InvalidURLError,
    StoreUnavailableError,
    URLNotFoundError,
)
from shorturl.services.redirect import RedirectService
from shorturl.services.shortener import ShortenerService

NOT_FOUND_MESSAGE = "Short URL not found"

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid URL"},
        503: {"model": schemas.ErrorResponse, "description": "Mapping store unavailable"},
    }
)
async def create_short_url(
    payload: schemas.ShortenRequest,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        result = await shortener_service.shorten(payload.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CollisionExhaustedError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return schemas.ShortenResponse(short_url=result.short_url, short_code=result.short_code)


@router.get(
    "/lookup",
    response_class=PlainTextResponse,
    responses={
        404: {"description": NOT_FOUND_MESSAGE, "content": {"text/plain": {}}},
    }
)
async def lookup_short_url(
    code: str = Query(..., description="The short code to look up"),
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Return the original URL of a short code as plain text."""
    try:
        original_url = await redirect_service.resolve(code)
    except URLNotFoundError:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        logger.error("Lookup failed", short_code=code, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return PlainTextResponse(original_url)
