"""URL redirection endpoint."""

import string
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from loguru import logger

from shorturl.api.dependencies import get_redirect_service
from shorturl.api.routes.shortener import NOT_FOUND_MESSAGE
from shorturl.services.exceptions import StoreUnavailableError, URLNotFoundError
from shorturl.services.redirect import RedirectService

# Create router with tags
router = APIRouter(tags=["redirect"])


def location_header(original_url: str) -> str:
    """
    Header-safe form of ``original_url``.

    Printable ASCII passes through untouched. Other characters are
    percent-encoded as UTF-8 because header values must be latin-1.
    """
    return quote(original_url, safe=string.punctuation)


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"description": NOT_FOUND_MESSAGE, "content": {"text/plain": {}}},
    }
)
async def redirect_to_original_url(
    short_code: str,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Redirect to the original URL of a short code."""
    try:
        original_url = await redirect_service.resolve(short_code)
    except URLNotFoundError:
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=status.HTTP_404_NOT_FOUND)
    except StoreUnavailableError as e:
        logger.error("Redirect failed", short_code=short_code, error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return Response(
        status_code=status.HTTP_302_FOUND,
        headers={"Location": location_header(original_url)},
    )
