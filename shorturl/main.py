"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware, exception handlers and the mapping store lifecycle.
"""

import time

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shorturl.api import api_router
from shorturl.core.config import settings
from shorturl.core.logging import setup_logging
from shorturl.db.resilience import connect_with_retry
from shorturl.middleware.logging import LoggingMiddleware
from shorturl.store import StoreError, build_store

# Setup logging
logger = setup_logging()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.REQUEST_LOGGING_ENABLED:
    app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router)


# Add exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed information."""
    logger.warning(f"Request validation error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": jsonable_errors(exc)}
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may carry exception instances which are not JSON serializable
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"
    error_location = f"{request.method} {request.url.path}"

    logger.opt(exception=exc).error(
        f"Unhandled exception in {error_location}",
        error_id=error_id,
        url=str(request.url),
        method=request.method,
        path_params=request.path_params,
        query_params=dict(request.query_params),
        client_host=request.client.host if request.client else None
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error"
        }
    )


# Add startup and shutdown event handlers
@app.on_event("startup")
async def startup_event():
    """Connect the mapping store and make sure its schema exists."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"Short URLs are composed against {settings.BASE_URL}")

    store = build_store(settings)
    if not await connect_with_retry(store.ping, name=store.name):
        await store.close()
        logger.critical(f"Failed to connect to {store.name} after multiple attempts")
        raise RuntimeError(f"{store.name} is unreachable")

    try:
        await store.initialize()
    except StoreError as e:
        await store.close()
        logger.critical(f"Failed to initialize {store.name}: {e}")
        raise

    app.state.store = store
    logger.info(f"Mapping store ready ({store.name})")


@app.on_event("shutdown")
async def shutdown_event():
    """Release the mapping store."""
    logger.info(f"Shutting down {settings.APP_NAME}")

    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()
        logger.info("Mapping store closed")


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "shorturl.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
