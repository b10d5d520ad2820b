"""
FastAPI Application Entry Point

This module creates and configures the catalog browser.

Startup Sequence
================
1. create_app() builds the app; nothing touches the database yet
2. Lifespan startup builds the BookStore (or takes the one passed in),
   pings the database once, and only then lets the server bind its port
3. If the ping fails, StartupPingError aborts startup: uvicorn never
   starts listening and the process exits
4. Lifespan shutdown closes the connection pool

Run with:
    python -m bookbrowser.main [PORT]
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from bookbrowser.config import get_settings
from bookbrowser.database import BookStore, DataAccessError
from bookbrowser.middleware import AccessLogMiddleware
from bookbrowser.routers import books_router, pages_router, reviews_router
from bookbrowser.services.reviews import ReviewClient

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class StartupPingError(RuntimeError):
    """The database liveness ping failed; the server must not start listening."""


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    book_store: BookStore | None = None,
    review_client: ReviewClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        book_store: Store to use instead of one built from settings.
            A store passed in is not disposed at shutdown.
        review_client: Review API client to use instead of the default

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ----- STARTUP -----
        logger.info(f"Starting {settings.app_name}...")

        owns_store = book_store is None
        store = book_store if book_store is not None else BookStore.from_settings(settings)
        app.state.book_store = store
        app.state.review_client = review_client or ReviewClient(
            api_key=settings.api_key,
            endpoint=settings.reviews_api_url,
        )

        logger.info("Pinging database...")
        try:
            await run_in_threadpool(store.ping)
        except DataAccessError as exc:
            logger.error(f"Cannot ping database: {exc}")
            if owns_store:
                store.dispose()
            raise StartupPingError(f"Cannot ping database: {exc}") from exc

        logger.info("Database reachable, accepting requests")

        yield  # Application runs here

        # ----- SHUTDOWN -----
        logger.info(f"Shutting down {settings.app_name}...")
        if owns_store:
            store.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Browse the Goodreads book catalog and look up NYT book reviews.",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )

    # -------------------------------------------------------------------------
    # Access Log Middleware
    # -------------------------------------------------------------------------
    # One line per request, like a combined access log
    app.add_middleware(AccessLogMiddleware)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> HTMLResponse:
        """
        Catch-all exception handler.

        Routes map their expected failures themselves; anything reaching
        this handler is a bug. Details are only shown in debug mode.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        body = "<h2>Error</h2>"
        if settings.debug:
            body += str(exc)
        return HTMLResponse(body, status_code=500)

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(pages_router)
    app.include_router(books_router)
    app.include_router(reviews_router)

    return app


def resolve_port(argv: list[str], default: int) -> int:
    """
    Port from the first command line argument, else the configured default.

    Examples:
        ["main.py", "8080"] -> 8080
        ["main.py"] -> default
        ["main.py", "abc"] -> default
    """
    if len(argv) > 1 and argv[1].isdigit() and int(argv[1]) > 0:
        return int(argv[1])
    return default


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookbrowser.main:app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = resolve_port(sys.argv, settings.port)
    logger.info(f"Application starting on port {port}")

    uvicorn.run(
        "bookbrowser.main:app",
        host=settings.host,
        port=port,
        lifespan="on",  # a failed startup must stop the server
        reload=settings.debug,
    )
