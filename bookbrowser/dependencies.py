"""
FastAPI Dependencies Module

Reusable components injected into route handlers with Depends().

The BookStore and ReviewClient are created once in the application lifespan
and kept on app.state; these dependencies hand them to routes so no module
holds a global pool. Tests build the app with their own store and client.
"""

from typing import Annotated

from fastapi import Depends, Query, Request

from bookbrowser.database import BookStore
from bookbrowser.services.reviews import ReviewClient

# =============================================================================
# Shared Resources
# =============================================================================


def get_book_store(request: Request) -> BookStore:
    """Return the process-wide BookStore created at startup."""
    return request.app.state.book_store


def get_review_client(request: Request) -> ReviewClient:
    """Return the process-wide ReviewClient created at startup."""
    return request.app.state.review_client


Store = Annotated[BookStore, Depends(get_book_store)]
Reviews = Annotated[ReviewClient, Depends(get_review_client)]


# =============================================================================
# Query Parameters
# =============================================================================


def parse_offset(value: str | None) -> int:
    """
    Interpret a raw offset query value.

    Missing or non-numeric values become 0, and so do negative ones:
    the offset is always a non-negative row count.

    Examples:
        None -> 0, "abc" -> 0, "-5" -> 0, "20" -> 20
    """
    if value is None:
        return 0
    try:
        offset = int(value.strip())
    except ValueError:
        return 0
    return max(0, offset)


def get_offset(
    offset: str | None = Query(
        default=None,
        description="Number of results to skip (defaults to 0)",
        examples=["0", "10"],
    ),
) -> int:
    """
    Offset query parameter.

    Declared as a string so a bad value falls back to 0 instead of
    FastAPI answering 422.
    """
    return parse_offset(offset)


Offset = Annotated[int, Depends(get_offset)]
