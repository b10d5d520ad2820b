"""
Books Router

Server-rendered pages over the book table:
- GET /search: title-prefix search, ten results per page
- GET /book/{book_id}: one book's detail page

Routes are plain `def` functions. FastAPI runs them in its threadpool, so
a request waiting for a pooled connection does not block the event loop.
"""

import html
import logging

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError

from bookbrowser.database import DataAccessError
from bookbrowser.dependencies import Offset, Store
from bookbrowser.schemas import SEARCH_PAGE_SIZE, Book, SearchPage
from bookbrowser.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    default_response_class=HTMLResponse,
)


def error_fragment(message: str) -> str:
    """Small HTML fragment used when a page cannot be rendered."""
    return f"<h2>Error</h2>{html.escape(message)}"


@router.get(
    "/search",
    summary="Search books by title prefix",
    description="Paginated list of books whose title starts with q, ordered by title.",
)
def search_books(
    request: Request,
    store: Store,
    offset: Offset,
    q: str | None = Query(
        default=None,
        description="Title prefix; empty or missing matches every book",
        examples=["Dune", "The"],
    ),
) -> Response:
    """
    Search books whose title begins with q.

    Examples:
        GET /search?q=The
        GET /search?q=The&offset=10
    """
    query = q or ""

    try:
        rows = store.find_by_title_prefix(f"{query}%", SEARCH_PAGE_SIZE, offset)
        page = SearchPage.from_rows(query, offset, rows)
    except (DataAccessError, ValidationError) as exc:
        if isinstance(exc, ValidationError):
            logger.error(f"Malformed row in search results for {query!r}: {exc}")
        return HTMLResponse(
            error_fragment(str(exc)),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return templates.TemplateResponse(
        request,
        "results.html",
        {
            "results": page.results,
            "has_results": page.has_results,
            "q": page.q,
            "offset": page.offset,
            "prev_offset": page.prev_offset,
            "next_offset": page.next_offset,
        },
    )


@router.get(
    "/book/{book_id}",
    summary="Book details",
    description="Detail page for one book.",
    responses={404: {"description": "Book not found"}},
)
def get_book(
    request: Request,
    book_id: str,
    store: Store,
) -> Response:
    """
    Render one book.

    A missing book gets a 404 page. A failed query, or a row that cannot be
    turned into a Book, gets an empty 500 response.
    """
    try:
        row = store.find_by_id(book_id)
    except DataAccessError:
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if row is None:
        logger.info(f"Book {book_id!r} not found")
        return templates.TemplateResponse(
            request,
            "book_not_found.html",
            {"book_id": book_id},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    try:
        book = Book.model_validate(row)
    except ValidationError as exc:
        logger.error(f"Malformed row for book {book_id!r}: {exc}")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return templates.TemplateResponse(
        request,
        "book.html",
        {"book": book, "has_site": book.has_site},
    )
