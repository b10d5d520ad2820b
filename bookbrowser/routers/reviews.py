"""
Reviews Router

GET /findreview?title=...: reviews of a title from the NYT Books API,
fetched live on every request.
"""

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, Response

from bookbrowser.dependencies import Reviews
from bookbrowser.routers.books import error_fragment
from bookbrowser.services.reviews import ReviewAPIError
from bookbrowser.templating import templates

router = APIRouter(
    tags=["Reviews"],
    default_response_class=HTMLResponse,
)


@router.get(
    "/findreview",
    summary="Find reviews for a title",
    description="Reviews published for a book title, in the order the review API returns them.",
    responses={502: {"description": "Review API unavailable or returned an unusable body"}},
)
async def find_review(
    request: Request,
    client: Reviews,
    title: str = Query(
        default="",
        description="Book title to look up",
        examples=["Dune"],
    ),
) -> Response:
    """
    Render the reviews for a title.

    Upstream failures end here as a 502 page; they are not retried.
    """
    try:
        reviews = await client.find_reviews(title)
    except ReviewAPIError as exc:
        return HTMLResponse(
            error_fragment(str(exc)),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    review_views = [review.to_view() for review in reviews]

    return templates.TemplateResponse(
        request,
        "review.html",
        {
            "search": title,
            "reviews": review_views,
            "count": len(review_views),
            "has_content": len(review_views) > 0,
        },
    )
