"""
Book Review Service

Fetches reviews for a book title from the NYT Books API.

One request per call:
    GET https://api.nytimes.com/svc/books/v3/reviews.json?title=...&api-key=...

There is no timeout, retry or caching: a slow upstream only stalls the
request waiting on it. An empty API key is sent as-is and is left for the
upstream to reject.
"""

import logging

import httpx
from pydantic import ValidationError

from bookbrowser.config import DEFAULT_REVIEWS_API_URL
from bookbrowser.schemas.review import Review

logger = logging.getLogger(__name__)


class ReviewAPIError(Exception):
    """Raised when the review API call fails or returns an unusable body."""


class ReviewClient:
    """
    Client for the review endpoint.

    Usage:
        client = ReviewClient(api_key=settings.api_key)
        reviews = await client.find_reviews("Dune")
    """

    def __init__(self, api_key: str = "", endpoint: str = DEFAULT_REVIEWS_API_URL) -> None:
        self.api_key = api_key
        self.endpoint = endpoint

    async def find_reviews(self, title: str) -> list[Review]:
        """
        Fetch the reviews published for a title.

        Args:
            title: Free-text book title

        Returns:
            Reviews in the order the API returned them

        Raises:
            ReviewAPIError: On transport failure, a non-2xx status, a body that
                is not JSON, or a body without a "results" list
        """
        params = {"title": title, "api-key": self.api_key}
        logger.info(f"Fetching reviews: {self.endpoint}?title={title}")

        async with httpx.AsyncClient(timeout=None) as client:
            try:
                response = await client.get(self.endpoint, params=params)
            except httpx.HTTPError as exc:
                logger.error(f"Review API request failed: {exc}")
                raise ReviewAPIError(f"Review API request failed: {exc}") from exc

        if response.status_code != 200:
            logger.error(
                f"Review API returned {response.status_code}: {response.text}"
            )
            raise ReviewAPIError(f"Review API returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            logger.error(f"Review API returned invalid JSON: {exc}")
            raise ReviewAPIError("Review API returned invalid JSON") from exc

        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise ReviewAPIError("Review API response has no results")

        try:
            reviews = [Review.model_validate(item) for item in results]
        except ValidationError as exc:
            raise ReviewAPIError(f"Unexpected review record: {exc}") from exc

        logger.info(f"Found {len(reviews)} review(s) for {title!r}")
        return reviews
