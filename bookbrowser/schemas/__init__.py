"""
Pydantic Schemas Package

Records passed from the data sources to the templates:
- book.py: Book rows and search result pages
- review.py: upstream review records and their template view
"""

from bookbrowser.schemas.book import (
    SEARCH_PAGE_SIZE,
    Book,
    SearchPage,
    to_display_list,
)
from bookbrowser.schemas.review import Review, ReviewView

__all__ = [
    # Book schemas
    "Book",
    "SearchPage",
    "SEARCH_PAGE_SIZE",
    "to_display_list",
    # Review schemas
    "Review",
    "ReviewView",
]
