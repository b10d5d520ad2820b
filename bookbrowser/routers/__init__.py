"""
Routers Package

Router Structure:
- pages.py: / (landing page)
- books.py: /search and /book/{book_id}
- reviews.py: /findreview

Each router is imported and registered in main.py.
"""

from bookbrowser.routers.books import router as books_router
from bookbrowser.routers.pages import router as pages_router
from bookbrowser.routers.reviews import router as reviews_router

__all__ = [
    "pages_router",
    "books_router",
    "reviews_router",
]
