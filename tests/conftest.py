"""
pytest Fixtures for Book Catalog Tests

Shared fixtures used across all test files.

For database tests we use SQLite in-memory:
- Fast: No disk I/O, runs in memory
- Isolated: Each test gets a fresh database
- Simple: No MySQL server needed

StaticPool keeps the single in-memory connection alive; without it the
database would disappear between checkouts.

IMPORTANT: SQLite's LIKE is case-insensitive for ASCII, while MySQL follows
the column collation. Sample titles are chosen so both behave the same.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Set environment variables BEFORE importing the app
import os

os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_KEY"] = "test-api-key"

from collections.abc import Generator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, insert
from sqlalchemy.pool import StaticPool

from bookbrowser.database import BookStore, books_table, metadata
from bookbrowser.main import create_app
from bookbrowser.services.reviews import ReviewClient

REVIEWS_ENDPOINT = "https://reviews.example.test/svc/books/v3/reviews.json"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create a SQLite in-memory engine with the book table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(bind=engine)

    yield engine

    metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def book_store(engine: Engine) -> BookStore:
    """BookStore bound to the in-memory database."""
    return BookStore(engine)


def insert_books(engine: Engine, rows: list[dict[str, Any]]) -> None:
    """Insert raw rows into the book table (rows may omit columns)."""
    with engine.begin() as conn:
        for row in rows:
            conn.execute(insert(books_table).values(**row))


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================


@pytest.fixture
def review_client() -> ReviewClient:
    """Review client pointed at a fake endpoint (tests patch httpx)."""
    return ReviewClient(api_key="test-api-key", endpoint=REVIEWS_ENDPOINT)


@pytest.fixture
def app(book_store: BookStore, review_client: ReviewClient) -> FastAPI:
    """Application wired to the test store and review client."""
    return create_app(book_store=book_store, review_client=review_client)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client with the lifespan running.

    Entering the context runs startup, including the database ping.
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_books(engine: Engine) -> list[dict[str, Any]]:
    """A handful of books with "|"-joined genres and authors."""
    rows = [
        {
            "book_id": "234225",
            "title": "Dune",
            "authors": "Frank Herbert",
            "description": "Set on the desert planet Arrakis.",
            "edition": "40th Anniversary Edition",
            "format": "Paperback",
            "pages": 604,
            "rating": 4.21,
            "rating_count": 678000,
            "review_count": 19000,
            "genres": "Science Fiction|Fiction|Classics",
            "image_url": "https://images.example.test/dune.jpg",
            "official_site": "http://www.dunenovels.com/",
        },
        {
            "book_id": "106",
            "title": "Dune Messiah",
            "authors": "Frank Herbert",
            "description": "The sequel to Dune.",
            "pages": 331,
            "rating": 3.87,
            "genres": "Science Fiction|Fiction",
            "official_site": None,
        },
        {
            "book_id": "12067",
            "title": "Good Omens",
            "authors": "Terry Pratchett|Neil Gaiman",
            "description": "The world will end on Saturday.",
            "pages": 491,
            "rating": 4.25,
            "genres": "Fantasy|Humor|Fiction|Comedy",
            "official_site": "",
        },
        {
            "book_id": "5907",
            "title": "The Hobbit",
            "authors": "J.R.R. Tolkien",
            "pages": 366,
            "genres": "Fantasy|Classics",
        },
        {
            "book_id": "112",
            "title": "Children of Dune",
            "authors": "Frank Herbert",
            "pages": 444,
            "genres": "Science Fiction",
        },
    ]
    insert_books(engine, rows)
    return rows


@pytest.fixture
def many_books(engine: Engine) -> list[dict[str, Any]]:
    """25 books sharing a title prefix, for pagination tests."""
    rows = [
        {
            "book_id": f"p{i:02d}",
            "title": f"Paging Book {i:02d}",
            "authors": "Author A|Author B",
            "genres": "Fiction|Testing",
        }
        for i in range(25, 0, -1)  # inserted out of order on purpose
    ]
    insert_books(engine, rows)
    return rows
