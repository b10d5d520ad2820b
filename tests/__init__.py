"""
Test Suite for the Book Catalog Browser

Test Organization:
- conftest.py: Shared fixtures (in-memory database, client, sample books)
- test_search.py: /search
- test_books.py: /book/{book_id} and the Book/SearchPage records
- test_reviews.py: ReviewClient and /findreview
- test_startup.py: lifespan ping, landing page, port resolution
- test_database.py: BookStore queries and connection handling
- test_config.py: Settings

Running Tests:
    pytest
    pytest tests/test_search.py -v
"""
