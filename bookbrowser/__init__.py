"""
Book Catalog Browser Package

Server-rendered search over the Goodreads book table, book detail pages and
NYT review lookups.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Connection pool and read queries (SQLAlchemy Core)
- main.py: FastAPI application factory and startup ping
- dependencies.py: Dependency injection functions
- templating.py: Jinja2 template environment
- schemas/: Pydantic records handed to templates
- routers/: Page handlers
- services/: External review API client
- templates/: Jinja2 page templates
"""

__version__ = "1.0.0"
