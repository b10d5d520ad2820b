"""
Review Schemas

Reviews come live from the NYT Books API and are never stored.

- Review: one element of the upstream "results" array
- ReviewView: the shape the review template renders

Upstream field -> view field:
    book_title     -> booktitle
    book_author    -> author
    byline         -> reviewer
    publication_dt -> date
    summary        -> link
    url            -> url
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Review(BaseModel):
    """A single upstream review record."""

    book_title: str | None = Field(default=None, description="Reviewed book title")
    book_author: str | None = Field(default=None, description="Reviewed book author")
    byline: str | None = Field(default=None, description="Reviewer byline")
    publication_dt: str | None = Field(default=None, description="Publication date")
    summary: str | None = Field(default=None, description="Review summary")
    url: str | None = Field(default=None, description="Link to the full review")

    # The API returns more fields (isbn13, uuid, ...) that are not rendered
    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "book_title", "book_author", "byline", "publication_dt", "summary", "url",
        mode="before",
    )
    @classmethod
    def stringify(cls, v: Any) -> str | None:
        """Render non-string upstream values (e.g. a numeric title) as text."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def to_view(self) -> "ReviewView":
        return ReviewView(
            booktitle=self.book_title,
            author=self.book_author,
            reviewer=self.byline,
            date=self.publication_dt,
            link=self.summary,
            url=self.url,
        )


class ReviewView(BaseModel):
    """Review fields as named in the review template."""

    booktitle: str | None = None
    author: str | None = None
    reviewer: str | None = None
    date: str | None = None
    link: str | None = None
    url: str | None = None
