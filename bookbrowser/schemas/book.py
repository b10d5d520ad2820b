"""
Book Schemas

Pydantic models that sit between database rows and templates.

- Book: one row of the book table, with genres/authors display-ready
- SearchPage: one page of title-prefix search results plus paging offsets

The store keeps genres and authors as "|"-joined strings. Book rewrites
them to comma-joined text on validation, so every row that reaches a
template has been through the rewrite, detail page and search results alike.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

STORED_DELIMITER = "|"
DISPLAY_DELIMITER = ","

SEARCH_PAGE_SIZE = 10


def to_display_list(value: str | None) -> str:
    """
    Rewrite a stored "|"-joined list for display.

    Examples:
        "Fantasy|Fiction" -> "Fantasy,Fiction"
        None -> ""
    """
    if value is None:
        return ""
    return str(value).replace(STORED_DELIMITER, DISPLAY_DELIMITER)


class Book(BaseModel):
    """
    A book row prepared for rendering.

    Only the columns the handlers reason about are declared; every other
    column (description, rating, image_url, ...) is kept as an extra field
    and passed through unmodified.
    """

    book_id: str = Field(..., description="Opaque book identifier")
    title: str = Field(..., description="Book title")
    genres: str = Field(default="", description="Comma-joined genre tags")
    authors: str = Field(default="", description="Comma-joined author names")
    official_site: str | None = Field(default=None, description="Official site URL")

    model_config = ConfigDict(extra="allow")

    @field_validator("genres", "authors", mode="before")
    @classmethod
    def rewrite_delimiter(cls, v: Any) -> str:
        return to_display_list(v)

    @field_validator("book_id", mode="before")
    @classmethod
    def coerce_book_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @property
    def has_site(self) -> bool:
        """True when the book has a non-empty official site."""
        return bool(self.official_site)


class SearchPage(BaseModel):
    """
    One page of title-prefix search results.

    prev_offset is clamped at zero; next_offset is not clamped, so the
    "next" link is offered even on the last page.
    """

    q: str = Field(default="", description="Echoed search query")
    offset: int = Field(default=0, ge=0, description="Rows skipped")
    page_size: int = Field(default=SEARCH_PAGE_SIZE, ge=1)
    results: list[Book] = Field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return len(self.results) > 0

    @property
    def prev_offset(self) -> int:
        return max(0, self.offset - self.page_size)

    @property
    def next_offset(self) -> int:
        return self.offset + self.page_size

    @classmethod
    def from_rows(
        cls,
        q: str,
        offset: int,
        rows: list[dict[str, Any]],
        page_size: int = SEARCH_PAGE_SIZE,
    ) -> "SearchPage":
        return cls(
            q=q,
            offset=offset,
            page_size=page_size,
            results=[Book.model_validate(row) for row in rows],
        )
