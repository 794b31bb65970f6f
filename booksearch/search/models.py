"""
Search Models

Data models shared by the occurrence finder, tokenizer, window builder,
snippet renderer and aggregator.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from booksearch.core.exceptions import InvalidSectionError

# Keys accepted for the book link in raw section mappings
BOOK_URL_KEYS: Final[tuple[str, ...]] = ("book_url", "bookurl", "bookUrl")


@dataclass(frozen=True)
class Section:
    """One unit of searchable text with its location metadata.

    Attributes:
        content: Plain text of the section
        filename: Source document name (first grouping key)
        page: Page or chapter number (second grouping key)
        book_url: Link to the matching book chapter, passed through as-is

    Raises:
        InvalidSectionError: If any field has the wrong type or the
            filename is blank.
    """

    content: str
    filename: str
    page: int
    book_url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.filename, str) or not self.filename.strip():
            raise InvalidSectionError(
                f"Section filename must be a non-empty string, got {self.filename!r}",
                field="filename",
            )
        # bool is an int subclass but never a page number
        if not isinstance(self.page, int) or isinstance(self.page, bool):
            raise InvalidSectionError(
                f"Section page must be an integer, got {self.page!r} "
                f"in {self.filename!r}",
                field="page",
            )
        if not isinstance(self.content, str):
            raise InvalidSectionError(
                f"Section content must be a string in {self.filename!r} "
                f"page {self.page}",
                field="content",
            )
        if not isinstance(self.book_url, str):
            raise InvalidSectionError(
                f"Section book_url must be a string in {self.filename!r} "
                f"page {self.page}",
                field="book_url",
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Section:
        """Build a Section from a raw mapping as produced by a content provider.

        Accepts ``book_url``, ``bookurl`` or ``bookUrl`` for the link.

        Args:
            data: Mapping with content, filename, page and a book link key

        Returns:
            Validated Section

        Raises:
            InvalidSectionError: If a required key is missing or invalid
        """
        for key in ("content", "filename", "page"):
            if key not in data:
                raise InvalidSectionError(f"Section is missing '{key}'", field=key)

        book_url = next((data[key] for key in BOOK_URL_KEYS if key in data), "")
        return cls(
            content=data["content"],
            filename=data["filename"],
            page=data["page"],
            book_url=book_url,
        )


@dataclass(frozen=True)
class Occurrence:
    """Half-open character range [start, end) of one term match."""

    start: int
    end: int


@dataclass(frozen=True)
class Token:
    """A whitespace-delimited word and its start offset in the content."""

    start: int
    word: str

    @property
    def end(self) -> int:
        """Offset one past the last character of the word."""
        return self.start + len(self.word)


@dataclass(frozen=True)
class ContextWindow:
    """Inclusive word-index range [first, last] to render."""

    first: int
    last: int

    @property
    def size(self) -> int:
        """Number of words covered by the window."""
        return self.last - self.first + 1


@dataclass(frozen=True)
class PageResult:
    """Rendered search context for one (filename, page) pair.

    Attributes:
        filename: Source document name
        page: Page or chapter number
        book_url: Link to the book chapter
        snippet: Rendered context, several sections joined by " ... "
    """

    filename: str
    page: int
    book_url: str
    snippet: str


# filename -> page -> PageResult, both levels in first-seen order
SearchResults = dict[str, dict[int, PageResult]]
