"""
Section Assembler

Groups text lines extracted from one PDF page into logical sections before
searching. Each line carries the leading values of its text matrix ("size");
consecutive pieces with the same size form one section.

Rules:
1. Lines are split after sentence-ending punctuation (. ? ! ; :)
2. Pieces of at most SEPARATOR_MAX_LENGTH characters are separators: they
   close the current section and are dropped. Length is counted in code
   points, not UTF-8 bytes, so a two-character CJK word such as "日本" is a
   separator even though its encoding is six bytes long
3. A size change closes the current section and opens a new one
4. Otherwise the piece is appended to the current section with one space
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Final

from booksearch.core.logging import get_logger
from booksearch.search.models import Section

logger = get_logger(__name__)

SEPARATOR_MAX_LENGTH: Final[int] = 2
END_OF_SENTENCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<=[.?!;:])\s+")
PDF_EXTENSION: Final[str] = ".pdf"


@dataclass(frozen=True)
class TextLine:
    """One extracted text line and its text matrix prefix."""

    text: str
    size: tuple[float, ...] = ()


@dataclass(frozen=True)
class PageText:
    """Extracted lines of one PDF page with the page's location metadata.

    Attributes:
        filename: Name of the PDF
        page: 1-based page number (equals the book chapter number)
        book_url: Link to the matching book chapter
        lines: Extracted lines in reading order
    """

    filename: str
    page: int
    book_url: str = ""
    lines: list[TextLine] = field(default_factory=list)


def is_separator(text: str) -> bool:
    """Return True for pieces too short to carry searchable content."""
    return len(text) <= SEPARATOR_MAX_LENGTH


def split_sentences(text: str) -> list[str]:
    """Split a line after sentence-ending punctuation, dropping empty pieces."""
    return [piece for piece in END_OF_SENTENCE_PATTERN.split(text) if piece]


class SectionAssembler:
    """Builds searchable sections from extracted page lines.

    Attributes:
        filename_suffix: If set, replaces a trailing ".pdf" in section
            filenames (e.g. " (Book)" turns "slides.pdf" into "slides (Book)")
    """

    def __init__(self, filename_suffix: str | None = None) -> None:
        self.filename_suffix = filename_suffix

    def display_filename(self, filename: str) -> str:
        """Apply the configured filename suffix to a PDF filename."""
        if self.filename_suffix is None or not filename.lower().endswith(PDF_EXTENSION):
            return filename
        return filename[: -len(PDF_EXTENSION)] + self.filename_suffix

    def _pieces(self, page: PageText) -> Iterator[tuple[str, tuple[float, ...]]]:
        for line in page.lines:
            for piece in split_sentences(line.text):
                yield piece, line.size

    def assemble(self, page: PageText) -> list[Section]:
        """Group the lines of one page into sections.

        Args:
            page: Extracted page text with metadata

        Returns:
            Sections of the page in reading order
        """
        filename = self.display_filename(page.filename)
        contents: list[str] = []
        current: list[str] | None = None
        current_size: tuple[float, ...] | None = None

        for piece, size in self._pieces(page):
            if is_separator(piece):
                if current is not None:
                    contents.append(" ".join(current))
                    current = None
                continue

            if current is None:
                current, current_size = [piece], size
                continue

            if size != current_size:
                contents.append(" ".join(current))
                current, current_size = [piece], size
                continue

            current.append(piece)

        if current is not None:
            contents.append(" ".join(current))

        return [
            Section(
                content=content,
                filename=filename,
                page=page.page,
                book_url=page.book_url,
            )
            for content in contents
        ]

    def assemble_all(self, pages: Iterable[PageText]) -> list[Section]:
        """Assemble the sections of several pages, keeping page order."""
        sections: list[Section] = []
        page_count = 0
        for page in pages:
            page_count += 1
            sections.extend(self.assemble(page))

        logger.debug("sections_assembled", pages=page_count, sections=len(sections))
        return sections
