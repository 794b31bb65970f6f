#!/usr/bin/env python3
"""
Search a JSON dump of course content from the command line.

Usage:
    python scripts/search_sections.py content.json "search term" --context-length 5
    python scripts/search_sections.py content.json "search term" --json

Input:
    A JSON list. Each entry is either a section
        {"content": ..., "filename": ..., "page": ..., "bookurl": ...}
    or an extracted page that is assembled into sections first
        {"filename": ..., "page": ..., "bookurl": ..., "lines": [{"text": ..., "size": [...]}]}

Output:
    Plain text grouped by filename, or with --json the flat records
    {filename, pagenumber, bookchapterurl, contextsnippet}.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Final

from booksearch.core.exceptions import InvalidSectionError
from booksearch.core.logging import configure_logging
from booksearch.search.engine import SearchEngine, flatten_results
from booksearch.search.folding import CaseFolding
from booksearch.search.models import SearchResults, Section
from booksearch.sections.assembler import PageText, SectionAssembler, TextLine

DEFAULT_CONTEXT_LENGTH: Final[int] = 5
CHAPTER_LABEL: Final[str] = "Chapter"


# =============================================================================
# Loading
# =============================================================================


def load_entries(input_path: Path) -> list[dict[str, Any]]:
    """Load the JSON list of sections or pages."""
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise InvalidSectionError("Input must be a JSON list of sections or pages")
    return data


def page_from_entry(entry: dict[str, Any]) -> PageText:
    """Build a PageText from an entry carrying extracted lines."""
    for key in ("filename", "page"):
        if key not in entry:
            raise InvalidSectionError(f"Page is missing '{key}'", field=key)

    raw_lines = entry["lines"]
    if not isinstance(raw_lines, list):
        raise InvalidSectionError("Page 'lines' must be a list", field="lines")

    lines: list[TextLine] = []
    for line in raw_lines:
        if not isinstance(line, dict) or not isinstance(line.get("text"), str):
            raise InvalidSectionError(
                f"Each line must be an object with a string 'text', got {line!r}",
                field="lines",
            )
        size = line.get("size", [])
        if not isinstance(size, list):
            raise InvalidSectionError(
                f"Line 'size' must be a list, got {size!r}", field="lines"
            )
        lines.append(TextLine(text=line["text"], size=tuple(size)))

    return PageText(
        filename=entry["filename"],
        page=entry["page"],
        book_url=entry.get("bookurl", entry.get("bookUrl", "")),
        lines=lines,
    )


def build_sections(
    entries: list[dict[str, Any]],
    assembler: SectionAssembler,
) -> list[Section]:
    """Convert raw entries into sections, assembling pages with lines.

    Args:
        entries: Raw JSON entries in document order.
        assembler: Assembler used for entries with a "lines" key.

    Returns:
        Sections in document order.

    Raises:
        InvalidSectionError: If an entry is malformed.
    """
    sections: list[Section] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise InvalidSectionError(f"Entry must be an object, got {entry!r}")
        if "lines" in entry:
            sections.extend(assembler.assemble(page_from_entry(entry)))
        else:
            sections.append(Section.from_mapping(entry))
    return sections


# =============================================================================
# Output
# =============================================================================


def to_records(results: SearchResults) -> list[dict[str, Any]]:
    """Flatten results into transport records."""
    return [
        {
            "filename": r.filename,
            "pagenumber": r.page,
            "bookchapterurl": r.book_url,
            "contextsnippet": r.snippet,
        }
        for r in flatten_results(results)
    ]


def format_text(results: SearchResults) -> str:
    """Render results as a plain text listing grouped by filename."""
    lines: list[str] = []
    for filename, pages in results.items():
        lines.append(filename)
        for page, result in pages.items():
            lines.append(f"  {CHAPTER_LABEL}-{page}: {result.snippet}")
    return "\n".join(lines)


# =============================================================================
# Main Script
# =============================================================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search course content sections.")
    parser.add_argument("input", type=Path, help="JSON file with sections or pages")
    parser.add_argument("term", help="Search term")
    parser.add_argument(
        "--context-length",
        type=int,
        default=DEFAULT_CONTEXT_LENGTH,
        help=f"Words of context on each side (default: {DEFAULT_CONTEXT_LENGTH})",
    )
    parser.add_argument(
        "--case-folding",
        choices=[mode.value for mode in CaseFolding],
        default=CaseFolding.LOWER.value,
        help="Case folding strategy (default: lower)",
    )
    parser.add_argument(
        "--book-suffix",
        default=None,
        help='Replace ".pdf" in assembled filenames, e.g. " (Book)"',
    )
    parser.add_argument("--json", action="store_true", help="Print JSON records")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the search and print the results."""
    args = parse_args(argv)
    configure_logging(log_level="WARNING", json_output=False, stream=sys.stderr)

    if not args.input.exists():
        print(f"ERROR: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        entries = load_entries(args.input)
        sections = build_sections(entries, SectionAssembler(args.book_suffix))
    except (InvalidSectionError, KeyError, json.JSONDecodeError) as e:
        print(f"ERROR: Invalid input: {e}", file=sys.stderr)
        return 1

    engine = SearchEngine(case_folding=CaseFolding(args.case_folding))
    results = engine.aggregate(sections, args.term, args.context_length)

    if args.json:
        print(json.dumps(to_records(results), indent=2, ensure_ascii=False))
    else:
        print(format_text(results))

    return 0


if __name__ == "__main__":
    sys.exit(main())
