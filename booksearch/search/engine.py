"""
Search Engine

Runs occurrence finding, tokenization, window building and snippet rendering
over a list of sections and groups the snippets by filename then page.

Patterns Applied:
- Pure computation: results are built per call and returned, never shared
- Insertion-ordered dicts keep first-seen filename and page order
- One tracing span per aggregate() call
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from booksearch.core.logging import get_logger
from booksearch.core.tracing import get_tracer
from booksearch.search.folding import CaseFolding
from booksearch.search.models import PageResult, SearchResults, Section
from booksearch.search.occurrences import find_occurrences, is_blank_term
from booksearch.search.snippets import SEGMENT_SEPARATOR, render_snippet
from booksearch.search.tokenizer import tokenize
from booksearch.search.windows import build_context_windows, clamp_context_length

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class SearchEngine:
    """Context-window search over content sections.

    Attributes:
        case_folding: Folding applied to content and term before matching
    """

    def __init__(self, case_folding: CaseFolding = CaseFolding.LOWER) -> None:
        """Initialize the search engine.

        Args:
            case_folding: Folding strategy (default: simple lowercase)
        """
        self.case_folding = case_folding

    def search_section(
        self,
        section: Section,
        term: str,
        context_length: int,
    ) -> str | None:
        """Render the snippet for one section.

        Args:
            section: Section to search
            term: Search term
            context_length: Words of context on each side of a match

        Returns:
            Rendered snippet, or None if the section does not match
        """
        occurrences = find_occurrences(section.content, term, self.case_folding)
        if not occurrences:
            return None

        tokens = tokenize(section.content)
        windows = build_context_windows(occurrences, tokens, context_length)
        if not windows:
            return None

        return render_snippet([token.word for token in tokens], windows)

    def aggregate(
        self,
        sections: Iterable[Section],
        term: str,
        context_length: int,
    ) -> SearchResults:
        """Search all sections and group the snippets by filename and page.

        A later match on an already present (filename, page) appends its
        snippet to the stored one, separated by " ... ". The stored book_url
        is the one of the first matching section.

        Args:
            sections: Sections in document order
            term: Search term; blank terms produce no results
            context_length: Words of context on each side (negative means 0)

        Returns:
            filename -> page -> PageResult, in first-seen order
        """
        results: SearchResults = {}
        length = clamp_context_length(context_length)

        with tracer.start_as_current_span("booksearch.aggregate") as span:
            span.set_attribute("booksearch.term_length", len(term))
            span.set_attribute("booksearch.context_length", length)

            searched = 0
            matched = 0

            if not is_blank_term(term):
                for section in sections:
                    searched += 1
                    snippet = self.search_section(section, term, length)
                    if snippet is None:
                        continue
                    matched += 1

                    pages = results.setdefault(section.filename, {})
                    existing = pages.get(section.page)
                    if existing is None:
                        pages[section.page] = PageResult(
                            filename=section.filename,
                            page=section.page,
                            book_url=section.book_url,
                            snippet=snippet,
                        )
                    else:
                        pages[section.page] = replace(
                            existing,
                            snippet=existing.snippet + SEGMENT_SEPARATOR + snippet,
                        )

            page_count = sum(len(pages) for pages in results.values())
            span.set_attribute("booksearch.sections_searched", searched)
            span.set_attribute("booksearch.sections_matched", matched)
            span.set_attribute("booksearch.pages_matched", page_count)

        logger.debug(
            "search_completed",
            sections_searched=searched,
            sections_matched=matched,
            files_matched=len(results),
            pages_matched=page_count,
        )
        return results


def flatten_results(results: SearchResults) -> list[PageResult]:
    """Flatten grouped results into a list in grouped order."""
    return [result for pages in results.values() for result in pages.values()]
