"""
Occurrence Finder

Finds every case-insensitive match of a search term in a section's content,
overlapping matches included.

Patterns Applied:
- Pure functions for search logic
- Substring pre-check before the full scan
"""

from __future__ import annotations

from booksearch.search.folding import CaseFolding, fold_with_offsets
from booksearch.search.models import Occurrence


def is_blank_term(term: str) -> bool:
    """Return True when a term is empty or whitespace only."""
    return not term or term.isspace()


def find_occurrences(
    content: str,
    term: str,
    case_folding: CaseFolding = CaseFolding.LOWER,
) -> list[Occurrence]:
    """Find all occurrences of term in content.

    After a match at folded index i the scan resumes at i + 1, so
    overlapping matches are reported ("aa" in "aaa" yields 0 and 1).

    Args:
        content: Text to search in (original case)
        term: Term to search for
        case_folding: Folding applied to both content and term

    Returns:
        Occurrences in document order, with offsets into the original
        content. Empty for a blank term or when the term does not occur.
    """
    if is_blank_term(term) or not content:
        return []

    folded_term = case_folding.fold(term)
    folded_content, offsets = fold_with_offsets(content, case_folding)

    if folded_term not in folded_content:
        return []

    occurrences: list[Occurrence] = []
    term_length = len(folded_term)
    index = folded_content.find(folded_term)

    while index != -1:
        end = index + term_length
        occurrences.append(Occurrence(start=offsets[index], end=offsets[end - 1] + 1))
        index = folded_content.find(folded_term, index + 1)

    return occurrences
