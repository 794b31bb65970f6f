"""
Tests for the occurrence finder.

- Case-insensitive matching
- Overlapping matches
- Blank term guard
- Offset mapping when folding changes string length
"""

from __future__ import annotations

from booksearch.search.folding import CaseFolding, fold_with_offsets
from booksearch.search.models import Occurrence
from booksearch.search.occurrences import find_occurrences, is_blank_term

# =============================================================================
# Basic Matching
# =============================================================================


class TestFindOccurrences:
    """Tests for find_occurrences()."""

    def test_finds_single_occurrence(self) -> None:
        """A single match is reported with half-open offsets."""
        content = "the quick brown fox jumps"

        assert find_occurrences(content, "fox") == [Occurrence(start=16, end=19)]

    def test_matching_is_case_insensitive(self) -> None:
        """Content and term are both lowercased before comparison."""
        content = "Fox fox FOX"

        occurrences = find_occurrences(content, "fOx")

        assert [o.start for o in occurrences] == [0, 4, 8]

    def test_overlapping_matches_are_reported(self) -> None:
        """The scan resumes one character after each match start."""
        assert find_occurrences("aaa", "aa") == [
            Occurrence(start=0, end=2),
            Occurrence(start=1, end=3),
        ]

    def test_returns_empty_when_term_absent(self) -> None:
        """No occurrences when the term is not a substring."""
        assert find_occurrences("the lazy dog", "cat") == []

    def test_matches_inside_words(self) -> None:
        """Matching is a literal substring search, not word-based."""
        assert find_occurrences("unsorted", "sort") == [Occurrence(start=2, end=6)]

    def test_empty_content_never_matches(self) -> None:
        """An empty section content produces no occurrences."""
        assert find_occurrences("", "fox") == []


# =============================================================================
# Blank Term Guard
# =============================================================================


class TestBlankTerm:
    """Empty or whitespace-only terms mean no search is performed."""

    def test_empty_term_returns_nothing(self) -> None:
        assert find_occurrences("some content", "") == []

    def test_whitespace_term_returns_nothing(self) -> None:
        assert find_occurrences("some content here", "   ") == []

    def test_is_blank_term(self) -> None:
        assert is_blank_term("")
        assert is_blank_term(" \t\n")
        assert not is_blank_term(" a ")


# =============================================================================
# Case Folding
# =============================================================================


class TestCaseFolding:
    """Tests for configurable folding and offset mapping."""

    def test_lower_does_not_match_sharp_s(self) -> None:
        """Simple lowercasing keeps "ß" distinct from "ss"."""
        assert find_occurrences("Straße", "STRASSE") == []

    def test_casefold_matches_sharp_s(self) -> None:
        """Unicode casefolding maps "ß" to "ss" and offsets stay original."""
        occurrences = find_occurrences("Straße", "STRASSE", CaseFolding.CASEFOLD)

        assert occurrences == [Occurrence(start=0, end=6)]

    def test_partial_match_of_expanded_character(self) -> None:
        """A match on half of an expanded character maps to that character."""
        occurrences = find_occurrences("Straße", "ss", CaseFolding.CASEFOLD)

        assert occurrences == [Occurrence(start=4, end=5)]

    def test_offsets_follow_length_changing_lowercase(self) -> None:
        """Lowercasing "İ" yields two code points; offsets are mapped back."""
        content = "İstanbul"

        occurrences = find_occurrences(content, "stan")

        assert occurrences == [Occurrence(start=1, end=5)]
        assert content[1:5] == "stan"

    def test_fold_with_offsets_identity(self) -> None:
        """Length-preserving folds map each character to itself."""
        folded, offsets = fold_with_offsets("ABC", CaseFolding.LOWER)

        assert folded == "abc"
        assert offsets == [0, 1, 2]

    def test_fold_with_offsets_table(self) -> None:
        """Each folded character points at its source character."""
        folded, offsets = fold_with_offsets("aß", CaseFolding.CASEFOLD)

        assert folded == "ass"
        assert offsets == [0, 1, 1]

    def test_match_ignores_unrelated_length_changes(self) -> None:
        """An expanding character elsewhere does not change how a term folds."""
        assert find_occurrences("ΟΔΟΣ", "ΟΔΟΣ") == [Occurrence(start=0, end=4)]
        assert find_occurrences("ΟΔΟΣ İ", "ΟΔΟΣ") == [Occurrence(start=0, end=4)]

    def test_term_and_content_fold_alike(self) -> None:
        """Term folding equals the folding of the same text inside content."""
        for folding in CaseFolding:
            folded, _ = fold_with_offsets("ΟΔΟΣ", folding)
            assert folding.fold("ΟΔΟΣ") == folded

    def test_casefold_unifies_final_sigma(self) -> None:
        occurrences = find_occurrences("ΟΔΟΣ", "οδος", CaseFolding.CASEFOLD)

        assert occurrences == [Occurrence(start=0, end=4)]
