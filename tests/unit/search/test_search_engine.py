"""
Tests for SearchEngine aggregation.

- Snippets per section
- Grouping by filename then page, in first-seen order
- Appending snippets of sections on the same page
- Idempotence and no-match invariant
"""

from __future__ import annotations

from typing import Final

import pytest

from booksearch.search.engine import SearchEngine, flatten_results
from booksearch.search.folding import CaseFolding
from booksearch.search.models import PageResult, Section

PANGRAM: Final[str] = "the quick brown fox jumps over the lazy dog"


@pytest.fixture
def engine() -> SearchEngine:
    """Default engine with simple lowercasing."""
    return SearchEngine()


@pytest.fixture
def course_sections() -> list[Section]:
    """Sections of two documents, several sharing a page."""
    return [
        Section(content="Sorting algorithms overview", filename="slides.pdf", page=2,
                book_url="https://moodle.example/book/2"),
        Section(content="Bubble sort compares neighbours", filename="slides.pdf", page=2,
                book_url="https://moodle.example/book/2b"),
        Section(content="Graphs and trees", filename="slides.pdf", page=1,
                book_url="https://moodle.example/book/1"),
        Section(content="Merge sort splits the input", filename="exercises.pdf", page=4,
                book_url="https://moodle.example/book/ex4"),
        Section(content="Quick sort picks a pivot", filename="slides.pdf", page=3,
                book_url="https://moodle.example/book/3"),
    ]


# =============================================================================
# Section Search
# =============================================================================


class TestSearchSection:
    """Tests for SearchEngine.search_section()."""

    def test_snippet_with_context(self, engine: SearchEngine) -> None:
        section = Section(content=PANGRAM, filename="a.pdf", page=1)

        assert engine.search_section(section, "fox", 2) == "... quick brown fox jumps over ..."

    def test_overlapping_matches_render_whole_word(self, engine: SearchEngine) -> None:
        section = Section(content="aaa", filename="a.pdf", page=1)

        assert engine.search_section(section, "aa", 0) == "aaa"

    def test_zero_context_renders_matched_words_only(self, engine: SearchEngine) -> None:
        section = Section(content="fox fox dog cat fox", filename="a.pdf", page=1)

        assert engine.search_section(section, "FOX", 0) == "fox fox ... fox"

    def test_snippet_keeps_original_case(self, engine: SearchEngine) -> None:
        section = Section(content="The Quick Brown Fox", filename="a.pdf", page=1)

        assert engine.search_section(section, "brown", 1) == "... Quick Brown Fox"

    def test_no_match_returns_none(self, engine: SearchEngine) -> None:
        section = Section(content=PANGRAM, filename="a.pdf", page=1)

        assert engine.search_section(section, "cat", 2) is None

    def test_empty_content_returns_none(self, engine: SearchEngine) -> None:
        section = Section(content="", filename="a.pdf", page=1)

        assert engine.search_section(section, "fox", 2) is None


# =============================================================================
# Aggregation
# =============================================================================


class TestAggregate:
    """Tests for SearchEngine.aggregate()."""

    def test_groups_by_filename_then_page(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        results = engine.aggregate(course_sections, "sort", 1)

        assert list(results) == ["slides.pdf", "exercises.pdf"]
        assert list(results["slides.pdf"]) == [2, 3]
        assert list(results["exercises.pdf"]) == [4]

    def test_same_page_snippets_are_appended(self) -> None:
        engine = SearchEngine()
        sections = [
            Section(content="alpha beta gamma", filename="x.pdf", page=3, book_url="u1"),
            Section(content="delta beta epsilon", filename="x.pdf", page=3, book_url="u2"),
        ]

        results = engine.aggregate(sections, "beta", 1)

        assert results == {
            "x.pdf": {
                3: PageResult(
                    filename="x.pdf",
                    page=3,
                    book_url="u1",
                    snippet="alpha beta gamma ... delta beta epsilon",
                )
            }
        }

    def test_non_matching_sections_on_same_page_do_not_append(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        results = engine.aggregate(course_sections, "bubble", 0)

        assert results["slides.pdf"][2].snippet == "Bubble ..."
        assert results["slides.pdf"][2].book_url == "https://moodle.example/book/2b"

    def test_term_absent_returns_empty_mapping(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        assert engine.aggregate(course_sections, "heap", 3) == {}

    def test_blank_term_returns_empty_mapping(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        assert engine.aggregate(course_sections, "  ", 3) == {}
        assert engine.aggregate(course_sections, "", 3) == {}

    def test_no_entry_without_occurrence(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        results = engine.aggregate(course_sections, "sort", 2)

        for result in flatten_results(results):
            page_contents = [
                s.content.lower()
                for s in course_sections
                if s.filename == result.filename and s.page == result.page
            ]
            assert any("sort" in content for content in page_contents)
        assert 1 not in results["slides.pdf"]

    def test_aggregate_is_idempotent(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        first = engine.aggregate(course_sections, "sort", 2)
        second = engine.aggregate(course_sections, "sort", 2)

        assert first == second
        assert list(first) == list(second)
        assert [list(p) for p in first.values()] == [list(p) for p in second.values()]

    def test_negative_context_length_clamped(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        assert engine.aggregate(course_sections, "pivot", -3) == engine.aggregate(
            course_sections, "pivot", 0
        )
        assert engine.aggregate(course_sections, "pivot", -3)["slides.pdf"][3].snippet == (
            "... pivot"
        )

    def test_input_sections_untouched(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        before = list(course_sections)

        engine.aggregate(course_sections, "sort", 1)

        assert course_sections == before

    def test_accepts_generator(self, engine: SearchEngine) -> None:
        sections = (
            Section(content=f"page {n} fox", filename="a.pdf", page=n) for n in range(3)
        )

        results = engine.aggregate(sections, "fox", 0)

        assert list(results["a.pdf"]) == [0, 1, 2]

    def test_casefold_engine(self) -> None:
        engine = SearchEngine(case_folding=CaseFolding.CASEFOLD)
        sections = [Section(content="Die Straße ist lang", filename="de.pdf", page=1)]

        results = engine.aggregate(sections, "STRASSE", 0)

        assert results["de.pdf"][1].snippet == "... Straße ..."

    def test_match_independent_of_other_characters_in_section(
        self, engine: SearchEngine
    ) -> None:
        sections = [
            Section(content="ΟΔΟΣ", filename="a.pdf", page=1),
            Section(content="ΟΔΟΣ İ", filename="a.pdf", page=2),
        ]

        results = engine.aggregate(sections, "ΟΔΟΣ", 0)

        assert results["a.pdf"][1].snippet == "ΟΔΟΣ"
        assert results["a.pdf"][2].snippet == "ΟΔΟΣ ..."


# =============================================================================
# Flattening
# =============================================================================


class TestFlattenResults:
    """Tests for flatten_results()."""

    def test_flatten_keeps_grouped_order(
        self, engine: SearchEngine, course_sections: list[Section]
    ) -> None:
        flat = flatten_results(engine.aggregate(course_sections, "sort", 0))

        assert [(r.filename, r.page) for r in flat] == [
            ("slides.pdf", 2),
            ("slides.pdf", 3),
            ("exercises.pdf", 4),
        ]

    def test_flatten_empty(self) -> None:
        assert flatten_results({}) == []
