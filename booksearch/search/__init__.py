"""
Context-Window Search Module

Finds search term occurrences in content sections, renders word-context
snippets and groups them by filename and page.
"""

from booksearch.search.engine import SearchEngine, flatten_results
from booksearch.search.folding import CaseFolding
from booksearch.search.models import (
    ContextWindow,
    Occurrence,
    PageResult,
    SearchResults,
    Section,
    Token,
)
from booksearch.search.occurrences import find_occurrences
from booksearch.search.snippets import render_snippet
from booksearch.search.tokenizer import iter_tokens, tokenize
from booksearch.search.windows import (
    build_context_windows,
    merge_windows,
    occurrence_windows,
)

__all__ = [
    "CaseFolding",
    "ContextWindow",
    "Occurrence",
    "PageResult",
    "SearchEngine",
    "SearchResults",
    "Section",
    "Token",
    "build_context_windows",
    "find_occurrences",
    "flatten_results",
    "iter_tokens",
    "merge_windows",
    "occurrence_windows",
    "render_snippet",
    "tokenize",
]
