"""Booksearch: context-window search over course slide/book text.

This package finds a search term inside page-structured course material and
returns every occurrence with surrounding words, grouped by file and page:
- Occurrence detection (case-insensitive, overlapping)
- Word-window computation and merging
- Snippet rendering with ellipses
- Grouping by filename and page
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
