"""
Snippet Renderer

Turns merged context windows into the display string.

Ellipsis convention (conditional): "... " leads only when the first window
does not start at the first word, " ..." trails only when the last window
does not end at the last word. Segments are separated by " ... ".
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from booksearch.search.models import ContextWindow

SEGMENT_SEPARATOR: Final[str] = " ... "
LEADING_ELLIPSIS: Final[str] = "... "
TRAILING_ELLIPSIS: Final[str] = " ..."


def render_segment(words: Sequence[str], window: ContextWindow) -> str:
    """Join the words covered by one window with single spaces."""
    return " ".join(words[window.first : window.last + 1])


def render_snippet(words: Sequence[str], windows: Sequence[ContextWindow]) -> str:
    """Render the snippet for one section.

    Args:
        words: All words of the section in document order
        windows: Merged windows in document order

    Returns:
        Snippet string, or "" when there are no windows
    """
    if not windows or not words:
        return ""

    snippet = SEGMENT_SEPARATOR.join(render_segment(words, window) for window in windows)

    if windows[0].first > 0:
        snippet = LEADING_ELLIPSIS + snippet
    if windows[-1].last < len(words) - 1:
        snippet = snippet + TRAILING_ELLIPSIS

    return snippet
