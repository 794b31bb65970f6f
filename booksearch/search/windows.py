"""
Context Window Builder

Maps occurrence character offsets onto word indices, widens each occurrence
by the context length and merges windows that overlap or touch.

Anti-Patterns Avoided:
- Pairwise-only merging: a run A touches B touches C collapses into one window
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence

from booksearch.search.models import ContextWindow, Occurrence, Token


def clamp_context_length(context_length: int) -> int:
    """Treat any context length below 1 as 0."""
    return max(0, context_length)


def word_index_at(tokens: Sequence[Token], starts: Sequence[int], offset: int) -> int:
    """Index of the word containing offset, or of the next word after it.

    Args:
        tokens: Tokens in document order (must not be empty)
        starts: Start offsets of tokens, same order
        offset: Character offset into the content

    Returns:
        Word index, clamped to the last word
    """
    index = bisect_right(starts, offset) - 1
    if index < 0:
        return 0
    if offset >= tokens[index].end:
        # Offset falls in whitespace after word `index`
        return min(index + 1, len(tokens) - 1)
    return index


def occurrence_windows(
    occurrences: Sequence[Occurrence],
    tokens: Sequence[Token],
    context_length: int,
) -> list[ContextWindow]:
    """Compute the unmerged context window of every occurrence.

    The window runs from the word containing (or following) the occurrence
    start to the word containing its last character, widened by
    context_length words on each side and clamped to the text.

    Args:
        occurrences: Term occurrences in document order
        tokens: Word tokens of the same content
        context_length: Words of context on each side (negative means 0)

    Returns:
        One window per occurrence, empty if there are no tokens
    """
    if not tokens:
        return []

    length = clamp_context_length(context_length)
    starts = [token.start for token in tokens]
    last_index = len(tokens) - 1
    windows: list[ContextWindow] = []

    for occurrence in occurrences:
        first_word = word_index_at(tokens, starts, occurrence.start)
        last_word = max(first_word, bisect_right(starts, occurrence.end - 1) - 1)
        windows.append(
            ContextWindow(
                first=max(0, first_word - length),
                last=min(last_index, last_word + length),
            )
        )

    return windows


def merge_windows(windows: Sequence[ContextWindow]) -> list[ContextWindow]:
    """Merge windows that overlap or are directly adjacent.

    Window k+1 joins the current run when its first word is at most one
    past the run's last word. Windows must be in document order.

    Args:
        windows: Windows ordered by first word

    Returns:
        Ordered, non-overlapping, non-adjacent windows
    """
    merged: list[ContextWindow] = []

    for window in windows:
        if merged and window.first <= merged[-1].last + 1:
            current = merged[-1]
            merged[-1] = ContextWindow(
                first=current.first,
                last=max(current.last, window.last),
            )
        else:
            merged.append(window)

    return merged


def build_context_windows(
    occurrences: Sequence[Occurrence],
    tokens: Sequence[Token],
    context_length: int,
) -> list[ContextWindow]:
    """Compute and merge the context windows of all occurrences."""
    return merge_windows(occurrence_windows(occurrences, tokens, context_length))
