"""Case folding for case-insensitive matching.

Simple lowercasing is the default. It is not a full caseless comparison for
every script: "Straße" does not match "STRASSE" with LOWER, but does with
CASEFOLD.

Folding is applied one character at a time, to content and term alike.
Whole-string folding is context sensitive (a capital sigma lowers to the
final form at the end of a word), so a term folded on its own could differ
from the same text folded inside a longer content. Per-character folding
makes a match depend only on the matched characters. It may still change
length ("İ".lower() is two code points), so fold_with_offsets() keeps a map
back to the original offsets.
"""

from __future__ import annotations

from enum import Enum


class CaseFolding(str, Enum):
    """Case folding strategy applied to content and term before matching."""

    LOWER = "lower"
    CASEFOLD = "casefold"

    def fold_char(self, char: str) -> str:
        """Fold a single character according to this strategy."""
        if self is CaseFolding.CASEFOLD:
            return char.casefold()
        return char.lower()

    def fold(self, text: str) -> str:
        """Fold a string character by character."""
        return "".join(self.fold_char(char) for char in text)


def fold_with_offsets(text: str, folding: CaseFolding) -> tuple[str, list[int]]:
    """Fold text and map every folded character back to its source index.

    Args:
        text: Original text.
        folding: Folding strategy.

    Returns:
        Tuple of (folded text, offsets). offsets[j] is the index in ``text``
        of the character that produced folded character j. The folded text
        equals ``folding.fold(text)``.
    """
    pieces: list[str] = []
    offsets: list[int] = []
    for index, char in enumerate(text):
        piece = folding.fold_char(char)
        pieces.append(piece)
        offsets.extend([index] * len(piece))

    return "".join(pieces), offsets
