"""Word tokenizer: splits content on runs of whitespace."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

from booksearch.search.models import Token

WORD_PATTERN: Final[re.Pattern[str]] = re.compile(r"\S+")


def iter_tokens(content: str) -> Iterator[Token]:
    """Yield words of content left to right with their start offsets."""
    for match in WORD_PATTERN.finditer(content):
        yield Token(start=match.start(), word=match.group())


def tokenize(content: str) -> list[Token]:
    """Split content into words with their start offsets.

    Args:
        content: Original (not case-folded) text

    Returns:
        Tokens in document order
    """
    return list(iter_tokens(content))
