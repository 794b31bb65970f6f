"""
Section Assembly Module

Turns text lines extracted from PDF pages into searchable sections.
"""

from booksearch.sections.assembler import PageText, SectionAssembler, TextLine

__all__ = [
    "PageText",
    "SectionAssembler",
    "TextLine",
]
