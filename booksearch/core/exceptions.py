"""
Booksearch - Custom Exceptions

Anti-Patterns Avoided:
- Exception shadowing: namespaced exceptions under BooksearchError instead of
  raising builtins like ValueError for caller contract violations
"""


class BooksearchError(Exception):
    """Base exception for the booksearch package.

    All custom exceptions inherit from this base class.
    """
    pass


class InvalidSectionError(BooksearchError):
    """Raised when a content section violates the caller contract.

    Examples: missing or blank filename, non-integer page number,
    content that is not a string.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(BooksearchError):
    """Raised when configuration is invalid or missing."""
    pass
