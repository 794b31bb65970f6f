"""Core module for configuration, logging, tracing and exceptions.

Patterns applied:
- Pydantic Settings with SettingsConfigDict
- Custom namespaced exceptions rooted at BooksearchError
"""
