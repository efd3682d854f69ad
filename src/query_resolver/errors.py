"""Typed exceptions for query resolution errors."""

from typing import Optional

from src.wiki_client.errors import WikiRestError


class QueryError(WikiRestError):
    """Base exception for all query resolution errors."""
    pass


class InvalidQueryError(QueryError):
    """Raised when a query parameter is missing or malformed."""

    def __init__(self, parameter: str, message: str, value: Optional[str] = None):
        full_message = f"Invalid query parameter '{parameter}': {message}"
        if value is not None:
            full_message += f" (got {value!r})"
        super().__init__(full_message)
        self.parameter = parameter
        self.value = value
        self.original_message = message
