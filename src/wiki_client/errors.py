"""Typed exception hierarchy for wiki REST errors.

This module defines the application base exception and all exceptions raised
by the REST client library. All client exceptions inherit from ClientError
and include descriptive messages with context to help with debugging.
"""

from typing import Optional


class WikiRestError(Exception):
    """Base exception for all wiki-rest errors.

    Use this to catch any application-level error from the client, the
    server or the content store.
    """
    pass


class ClientError(WikiRestError):
    """Base exception for all REST client errors."""
    pass


class InvalidCredentialsError(ClientError):
    """Raised when credentials are missing or the server rejects them."""

    def __init__(self, user: str, endpoint: str):
        super().__init__(
            f"Credentials are invalid (user: {user}, endpoint: {endpoint})"
        )
        self.user = user
        self.endpoint = endpoint


class NotFoundError(ClientError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    def __init__(self, url: str):
        super().__init__(f"Resource {url} not found")
        self.url = url


class BadRequestError(ClientError):
    """Raised when the server rejects request parameters (HTTP 400)."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"Bad request for {url}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.url = url
        self.reason = reason


class APIUnreachableError(ClientError):
    """Raised when the wiki REST API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(ClientError):
    """Raised when API access fails after retries or with a server error."""

    def __init__(self, message: str = "Wiki API failure (after 3 retries)"):
        super().__init__(message)


class UnmarshalError(ClientError):
    """Raised when a response body cannot be decoded into a representation."""

    def __init__(self, message: str):
        super().__init__(message)
