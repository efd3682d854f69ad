"""Client library for the wiki REST API.

This package provides Python abstractions over the wiki REST API, returning
typed representations and raising typed errors.
"""

from .errors import (
    WikiRestError,
    ClientError,
    InvalidCredentialsError,
    NotFoundError,
    BadRequestError,
    APIUnreachableError,
    APIAccessError,
    UnmarshalError,
)

__all__ = [
    "WikiRestError",
    "ClientError",
    "InvalidCredentialsError",
    "NotFoundError",
    "BadRequestError",
    "APIUnreachableError",
    "APIAccessError",
    "UnmarshalError",
]
