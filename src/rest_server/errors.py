"""Typed exception hierarchy for REST server errors.

This module defines all custom exceptions raised while configuring or
starting the API server. All exceptions inherit from ServerError.
"""

from typing import Optional

from src.wiki_client.errors import WikiRestError


class ServerError(WikiRestError):
    """Base exception for all REST server errors."""
    pass


class ConfigError(ServerError):
    """Raised when server configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
