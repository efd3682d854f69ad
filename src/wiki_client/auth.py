"""Authentication module for loading wiki REST API credentials.

This module loads the API location and optional HTTP basic credentials from
environment variables using python-dotenv. It validates that the settings
are consistent and raises appropriate errors if they are not.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Wiki REST API location and optional basic-auth credentials."""
    url: str
    user: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_auth(self) -> bool:
        return bool(self.user and self.password)


class Authenticator:
    """Loads and validates API credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Environment variables:
        WIKI_REST_URL: Base URL of the REST API (e.g., http://localhost:8080)
        WIKI_REST_USER: Optional user name for HTTP basic authentication
        WIKI_REST_PASSWORD: Password for WIKI_REST_USER

    Raises:
        InvalidCredentialsError: If the URL is missing or only one of user
            and password is set

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self, url: Optional[str] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            url: Optional API URL overriding WIKI_REST_URL
        """
        load_dotenv()
        self._url_override = url

    def get_credentials(self) -> Credentials:
        """Get API credentials from the override or environment variables.

        Returns:
            Credentials: A named tuple containing url, user and password

        Raises:
            InvalidCredentialsError: If the settings are missing or inconsistent
        """
        url = self._url_override or os.getenv('WIKI_REST_URL')
        user = os.getenv('WIKI_REST_USER')
        password = os.getenv('WIKI_REST_PASSWORD')

        if not url:
            raise InvalidCredentialsError(
                user=user if user else "anonymous",
                endpoint="unknown"
            )

        # Basic auth needs both halves
        if bool(user) != bool(password):
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url
            )

        return Credentials(url=url.rstrip('/'), user=user or None, password=password or None)
