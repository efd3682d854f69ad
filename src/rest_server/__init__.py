"""HTTP server exposing the wiki REST API.

This package provides the FastAPI application, its configuration and the
GET endpoints that serialize query results as hypermedia-linked XML.
"""

from .app import create_app, API_VERSION
from .config import ServerConfig, ServerConfigLoader
from .errors import ServerError, ConfigError

__all__ = [
    'create_app',
    'API_VERSION',
    'ServerConfig',
    'ServerConfigLoader',
    'ServerError',
    'ConfigError',
]
