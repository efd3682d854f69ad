"""Command-line interface for the wiki REST API.

This package provides the `wiki-rest` CLI tool that runs the API server and
queries running servers, rendering results as terminal tables.
"""

from .query_command import QueryCommand
from .models import ExitCode, CliOptions, CheckReport

__all__ = [
    'QueryCommand',
    'ExitCode',
    'CliOptions',
    'CheckReport',
]
