"""Data models for CLI operations.

This module defines the exit codes and the result models used by the CLI
commands. Models are plain dataclasses.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, bad requests, bad payloads)
    - CHECK_FAILED (2): ``check`` found missing relations or broken links
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    - NOT_FOUND (5): The requested wiki or resource does not exist

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CHECK_FAILED = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5


@dataclass
class CliOptions:
    """Global options shared by every subcommand.

    Attributes:
        url: API base URL overriding WIKI_REST_URL (None to use the environment)
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        logdir: Optional directory for log files
        no_color: Disable colored output
    """
    url: Optional[str] = None
    verbosity: int = 0
    logdir: Optional[str] = None
    no_color: bool = False


@dataclass
class CheckReport:
    """Outcome of a ``check`` run against a server.

    Attributes:
        wikis_checked: Number of wikis inspected
        links_checked: Number of links fetched
        missing_relations: (wiki id, relation) pairs absent from wiki representations
        broken_links: (href, status code) pairs that did not answer 200
    """
    wikis_checked: int = 0
    links_checked: int = 0
    missing_relations: List[Tuple[str, str]] = field(default_factory=list)
    broken_links: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.missing_relations and not self.broken_links
