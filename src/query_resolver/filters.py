"""Matching, scope and paging helpers shared by the query resolver.

All text filters are case-insensitive substring matches. A filter that is
absent or empty matches everything.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TypeVar

from .errors import InvalidQueryError

logger = logging.getLogger(__name__)

T = TypeVar('T')

UNLIMITED = -1


class SearchScope(Enum):
    """Dimension a search term is matched against."""
    CONTENT = "content"
    NAME = "name"
    TITLE = "title"
    SPACES = "spaces"


# Relevance of a hit per scope; exact page-name hits rank highest.
SCOPE_SCORES = {
    SearchScope.SPACES: 0.9,
    SearchScope.NAME: 0.8,
    SearchScope.TITLE: 0.6,
    SearchScope.CONTENT: 0.4,
}
EXACT_NAME_SCORE = 1.0


def contains(value: Optional[str], term: Optional[str]) -> bool:
    """Return True if ``term`` occurs in ``value``, ignoring case.

    An empty or missing term matches any value.

    Example:
        >>> contains("XWikiLogo.png", "logo")
        True
    """
    if not term:
        return True
    if value is None:
        return False
    return term.casefold() in value.casefold()


def contains_any(value: Optional[str], terms: Sequence[str]) -> bool:
    if not terms:
        return True
    return any(contains(value, term) for term in terms)


def split_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated parameter into its non-empty parts."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(',') if part.strip()]


def parse_scopes(raw_scopes: Optional[Iterable[str]]) -> List[SearchScope]:
    """Parse requested search scopes.

    Unknown scope values are ignored. Without any valid scope the search
    falls back to page content.
    """
    scopes: List[SearchScope] = []
    for raw in raw_scopes or []:
        for value in split_list(raw):
            try:
                scope = SearchScope(value.lower())
            except ValueError:
                logger.debug(f"Ignoring unknown search scope '{value}'")
                continue
            if scope not in scopes:
                scopes.append(scope)
    return scopes or [SearchScope.CONTENT]


def validate_paging(start: int, number: int) -> None:
    """Validate paging parameters.

    Raises:
        InvalidQueryError: If start is negative or number is below -1
    """
    if start < 0:
        raise InvalidQueryError('start', 'must be zero or positive', str(start))
    if number < UNLIMITED:
        raise InvalidQueryError('number', 'must be -1 (unlimited) or positive', str(number))


def paginate(items: Sequence[T], start: int = 0, number: int = UNLIMITED) -> List[T]:
    """Return the requested window of ``items``."""
    validate_paging(start, number)
    if number == UNLIMITED:
        return list(items[start:])
    return list(items[start:start + number])
