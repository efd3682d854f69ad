"""Query resolution for the wiki REST API.

This package turns a resource path plus optional filter parameters into
filtered, ordered and linked representation collections.
"""

from .errors import QueryError, InvalidQueryError
from .filters import SearchScope, contains, paginate, parse_scopes, UNLIMITED
from .resolver import QueryResolver

__all__ = [
    'QueryError',
    'InvalidQueryError',
    'SearchScope',
    'contains',
    'paginate',
    'parse_scopes',
    'UNLIMITED',
    'QueryResolver',
]
