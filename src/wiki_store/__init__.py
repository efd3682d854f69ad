"""Read-only wiki content store.

This package loads the wiki content served by the REST API from a YAML seed
file and exposes it through the WikiStore lookup interface.
"""

from .content_loader import ContentLoader, DEFAULT_CONTENT_PATH
from .errors import (
    WikiStoreError,
    ResourceNotFoundError,
    WikiNotFoundError,
    SpaceNotFoundError,
    PageNotFoundError,
    AttachmentNotFoundError,
    ContentError,
    FilesystemError,
)
from .models import (
    AttachmentRecord,
    DocumentRecord,
    RevisionRecord,
    SpaceRecord,
    WikiRecord,
)
from .store import WikiStore

__all__ = [
    'ContentLoader',
    'DEFAULT_CONTENT_PATH',
    'WikiStore',
    'WikiStoreError',
    'ResourceNotFoundError',
    'WikiNotFoundError',
    'SpaceNotFoundError',
    'PageNotFoundError',
    'AttachmentNotFoundError',
    'ContentError',
    'FilesystemError',
    'AttachmentRecord',
    'DocumentRecord',
    'RevisionRecord',
    'SpaceRecord',
    'WikiRecord',
]
