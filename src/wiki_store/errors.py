"""Typed exception hierarchy for wiki content store errors.

This module defines all custom exceptions used by the content store.
All exceptions inherit from WikiStoreError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.wiki_client.errors import WikiRestError


class WikiStoreError(WikiRestError):
    """Base exception for all content store errors."""
    pass


class ResourceNotFoundError(WikiStoreError):
    """Base exception for lookups of resources that do not exist."""
    pass


class WikiNotFoundError(ResourceNotFoundError):
    """Raised when a wiki id is unknown."""

    def __init__(self, wiki_id: str):
        super().__init__(f"Wiki '{wiki_id}' not found")
        self.wiki_id = wiki_id


class SpaceNotFoundError(ResourceNotFoundError):
    """Raised when a space does not exist in a wiki."""

    def __init__(self, wiki_id: str, space: str):
        super().__init__(f"Space '{space}' not found in wiki '{wiki_id}'")
        self.wiki_id = wiki_id
        self.space = space


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page does not exist in a wiki."""

    def __init__(self, wiki_id: str, full_name: str):
        super().__init__(f"Page '{full_name}' not found in wiki '{wiki_id}'")
        self.wiki_id = wiki_id
        self.full_name = full_name


class AttachmentNotFoundError(ResourceNotFoundError):
    """Raised when a page has no attachment with the requested name."""

    def __init__(self, wiki_id: str, full_name: str, name: str):
        super().__init__(
            f"Attachment '{name}' not found on page '{full_name}' in wiki '{wiki_id}'"
        )
        self.wiki_id = wiki_id
        self.full_name = full_name
        self.name = name


class ContentError(WikiStoreError):
    """Raised when seed content validation fails."""

    def __init__(self, message: str, content_field: Optional[str] = None):
        if content_field:
            full_message = f"Content error in field '{content_field}': {message}"
        else:
            full_message = f"Content error: {message}"
        super().__init__(full_message)
        self.content_field = content_field
        self.original_message = message


class FilesystemError(WikiStoreError):
    """Raised when filesystem operations fail (read, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
