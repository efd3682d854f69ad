"""Data models for the wiki content store.

This module defines the records the store keeps in memory. They mirror the
seed content file one-to-one and are never mutated after loading.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import List

HOME_PAGE_NAME = "WebHome"


@dataclass
class RevisionRecord:
    """A past or current version of a document.

    Attributes:
        version: Version label (e.g. "1.1", "2.1")
        modified: ISO 8601 timestamp of the revision
        author: Reference of the user who saved the revision
    """
    version: str
    modified: str
    author: str


@dataclass
class AttachmentRecord:
    """A file attached to a document.

    Attributes:
        name: File name (e.g. "XWikiLogo.png")
        mime_type: Content type
        content: Raw file content
        author: Reference of the user who uploaded the file
        version: Attachment version label
        date: ISO 8601 timestamp of the upload
    """
    name: str
    mime_type: str
    content: bytes = b""
    author: str = ""
    version: str = "1.1"
    date: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class DocumentRecord:
    """A wiki page.

    Attributes:
        space: Space the page lives in
        name: Page name within the space
        title: Raw title, possibly containing script such as $msg.get(...)
        content: Page source in the page syntax
        parent: Full name of the parent page ("" for top-level pages)
        author: Reference of the last author
        version: Current version label
        created: ISO 8601 creation timestamp
        modified: ISO 8601 timestamp of the current version
        syntax: Syntax identifier of the content
        translations: Languages the page is translated into
        attachments: Files attached to the page
        revisions: Version history, oldest first, ending with the current one
    """
    space: str
    name: str
    title: str = ""
    content: str = ""
    parent: str = ""
    author: str = ""
    version: str = "1.1"
    created: str = ""
    modified: str = ""
    syntax: str = "xwiki/2.1"
    translations: List[str] = field(default_factory=list)
    attachments: List[AttachmentRecord] = field(default_factory=list)
    revisions: List[RevisionRecord] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.space}.{self.name}"


@dataclass
class SpaceRecord:
    """A named grouping of documents."""
    name: str
    documents: List[DocumentRecord] = field(default_factory=list)

    @property
    def home(self) -> str:
        return f"{self.name}.{HOME_PAGE_NAME}"


@dataclass
class WikiRecord:
    """A wiki and everything it contains.

    Attributes:
        id: Identifier used in URIs
        name: Display name
        description: Free-text description
        owner: Reference of the wiki owner
        classes: Full names of the classes declared in the wiki
        spaces: Spaces of the wiki
    """
    id: str
    name: str
    description: str = ""
    owner: str = ""
    classes: List[str] = field(default_factory=list)
    spaces: List[SpaceRecord] = field(default_factory=list)
