"""In-memory, read-only wiki content store.

The store indexes the records produced by the content loader and answers
lookups by wiki, space, page and attachment name. It is never mutated after
construction, so it can be shared by concurrent requests without locking.
"""

import logging
from typing import Dict, List, Tuple

from .errors import (
    AttachmentNotFoundError,
    PageNotFoundError,
    SpaceNotFoundError,
    WikiNotFoundError,
)
from .models import AttachmentRecord, DocumentRecord, SpaceRecord, WikiRecord

logger = logging.getLogger(__name__)


class WikiStore:
    """Read-only access to wikis, spaces, documents and attachments.

    Listings are returned in a stable order: spaces by name, documents by
    full name and attachments by owning document then file name.

    Example:
        >>> store = ContentLoader.load_default()
        >>> home = store.get_document("xwiki", "Main", "WebHome")
        >>> home.full_name
        'Main.WebHome'
    """

    def __init__(self, wikis: List[WikiRecord]):
        self._wikis: Dict[str, WikiRecord] = {wiki.id: wiki for wiki in wikis}

    def wikis(self) -> List[WikiRecord]:
        return list(self._wikis.values())

    def get_wiki(self, wiki_id: str) -> WikiRecord:
        """Return the wiki with the given id.

        Raises:
            WikiNotFoundError: If no such wiki exists
        """
        wiki = self._wikis.get(wiki_id)
        if wiki is None:
            raise WikiNotFoundError(wiki_id)
        return wiki

    def spaces(self, wiki_id: str) -> List[SpaceRecord]:
        return sorted(self.get_wiki(wiki_id).spaces, key=lambda space: space.name)

    def get_space(self, wiki_id: str, space_name: str) -> SpaceRecord:
        for space in self.get_wiki(wiki_id).spaces:
            if space.name == space_name:
                return space
        raise SpaceNotFoundError(wiki_id, space_name)

    def documents(self, wiki_id: str) -> List[DocumentRecord]:
        documents = [
            document
            for space in self.get_wiki(wiki_id).spaces
            for document in space.documents
        ]
        return sorted(documents, key=lambda document: document.full_name)

    def get_document(self, wiki_id: str, space_name: str, page_name: str) -> DocumentRecord:
        """Return a document by space and page name.

        Raises:
            WikiNotFoundError: If the wiki does not exist
            SpaceNotFoundError: If the space does not exist
            PageNotFoundError: If the space has no such page
        """
        space = self.get_space(wiki_id, space_name)
        for document in space.documents:
            if document.name == page_name:
                return document
        raise PageNotFoundError(wiki_id, f"{space_name}.{page_name}")

    def find_document(self, wiki_id: str, full_name: str) -> DocumentRecord:
        space_name, _, page_name = full_name.partition('.')
        try:
            return self.get_document(wiki_id, space_name, page_name)
        except SpaceNotFoundError:
            raise PageNotFoundError(wiki_id, full_name)

    def children(self, wiki_id: str, full_name: str) -> List[DocumentRecord]:
        return [
            document
            for document in self.documents(wiki_id)
            if document.parent == full_name
        ]

    def attachments(self, wiki_id: str) -> List[Tuple[DocumentRecord, AttachmentRecord]]:
        return [
            (document, attachment)
            for document in self.documents(wiki_id)
            for attachment in sorted(document.attachments, key=lambda a: a.name)
        ]

    def get_attachment(
        self,
        wiki_id: str,
        space_name: str,
        page_name: str,
        attachment_name: str
    ) -> AttachmentRecord:
        document = self.get_document(wiki_id, space_name, page_name)
        for attachment in document.attachments:
            if attachment.name == attachment_name:
                return attachment
        raise AttachmentNotFoundError(wiki_id, document.full_name, attachment_name)
