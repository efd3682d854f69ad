"""Construction of representations from store records.

RepresentationFactory is the single place where links are attached, so
every relation a representation advertises points at a resource the server
actually serves.
"""

from typing import Optional

from src.wiki_store.models import (
    AttachmentRecord,
    DocumentRecord,
    RevisionRecord,
    SpaceRecord,
    WikiRecord,
)

from . import relations, uri_templates as uris
from .representations import (
    Attachment,
    ClassSummary,
    HistorySummary,
    Link,
    Page,
    PageSummary,
    SearchResult,
    Space,
    Wiki,
    Xwiki,
)
from .uri_templates import UriBuilder


def page_id(wiki_id: str, full_name: str) -> str:
    return f"{wiki_id}:{full_name}"


class RepresentationFactory:
    """Builds linked representations for one API base URL."""

    def __init__(self, uri_builder: UriBuilder):
        self.uris = uri_builder

    def create_xwiki(self, version: str) -> Xwiki:
        return Xwiki(
            version=version,
            links=[Link(rel=relations.WIKIS, href=self.uris.build(uris.WIKIS))],
        )

    def create_wiki(self, wiki: WikiRecord) -> Wiki:
        """Create a wiki representation with its capability links.

        The spaces, classes, modifications and search relations are always
        present; clients use them to discover the rest of the API.
        """
        return Wiki(
            id=wiki.id,
            name=wiki.name,
            description=wiki.description or None,
            owner=wiki.owner or None,
            links=[
                Link(rel=relations.SPACES, href=self.uris.build(uris.SPACES, wiki=wiki.id)),
                Link(rel=relations.CLASSES, href=self.uris.build(uris.CLASSES, wiki=wiki.id)),
                Link(rel=relations.MODIFICATIONS,
                     href=self.uris.build(uris.MODIFICATIONS, wiki=wiki.id)),
                Link(rel=relations.SEARCH, href=self.uris.build(uris.WIKI_SEARCH, wiki=wiki.id)),
                Link(rel=relations.PAGES, href=self.uris.build(uris.WIKI_PAGES, wiki=wiki.id)),
                Link(rel=relations.ATTACHMENTS,
                     href=self.uris.build(uris.WIKI_ATTACHMENTS, wiki=wiki.id)),
            ],
        )

    def create_space(self, wiki_id: str, space: SpaceRecord) -> Space:
        links = [
            Link(rel=relations.PAGES,
                 href=self.uris.build(uris.PAGES, wiki=wiki_id, space=space.name)),
        ]
        if any(document.full_name == space.home for document in space.documents):
            links.insert(0, Link(
                rel=relations.HOME,
                href=self._page_uri(wiki_id, space.name, space.home.split('.', 1)[1]),
            ))
        return Space(
            id=f"{wiki_id}:{space.name}",
            wiki=wiki_id,
            name=space.name,
            home=space.home,
            links=links,
        )

    def create_page_summary(
        self,
        wiki_id: str,
        document: DocumentRecord,
        language: str = ""
    ) -> PageSummary:
        """Create a page summary; ``language`` selects one of its translations."""
        return PageSummary(
            id=page_id(wiki_id, document.full_name),
            full_name=document.full_name,
            wiki=wiki_id,
            space=document.space,
            name=document.name,
            title=document.title,
            parent_id=page_id(wiki_id, document.parent) if document.parent else "",
            parent=document.parent,
            translations=list(document.translations),
            syntax=document.syntax,
            language=language,
            links=self._page_links(wiki_id, document),
        )

    def create_page(self, wiki_id: str, document: DocumentRecord) -> Page:
        return Page(
            id=page_id(wiki_id, document.full_name),
            full_name=document.full_name,
            wiki=wiki_id,
            space=document.space,
            name=document.name,
            title=document.title,
            parent_id=page_id(wiki_id, document.parent) if document.parent else "",
            parent=document.parent,
            translations=list(document.translations),
            syntax=document.syntax,
            version=document.version,
            author=document.author,
            created=document.created,
            modified=document.modified,
            content=document.content,
            links=self._page_links(wiki_id, document),
        )

    def create_attachment(
        self,
        wiki_id: str,
        document: DocumentRecord,
        attachment: AttachmentRecord
    ) -> Attachment:
        return Attachment(
            id=f"{page_id(wiki_id, document.full_name)}@{attachment.name}",
            name=attachment.name,
            size=attachment.size,
            version=attachment.version,
            page_id=page_id(wiki_id, document.full_name),
            page_version=document.version,
            mime_type=attachment.mime_type,
            author=attachment.author,
            date=attachment.date,
            links=[
                Link(rel=relations.PAGE,
                     href=self._page_uri(wiki_id, document.space, document.name)),
                Link(rel=relations.ATTACHMENT_DATA, href=self.uris.build(
                    uris.ATTACHMENT,
                    wiki=wiki_id,
                    space=document.space,
                    page=document.name,
                    attachment=attachment.name,
                )),
            ],
        )

    def create_page_search_result(
        self,
        wiki_id: str,
        document: DocumentRecord,
        score: float
    ) -> SearchResult:
        return SearchResult(
            type="page",
            id=page_id(wiki_id, document.full_name),
            wiki=wiki_id,
            space=document.space,
            page_full_name=document.full_name,
            title=document.title,
            page_name=document.name,
            modified=document.modified or None,
            author=document.author or None,
            version=document.version,
            score=score,
            links=[
                Link(rel=relations.PAGE,
                     href=self._page_uri(wiki_id, document.space, document.name)),
                Link(rel=relations.SPACE,
                     href=self.uris.build(uris.SPACE, wiki=wiki_id, space=document.space)),
            ],
        )

    def create_space_search_result(
        self,
        wiki_id: str,
        space: SpaceRecord,
        score: float
    ) -> SearchResult:
        return SearchResult(
            type="space",
            id=f"{wiki_id}:{space.name}",
            wiki=wiki_id,
            space=space.name,
            score=score,
            links=[
                Link(rel=relations.SPACE,
                     href=self.uris.build(uris.SPACE, wiki=wiki_id, space=space.name)),
            ],
        )

    def create_history_summary(
        self,
        wiki_id: str,
        document: DocumentRecord,
        revision: RevisionRecord
    ) -> HistorySummary:
        return HistorySummary(
            page_id=page_id(wiki_id, document.full_name),
            wiki=wiki_id,
            space=document.space,
            name=document.name,
            version=revision.version,
            modified=revision.modified,
            modifier=revision.author,
            links=[
                Link(rel=relations.PAGE,
                     href=self._page_uri(wiki_id, document.space, document.name)),
            ],
        )

    def create_class(self, wiki_id: str, class_name: str) -> ClassSummary:
        return ClassSummary(id=f"{wiki_id}:{class_name}", name=class_name)

    def _page_uri(self, wiki_id: str, space: str, page: str) -> str:
        return self.uris.build(uris.PAGE, wiki=wiki_id, space=space, page=page)

    def _page_links(self, wiki_id: str, document: DocumentRecord) -> list:
        values = dict(wiki=wiki_id, space=document.space, page=document.name)
        links = [
            Link(rel=relations.PAGE, href=self.uris.build(uris.PAGE, **values)),
            Link(rel=relations.SPACE,
                 href=self.uris.build(uris.SPACE, wiki=wiki_id, space=document.space)),
        ]
        parent = _parent_location(document.parent)
        if parent is not None:
            links.append(Link(rel=relations.PARENT, href=self._page_uri(wiki_id, *parent)))
        links.extend([
            Link(rel=relations.HISTORY, href=self.uris.build(uris.PAGE_HISTORY, **values)),
            Link(rel=relations.CHILDREN, href=self.uris.build(uris.PAGE_CHILDREN, **values)),
            Link(rel=relations.ATTACHMENTS,
                 href=self.uris.build(uris.PAGE_ATTACHMENTS, **values)),
        ])
        return links


def _parent_location(parent: str) -> Optional[tuple]:
    if not parent or '.' not in parent:
        return None
    space, page = parent.split('.', 1)
    return space, page
