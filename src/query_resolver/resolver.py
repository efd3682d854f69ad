"""Translation of resource paths and filters into representation collections.

QueryResolver is the read side of the API: every GET endpoint maps to one
method here. Methods look records up in the WikiStore, apply the requested
filters and paging, and hand the surviving records to the
RepresentationFactory so that results carry their links.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from src.rest_model.factory import RepresentationFactory
from src.rest_model.representations import (
    Attachments,
    Classes,
    History,
    Page,
    Pages,
    SearchResult,
    SearchResults,
    Space,
    Spaces,
    Wikis,
    Xwiki,
)
from src.wiki_store.models import AttachmentRecord, DocumentRecord
from src.wiki_store.store import WikiStore

from .filters import (
    EXACT_NAME_SCORE,
    SCOPE_SCORES,
    UNLIMITED,
    SearchScope,
    contains,
    contains_any,
    paginate,
    parse_scopes,
    split_list,
    validate_paging,
)

logger = logging.getLogger(__name__)


class QueryResolver:
    """Resolves GET requests against a wiki store.

    Args:
        store: Content to query
        factory: Factory used to build linked representations

    Example:
        >>> resolver = QueryResolver(store, RepresentationFactory(UriBuilder(base)))
        >>> pages = resolver.list_pages("xwiki", name="WebHome", space="s")
        >>> [p.full_name for p in pages.page_summaries]
        ['ColorThemes.WebHome', 'Panels.WebHome', ...]
    """

    def __init__(self, store: WikiStore, factory: RepresentationFactory, version: str = "1.0"):
        self.store = store
        self.factory = factory
        self.version = version

    def get_root(self) -> Xwiki:
        return self.factory.create_xwiki(self.version)

    def list_wikis(self) -> Wikis:
        """Return every wiki with its capability links."""
        return Wikis(wikis=[self.factory.create_wiki(wiki) for wiki in self.store.wikis()])

    def search(
        self,
        wiki_id: str,
        q: Optional[str],
        scopes: Optional[Iterable[str]] = None,
        start: int = 0,
        number: int = UNLIMITED
    ) -> SearchResults:
        """Search a wiki for ``q``.

        Args:
            wiki_id: Wiki to search
            q: Search term, matched as a case-insensitive substring
            scopes: Requested scopes ("content", "name", "title", "spaces");
                unknown values are ignored, none means "content"
            start: Number of results to skip
            number: Maximum number of results, -1 for all

        Returns:
            SearchResults ordered by descending score, then page full name;
            empty when q is missing or blank

        Raises:
            WikiNotFoundError: If the wiki does not exist
            InvalidQueryError: If paging is malformed
        """
        validate_paging(start, number)
        wiki = self.store.get_wiki(wiki_id)
        if q is None or not q.strip():
            logger.debug(f"Search in {wiki.id} without a term")
            return SearchResults()
        term = q.strip()
        requested = parse_scopes(scopes)

        hits: List[Tuple[float, str, SearchResult]] = []

        if SearchScope.SPACES in requested:
            for space in self.store.spaces(wiki.id):
                if contains(space.name, term):
                    result = self.factory.create_space_search_result(
                        wiki.id, space, SCOPE_SCORES[SearchScope.SPACES]
                    )
                    hits.append((result.score, space.name, result))

        page_scopes = [scope for scope in requested if scope is not SearchScope.SPACES]
        if page_scopes:
            for document in self.store.documents(wiki.id):
                score = self._score(document, term, page_scopes)
                if score > 0:
                    result = self.factory.create_page_search_result(wiki.id, document, score)
                    hits.append((score, document.full_name, result))

        hits.sort(key=lambda hit: (-hit[0], hit[1]))
        logger.debug(
            f"Search '{term}' in {wiki.id} "
            f"[{', '.join(scope.value for scope in requested)}]: {len(hits)} hit(s)"
        )
        return SearchResults(search_results=paginate([hit[2] for hit in hits], start, number))

    def list_pages(
        self,
        wiki_id: str,
        name: Optional[str] = None,
        space: Optional[str] = None,
        author: Optional[str] = None,
        start: int = 0,
        number: int = UNLIMITED
    ) -> Pages:
        """List the pages of a wiki, filtered by page name, space and author.

        Filters are case-insensitive substring matches and are combined with
        AND semantics; an absent filter does not restrict the result. Each
        translation of a page is listed as its own entry, right after the
        default version.

        Raises:
            WikiNotFoundError: If the wiki does not exist
            InvalidQueryError: If paging is malformed
        """
        validate_paging(start, number)
        documents = [
            document
            for document in self.store.documents(wiki_id)
            if contains(document.name, name)
            and contains(document.space, space)
            and contains(document.author, author)
        ]
        entries = [
            (document, language)
            for document in documents
            for language in [""] + document.translations
        ]
        return Pages(page_summaries=[
            self.factory.create_page_summary(wiki_id, document, language)
            for document, language in paginate(entries, start, number)
        ])

    def list_attachments(
        self,
        wiki_id: str,
        name: Optional[str] = None,
        space: Optional[str] = None,
        page: Optional[str] = None,
        author: Optional[str] = None,
        types: Optional[str] = None,
        start: int = 0,
        number: int = UNLIMITED
    ) -> Attachments:
        """List the attachments of a wiki.

        Args:
            wiki_id: Wiki to list
            name: Substring of the file name
            space: Substring of the owning page's space
            page: Substring of the owning page's name
            author: Substring of the attachment author
            types: Comma-separated substrings of the mime type, any may match
            start: Number of attachments to skip
            number: Maximum number of attachments, -1 for all

        Raises:
            WikiNotFoundError: If the wiki does not exist
            InvalidQueryError: If paging is malformed
        """
        validate_paging(start, number)
        mime_types = split_list(types)
        matches = [
            (document, attachment)
            for document, attachment in self.store.attachments(wiki_id)
            if contains(attachment.name, name)
            and contains(document.space, space)
            and contains(document.name, page)
            and contains(attachment.author, author)
            and contains_any(attachment.mime_type, mime_types)
        ]
        return self._attachments(wiki_id, paginate(matches, start, number))

    def list_spaces(self, wiki_id: str, start: int = 0, number: int = UNLIMITED) -> Spaces:
        spaces = [
            self.factory.create_space(wiki_id, space)
            for space in self.store.spaces(wiki_id)
        ]
        return Spaces(spaces=paginate(spaces, start, number))

    def get_space(self, wiki_id: str, space_name: str) -> Space:
        return self.factory.create_space(wiki_id, self.store.get_space(wiki_id, space_name))

    def list_space_pages(
        self,
        wiki_id: str,
        space_name: str,
        start: int = 0,
        number: int = UNLIMITED
    ) -> Pages:
        space = self.store.get_space(wiki_id, space_name)
        documents = sorted(space.documents, key=lambda document: document.name)
        return self._pages(wiki_id, paginate(documents, start, number))

    def get_page(self, wiki_id: str, space_name: str, page_name: str) -> Page:
        document = self.store.get_document(wiki_id, space_name, page_name)
        return self.factory.create_page(wiki_id, document)

    def list_children(
        self,
        wiki_id: str,
        space_name: str,
        page_name: str,
        start: int = 0,
        number: int = UNLIMITED
    ) -> Pages:
        document = self.store.get_document(wiki_id, space_name, page_name)
        children = self.store.children(wiki_id, document.full_name)
        return self._pages(wiki_id, paginate(children, start, number))

    def list_history(
        self,
        wiki_id: str,
        space_name: str,
        page_name: str,
        start: int = 0,
        number: int = UNLIMITED
    ) -> History:
        """Return the versions of a page, newest first."""
        document = self.store.get_document(wiki_id, space_name, page_name)
        summaries = [
            self.factory.create_history_summary(wiki_id, document, revision)
            for revision in reversed(document.revisions)
        ]
        return History(history_summaries=paginate(summaries, start, number))

    def list_page_attachments(
        self,
        wiki_id: str,
        space_name: str,
        page_name: str,
        start: int = 0,
        number: int = UNLIMITED
    ) -> Attachments:
        document = self.store.get_document(wiki_id, space_name, page_name)
        matches = [
            (document, attachment)
            for attachment in sorted(document.attachments, key=lambda a: a.name)
        ]
        return self._attachments(wiki_id, paginate(matches, start, number))

    def get_attachment_content(
        self,
        wiki_id: str,
        space_name: str,
        page_name: str,
        attachment_name: str
    ) -> AttachmentRecord:
        return self.store.get_attachment(wiki_id, space_name, page_name, attachment_name)

    def list_classes(self, wiki_id: str, start: int = 0, number: int = UNLIMITED) -> Classes:
        wiki = self.store.get_wiki(wiki_id)
        classes = [
            self.factory.create_class(wiki.id, class_name)
            for class_name in sorted(wiki.classes)
        ]
        return Classes(classes=paginate(classes, start, number))

    def list_modifications(
        self,
        wiki_id: str,
        start: int = 0,
        number: int = UNLIMITED
    ) -> History:
        """Return every revision of every page of a wiki, most recent first."""
        entries = [
            (revision.modified, document.full_name, revision.version, document, revision)
            for document in self.store.documents(wiki_id)
            for revision in document.revisions
        ]
        entries.sort(key=lambda entry: (entry[0], entry[1], entry[2]), reverse=True)
        summaries = [
            self.factory.create_history_summary(wiki_id, document, revision)
            for _, _, _, document, revision in entries
        ]
        return History(history_summaries=paginate(summaries, start, number))

    def _pages(self, wiki_id: str, documents: List[DocumentRecord]) -> Pages:
        return Pages(page_summaries=[
            self.factory.create_page_summary(wiki_id, document) for document in documents
        ])

    def _attachments(
        self,
        wiki_id: str,
        matches: List[Tuple[DocumentRecord, AttachmentRecord]]
    ) -> Attachments:
        return Attachments(attachments=[
            self.factory.create_attachment(wiki_id, document, attachment)
            for document, attachment in matches
        ])

    @staticmethod
    def _score(document: DocumentRecord, term: str, scopes: List[SearchScope]) -> float:
        score = 0.0
        for scope in scopes:
            if scope is SearchScope.NAME and contains(document.name, term):
                if document.name.casefold() == term.casefold():
                    score = max(score, EXACT_NAME_SCORE)
                else:
                    score = max(score, SCOPE_SCORES[scope])
            elif scope is SearchScope.TITLE and contains(document.title, term):
                score = max(score, SCOPE_SCORES[scope])
            elif scope is SearchScope.CONTENT and contains(document.content, term):
                score = max(score, SCOPE_SCORES[scope])
        return score
