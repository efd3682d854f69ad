"""Resource and collection representations returned by the wiki REST API.

All representations are dataclasses built fresh for every request. Each one
carries the hypermedia links that advertise what a client can do next; the
LinkCollection mixin provides lookup by relation.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Link:
    """A typed edge from a representation to a related resource.

    Attributes:
        rel: Relation identifier (see src.rest_model.relations)
        href: Absolute URI of the related resource
    """
    rel: str
    href: str


class LinkCollection:
    """Mixin for representations that embed links."""

    links: List[Link]

    def get_first_link_by_relation(self, rel: str) -> Optional[Link]:
        """Return the first link with the given relation, or None."""
        for link in self.links:
            if link.rel == rel:
                return link
        return None

    def get_links_by_relation(self, rel: str) -> List[Link]:
        return [link for link in self.links if link.rel == rel]


@dataclass
class Xwiki(LinkCollection):
    """Root representation of the API, pointing at the wiki list."""
    version: str
    links: List[Link] = field(default_factory=list)


@dataclass
class Wiki(LinkCollection):
    """A top-level wiki namespace.

    Attributes:
        id: Wiki identifier used in URIs (e.g. "xwiki")
        name: Display name
        description: Optional description
        owner: Optional owner reference
        links: Capability links (spaces, classes, modifications, search, ...)
    """
    id: str
    name: str
    description: Optional[str] = None
    owner: Optional[str] = None
    links: List[Link] = field(default_factory=list)


@dataclass
class Wikis:
    wikis: List[Wiki] = field(default_factory=list)


@dataclass
class Space(LinkCollection):
    """A named grouping of pages within a wiki.

    Attributes:
        id: Space identifier ("<wiki>:<Space>")
        wiki: Owning wiki id
        name: Space name
        home: Full name of the space home page ("<Space>.WebHome")
    """
    id: str
    wiki: str
    name: str
    home: str
    links: List[Link] = field(default_factory=list)


@dataclass
class Spaces:
    spaces: List[Space] = field(default_factory=list)


@dataclass
class PageSummary(LinkCollection):
    """Summary of a wiki page as listed in page collections.

    Attributes:
        id: Page identifier ("<wiki>:<Space>.<Page>")
        full_name: "<Space>.<Page>"
        wiki: Owning wiki id
        space: Space segment of the full name
        name: Page segment of the full name
        title: Raw page title (may contain script such as $msg.get(...))
        parent_id: Identifier of the parent page ("" if none)
        parent: Full name of the parent page ("" if none)
        translations: Languages the page is translated into
        syntax: Syntax identifier of the page content
        language: Language of this entry ("" for the default version)
    """
    id: str
    full_name: str
    wiki: str
    space: str
    name: str
    title: str
    parent_id: str = ""
    parent: str = ""
    translations: List[str] = field(default_factory=list)
    syntax: str = "xwiki/2.1"
    language: str = ""
    links: List[Link] = field(default_factory=list)


@dataclass
class Page(LinkCollection):
    """Full representation of a single page, including its content."""
    id: str
    full_name: str
    wiki: str
    space: str
    name: str
    title: str
    parent_id: str = ""
    parent: str = ""
    translations: List[str] = field(default_factory=list)
    syntax: str = "xwiki/2.1"
    version: str = "1.1"
    author: str = ""
    created: str = ""
    modified: str = ""
    content: str = ""
    links: List[Link] = field(default_factory=list)


@dataclass
class Pages:
    page_summaries: List[PageSummary] = field(default_factory=list)


@dataclass
class Attachment(LinkCollection):
    """An attachment of a wiki page.

    Attributes:
        id: Attachment identifier ("<wiki>:<Space>.<Page>@<name>")
        name: File name
        size: Size of the content in bytes
        version: Attachment version
        page_id: Identifier of the owning page
        page_version: Version of the owning page
        mime_type: Content type of the file
        author: Last author of the attachment
        date: ISO 8601 timestamp of the last upload
    """
    id: str
    name: str
    size: int
    version: str
    page_id: str
    page_version: str
    mime_type: str
    author: str = ""
    date: str = ""
    links: List[Link] = field(default_factory=list)


@dataclass
class Attachments:
    attachments: List[Attachment] = field(default_factory=list)


@dataclass
class SearchResult(LinkCollection):
    """A single search hit, either a page or a space."""
    type: str
    id: str
    wiki: str
    space: str
    page_full_name: Optional[str] = None
    title: Optional[str] = None
    page_name: Optional[str] = None
    modified: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    score: float = 0.0
    links: List[Link] = field(default_factory=list)


@dataclass
class SearchResults:
    search_results: List[SearchResult] = field(default_factory=list)


@dataclass
class HistorySummary(LinkCollection):
    """One entry of a page history or of the wiki modification feed."""
    page_id: str
    wiki: str
    space: str
    name: str
    version: str
    modified: str
    modifier: str
    links: List[Link] = field(default_factory=list)


@dataclass
class History:
    history_summaries: List[HistorySummary] = field(default_factory=list)


@dataclass
class ClassSummary:
    """A class (structured object definition) declared in a wiki."""
    id: str
    name: str


@dataclass
class Classes:
    classes: List[ClassSummary] = field(default_factory=list)
