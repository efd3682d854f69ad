"""Typed representations of the wiki REST API and their XML encoding.

This package defines the hypermedia link model, the resource and collection
representations served by the API, and the XML codec shared by the server
and the client.
"""

from . import relations
from .errors import XmlCodecError
from .representations import (
    Link,
    LinkCollection,
    Xwiki,
    Wiki,
    Wikis,
    Space,
    Spaces,
    PageSummary,
    Page,
    Pages,
    Attachment,
    Attachments,
    SearchResult,
    SearchResults,
    HistorySummary,
    History,
    ClassSummary,
    Classes,
)
from .factory import RepresentationFactory
from .uri_templates import UriBuilder
from .xml_codec import marshal, unmarshal, MEDIA_TYPE, NAMESPACE

__all__ = [
    'relations',
    'XmlCodecError',
    'Link',
    'LinkCollection',
    'Xwiki',
    'Wiki',
    'Wikis',
    'Space',
    'Spaces',
    'PageSummary',
    'Page',
    'Pages',
    'Attachment',
    'Attachments',
    'SearchResult',
    'SearchResults',
    'HistorySummary',
    'History',
    'ClassSummary',
    'Classes',
    'RepresentationFactory',
    'UriBuilder',
    'marshal',
    'unmarshal',
    'MEDIA_TYPE',
    'NAMESPACE',
]
