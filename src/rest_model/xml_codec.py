"""XML marshalling of REST representations.

Representations are serialized with lxml into the ``http://www.xwiki.org``
namespace: link elements come first, followed by one child element per
populated field. Decoding goes through BeautifulSoup's XML parser, which
strips the namespace so element lookups use local names only.
"""

import logging
from typing import Any, Dict, List, Tuple, Type, Union

from bs4 import BeautifulSoup, Tag
from lxml import etree

from .errors import XmlCodecError
from .representations import (
    Attachment,
    Attachments,
    Classes,
    ClassSummary,
    History,
    HistorySummary,
    Link,
    LinkCollection,
    Page,
    Pages,
    PageSummary,
    SearchResult,
    SearchResults,
    Space,
    Spaces,
    Wiki,
    Wikis,
    Xwiki,
)

logger = logging.getLogger(__name__)

NAMESPACE = "http://www.xwiki.org"
MEDIA_TYPE = "application/xml"

STR = "str"
INT = "int"
FLOAT = "float"
LANGUAGES = "languages"

# (attribute name, element name, value kind)
FieldSpec = Tuple[str, str, str]

_PAGE_SUMMARY_FIELDS: List[FieldSpec] = [
    ("id", "id", STR),
    ("full_name", "fullName", STR),
    ("wiki", "wiki", STR),
    ("space", "space", STR),
    ("name", "name", STR),
    ("title", "title", STR),
    ("parent_id", "parentId", STR),
    ("parent", "parent", STR),
    ("translations", "translations", LANGUAGES),
    ("syntax", "syntax", STR),
]

_SCHEMAS: Dict[type, Tuple[str, List[FieldSpec]]] = {
    Xwiki: ("xwiki", [("version", "version", STR)]),
    Wiki: ("wiki", [
        ("id", "id", STR),
        ("name", "name", STR),
        ("description", "description", STR),
        ("owner", "owner", STR),
    ]),
    Space: ("space", [
        ("id", "id", STR),
        ("wiki", "wiki", STR),
        ("name", "name", STR),
        ("home", "home", STR),
    ]),
    PageSummary: ("pageSummary", _PAGE_SUMMARY_FIELDS + [("language", "language", STR)]),
    Page: ("page", _PAGE_SUMMARY_FIELDS + [
        ("version", "version", STR),
        ("author", "author", STR),
        ("created", "created", STR),
        ("modified", "modified", STR),
        ("content", "content", STR),
    ]),
    Attachment: ("attachment", [
        ("id", "id", STR),
        ("name", "name", STR),
        ("size", "size", INT),
        ("version", "version", STR),
        ("page_id", "pageId", STR),
        ("page_version", "pageVersion", STR),
        ("mime_type", "mimeType", STR),
        ("author", "author", STR),
        ("date", "date", STR),
    ]),
    SearchResult: ("searchResult", [
        ("type", "type", STR),
        ("id", "id", STR),
        ("page_full_name", "pageFullName", STR),
        ("title", "title", STR),
        ("wiki", "wiki", STR),
        ("space", "space", STR),
        ("page_name", "pageName", STR),
        ("modified", "modified", STR),
        ("author", "author", STR),
        ("version", "version", STR),
        ("score", "score", FLOAT),
    ]),
    HistorySummary: ("historySummary", [
        ("page_id", "pageId", STR),
        ("wiki", "wiki", STR),
        ("space", "space", STR),
        ("name", "name", STR),
        ("version", "version", STR),
        ("modified", "modified", STR),
        ("modifier", "modifier", STR),
    ]),
    ClassSummary: ("class", [
        ("id", "id", STR),
        ("name", "name", STR),
    ]),
}

# collection type -> (element name, attribute holding the items, item type)
_COLLECTIONS: Dict[type, Tuple[str, str, type]] = {
    Wikis: ("wikis", "wikis", Wiki),
    Spaces: ("spaces", "spaces", Space),
    Pages: ("pages", "page_summaries", PageSummary),
    Attachments: ("attachments", "attachments", Attachment),
    SearchResults: ("searchResults", "search_results", SearchResult),
    History: ("history", "history_summaries", HistorySummary),
    Classes: ("classes", "classes", ClassSummary),
}

_ROOT_TAGS: Dict[str, type] = {}
for _cls, (_tag, _fields) in _SCHEMAS.items():
    _ROOT_TAGS[_tag] = _cls
for _cls, (_tag, _attr, _item) in _COLLECTIONS.items():
    _ROOT_TAGS[_tag] = _cls


def _qname(tag: str) -> str:
    return f"{{{NAMESPACE}}}{tag}"


def marshal(representation: Any) -> bytes:
    """Serialize a representation or collection to UTF-8 encoded XML.

    Args:
        representation: Any dataclass from src.rest_model.representations

    Returns:
        XML document as bytes, with an XML declaration

    Raises:
        XmlCodecError: If the object is not a known representation
    """
    cls = type(representation)
    if cls in _COLLECTIONS:
        tag, attr, _ = _COLLECTIONS[cls]
        root = etree.Element(_qname(tag), nsmap={None: NAMESPACE})
        for item in getattr(representation, attr):
            _build_item(item, root)
    elif cls in _SCHEMAS:
        root = _build_item(representation, None)
    else:
        raise XmlCodecError(f"Cannot marshal object of type {cls.__name__}")

    return etree.tostring(
        root,
        xml_declaration=True,
        encoding="UTF-8",
        standalone=True,
    )


def _build_item(item: Any, parent: Any) -> Any:
    """Build the element for a single representation.

    Items are created as sub-elements of their collection so that they share
    its default namespace declaration.
    """
    tag, fields = _SCHEMAS[type(item)]
    if parent is None:
        element = etree.Element(_qname(tag), nsmap={None: NAMESPACE})
    else:
        element = etree.SubElement(parent, _qname(tag))

    if isinstance(item, LinkCollection):
        for link in item.links:
            etree.SubElement(element, _qname("link"), href=link.href, rel=link.rel)

    for attr, xml_name, kind in fields:
        value = getattr(item, attr)
        if value is None:
            continue
        if kind == LANGUAGES:
            container = etree.SubElement(element, _qname(xml_name))
            for language in value:
                etree.SubElement(container, _qname("translation"), language=language)
        else:
            etree.SubElement(element, _qname(xml_name)).text = str(value)

    return element


def unmarshal(data: Union[bytes, str], expected: Type = None) -> Any:
    """Decode an XML document into its typed representation.

    Args:
        data: XML document
        expected: Optional representation type the document must decode to

    Returns:
        The decoded representation or collection

    Raises:
        XmlCodecError: If the document is empty, has an unknown root element,
            is missing required elements or does not match ``expected``
    """
    soup = BeautifulSoup(data, "xml")
    root = soup.find(True)
    if root is None:
        raise XmlCodecError("Document has no root element")

    cls = _ROOT_TAGS.get(root.name)
    if cls is None:
        raise XmlCodecError(f"Unknown root element <{root.name}>")
    if expected is not None and cls is not expected:
        raise XmlCodecError(
            f"Expected <{_element_name(expected)}> but got <{root.name}>"
        )

    if cls in _COLLECTIONS:
        _, attr, item_cls = _COLLECTIONS[cls]
        item_tag = _SCHEMAS[item_cls][0]
        items = [
            _parse_item(item_cls, child)
            for child in root.find_all(item_tag, recursive=False)
        ]
        return cls(**{attr: items})

    return _parse_item(cls, root)


def _element_name(cls: type) -> str:
    if cls in _COLLECTIONS:
        return _COLLECTIONS[cls][0]
    if cls in _SCHEMAS:
        return _SCHEMAS[cls][0]
    return cls.__name__


def _parse_item(cls: type, element: Tag) -> Any:
    _, fields = _SCHEMAS[cls]
    kwargs: Dict[str, Any] = {}

    for attr, xml_name, kind in fields:
        child = element.find(xml_name, recursive=False)
        if child is None:
            continue
        if kind == LANGUAGES:
            kwargs[attr] = [
                translation.get("language", "")
                for translation in child.find_all("translation", recursive=False)
            ]
        else:
            kwargs[attr] = _convert(child.get_text(), kind, xml_name)

    if issubclass(cls, LinkCollection):
        kwargs["links"] = [
            Link(rel=link.get("rel", ""), href=link.get("href", ""))
            for link in element.find_all("link", recursive=False)
        ]

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise XmlCodecError(f"Missing required elements in <{element.name}>: {e}")


def _convert(text: str, kind: str, xml_name: str) -> Any:
    try:
        if kind == INT:
            return int(text)
        if kind == FLOAT:
            return float(text)
    except ValueError:
        raise XmlCodecError(f"Invalid {kind} value in <{xml_name}>: {text!r}")
    return text
