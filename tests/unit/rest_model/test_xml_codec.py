"""Unit tests for rest_model.xml_codec module."""

import pytest
from lxml import etree

from src.rest_model import relations
from src.rest_model.errors import XmlCodecError
from src.rest_model.representations import (
    Attachment,
    Attachments,
    Classes,
    ClassSummary,
    Link,
    Page,
    Pages,
    PageSummary,
    SearchResult,
    SearchResults,
    Wiki,
    Wikis,
    Xwiki,
)
from src.rest_model.xml_codec import NAMESPACE, marshal, unmarshal

NS = {"x": NAMESPACE}


def sample_wiki() -> Wiki:
    return Wiki(
        id="xwiki",
        name="XWiki",
        description="Main wiki",
        links=[Link(rel=relations.SPACES, href="http://host/wikis/xwiki/spaces")],
    )


class TestMarshal:
    """Test cases for marshal function."""

    def test_collection_root_uses_namespace(self):
        """Collections are serialized under the xwiki.org default namespace."""
        root = etree.fromstring(marshal(Wikis(wikis=[sample_wiki()])))
        assert root.tag == f"{{{NAMESPACE}}}wikis"
        assert root.nsmap[None] == NAMESPACE

    def test_links_are_serialized_as_attributes(self):
        """Links become <link rel=... href=...> elements."""
        root = etree.fromstring(marshal(sample_wiki()))
        link = root.find("x:link", NS)
        assert link.get("rel") == relations.SPACES
        assert link.get("href") == "http://host/wikis/xwiki/spaces"

    def test_fields_use_camel_case_element_names(self):
        """Multi-word fields are serialized with camelCase element names."""
        summary = PageSummary(
            id="xwiki:Main.WebHome",
            full_name="Main.WebHome",
            wiki="xwiki",
            space="Main",
            name="WebHome",
            title="Home",
            parent_id="xwiki:Main.Parent",
        )
        root = etree.fromstring(marshal(summary))
        assert root.findtext("x:fullName", namespaces=NS) == "Main.WebHome"
        assert root.findtext("x:parentId", namespaces=NS) == "xwiki:Main.Parent"

    def test_none_fields_are_omitted(self):
        """Optional fields set to None produce no element."""
        root = etree.fromstring(marshal(Wiki(id="docs", name="docs")))
        assert root.find("x:description", NS) is None
        assert root.find("x:owner", NS) is None

    def test_translations_are_listed_by_language(self):
        """Translations are serialized as <translation language=.../> entries."""
        summary = PageSummary(
            id="w:A.B", full_name="A.B", wiki="w", space="A", name="B", title="",
            translations=["fr", "de"],
        )
        root = etree.fromstring(marshal(summary))
        languages = [
            element.get("language")
            for element in root.findall("x:translations/x:translation", NS)
        ]
        assert languages == ["fr", "de"]

    def test_page_summary_language(self):
        """Page summaries carry the language of the listed entry."""
        summary = PageSummary(
            id="w:A.B", full_name="A.B", wiki="w", space="A", name="B", title="",
            translations=["fr"], language="fr",
        )
        root = etree.fromstring(marshal(summary))
        assert root.findtext("x:language", namespaces=NS) == "fr"
        assert unmarshal(marshal(summary), PageSummary).language == "fr"

    def test_xml_declaration_is_present(self):
        """Documents start with an XML declaration."""
        assert marshal(Xwiki(version="1.0")).startswith(b"<?xml")

    def test_unknown_type_raises(self):
        """Objects that are not representations cannot be marshalled."""
        with pytest.raises(XmlCodecError):
            marshal({"id": "xwiki"})


class TestUnmarshal:
    """Test cases for unmarshal function."""

    def test_decodes_collection(self):
        """A <wikis> document decodes to Wikis with linked Wiki items."""
        wikis = unmarshal(marshal(Wikis(wikis=[sample_wiki()])))
        assert isinstance(wikis, Wikis)
        assert wikis.wikis[0].id == "xwiki"
        assert wikis.wikis[0].description == "Main wiki"
        assert wikis.wikis[0].get_first_link_by_relation(relations.SPACES) is not None

    def test_decodes_page_with_content(self):
        """A page keeps its content, translations and links."""
        page = Page(
            id="xwiki:Main.WebHome",
            full_name="Main.WebHome",
            wiki="xwiki",
            space="Main",
            name="WebHome",
            title="$msg.get('home')",
            translations=["fr"],
            version="3.1",
            content="= Title =\n\n<b>escaped</b> & more",
            links=[Link(rel=relations.PAGE, href="http://host/page")],
        )
        assert unmarshal(marshal(page)) == page

    def test_decodes_typed_numbers(self):
        """Attachment sizes are ints and search scores are floats."""
        attachments = unmarshal(marshal(Attachments(attachments=[Attachment(
            id="w:A.B@f.txt", name="f.txt", size=12, version="1.1",
            page_id="w:A.B", page_version="1.1", mime_type="text/plain",
        )])))
        results = unmarshal(marshal(SearchResults(search_results=[SearchResult(
            type="page", id="w:A.B", wiki="w", space="A", score=0.8,
        )])))
        assert attachments.attachments[0].size == 12
        assert results.search_results[0].score == pytest.approx(0.8)

    def test_decodes_classes_without_links(self):
        """Class summaries carry no links."""
        classes = unmarshal(marshal(Classes(classes=[ClassSummary(id="w:X.Y", name="X.Y")])))
        assert classes.classes == [ClassSummary(id="w:X.Y", name="X.Y")]

    def test_decodes_empty_collection(self):
        """An empty collection decodes to an empty list."""
        assert unmarshal(marshal(Pages())) == Pages()

    def test_expected_type_mismatch_raises(self):
        """Decoding fails when the root is not the expected representation."""
        with pytest.raises(XmlCodecError, match="Expected <pages>"):
            unmarshal(marshal(Wikis()), expected=Pages)

    def test_unknown_root_raises(self):
        """Unknown root elements are rejected."""
        with pytest.raises(XmlCodecError, match="Unknown root element"):
            unmarshal(b'<?xml version="1.0"?><error><message>boom</message></error>')

    def test_empty_document_raises(self):
        """A document without elements is rejected."""
        with pytest.raises(XmlCodecError):
            unmarshal(b"")

    def test_missing_required_element_raises(self):
        """Items missing required elements are rejected."""
        data = f'<wikis xmlns="{NAMESPACE}"><wiki><name>x</name></wiki></wikis>'
        with pytest.raises(XmlCodecError, match="Missing required elements"):
            unmarshal(data)

    def test_invalid_number_raises(self):
        """Non-numeric sizes are rejected."""
        data = (
            f'<attachment xmlns="{NAMESPACE}"><id>i</id><name>n</name><size>big</size>'
            '<version>1.1</version><pageId>p</pageId><pageVersion>1.1</pageVersion>'
            '<mimeType>text/plain</mimeType></attachment>'
        )
        with pytest.raises(XmlCodecError, match="Invalid int value"):
            unmarshal(data)
