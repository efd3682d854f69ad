"""Unit tests for wiki_store.content_loader module."""

import pytest

from src.wiki_store.content_loader import DEFAULT_CONTENT_PATH, ContentLoader
from src.wiki_store.errors import ContentError, FilesystemError
from tests.fixtures.sample_content import SAMPLE_CONTENT_YAML


def minimal_content(page_yaml: str = "- name: WebHome") -> str:
    indented = "\n".join("          " + line for line in page_yaml.splitlines())
    return f"""
wikis:
  - id: w
    spaces:
      - name: Main
        pages:
{indented}
"""


class TestContentLoaderParsing:
    """Test cases for parsing valid content."""

    def test_loads_sample_content(self):
        """Sample content yields both wikis with their spaces."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        assert [wiki.id for wiki in store.wikis()] == ["test", "other"]
        assert [space.name for space in store.spaces("test")] == ["Alpha", "Beta"]

    def test_wiki_name_defaults_to_id(self):
        """A wiki without a name is named after its id."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        assert store.get_wiki("other").name == "other"

    def test_page_defaults(self):
        """Author, version and syntax fall back to their defaults."""
        store = ContentLoader.loads(minimal_content())
        document = store.get_document("w", "Main", "WebHome")
        assert document.author == "XWiki.Admin"
        assert document.version == "1.1"
        assert document.syntax == "xwiki/2.1"
        assert document.parent == ""

    def test_revisions_end_with_current_version(self):
        """The current version is appended to the declared revisions."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        document = store.get_document("test", "Alpha", "WebHome")
        assert [revision.version for revision in document.revisions] == ["1.1", "2.1"]
        assert document.revisions[-1].modified == "2024-01-05T10:00:00Z"

    def test_revision_author_defaults_to_page_author(self):
        """Revisions without an author inherit the page author."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        document = store.get_document("test", "Alpha", "WebHome")
        assert document.revisions[0].author == "XWiki.Admin"

    def test_modified_defaults_to_created(self):
        """Pages without a modification date use their creation date."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        assert store.get_document("test", "Beta", "Page1").modified == "2024-01-03T10:00:00Z"

    def test_text_attachment_content(self):
        """Text attachments are stored UTF-8 encoded and inherit page metadata."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        attachment = store.get_attachment("test", "Alpha", "WebHome", "notes.txt")
        assert attachment.content == b"hello"
        assert attachment.size == 5
        assert attachment.author == "XWiki.Admin"
        assert attachment.date == "2024-01-05T10:00:00Z"

    def test_base64_attachment_content(self):
        """base64 attachments are decoded to raw bytes."""
        store = ContentLoader.loads(SAMPLE_CONTENT_YAML)
        attachment = store.get_attachment("test", "Beta", "Page1", "diagram.png")
        assert attachment.content.startswith(b"\x89PNG")
        assert attachment.mime_type == "image/png"

    def test_attachment_mime_type_default(self):
        """Attachments without a mime type are octet streams."""
        store = ContentLoader.loads(minimal_content(
            "- name: WebHome\n  attachments:\n    - name: blob.bin\n      content: x"
        ))
        attachment = store.get_attachment("w", "Main", "WebHome", "blob.bin")
        assert attachment.mime_type == "application/octet-stream"


class TestContentLoaderValidation:
    """Test cases for invalid content."""

    def test_invalid_yaml_raises(self):
        """Malformed YAML is reported as a content error."""
        with pytest.raises(ContentError, match="Invalid YAML syntax"):
            ContentLoader.loads("wikis: [unclosed")

    def test_empty_content_raises(self):
        """An empty document is rejected."""
        with pytest.raises(ContentError, match="empty"):
            ContentLoader.loads("")

    def test_non_dictionary_raises(self):
        """Top-level lists are rejected."""
        with pytest.raises(ContentError, match="must be a YAML dictionary"):
            ContentLoader.loads("- a\n- b")

    def test_missing_wikis_raises(self):
        """The wikis list is required."""
        with pytest.raises(ContentError) as exc_info:
            ContentLoader.loads("other: 1")
        assert exc_info.value.content_field == "wikis"

    def test_duplicate_wiki_ids_raise(self):
        """Wiki ids must be unique."""
        content = "wikis:\n  - {id: w, spaces: []}\n  - {id: w, spaces: []}"
        with pytest.raises(ContentError, match="Duplicate wiki id 'w'"):
            ContentLoader.loads(content)

    def test_missing_required_field_raises(self):
        """Wikis need an id and spaces."""
        with pytest.raises(ContentError, match="Missing required fields: spaces"):
            ContentLoader.loads("wikis:\n  - {id: w}")

    def test_space_name_with_dot_raises(self):
        """Space names cannot contain the full-name separator."""
        content = "wikis:\n  - id: w\n    spaces:\n      - name: A.B"
        with pytest.raises(ContentError, match="cannot contain '.'"):
            ContentLoader.loads(content)

    @pytest.mark.parametrize("content, field", [
        ("wikis:\n  - id: w\n    spaces:\n      - name: A/B", "wikis[0].spaces[0].name"),
        (
            "wikis:\n  - id: w\n    spaces:\n      - name: Docs\n        pages:\n"
            "          - name: 2024/Q1",
            "wikis[0].spaces[0].pages[0].name",
        ),
        (
            "wikis:\n  - id: w\n    spaces:\n      - name: Docs\n        pages:\n"
            "          - name: WebHome\n            attachments:\n"
            "              - name: reports/q1.txt",
            "wikis[0].spaces[0].pages[0].attachments[0].name",
        ),
    ])
    def test_names_with_slash_raise(self, content, field):
        """Space, page and attachment names cannot contain a path separator."""
        with pytest.raises(ContentError, match="cannot contain '/'") as exc_info:
            ContentLoader.loads(content)
        assert exc_info.value.content_field == field

    def test_duplicate_space_raises(self):
        """Space names are unique within a wiki."""
        content = "wikis:\n  - id: w\n    spaces:\n      - name: A\n      - name: A"
        with pytest.raises(ContentError, match="Duplicate space"):
            ContentLoader.loads(content)

    def test_duplicate_page_raises(self):
        """Page names are unique within a space."""
        with pytest.raises(ContentError, match="Duplicate page 'Main.WebHome'"):
            ContentLoader.loads(minimal_content("- name: WebHome\n- name: WebHome"))

    def test_unknown_parent_raises(self):
        """Parents must reference an existing page of the same wiki."""
        with pytest.raises(ContentError, match="Parent 'Main.Missing'"):
            ContentLoader.loads(minimal_content("- name: WebHome\n  parent: Main.Missing"))

    def test_invalid_base64_raises(self):
        """Attachment payloads must be valid base64."""
        content = minimal_content(
            "- name: WebHome\n  attachments:\n    - name: a.png\n      base64: '***'"
        )
        with pytest.raises(ContentError, match="Invalid base64"):
            ContentLoader.loads(content)

    def test_empty_page_name_raises(self):
        """Page names cannot be blank."""
        with pytest.raises(ContentError, match="cannot be empty"):
            ContentLoader.loads(minimal_content("- name: ''"))


class TestContentLoaderFiles:
    """Test cases for loading content files."""

    def test_load_missing_file_raises(self, tmp_path):
        """Missing files are reported as filesystem errors."""
        with pytest.raises(FilesystemError, match="Content file not found"):
            ContentLoader.load(str(tmp_path / "missing.yaml"))

    def test_load_file(self, tmp_path):
        """Content files are read as UTF-8 YAML."""
        content_file = tmp_path / "wiki.yaml"
        content_file.write_text(SAMPLE_CONTENT_YAML, encoding="utf-8")
        store = ContentLoader.load(str(content_file))
        assert store.get_wiki("test").name == "Test Wiki"

    def test_load_default(self):
        """The bundled default content loads and contains the main wiki."""
        assert DEFAULT_CONTENT_PATH.exists()
        store = ContentLoader.load_default()
        assert store.get_document("xwiki", "Main", "WebHome").title == "Home"
