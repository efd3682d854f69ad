"""YAML seed content loading and validation.

This module loads the wiki content served by the API from a YAML document.
The content is validated up front so that request handling never has to
deal with malformed records.
"""

import base64
import binascii
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ContentError, FilesystemError
from .models import (
    AttachmentRecord,
    DocumentRecord,
    RevisionRecord,
    SpaceRecord,
    WikiRecord,
)
from .store import WikiStore

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = Path(__file__).parent / "data" / "default_wiki.yaml"


class ContentLoader:
    """Handles seed content loading and validation.

    Content file structure:
        wikis:
          - id: xwiki
            name: XWiki
            description: "Main wiki"
            owner: XWiki.Admin
            classes: [XWiki.XWikiUsers]
            spaces:
              - name: Main
                pages:
                  - name: WebHome
                    title: Home
                    content: "= Welcome ="
                    parent: ""
                    author: XWiki.Admin
                    version: "2.1"
                    created: "2024-01-10T09:00:00Z"
                    modified: "2024-01-12T09:00:00Z"
                    translations: [fr]
                    revisions:
                      - {version: "1.1", modified: "...", author: "..."}
                    attachments:
                      - name: notes.txt
                        mime_type: text/plain
                        content: "plain text content"
                        # or base64: "iVBORw0..."
    """

    # Required fields per level
    REQUIRED_WIKI_FIELDS = {'id', 'spaces'}
    REQUIRED_SPACE_FIELDS = {'name'}
    REQUIRED_PAGE_FIELDS = {'name'}
    REQUIRED_ATTACHMENT_FIELDS = {'name'}

    # Default values for optional fields
    DEFAULTS = {
        'author': 'XWiki.Admin',
        'version': '1.1',
        'syntax': 'xwiki/2.1',
        'mime_type': 'application/octet-stream',
    }

    @classmethod
    def load(cls, content_path: str) -> WikiStore:
        """Load and parse seed content from a YAML file.

        Args:
            content_path: Path to the YAML content file

        Returns:
            WikiStore holding the parsed content

        Raises:
            FilesystemError: If file cannot be read
            ContentError: If content is invalid or malformed
        """
        try:
            with open(content_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                str(content_path),
                'read',
                'Content file not found'
            )
        except PermissionError:
            raise FilesystemError(
                str(content_path),
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                str(content_path),
                'read',
                str(e)
            )

        store = cls.loads(content)
        logger.info(f"Loaded {len(store.wikis())} wiki(s) from {content_path}")
        return store

    @classmethod
    def load_default(cls) -> WikiStore:
        """Load the seed content shipped with the package."""
        return cls.load(str(DEFAULT_CONTENT_PATH))

    @classmethod
    def loads(cls, content: str) -> WikiStore:
        """Parse seed content from a YAML string.

        Raises:
            ContentError: If content is invalid or malformed
        """
        try:
            content_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ContentError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if content_dict is None:
            raise ContentError("Content file is empty")

        if not isinstance(content_dict, dict):
            raise ContentError(
                f"Content must be a YAML dictionary, got {type(content_dict).__name__}"
            )

        return WikiStore(cls._parse_wikis(content_dict))

    @classmethod
    def _parse_wikis(cls, content_dict: Dict[str, Any]) -> List[WikiRecord]:
        wikis_raw = content_dict.get('wikis')
        if not isinstance(wikis_raw, list):
            raise ContentError("Field 'wikis' must be a list", 'wikis')
        if not wikis_raw:
            raise ContentError("At least one wiki is required", 'wikis')

        wikis = []
        seen_ids = set()
        for i, wiki_dict in enumerate(wikis_raw):
            location = f'wikis[{i}]'
            cls._require(wiki_dict, cls.REQUIRED_WIKI_FIELDS, location)

            wiki_id = cls._string(wiki_dict['id'], f'{location}.id')
            if wiki_id in seen_ids:
                raise ContentError(f"Duplicate wiki id '{wiki_id}'", f'{location}.id')
            seen_ids.add(wiki_id)

            spaces_raw = wiki_dict['spaces']
            if not isinstance(spaces_raw, list):
                raise ContentError("Field 'spaces' must be a list", f'{location}.spaces')

            wiki = WikiRecord(
                id=wiki_id,
                name=str(wiki_dict.get('name') or wiki_id),
                description=str(wiki_dict.get('description', '')),
                owner=str(wiki_dict.get('owner', '')),
                classes=cls._string_list(wiki_dict.get('classes'), f'{location}.classes'),
                spaces=[
                    cls._parse_space(space_dict, f'{location}.spaces[{j}]')
                    for j, space_dict in enumerate(spaces_raw)
                ],
            )
            cls._validate_parents(wiki, location)
            wikis.append(wiki)

        return wikis

    @classmethod
    def _validate_parents(cls, wiki: WikiRecord, location: str) -> None:
        """Ensure every parent reference points at a page of the same wiki."""
        space_names = [space.name for space in wiki.spaces]
        if len(space_names) != len(set(space_names)):
            raise ContentError(f"Duplicate space in wiki '{wiki.id}'", f'{location}.spaces')

        full_names = {
            document.full_name
            for space in wiki.spaces
            for document in space.documents
        }
        for space in wiki.spaces:
            for document in space.documents:
                if document.parent and document.parent not in full_names:
                    raise ContentError(
                        f"Parent '{document.parent}' of page '{document.full_name}' does not exist",
                        f'{location}.spaces'
                    )

    @classmethod
    def _parse_space(cls, space_dict: Any, location: str) -> SpaceRecord:
        cls._require(space_dict, cls.REQUIRED_SPACE_FIELDS, location)
        name = cls._segment(space_dict['name'], 'Space', f'{location}.name', forbidden='./')

        pages_raw = space_dict.get('pages') or []
        if not isinstance(pages_raw, list):
            raise ContentError("Field 'pages' must be a list", f'{location}.pages')

        documents = []
        seen_names = set()
        for k, page_dict in enumerate(pages_raw):
            document = cls._parse_page(page_dict, name, f'{location}.pages[{k}]')
            if document.name in seen_names:
                raise ContentError(
                    f"Duplicate page '{document.full_name}'",
                    f'{location}.pages[{k}].name'
                )
            seen_names.add(document.name)
            documents.append(document)

        return SpaceRecord(name=name, documents=documents)

    @classmethod
    def _parse_page(cls, page_dict: Any, space: str, location: str) -> DocumentRecord:
        cls._require(page_dict, cls.REQUIRED_PAGE_FIELDS, location)
        name = cls._segment(page_dict['name'], 'Page', f'{location}.name')

        author = str(page_dict.get('author', cls.DEFAULTS['author']))
        version = str(page_dict.get('version', cls.DEFAULTS['version']))
        created = str(page_dict.get('created', ''))
        modified = str(page_dict.get('modified', created))

        revisions_raw = page_dict.get('revisions') or []
        if not isinstance(revisions_raw, list):
            raise ContentError("Field 'revisions' must be a list", f'{location}.revisions')
        revisions = []
        for r, revision in enumerate(revisions_raw):
            if not isinstance(revision, dict) or 'version' not in revision:
                raise ContentError(
                    "Revision must be a dictionary with a 'version'",
                    f'{location}.revisions[{r}]'
                )
            revisions.append(RevisionRecord(
                version=str(revision['version']),
                modified=str(revision.get('modified', '')),
                author=str(revision.get('author', author)),
            ))
        # The current version always closes the history
        if not revisions or revisions[-1].version != version:
            revisions.append(RevisionRecord(version=version, modified=modified, author=author))

        attachments_raw = page_dict.get('attachments') or []
        if not isinstance(attachments_raw, list):
            raise ContentError("Field 'attachments' must be a list", f'{location}.attachments')

        return DocumentRecord(
            space=space,
            name=name,
            title=str(page_dict.get('title', '')),
            content=str(page_dict.get('content', '')),
            parent=str(page_dict.get('parent', '')),
            author=author,
            version=version,
            created=created,
            modified=modified,
            syntax=str(page_dict.get('syntax', cls.DEFAULTS['syntax'])),
            translations=cls._string_list(page_dict.get('translations'), f'{location}.translations'),
            attachments=[
                cls._parse_attachment(attachment, f'{location}.attachments[{a}]', author, modified)
                for a, attachment in enumerate(attachments_raw)
            ],
            revisions=revisions,
        )

    @classmethod
    def _parse_attachment(
        cls,
        attachment_dict: Any,
        location: str,
        page_author: str,
        page_modified: str
    ) -> AttachmentRecord:
        cls._require(attachment_dict, cls.REQUIRED_ATTACHMENT_FIELDS, location)

        if 'base64' in attachment_dict:
            try:
                content = base64.b64decode(str(attachment_dict['base64']), validate=True)
            except (binascii.Error, ValueError) as e:
                raise ContentError(f"Invalid base64 content: {e}", f'{location}.base64')
        else:
            content = str(attachment_dict.get('content', '')).encode('utf-8')

        return AttachmentRecord(
            name=cls._segment(attachment_dict['name'], 'Attachment', f'{location}.name'),
            mime_type=str(attachment_dict.get('mime_type', cls.DEFAULTS['mime_type'])),
            content=content,
            author=str(attachment_dict.get('author', page_author)),
            version=str(attachment_dict.get('version', cls.DEFAULTS['version'])),
            date=str(attachment_dict.get('date', page_modified)),
        )

    @staticmethod
    def _require(value: Any, required: set, location: str) -> None:
        if not isinstance(value, dict):
            raise ContentError(f"Entry at {location} must be a dictionary", location)
        missing = required - set(value.keys())
        if missing:
            raise ContentError(
                f"Missing required fields: {', '.join(sorted(missing))}",
                location
            )

    @classmethod
    def _segment(cls, value: Any, kind: str, location: str, forbidden: str = '/') -> str:
        """Validate a name that becomes a single URI path segment."""
        name = cls._string(value, location)
        for char in forbidden:
            if char in name:
                raise ContentError(f"{kind} name '{name}' cannot contain '{char}'", location)
        return name

    @staticmethod
    def _string(value: Any, location: str) -> str:
        if value is None or not str(value).strip():
            raise ContentError("Value cannot be empty", location)
        return str(value).strip()

    @staticmethod
    def _string_list(value: Optional[Any], location: str) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ContentError("Value must be a list", location)
        return [str(item) for item in value]
