"""Integration tests for the wiki collection resources.

Exercises /wikis, /wikis/{wiki}/search, /wikis/{wiki}/pages and
/wikis/{wiki}/attachments over HTTP against the bundled default wiki, and
follows every link each representation advertises.
"""

import pytest

from src.rest_model import relations
from src.rest_model.representations import Attachments, Pages, SearchResults, Wikis
from src.rest_model.xml_codec import unmarshal
from tests.helpers.assertion_helpers import (
    assert_has_relations,
    assert_links_resolve,
    full_names,
    get_first_link_by_relation,
)

WIKI = "xwiki"


def get_representation(api_client, path, expected, **params):
    response = api_client.get(path, params=params)
    assert response.status_code == 200, f"GET {path} {params}: {response.status_code}"
    assert response.headers["content-type"].startswith("application/xml")
    return unmarshal(response.content, expected)


class TestWikisRepresentation:
    """GET /wikis."""

    def test_every_wiki_exposes_capabilities(self, api_client):
        """Each wiki links to its spaces, classes, modifications and search."""
        wikis = get_representation(api_client, "/wikis", Wikis)

        assert len(wikis.wikis) > 0
        for wiki in wikis.wikis:
            for relation in relations.WIKI_CAPABILITIES:
                assert get_first_link_by_relation(wiki, relation) is not None
            assert_links_resolve(api_client, wiki)

    def test_search_link_answers_without_a_term(self, api_client):
        """Following a wiki's search link as-is answers an empty result list."""
        wikis = get_representation(api_client, "/wikis", Wikis)
        for wiki in wikis.wikis:
            search_link = get_first_link_by_relation(wiki, relations.SEARCH)
            response = api_client.get(search_link.href)

            assert response.status_code == 200
            assert unmarshal(response.content, SearchResults).search_results == []


class TestWikiSearch:
    """GET /wikis/{wiki}/search."""

    def test_content_search(self, api_client):
        """Searching content for 'easy-to-edit' finds the main home page."""
        results = get_representation(
            api_client, f"/wikis/{WIKI}/search", SearchResults, q="easy-to-edit"
        )
        assert len(results.search_results) >= 1
        assert_links_resolve(api_client, results)

    def test_name_search(self, api_client):
        """Searching page names for 'WebHome' finds at least three pages."""
        results = get_representation(
            api_client, f"/wikis/{WIKI}/search", SearchResults, q="WebHome", scope="name"
        )
        assert len(results.search_results) >= 3
        assert_links_resolve(api_client, results)

    def test_title_search(self, api_client):
        """Searching titles for 'msg' finds the localized titles."""
        results = get_representation(
            api_client, f"/wikis/{WIKI}/search", SearchResults, q="msg", scope="title"
        )
        assert len(results.search_results) >= 1
        assert_links_resolve(api_client, results)

    def test_multiple_scopes(self, api_client):
        """Several scope parameters widen the search."""
        response = api_client.get(
            f"/wikis/{WIKI}/search?q=sandbox&scope=name&scope=spaces&scope=content"
        )
        results = unmarshal(response.content, SearchResults)
        types = {result.type for result in results.search_results}
        assert types == {"page", "space"}
        assert_links_resolve(api_client, results)


class TestWikiPages:
    """GET /wikis/{wiki}/pages."""

    def test_all_pages(self, api_client):
        """Every page of the wiki is listed and its links resolve."""
        pages = get_representation(api_client, f"/wikis/{WIKI}/pages", Pages)
        assert len(pages.page_summaries) > 0
        assert_links_resolve(api_client, pages)

    def test_pages_named_webhome(self, api_client):
        """Filtering on name only returns WebHome pages, including the expected ones."""
        pages = get_representation(api_client, f"/wikis/{WIKI}/pages", Pages, name="WebHome")
        names = full_names(pages)
        assert names
        assert all(name.endswith(".WebHome") for name in names)
        # Translations add entries, so the count may exceed the expected list
        expected = ["Main.WebHome", "Sandbox.WebHome", "XWiki.WebHome"]
        assert sum(1 for name in names if name in expected) >= len(expected)
        assert_links_resolve(api_client, pages)

    def test_pages_named_webhome_in_spaces_with_s(self, api_client):
        """Name and space filters combine."""
        pages = get_representation(
            api_client, f"/wikis/{WIKI}/pages", Pages, name="WebHome", space="s"
        )
        names = full_names(pages)
        assert all(name.endswith(".WebHome") for name in names)
        expected = [
            "ColorThemes.WebHome",
            "Stats.WebHome",
            "Sandbox.WebHome",
            "Panels.WebHome",
            "Scheduler.WebHome",
            "Sandbox.WebHome",
        ]
        assert sum(1 for name in names if name in expected) >= len(expected)
        assert_links_resolve(api_client, pages)

    def test_repeated_requests_are_idempotent(self, api_client):
        """Repeating a request yields byte-identical representations."""
        first = api_client.get(f"/wikis/{WIKI}/pages?name=WebHome")
        second = api_client.get(f"/wikis/{WIKI}/pages?name=WebHome")
        assert first.content == second.content


class TestWikiAttachments:
    """GET /wikis/{wiki}/attachments."""

    def test_all_attachments(self, api_client):
        """Every attachment of the wiki is listed and its links resolve."""
        attachments = get_representation(api_client, f"/wikis/{WIKI}/attachments", Attachments)
        assert len(attachments.attachments) > 0
        assert_links_resolve(api_client, attachments)

    @pytest.mark.parametrize("params", [
        {"name": "Logo"},
        {"space": "sandbox"},
        {"name": "rq", "space": "Main"},
    ])
    def test_filtered_attachments(self, api_client, params):
        """Each filter combination matches exactly one attachment."""
        attachments = get_representation(
            api_client, f"/wikis/{WIKI}/attachments", Attachments, **params
        )
        assert len(attachments.attachments) == 1
        assert_links_resolve(api_client, attachments)

    def test_attachment_data(self, api_client):
        """The attachmentData link serves the raw file with its mime type."""
        attachments = get_representation(
            api_client, f"/wikis/{WIKI}/attachments", Attachments, name="Logo"
        )
        data_link = get_first_link_by_relation(attachments.attachments[0], relations.ATTACHMENT_DATA)

        response = api_client.get(data_link.href)

        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")
        assert len(response.content) == attachments.attachments[0].size


class TestWikiNavigation:
    """Following links from wikis down to pages."""

    def test_walk_from_root_to_page(self, api_client):
        """root -> wikis -> spaces -> space home page."""
        root = unmarshal(api_client.get("/").content)
        wikis = unmarshal(api_client.get(get_first_link_by_relation(root, relations.WIKIS).href).content)
        main_wiki = next(wiki for wiki in wikis.wikis if wiki.id == WIKI)
        spaces = unmarshal(
            api_client.get(get_first_link_by_relation(main_wiki, relations.SPACES).href).content
        )
        main_space = next(space for space in spaces.spaces if space.name == "Main")
        page = unmarshal(
            api_client.get(get_first_link_by_relation(main_space, relations.HOME).href).content
        )

        assert page.full_name == "Main.WebHome"
        assert "easy-to-edit" in page.content
        assert_has_relations(page, [relations.HISTORY, relations.CHILDREN, relations.ATTACHMENTS])
        assert_links_resolve(api_client, page)
        assert_links_resolve(api_client, spaces)
