"""URI templates of the wiki REST resources.

Templates are relative to the API base URL. UriBuilder fills them in with
percent-encoded values so that page and attachment names containing spaces
or reserved characters produce valid URIs.
"""

from urllib.parse import quote

ROOT = "/"
WIKIS = "/wikis"
WIKI_SEARCH = "/wikis/{wiki}/search"
WIKI_PAGES = "/wikis/{wiki}/pages"
WIKI_ATTACHMENTS = "/wikis/{wiki}/attachments"
CLASSES = "/wikis/{wiki}/classes"
MODIFICATIONS = "/wikis/{wiki}/modifications"
SPACES = "/wikis/{wiki}/spaces"
SPACE = "/wikis/{wiki}/spaces/{space}"
PAGES = "/wikis/{wiki}/spaces/{space}/pages"
PAGE = "/wikis/{wiki}/spaces/{space}/pages/{page}"
PAGE_CHILDREN = PAGE + "/children"
PAGE_HISTORY = PAGE + "/history"
PAGE_ATTACHMENTS = PAGE + "/attachments"
ATTACHMENT = PAGE_ATTACHMENTS + "/{attachment}"


class UriBuilder:
    """Builds absolute resource URIs from templates.

    Example:
        >>> uris = UriBuilder("http://localhost:8080/rest")
        >>> uris.build(WIKI_PAGES, wiki="xwiki")
        'http://localhost:8080/rest/wikis/xwiki/pages'
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def build(self, template: str, **values: str) -> str:
        quoted = {name: quote(str(value), safe="") for name, value in values.items()}
        return self.base_url + template.format(**quoted)
