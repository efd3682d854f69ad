"""Hypermedia relation identifiers used in link elements.

Each relation names a capability that a representation advertises through a
link. Identifiers follow the ``http://www.xwiki.org/rel/<name>`` convention
so that existing clients can match them verbatim.
"""

RELATION_PREFIX = "http://www.xwiki.org/rel/"

WIKIS = RELATION_PREFIX + "wikis"
SPACES = RELATION_PREFIX + "spaces"
SPACE = RELATION_PREFIX + "space"
PAGES = RELATION_PREFIX + "pages"
PAGE = RELATION_PREFIX + "page"
HOME = RELATION_PREFIX + "home"
PARENT = RELATION_PREFIX + "parent"
CHILDREN = RELATION_PREFIX + "children"
HISTORY = RELATION_PREFIX + "history"
ATTACHMENTS = RELATION_PREFIX + "attachments"
ATTACHMENT_DATA = RELATION_PREFIX + "attachmentData"
CLASSES = RELATION_PREFIX + "classes"
MODIFICATIONS = RELATION_PREFIX + "modifications"
SEARCH = RELATION_PREFIX + "search"

# Relations every wiki representation must expose.
WIKI_CAPABILITIES = (SPACES, CLASSES, MODIFICATIONS, SEARCH)


def short_name(relation: str) -> str:
    """Return the trailing name of a relation (e.g. ``spaces``)."""
    if relation.startswith(RELATION_PREFIX):
        return relation[len(RELATION_PREFIX):]
    return relation
