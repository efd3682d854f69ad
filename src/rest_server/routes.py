"""GET endpoints of the wiki REST API.

Each endpoint resolves its path and query through a per-request
QueryResolver and serializes the resulting representation as XML. Links are
built against the configured public URL or, when none is set, against the
URL the request came in on.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from src.query_resolver.resolver import QueryResolver
from src.rest_model.factory import RepresentationFactory
from src.rest_model.uri_templates import UriBuilder

from .responses import XmlResponse, representation_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["wikis"], default_response_class=XmlResponse)

START_DESCRIPTION = "Number of items to skip."
NUMBER_DESCRIPTION = "Maximum number of items to return, -1 for all."


def get_resolver(request: Request) -> QueryResolver:
    """Dependency-injected QueryResolver bound to the request base URL."""
    state = request.app.state
    base_url = state.config.public_url or str(request.base_url)
    factory = RepresentationFactory(UriBuilder(base_url))
    return QueryResolver(state.store, factory, version=state.version)


@router.get("/", summary="API root")
def get_root(resolver: QueryResolver = Depends(get_resolver)) -> Response:
    return representation_response(resolver.get_root())


@router.get("/wikis", summary="List wikis")
def list_wikis(resolver: QueryResolver = Depends(get_resolver)) -> Response:
    return representation_response(resolver.list_wikis())


@router.get(
    "/wikis/{wiki}/search",
    summary="Search a wiki",
    description=(
        "Match q against page content (default), page names, titles or space names. "
        "Several scope values may be given; unknown ones are ignored."
    ),
)
def search_wiki(
    wiki: str,
    q: Optional[str] = Query(None, description="Search term (substring, case-insensitive)."),
    scope: Optional[List[str]] = Query(None, description="content, name, title or spaces."),
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    logger.debug(f"search wiki={wiki} q={q!r} scope={scope}")
    return representation_response(
        resolver.search(wiki, q, scopes=scope, start=start, number=number)
    )


@router.get("/wikis/{wiki}/pages", summary="List the pages of a wiki")
def list_wiki_pages(
    wiki: str,
    name: Optional[str] = Query(None, description="Substring of the page name."),
    space: Optional[str] = Query(None, description="Substring of the space name."),
    author: Optional[str] = Query(None, description="Substring of the last author."),
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.list_pages(
        wiki, name=name, space=space, author=author, start=start, number=number
    ))


@router.get("/wikis/{wiki}/attachments", summary="List the attachments of a wiki")
def list_wiki_attachments(
    wiki: str,
    name: Optional[str] = Query(None, description="Substring of the file name."),
    space: Optional[str] = Query(None, description="Substring of the owning page's space."),
    page: Optional[str] = Query(None, description="Substring of the owning page's name."),
    author: Optional[str] = Query(None, description="Substring of the attachment author."),
    types: Optional[str] = Query(None, description="Comma-separated mime type substrings."),
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.list_attachments(
        wiki,
        name=name,
        space=space,
        page=page,
        author=author,
        types=types,
        start=start,
        number=number,
    ))


@router.get("/wikis/{wiki}/classes", summary="List the classes of a wiki")
def list_classes(
    wiki: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.list_classes(wiki, start=start, number=number))


@router.get("/wikis/{wiki}/modifications", summary="Recent modifications of a wiki")
def list_modifications(
    wiki: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(
        resolver.list_modifications(wiki, start=start, number=number)
    )


@router.get("/wikis/{wiki}/spaces", summary="List the spaces of a wiki")
def list_spaces(
    wiki: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.list_spaces(wiki, start=start, number=number))


@router.get("/wikis/{wiki}/spaces/{space}", summary="Get a space")
def get_space(
    wiki: str,
    space: str,
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.get_space(wiki, space))


@router.get("/wikis/{wiki}/spaces/{space}/pages", summary="List the pages of a space")
def list_space_pages(
    wiki: str,
    space: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(
        resolver.list_space_pages(wiki, space, start=start, number=number)
    )


@router.get("/wikis/{wiki}/spaces/{space}/pages/{page}", summary="Get a page")
def get_page(
    wiki: str,
    space: str,
    page: str,
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(resolver.get_page(wiki, space, page))


@router.get("/wikis/{wiki}/spaces/{space}/pages/{page}/children", summary="List child pages")
def list_children(
    wiki: str,
    space: str,
    page: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(
        resolver.list_children(wiki, space, page, start=start, number=number)
    )


@router.get("/wikis/{wiki}/spaces/{space}/pages/{page}/history", summary="Page history")
def list_history(
    wiki: str,
    space: str,
    page: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(
        resolver.list_history(wiki, space, page, start=start, number=number)
    )


@router.get(
    "/wikis/{wiki}/spaces/{space}/pages/{page}/attachments",
    summary="List the attachments of a page",
)
def list_page_attachments(
    wiki: str,
    space: str,
    page: str,
    start: int = Query(0, description=START_DESCRIPTION),
    number: int = Query(-1, description=NUMBER_DESCRIPTION),
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    return representation_response(
        resolver.list_page_attachments(wiki, space, page, start=start, number=number)
    )


@router.get(
    "/wikis/{wiki}/spaces/{space}/pages/{page}/attachments/{attachment}",
    summary="Download an attachment",
    response_class=Response,
)
def get_attachment_data(
    wiki: str,
    space: str,
    page: str,
    attachment: str,
    resolver: QueryResolver = Depends(get_resolver),
) -> Response:
    record = resolver.get_attachment_content(wiki, space, page, attachment)
    return Response(content=record.content, media_type=record.mime_type)
