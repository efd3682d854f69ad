"""FastAPI application serving the wiki REST API.

create_app() wires the content store, the exception handlers that map typed
errors onto HTTP status codes, and the GET router. Every error response is
an XML <error> document.

Intended usage:
    wiki-rest serve --port 8080
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.query_resolver.errors import InvalidQueryError
from src.wiki_client.errors import WikiRestError
from src.wiki_store.content_loader import ContentLoader
from src.wiki_store.errors import ResourceNotFoundError
from src.wiki_store.store import WikiStore

from .config import ServerConfig
from .responses import error_response
from .routes import router

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def create_app(config: Optional[ServerConfig] = None, store: Optional[WikiStore] = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        config: Server settings (defaults apply when omitted)
        store: Content to serve; loaded from config.content_path, or the
            bundled default wiki, when omitted

    Raises:
        FilesystemError: If the content file cannot be read
        ContentError: If the content file is invalid
    """
    config = config or ServerConfig()
    if store is None:
        if config.content_path:
            store = ContentLoader.load(config.content_path)
        else:
            store = ContentLoader.load_default()

    app = FastAPI(
        title="Wiki REST API",
        version=API_VERSION,
        docs_url=None,
        redoc_url=None,
    )
    app.state.config = config
    app.state.store = store
    app.state.version = API_VERSION

    @app.exception_handler(ResourceNotFoundError)
    async def _not_found(request: Request, exc: ResourceNotFoundError):
        logger.debug(f"{request.method} {request.url.path}: {exc}")
        return error_response(404, str(exc))

    @app.exception_handler(InvalidQueryError)
    async def _invalid_query(request: Request, exc: InvalidQueryError):
        logger.debug(f"{request.method} {request.url}: {exc}")
        return error_response(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
            for error in exc.errors()
        )
        logger.debug(f"{request.method} {request.url}: {details}")
        return error_response(400, f"Invalid request parameters: {details}")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(WikiRestError)
    async def _internal_error(request: Request, exc: WikiRestError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return error_response(500, "Internal server error")

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True
        )
        return error_response(500, "Internal server error")

    @app.get("/health", tags=["system"], include_in_schema=False)
    async def health() -> dict:
        return {"status": "ok", "version": API_VERSION}

    app.include_router(router)

    logger.info(
        f"Wiki REST API ready with {len(store.wikis())} wiki(s)"
        + (f", public URL {config.public_url}" if config.public_url else "")
    )
    return app
