"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration) and provides
the stores, resolvers and in-process API clients most tests build on.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from src.query_resolver.resolver import QueryResolver
from src.rest_model.factory import RepresentationFactory
from src.rest_model.uri_templates import UriBuilder
from src.rest_server.app import create_app
from src.rest_server.config import ServerConfig
from src.wiki_store.content_loader import ContentLoader
from src.wiki_store.store import WikiStore
from tests.fixtures.sample_content import build_sample_store

# httpx logs every TestClient request at INFO level.
logging.getLogger("httpx").setLevel(logging.WARNING)

TEST_BASE_URL = "http://testserver"


@pytest.fixture(scope="session")
def default_store() -> WikiStore:
    """The bundled default wiki content (read-only, shared)."""
    return ContentLoader.load_default()


@pytest.fixture
def sample_store() -> WikiStore:
    """The small sample wiki from tests.fixtures.sample_content."""
    return build_sample_store()


@pytest.fixture
def factory() -> RepresentationFactory:
    return RepresentationFactory(UriBuilder(TEST_BASE_URL))


@pytest.fixture
def default_resolver(default_store: WikiStore, factory: RepresentationFactory) -> QueryResolver:
    return QueryResolver(default_store, factory)


@pytest.fixture
def sample_resolver(sample_store: WikiStore, factory: RepresentationFactory) -> QueryResolver:
    return QueryResolver(sample_store, factory)


@pytest.fixture
def api_client(default_store: WikiStore) -> TestClient:
    """In-process client for the API serving the default wiki."""
    return TestClient(create_app(ServerConfig(), store=default_store))


@pytest.fixture
def sample_api_client(sample_store: WikiStore) -> TestClient:
    """In-process client for the API serving the sample wiki."""
    return TestClient(create_app(ServerConfig(), store=sample_store))
