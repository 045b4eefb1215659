"""
Global pytest fixtures for the URL Shortener test suite.

Responsibilities:
    - Provide isolated in-memory MappingStore and existence-oracle fixtures
    - Provide counter and content-hash strategies wired to those fixtures
    - Provide ShorteningService fixtures for each strategy
    - Provide a fresh FastAPI TestClient via the app factory

Every fixture builds new objects, so no state leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from shortener_platform.generator.strategies import ContentHashStrategy, CounterStrategy
from shortener_platform.oracle.memory import InMemoryExistenceOracle
from shortener_platform.service.shortening_service import ShorteningService
from shortener_platform.storage.storage import MappingStore


@pytest.fixture
def store() -> MappingStore:
    """Fresh in-memory mapping store."""
    return MappingStore()


@pytest.fixture
def oracle() -> InMemoryExistenceOracle:
    """Fresh, empty in-memory existence oracle."""
    return InMemoryExistenceOracle()


@pytest.fixture
def counter_strategy() -> CounterStrategy:
    """Counter strategy seeded at the default 1_000_000_000."""
    return CounterStrategy()


@pytest.fixture
def hash_strategy(oracle: InMemoryExistenceOracle) -> ContentHashStrategy:
    """md5 window strategy bound to the oracle fixture."""
    return ContentHashStrategy(oracle=oracle)


@pytest.fixture
def service(store: MappingStore, counter_strategy: CounterStrategy) -> ShorteningService:
    return ShorteningService(storage=store, strategy=counter_strategy, validate_urls=False)


@pytest.fixture
def hash_service(store: MappingStore, hash_strategy: ContentHashStrategy) -> ShorteningService:
    return ShorteningService(storage=store, strategy=hash_strategy, validate_urls=False)


@pytest.fixture
def client(service: ShorteningService) -> TestClient:
    """
    Provide a fresh TestClient with a new app instance.

    The app is built around the `service` fixture so tests can inspect the
    same store the HTTP layer writes to.
    """
    return TestClient(create_app(service))
