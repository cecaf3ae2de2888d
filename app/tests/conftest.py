# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_search_client
from app.config.settings import Settings
from app.main import create_app
from app.models.internal import SearchResult


class StubSearchClient:
    """Records every search and answers with canned results"""

    engine = "stub"

    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.calls = []

    async def search(self, query, max_results):
        self.calls.append((query, max_results))
        if self.error:
            raise self.error
        return self.results[:max_results]

    async def close(self):
        pass


@pytest.fixture
def settings():
    """Settings isolated from any local .env file"""
    return Settings(_env_file=None, SEARCH_API_KEY="test-key")


@pytest.fixture
def sample_results():
    return [
        SearchResult(
            title="Python tutorial",
            url="https://example.com/python",
            snippet="Learn python",
            source_engine="stub",
            relevance_score=0.9
        ),
        SearchResult(
            title="Python docs",
            url="https://docs.example.com",
            snippet="Reference",
            source_engine="stub",
            relevance_score=0.7
        )
    ]


@pytest.fixture
def stub_client(sample_results):
    return StubSearchClient(results=sample_results)


@pytest.fixture
def client(settings, stub_client):
    """TestClient for the full app with the upstream client stubbed out"""
    app = create_app(settings)
    app.dependency_overrides[get_search_client] = lambda: stub_client
    with TestClient(app) as test_client:
        yield test_client
