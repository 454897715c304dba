"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from bookshelf.config import APIConfig
from bookshelf.main import create_app
from bookshelf.models import BookPayload
from bookshelf.registry import BookRegistry


@pytest.fixture
def api_settings():
    """Settings that never terminate the test process."""
    return APIConfig(exit_on_unhandled_error=False)


@pytest.fixture
def registry():
    """Fresh, empty registry for each test."""
    return BookRegistry()


@pytest.fixture
def app(api_settings, registry):
    """Application serving the per-test registry."""
    return create_app(settings=api_settings, registry=registry)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_book_payload():
    """Valid create/update request body, in wire format."""
    return {
        "name": "Buku A",
        "year": 2010,
        "author": "John Doe",
        "summary": "Lorem ipsum dolor sit amet",
        "publisher": "Dicoding Indonesia",
        "pageCount": 100,
        "readPage": 25,
        "reading": False,
    }


@pytest.fixture
def make_payload(sample_book_payload):
    """Build a validated BookPayload from the sample body with overrides."""
    def _make(**overrides):
        return BookPayload.model_validate({**sample_book_payload, **overrides})
    return _make


@pytest.fixture
def create_book(client, sample_book_payload):
    """POST a book through the API and return its id."""
    def _create(**overrides):
        response = client.post("/books", json={**sample_book_payload, **overrides})
        assert response.status_code == 201
        return response.json()["data"]["bookId"]
    return _create
