"""
Unit tests for Pydantic models.
"""

import re

import pytest
from pydantic import ValidationError

from bookshelf.models import (
    Book, BookPayload, BookSummary, Envelope, ResponseStatus, utc_timestamp
)


@pytest.fixture
def book():
    return Book(
        id="book-1",
        name="Buku A",
        year=2010,
        author="John Doe",
        summary="Lorem",
        publisher="Dicoding",
        pageCount=100,
        readPage=25,
        reading=True,
        insertedAt="2024-01-01T00:00:00.000Z",
        updatedAt="2024-01-01T00:00:00.000Z",
    )


class TestBook:
    """Test cases for Book model."""

    def test_wire_names(self, book):
        """Test that dumps use camelCase names and include finished."""
        data = book.model_dump(by_alias=True)

        assert data == {
            "id": "book-1",
            "name": "Buku A",
            "year": 2010,
            "author": "John Doe",
            "summary": "Lorem",
            "publisher": "Dicoding",
            "pageCount": 100,
            "readPage": 25,
            "reading": True,
            "insertedAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
            "finished": False,
        }

    def test_finished_is_derived(self, book):
        """Test that finished tracks the page counts."""
        assert book.finished is False

        book.read_page = 100
        assert book.finished is True

        book.page_count = 120
        assert book.finished is False

    def test_apply_keeps_identity(self, book):
        """Test that apply leaves id and insertedAt alone."""
        payload = BookPayload(name="Other", pageCount=5, readPage=5)

        book.apply(payload, updated_at="2024-02-01T00:00:00.000Z")

        assert book.id == "book-1"
        assert book.inserted_at == "2024-01-01T00:00:00.000Z"
        assert book.updated_at == "2024-02-01T00:00:00.000Z"
        assert book.name == "Other"
        assert book.author is None
        assert book.finished is True

    def test_summary_projection(self, book):
        """Test the list projection."""
        summary = BookSummary.from_book(book)

        assert summary.model_dump() == {"id": "book-1", "name": "Buku A", "publisher": "Dicoding"}


class TestBookPayload:
    """Test cases for BookPayload model."""

    def test_defaults(self):
        """Test defaults for omitted fields."""
        payload = BookPayload.model_validate({"name": "A"})

        assert payload.year is None
        assert payload.page_count == 0
        assert payload.read_page == 0
        assert payload.reading is False

    def test_ignores_server_fields(self):
        """Test that server-owned keys are dropped."""
        payload = BookPayload.model_validate(
            {"name": "A", "id": "x", "finished": True, "insertedAt": "then"}
        )

        assert set(payload.model_dump()) == {
            "name", "year", "author", "summary", "publisher",
            "page_count", "read_page", "reading",
        }

    def test_empty_name(self):
        """Test that an empty name is invalid."""
        with pytest.raises(ValidationError):
            BookPayload.model_validate({"name": ""})

    def test_negative_page_count(self):
        """Test that negative page counts are invalid."""
        with pytest.raises(ValidationError) as exc_info:
            BookPayload.model_validate({"name": "A", "pageCount": -5})

        assert exc_info.value.errors()[0]["loc"] == ("pageCount",)

    @pytest.mark.parametrize("field, value", [
        ("pageCount", True),
        ("readPage", "10"),
        ("year", 2020.5),
        ("reading", "yes"),
        ("reading", 1),
    ])
    def test_strict_types(self, field, value):
        """Test that values of the wrong JSON type are not coerced."""
        with pytest.raises(ValidationError) as exc_info:
            BookPayload.model_validate({"name": "A", field: value})

        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_snake_case_names_are_not_read(self):
        """Test that request bodies are read by alias only."""
        payload = BookPayload.model_validate({"name": "A", "page_count": 5, "read_page": 5})

        assert payload.page_count == 0
        assert payload.read_page == 0


class TestEnvelope:
    """Test cases for the response envelope."""

    def test_omits_absent_keys(self):
        envelope = Envelope(status=ResponseStatus.FAIL, message="nope")

        assert envelope.to_content() == {"status": "fail", "message": "nope"}

    def test_keeps_nulls_inside_data(self):
        envelope = Envelope(status=ResponseStatus.SUCCESS, data={"book": {"year": None}})

        assert envelope.to_content() == {"status": "success", "data": {"book": {"year": None}}}


def test_utc_timestamp_format():
    """Test the toISOString-style timestamp."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
