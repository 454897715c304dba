"""
API models and schemas for the FastAPI application.

Attributes are snake_case in Python and camelCase on the wire. Request
bodies are read by their camelCase aliases only, with strict types; stored
books dump the aliases with ``model_dump(by_alias=True)``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, computed_field


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision.

    Matches the shape of JavaScript's ``Date.prototype.toISOString``, e.g.
    ``2024-01-31T12:00:00.000Z``.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ResponseStatus(str, Enum):
    """Envelope status values."""
    SUCCESS = "success"
    FAIL = "fail"


class BookPayload(BaseModel):
    """Client-writable book fields, as sent to POST and PUT."""
    name: str = Field(..., min_length=1, description="Book title")
    year: Optional[StrictInt] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: StrictInt = Field(0, alias="pageCount", ge=0, description="Total number of pages")
    read_page: StrictInt = Field(0, alias="readPage", ge=0, description="Last page read")
    reading: StrictBool = Field(False, description="Whether the book is currently being read")

    model_config = {
        "extra": "ignore"
    }


class Book(BaseModel):
    """A stored book record."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Book title")
    year: Optional[int] = Field(None, description="Publication year")
    author: Optional[str] = Field(None, description="Book author")
    summary: Optional[str] = Field(None, description="Short summary")
    publisher: Optional[str] = Field(None, description="Publisher name")
    page_count: int = Field(..., alias="pageCount", ge=0, description="Total number of pages")
    read_page: int = Field(..., alias="readPage", ge=0, description="Last page read")
    reading: bool = Field(..., description="Whether the book is currently being read")
    inserted_at: str = Field(..., alias="insertedAt", description="Creation timestamp")
    updated_at: str = Field(..., alias="updatedAt", description="Last update timestamp")

    model_config = {
        "populate_by_name": True
    }

    @computed_field
    @property
    def finished(self) -> bool:
        """True exactly when every page has been read."""
        return self.read_page == self.page_count

    def apply(self, payload: BookPayload, updated_at: str) -> None:
        """Overwrite every client-writable field from ``payload``."""
        self.name = payload.name
        self.year = payload.year
        self.author = payload.author
        self.summary = payload.summary
        self.publisher = payload.publisher
        self.page_count = payload.page_count
        self.read_page = payload.read_page
        self.reading = payload.reading
        self.updated_at = updated_at


class BookSummary(BaseModel):
    """Projection of a book used by the list endpoint."""
    id: str = Field(..., description="Unique book identifier")
    name: str = Field(..., description="Book title")
    publisher: Optional[str] = Field(None, description="Publisher name")

    @classmethod
    def from_book(cls, book: Book) -> "BookSummary":
        return cls(id=book.id, name=book.name, publisher=book.publisher)


class BookFilters(BaseModel):
    """List filters; ``None`` disables filtering on that dimension."""
    name: Optional[str] = Field(None, description="Case-insensitive name substring")
    reading: Optional[bool] = Field(None, description="Match the reading flag")
    finished: Optional[bool] = Field(None, description="Match the finished flag")


class Envelope(BaseModel):
    """Response wrapper shared by every endpoint."""
    status: ResponseStatus = Field(..., description="success or fail")
    message: Optional[str] = Field(None, description="Human-readable outcome")
    data: Optional[Dict[str, Any]] = Field(None, description="Response payload")

    def to_content(self) -> Dict[str, Any]:
        """JSON-ready dict with absent ``message``/``data`` keys omitted."""
        content: Dict[str, Any] = {"status": self.status.value}
        if self.message is not None:
            content["message"] = self.message
        if self.data is not None:
            content["data"] = self.data
        return content


class BookCreatedData(BaseModel):
    book_id: str = Field(..., alias="bookId")


class BookListData(BaseModel):
    books: List[BookSummary]


class BookDetailData(BaseModel):
    book: Book


class BookCreatedResponse(Envelope):
    """Response model for POST /books."""
    data: BookCreatedData


class BookListResponse(Envelope):
    """Response model for GET /books."""
    data: BookListData


class BookDetailResponse(Envelope):
    """Response model for GET /books/{book_id}."""
    data: BookDetailData


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books: int = Field(..., description="Number of stored books")
