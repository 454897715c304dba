"""
In-memory book registry for the FastAPI application.
"""

import secrets
from typing import Iterator, List, Optional

import structlog

from bookshelf.models import Book, BookFilters, BookPayload, utc_timestamp

logger = structlog.get_logger(__name__)


def generate_book_id() -> str:
    """Generate a 16-character URL-safe book identifier."""
    return secrets.token_urlsafe(12)


class BookRegistry:
    """
    Authoritative collection of book records, kept in insertion order.

    None of the methods await, so each call completes as one step on the
    event loop and two mutations never interleave.
    """

    def __init__(self):
        self._books: List[Book] = []

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book_id: str) -> bool:
        return self.find_by_id(book_id) is not None

    def add(self, book: Book) -> None:
        """Append a fully-constructed book. No validation is performed."""
        self._books.append(book)

    def create(self, payload: BookPayload) -> Book:
        """
        Build a book from a validated payload and store it.

        Args:
            payload: Validated client fields

        Returns:
            The stored Book with its server-assigned id and timestamps
        """
        timestamp = utc_timestamp()
        book = Book(
            id=generate_book_id(),
            inserted_at=timestamp,
            updated_at=timestamp,
            **payload.model_dump()
        )
        self.add(book)
        logger.debug("Book stored", book_id=book.id, total=len(self._books))
        return book

    def find_by_id(self, book_id: str) -> Optional[Book]:
        """
        Get a single book by ID.

        Args:
            book_id: Book identifier

        Returns:
            Book if found, None otherwise
        """
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def list(self, filters: Optional[BookFilters] = None) -> Iterator[Book]:
        """
        Lazily yield books matching every supplied filter, in insertion order.

        Each call returns a new generator, so the result can be re-requested
        at any time without sharing iteration state.

        Args:
            filters: Optional filters; unset dimensions are not filtered

        Returns:
            Iterator over matching books
        """
        filters = filters or BookFilters()
        needle = filters.name.lower() if filters.name else None
        return (
            book for book in self._books
            if (needle is None or needle in book.name.lower())
            and (filters.reading is None or book.reading == filters.reading)
            and (filters.finished is None or book.finished == filters.finished)
        )

    def update(self, book_id: str, fields: BookPayload) -> bool:
        """
        Overwrite every mutable field of a book and refresh ``updatedAt``.

        ``finished`` follows automatically from the new page counts.

        Args:
            book_id: Book identifier
            fields: Validated client fields

        Returns:
            True if the book was updated, False if no book has that id
        """
        book = self.find_by_id(book_id)
        if book is None:
            return False
        book.apply(fields, updated_at=utc_timestamp())
        logger.debug("Book overwritten", book_id=book_id, finished=book.finished)
        return True

    def remove(self, book_id: str) -> bool:
        """
        Delete a book.

        Args:
            book_id: Book identifier

        Returns:
            True if the book was removed, False if no book has that id
        """
        for index, book in enumerate(self._books):
            if book.id == book_id:
                del self._books[index]
                return True
        return False

    def clear(self) -> None:
        """Drop every stored book."""
        self._books.clear()
