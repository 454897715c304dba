"""
Client error taxonomy for the Bookshelf API.

Every error carries the HTTP status code and the message sent back in the
``fail`` envelope. Messages keep the wording of the original bookshelf
service so existing client suites keep passing.
"""

from enum import Enum


class BookAction(str, Enum):
    """Mutating operation an error was raised for."""
    CREATE = "menambahkan"
    UPDATE = "memperbarui"


class BookshelfError(Exception):
    """Base class for errors reported to the client as a fail envelope."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingNameError(BookshelfError):
    """Raised when ``name`` is absent or empty."""

    def __init__(self, action: BookAction):
        super().__init__(f"Gagal {action.value} buku. Mohon isi nama buku")


class InvalidFieldError(BookshelfError):
    """Raised when a payload field does not hold a value of its declared type."""

    def __init__(self, action: BookAction, field: str):
        super().__init__(f"Gagal {action.value} buku. Nilai {field} tidak valid")
        self.field = field


class PageOverflowError(BookshelfError):
    """Raised when ``readPage`` exceeds ``pageCount``."""

    def __init__(self, action: BookAction):
        super().__init__(
            f"Gagal {action.value} buku. readPage tidak boleh lebih besar dari pageCount"
        )


class BookNotFoundError(BookshelfError):
    """Raised when no book has the requested id."""

    status_code = 404

    FETCH = "Buku tidak ditemukan"
    UPDATE = "Gagal memperbarui buku. Id tidak ditemukan"
    DELETE = "Buku gagal dihapus. Id tidak ditemukan"

    def __init__(self, book_id: str, message: str = FETCH):
        super().__init__(message)
        self.book_id = book_id


class MalformedBodyError(BookshelfError):
    """Raised when the request body is not a JSON object."""

    def __init__(self):
        super().__init__("Gagal memproses permintaan. Body harus berupa objek JSON")
