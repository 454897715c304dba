"""
FastAPI main application for the Bookshelf API.
"""

import asyncio
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.config import APIConfig, config as default_config
from bookshelf.errors import BookAction, BookNotFoundError, BookshelfError, MalformedBodyError
from bookshelf.models import (
    BookCreatedResponse, BookDetailResponse, BookListResponse, BookSummary,
    Envelope, HealthResponse, ResponseStatus, utc_timestamp
)
from bookshelf.registry import BookRegistry
from bookshelf.validation import build_filters, validate_payload

# Setup logging
logger = structlog.get_logger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Halaman tidak ditemukan"
SERVER_ERROR_MESSAGE = "Terjadi kegagalan pada server"

router = APIRouter()


def get_registry(request: Request) -> BookRegistry:
    """Registry owned by the application serving the request."""
    return request.app.state.registry


def envelope_response(
    status_code: int,
    response_status: ResponseStatus = ResponseStatus.SUCCESS,
    message: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """Wrap a result in the response envelope."""
    envelope = Envelope(status=response_status, message=message, data=data)
    return JSONResponse(status_code=status_code, content=envelope.to_content(), headers=headers)


def fail_response(status_code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return envelope_response(status_code, ResponseStatus.FAIL, message=message, headers=headers)


def handle_unhandled_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """
    Event loop exception handler: log the failure and terminate the process.

    Called for exceptions nobody retrieved, such as a failed background task.
    """
    exc = context.get("exception")
    logger.critical(
        "Unhandled asynchronous failure",
        message=context.get("message"),
        error=str(exc) if exc else None,
        exc_info=exc
    )
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: APIConfig = app.state.settings
    # Startup
    logger.info("Starting Bookshelf API", version=settings.api_version)
    if settings.exit_on_unhandled_error:
        asyncio.get_running_loop().set_exception_handler(handle_unhandled_loop_exception)

    yield

    # Shutdown
    logger.info("Shutting down Bookshelf API", books=len(app.state.registry))


# Health check endpoint
@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request, registry: BookRegistry = Depends(get_registry)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        version=request.app.state.settings.api_version,
        books=len(registry)
    )


# Books endpoints
@router.post(
    "/books",
    status_code=status.HTTP_201_CREATED,
    response_model=BookCreatedResponse,
    responses={400: {"model": Envelope}},
    tags=["Books"]
)
async def add_book(
    payload: Any = Body(None),
    registry: BookRegistry = Depends(get_registry)
):
    """
    Create a book.

    - **name**: Book title (required, non-empty)
    - **pageCount** / **readPage**: readPage must not exceed pageCount
    """
    book = registry.create(validate_payload(payload, BookAction.CREATE))
    logger.info("Book created", book_id=book.id, name=book.name, finished=book.finished)

    return envelope_response(
        status.HTTP_201_CREATED,
        message="Buku berhasil ditambahkan",
        data={"bookId": book.id}
    )


@router.get("/books", response_model=BookListResponse, tags=["Books"])
async def get_books(
    name: Optional[str] = None,
    reading: Optional[str] = None,
    finished: Optional[str] = None,
    registry: BookRegistry = Depends(get_registry)
):
    """
    List books, projected to id, name and publisher.

    - **name**: Case-insensitive substring of the book name
    - **reading**: "1" for books being read, any other value for the rest
    - **finished**: "1" for finished books, any other value for the rest
    """
    filters = build_filters(name=name, reading=reading, finished=finished)
    books = [BookSummary.from_book(book).model_dump() for book in registry.list(filters)]

    return envelope_response(status.HTTP_200_OK, data={"books": books})


@router.get(
    "/books/{book_id}",
    response_model=BookDetailResponse,
    responses={404: {"model": Envelope}},
    tags=["Books"]
)
async def get_book(book_id: str, registry: BookRegistry = Depends(get_registry)):
    """
    Get a single book by ID.

    - **book_id**: Book identifier returned on creation
    """
    book = registry.find_by_id(book_id)
    if book is None:
        raise BookNotFoundError(book_id)

    return envelope_response(status.HTTP_200_OK, data={"book": book.model_dump(by_alias=True)})


@router.put(
    "/books/{book_id}",
    response_model=Envelope,
    responses={400: {"model": Envelope}, 404: {"model": Envelope}},
    tags=["Books"]
)
async def update_book(
    book_id: str,
    payload: Any = Body(None),
    registry: BookRegistry = Depends(get_registry)
):
    """
    Replace every client-writable field of a book.

    An unknown id is reported before the payload is looked at.
    """
    if registry.find_by_id(book_id) is None:
        raise BookNotFoundError(book_id, BookNotFoundError.UPDATE)

    fields = validate_payload(payload, BookAction.UPDATE)
    if not registry.update(book_id, fields):
        raise BookNotFoundError(book_id, BookNotFoundError.UPDATE)
    logger.info("Book updated", book_id=book_id)

    return envelope_response(status.HTTP_200_OK, message="Buku berhasil diperbarui")


@router.delete(
    "/books/{book_id}",
    response_model=Envelope,
    responses={404: {"model": Envelope}},
    tags=["Books"]
)
async def delete_book(book_id: str, registry: BookRegistry = Depends(get_registry)):
    """Delete a book."""
    if not registry.remove(book_id):
        raise BookNotFoundError(book_id, BookNotFoundError.DELETE)

    logger.info("Book deleted", book_id=book_id)
    return envelope_response(status.HTTP_200_OK, message="Buku berhasil dihapus")


# Exception handlers
async def bookshelf_exception_handler(request: Request, exc: BookshelfError):
    """Handle client errors raised by the routes."""
    logger.info(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        error=type(exc).__name__,
        status_code=exc.status_code
    )
    return fail_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies FastAPI could not decode."""
    logger.info("Malformed request body", path=request.url.path, errors=str(exc.errors()))
    return fail_response(status.HTTP_400_BAD_REQUEST, MalformedBodyError().message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions such as unknown routes and wrong methods."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = ROUTE_NOT_FOUND_MESSAGE
    else:
        message = str(exc.detail)
    return fail_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=exc)
    return fail_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def create_app(
    settings: Optional[APIConfig] = None,
    registry: Optional[BookRegistry] = None
) -> FastAPI:
    """
    Build a Bookshelf application.

    Args:
        settings: Configuration to use, the global config by default
        registry: Registry to serve, a new empty one by default

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_config

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.registry = registry if registry is not None else BookRegistry()

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(BookshelfError, bookshelf_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)
    return app


# Create FastAPI application
app = create_app()
