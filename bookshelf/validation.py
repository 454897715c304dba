"""
Request payload validation and query decoding.

Checks run in a fixed order so the first failing rule decides the response:
name presence, then field types, then the readPage/pageCount relationship.
Existence of the target book is checked by the route before any of these.
"""

from typing import Any, Optional

from pydantic import ValidationError

from bookshelf.errors import (
    BookAction, InvalidFieldError, MalformedBodyError,
    MissingNameError, PageOverflowError
)
from bookshelf.models import BookFilters, BookPayload


def decode_flag(value: str) -> bool:
    """
    Decode a boolean query parameter.
    
    Only the literal ``"1"`` means true. Every other value, including
    ``"0"``, ``"true"`` and the empty string, means false.
    
    Args:
        value: Raw query parameter value
        
    Returns:
        Decoded boolean
    """
    return value == "1"


def build_filters(
    name: Optional[str] = None,
    reading: Optional[str] = None,
    finished: Optional[str] = None
) -> BookFilters:
    """
    Translate raw list query parameters into registry filters.
    
    A parameter that is absent (``None``) leaves its dimension unfiltered.
    An empty ``name`` matches every book and is dropped as well.
    """
    return BookFilters(
        name=name or None,
        reading=decode_flag(reading) if reading is not None else None,
        finished=decode_flag(finished) if finished is not None else None,
    )


def validate_payload(raw: Any, action: BookAction) -> BookPayload:
    """
    Validate a create/update request body.
    
    Args:
        raw: Decoded JSON body (``None`` when the request had no body)
        action: Operation the payload is validated for, used in messages
        
    Returns:
        Validated BookPayload
        
    Raises:
        MalformedBodyError: body is not a JSON object
        MissingNameError: ``name`` is absent, empty or not a string
        InvalidFieldError: a field holds a value of the wrong type
        PageOverflowError: ``readPage`` is greater than ``pageCount``
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedBodyError()

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise MissingNameError(action)

    try:
        payload = BookPayload.model_validate(raw)
    except ValidationError as e:
        loc = e.errors()[0].get("loc") or ("body",)
        raise InvalidFieldError(action, str(loc[0])) from e

    if payload.read_page > payload.page_count:
        raise PageOverflowError(action)

    return payload
