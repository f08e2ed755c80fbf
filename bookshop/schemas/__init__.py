"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxInput: Fields accepted when creating or replacing a record
- XxxResponse: Fields returned in API responses
- XxxListResponse: Collection wrapper for list endpoints
"""

from bookshop.schemas.book import (
    BookInput,
    BookListResponse,
    BookResponse,
    MessageResponse,
)

__all__ = [
    "BookInput",
    "BookResponse",
    "BookListResponse",
    "MessageResponse",
]
