"""
Book Service Exceptions

Failures raised by the book service. Each carries the HTTP status the
application's exception handlers answer with, so routers never build
error responses themselves.

- ValidationError: required input missing, nothing was sent to the store
- NotFoundError: the store holds no item with the requested id
- StoreError: DynamoDB could not be reached or rejected the call
"""

from fastapi import status


class BookServiceError(Exception):
    """Base class for all book service failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookServiceError):
    """Required fields missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class NotFoundError(BookServiceError):
    """No book stored under the given id."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, book_id: str) -> None:
        super().__init__("Book not found!")
        self.book_id = book_id


class StoreError(BookServiceError):
    """Any failure talking to DynamoDB, with the underlying message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
