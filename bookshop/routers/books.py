"""
Books Router

CRUD endpoints for book records.

Handlers only move data between HTTP and the book service. Service
failures (ValidationError, NotFoundError, StoreError) are turned into
responses by the exception handlers registered in main.py.
"""

from fastapi import APIRouter, status

from bookshop.dependencies import BookStoreDep
from bookshop.schemas import (
    BookInput,
    BookListResponse,
    BookResponse,
    MessageResponse,
)

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"model": MessageResponse, "description": "Book not found"},
        500: {"model": MessageResponse, "description": "Store error"},
    },
)


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Store a new book. title, author and publishYear are required.",
    responses={400: {"model": MessageResponse, "description": "Missing field"}},
)
def create_book(book_data: BookInput, store: BookStoreDep) -> MessageResponse:
    """
    Create a new book.

    The assigned id is not returned; list the books to discover it.
    """
    store.create(book_data)
    return MessageResponse(message="Book created successfully!")


@router.get(
    "",
    response_model=BookListResponse,
    response_model_exclude_none=True,
    summary="List all books",
    description="Return every stored book with a count. Not paginated.",
)
def list_books(store: BookStoreDep) -> BookListResponse:
    """List all books."""
    books = store.list_all()
    return BookListResponse(count=len(books), data=books)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    response_model_exclude_none=True,
    summary="Get a book by ID",
)
def get_book(book_id: str, store: BookStoreDep) -> BookResponse:
    """Get a single book by its ID."""
    return store.get(book_id)


@router.put(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Update a book",
    description="Replace title, author and publishYear of an existing book.",
    responses={400: {"model": MessageResponse, "description": "Missing field"}},
)
def update_book(book_id: str, book_data: BookInput, store: BookStoreDep) -> MessageResponse:
    """
    Update an existing book.

    All three fields are required (PUT semantics). id and createdAt
    are kept; updatedAt is refreshed.
    """
    store.update(book_id, book_data)
    return MessageResponse(message="Book updated successfully!")


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
    description="Permanently delete a book.",
)
def delete_book(book_id: str, store: BookStoreDep) -> MessageResponse:
    """Delete a book. Deleting a missing book answers 404."""
    store.delete(book_id)
    return MessageResponse(message="Book deleted successfully!")
