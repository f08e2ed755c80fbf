"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

The book service is built per request around the process-wide DynamoDB
client; building it is free, the client is what must not be recreated.
Tests override ``get_book_store`` (or ``get_dynamodb_client``) through
``app.dependency_overrides``.
"""

from typing import Annotated, Any

from fastapi import Depends

from bookshop.config import get_settings
from bookshop.database import get_dynamodb_client
from bookshop.services.books import BookStore

DynamoDBClient = Annotated[Any, Depends(get_dynamodb_client)]


def get_book_store(client: DynamoDBClient) -> BookStore:
    """
    Book service bound to the configured table.

    Usage in Routes:
        @router.get("/books")
        def list_books(store: BookStoreDep):
            return store.list_all()
    """
    return BookStore(client, get_settings().books_table)


BookStoreDep = Annotated[BookStore, Depends(get_book_store)]
