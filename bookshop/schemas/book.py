"""
Book Pydantic Schemas

Request and response shapes for the /books endpoints.

The JSON wire format uses camelCase (``publishYear``, ``createdAt``) while
the Python attributes are snake_case. ``populate_by_name`` lets the service
build records with either spelling, and FastAPI serializes by alias.

Required-field checks are done by the service, not here, so that a missing
field is reported as a 400 with a single message instead of a schema error.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class BookInput(BaseModel):
    """
    Request body for creating or replacing a book.

    Every field is declared optional so that absence can be reported by
    the service. ``publishYear`` accepts JSON numbers or numeric strings.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "publishYear": 1949
    }
    """

    title: str | None = Field(
        default=None,
        description="Book title",
        examples=["1984"],
    )

    author: str | None = Field(
        default=None,
        description="Author name",
        examples=["George Orwell"],
    )

    publish_year: Decimal | None = Field(
        default=None,
        alias="publishYear",
        description="Year of publication",
        examples=[1949],
    )

    model_config = ConfigDict(populate_by_name=True)


class BookResponse(BaseModel):
    """
    A book record as returned by the API.

    Fields are optional because a stored item missing an attribute is still
    returned; the missing attribute is simply left out of the JSON.
    """

    id: str | None = Field(default=None, description="Unique identifier")
    title: str | None = Field(default=None, description="Book title")
    author: str | None = Field(default=None, description="Author name")
    publish_year: int | float | None = Field(
        default=None,
        alias="publishYear",
        description="Year of publication",
    )
    created_at: str | None = Field(
        default=None,
        alias="createdAt",
        description="When the book was created (ISO-8601)",
    )
    updated_at: str | None = Field(
        default=None,
        alias="updatedAt",
        description="When the book was last updated (ISO-8601)",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "2024-01-15T10:30:00.000Z",
                "title": "1984",
                "author": "George Orwell",
                "publishYear": 1949,
                "createdAt": "2024-01-15T10:30:00.000Z",
                "updatedAt": "2024-01-15T10:30:00.000Z",
            }
        },
    )


class BookListResponse(BaseModel):
    """
    Response for the full book listing.

    There is no pagination: ``count`` is always ``len(data)``.
    """

    count: int = Field(..., ge=0, description="Number of books returned")
    data: list[BookResponse] = Field(..., description="All books in the store")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "count": 1,
                "data": [
                    {
                        "id": "2024-01-15T10:30:00.000Z",
                        "title": "1984",
                        "author": "George Orwell",
                        "publishYear": 1949,
                        "createdAt": "2024-01-15T10:30:00.000Z",
                        "updatedAt": "2024-01-15T10:30:00.000Z",
                    }
                ],
            }
        },
    )


class MessageResponse(BaseModel):
    """Acknowledgment body for writes, also used for error bodies."""

    message: str = Field(..., examples=["Book updated successfully!"])
