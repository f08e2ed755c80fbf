"""
Book Record Service

Create, list, get, update and delete book records in DynamoDB.

Every operation is a single round trip to the store. This module is the
only place that knows about DynamoDB's typed attribute values; callers
hand in a BookInput and get plain BookResponse records back.

Typed attribute values
======================
The low-level DynamoDB API wraps each attribute in a type tag:

    {"title": {"S": "1984"}, "publishYear": {"N": "1949"}}

encode_book_item() and decode_book_item() translate between that form and
plain records. A stored item missing an attribute (or holding it under an
unexpected type) decodes with the attribute left out.

Not-found detection
===================
GetItem answers without "Item" for unknown keys. UpdateItem is guarded by
``attribute_exists(id)`` so it can never create a partial record, and asks
for UPDATED_NEW; DeleteItem asks for ALL_OLD. A failed condition or an
answer without "Attributes" means nothing was stored under the key.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from bookshop.schemas import BookInput, BookResponse
from bookshop.services.exceptions import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)

STRING_ATTRIBUTES = ("id", "title", "author", "createdAt", "updatedAt")
NUMBER_ATTRIBUTES = ("publishYear",)

REQUIRED_FIELDS_MESSAGE = "Send all required fields!"


# =============================================================================
# Helpers
# =============================================================================
def utc_timestamp() -> str:
    """
    Current UTC time as ISO-8601 with millisecond precision.

    Example: "2024-01-15T10:30:00.123Z"
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_plain_number(value: Decimal) -> int | float:
    """Integral decimals become int, anything else float."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def encode_book_item(book: BookResponse) -> Dict[str, Dict[str, str]]:
    """
    Convert a plain book record into a DynamoDB item.

    Attributes that are None are not written.

    Args:
        book: Record to encode

    Returns:
        Item map in DynamoDB attribute-value form
    """
    values = book.model_dump(by_alias=True, exclude_none=True)
    item: Dict[str, Dict[str, str]] = {}

    for name in STRING_ATTRIBUTES:
        if name in values:
            item[name] = {"S": str(values[name])}

    for name in NUMBER_ATTRIBUTES:
        if name in values:
            item[name] = {"N": str(values[name])}

    return item


def decode_book_item(item: Dict[str, Dict[str, Any]]) -> BookResponse:
    """
    Convert a DynamoDB item back into a plain book record.

    Args:
        item: Item map as returned by GetItem or Scan

    Returns:
        BookResponse with every recognised attribute filled in
    """
    values: Dict[str, Any] = {}

    for name in STRING_ATTRIBUTES:
        attribute = item.get(name) or {}
        if "S" in attribute:
            values[name] = attribute["S"]

    for name in NUMBER_ATTRIBUTES:
        attribute = item.get(name) or {}
        if "N" in attribute:
            values[name] = to_plain_number(Decimal(attribute["N"]))

    return BookResponse.model_validate(values)


def check_required_fields(data: BookInput) -> None:
    """
    Make sure title, author and publishYear are all present.

    Raises:
        ValidationError: listing every missing field
    """
    missing: List[str] = []
    if not data.title or not data.title.strip():
        missing.append("title")
    if not data.author or not data.author.strip():
        missing.append("author")
    if data.publish_year is None:
        missing.append("publishYear")

    if missing:
        raise ValidationError(
            f"{REQUIRED_FIELDS_MESSAGE} Missing: {', '.join(missing)}",
            missing=missing,
        )


# =============================================================================
# Service
# =============================================================================
class BookStore:
    """
    Book records kept in a single DynamoDB table keyed by ``id``.

    The client is owned by the caller and shared across requests; the
    store itself holds no other state.

    Args:
        client: boto3 DynamoDB low-level client
        table_name: Table holding the records
        clock: Returns the current timestamp string, used for ids and
            createdAt/updatedAt
    """

    def __init__(
        self,
        client,
        table_name: str,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._client = client
        self.table_name = table_name
        self._clock = clock

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    def create(self, data: BookInput) -> BookResponse:
        """
        Store a new book.

        The id is the creation timestamp. The write is an unconditional
        PutItem, so two creates within the same millisecond share an id and
        the second overwrites the first.

        Returns:
            The record as written

        Raises:
            ValidationError: required field missing (nothing is written)
            StoreError: the write failed
        """
        check_required_fields(data)

        now = self._clock()
        book = BookResponse(
            id=now,
            title=data.title.strip(),
            author=data.author.strip(),
            publish_year=to_plain_number(data.publish_year),
            created_at=now,
            updated_at=now,
        )

        self._call("put_item", TableName=self.table_name, Item=encode_book_item(book))
        logger.info(f"Book {book.id} inserted into {self.table_name}")
        return book

    def list_all(self) -> List[BookResponse]:
        """
        Return every book in the table.

        Follows LastEvaluatedKey so tables larger than one scan page are
        returned in full. Order is whatever DynamoDB yields.
        """
        params: Dict[str, Any] = {"TableName": self.table_name}
        items: List[Dict[str, Any]] = []

        while True:
            page = self._call("scan", **params)
            items.extend(page.get("Items", []))

            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                break
            params["ExclusiveStartKey"] = last_key

        logger.debug(f"Scanned {len(items)} items from {self.table_name}")
        return [decode_book_item(item) for item in items]

    def get(self, book_id: str) -> BookResponse:
        """
        Look up one book by id.

        Raises:
            NotFoundError: no item with that id
            StoreError: the lookup failed
        """
        response = self._call("get_item", TableName=self.table_name, Key=self._key(book_id))

        item = response.get("Item")
        if not item:
            raise NotFoundError(book_id)
        return decode_book_item(item)

    def update(self, book_id: str, data: BookInput) -> None:
        """
        Replace title, author and publishYear and refresh updatedAt.

        id and createdAt are never touched.

        Raises:
            ValidationError: required field missing (nothing is written)
            NotFoundError: no item with that id
            StoreError: the write failed
        """
        check_required_fields(data)

        response = self._call(
            "update_item",
            book_id=book_id,
            TableName=self.table_name,
            Key=self._key(book_id),
            UpdateExpression=(
                "SET #title = :title, #author = :author, "
                "#publishYear = :publishYear, #updatedAt = :updatedAt"
            ),
            ConditionExpression="attribute_exists(#id)",
            ExpressionAttributeNames={
                "#id": "id",
                "#title": "title",
                "#author": "author",
                "#publishYear": "publishYear",
                "#updatedAt": "updatedAt",
            },
            ExpressionAttributeValues={
                ":title": {"S": data.title.strip()},
                ":author": {"S": data.author.strip()},
                ":publishYear": {"N": str(to_plain_number(data.publish_year))},
                ":updatedAt": {"S": self._clock()},
            },
            ReturnValues="UPDATED_NEW",
        )

        if not response.get("Attributes"):
            raise NotFoundError(book_id)
        logger.info(f"Book {book_id} updated")

    def delete(self, book_id: str) -> None:
        """
        Delete one book by id.

        Deleting an id that is already gone reports NotFoundError.

        Raises:
            NotFoundError: no item with that id
            StoreError: the delete failed
        """
        response = self._call(
            "delete_item",
            TableName=self.table_name,
            Key=self._key(book_id),
            ReturnValues="ALL_OLD",
        )

        if not response.get("Attributes"):
            raise NotFoundError(book_id)
        logger.info(f"Book {book_id} deleted")

    def ping(self) -> bool:
        """Check that the table can be described. Never raises."""
        try:
            self._client.describe_table(TableName=self.table_name)
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Store health check failed: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    @staticmethod
    def _key(book_id: str) -> Dict[str, Dict[str, str]]:
        return {"id": {"S": book_id}}

    def _call(self, operation: str, book_id: str | None = None, **params: Any) -> Dict[str, Any]:
        """
        Run one client operation, translating botocore failures.

        When ``book_id`` is given, a failed condition check is reported as
        NotFoundError for that id.
        """
        try:
            return getattr(self._client, operation)(**params)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if book_id is not None and code == "ConditionalCheckFailedException":
                raise NotFoundError(book_id) from e
            logger.error(f"DynamoDB {operation} failed: {e}")
            raise StoreError(str(e)) from e
        except BotoCoreError as e:
            logger.error(f"DynamoDB {operation} failed: {e}")
            raise StoreError(str(e)) from e
