"""
pytest Fixtures for Book Shop API Tests

This file contains shared fixtures used across all test files.

STORE FIXTURES:
===============
Tests never talk to AWS. FakeDynamoDBClient keeps items in a dict and
answers the five low-level calls the book service makes (PutItem, GetItem,
Scan, UpdateItem, DeleteItem) plus DescribeTable, using the same
attribute-value wire format and the same botocore exceptions as the real
client. The API client fixture swaps it in through dependency overrides.

TickingClock hands out timestamps one second apart so ids never collide
and updatedAt visibly changes between calls.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["AWS_REGION"] = "us-east-1"
os.environ["BOOKS_TABLE"] = "Books"
os.environ["ALLOWED_ORIGINS"] = "*"
os.environ["ENVIRONMENT"] = "development"

import copy
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from fastapi.testclient import TestClient

from bookshop.dependencies import get_book_store
from bookshop.main import app
from bookshop.schemas import BookInput, BookResponse
from bookshop.services.books import BookStore

TABLE_NAME = "Books"


# =============================================================================
# STORE DOUBLES
# =============================================================================
def client_error(code: str, message: str, operation: str) -> ClientError:
    """Build a ClientError shaped like the ones botocore raises."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeDynamoDBClient:
    """
    In-memory stand-in for ``boto3.client("dynamodb")``.

    Args:
        table_name: The only table that exists
        page_size: When set, Scan returns at most this many items per page
    """

    def __init__(self, table_name: str = TABLE_NAME, page_size: int | None = None) -> None:
        self.table_name = table_name
        self.page_size = page_size
        self.items: dict[str, dict] = {}
        self.calls: list[str] = []

    def _check_table(self, table_name: str, operation: str) -> None:
        self.calls.append(operation)
        if table_name != self.table_name:
            raise client_error(
                "ResourceNotFoundException",
                "Requested resource not found",
                operation,
            )

    def put_item(self, TableName, Item):
        self._check_table(TableName, "PutItem")
        self.items[Item["id"]["S"]] = copy.deepcopy(Item)
        return {}

    def get_item(self, TableName, Key):
        self._check_table(TableName, "GetItem")
        item = self.items.get(Key["id"]["S"])
        if item is None:
            return {}
        return {"Item": copy.deepcopy(item)}

    def scan(self, TableName, ExclusiveStartKey=None):
        self._check_table(TableName, "Scan")
        keys = sorted(self.items)

        start = 0
        if ExclusiveStartKey:
            start = keys.index(ExclusiveStartKey["id"]["S"]) + 1

        end = len(keys) if self.page_size is None else start + self.page_size
        page = keys[start:end]

        response = {
            "Items": [copy.deepcopy(self.items[key]) for key in page],
            "Count": len(page),
        }
        if end < len(keys):
            response["LastEvaluatedKey"] = {"id": {"S": page[-1]}}
        return response

    def update_item(
        self,
        TableName,
        Key,
        UpdateExpression,
        ExpressionAttributeValues,
        ExpressionAttributeNames=None,
        ConditionExpression=None,
        ReturnValues="NONE",
    ):
        self._check_table(TableName, "UpdateItem")
        key = Key["id"]["S"]
        names = ExpressionAttributeNames or {}

        if key not in self.items:
            if ConditionExpression:
                raise client_error(
                    "ConditionalCheckFailedException",
                    "The conditional request failed",
                    "UpdateItem",
                )
            self.items[key] = copy.deepcopy(Key)

        assignments = UpdateExpression.strip()[len("SET "):].split(",")
        updated = {}
        for assignment in assignments:
            name, placeholder = (part.strip() for part in assignment.split("="))
            attribute = names.get(name, name)
            updated[attribute] = copy.deepcopy(ExpressionAttributeValues[placeholder])

        self.items[key].update(updated)

        if ReturnValues == "UPDATED_NEW":
            return {"Attributes": updated}
        return {}

    def delete_item(self, TableName, Key, ReturnValues="NONE"):
        self._check_table(TableName, "DeleteItem")
        old = self.items.pop(Key["id"]["S"], None)
        if old is not None and ReturnValues == "ALL_OLD":
            return {"Attributes": old}
        return {}

    def describe_table(self, TableName):
        self._check_table(TableName, "DescribeTable")
        return {"Table": {"TableName": TableName, "TableStatus": "ACTIVE"}}


class UnreachableDynamoDBClient:
    """Client whose every call fails as if the endpoint were down."""

    def __getattr__(self, operation):
        def fail(**kwargs):
            raise EndpointConnectionError(endpoint_url="https://dynamodb.us-east-1.amazonaws.com")

        return fail


class TickingClock:
    """Returns ISO-8601 timestamps one second apart."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def __call__(self) -> str:
        value = self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self.current += timedelta(seconds=1)
        return value


# =============================================================================
# SERVICE FIXTURES
# =============================================================================
@pytest.fixture
def fake_client() -> FakeDynamoDBClient:
    """Empty in-memory table."""
    return FakeDynamoDBClient()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(fake_client: FakeDynamoDBClient, clock: TickingClock) -> BookStore:
    """Book service over the in-memory table."""
    return BookStore(fake_client, TABLE_NAME, clock=clock)


@pytest.fixture
def unreachable_store() -> BookStore:
    """Book service whose store cannot be reached."""
    return BookStore(UnreachableDynamoDBClient(), TABLE_NAME)


# =============================================================================
# API CLIENT FIXTURES
# =============================================================================
@pytest.fixture
def client(store: BookStore) -> Generator[TestClient, None, None]:
    """
    Test client wired to the in-memory store.

    get_book_store is overridden so no boto3 client is ever built.
    """
    app.dependency_overrides[get_book_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def unreachable_client(unreachable_store: BookStore) -> Generator[TestClient, None, None]:
    """Test client whose store fails every call."""
    app.dependency_overrides[get_book_store] = lambda: unreachable_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(store: BookStore) -> BookResponse:
    """A stored book."""
    return store.create(
        BookInput(title="1984", author="George Orwell", publish_year=Decimal(1949))
    )


@pytest.fixture
def multiple_books(store: BookStore) -> list[BookResponse]:
    """Five stored books."""
    return [
        store.create(
            BookInput(title=f"Test Book {i + 1}", author=f"Author {i + 1}", publish_year=Decimal(2000 + i))
        )
        for i in range(5)
    ]
