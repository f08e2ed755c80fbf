"""
Store Connection Module

This module owns the DynamoDB client for the Book Shop API.

Client Lifecycle
================
A boto3 client is thread-safe and holds its own HTTP connection pool, so
one client is created per process and shared by every request:

1. First request (or script) asks for the client → it is built from settings
2. Every later call gets the cached instance
3. Route handlers receive it through FastAPI dependency injection

Tests replace the client by overriding the dependency, so nothing here
talks to AWS unless it is actually called.
"""

import logging
from functools import lru_cache

import boto3
from botocore.exceptions import ClientError

from bookshop.config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Client Factory
# =============================================================================
@lru_cache
def get_dynamodb_client():
    """
    Get the process-wide DynamoDB client.

    Usage in Routes:
        from fastapi import Depends
        from bookshop.database import get_dynamodb_client

        @router.get("/books")
        def list_books(client=Depends(get_dynamodb_client)):
            ...

    Returns:
        boto3 DynamoDB low-level client
    """
    settings = get_settings()
    client = boto3.client("dynamodb", **settings.aws_client_kwargs)
    logger.info(
        f"DynamoDB client created for region {settings.aws_region}"
        + (f" at {settings.dynamodb_endpoint_url}" if settings.dynamodb_endpoint_url else "")
    )
    return client


# =============================================================================
# Table Provisioning
# =============================================================================
def create_books_table(client, table_name: str) -> bool:
    """
    Create the books table if it does not exist yet.

    The table has a single string partition key ``id`` and on-demand
    billing. Blocks until DynamoDB reports the table as existing.

    WARNING: In production, provision the table with infrastructure
    tooling instead. This is meant for DynamoDB Local and first runs.

    Args:
        client: DynamoDB client
        table_name: Name of the table to create

    Returns:
        True if the table was created, False if it already existed
    """
    try:
        client.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            logger.info(f"Table {table_name} already exists")
            return False
        raise

    client.get_waiter("table_exists").wait(TableName=table_name)
    logger.info(f"Table {table_name} created")
    return True


def drop_books_table(client, table_name: str) -> bool:
    """
    Delete the books table.

    DANGER: This deletes all data! Only use against local or test stores.

    Returns:
        True if the table was deleted, False if it did not exist
    """
    try:
        client.delete_table(TableName=table_name)
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            return False
        raise

    client.get_waiter("table_not_exists").wait(TableName=table_name)
    logger.info(f"Table {table_name} deleted")
    return True
