#!/usr/bin/env python3
"""
Table Provisioning Script

Creates the books table and optionally fills it with sample books.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/create_table.py

    # Create and seed sample books
    python scripts/create_table.py --seed

    # Against DynamoDB Local
    DYNAMODB_ENDPOINT_URL=http://localhost:8000 python scripts/create_table.py --seed

This script:
1. Builds the DynamoDB client from app settings
2. Creates the table if it does not exist
3. Optionally inserts sample books through the book service
"""

import argparse
import sys
import time
from decimal import Decimal
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bookshop.config import get_settings
from bookshop.database import create_books_table, get_dynamodb_client
from bookshop.schemas import BookInput
from bookshop.services.books import BookStore

SAMPLE_BOOKS = [
    ("1984", "George Orwell", 1949),
    ("Pride and Prejudice", "Jane Austen", 1813),
    ("The Hobbit", "J.R.R. Tolkien", 1937),
    ("To Kill a Mockingbird", "Harper Lee", 1960),
    ("Brave New World", "Aldous Huxley", 1932),
]


def seed_books(store: BookStore) -> int:
    """Insert the sample books and return how many were written."""
    print("Creating books...")
    for title, author, year in SAMPLE_BOOKS:
        store.create(BookInput(title=title, author=author, publish_year=Decimal(year)))
        print(f"  - {title}")
        # ids are millisecond timestamps
        time.sleep(0.002)
    print(f"Created {len(SAMPLE_BOOKS)} books.")
    return len(SAMPLE_BOOKS)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the books table")
    parser.add_argument("--seed", action="store_true", help="insert sample books")
    args = parser.parse_args()

    settings = get_settings()
    client = get_dynamodb_client()

    print("=" * 60)
    print(f"Provisioning table {settings.books_table} in {settings.aws_region}...")
    print("=" * 60)

    created = create_books_table(client, settings.books_table)
    print("Table created." if created else "Table already exists.")

    if args.seed:
        store = BookStore(client, settings.books_table)
        seed_books(store)

    print("=" * 60)
    print("Done.")
    print(f"\nStart the API with: uvicorn bookshop.main:app --port {settings.port}")


if __name__ == "__main__":
    main()
