"""
Test Suite for Book Shop API

Test Organization:
- conftest.py: Shared fixtures (in-memory DynamoDB, clock, test client)
- test_books.py: Tests for /books endpoints
- test_book_service.py: Tests for the book service and item encoding
- test_database.py: Tests for client factory and table provisioning
- test_config.py: Tests for settings
- test_main.py: Tests for root, health, CORS

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=bookshop --cov-report=html

    # Run specific file
    pytest tests/test_books.py
"""
