"""
Book Shop API Package

A small FastAPI service storing book records in DynamoDB.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: DynamoDB client factory and table provisioning
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Book record service and its exceptions
"""

__version__ = "0.1.0"
