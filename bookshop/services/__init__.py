"""
Services Package

Business logic kept apart from HTTP handling:
- books.py: Book record CRUD against DynamoDB
- exceptions.py: Failures raised by the services
"""
