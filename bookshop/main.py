"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Tests can build fresh instances

2. Lifespan Events
   - startup: log configuration (secrets masked)
   - shutdown: log and exit; the DynamoDB client needs no cleanup

3. Middleware Stack
   - CORS: permissive by default, any origin may call the API

4. Exception Handlers
   - Book service failures become {"message": ...} with their status
   - Malformed request bodies become 400
   - Anything else becomes a 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from bookshop import __version__
from bookshop.config import get_settings
from bookshop.dependencies import BookStoreDep
from bookshop.routers import books_router
from bookshop.services.exceptions import BookServiceError

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"AWS region: {settings.aws_region}")
    logger.info(f"Books table: {settings.books_table}")
    key_id = settings.aws_access_key_id
    logger.info(f"AWS access key id: {f'****{key_id[-4:]}' if key_id else 'Not set'}")
    logger.info(
        f"AWS secret access key: {'*****' if settings.aws_secret_access_key else 'Not set'}"
    )
    if settings.dynamodb_endpoint_url:
        logger.info(f"DynamoDB endpoint: {settings.dynamodb_endpoint_url}")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Shop API

Create, list, read, update and delete book records stored in DynamoDB.

### Books
- `POST /books` with `title`, `author`, `publishYear`
- `GET /books` returns `{count, data}`
- `GET|PUT|DELETE /books/{id}`
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    allow_all = settings.allowed_origins_list == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        # Browsers reject credentials together with a wildcard origin
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookServiceError)
    async def book_service_exception_handler(
        request: Request,
        exc: BookServiceError,
    ) -> JSONResponse:
        """
        Handle book service failures.

        Store errors are logged at ERROR, client errors at INFO.
        """
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Report unparseable bodies the same way as missing fields.

        Covers invalid JSON, a non-object body, or a non-numeric publishYear.
        """
        errors = exc.errors()
        fields = sorted({
            error["loc"][-1] for error in errors
            if len(error.get("loc", ())) > 1 and isinstance(error["loc"][-1], str)
        })
        message = "Invalid request body"
        if fields:
            message = f"{message}: {', '.join(fields)}"

        logger.info(f"{request.method} {request.url.path} -> 400: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": str(exc)},
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the books table is reachable.",
    )
    def health_check(store: BookStoreDep) -> dict:
        """
        Health check endpoint.

        Always answers 200; ``status`` is "degraded" when the table
        cannot be described.
        """
        reachable = store.ping()
        return {
            "status": "healthy" if reachable else "degraded",
            "app": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
            "store": {
                "table": store.table_name,
                "reachable": reachable,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        response_class=PlainTextResponse,
    )
    def root() -> str:
        """Plain text welcome message."""
        return settings.welcome_message

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshop.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookshop.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshop.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
