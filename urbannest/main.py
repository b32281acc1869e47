"""
FastAPI application entry point.
Builds the application, wires the database and file storage, and registers handlers.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from urbannest.config import Settings, get_settings
from urbannest.database import Database
from urbannest.routers import auth, properties, enquiries, uploads
from urbannest.schemas.error import HealthResponse
from urbannest.utils.exceptions import APIException
from urbannest.utils.file_utils import FileStorage
from urbannest.services.error_handler import ErrorHandlerService
from urbannest.middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)

UPLOAD_CACHE_CONTROL = "public, max-age=31536000"


class CachedStaticFiles(StaticFiles):
    """Static files served with a long-lived public cache header."""

    async def get_response(self, path: str, scope):
        response = await super().get_response(path, scope)
        if response.status_code in (200, 304):
            response.headers["Cache-Control"] = UPLOAD_CACHE_CONTROL
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the database and file storage unless they were supplied to create_app.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    owns_database = getattr(app.state, "db", None) is None
    if owns_database:
        app.state.db = Database.from_settings(settings)

    if getattr(app.state, "storage", None) is None:
        app.state.storage = FileStorage(
            settings.upload_dir,
            url_path=settings.uploads_url_path,
            public_base_url=settings.public_base_url
        )

    if settings.create_tables_on_startup:
        await app.state.db.create_tables()

    if not await app.state.db.ping():
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    if owns_database:
        await app.state.db.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error through ErrorHandlerService."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with flat error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors with detailed field information."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """Handle database errors without leaking database details."""
        return ErrorHandlerService.handle_database_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle framework HTTP exceptions such as unknown routes."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with secure error responses."""
        return ErrorHandlerService.handle_unexpected_error(exc, request)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    storage: Optional[FileStorage] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings, defaults to the environment
        database: Pre-built database handle; created at startup when omitted
        storage: Pre-built file storage; created at startup when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Property rental listings API.

        ## Features

        * **Listings**: Browse rooms, apartments and houses, and find similar listings
        * **Landlords**: Create, update and delete your own listings
        * **Enquiries**: Contact landlords about available listings
        * **Image Upload**: Upload listing photos with content validation

        ## Authentication

        Sign up or log in through `/api/auth`. The session is kept in an HTTP-only cookie.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Authentication", "description": "Signup, login and session status"},
            {"name": "Properties", "description": "Listing browse and management"},
            {"name": "Enquiries", "description": "Tenant enquiries"},
            {"name": "Uploads", "description": "Listing image upload"},
            {"name": "Health", "description": "Service health"},
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Processing-Time"],
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        path_prefix=settings.api_prefix,
        slow_request_threshold=settings.slow_request_threshold,
    )

    register_exception_handlers(app)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(properties.router, prefix=settings.api_prefix)
    app.include_router(enquiries.router, prefix=settings.api_prefix)
    app.include_router(uploads.router, prefix=settings.api_prefix)

    @app.get(
        f"{settings.api_prefix}/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check"
    )
    async def health_check(request: Request):
        """
        Health check endpoint.
        Returns 503 when the database cannot be reached.
        """
        database_ok = await request.app.state.db.ping()
        body = HealthResponse(
            status="healthy" if database_ok else "unhealthy",
            version=settings.app_version,
            database="connected" if database_ok else "disconnected"
        )
        if not database_ok:
            return JSONResponse(status_code=503, content=body.model_dump())
        return body

    upload_dir = storage.base_dir if storage is not None else settings.upload_dir
    app.mount(
        settings.uploads_url_path,
        CachedStaticFiles(directory=upload_dir, check_dir=False),
        name="uploads"
    )

    return app


# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "urbannest.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower()
    )
