# api/main.py
import logging
from dataclasses import asdict
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.routes import books, loans, wishlist, reading
from api.validation import field_errors
from core.auth import SessionAuthenticator
from core.catalog.google_books import GoogleBooksClient
from core.config import Settings, get_settings, configure_logging
from core.errors import LibraryError, ValidationError
from core.sa.database import Database

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    catalog: Optional[GoogleBooksClient] = None
) -> FastAPI:
    """Build the application and the process-wide objects it shares across requests."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    database = database or Database(settings.database_url)
    catalog = catalog or GoogleBooksClient(
        api_key=settings.google_books_api_key,
        base_url=settings.google_books_base_url,
        timeout=settings.google_books_timeout
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_db()
        logger.info("Database schema ready")
        yield
        database.dispose()

    app = FastAPI(title="Lending Library", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.catalog = catalog
    app.state.authenticator = SessionAuthenticator(ttl_days=settings.session_ttl_days)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError([asdict(e) for e in field_errors(exc)])
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error while handling %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Database error", "message": "The request could not be completed"},
        )

    @app.get("/")
    async def root():
        return {"status": "ok"}

    app.include_router(books.router)
    app.include_router(loans.router)
    app.include_router(wishlist.router)
    app.include_router(reading.router)

    return app


# Main execution
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload
        reload_dirs=["api", "core"]  # Watch both api and core directories for changes
    )
