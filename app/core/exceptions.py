"""App-level handlers that turn persistence failures into notifications.

Business-rule failures are raised as HTTPException by the services and
reach the client unchanged. Database failures end up here: they are logged
and answered with a short human-readable ``detail`` the front end can show
as a toast.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from app.core.logging_config import logger


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique or foreign key violations that slipped past the upserts."""
    logger.error(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "This record conflicts with existing data"},
    )


async def operational_exception_handler(request: Request, exc: OperationalError) -> JSONResponse:
    logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database temporarily unavailable. Please try again."},
    )


async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Failed to persist changes on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Failed to save changes. Please try again."},
    )


def register_exception_handlers(app):
    """Register persistence error handlers with the FastAPI app."""
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(OperationalError, operational_exception_handler)
    app.add_exception_handler(SQLAlchemyError, persistence_exception_handler)
