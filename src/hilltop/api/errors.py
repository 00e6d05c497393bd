from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from hilltop.core.exceptions import CatalogError, ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

# Matches anything under /api that no other router claimed; include it last.
fallback_router = APIRouter(tags=["Fallback"])


@fallback_router.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False
)
async def api_not_found(request: Request, path: str):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "API endpoint not found",
            "path": request.url.path,
            "method": request.method,
            "message": f"The endpoint {request.method} {request.url.path} is not available"
        }
    )


def format_validation_errors(errors) -> list:
    """
    Flatten pydantic errors to ``{path, message, code}``, one entry per field.

    The leading ``body`` location FastAPI adds for request bodies is dropped
    so paths name the submitted field directly.
    """
    formatted = []
    seen = set()
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        key = tuple(loc)
        if key in seen:
            continue
        seen.add(key)
        formatted.append({
            "path": loc,
            "message": error.get("msg", "Invalid value"),
            "code": error.get("type", "value_error")
        })
    return formatted


def _invalid_data(errors) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid data", "errors": format_validation_errors(errors)}
    )


def register_error_handlers(app: FastAPI):

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return _invalid_data(exc.errors())

    @app.exception_handler(ValidationError)
    async def model_validation_error(request: Request, exc: ValidationError):
        return _invalid_data(exc.errors())

    @app.exception_handler(CatalogError)
    async def catalog_error(request: Request, exc: CatalogError):
        if isinstance(exc, StoreUnavailableError):
            logger.error(f"Store unavailable on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error(request: Request, exc: IntegrityError):
        logger.warning(f"Constraint violation on {request.method} {request.url.path}: {exc.orig}")
        error = ConflictError("The request conflicts with existing data")
        return JSONResponse(status_code=error.status_code, content={"message": error.message})

    @app.exception_handler(DBAPIError)
    async def store_error(request: Request, exc: DBAPIError):
        logger.error(
            f"Database failure on {request.method} {request.url.path}: {exc}",
            exc_info=exc
        )
        error = StoreUnavailableError()
        return JSONResponse(status_code=error.status_code, content={"message": error.message})

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"}
        )
