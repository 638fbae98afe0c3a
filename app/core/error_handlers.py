from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from .exceptions import AppException, ValidationFailedException

logger = logging.getLogger(__name__)


def format_validation_errors(errors) -> dict:
    """Collapse pydantic error entries into a {field: message} map"""
    field_errors = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        field_errors.setdefault(field, error.get("msg", "Invalid value"))
    return field_errors


async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions, 1:1 to status code and {code, description}"""
    if exc.status_code >= 500:
        logger.error(f"Server error. code={exc.code} message={exc.message} - Path: {request.url.path}")
    else:
        logger.warning(f"Request failed. code={exc.code} message={exc.message} - Path: {request.url.path}")

    content = {"code": exc.code, "description": exc.message}
    if isinstance(exc, ValidationFailedException):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation as ValidationFailed"""
    return await app_exception_handler(
        request, ValidationFailedException(format_validation_errors(exc.errors()))
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - Path: {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"code": "ServerError", "description": "Internal server error"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
