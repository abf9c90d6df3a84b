"""Translate domain and request errors into the response envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain import logger


def envelope(message: str, data=None) -> dict:
    return {"success": True, "message": message, "data": data}


def _describe(messages) -> str:
    """Flatten Protean's ``{field: [messages]}`` into one readable line."""
    if isinstance(messages, dict):
        parts = []
        for value in messages.values():
            parts.extend(value if isinstance(value, (list, tuple)) else [value])
        return "; ".join(str(part) for part in parts)
    if isinstance(messages, (list, tuple)):
        return "; ".join(str(part) for part in messages)
    return str(messages)


def _messages_of(exc):
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    return messages


def _failure(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if isinstance(errors, dict):
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError):
    messages = _messages_of(exc)
    return _failure(400, _describe(messages), messages)


async def _not_found(request: Request, exc: ObjectNotFoundError):
    return _failure(404, _describe(_messages_of(exc)))


async def _invalid_operation(request: Request, exc: InvalidOperationError):
    logger.warning("invalid_operation", path=request.url.path, error=_describe(_messages_of(exc)))
    return _failure(409, _describe(_messages_of(exc)))


async def _request_validation(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return _failure(400, "Invalid request: " + _describe(errors), errors)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return _failure(exc.status_code, str(exc.detail))


async def _unexpected(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return _failure(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render every failure as ``{success: false, message}``."""
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
