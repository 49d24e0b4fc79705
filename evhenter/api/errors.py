"""Exception handlers mapping domain errors to HTTP responses.

Responses share the shape ``{"error": ..., "message": ...}``. Store error
details are only exposed outside production.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config.environment import IS_PRODUCTION_ENVIRONMENT
from ..db import DatabaseError
from ..query import NotFoundError, ValidationError
from ..utils.llm import ExtractionFailure, ExtractionFailureReason
from .auth import AuthFailure

logger = logging.getLogger(__name__)

_EXTRACTION_STATUS = {
    ExtractionFailureReason.UPSTREAM_UNAVAILABLE: 503,
    ExtractionFailureReason.CONTENT_POLICY: 400,
    ExtractionFailureReason.OTHER: 500,
}

def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})

async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, "Validation error", exc.message)

async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get('loc', ()) if part != 'body')
        messages.append(f"{location}: {err.get('msg')}" if location else err.get('msg'))
    return _error(400, "Validation error", "; ".join(messages))

async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _error(exc.status_code, HTTPStatus(exc.status_code).phrase, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response

async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(404, "Event not found", str(exc))

async def handle_auth_failure(request: Request, exc: AuthFailure) -> JSONResponse:
    error = "Forbidden" if exc.status_code == 403 else "Unauthorized"
    return _error(exc.status_code, error, exc.message)

async def handle_extraction_failure(request: Request, exc: ExtractionFailure) -> JSONResponse:
    status_code = _EXTRACTION_STATUS[exc.reason]
    if exc.reason == ExtractionFailureReason.UPSTREAM_UNAVAILABLE:
        message = "AI service is not available. Please try again later."
    elif exc.reason == ExtractionFailureReason.CONTENT_POLICY:
        message = "The request violates the AI provider's content policy."
    else:
        message = exc.message if not IS_PRODUCTION_ENVIRONMENT else "AI processing failed"
    return _error(status_code, exc.reason.value, message)

async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    message = "Failed to process request" if IS_PRODUCTION_ENVIRONMENT else str(exc)
    return _error(500, "Internal server error", message)

def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to ``app``."""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(AuthFailure, handle_auth_failure)
    app.add_exception_handler(ExtractionFailure, handle_extraction_failure)
    app.add_exception_handler(DatabaseError, handle_database_error)
