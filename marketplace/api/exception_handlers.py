"""Global exception handlers that turn every failure into an ``ApiResponse`` envelope."""

import logging
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.response import ApiResponse

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE_SEPARATOR = "; "

_HTTP_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.UNAUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorCode.ENDPOINT_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
}


def error_response(
    request: Request, error_code: ErrorCode, message: str | None = None
) -> JSONResponse:
    """Build the error envelope for ``error_code``; ``message`` overrides the catalog text."""
    body = ApiResponse(
        code=error_code.code,
        message=message if message is not None else error_code.message,
        timestamp=datetime.now(),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=error_code.status,
        content=jsonable_encoder(body, exclude_none=True),
    )


def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "AppError %s on %s: %s", exc.error_code.name, request.url.path, exc.message
    )
    return error_response(request, exc.error_code, exc.message)


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.warning("Malformed JSON body on %s", request.url.path)
        return error_response(request, ErrorCode.JSON_PARSE_ERROR)

    message = VALIDATION_MESSAGE_SEPARATOR.join(str(error.get("msg", "")) for error in errors)
    logger.warning("Validation failed on %s: %s", request.url.path, message)
    return error_response(request, ErrorCode.VALIDATION_ERROR, message)


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error_code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.UNCATEGORIZED_EXCEPTION)
    logger.warning(
        "HTTP %s on %s mapped to %s", exc.status_code, request.url.path, error_code.name
    )
    return error_response(request, error_code)


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return error_response(request, ErrorCode.UNCATEGORIZED_EXCEPTION)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the envelope handlers on the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
