"""
Result and error rendering.

Turns service results into HTTP responses and installs the exception
handlers shared by the backend and the web tier. Error bodies are always
``{"error": <message>}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.result import AppError, Result

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
INVALID_BODY = "Invalid request body"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def render(result: Result) -> Response:
    """
    Render a service result.

    Args:
        result: Ok or AppError returned by a service

    Returns:
        JSON response with the declared status; empty body for 204
    """
    if isinstance(result, AppError):
        return error_response(result.message, result.status_code)

    if result.status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.value))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Rejected request body for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(INVALID_BODY, status.HTTP_400_BAD_REQUEST)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
