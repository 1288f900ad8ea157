"""Exception handlers translating service failures into HTTP responses.

Every error body has the same shape (``ErrorResponse``): the message,
the numeric status, its reason phrase and the request path.

===========================  ======
Failure                      Status
===========================  ======
``DogNotFoundError``         404
``DogValidationError``       400
request body/query errors    400
``DogServiceError``          500
anything else                500
===========================  ======
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kennel_api.app.core.errors import (
    DogNotFoundError,
    DogServiceError,
    DogValidationError,
)
from kennel_api.app.schemas.dog import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Build the JSON error body for ``status_code``."""
    body = ErrorResponse(
        message=message,
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        path=str(request.url.path),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def dog_not_found_handler(request: Request, exc: DogNotFoundError) -> JSONResponse:
    logger.info("%s %s: %s", request.method, request.url.path, exc.message)
    return error_response(request, 404, exc.message)


async def dog_validation_handler(request: Request, exc: DogValidationError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(request, 400, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed payloads (wrong types, unparsable dates) as 400."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning("%s %s invalid request: %s", request.method, request.url.path, details)
    return error_response(request, 400, f"Invalid request: {details}")


async def dog_service_handler(request: Request, exc: DogServiceError) -> JSONResponse:
    logger.error(
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc.message,
        exc_info=exc.__cause__ or exc,
    )
    return error_response(request, 500, exc.message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return error_response(request, 500, f"An unexpected error occurred: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DogNotFoundError, dog_not_found_handler)
    app.add_exception_handler(DogValidationError, dog_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DogServiceError, dog_service_handler)
    app.add_exception_handler(Exception, general_exception_handler)
