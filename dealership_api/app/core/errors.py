"""
Mapping of domain exceptions to HTTP responses.

``register_exception_handlers`` installs handlers on the FastAPI app so
endpoint functions can let service exceptions propagate:

* ``NotFoundError``  -> 404 with an empty body
* ``ConflictError``  -> 409 with an empty body
* request validation failures -> 400 with the list of errors
* anything else -> 500, logged with its traceback
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    logger.info("%s %s -> 404: %s", request.method, request.url.path, exc.message)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def conflict_handler(request: Request, exc: ConflictError) -> Response:
    logger.warning("%s %s -> 409: %s", request.method, request.url.path, exc.message)
    return Response(status_code=status.HTTP_409_CONFLICT)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s -> 500: unhandled %s", request.method, request.url.path, type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s -> 400: %d validation error(s)", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to ``app``."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
