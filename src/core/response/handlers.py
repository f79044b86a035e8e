import logging
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from src.core import exceptions
from src.core.response.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def error_response(
    error_code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[List[Any]] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build the JSON body shared by every failed request."""
    body = ErrorResponse(
        message=message,
        error_code=error_code,
        error_details=details or [],
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def service_exception_handler(
    request: Request, exc: exceptions.ServiceException
) -> JSONResponse:
    headers = None
    if isinstance(exc, exceptions.UnauthorizedException):
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(
        error_code=exc.error_code,
        message=str(exc.detail),
        status_code=exc.status_code,
        details=exc.error_details,
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        ErrorDetail(
            field=".".join(str(part) for part in error.get("loc", ())[1:]),
            code=str(error.get("type", "ERROR")).upper(),
            message=str(error.get("msg", "Invalid value")),
            target=str(error["loc"][0]) if error.get("loc") else None,
        )
        for error in exc.errors()
    ]
    return error_response(
        error_code="VALIDATION_ERROR",
        message="Invalid request parameters",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=details,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(
        error_code="HTTP_ERROR",
        message=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="The server encountered an unexpected error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(exceptions.ServiceException, service_exception_handler)  # type: ignore
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore
    app.add_exception_handler(Exception, global_exception_handler)
