from typing import List, Optional

from fastapi import status

from src.core.response.schemas import ErrorDetail


class ServiceException(Exception):
    """Base exception raised by services, routers and guards."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "SERVICE_ERROR"

    def __init__(
        self,
        detail: str = "Service error",
        error_details: Optional[List[ErrorDetail]] = None,
    ):
        self.detail = detail
        self.error_details = error_details or []
        super().__init__(detail)


class NotFoundException(ServiceException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class UnauthorizedException(ServiceException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"


class ForbiddenException(ServiceException):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"


class ConflictException(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"
