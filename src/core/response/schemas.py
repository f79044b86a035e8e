from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BaseResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = Field(default=None)
    data: Optional[T] = None


class ErrorDetail(BaseModel):
    field: str = ""
    code: str = Field(default="ERROR")
    message: str = Field(default="Unknown Error")
    target: Optional[str] = Field(default=None)


class ErrorResponse(BaseResponse):
    success: bool = Field(default=False)
    error_code: str = Field(default="ERROR")
    error_details: List[ErrorDetail] = Field(default_factory=list)


class Pagination(BaseModel):
    limit: int
    offset: int


class PaginatedResponse(BaseModel, Generic[T]):
    """List payload echoing the filters that produced it."""

    filter: Optional[str] = None
    search: Optional[str] = None
    pagination: Pagination
    data: List[T] = Field(default_factory=list)


class MessageResponse(BaseModel):
    statusCode: int
    message: str
