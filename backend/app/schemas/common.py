"""Shared response envelope schemas."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema using camelCase field names on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ApiResponse(CamelModel, Generic[T]):
    """Successful response envelope."""

    status: str = "success"
    message: Optional[str] = None
    data: T


class FieldError(BaseModel):
    """A single validation failure."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error response envelope."""

    status: str = "error"
    message: str
    errors: Optional[List[FieldError]] = None
    error: Optional[str] = None
