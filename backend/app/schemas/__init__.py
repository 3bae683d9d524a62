"""Pydantic schemas."""

from app.schemas.common import (
    ApiResponse,
    ErrorResponse,
    FieldError,
)
from app.schemas.note import (
    NoteCreate,
    NoteUpdate,
    NoteResponse,
)
from app.schemas.ai import (
    SummarizeRequest,
    SummarizeNoteRequest,
    GenerateTagsRequest,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "FieldError",
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "SummarizeRequest",
    "SummarizeNoteRequest",
    "GenerateTagsRequest",
]
