"""Note schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, StringConstraints, field_validator
from typing_extensions import Annotated

from app.models.note import (
    COLOR_PATTERN,
    CONTENT_MAX_LENGTH,
    TAG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    NoteCategory,
    NotePriority,
    normalize_tags,
)
from app.schemas.common import CamelModel

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=CONTENT_MAX_LENGTH)]
Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=TAG_MAX_LENGTH)]


class NoteCreate(CamelModel):
    """Schema for creating a note."""

    title: Title
    content: Content
    tags: Optional[List[Tag]] = None
    category: Optional[NoteCategory] = None
    priority: Optional[NotePriority] = None
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v):
        if v is None:
            return v
        return normalize_tags(v)


class NoteUpdate(CamelModel):
    """Schema for updating a note. Every field is optional."""

    title: Optional[Title] = None
    content: Optional[Content] = None
    tags: Optional[List[Tag]] = None
    category: Optional[NoteCategory] = None
    priority: Optional[NotePriority] = None
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v):
        if v is None:
            return v
        return normalize_tags(v)


class NoteResponse(CamelModel):
    """Note response schema."""

    id: UUID
    title: str
    content: str
    summary: Optional[str] = None
    tags: List[str]
    category: NoteCategory
    priority: NotePriority
    is_archived: bool
    is_favorite: bool
    color: str
    word_count: int
    reading_time: int
    last_summarized: Optional[datetime] = None
    user_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class NoteData(CamelModel):
    note: NoteResponse


class DeletedNoteData(CamelModel):
    deleted_note: NoteResponse


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_notes: int
    has_next_page: bool
    has_prev_page: bool


class NoteListData(CamelModel):
    notes: List[NoteResponse]
    pagination: Pagination


class CategoryNotesData(CamelModel):
    category: NoteCategory
    notes: List[NoteResponse]


class TagListData(CamelModel):
    tags: List[str]


class StatsOverview(CamelModel):
    total_notes: int
    archived_notes: int
    favorite_notes: int
    total_words: int
    avg_words_per_note: float


class CategoryCount(CamelModel):
    category: NoteCategory
    count: int


class NoteStatsData(CamelModel):
    overview: StatsOverview
    category_breakdown: List[CategoryCount]
