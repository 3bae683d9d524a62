"""Summarization and tag generation schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, StringConstraints
from typing_extensions import Annotated

from app.models.note import CONTENT_MAX_LENGTH
from app.schemas.common import CamelModel
from app.schemas.note import NoteResponse

SUMMARY_MIN_INPUT = 50
TAGS_MIN_INPUT = 10


class SummarizeRequest(CamelModel):
    text: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True, min_length=SUMMARY_MIN_INPUT, max_length=CONTENT_MAX_LENGTH
        ),
    ]
    max_length: int = Field(150, ge=50, le=500)


class SummarizeNoteRequest(CamelModel):
    max_length: int = Field(150, ge=50, le=500)


class GenerateTagsRequest(CamelModel):
    text: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True, min_length=TAGS_MIN_INPUT, max_length=CONTENT_MAX_LENGTH
        ),
    ]
    max_tags: int = Field(5, ge=1, le=10)


class SummaryData(CamelModel):
    summary: str
    original_length: int
    summary_length: int
    compression_ratio: float


class NoteSummaryData(SummaryData):
    note: NoteResponse


class TagsData(CamelModel):
    tags: List[str]


class RecentSummary(CamelModel):
    id: UUID
    title: str
    last_summarized: Optional[datetime] = None


class AIStatsData(CamelModel):
    summarized_notes: int
    total_notes: int
    summarization_rate: float
    recent_summaries: List[RecentSummary]
