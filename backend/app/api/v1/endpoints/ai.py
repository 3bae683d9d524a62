"""Summarization and tag generation endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_completion_service, note_id_path
from app.core.database import get_db
from app.schemas.ai import (
    AIStatsData,
    GenerateTagsRequest,
    NoteSummaryData,
    SummarizeNoteRequest,
    SummarizeRequest,
    SummaryData,
    TagsData,
)
from app.schemas.common import ApiResponse
from app.schemas.note import NoteResponse
from app.services.completion import BaseCompletionService
from app.services.summarization_service import summarization_service

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[AIStatsData])
async def get_ai_stats(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AIStatsData]:
    """Summarization usage statistics."""
    stats = await summarization_service.get_stats(db)
    return ApiResponse(data=AIStatsData.model_validate(stats))


@router.post("/summarize", response_model=ApiResponse[SummaryData])
async def summarize_text(
    request: SummarizeRequest,
    completion: Optional[BaseCompletionService] = Depends(get_completion_service),
) -> ApiResponse[SummaryData]:
    """Summarize arbitrary text."""
    result = await summarization_service.summarize_text(
        completion, request.text, request.max_length
    )
    return ApiResponse(data=SummaryData.model_validate(result))


@router.post("/summarize-note/{note_id}", response_model=ApiResponse[NoteSummaryData])
async def summarize_note(
    request: Optional[SummarizeNoteRequest] = Body(None),
    note_id: UUID = Depends(note_id_path),
    completion: Optional[BaseCompletionService] = Depends(get_completion_service),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteSummaryData]:
    """Summarize a stored note and save the summary on it."""
    max_length = request.max_length if request else 150
    result = await summarization_service.summarize_note(db, completion, note_id, max_length)
    result["note"] = NoteResponse.model_validate(result["note"])
    return ApiResponse(
        message="Note summarized successfully",
        data=NoteSummaryData.model_validate(result),
    )


@router.post("/generate-tags", response_model=ApiResponse[TagsData])
async def generate_tags(
    request: GenerateTagsRequest,
    completion: Optional[BaseCompletionService] = Depends(get_completion_service),
) -> ApiResponse[TagsData]:
    """Suggest tags for text."""
    tags = await summarization_service.generate_tags(completion, request.text, request.max_tags)
    return ApiResponse(data=TagsData(tags=tags))
