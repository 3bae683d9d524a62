"""Summarization gateway between notes and the completion service."""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    CompletionNotConfiguredError,
    UpstreamServiceError,
    ValidationFailedError,
)
from app.services.completion.base import BaseCompletionService
from app.services.note_service import NoteService, note_service

logger = logging.getLogger(__name__)

SUMMARY_MIN_INPUT = 50
TAGS_MIN_INPUT = 10


def length_metrics(original: str, summary: str) -> Dict[str, Any]:
    """Lengths and percentage of characters removed by the summary."""
    original_length = len(original)
    summary_length = len(summary)
    ratio = (original_length - summary_length) / original_length * 100 if original_length else 0.0
    return {
        "original_length": original_length,
        "summary_length": summary_length,
        "compression_ratio": round(ratio, 1),
    }


def _require(completion: Optional[BaseCompletionService]) -> BaseCompletionService:
    if completion is None:
        raise CompletionNotConfiguredError()
    return completion


def _non_empty(summary: Optional[str]) -> str:
    summary = (summary or "").strip()
    if not summary:
        logger.error("Completion service returned an empty summary")
        raise UpstreamServiceError("Empty summary returned")
    return summary


class SummarizationService:
    """Summaries and tag suggestions. Input is checked before any external call."""

    def __init__(self, notes: NoteService = note_service):
        self.notes = notes

    async def summarize_text(
        self,
        completion: Optional[BaseCompletionService],
        text: str,
        max_length: int = 150,
    ) -> Dict[str, Any]:
        text = text.strip()
        if len(text) < SUMMARY_MIN_INPUT:
            raise ValidationFailedError(
                message="Text is too short to summarize. Minimum 50 characters required."
            )

        summary = _non_empty(await _require(completion).summarize(text, max_length))
        return {"summary": summary, **length_metrics(text, summary)}

    async def summarize_note(
        self,
        db: AsyncSession,
        completion: Optional[BaseCompletionService],
        note_id: UUID,
        max_length: int = 150,
    ) -> Dict[str, Any]:
        """Summarize a stored note and write the summary back onto it."""
        note = await self.notes.get(db, note_id)

        if len(note.content) < SUMMARY_MIN_INPUT:
            raise ValidationFailedError(
                message="Note content is too short to summarize. Minimum 50 characters required."
            )

        summary = _non_empty(
            await _require(completion).summarize(note.content, max_length, title=note.title)
        )
        note = await self.notes.save_summary(db, note, summary)

        logger.info(
            "Note summarized",
            extra={"note_id": str(note.id), "summary_length": len(note.summary)},
        )
        return {"note": note, "summary": note.summary, **length_metrics(note.content, note.summary)}

    async def generate_tags(
        self,
        completion: Optional[BaseCompletionService],
        text: str,
        max_tags: int = 5,
    ) -> List[str]:
        text = text.strip()
        if len(text) < TAGS_MIN_INPUT:
            raise ValidationFailedError(
                message="Text is too short for tag generation. Minimum 10 characters required."
            )
        return await _require(completion).generate_tags(text, max_tags)

    async def get_stats(self, db: AsyncSession) -> Dict[str, Any]:
        return await self.notes.get_summary_stats(db)


summarization_service = SummarizationService()
