"""API dependencies."""

from typing import Optional
from uuid import UUID

from app.core.config import settings
from app.services.completion import BaseCompletionService, get_completion_service_for
from app.services.note_service import parse_note_id


def get_completion_service() -> Optional[BaseCompletionService]:
    """Completion service, or None when no API key is configured."""
    return get_completion_service_for(settings.OPENAI_API_KEY)


def note_id_path(note_id: str) -> UUID:
    """Parse the ``note_id`` path parameter into a UUID."""
    return parse_note_id(note_id)
