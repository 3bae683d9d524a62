"""Text completion service integrations."""

from typing import Optional

from app.core.config import settings
from app.services.completion.base import BaseCompletionService, parse_tag_list
from app.services.completion.openai import OpenAICompletionService


def get_completion_service_for(api_key: Optional[str]) -> Optional[BaseCompletionService]:
    """Build the configured completion service, or None without a credential."""
    if not api_key:
        return None
    return OpenAICompletionService(
        api_key=api_key,
        api_base=settings.OPENAI_API_BASE,
        model=settings.OPENAI_MODEL,
        timeout=settings.OPENAI_TIMEOUT_SECONDS,
    )


__all__ = [
    "BaseCompletionService",
    "OpenAICompletionService",
    "get_completion_service_for",
    "parse_tag_list",
]
