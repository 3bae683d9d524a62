"""OpenAI chat completion service."""

import logging
from typing import List, Optional

import httpx

from app.core.exceptions import (
    UpstreamAuthError,
    UpstreamBadRequestError,
    UpstreamRateLimitedError,
    UpstreamServiceError,
)
from app.services.completion.base import BaseCompletionService, parse_tag_list

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, informative summaries. "
    "Summarize the given {subject} in {max_length} characters or less. "
    "Focus on the key points and main ideas. "
    "Make it clear and well-structured."
)

TAGS_SYSTEM_PROMPT = (
    "You are a helpful assistant that generates relevant tags for text content. "
    "Generate up to {max_tags} relevant, concise tags (1-2 words each) for the given text. "
    "Return only the tags separated by commas, nothing else. "
    "Focus on key topics, themes, and categories."
)


class OpenAICompletionService(BaseCompletionService):
    """Completion capability backed by an OpenAI compatible chat API."""

    TEMPERATURE = 0.3
    TAGS_MAX_TOKENS = 50

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return f"openai:{self.model}"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map completion API failures onto application errors."""
        status = response.status_code
        if status < 400:
            return

        logger.warning(
            "Completion API error",
            extra={"provider": self.provider_name, "status": status},
        )
        if status in (401, 403):
            raise UpstreamAuthError()
        if status == 429:
            raise UpstreamRateLimitedError()
        if status == 400:
            raise UpstreamBadRequestError()
        raise UpstreamServiceError(detail=f"Completion API returned {status}")

    async def _complete(self, system: str, user: str, max_tokens: int) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "max_tokens": max_tokens,
            "temperature": self.TEMPERATURE,
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self.api_base}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logger.error(f"Completion API request failed: {type(e).__name__}: {e}")
            raise UpstreamServiceError(detail=str(e)) from e

        self._raise_for_status(response)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected completion payload: {type(e).__name__}: {e}")
            raise UpstreamServiceError(detail="Malformed completion response") from e

        return (content or "").strip()

    async def summarize(
        self, text: str, max_length: int, title: Optional[str] = None
    ) -> str:
        if title:
            system = SUMMARY_SYSTEM_PROMPT.format(subject="note content", max_length=max_length)
            user = f'Please summarize this note titled "{title}": {text}'
        else:
            system = SUMMARY_SYSTEM_PROMPT.format(subject="text", max_length=max_length)
            user = f"Please summarize this text: {text}"

        # Roughly 2 characters per token
        return await self._complete(system, user, max_tokens=max_length // 2)

    async def generate_tags(self, text: str, max_tags: int) -> List[str]:
        system = TAGS_SYSTEM_PROMPT.format(max_tags=max_tags)
        raw = await self._complete(
            system, f"Generate tags for this text: {text}", max_tokens=self.TAGS_MAX_TOKENS
        )
        return parse_tag_list(raw, max_tags)
