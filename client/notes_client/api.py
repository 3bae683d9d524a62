"""HTTP client for the notes API."""

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"
# Summaries go through the completion API, so allow slow responses
REQUEST_TIMEOUT = 30.0


class ApiError(Exception):
    """A failed API call, carrying the server's message when there is one."""

    def __init__(self, message: str, status: int = -1, data: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            data = response.json()
        except ValueError:
            data = None
        message = "An error occurred"
        if isinstance(data, dict) and data.get("message"):
            message = data["message"]
        return cls(message, status=response.status_code, data=data)


class NotesApiClient:
    """Thin async wrapper over the notes REST endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or os.environ.get("NOTES_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self._transport = transport

    @property
    def root_url(self) -> str:
        """Server origin, where the health check lives."""
        url = httpx.URL(self.base_url)
        return f"{url.scheme}://{url.netloc.decode('ascii')}"

    async def _request(
        self, method: str, path: str, url: Optional[str] = None, **kwargs
    ) -> Dict[str, Any]:
        url = url or f"{self.base_url}{path}"
        logger.debug("API request %s %s", method, url)
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=REQUEST_TIMEOUT,
                headers={"Content-Type": "application/json"},
            ) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Network error calling {method} {url}: {type(e).__name__}: {e}")
            raise ApiError("Network error. Please check your connection.", status=0) from e

        if response.status_code >= 400:
            error = ApiError.from_response(response)
            logger.warning("API error %s %s: %s %s", method, url, error.status, error.message)
            raise error

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {method} {url}: {e}")
            raise ApiError("Invalid response from server", status=response.status_code) from e

    # Notes

    async def list_notes(self, **params) -> Dict[str, Any]:
        query = {key: value for key, value in params.items() if value is not None}
        body = await self._request("GET", "/notes", params=query)
        return body["data"]

    async def get_note(self, note_id: str) -> Dict[str, Any]:
        body = await self._request("GET", f"/notes/{note_id}")
        return body["data"]["note"]

    async def create_note(self, note: Dict[str, Any]) -> Dict[str, Any]:
        body = await self._request("POST", "/notes", json=note)
        return body["data"]["note"]

    async def update_note(self, note_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        body = await self._request("PUT", f"/notes/{note_id}", json=changes)
        return body["data"]["note"]

    async def delete_note(self, note_id: str) -> Dict[str, Any]:
        body = await self._request("DELETE", f"/notes/{note_id}")
        return body["data"]["deletedNote"]

    async def toggle_favorite(self, note_id: str) -> Dict[str, Any]:
        body = await self._request("PATCH", f"/notes/{note_id}/favorite")
        return body["data"]["note"]

    async def toggle_archive(self, note_id: str) -> Dict[str, Any]:
        body = await self._request("PATCH", f"/notes/{note_id}/archive")
        return body["data"]["note"]

    async def get_notes_by_category(self, category: str) -> List[Dict[str, Any]]:
        body = await self._request("GET", f"/notes/category/{quote(category, safe='')}")
        return body["data"]["notes"]

    async def list_tags(self) -> List[str]:
        body = await self._request("GET", "/notes/tags")
        return body["data"]["tags"]

    async def get_stats(self) -> Dict[str, Any]:
        body = await self._request("GET", "/notes/stats")
        return body["data"]

    # AI

    async def summarize_note(self, note_id: str, max_length: Optional[int] = None) -> Dict[str, Any]:
        payload = {"maxLength": max_length} if max_length else {}
        body = await self._request("POST", f"/ai/summarize-note/{note_id}", json=payload)
        return body["data"]

    async def summarize_text(self, text: str, max_length: Optional[int] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text": text}
        if max_length:
            payload["maxLength"] = max_length
        body = await self._request("POST", "/ai/summarize", json=payload)
        return body["data"]

    async def generate_tags(self, text: str, max_tags: Optional[int] = None) -> List[str]:
        payload: Dict[str, Any] = {"text": text}
        if max_tags:
            payload["maxTags"] = max_tags
        body = await self._request("POST", "/ai/generate-tags", json=payload)
        return body["data"]["tags"]

    async def get_ai_stats(self) -> Dict[str, Any]:
        body = await self._request("GET", "/ai/stats")
        return body["data"]

    async def health_check(self) -> Dict[str, Any]:
        """Server health; never raises."""
        try:
            data = await self._request("GET", "/health", url=f"{self.root_url}/health")
        except ApiError as e:
            return {"success": False, "error": e.message}
        return {"success": True, "data": data}
