"""Client-side note workspace state."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from notes_client.api import ApiError, NotesApiClient

logger = logging.getLogger(__name__)

VIEW_MODES = ("grid", "list")
FETCH_PAGE_SIZE = 100


@dataclass
class Notification:
    """A transient user-facing message."""

    level: str  # success or error
    message: str


class NoteWorkspace:
    """Holds the fetched notes and applies local search and tag filters.

    Mutations only touch local state with what the server returned; a failed
    call leaves the state as it was and queues an error notification.
    """

    def __init__(self, api: Optional[NotesApiClient] = None):
        self.api = api or NotesApiClient()
        self._notes: List[Dict[str, Any]] = []
        self.all_tags: List[str] = []
        self.search_term = ""
        self.selected_tags: List[str] = []
        self.view_mode = "grid"
        self.notifications: List[Notification] = []
        self.loading = False

    @property
    def notes(self) -> List[Dict[str, Any]]:
        return self._notes

    @notes.setter
    def notes(self, value: List[Dict[str, Any]]) -> None:
        self._notes = list(value)
        self.all_tags = self._collect_tags(self._notes)

    @staticmethod
    def _collect_tags(notes: List[Dict[str, Any]]) -> List[str]:
        tags: List[str] = []
        for note in notes:
            for tag in note.get("tags") or []:
                if tag not in tags:
                    tags.append(tag)
        return tags

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level, message))

    def _fail(self, action: str, error: ApiError) -> bool:
        logger.error(f"Error {action}: {error.status} {error.message}")
        self._notify("error", f"Failed to {action}")
        return False

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    # Local filtering

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def toggle_tag(self, tag: str) -> None:
        if tag in self.selected_tags:
            self.selected_tags = [t for t in self.selected_tags if t != tag]
        else:
            self.selected_tags = self.selected_tags + [tag]

    def clear_filters(self) -> None:
        self.search_term = ""
        self.selected_tags = []

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"view mode must be one of {VIEW_MODES}")
        self.view_mode = mode

    def matches(self, note: Dict[str, Any]) -> bool:
        term = self.search_term.lower()
        matches_search = (
            not term
            or term in (note.get("title") or "").lower()
            or term in (note.get("content") or "").lower()
        )
        note_tags = note.get("tags") or []
        matches_tags = not self.selected_tags or any(tag in note_tags for tag in self.selected_tags)
        return matches_search and matches_tags

    def filtered_notes(self) -> List[Dict[str, Any]]:
        return [note for note in self._notes if self.matches(note)]

    # Server synchronisation

    async def fetch_notes(self) -> bool:
        """Load every page of notes from the server."""
        self.loading = True
        try:
            fetched: List[Dict[str, Any]] = []
            page = 1
            while True:
                data = await self.api.list_notes(page=page, limit=FETCH_PAGE_SIZE)
                fetched.extend(data.get("notes", []))
                if not data.get("pagination", {}).get("hasNextPage"):
                    break
                page += 1
        except ApiError as e:
            return self._fail("load notes", e)
        finally:
            self.loading = False

        self.notes = fetched
        return True

    def _replace(self, note: Dict[str, Any]) -> None:
        self.notes = [note if n["id"] == note["id"] else n for n in self._notes]

    async def create_note(self, note_data: Dict[str, Any]) -> bool:
        try:
            created = await self.api.create_note(note_data)
        except ApiError as e:
            return self._fail("save note", e)
        self.notes = [created] + self._notes
        self._notify("success", "Note created successfully")
        return True

    async def update_note(self, note_id: str, changes: Dict[str, Any]) -> bool:
        try:
            updated = await self.api.update_note(note_id, changes)
        except ApiError as e:
            return self._fail("save note", e)
        self._replace(updated)
        self._notify("success", "Note updated successfully")
        return True

    async def delete_note(self, note_id: str) -> bool:
        try:
            await self.api.delete_note(note_id)
        except ApiError as e:
            return self._fail("delete note", e)
        self.notes = [n for n in self._notes if n["id"] != note_id]
        self._notify("success", "Note deleted successfully")
        return True

    async def summarize_note(self, note_id: str, max_length: Optional[int] = None) -> bool:
        try:
            data = await self.api.summarize_note(note_id, max_length)
        except ApiError as e:
            return self._fail("summarize note", e)
        self._replace(data["note"])
        self._notify("success", "Note summarized successfully")
        return True

    async def toggle_favorite(self, note_id: str) -> bool:
        try:
            updated = await self.api.toggle_favorite(note_id)
        except ApiError as e:
            return self._fail("update favorite", e)
        self._replace(updated)
        return True

    async def toggle_archive(self, note_id: str) -> bool:
        try:
            updated = await self.api.toggle_archive(note_id)
        except ApiError as e:
            return self._fail("archive note", e)
        self._replace(updated)
        return True
