"""Python client and workspace state for the SmartNotes API."""

from notes_client.api import ApiError, NotesApiClient
from notes_client.workspace import NoteWorkspace, Notification

__all__ = ["ApiError", "NotesApiClient", "NoteWorkspace", "Notification"]
