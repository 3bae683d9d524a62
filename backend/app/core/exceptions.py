"""Application error taxonomy.

Every error raised from the service layer is a ``NoteAppError``; the handler
registered in ``app.main`` turns it into the ``{"status": "error", ...}``
envelope with the error's HTTP status code.
"""

from typing import Dict, List, Optional


class NoteAppError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class ValidationFailedError(NoteAppError):
    """Malformed or out-of-range input."""

    status_code = 400
    message = "Validation failed"

    def __init__(
        self,
        errors: Optional[List[Dict[str, str]]] = None,
        message: Optional[str] = None,
    ):
        super().__init__(message)
        self.errors = errors or []


class NoteNotFoundError(NoteAppError):
    status_code = 404
    message = "Note not found"


class InvalidNoteIdError(NoteAppError):
    status_code = 400
    message = "Invalid note ID"


class CompletionNotConfiguredError(NoteAppError):
    """The completion API credential is missing (server misconfiguration)."""

    status_code = 500
    message = "OpenAI API key not configured"


class UpstreamAuthError(NoteAppError):
    status_code = 401
    message = "Invalid OpenAI API key"


class UpstreamRateLimitedError(NoteAppError):
    status_code = 429
    message = "OpenAI API rate limit exceeded. Please try again later."


class UpstreamBadRequestError(NoteAppError):
    status_code = 400
    message = "Invalid request to OpenAI API"


class UpstreamServiceError(NoteAppError):
    """Any other completion API failure."""

    status_code = 500
    message = "Error contacting the completion service"
