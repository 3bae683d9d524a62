"""Note model."""

import enum
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Integer, String, Text, Uuid
from sqlalchemy.orm import validates

from app.core.exceptions import ValidationFailedError
from app.models import Base

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 10000
SUMMARY_MAX_LENGTH = 500
TAG_MAX_LENGTH = 30
DEFAULT_COLOR = "#ffffff"
COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"
WORDS_PER_MINUTE = 200

# (keywords, tag) pairs, checked in order against lower-cased content
AUTO_TAG_RULES = (
    (("meeting", "call"), "meeting"),
    (("todo", "task"), "task"),
    (("idea", "brainstorm"), "idea"),
    (("project",), "project"),
    (("deadline", "due"), "deadline"),
)


class NoteCategory(str, enum.Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    STUDY = "Study"
    IDEAS = "Ideas"
    TASKS = "Tasks"
    OTHER = "Other"


class NotePriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def count_words(content: Optional[str]) -> int:
    """Number of whitespace separated tokens."""
    if not content:
        return 0
    return len(content.split())


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Strip tags, drop empty ones and remove duplicates keeping first occurrence."""
    result: List[str] = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in result:
            result.append(tag)
    return result


def auto_tags(content: str) -> List[str]:
    """Keyword-derived tags for a piece of content."""
    lowered = content.lower()
    return [
        tag
        for keywords, tag in AUTO_TAG_RULES
        if any(keyword in lowered for keyword in keywords)
    ]


def _invalid(field: str, message: str) -> None:
    raise ValidationFailedError(errors=[{"field": field, "message": message}])


class Note(Base):
    __tablename__ = "notes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Owner reference for future multi-user support; not enforced
    user_id = Column(Uuid, nullable=True, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(String(SUMMARY_MAX_LENGTH), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    category = Column(Enum(NoteCategory), default=NoteCategory.OTHER, nullable=False, index=True)
    priority = Column(Enum(NotePriority), default=NotePriority.MEDIUM, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)
    is_favorite = Column(Boolean, default=False, nullable=False)
    color = Column(String(7), default=DEFAULT_COLOR, nullable=False)
    word_count = Column(Integer, default=0, nullable=False)
    last_summarized = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    @validates("title")
    def _validate_title(self, key, title):
        title = (title or "").strip()
        if not title:
            _invalid("title", "Note title is required")
        if len(title) > TITLE_MAX_LENGTH:
            _invalid("title", f"Title cannot be more than {TITLE_MAX_LENGTH} characters")
        return title

    @validates("content")
    def _set_word_count(self, key, content):
        if not content or not content.strip():
            _invalid("content", "Note content is required")
        if len(content) > CONTENT_MAX_LENGTH:
            _invalid("content", f"Content cannot be more than {CONTENT_MAX_LENGTH} characters")
        self.word_count = count_words(content)
        return content

    @validates("tags")
    def _normalize_tags(self, key, tags):
        tags = normalize_tags(tags)
        for tag in tags:
            if len(tag) > TAG_MAX_LENGTH:
                _invalid("tags", f"Tag cannot be more than {TAG_MAX_LENGTH} characters")
        return tags

    @validates("color")
    def _validate_color(self, key, color):
        if color is None or not re.match(COLOR_PATTERN, color):
            _invalid("color", "Please provide a valid hex color")
        return color

    @validates("category", "priority")
    def _coerce_enum(self, key, value):
        enum_cls = NoteCategory if key == "category" else NotePriority
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            _invalid(key, f"{key} must be one of: {allowed}")

    @property
    def reading_time(self) -> int:
        """Estimated reading time in minutes."""
        return math.ceil((self.word_count or 0) / WORDS_PER_MINUTE)

    def apply_auto_tags(self) -> None:
        """Add keyword tags when the note has none."""
        if self.tags:
            return
        self.tags = normalize_tags(list(self.tags or []) + auto_tags(self.content or ""))

    def set_summary(self, summary: str) -> None:
        summary = (summary or "").strip()
        if not summary:
            _invalid("summary", "Summary cannot be empty")
        self.summary = summary[:SUMMARY_MAX_LENGTH]
        self.last_summarized = utcnow()
