"""Note persistence and query service."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidNoteIdError, NoteNotFoundError
from app.models.note import (
    DEFAULT_COLOR,
    Note,
    NoteCategory,
    NotePriority,
    utcnow,
)
from app.services.search import rank_notes, tokenize

logger = logging.getLogger(__name__)

CATEGORY_LIMIT = 50
RECENT_SUMMARIES_LIMIT = 5

# API sort keys -> columns
SORT_FIELDS = {
    "createdAt": Note.created_at,
    "updatedAt": Note.updated_at,
    "title": Note.title,
    "category": Note.category,
    "priority": Note.priority,
    "wordCount": Note.word_count,
    "lastSummarized": Note.last_summarized,
}


@dataclass
class NoteFilters:
    """Structured list query."""

    page: int = 1
    limit: int = 10
    search: Optional[str] = None
    category: Optional[NoteCategory] = None
    priority: Optional[NotePriority] = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"
    archived: bool = False
    favorites: bool = False

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def parse_note_id(raw: str) -> UUID:
    """Parse a path identifier, rejecting malformed ones."""
    try:
        return UUID(str(raw))
    except (ValueError, TypeError, AttributeError):
        raise InvalidNoteIdError()


def build_pagination(filters: NoteFilters, returned: int, total: int) -> Dict[str, Any]:
    return {
        "current_page": filters.page,
        "total_pages": math.ceil(total / filters.limit) if filters.limit else 0,
        "total_notes": total,
        "has_next_page": filters.skip + returned < total,
        "has_prev_page": filters.page > 1,
    }


class NoteService:
    """Create, query and mutate notes."""

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Note:
        """Create a note, applying defaults and keyword tags."""
        note = Note(
            title=data["title"],
            content=data["content"],
            tags=data.get("tags") or [],
            category=data.get("category") or NoteCategory.OTHER,
            priority=data.get("priority") or NotePriority.MEDIUM,
            color=data.get("color") or DEFAULT_COLOR,
            user_id=data.get("user_id"),
        )
        note.apply_auto_tags()

        db.add(note)
        await db.commit()
        await db.refresh(note)

        logger.info("Note created", extra={"note_id": str(note.id)})
        return note

    async def get(self, db: AsyncSession, note_id: UUID) -> Note:
        result = await db.execute(select(Note).where(Note.id == note_id))
        note = result.scalar_one_or_none()
        if not note:
            raise NoteNotFoundError()
        return note

    async def update(self, db: AsyncSession, note_id: UUID, changes: Dict[str, Any]) -> Note:
        """Replace the supplied fields only."""
        note = await self.get(db, note_id)

        for field, value in changes.items():
            if value is None:
                continue
            setattr(note, field, value)

        if "content" in changes and changes["content"] is not None:
            note.apply_auto_tags()
        note.updated_at = utcnow()

        await db.commit()
        await db.refresh(note)
        return note

    async def delete(self, db: AsyncSession, note_id: UUID) -> Note:
        """Delete a note and return the removed record."""
        note = await self.get(db, note_id)
        await db.delete(note)
        await db.commit()

        logger.info("Note deleted", extra={"note_id": str(note_id)})
        return note

    async def toggle_favorite(self, db: AsyncSession, note_id: UUID) -> Note:
        note = await self.get(db, note_id)
        note.is_favorite = not note.is_favorite
        await db.commit()
        await db.refresh(note)
        return note

    async def toggle_archive(self, db: AsyncSession, note_id: UUID) -> Note:
        note = await self.get(db, note_id)
        note.is_archived = not note.is_archived
        await db.commit()
        await db.refresh(note)
        return note

    async def save_summary(self, db: AsyncSession, note: Note, summary: str) -> Note:
        note.set_summary(summary)
        await db.commit()
        await db.refresh(note)
        return note

    async def search(self, db: AsyncSession, query: str) -> List[Note]:
        """Ranked full-text search over non-archived notes."""
        terms = tokenize(query)
        if not terms:
            return []

        stmt = select(Note).where(Note.is_archived == False)  # noqa: E712
        # SQLite only case-folds ASCII in LIKE, so other terms scan every row
        if all(term.isascii() for term in terms):
            columns = (Note.title, Note.content, cast(Note.tags, String))
            conditions = [column.ilike(f"%{term}%") for term in terms for column in columns]
            stmt = stmt.where(or_(*conditions))

        result = await db.execute(stmt)
        return rank_notes(result.scalars().all(), query)

    async def list_notes(
        self, db: AsyncSession, filters: NoteFilters
    ) -> Tuple[List[Note], int]:
        """Filter, sort and paginate notes. Returns the page and the total count."""
        if filters.search:
            ranked = await self.search(db, filters.search)
            return ranked[filters.skip:filters.skip + filters.limit], len(ranked)

        conditions = [Note.is_archived == filters.archived]
        if filters.category:
            conditions.append(Note.category == filters.category)
        if filters.priority:
            conditions.append(Note.priority == filters.priority)
        if filters.favorites:
            conditions.append(Note.is_favorite == True)  # noqa: E712

        total_result = await db.execute(
            select(func.count(Note.id)).where(*conditions)
        )
        total = total_result.scalar_one()

        sort_column = SORT_FIELDS[filters.sort_by]
        ordering = sort_column.asc() if filters.sort_order == "asc" else sort_column.desc()

        result = await db.execute(
            select(Note)
            .where(*conditions)
            .order_by(ordering, Note.id)
            .offset(filters.skip)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total

    async def get_by_category(self, db: AsyncSession, category: NoteCategory) -> List[Note]:
        """Newest non-archived notes of one category."""
        result = await db.execute(
            select(Note)
            .where(Note.category == category, Note.is_archived == False)  # noqa: E712
            .order_by(Note.created_at.desc())
            .limit(CATEGORY_LIMIT)
        )
        return list(result.scalars().all())

    async def list_tags(self, db: AsyncSession) -> List[str]:
        """All unique tags in use."""
        result = await db.execute(select(Note.tags))
        all_tags = set()
        for tags in result.scalars().all():
            all_tags.update(tags or [])
        return sorted(all_tags)

    async def get_stats(self, db: AsyncSession) -> Dict[str, Any]:
        """Overview aggregate and per-category counts of non-archived notes."""
        overview_result = await db.execute(
            select(
                func.count(Note.id),
                func.coalesce(func.sum(case((Note.is_archived == True, 1), else_=0)), 0),  # noqa: E712
                func.coalesce(func.sum(case((Note.is_favorite == True, 1), else_=0)), 0),  # noqa: E712
                func.coalesce(func.sum(Note.word_count), 0),
                func.avg(Note.word_count),
            )
        )
        total, archived, favorites, total_words, avg_words = overview_result.one()

        count_col = func.count(Note.id).label("count")
        category_result = await db.execute(
            select(Note.category, count_col)
            .where(Note.is_archived == False)  # noqa: E712
            .group_by(Note.category)
            .order_by(count_col.desc())
        )

        return {
            "overview": {
                "total_notes": total,
                "archived_notes": int(archived),
                "favorite_notes": int(favorites),
                "total_words": int(total_words),
                "avg_words_per_note": round(float(avg_words or 0), 1),
            },
            "category_breakdown": [
                {"category": category, "count": count}
                for category, count in category_result.all()
            ],
        }

    async def get_summary_stats(self, db: AsyncSession) -> Dict[str, Any]:
        """How many notes carry a summary, and the latest ones."""
        summarized_result = await db.execute(
            select(func.count(Note.id)).where(Note.summary.isnot(None), Note.summary != "")
        )
        summarized = summarized_result.scalar_one()

        total_result = await db.execute(select(func.count(Note.id)))
        total = total_result.scalar_one()

        recent_result = await db.execute(
            select(Note.id, Note.title, Note.last_summarized)
            .where(Note.last_summarized.isnot(None))
            .order_by(Note.last_summarized.desc())
            .limit(RECENT_SUMMARIES_LIMIT)
        )

        return {
            "summarized_notes": summarized,
            "total_notes": total,
            "summarization_rate": round(summarized / total * 100, 1) if total else 0.0,
            "recent_summaries": [
                {"id": note_id, "title": title, "last_summarized": last_summarized}
                for note_id, title, last_summarized in recent_result.all()
            ],
        }


note_service = NoteService()
