"""Notes endpoints."""

from typing import Optional, Type, TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import note_id_path
from app.core.database import get_db
from app.core.exceptions import ValidationFailedError
from app.models.note import NoteCategory, NotePriority
from app.schemas.common import ApiResponse
from app.schemas.note import (
    CategoryNotesData,
    DeletedNoteData,
    NoteCreate,
    NoteData,
    NoteListData,
    NoteResponse,
    NoteStatsData,
    NoteUpdate,
    TagListData,
)
from app.services.note_service import (
    SORT_FIELDS,
    NoteFilters,
    build_pagination,
    note_service,
)

router = APIRouter()

E = TypeVar("E")

SORT_BY_PATTERN = "^(" + "|".join(SORT_FIELDS) + ")$"


def _enum_filter(enum_cls: Type[E], value: Optional[str], field: str) -> Optional[E]:
    """Parse an optional enum query value; "All" means no filter."""
    if not value or value == "All":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationFailedError(
            errors=[{"field": field, "message": f"{field} must be one of: {allowed}"}]
        )


@router.get("/stats", response_model=ApiResponse[NoteStatsData])
async def get_notes_stats(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteStatsData]:
    """Get note statistics."""
    stats = await note_service.get_stats(db)
    return ApiResponse(data=NoteStatsData.model_validate(stats))


@router.get("/tags", response_model=ApiResponse[TagListData])
async def list_tags(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[TagListData]:
    """List all unique tags used in notes."""
    tags = await note_service.list_tags(db)
    return ApiResponse(data=TagListData(tags=tags))


@router.get("/category/{category}", response_model=ApiResponse[CategoryNotesData])
async def get_notes_by_category(
    category: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CategoryNotesData]:
    """Newest non-archived notes of a category."""
    parsed = _enum_filter(NoteCategory, category, "category")
    if parsed is None:
        raise ValidationFailedError(
            errors=[{"field": "category", "message": "A specific category is required"}]
        )
    notes = await note_service.get_by_category(db, parsed)
    return ApiResponse(
        data=CategoryNotesData(
            category=parsed,
            notes=[NoteResponse.model_validate(n) for n in notes],
        )
    )


@router.get("", response_model=ApiResponse[NoteListData])
async def list_notes(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    category: Optional[str] = None,
    priority: Optional[str] = None,
    sort_by: str = Query("createdAt", alias="sortBy", pattern=SORT_BY_PATTERN),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    archived: bool = False,
    favorites: bool = False,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteListData]:
    """List notes with search, filtering, sorting and pagination."""
    filters = NoteFilters(
        page=page,
        limit=limit,
        search=search.strip() if search and search.strip() else None,
        category=_enum_filter(NoteCategory, category, "category"),
        priority=_enum_filter(NotePriority, priority, "priority"),
        sort_by=sort_by,
        sort_order=sort_order,
        archived=archived,
        favorites=favorites,
    )
    notes, total = await note_service.list_notes(db, filters)

    return ApiResponse(
        data=NoteListData.model_validate(
            {
                "notes": [NoteResponse.model_validate(n) for n in notes],
                "pagination": build_pagination(filters, len(notes), total),
            }
        )
    )


@router.post("", response_model=ApiResponse[NoteData], status_code=status.HTTP_201_CREATED)
async def create_note(
    note_in: NoteCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteData]:
    """Create a new note."""
    note = await note_service.create(db, note_in.model_dump())
    return ApiResponse(
        message="Note created successfully",
        data=NoteData(note=NoteResponse.model_validate(note)),
    )


@router.get("/{note_id}", response_model=ApiResponse[NoteData])
async def get_note(
    note_id: UUID = Depends(note_id_path),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteData]:
    """Get a specific note."""
    note = await note_service.get(db, note_id)
    return ApiResponse(data=NoteData(note=NoteResponse.model_validate(note)))


@router.put("/{note_id}", response_model=ApiResponse[NoteData])
async def update_note(
    note_in: NoteUpdate,
    note_id: UUID = Depends(note_id_path),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteData]:
    """Update the supplied fields of a note."""
    note = await note_service.update(db, note_id, note_in.model_dump(exclude_unset=True))
    return ApiResponse(
        message="Note updated successfully",
        data=NoteData(note=NoteResponse.model_validate(note)),
    )


@router.delete("/{note_id}", response_model=ApiResponse[DeletedNoteData])
async def delete_note(
    note_id: UUID = Depends(note_id_path),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DeletedNoteData]:
    """Delete a note and return it."""
    note = await note_service.delete(db, note_id)
    return ApiResponse(
        message="Note deleted successfully",
        data=DeletedNoteData(deleted_note=NoteResponse.model_validate(note)),
    )


@router.patch("/{note_id}/favorite", response_model=ApiResponse[NoteData])
async def toggle_favorite(
    note_id: UUID = Depends(note_id_path),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteData]:
    """Toggle the favorite flag."""
    note = await note_service.toggle_favorite(db, note_id)
    state = "added to" if note.is_favorite else "removed from"
    return ApiResponse(
        message=f"Note {state} favorites",
        data=NoteData(note=NoteResponse.model_validate(note)),
    )


@router.patch("/{note_id}/archive", response_model=ApiResponse[NoteData])
async def toggle_archive(
    note_id: UUID = Depends(note_id_path),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NoteData]:
    """Toggle the archived flag."""
    note = await note_service.toggle_archive(db, note_id)
    state = "archived" if note.is_archived else "unarchived"
    return ApiResponse(
        message=f"Note {state} successfully",
        data=NoteData(note=NoteResponse.model_validate(note)),
    )
