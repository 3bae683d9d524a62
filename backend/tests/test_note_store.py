"""Note store tests calling the service layer directly."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationFailedError
from app.models.note import Note, NoteCategory
from app.services.note_service import note_service

VALID = {"title": "Store note", "content": "Plain body text"}


async def _count(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Note.id)))
    return result.scalar_one()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"title": ""}, "title"),
        ({"title": "   "}, "title"),
        ({"title": "t" * 101}, "title"),
        ({"content": "   "}, "content"),
        ({"content": "c" * 10001}, "content"),
        ({"color": "red"}, "color"),
        ({"tags": ["x" * 31]}, "tags"),
        ({"category": "Hobby"}, "category"),
        ({"priority": "Urgent"}, "priority"),
    ],
)
async def test_create_rejects_invalid_fields(db_session: AsyncSession, overrides, field):
    with pytest.raises(ValidationFailedError) as exc_info:
        await note_service.create(db_session, {**VALID, **overrides})
    assert exc_info.value.errors[0]["field"] == field
    assert await _count(db_session) == 0


@pytest.mark.asyncio
async def test_create_trims_title_and_coerces_enums(db_session: AsyncSession):
    note = await note_service.create(
        db_session, {**VALID, "title": "  Padded  ", "category": "Work", "tags": [" a ", "a"]}
    )
    assert note.title == "Padded"
    assert note.category is NoteCategory.WORK
    assert note.tags == ["a"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes",
    [{"title": ""}, {"content": " "}, {"color": "#12"}, {"tags": ["y" * 40]}],
)
async def test_update_rejects_invalid_fields(db_session: AsyncSession, changes):
    note = await note_service.create(db_session, {**VALID, "tags": ["keep"]})

    with pytest.raises(ValidationFailedError):
        await note_service.update(db_session, note.id, changes)
    await db_session.rollback()

    stored = await note_service.get(db_session, note.id)
    assert stored.title == VALID["title"]
    assert stored.content == VALID["content"]
    assert stored.color == "#ffffff"
    assert stored.tags == ["keep"]


@pytest.mark.asyncio
async def test_empty_summary_not_saved(db_session: AsyncSession):
    note = await note_service.create(db_session, VALID)

    with pytest.raises(ValidationFailedError):
        await note_service.save_summary(db_session, note, "   ")
    assert note.summary is None
    assert note.last_summarized is None


@pytest.mark.asyncio
async def test_search_narrows_and_ranks(db_session: AsyncSession):
    await note_service.create(db_session, {"title": "Deploy", "content": "cluster upgrade", "tags": ["Kubernetes"]})
    await note_service.create(db_session, {"title": "Groceries", "content": "milk and bread"})
    await note_service.create(db_session, {"title": "Pods", "content": "kubernetes kubernetes pods"})

    results = await note_service.search(db_session, "KUBERNETES")
    assert [note.title for note in results] == ["Pods", "Deploy"]


@pytest.mark.asyncio
async def test_search_non_ascii_terms(db_session: AsyncSession):
    await note_service.create(db_session, {"title": "Dessert", "content": "Crème brûlée recipe"})

    results = await note_service.search(db_session, "BRÛLÉE")
    assert [note.title for note in results] == ["Dessert"]


@pytest.mark.asyncio
async def test_search_substring_is_not_a_match(db_session: AsyncSession):
    await note_service.create(db_session, {"title": "Rustic", "content": "farmhouse table"})

    assert await note_service.search(db_session, "rust") == []
