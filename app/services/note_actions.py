import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound, ValidationError
from app.models.note import Note
from app.models.note_tag import note_tags
from app.models.project import Project
from app.models.tag import Tag
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from app.services import records, view_cache
from app.services.guards import require_user

logger = logging.getLogger(__name__)

AFFECTED_VIEWS = (view_cache.NOTES, view_cache.PROJECTS, view_cache.TAGS)


async def resolve_project(db: AsyncSession, project_id: Optional[int], user_id: str) -> Optional[int]:
    """Check that a referenced project belongs to the user"""
    if project_id is None:
        return None
    found = await db.scalar(
        select(Project.id).where(Project.id == project_id, Project.user_id == user_id)
    )
    if found is None:
        raise ValidationError(f"Project {project_id} does not exist")
    return project_id


async def resolve_tags(db: AsyncSession, tag_ids: List[int], user_id: str) -> List[Tag]:
    """Load referenced tags, all of which must belong to the user"""
    if not tag_ids:
        return []
    result = await db.execute(select(Tag).where(Tag.id.in_(tag_ids), Tag.user_id == user_id))
    tags = {tag.id: tag for tag in result.scalars().all()}
    missing = [tag_id for tag_id in tag_ids if tag_id not in tags]
    if missing:
        raise ValidationError(f"Unknown tag ids: {', '.join(str(tag_id) for tag_id in missing)}")
    return [tags[tag_id] for tag_id in tag_ids]


async def get_note(db: AsyncSession, user_id: str, note_id: int) -> NoteResponse:
    require_user(user_id)
    note = await records.get_note(db, note_id, user_id)
    if not note:
        raise NotFound("Note not found")
    return records.note_to_response(note)


async def create_note(db: AsyncSession, user_id: str, data: NoteCreate) -> NoteResponse:
    require_user(user_id)
    project_id = await resolve_project(db, data.project_id, user_id)
    tags = await resolve_tags(db, data.tag_ids, user_id)

    note = Note(
        title=data.title,
        content=data.content,
        date=data.date,
        project_id=project_id,
        user_id=user_id,
    )
    note.tags = tags
    db.add(note)
    await db.commit()

    # Reload with relationships and server-side timestamps
    created = await records.get_note(db, note.id, user_id)
    logger.info("Created note %s for user %s", created.id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return records.note_to_response(created)


async def update_note(db: AsyncSession, user_id: str, note_id: int, data: NoteUpdate) -> NoteResponse:
    require_user(user_id)
    note = await records.get_note(db, note_id, user_id)
    if not note:
        raise NotFound("Note not found")

    project_id = await resolve_project(db, data.project_id, user_id)
    tags = await resolve_tags(db, data.tag_ids, user_id)

    note.title = data.title
    note.content = data.content
    note.date = data.date
    note.project_id = project_id
    note.tags = tags
    await db.commit()

    updated = await records.get_note(db, note_id, user_id)
    logger.info("Updated note %s for user %s", note_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return records.note_to_response(updated)


async def delete_note(db: AsyncSession, user_id: str, note_id: int) -> None:
    require_user(user_id)
    found = await db.scalar(select(Note.id).where(Note.id == note_id, Note.user_id == user_id))
    if found is None:
        raise NotFound("Note not found")

    await db.execute(delete(note_tags).where(note_tags.c.note_id == note_id))
    await db.execute(delete(Note).where(Note.id == note_id, Note.user_id == user_id))
    await db.commit()

    logger.info("Deleted note %s for user %s", note_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
