"""Ownership-scoped reads from the record store."""
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.note import Note
from app.models.note_tag import note_tags
from app.models.project import Project
from app.models.tag import Tag
from app.schemas.note import NoteResponse
from app.schemas.project import ProjectResponse
from app.schemas.tag import TagResponse


def note_to_response(note: Note) -> NoteResponse:
    return NoteResponse.model_validate(note)


def project_to_response(project: Project, note_count: int) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        user_id=project.user_id,
        name=project.name,
        note_count=note_count or 0,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


def tag_to_response(tag: Tag, note_count: int) -> TagResponse:
    return TagResponse(
        id=tag.id,
        user_id=tag.user_id,
        name=tag.name,
        note_count=note_count or 0,
        created_at=tag.created_at,
        updated_at=tag.updated_at,
    )


def _projects_with_counts(user_id: str):
    return (
        select(Project, func.count(Note.id))
        .outerjoin(Note, Note.project_id == Project.id)
        .where(Project.user_id == user_id)
        .group_by(Project.id)
    )


def _tags_with_counts(user_id: str):
    return (
        select(Tag, func.count(note_tags.c.note_id))
        .outerjoin(note_tags, note_tags.c.tag_id == Tag.id)
        .where(Tag.user_id == user_id)
        .group_by(Tag.id)
    )


async def fetch_notes(db: AsyncSession, user_id: str) -> List[NoteResponse]:
    """All of a user's notes, newest date first"""
    result = await db.execute(
        select(Note)
        .options(selectinload(Note.tags), selectinload(Note.project))
        .where(Note.user_id == user_id)
        .order_by(Note.date.desc(), Note.id.desc())
    )
    return [note_to_response(note) for note in result.scalars().all()]


async def fetch_projects(db: AsyncSession, user_id: str) -> List[ProjectResponse]:
    result = await db.execute(_projects_with_counts(user_id).order_by(Project.name, Project.id))
    return [project_to_response(project, count) for project, count in result.all()]


async def fetch_tags(db: AsyncSession, user_id: str) -> List[TagResponse]:
    result = await db.execute(_tags_with_counts(user_id).order_by(Tag.name, Tag.id))
    return [tag_to_response(tag, count) for tag, count in result.all()]


async def get_note(db: AsyncSession, note_id: int, user_id: str) -> Optional[Note]:
    result = await db.execute(
        select(Note)
        .options(selectinload(Note.tags), selectinload(Note.project))
        .where(Note.id == note_id, Note.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_project(db: AsyncSession, project_id: int, user_id: str) -> Optional[ProjectResponse]:
    result = await db.execute(
        _projects_with_counts(user_id)
        .where(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    row = result.first()
    if row is None:
        return None
    return project_to_response(row[0], row[1])


async def get_tag(db: AsyncSession, tag_id: int, user_id: str) -> Optional[TagResponse]:
    result = await db.execute(
        _tags_with_counts(user_id)
        .where(Tag.id == tag_id)
        .execution_options(populate_existing=True)
    )
    row = result.first()
    if row is None:
        return None
    return tag_to_response(row[0], row[1])
