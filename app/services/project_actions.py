import logging

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.models.project import Project
from app.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from app.services import records, view_cache
from app.services.guards import require_user, still_referenced

logger = logging.getLogger(__name__)

# Notes embed the project name
AFFECTED_VIEWS = (view_cache.PROJECTS, view_cache.NOTES)


async def get_project(db: AsyncSession, user_id: str, project_id: int) -> ProjectResponse:
    require_user(user_id)
    project = await records.get_project(db, project_id, user_id)
    if not project:
        raise NotFound("Project not found")
    return project


async def create_project(db: AsyncSession, user_id: str, data: ProjectCreate) -> ProjectResponse:
    require_user(user_id)
    project = Project(name=data.name, user_id=user_id)
    db.add(project)
    await db.commit()

    created = await records.get_project(db, project.id, user_id)
    logger.info("Created project %s for user %s", created.id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return created


async def update_project(
    db: AsyncSession, user_id: str, project_id: int, data: ProjectUpdate
) -> ProjectResponse:
    require_user(user_id)
    result = await db.execute(
        update(Project)
        .where(Project.id == project_id, Project.user_id == user_id)
        .values(name=data.name)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Project not found")
    await db.commit()

    updated = await records.get_project(db, project_id, user_id)
    logger.info("Updated project %s for user %s", project_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return updated


async def delete_project(db: AsyncSession, user_id: str, project_id: int) -> None:
    require_user(user_id)
    project = await records.get_project(db, project_id, user_id)
    if not project:
        raise NotFound("Project not found")
    if project.note_count > 0:
        raise still_referenced("project", project.note_count)

    await db.execute(delete(Project).where(Project.id == project_id, Project.user_id == user_id))
    await db.commit()

    logger.info("Deleted project %s for user %s", project_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
