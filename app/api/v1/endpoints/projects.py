from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from app.schemas.view import ProjectPage
from app.services import project_actions, view_cache
from app.services.view_pipeline import ProjectSortField, ProjectStatus, ProjectViewState, SortDirection

router = APIRouter()


@router.get("/", response_model=ProjectPage[ProjectResponse])
async def get_projects(
    search: str = Query("", description="Search text in project name"),
    status: ProjectStatus = Query(ProjectStatus.ALL, description="all, active (has notes) or inactive"),
    sort: ProjectSortField = Query(ProjectSortField.NAME),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one page of the user's projects with note counts"""
    state = ProjectViewState(
        search=search,
        status=status,
        sort_field=sort,
        sort_direction=direction,
        page=page,
        page_size=page_size,
    )
    projects = await view_cache.load_rows(db, current_user.id, view_cache.PROJECTS)
    return state.apply(projects)


@router.post("/", response_model=ProjectResponse)
async def create_project(
    project: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new project"""
    return await project_actions.create_project(db, current_user.id, project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a specific project by ID"""
    return await project_actions.get_project(db, current_user.id, project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Rename a project (only owner)"""
    return await project_actions.update_project(db, current_user.id, project_id, project_update)


@router.delete("/{project_id}")
async def delete_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a project that has no notes (only owner)"""
    await project_actions.delete_project(db, current_user.id, project_id)
    return {"message": "Project deleted"}
