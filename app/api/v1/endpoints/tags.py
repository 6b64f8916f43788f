from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.tag import TagCreate, TagUpdate, TagResponse
from app.schemas.view import Page
from app.services import tag_actions, view_cache
from app.services.view_pipeline import SortDirection, TagSortField, TagViewState

router = APIRouter()


@router.get("/", response_model=Page[TagResponse])
async def get_tags(
    search: str = Query("", description="Search text in tag name"),
    sort: TagSortField = Query(TagSortField.NAME),
    direction: SortDirection = Query(SortDirection.ASC),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one page of the user's tags with note counts"""
    state = TagViewState(
        search=search,
        sort_field=sort,
        sort_direction=direction,
        page=page,
        page_size=page_size,
    )
    tags = await view_cache.load_rows(db, current_user.id, view_cache.TAGS)
    return state.apply(tags)


@router.post("/", response_model=TagResponse)
async def create_tag(
    tag: TagCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new tag"""
    return await tag_actions.create_tag(db, current_user.id, tag)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a specific tag by ID"""
    return await tag_actions.get_tag(db, current_user.id, tag_id)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    tag_update: TagUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Rename a tag (only owner)"""
    return await tag_actions.update_tag(db, current_user.id, tag_id, tag_update)


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a tag that is not attached to any note (only owner)"""
    await tag_actions.delete_tag(db, current_user.id, tag_id)
    return {"message": "Tag deleted"}
