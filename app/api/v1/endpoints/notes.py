from datetime import date
from typing import Literal, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.note import NoteCreate, NoteUpdate, NoteResponse
from app.schemas.view import Page
from app.services import note_actions, view_cache
from app.services.view_pipeline import ALL_TAGS, NoteSortField, NoteViewState, SortDirection

router = APIRouter()


@router.get("/", response_model=Page[NoteResponse])
async def get_notes(
    search: str = Query("", description="Search text in title and content"),
    tag_id: Union[int, Literal["all"]] = Query(ALL_TAGS, description="Tag id, or 'all'"),
    project_id: Optional[int] = Query(None, description="Only notes in this project"),
    date_from: Optional[date] = Query(None, description="Start of the date range (inclusive)"),
    date_to: Optional[date] = Query(None, description="End of the date range (inclusive)"),
    sort: NoteSortField = Query(NoteSortField.DATE),
    direction: SortDirection = Query(SortDirection.DESC),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one page of the user's notes, filtered and sorted"""
    state = NoteViewState(
        search=search,
        tag_id=tag_id,
        project_id=project_id,
        date_from=date_from,
        date_to=date_to,
        sort_field=sort,
        sort_direction=direction,
        page=page,
        page_size=page_size,
    )
    notes = await view_cache.load_rows(db, current_user.id, view_cache.NOTES)
    return state.apply(notes)


@router.post("/", response_model=NoteResponse)
async def create_note(
    note: NoteCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a new note"""
    return await note_actions.create_note(db, current_user.id, note)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a specific note by ID"""
    return await note_actions.get_note(db, current_user.id, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: int,
    note_update: NoteUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Replace a note's fields and tags (only owner)"""
    return await note_actions.update_note(db, current_user.id, note_id, note_update)


@router.delete("/{note_id}")
async def delete_note(
    note_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a note (only owner)"""
    await note_actions.delete_note(db, current_user.id, note_id)
    return {"message": "Note deleted"}
