from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.view import ViewStatePatch
from app.services import view_cache
from app.services.view_pipeline import NoteViewState, ProjectViewState, ViewState

router = APIRouter()


def apply_patch(state: ViewState, patch: ViewStatePatch) -> None:
    """Apply filter, sort and page-size changes in the order a list screen would"""
    changes = patch.model_fields_set
    note_only = {"tag_id", "project_id", "date_from", "date_to"} & changes
    if note_only and not isinstance(state, NoteViewState):
        raise ValidationError(f"Unsupported filters for this view: {', '.join(sorted(note_only))}")
    if "status" in changes and not isinstance(state, ProjectViewState):
        raise ValidationError("Status filter is only available for projects")

    if "search" in changes:
        state.set_search(patch.search)
    if "tag_id" in changes:
        state.set_tag(patch.tag_id if patch.tag_id is not None else "all")
    if "project_id" in changes:
        state.set_project(patch.project_id)
    if {"date_from", "date_to"} & changes:
        state.set_date_range(
            patch.date_from if "date_from" in changes else state.date_from,
            patch.date_to if "date_to" in changes else state.date_to,
        )
    try:
        if "status" in changes and patch.status is not None:
            state.set_status(patch.status)
        if "sort" in changes and patch.sort is not None:
            state.toggle_sort(patch.sort)
    except ValueError as e:
        raise ValidationError(str(e))
    if "page_size" in changes and patch.page_size is not None:
        state.set_page_size(patch.page_size)


@router.get("/{view}")
async def get_view(
    view: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> Dict[str, Any]:
    """Render the current page of a view using its stored state"""
    state = await view_cache.load_state(current_user.id, view)
    rows = await view_cache.load_rows(db, current_user.id, view)
    page = state.apply(rows)
    return {"state": state.model_dump(mode="json"), **page.model_dump(mode="json")}


@router.get("/{view}/state")
async def get_view_state(
    view: str,
    current_user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    """Get the stored filter, sort and page controls of a view"""
    state = await view_cache.load_state(current_user.id, view)
    return state.model_dump(mode="json")


@router.patch("/{view}/state")
async def update_view_state(
    view: str,
    patch: ViewStatePatch,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> Dict[str, Any]:
    """Change the controls of a view"""
    state = await view_cache.load_state(current_user.id, view)
    apply_patch(state, patch)
    if patch.page is not None:
        # Clamp against the rows the new filters leave
        rows = await view_cache.load_rows(db, current_user.id, view)
        state.go_to_page(patch.page, len(state.filter(rows)))
    await view_cache.save_state(current_user.id, view, state)
    return state.model_dump(mode="json")


@router.post("/{view}/reset")
async def reset_view_state(
    view: str,
    current_user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    """Restore a view's controls to their defaults"""
    state = await view_cache.load_state(current_user.id, view)
    state.reset()
    await view_cache.save_state(current_user.id, view, state)
    return state.model_dump(mode="json")
