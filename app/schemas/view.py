from datetime import date
from typing import Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T] = []
    total: int = 0
    page: int = 1
    page_size: int = 0
    page_count: int = 0
    has_previous: bool = False
    has_next: bool = False


class ProjectPage(Page[T], Generic[T]):
    status_counts: Dict[str, int] = {}


class ViewStatePatch(BaseModel):
    """Changes to a stored view state.

    Only the fields present in the request are applied. ``sort`` selects a
    sort field the way clicking a column header does: a new field sorts
    ascending, the current field flips direction.
    """

    search: Optional[str] = None
    tag_id: Optional[Union[int, Literal["all"]]] = None
    project_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    status: Optional[str] = None
    sort: Optional[str] = None
    page_size: Optional[int] = Field(None, ge=0, le=100)
    page: Optional[int] = Field(None, ge=1)
