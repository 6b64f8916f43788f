"""In-memory filter, sort and paginate for the notes, projects and tags lists.

Every list view runs the same three steps in a fixed order over records that
are already scoped to the current user:

1. filter - keep records for which every active predicate holds
2. sort - one key, one direction, stable for equal keys
3. paginate - the 1-based ``[(page - 1) * size, page * size)`` window

The state objects carry the controls of one view and apply the transitions a
list screen makes: changing a filter or the page size goes back to page 1,
choosing the current sort field again flips the direction, choosing another
field sorts ascending.
"""
import math
import unicodedata
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Literal, Optional, Sequence, Type, Union

from pydantic import BaseModel

from app.schemas.view import Page, ProjectPage

ALL_TAGS = "all"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NoteSortField(str, Enum):
    TITLE = "title"
    DATE = "date"
    PROJECT = "project"


class ProjectSortField(str, Enum):
    NAME = "name"
    NOTES = "notes"
    DATE = "date"


class TagSortField(str, Enum):
    NAME = "name"
    NOTES = "notes"


class ProjectStatus(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


def collation_key(value: Optional[str]) -> tuple:
    """Sort key for display strings: accents and case folded, raw value breaks ties."""
    value = value or ""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), value)


def calendar_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def contains(text: Optional[str], term: str) -> bool:
    return term.casefold() in (text or "").casefold()


def page_count(total: int, page_size: int) -> int:
    if total <= 0 or page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def paginate(records: Sequence[Any], page: int, page_size: int) -> List[Any]:
    if page < 1 or page_size <= 0:
        return []
    start = (page - 1) * page_size
    return list(records[start:start + page_size])


def sort_records(
    records: Iterable[Any], key: Callable[[Any], Any], direction: SortDirection
) -> List[Any]:
    # sorted() keeps equal keys in input order in both directions
    return sorted(records, key=key, reverse=direction == SortDirection.DESC)


def filter_notes(
    notes: Iterable[Any],
    search: str = "",
    tag_id: Union[int, str] = ALL_TAGS,
    project_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Any]:
    result = []
    for note in notes:
        if search and not (contains(note.title, search) or contains(note.content, search)):
            continue
        if tag_id != ALL_TAGS and not any(tag.id == tag_id for tag in note.tags):
            continue
        if project_id is not None and note.project_id != project_id:
            continue
        # A half-open range does not constrain anything. Bounds are whole days,
        # so a note late on date_to is still inside the range.
        if date_from is not None and date_to is not None:
            if not date_from <= calendar_date(note.date) <= date_to:
                continue
        result.append(note)
    return result


def filter_projects(
    projects: Iterable[Any], search: str = "", status: ProjectStatus = ProjectStatus.ALL
) -> List[Any]:
    result = []
    for project in projects:
        if search and not contains(project.name, search):
            continue
        if status == ProjectStatus.ACTIVE and project.note_count == 0:
            continue
        if status == ProjectStatus.INACTIVE and project.note_count > 0:
            continue
        result.append(project)
    return result


def filter_tags(tags: Iterable[Any], search: str = "") -> List[Any]:
    return [tag for tag in tags if not search or contains(tag.name, search)]


def project_status_counts(projects: Sequence[Any]) -> Dict[str, int]:
    active = sum(1 for project in projects if project.note_count > 0)
    return {
        ProjectStatus.ALL.value: len(projects),
        ProjectStatus.ACTIVE.value: active,
        ProjectStatus.INACTIVE.value: len(projects) - active,
    }


NOTE_SORT_KEYS = {
    NoteSortField.TITLE: lambda note: collation_key(note.title),
    NoteSortField.DATE: lambda note: note.date,
    NoteSortField.PROJECT: lambda note: collation_key(note.project.name if note.project else ""),
}

PROJECT_SORT_KEYS = {
    ProjectSortField.NAME: lambda project: collation_key(project.name),
    ProjectSortField.NOTES: lambda project: project.note_count,
    ProjectSortField.DATE: lambda project: project.created_at,
}

TAG_SORT_KEYS = {
    TagSortField.NAME: lambda tag: collation_key(tag.name),
    TagSortField.NOTES: lambda tag: tag.note_count,
}


class ViewState(BaseModel):
    """Controls of one list view. Subclasses set the filters and defaults."""

    class Config:
        validate_assignment = True

    sort_fields: ClassVar[Type[Enum]]
    sort_keys: ClassVar[Dict[Any, Callable[[Any], Any]]]

    search: str = ""
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = 10

    def set_search(self, text: Optional[str]) -> None:
        self.search = text or ""
        self.page = 1

    def toggle_sort(self, field: Union[str, Enum]) -> None:
        field = self.sort_fields(field)
        if field == self.sort_field:
            self.sort_direction = (
                SortDirection.DESC if self.sort_direction == SortDirection.ASC else SortDirection.ASC
            )
        else:
            self.sort_field = field
            self.sort_direction = SortDirection.ASC

    def set_page_size(self, page_size: int) -> None:
        if page_size < 0:
            raise ValueError("page size must not be negative")
        self.page_size = page_size
        self.page = 1

    def go_to_page(self, page: int, total: int) -> None:
        last = max(page_count(total, self.page_size), 1)
        self.page = min(max(page, 1), last)

    def reset(self) -> None:
        defaults = type(self)()
        for name in type(self).model_fields:
            setattr(self, name, getattr(defaults, name))

    def filter(self, records: Iterable[Any]) -> List[Any]:
        raise NotImplementedError

    def sort(self, records: Iterable[Any]) -> List[Any]:
        return sort_records(records, self.sort_keys[self.sort_fields(self.sort_field)], self.sort_direction)

    def apply(self, records: Sequence[Any]) -> Page:
        rows = self.sort(self.filter(records))
        total = len(rows)
        count = page_count(total, self.page_size)
        current = min(max(self.page, 1), max(count, 1))
        return Page(
            items=paginate(rows, current, self.page_size),
            total=total,
            page=current,
            page_size=self.page_size,
            page_count=count,
            has_previous=current > 1,
            has_next=current < count,
        )


class NoteViewState(ViewState):
    sort_fields: ClassVar[Type[Enum]] = NoteSortField
    sort_keys: ClassVar[Dict[Any, Callable[[Any], Any]]] = NOTE_SORT_KEYS

    tag_id: Union[int, Literal["all"]] = ALL_TAGS
    project_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort_field: NoteSortField = NoteSortField.DATE
    sort_direction: SortDirection = SortDirection.DESC
    page_size: int = 20

    def set_tag(self, tag_id: Union[int, str]) -> None:
        self.tag_id = tag_id
        self.page = 1

    def set_project(self, project_id: Optional[int]) -> None:
        self.project_id = project_id
        self.page = 1

    def set_date_range(self, date_from: Optional[date], date_to: Optional[date]) -> None:
        self.date_from = date_from
        self.date_to = date_to
        self.page = 1

    def filter(self, records: Iterable[Any]) -> List[Any]:
        return filter_notes(
            records,
            search=self.search,
            tag_id=self.tag_id,
            project_id=self.project_id,
            date_from=self.date_from,
            date_to=self.date_to,
        )


class ProjectViewState(ViewState):
    sort_fields: ClassVar[Type[Enum]] = ProjectSortField
    sort_keys: ClassVar[Dict[Any, Callable[[Any], Any]]] = PROJECT_SORT_KEYS

    status: ProjectStatus = ProjectStatus.ALL
    sort_field: ProjectSortField = ProjectSortField.NAME

    def set_status(self, status: Union[str, ProjectStatus]) -> None:
        self.status = ProjectStatus(status)
        self.page = 1

    def filter(self, records: Iterable[Any]) -> List[Any]:
        return filter_projects(records, search=self.search, status=self.status)

    def apply(self, records: Sequence[Any]) -> ProjectPage:
        page = super().apply(records)
        return ProjectPage(**dict(page), status_counts=project_status_counts(records))


class TagViewState(ViewState):
    sort_fields: ClassVar[Type[Enum]] = TagSortField
    sort_keys: ClassVar[Dict[Any, Callable[[Any], Any]]] = TAG_SORT_KEYS

    sort_field: TagSortField = TagSortField.NAME

    def filter(self, records: Iterable[Any]) -> List[Any]:
        return filter_tags(records, search=self.search)


VIEW_STATES: Dict[str, Type[ViewState]] = {
    "notes": NoteViewState,
    "projects": ProjectViewState,
    "tags": TagViewState,
}
