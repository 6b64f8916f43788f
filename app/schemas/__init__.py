from .user import UserResponse
from .note import NoteCreate, NoteUpdate, NoteResponse
from .project import ProjectCreate, ProjectUpdate, ProjectResponse
from .tag import TagCreate, TagUpdate, TagResponse
from .view import Page, ProjectPage, ViewStatePatch

__all__ = [
    "UserResponse",
    "NoteCreate", "NoteUpdate", "NoteResponse",
    "ProjectCreate", "ProjectUpdate", "ProjectResponse",
    "TagCreate", "TagUpdate", "TagResponse",
    "Page", "ProjectPage", "ViewStatePatch",
]
