from .user import User
from .project import Project
from .tag import Tag
from .note import Note
from .note_tag import note_tags

__all__ = ["User", "Project", "Tag", "Note", "note_tags"]
