from sqlalchemy import Column, Integer, ForeignKey, Table
from app.core.database import Base

# Many-to-many between notes and tags. A tag that is still attached to a
# note cannot be removed, so only the note side cascades.
note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", Integer, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="RESTRICT"), primary_key=True, index=True),
)
