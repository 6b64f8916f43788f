from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List


class TagRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ProjectRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class NoteBase(BaseModel):
    title: str = Field(..., max_length=200)
    content: str
    date: datetime
    project_id: Optional[int] = None
    tag_ids: List[int] = []

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("tag_ids")
    @classmethod
    def unique_tag_ids(cls, value: List[int]) -> List[int]:
        # Keep first occurrence order
        return list(dict.fromkeys(value))


class NoteCreate(NoteBase):
    pass


class NoteUpdate(NoteBase):
    pass


class NoteResponse(BaseModel):
    id: int
    user_id: str
    title: str
    content: str
    date: datetime
    project_id: Optional[int] = None
    project: Optional[ProjectRef] = None
    tags: List[TagRef] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
