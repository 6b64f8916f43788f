from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class TagBase(BaseModel):
    name: str = Field(..., max_length=50)

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Tag name is required")
        return value


class TagCreate(TagBase):
    pass


class TagUpdate(TagBase):
    pass


class TagResponse(BaseModel):
    id: int
    user_id: str
    name: str
    note_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
