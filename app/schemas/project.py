from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class ProjectBase(BaseModel):
    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Project name is required")
        return value


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    pass


class ProjectResponse(BaseModel):
    id: int
    user_id: str
    name: str
    note_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
