from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class UserResponse(BaseModel):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
