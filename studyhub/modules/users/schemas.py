from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserUpdate(BaseModel):
    name: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True
