from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = ""


class GroupUpdate(BaseModel):
    """Full editable field set; an update overwrites both"""
    name: str = Field(min_length=1)
    description: Optional[str] = ""


class GroupResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_by: str = Field(alias="createdBy")
    members: List[str] = []
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class GroupInvite(BaseModel):
    email: EmailStr
