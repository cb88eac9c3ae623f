from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = ""
    due_date: date = Field(alias="dueDate")

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    """Full editable field set; an update overwrites all of these"""
    title: str = Field(min_length=1)
    description: Optional[str] = ""
    due_date: date = Field(alias="dueDate")
    completed: bool = False

    class Config:
        populate_by_name = True


class TaskResponse(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    title: str
    description: Optional[str] = None
    due_date: date = Field(alias="dueDate")
    completed: bool = False
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True
