from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ResourceCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = ""


class ResourceResponse(BaseModel):
    id: str
    user_id: str = Field(alias="userId")
    title: str
    description: Optional[str] = None
    file_name: str = Field(alias="fileName")
    file_url: str = Field(alias="fileUrl")
    file_type: Optional[str] = Field(default=None, alias="fileType")
    uploaded_at: datetime = Field(alias="uploadedAt")

    class Config:
        from_attributes = True
        populate_by_name = True
