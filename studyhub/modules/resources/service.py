from supabase import Client
from studyhub.config import settings
from studyhub.modules.resources.schemas import ResourceCreate, ResourceResponse
from studyhub.modules.resources.storage import resource_key
from studyhub.core.exceptions import BackendError, ValidationError
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import os
import logging

logger = logging.getLogger(__name__)


class ResourceService:
    def __init__(self, supabase: Client, storage):
        self.supabase = supabase
        self.storage = storage

    def list_resources(self, user_id: str) -> List[ResourceResponse]:
        try:
            result = self.supabase.table("resources")\
                .select("*")\
                .eq("userId", user_id)\
                .order("uploadedAt", desc=True)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="list resources")
        return [ResourceResponse(**r) for r in result.data or []]

    def get_resource(self, resource_id: str, user_id: str) -> ResourceResponse:
        try:
            result = self.supabase.table("resources")\
                .select("*")\
                .eq("id", resource_id)\
                .eq("userId", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="get resource")

        if not result.data:
            raise HTTPException(status_code=404, detail="Resource not found")
        return ResourceResponse(**result.data[0])

    def _find_by_file_name(self, user_id: str, file_name: str) -> Optional[dict]:
        try:
            result = self.supabase.table("resources")\
                .select("id")\
                .eq("userId", user_id)\
                .eq("fileName", file_name)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="check resource file name")
        return result.data[0] if result.data else None

    def upload_resource(
        self,
        resource_data: ResourceCreate,
        file_name: Optional[str],
        file_content: bytes,
        content_type: Optional[str],
        user_id: str
    ) -> ResourceResponse:
        """Store the blob under resources/{userId}/{fileName}, then write the metadata row"""
        file_name = os.path.basename(file_name or "").strip()
        if not file_name:
            raise ValidationError.for_field("file", "A file is required")
        if not file_content:
            raise ValidationError.for_field("file", "The file is empty")
        if len(file_content) > settings.max_upload_bytes:
            raise ValidationError.for_field("file", "The file is too large")
        if self._find_by_file_name(user_id, file_name):
            raise ValidationError.for_field("file", f"A resource named {file_name} already exists")

        key = resource_key(user_id, file_name)
        content_type = content_type or "application/octet-stream"
        logger.info(f"Uploading resource blob: {key}")
        file_url = self.storage.upload_file(file_content, key, content_type)

        try:
            result = self.supabase.table("resources").insert({
                "userId": user_id,
                "title": resource_data.title,
                "description": resource_data.description or "",
                "fileName": file_name,
                "fileUrl": file_url,
                "fileType": content_type,
                "uploadedAt": datetime.now(timezone.utc).isoformat()
            }).execute()
            if not result.data:
                raise BackendError("no row returned", operation="create resource")
        except Exception as e:
            # No row will reference the blob; take it back out
            try:
                self.storage.delete_file(key)
            except BackendError:
                logger.error(f"Orphaned resource blob left behind: {key}")
            if isinstance(e, BackendError):
                raise
            raise BackendError(str(e), operation="create resource")

        return ResourceResponse(**result.data[0])

    def delete_resource(self, resource_id: str, user_id: str) -> bool:
        """Delete the blob first, then the row; a failed blob delete keeps the row"""
        resource = self.get_resource(resource_id, user_id)
        key = resource_key(resource.user_id, resource.file_name)
        self.storage.delete_file(key)
        logger.info(f"Deleted resource blob: {key}")
        try:
            result = self.supabase.table("resources")\
                .delete()\
                .eq("id", resource_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="delete resource")
        return len(result.data or []) > 0
