from fastapi import APIRouter, Depends, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.resources.schemas import ResourceCreate, ResourceResponse
from studyhub.modules.resources.service import ResourceService
from studyhub.modules.resources.storage import build_storage
from studyhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/resources", tags=["resources"])


def get_resource_service(supabase: Client = Depends(get_supabase)) -> ResourceService:
    return ResourceService(supabase, build_storage(supabase))


@router.get("", response_model=List[ResourceResponse])
def list_resources(
    user_data: Dict = Depends(get_current_user_id),
    service: ResourceService = Depends(get_resource_service)
):
    return service.list_resources(user_data["id"])


@router.post("", response_model=ResourceResponse, status_code=201)
async def upload_resource(
    file: UploadFile = File(...),
    title: str = Form(..., min_length=1),
    description: Optional[str] = Form(""),
    user_data: Dict = Depends(get_current_user_id),
    service: ResourceService = Depends(get_resource_service)
):
    """
    Upload a file with its title and description. The file is stored at
    resources/{userId}/{fileName}; file names are unique per user.
    """
    file_content = await file.read()
    return await run_in_threadpool(
        service.upload_resource,
        ResourceCreate(title=title, description=description),
        file.filename,
        file_content,
        file.content_type,
        user_data["id"]
    )


@router.get("/{resource_id}", response_model=ResourceResponse)
def get_resource(
    resource_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ResourceService = Depends(get_resource_service)
):
    return service.get_resource(resource_id, user_data["id"])


@router.delete("/{resource_id}", status_code=204)
def delete_resource(
    resource_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ResourceService = Depends(get_resource_service)
):
    """Delete the stored file and its metadata"""
    service.delete_resource(resource_id, user_data["id"])
    return None
