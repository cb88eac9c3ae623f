from fastapi import APIRouter, Depends, Query
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from studyhub.modules.tasks.service import TaskService
from studyhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Optional, Dict
from datetime import date

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    limit: Optional[int] = Query(None, ge=1),
    upcoming: bool = False,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """List the caller's tasks; upcoming=true keeps tasks due today or later"""
    due_from = date.today() if upcoming else None
    return service.list_tasks(user_data["id"], limit=limit, due_from=due_from)


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(
    task_data: TaskCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    return service.create_task(task_data, user_data["id"])


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    return service.get_task(task_id, user_data["id"])


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    """Replace title, description, due date and completion of a task"""
    return service.update_task(task_id, task_data, user_data["id"])


@router.post("/{task_id}/toggle", response_model=TaskResponse)
def toggle_task(
    task_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    return service.toggle_completed(task_id, user_data["id"])


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TaskService = Depends(get_task_service)
):
    service.delete_task(task_id, user_data["id"])
    return None
