from supabase import Client
from studyhub.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from studyhub.core.exceptions import BackendError
from typing import List, Optional
from fastapi import HTTPException
from datetime import date, datetime, timezone
import logging

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tasks(
        self,
        user_id: str,
        limit: Optional[int] = None,
        due_from: Optional[date] = None
    ) -> List[TaskResponse]:
        """List the user's tasks. due_from keeps only tasks due on or after that day, soonest first."""
        try:
            query = self.supabase.table("tasks").select("*").eq("userId", user_id)
            if due_from is not None:
                query = query.gte("dueDate", due_from.isoformat()).order("dueDate")
            else:
                query = query.order("createdAt", desc=True)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise BackendError(str(e), operation="list tasks")
        return [TaskResponse(**task) for task in result.data or []]

    def get_task(self, task_id: str, user_id: str) -> TaskResponse:
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("id", task_id)\
                .eq("userId", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="get task")

        if not result.data:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse(**result.data[0])

    def create_task(self, task_data: TaskCreate, user_id: str) -> TaskResponse:
        try:
            result = self.supabase.table("tasks").insert({
                "title": task_data.title,
                "description": task_data.description or "",
                "dueDate": task_data.due_date.isoformat(),
                "userId": user_id,
                "completed": False,
                "createdAt": datetime.now(timezone.utc).isoformat()
            }).execute()
        except Exception as e:
            raise BackendError(str(e), operation="create task")

        if not result.data:
            raise BackendError("no row returned", operation="create task")
        logger.info(f"Created task {result.data[0]['id']} for user {user_id}")
        return TaskResponse(**result.data[0])

    def update_task(self, task_id: str, task_data: TaskUpdate, user_id: str) -> TaskResponse:
        """Overwrite the editable fields of a task; owner and creation time are kept"""
        return self._write(task_id, user_id, {
            "title": task_data.title,
            "description": task_data.description or "",
            "dueDate": task_data.due_date.isoformat(),
            "completed": task_data.completed
        }, operation="update task")

    def set_completed(self, task_id: str, completed: bool, user_id: str) -> TaskResponse:
        return self._write(task_id, user_id, {"completed": completed}, operation="set task completion")

    def toggle_completed(self, task_id: str, user_id: str) -> TaskResponse:
        task = self.get_task(task_id, user_id)
        return self.set_completed(task_id, not task.completed, user_id)

    def _write(self, task_id: str, user_id: str, update_data: dict, operation: str) -> TaskResponse:
        try:
            result = self.supabase.table("tasks")\
                .update(update_data)\
                .eq("id", task_id)\
                .eq("userId", user_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation=operation)

        if not result.data:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse(**result.data[0])

    def delete_task(self, task_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .eq("userId", user_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="delete task")

        if not result.data:
            raise HTTPException(status_code=404, detail="Task not found")
        return True
