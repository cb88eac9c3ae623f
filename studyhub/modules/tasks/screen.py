from typing import List

from studyhub.core.session import SessionContext
from studyhub.core.sync import EntityListView
from studyhub.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from studyhub.modules.tasks.service import TaskService


class TaskScreen(EntityListView[TaskResponse]):
    name = "tasks"

    def __init__(self, session: SessionContext, service: TaskService):
        super().__init__(session)
        self.service = service

    def load(self) -> List[TaskResponse]:
        return self.service.list_tasks(self.session.user_id)

    def add_task(self, task_data: TaskCreate) -> bool:
        return self.mutate(
            lambda: self.service.create_task(task_data, self.session.user_id),
            "adding task"
        )

    def update_task(self, task_id: str, task_data: TaskUpdate) -> bool:
        return self.mutate(
            lambda: self.service.update_task(task_id, task_data, self.session.user_id),
            "updating task"
        )

    def delete_task(self, task_id: str) -> bool:
        return self.mutate(
            lambda: self.service.delete_task(task_id, self.session.user_id),
            "deleting task"
        )

    def toggle_complete(self, task_id: str) -> bool:
        """Flip `completed` based on what the screen currently shows"""
        def toggle():
            task = self.find(task_id)
            if task is None:
                self.service.toggle_completed(task_id, self.session.user_id)
            else:
                self.service.set_completed(task_id, not task.completed, self.session.user_id)
        return self.mutate(toggle, "toggling task")
