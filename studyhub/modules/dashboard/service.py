from pydantic import BaseModel, Field
from studyhub.config import settings
from studyhub.modules.tasks.schemas import TaskResponse
from studyhub.modules.tasks.service import TaskService
from studyhub.modules.groups.schemas import GroupResponse
from studyhub.modules.groups.service import GroupService
from supabase import Client
from typing import List
from datetime import date


class DashboardResponse(BaseModel):
    recent_tasks: List[TaskResponse] = Field(default=[], alias="recentTasks")
    upcoming_deadlines: List[TaskResponse] = Field(default=[], alias="upcomingDeadlines")
    study_groups: List[GroupResponse] = Field(default=[], alias="studyGroups")

    class Config:
        populate_by_name = True


class DashboardService:
    """Home page summary: a few recent tasks, the next deadlines and the user's groups"""

    def __init__(self, supabase: Client):
        self.tasks = TaskService(supabase)
        self.groups = GroupService(supabase)

    def get_dashboard(self, user_id: str, today: date = None) -> DashboardResponse:
        today = today or date.today()
        return DashboardResponse(
            recent_tasks=self.tasks.list_tasks(user_id, limit=settings.dashboard_recent_limit),
            upcoming_deadlines=self.tasks.list_tasks(
                user_id, limit=settings.dashboard_deadline_limit, due_from=today
            ),
            study_groups=self.groups.list_groups(user_id, limit=settings.dashboard_group_limit)
        )
