from typing import Any, Dict

from studyhub.core.session import SessionContext
from studyhub.core.sync import SyncedView
from studyhub.modules.dashboard.service import DashboardResponse, DashboardService


class DashboardScreen(SyncedView[DashboardResponse]):
    name = "dashboard"

    def __init__(self, session: SessionContext, service: DashboardService):
        super().__init__(session)
        self.service = service
        self.data = DashboardResponse()

    def load(self) -> DashboardResponse:
        return self.service.get_dashboard(self.session.user_id)

    def dump(self) -> Dict[str, Any]:
        return self.data.model_dump(mode="json", by_alias=True)
