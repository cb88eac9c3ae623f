from fastapi import APIRouter, Depends
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.dashboard.service import DashboardResponse, DashboardService
from studyhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    user_data: Dict = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service)
):
    return service.get_dashboard(user_data["id"])
