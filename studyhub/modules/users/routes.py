from fastapi import APIRouter, Depends
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.users.schemas import UserUpdate, UserResponse
from studyhub.modules.users.service import UserService
from studyhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
def get_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Profile of the signed-in user"""
    return service.get_user_by_id(user_data["id"])


@router.put("/me", response_model=UserResponse)
def update_profile(
    user_data_body: UserUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    return service.update_user(user_data["id"], user_data_body)
