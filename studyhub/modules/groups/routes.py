from fastapi import APIRouter, Depends, Query
from studyhub.database.supabase_client import get_supabase
from studyhub.modules.groups.schemas import GroupCreate, GroupUpdate, GroupResponse, GroupInvite
from studyhub.modules.groups.service import GroupService
from studyhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.get("", response_model=List[GroupResponse])
def list_groups(
    limit: Optional[int] = Query(None, ge=1),
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """List groups the user is a member of"""
    return service.list_groups(user_data["id"], limit=limit)


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    group_data: GroupCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    return service.create_group(group_data, user_data["id"])


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    return service.get_group(group_id, user_data["id"])


@router.put("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: str,
    group_data: GroupUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Update group name and description (any member)"""
    return service.update_group(group_id, group_data, user_data["id"])


@router.delete("/{group_id}", status_code=204)
def delete_group(
    group_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Delete group (creator only)"""
    service.delete_group(group_id, user_data["id"])
    return None


@router.post("/{group_id}/invite", response_model=GroupResponse)
def invite_member(
    group_id: str,
    invite: GroupInvite,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Invite a registered user by email; the group comes back unchanged when nobody matches"""
    return service.invite_by_email(group_id, invite.email, user_data["id"])


@router.delete("/{group_id}/members/{member_id}", response_model=GroupResponse)
def remove_member(
    group_id: str,
    member_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GroupService = Depends(get_group_service)
):
    """Remove a member (creator), or leave the group (member removing themselves)"""
    return service.remove_member(group_id, member_id, user_data["id"])
