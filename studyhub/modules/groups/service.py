from supabase import Client
from studyhub.modules.groups.schemas import GroupCreate, GroupUpdate, GroupResponse
from studyhub.modules.users.service import UserService
from studyhub.core.exceptions import BackendError
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class GroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = UserService(supabase)

    def list_groups(self, user_id: str, limit: Optional[int] = None) -> List[GroupResponse]:
        """List groups whose members include the user"""
        try:
            query = self.supabase.table("groups")\
                .select("*")\
                .contains("members", [user_id])\
                .order("createdAt", desc=True)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise BackendError(str(e), operation="list groups")
        return [GroupResponse(**group) for group in result.data or []]

    def _fetch_group(self, group_id: str) -> GroupResponse:
        try:
            result = self.supabase.table("groups")\
                .select("*")\
                .eq("id", group_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="get group")

        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        return GroupResponse(**result.data[0])

    def get_group(self, group_id: str, user_id: str) -> GroupResponse:
        """Get group by ID (only if user is a member)"""
        group = self._fetch_group(group_id)
        if user_id not in group.members:
            raise HTTPException(status_code=403, detail="You must be a member of this group")
        return group

    def create_group(self, group_data: GroupCreate, user_id: str) -> GroupResponse:
        """Create a new group with its creator as the first member"""
        try:
            result = self.supabase.table("groups").insert({
                "name": group_data.name,
                "description": group_data.description or "",
                "createdBy": user_id,
                "members": [user_id],
                "createdAt": datetime.now(timezone.utc).isoformat()
            }).execute()
        except Exception as e:
            raise BackendError(str(e), operation="create group")

        if not result.data:
            raise BackendError("no row returned", operation="create group")
        logger.info(f"Created group {result.data[0]['id']} for user {user_id}")
        return GroupResponse(**result.data[0])

    def update_group(self, group_id: str, group_data: GroupUpdate, user_id: str) -> GroupResponse:
        """Overwrite name and description; membership is left alone"""
        self.get_group(group_id, user_id)
        try:
            result = self.supabase.table("groups")\
                .update({
                    "name": group_data.name,
                    "description": group_data.description or ""
                })\
                .eq("id", group_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="update group")

        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        return GroupResponse(**result.data[0])

    def delete_group(self, group_id: str, user_id: str) -> bool:
        """Delete group (creator only)"""
        group = self._fetch_group(group_id)
        if group.created_by != user_id:
            raise HTTPException(status_code=403, detail="Only the group creator can delete this group")
        try:
            result = self.supabase.table("groups")\
                .delete()\
                .eq("id", group_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="delete group")
        return len(result.data or []) > 0

    def add_member(self, group_id: str, member_id: str) -> GroupResponse:
        """Set-union one id into members"""
        try:
            result = self.supabase.rpc("add_group_member", {
                "group_id": group_id,
                "member_id": member_id
            }).execute()
        except Exception as e:
            raise BackendError(str(e), operation="add group member")

        if result.data:
            return GroupResponse(**result.data[0])
        # Nothing updated: already a member, or the group is gone
        return self._fetch_group(group_id)

    def remove_member(self, group_id: str, member_id: str, user_id: str) -> GroupResponse:
        """Set-difference one id out of members (creator, or the member leaving)"""
        group = self.get_group(group_id, user_id)
        if user_id != member_id and group.created_by != user_id:
            raise HTTPException(status_code=403, detail="Only the group creator can remove other members")
        try:
            result = self.supabase.rpc("remove_group_member", {
                "group_id": group_id,
                "member_id": member_id
            }).execute()
        except Exception as e:
            raise BackendError(str(e), operation="remove group member")

        if result.data:
            return GroupResponse(**result.data[0])
        return self._fetch_group(group_id)

    def invite_by_email(self, group_id: str, email: str, user_id: str) -> GroupResponse:
        """Add the user registered under email. Unknown emails leave the group unchanged."""
        group = self.get_group(group_id, user_id)
        invitee = self.users.get_user_by_email(email)
        if invitee is None:
            logger.info(f"Invite to group {group_id}: no user registered as {email}")
            return group
        if invitee.id in group.members:
            return group
        return self.add_member(group_id, invitee.id)
