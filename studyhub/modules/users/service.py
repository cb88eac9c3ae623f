from supabase import Client
from studyhub.modules.users.schemas import UserUpdate, UserResponse
from studyhub.core.exceptions import BackendError
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_profile(self, user_id: str, email: str, name: Optional[str]) -> UserResponse:
        """Write the profile row for a freshly issued identity"""
        try:
            result = self.supabase.table("users").insert({
                "id": user_id,
                "email": email.lower(),
                "name": name,
                "createdAt": datetime.now(timezone.utc).isoformat()
            }).execute()
        except Exception as e:
            raise BackendError(str(e), operation="create user profile")

        if not result.data:
            raise BackendError("no row returned", operation="create user profile")
        return UserResponse(**result.data[0])

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="get user")

        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse(**result.data[0])

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        """Get user profile by email; None when nobody is registered under it"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("email", email.lower())\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="find user by email")

        if not result.data:
            return None
        return UserResponse(**result.data[0])

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        try:
            result = self.supabase.table("users")\
                .update({"name": user_data.name})\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise BackendError(str(e), operation="update user")

        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse(**result.data[0])
