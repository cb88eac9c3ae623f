from typing import Any, Dict, Optional

from fastapi import HTTPException

from studyhub.core.session import SessionContext
from studyhub.core.sync import SyncedView
from studyhub.modules.users.schemas import UserResponse, UserUpdate
from studyhub.modules.users.service import UserService


class ProfileScreen(SyncedView[Optional[UserResponse]]):
    name = "profile"

    def __init__(self, session: SessionContext, service: UserService):
        super().__init__(session)
        self.service = service

    def load(self) -> Optional[UserResponse]:
        try:
            return self.service.get_user_by_id(self.session.user_id)
        except HTTPException as e:
            if e.status_code != 404:
                raise
            # Identity without a profile row; show what the session knows
            return None

    def update_profile(self, user_data: UserUpdate) -> bool:
        return self.mutate(
            lambda: self.service.update_user(self.session.user_id, user_data),
            "updating profile"
        )

    def dump(self) -> Dict[str, Any]:
        identity = self.session.identity or {}
        profile = self.data.model_dump(mode="json", by_alias=True) if self.data else None
        return {"email": identity.get("email"), "profile": profile}
