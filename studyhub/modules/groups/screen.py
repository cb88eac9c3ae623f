from typing import List

from studyhub.core.session import SessionContext
from studyhub.core.sync import EntityListView
from studyhub.modules.groups.schemas import GroupCreate, GroupUpdate, GroupResponse
from studyhub.modules.groups.service import GroupService


class GroupScreen(EntityListView[GroupResponse]):
    name = "groups"

    def __init__(self, session: SessionContext, service: GroupService):
        super().__init__(session)
        self.service = service

    def load(self) -> List[GroupResponse]:
        return self.service.list_groups(self.session.user_id)

    def create_group(self, group_data: GroupCreate) -> bool:
        return self.mutate(
            lambda: self.service.create_group(group_data, self.session.user_id),
            "creating group"
        )

    def update_group(self, group_id: str, group_data: GroupUpdate) -> bool:
        return self.mutate(
            lambda: self.service.update_group(group_id, group_data, self.session.user_id),
            "updating group"
        )

    def delete_group(self, group_id: str) -> bool:
        return self.mutate(
            lambda: self.service.delete_group(group_id, self.session.user_id),
            "deleting group"
        )

    def invite_member(self, group_id: str, email: str) -> bool:
        return self.mutate(
            lambda: self.service.invite_by_email(group_id, email, self.session.user_id),
            "inviting member"
        )

    def remove_member(self, group_id: str, member_id: str) -> bool:
        return self.mutate(
            lambda: self.service.remove_member(group_id, member_id, self.session.user_id),
            "removing member"
        )
