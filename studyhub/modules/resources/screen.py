from typing import List, Optional

from studyhub.core.session import SessionContext
from studyhub.core.sync import EntityListView
from studyhub.modules.resources.schemas import ResourceCreate, ResourceResponse
from studyhub.modules.resources.service import ResourceService


class ResourceScreen(EntityListView[ResourceResponse]):
    name = "resources"

    def __init__(self, session: SessionContext, service: ResourceService):
        super().__init__(session)
        self.service = service

    def load(self) -> List[ResourceResponse]:
        return self.service.list_resources(self.session.user_id)

    def upload(
        self,
        resource_data: ResourceCreate,
        file_name: Optional[str],
        file_content: bytes,
        content_type: Optional[str]
    ) -> bool:
        return self.mutate(
            lambda: self.service.upload_resource(
                resource_data, file_name, file_content, content_type, self.session.user_id
            ),
            "uploading resource"
        )

    def delete_resource(self, resource_id: str) -> bool:
        return self.mutate(
            lambda: self.service.delete_resource(resource_id, self.session.user_id),
            "deleting resource"
        )
