# n8n_client/resources/projects.py

from typing import Any, Dict, List, Optional, Tuple

from ..core.utils import require_fields, require_string
from ..utils.api.response_handler import PaginationInfo
from .base import ResourceAPI

class ProjectsAPI(ResourceAPI):
    """Project and project membership endpoints (n8n Enterprise)"""

    async def list(self, limit: int = 0, offset: int = 0) -> Tuple[List[Dict[str, Any]], PaginationInfo]:
        return await self._list("projects", {"limit": limit, "offset": offset})

    async def get(self, project_id: str) -> Dict[str, Any]:
        require_string(project_id, "project ID")
        return await self.client.get(f"projects/{project_id}")

    async def create(self, project: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(project, "project", "name")
        return await self.client.post("projects", project)

    async def update(self, project_id: str, project: Dict[str, Any]) -> Dict[str, Any]:
        require_string(project_id, "project ID")
        require_fields(project, "project")
        return await self.client.put(f"projects/{project_id}", project)

    async def delete(self, project_id: str) -> None:
        require_string(project_id, "project ID")
        await self.client.delete(f"projects/{project_id}")

    async def list_users(self, project_id: str) -> List[Dict[str, Any]]:
        require_string(project_id, "project ID")
        return await self.client.get(f"projects/{project_id}/users") or []

    async def add_user(
        self,
        project_id: str,
        user_id: str,
        role: Optional[str] = None
    ) -> Dict[str, Any]:
        require_string(project_id, "project ID")
        require_string(user_id, "user ID")
        member = self._merge(None, projectId=project_id, userId=user_id, role=role)
        return await self.client.post(f"projects/{project_id}/users", member)

    async def update_user(
        self,
        project_id: str,
        user_id: str,
        member: Dict[str, Any]
    ) -> Dict[str, Any]:
        require_string(project_id, "project ID")
        require_string(user_id, "user ID")
        require_fields(member, "project user")
        body = self._merge(member, projectId=project_id, userId=user_id)
        return await self.client.put(f"projects/{project_id}/users/{user_id}", body)

    async def remove_user(self, project_id: str, user_id: str) -> None:
        require_string(project_id, "project ID")
        require_string(user_id, "user ID")
        await self.client.delete(f"projects/{project_id}/users/{user_id}")
