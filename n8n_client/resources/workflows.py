# n8n_client/resources/workflows.py

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.utils import require_fields, require_string
from ..utils.api.response_handler import PaginationInfo
from .base import ResourceAPI

class WorkflowsAPI(ResourceAPI):
    """
    Workflow endpoints.

    Workflows are passed around as the JSON objects n8n uses
    (``name``, ``nodes``, ``connections``, ``settings`` ...).
    """

    async def list(
        self,
        active: Optional[bool] = None,
        tags: Optional[Sequence[str]] = None,
        project_id: Optional[str] = None,
        limit: int = 0,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], PaginationInfo]:
        return await self._list("workflows", {
            "active": active,
            "tags": list(tags or []),
            "projectId": project_id,
            "limit": limit,
            "offset": offset,
        })

    async def get(self, workflow_id: str) -> Dict[str, Any]:
        require_string(workflow_id, "workflow ID")
        return await self.client.get(f"workflows/{workflow_id}")

    async def create(self, workflow: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(workflow, "workflow", "name")
        return await self.client.post("workflows", workflow)

    async def update(self, workflow_id: str, workflow: Dict[str, Any]) -> Dict[str, Any]:
        require_string(workflow_id, "workflow ID")
        require_fields(workflow, "workflow")
        return await self.client.put(f"workflows/{workflow_id}", workflow)

    async def delete(self, workflow_id: str) -> None:
        require_string(workflow_id, "workflow ID")
        await self.client.delete(f"workflows/{workflow_id}")

    async def activate(self, workflow_id: str) -> Dict[str, Any]:
        require_string(workflow_id, "workflow ID")
        return await self.client.post(f"workflows/{workflow_id}/activate")

    async def deactivate(self, workflow_id: str) -> Dict[str, Any]:
        require_string(workflow_id, "workflow ID")
        return await self.client.post(f"workflows/{workflow_id}/deactivate")
