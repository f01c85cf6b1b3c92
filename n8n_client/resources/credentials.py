# n8n_client/resources/credentials.py

from typing import Any, Dict, List, Optional, Tuple

from ..core.utils import require_fields, require_string
from ..utils.api.response_handler import PaginationInfo
from .base import ResourceAPI

class CredentialsAPI(ResourceAPI):
    """Credential endpoints"""

    async def list(
        self,
        type: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: int = 0,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], PaginationInfo]:
        return await self._list("credentials", {
            "type": type,
            "projectId": project_id,
            "limit": limit,
            "offset": offset,
        })

    async def get(self, credential_id: str) -> Dict[str, Any]:
        require_string(credential_id, "credential ID")
        return await self.client.get(f"credentials/{credential_id}")

    async def create(self, credential: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(credential, "credential", "name", "type")
        return await self.client.post("credentials", credential)

    async def update(self, credential_id: str, credential: Dict[str, Any]) -> Dict[str, Any]:
        require_string(credential_id, "credential ID")
        require_fields(credential, "credential")
        return await self.client.put(f"credentials/{credential_id}", credential)

    async def delete(self, credential_id: str) -> None:
        require_string(credential_id, "credential ID")
        await self.client.delete(f"credentials/{credential_id}")
