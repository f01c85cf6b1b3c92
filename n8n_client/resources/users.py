# n8n_client/resources/users.py

from typing import Any, Dict, List, Optional, Tuple

from ..core.exceptions import N8nClientError
from ..core.utils import require_fields, require_string
from ..utils.api.response_handler import PaginationInfo
from .base import ResourceAPI

class UsersAPI(ResourceAPI):
    """User endpoints"""

    async def list(
        self,
        role: Optional[str] = None,
        limit: int = 0,
        offset: int = 0
    ) -> Tuple[List[Dict[str, Any]], PaginationInfo]:
        return await self._list("users", {"role": role, "limit": limit, "offset": offset})

    async def get(self, user_id: str) -> Dict[str, Any]:
        require_string(user_id, "user ID")
        return await self.client.get(f"users/{user_id}")

    async def create(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Invite a single user.

        The endpoint takes an array of users and answers with an array of
        ``{"user": {...}, "error": "..."}`` entries, one per invitation.
        """
        require_fields(user, "user", "email")
        results = await self.client.post("users", [user], result_type=list)

        if not results:
            raise N8nClientError("no user returned from API")
        first = results[0] if isinstance(results[0], dict) else {}
        if first.get("error"):
            raise N8nClientError(f"user creation failed: {first['error']}")
        return first.get("user") or {}

    async def update(self, user_id: str, user: Dict[str, Any]) -> Dict[str, Any]:
        require_string(user_id, "user ID")
        require_fields(user, "user")
        return await self.client.put(f"users/{user_id}", user)

    async def delete(self, user_id: str) -> None:
        require_string(user_id, "user ID")
        await self.client.delete(f"users/{user_id}")
