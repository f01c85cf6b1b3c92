# n8n_client/resources/base.py

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

from ..utils.api.api_client import APIClient
from ..utils.api.response_handler import PaginationInfo

class ResourceAPI:
    """Shared plumbing for the per-resource endpoint helpers"""

    def __init__(self, client: APIClient):
        self.client = client

    @staticmethod
    def with_query(path: str, params: Dict[str, Any]) -> str:
        """
        Append the given query parameters to path.

        None, empty strings and empty lists are dropped, as are limit and
        offset values that are not positive. Lists repeat the key.
        """
        query: List[Tuple[str, Any]] = []
        for key, value in params.items():
            if value is None or value == "" or value == []:
                continue
            if key in ("limit", "offset") and value <= 0:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            if isinstance(value, (list, tuple)):
                query.extend((key, item) for item in value)
            else:
                query.append((key, value))

        if not query:
            return path
        return f"{path}?{urlencode(query)}"

    async def _list(self, path: str, params: Dict[str, Any]) -> Tuple[List[Any], PaginationInfo]:
        """Fetch one page; returns the items of the "data" envelope and its pagination"""
        data, pagination = await self.client.get_with_pagination(self.with_query(path, params))
        pagination.limit = params.get("limit") or 0
        pagination.offset = params.get("offset") or 0
        if isinstance(data, dict):
            return data.get("data") or [], pagination
        return data or [], pagination

    @staticmethod
    def _merge(payload: Optional[Dict[str, Any]], **fields: Any) -> Dict[str, Any]:
        merged = dict(payload or {})
        merged.update({k: v for k, v in fields.items() if v is not None})
        return merged
