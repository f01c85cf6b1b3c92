# n8n_client/resources/ldap.py

from typing import Any, Dict, Optional

from ..core.utils import require_fields
from .base import ResourceAPI

class LDAPAPI(ResourceAPI):
    """LDAP configuration endpoints (n8n Enterprise)"""

    async def get_config(self) -> Dict[str, Any]:
        return await self.client.get("ldap/config")

    async def update_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        require_fields(config, "LDAP config", "serverUrl", "bindDn", "bindPassword")
        return await self.client.put("ldap/config", config)

    async def test_connection(self, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Ask n8n to test the stored LDAP settings, or the given ones"""
        return await self.client.post("ldap/test", config)
