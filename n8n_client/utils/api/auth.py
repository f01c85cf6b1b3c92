# n8n_client/utils/api/auth.py

from dataclasses import dataclass, field
from enum import Enum
from http.cookies import Morsel
from typing import ClassVar, List, MutableMapping, Optional, Protocol, Union

import aiohttp

from ...core.config import Config
from ...core.exceptions import ConfigError
from .cookies import load_cookies_from_file

API_KEY_HEADER = "X-N8N-API-KEY"

class AuthKind(Enum):
    """Supported authentication methods"""
    API_KEY = "api_key"
    BASIC = "basic"
    SESSION = "session"

class AuthMethod(Protocol):
    """Protocol for authentication strategies"""
    kind: ClassVar[AuthKind]

    def apply_auth(self, headers: MutableMapping[str, str]) -> None:
        """Add credentials to the headers of an outgoing request"""
        ...

@dataclass
class APIKeyAuth:
    """Sends the API key header on every request"""
    api_key: str
    kind: ClassVar[AuthKind] = AuthKind.API_KEY

    def apply_auth(self, headers: MutableMapping[str, str]) -> None:
        headers[API_KEY_HEADER] = self.api_key

    def __repr__(self) -> str:
        return "APIKeyAuth(api_key='***')"

@dataclass
class BasicAuth:
    """HTTP basic authentication with the account email"""
    email: str
    password: str
    kind: ClassVar[AuthKind] = AuthKind.BASIC

    def apply_auth(self, headers: MutableMapping[str, str]) -> None:
        headers[aiohttp.hdrs.AUTHORIZATION] = aiohttp.BasicAuth(self.email, self.password).encode()

    def __repr__(self) -> str:
        return f"BasicAuth(email={self.email!r}, password='***')"

@dataclass
class SessionAuth:
    """
    Cookie based session authentication.

    Nothing is added per request; the cookies loaded from ``cookie_file``
    are handed to the client session's cookie jar.
    """
    cookie_file: str = ""
    cookies: List[Morsel] = field(default_factory=list)
    kind: ClassVar[AuthKind] = AuthKind.SESSION

    def load_cookies(self) -> List[Morsel]:
        """Populate the cookie store from cookie_file"""
        if self.cookie_file:
            self.cookies = load_cookies_from_file(self.cookie_file)
        return self.cookies

    def apply_auth(self, headers: MutableMapping[str, str]) -> None:
        return None

Auth = Union[APIKeyAuth, BasicAuth, SessionAuth]

def auth_from_config(config: Config) -> Auth:
    """
    Pick the authentication strategy from configuration.

    Session auth wins when enabled with a cookie file, then the API key,
    then email and password.
    """
    cookie_file = config.get("api.cookie_file")
    api_key = config.get("api.api_key")
    email = config.get("api.email")
    password = config.get("api.password")

    if config.get("api.use_session_auth") and cookie_file:
        return SessionAuth(cookie_file=cookie_file)
    if api_key:
        return APIKeyAuth(api_key=api_key)
    if email and password:
        return BasicAuth(email=email, password=password)

    raise ConfigError(
        "Missing n8n authentication: set api_key (N8N_API_KEY), or both email and "
        "password (N8N_EMAIL, N8N_PASSWORD), or enable session auth with a cookie file"
    )

def describe_auth(auth: Optional[Auth]) -> str:
    if auth is None:
        return "none"
    return auth.kind.value
