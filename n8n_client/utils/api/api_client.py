# n8n_client/utils/api/api_client.py

from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum
import asyncio
import ssl
import time

import aiohttp
import backoff
import certifi
import yarl

from ...core.config import Config
from ...core.exceptions import APIError, ConfigError, SerializationError, TransportError
from ...core.logger import Logger, RequestLogger
from .auth import Auth, SessionAuth, auth_from_config, describe_auth
from .response_handler import (
    DISCARD,
    PaginationInfo,
    ResultType,
    decode_response,
    extract_pagination,
    json_dumps,
    parse_api_error,
)
from .retry import RetryPolicy, should_retry

API_PATH = "api/v1/"
DEFAULT_TIMEOUT = 30.0  # seconds

class RequestMethod(Enum):
    """HTTP request methods"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

@dataclass
class APIConfig:
    """Configuration for API client"""
    base_url: str
    auth: Optional[Auth] = None
    insecure_skip_verify: bool = False
    timeout: float = DEFAULT_TIMEOUT
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_config(cls, config: Config, auth: Optional[Auth] = None) -> "APIConfig":
        """Build client settings from layered configuration"""
        return cls(
            base_url=config.get("api.base_url", ""),
            auth=auth if auth is not None else auth_from_config(config),
            insecure_skip_verify=bool(config.get("api.insecure_skip_verify", False)),
            timeout=config.get("api.timeout", DEFAULT_TIMEOUT),
            retry=RetryPolicy(
                max_retries=config.get("retry.max_retries", 0),
                base_delay=config.get("retry.base_delay", 0.0),
                max_delay=config.get("retry.max_delay", 0.0),
            ),
        )

@dataclass
class APIResponse:
    """Container for API response data"""
    status: int
    data: Any
    headers: Dict[str, str]
    duration: float
    attempts: int = 1

def normalize_base_url(base_url: str) -> yarl.URL:
    """
    Parse the base URL and make its path end in ``/api/v1/``.

    Normalizing an already normalized URL returns it unchanged.
    """
    if not base_url:
        raise ConfigError("base URL is required")

    try:
        url = yarl.URL(base_url)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"invalid base URL: {str(e)}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"invalid base URL: {base_url!r} is not an absolute http(s) URL")

    path = url.raw_path
    if not path.endswith("/"):
        path += "/"
    if not path.endswith(API_PATH):
        path += API_PATH
    return url.with_path(path, encoded=True)

class APIClient:
    """
    Client for the n8n REST API.

    This class provides:
    - Base URL normalization and validation
    - API key, basic and cookie session authentication
    - Automatic retry with exponential backoff for transient failures
    - Structured errors for non-2xx responses
    - Request/Response logging

    A client holds no per-call state and can be shared by concurrent tasks.
    """

    def __init__(
        self,
        config: APIConfig,
        logger: Optional[RequestLogger] = None
    ):
        self.base_url = normalize_base_url(config.base_url)
        if config.auth is None:
            raise ConfigError("authentication method is required")

        self.auth = config.auth
        self.insecure_skip_verify = config.insecure_skip_verify
        self.timeout = config.timeout if config.timeout and config.timeout > 0 else DEFAULT_TIMEOUT
        self.retry = config.retry.with_defaults()
        self.logger: RequestLogger = logger if logger is not None else Logger()
        self._session: Optional[aiohttp.ClientSession] = None
        self._ssl_context: Optional[ssl.SSLContext] = None
        if not self.insecure_skip_verify:
            self._ssl_context = ssl.create_default_context(cafile=certifi.where())

        # Cookie files are read here so a bad file fails construction
        if isinstance(self.auth, SessionAuth) and self.auth.cookie_file:
            self.auth.load_cookies()
            self.logger.logf(
                "n8n API loaded %d cookie(s) from %s", len(self.auth.cookies), self.auth.cookie_file
            )

    @classmethod
    def from_config(
        cls,
        config: Config,
        logger: Optional[RequestLogger] = None
    ) -> "APIClient":
        """Create a client from configuration, with a config-driven logger by default"""
        return cls(APIConfig.from_config(config), logger=logger if logger is not None else Logger(config))

    def __repr__(self) -> str:
        return f"APIClient(base_url={str(self.base_url)!r}, auth={describe_auth(self.auth)!r})"

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            # unsafe=True keeps cookies for instances addressed by IP
            cookie_jar = aiohttp.CookieJar(unsafe=True)
            if isinstance(self.auth, SessionAuth):
                # One at a time: cookies may share a name across domains
                for morsel in self.auth.cookies:
                    cookie_jar.update_cookies({morsel.key: morsel}, self.base_url)

            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(ssl=self._ssl_context or False),
                cookie_jar=cookie_jar,
            )
        return self._session

    async def close(self) -> None:
        """Close the API client session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def resolve_url(self, path: str) -> yarl.URL:
        """
        Combine the base URL with a request path.

        Paths carrying a query string are parsed as relative references so
        the query survives as given; other paths are taken as one plain path.
        """
        path = path.lstrip("/")
        if "?" in path:
            try:
                reference = yarl.URL(path)
            except ValueError as e:
                raise ConfigError(f"failed to parse path with query: {str(e)}") from e
        else:
            reference = yarl.URL.build(path=path)
        return self.base_url.join(reference)

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.auth.apply_auth(headers)
        return headers

    def _on_backoff(self, details: Dict[str, Any]) -> None:
        self.logger.logf(
            "n8n API request failed, retrying in %.3fs: %s", details["wait"], details["exception"]
        )

    async def request(
        self,
        method: RequestMethod,
        path: str,
        body: Any = None,
        result_type: ResultType = None
    ) -> APIResponse:
        """
        Make an API request

        Args:
            method: HTTP method to use
            path: Path relative to the API root, may carry a query string
            body: JSON-serializable request body
            result_type: How to shape the decoded body; DISCARD ignores it

        Returns:
            APIResponse object containing response data

        Retryable statuses and transient transport failures are repeated
        up to the retry policy; the error of the last attempt is raised.
        """
        payload: Optional[bytes] = None
        if body is not None:
            try:
                payload = json_dumps(body).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise SerializationError(f"failed to marshal request body: {str(e)}") from e

        url = self.resolve_url(path)
        session = await self._get_session()
        max_attempts = self.retry.max_attempts
        attempts = 0

        async def send() -> APIResponse:
            nonlocal attempts
            attempts += 1
            headers = self._build_headers()

            self.logger.logf(
                "n8n API request: %s %s (attempt %d/%d)", method.value, url, attempts, max_attempts
            )
            if payload:
                self.logger.logf("n8n API request body: %s", payload.decode("utf-8"))

            start_time = time.monotonic()
            try:
                async with session.request(
                    method.value,
                    url,
                    data=payload,
                    headers=headers,
                ) as response:
                    response_body = await response.read()
                    status = response.status
                    reason = response.reason
                    response_headers = dict(response.headers)
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                raise TransportError(
                    f"request failed: {method.value} {url}: {str(e) or type(e).__name__}",
                    method=method.value,
                    url=str(url),
                    attempts=attempts,
                ) from e
            duration = time.monotonic() - start_time

            self.logger.logf("n8n API response: %d %s", status, reason or "")
            if response_body:
                self.logger.logf(
                    "n8n API response body: %s", response_body.decode("utf-8", errors="replace")
                )

            if status >= 400:
                error = parse_api_error(status, response_body)
                error.attempts = attempts
                raise error

            return APIResponse(
                status=status,
                data=decode_response(response_body, result_type),
                headers=response_headers,
                duration=duration,
                attempts=attempts,
            )

        retrying_send = backoff.on_exception(
            self.retry.delays,
            (APIError, TransportError),
            max_tries=max_attempts,
            jitter=None,
            giveup=lambda e: not should_retry(e),
            on_backoff=self._on_backoff,
            logger=None,
        )(send)
        return await retrying_send()

    async def get(
        self,
        path: str,
        result_type: ResultType = None
    ) -> Any:
        """Perform GET request"""
        response = await self.request(RequestMethod.GET, path, result_type=result_type)
        return response.data

    async def post(
        self,
        path: str,
        body: Any = None,
        result_type: ResultType = None
    ) -> Any:
        """Perform POST request"""
        response = await self.request(RequestMethod.POST, path, body=body, result_type=result_type)
        return response.data

    async def put(
        self,
        path: str,
        body: Any = None,
        result_type: ResultType = None
    ) -> Any:
        """Perform PUT request"""
        response = await self.request(RequestMethod.PUT, path, body=body, result_type=result_type)
        return response.data

    async def delete(self, path: str) -> None:
        """Perform DELETE request"""
        await self.request(RequestMethod.DELETE, path, result_type=DISCARD)

    async def get_with_pagination(
        self,
        path: str,
        result_type: ResultType = None
    ) -> Tuple[Any, PaginationInfo]:
        """Perform GET request and pull pagination metadata from an object response"""
        data = await self.get(path, result_type=result_type)
        return data, extract_pagination(data)
