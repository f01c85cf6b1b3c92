"""Global test configuration and fixtures."""
import json
import os
from typing import Any, Dict, List, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from n8n_client.core.logger import MemoryLogger
from n8n_client.utils.api import APIClient, APIConfig, APIKeyAuth, RetryPolicy

Reply = Tuple[int, Union[Dict[str, Any], List[Any], str, None]]

class ScriptedHandler:
    """aiohttp handler that records every request and plays back scripted replies.

    The last reply is repeated once the script runs out.
    """

    def __init__(self, *replies: Reply):
        self.replies = list(replies) or [(200, {})]
        self.requests: List[Dict[str, Any]] = []

    async def __call__(self, request: web.Request) -> web.Response:
        body = await request.read()
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "query_string": request.query_string,
            "query": request.query,
            "headers": request.headers,
            "cookies": dict(request.cookies),
            "body": body,
            "json": json.loads(body) if body else None,
        })
        status, payload = self.replies[min(len(self.requests), len(self.replies)) - 1]
        if isinstance(payload, (dict, list)):
            text = json.dumps(payload)
        else:
            text = payload or ""
        return web.Response(status=status, text=text, content_type="application/json")

    @property
    def count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> Dict[str, Any]:
        return self.requests[-1]

@pytest.fixture(autouse=True)
def clean_env():
    """Clean N8N_ environment variables before and after each test"""
    saved_vars = {k: v for k, v in os.environ.items() if k.startswith("N8N_")}
    for key in saved_vars:
        del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if key.startswith("N8N_"):
            del os.environ[key]
    os.environ.update(saved_vars)

@pytest.fixture
def memory_logger():
    """In-memory request logger"""
    return MemoryLogger()

@pytest.fixture
def fast_retry():
    """Retry policy with tiny delays so retry tests stay quick"""
    return RetryPolicy(max_retries=3, base_delay=0.001, max_delay=0.01)

@pytest_asyncio.fixture
async def n8n_server():
    """Start local aiohttp servers answering every path with the given handler"""
    servers: List[TestServer] = []

    async def start(handler) -> TestServer:
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield start

    for server in servers:
        await server.close()

@pytest_asyncio.fixture
async def make_client(memory_logger, fast_retry):
    """Build API clients that log into memory and are closed after the test"""
    clients: List[APIClient] = []

    def factory(base_url, auth=None, retry=None, timeout=5.0, insecure_skip_verify=False) -> APIClient:
        client = APIClient(
            APIConfig(
                base_url=str(base_url),
                auth=auth if auth is not None else APIKeyAuth(api_key="test-key"),
                insecure_skip_verify=insecure_skip_verify,
                timeout=timeout,
                retry=retry or fast_retry,
            ),
            logger=memory_logger,
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.close()

@pytest_asyncio.fixture
async def serve(n8n_server, make_client):
    """Start a scripted server and return (handler, client) pointing at it"""
    async def start(*replies: Reply, **client_kwargs):
        handler = ScriptedHandler(*replies)
        server = await n8n_server(handler.__call__)
        client = make_client(server.make_url("/"), **client_kwargs)
        return handler, client

    return start
