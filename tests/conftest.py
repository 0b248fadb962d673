from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import pytest
from mcp import types

from lfx_make.services import manager as service_manager_module


class FakeClientSession:
    """In-process stand-in for `mcp.ClientSession` backed by a FakeMCPServer."""

    def __init__(self, server: FakeMCPServer, client_info: types.Implementation | None = None) -> None:
        self.server = server
        self.client_info = client_info
        self.initialized = False
        self.closed = False
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    async def __aenter__(self) -> FakeClientSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.closed = True

    async def initialize(self) -> None:
        self.initialized = True

    async def list_tools(self) -> types.ListToolsResult:
        if self.server.list_error is not None:
            raise self.server.list_error
        return types.ListToolsResult(tools=list(self.server.tools))

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> types.CallToolResult:
        self.calls.append((name, arguments))
        response = self.server.responses.get(name)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return types.CallToolResult(content=[types.TextContent(type="text", text=f"{name} done")])
        return response


class FakeMCPServer:
    """Records SSE connections and serves a configurable tool catalog."""

    def __init__(self) -> None:
        self.tools: list[types.Tool] = []
        self.responses: dict[str, types.CallToolResult | Exception] = {}
        self.connect_error: Exception | None = None
        self.list_error: Exception | None = None
        self.connections: list[dict[str, Any]] = []
        self.sessions: list[FakeClientSession] = []
        self.closed_transports = 0

    def add_tool(
        self,
        name: str,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
        response: types.CallToolResult | Exception | None = None,
    ) -> None:
        self.tools.append(
            types.Tool(
                name=name,
                description=description,
                inputSchema=input_schema if input_schema is not None else {"type": "object", "properties": {}},
            )
        )
        if response is not None:
            self.responses[name] = response

    @property
    def urls(self) -> list[str]:
        return [connection["url"] for connection in self.connections]

    @asynccontextmanager
    async def sse_client(self, url: str, headers: dict[str, Any] | None = None, **kwargs: Any):
        self.connections.append({"url": url, "headers": headers, **kwargs})
        if self.connect_error is not None:
            raise self.connect_error
        try:
            yield (None, None)
        finally:
            self.closed_transports += 1

    def client_session(self, read, write, **kwargs: Any) -> FakeClientSession:
        session = FakeClientSession(self, client_info=kwargs.get("client_info"))
        self.sessions.append(session)
        return session


@pytest.fixture(autouse=True)
def reset_service_manager(monkeypatch):
    """Give each test fresh services built from a clean environment."""
    for name in (
        "LFX_MAKE_MAKE_ZONE_HOST_TEMPLATE",
        "LFX_MAKE_LOAD_ERROR_MAX_LENGTH",
        "LFX_MAKE_MCP_VERIFY_SSL",
        "LFX_MAKE_MCP_CLIENT_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(service_manager_module, "_service_manager", None)
    yield
    monkeypatch.setattr(service_manager_module, "_service_manager", None)


@pytest.fixture
def mcp_server(monkeypatch) -> FakeMCPServer:
    from lfx_make.base.mcp import util as mcp_util

    server = FakeMCPServer()
    monkeypatch.setattr(mcp_util, "sse_client", server.sse_client)
    monkeypatch.setattr(mcp_util, "ClientSession", server.client_session)
    return server


@pytest.fixture
def credential_service():
    from lfx_make.services.deps import get_credential_service

    return get_credential_service()


@pytest.fixture
def make_credential_id(credential_service) -> str:
    record = credential_service.add_credential("makeApi", {"makeZone": "us1", "mcpToken": "tok-123"}, name="Make")
    return record.id
