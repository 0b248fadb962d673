"""
模块名称：MCP SSE 连接与工具装配

本模块通过 Server-Sent Events 连接远端 MCP 服务器，拉取工具目录并将每个远端工具
包装为 LangChain `StructuredTool`。主要功能包括：
- 创建支持可选 SSL 校验的 `httpx` 客户端
- 校验/清理 HTTP 请求头
- `SSEMCPToolkit`：单个会话的建立、工具目录缓存与显式关闭
- 工具调用协程：只提取 `text` 内容，错误以文本形式返回

设计背景：MCP SDK 的传输与会话都是异步上下文管理器，必须在同一个任务内进入和退出，
因此会话放在后台任务中维持，直到 `aclose()`。
注意事项：一个工具只属于创建它的会话，会话关闭后再调用会返回错误文本。
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import urlparse

import anyio
import httpx
from langchain_core.tools import BaseTool, BaseToolkit, StructuredTool
from mcp import ClientSession, types
from mcp.client.sse import sse_client
from pydantic import ConfigDict, Field, PrivateAttr, field_validator

from lfx_make.base.make.util import redact_sse_url
from lfx_make.base.mcp.constants import (
    DEFAULT_TOOL_DESCRIPTION,
    NO_TEXT_CONTENT,
    NOT_INITIALIZED_MESSAGE,
    TOOL_ERROR_TEMPLATE,
)
from lfx_make.log.logger import logger
from lfx_make.schema.json_schema import create_input_schema_from_json_schema
from lfx_make.services.deps import get_settings_service
from lfx_make.utils.async_helpers import run_until_complete

# RFC 7230 Header 名称：`token = 1*tchar`
HEADER_NAME_PATTERN = re.compile(r"^[!#$%&\'*+\-.0-9A-Z^_`a-z|~]+$")
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0A-\x1F\x7F]")


def create_mcp_http_client_with_ssl_option(
    headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
    auth: httpx.Auth | None = None,
    *,
    verify_ssl: bool = True,
) -> httpx.AsyncClient:
    """创建可配置 SSL 校验的 httpx 异步客户端。

    契约：签名与 MCP SDK 的 `httpx_client_factory` 一致，额外接受 `verify_ssl`。
    """
    kwargs: dict[str, Any] = {
        "follow_redirects": True,
        "verify": verify_ssl,
        "timeout": timeout if timeout is not None else httpx.Timeout(30.0),
    }
    if headers is not None:
        kwargs["headers"] = headers
    if auth is not None:
        kwargs["auth"] = auth
    return httpx.AsyncClient(**kwargs)


def validate_headers(headers: dict[str, Any] | None) -> dict[str, str]:
    """按 RFC 7230 校验并清理 HTTP Header。

    契约：输入原始 Header 字典，输出仅包含合法项的字典（名称统一小写）。
    失败语义：不抛异常，非法项记录警告后跳过。
    """
    if not headers:
        return {}

    sanitized_headers: dict[str, str] = {}
    for name, value in headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            logger.warning(f"Skipping non-string header: {name}")
            continue
        if not HEADER_NAME_PATTERN.match(name):
            logger.warning(f"Invalid header name '{name}', skipping")
            continue
        # 安全：在清理前先拦截 CR/LF 注入
        if "\r" in value or "\n" in value:
            logger.warning(f"Potential header injection detected in '{name}', skipping")
            continue
        sanitized_value = CONTROL_CHARS_PATTERN.sub("", value).strip()
        if not sanitized_value:
            logger.warning(f"Header '{name}' has empty value after sanitization, skipping")
            continue
        sanitized_headers[name.lower()] = sanitized_value
    return sanitized_headers


def describe_error(error: BaseException) -> str:
    """返回异常的可读描述，单元素异常组（anyio TaskGroup）会被展开。"""
    while True:
        nested = getattr(error, "exceptions", None)
        if not isinstance(nested, (list, tuple)) or len(nested) != 1:
            break
        error = nested[0]
    return str(error) or type(error).__name__


def extract_text_content(result: types.CallToolResult) -> str:
    """拼接结果中的 `text` 内容块（换行分隔），忽略图片/资源等其他类型。"""
    texts = [part.text for part in result.content if getattr(part, "type", None) == "text"]
    return "\n".join(texts) or NO_TEXT_CONTENT


def create_tool_coroutine(
    tool_name: str, session: ClientSession, redact: Callable[[str], str] | None = None
) -> Callable[..., Awaitable[str]]:
    """构造异步工具调用协程。

    契约：以关键字参数作为 `tools/call` 的 arguments，返回文本结果。
    失败语义：不抛异常；任何传输/协议错误都转为 `Error executing tool ...` 文本返回，
    让工作流可以检查或记录失败而不中断运行。
    """

    async def tool_coroutine(**kwargs: Any) -> str:
        try:
            result = await session.call_tool(tool_name, arguments=kwargs)
        except Exception as e:  # noqa: BLE001
            error = describe_error(e)
            if redact is not None:
                error = redact(error)
            await logger.aerror(f"Error calling MCP tool '{tool_name}' via SSE: {error}")
            return TOOL_ERROR_TEMPLATE.format(tool_name=tool_name, error=error)
        return extract_text_content(result)

    return tool_coroutine


def create_tool_func(
    tool_name: str,
    session: ClientSession,
    loop: asyncio.AbstractEventLoop | None = None,
    redact: Callable[[str], str] | None = None,
) -> Callable[..., str]:
    """构造同步工具调用函数。

    契约：在会话所属事件循环上执行调用（`loop` 为空时退化为新事件循环）。
    失败语义：与协程版本一致，错误以文本返回。
    """
    tool_coroutine = create_tool_coroutine(tool_name, session, redact)

    def tool_func(**kwargs: Any) -> str:
        try:
            return run_until_complete(tool_coroutine(**kwargs), loop=loop)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Error running MCP tool '{tool_name}' synchronously: {e}")
            return TOOL_ERROR_TEMPLATE.format(tool_name=tool_name, error=describe_error(e))

    return tool_func


class SSEMCPToolkit(BaseToolkit):
    """通过 SSE 与 MCP 服务器交互的工具集。

    契约：
    - `initialize()` 建立会话并拉取一次工具目录，成功后重复调用为空操作；
    - `get_tools()` 必须在成功的 `initialize()` 之后调用；
    - `aclose()` 关闭会话并清空状态，之后可以重新 `initialize()`。
    副作用：在后台任务中维持 SSE 连接。
    失败语义：连接或目录拉取失败时重置全部状态并抛 `ValueError`（消息包含脱敏后的 URL）。
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    verify_ssl: bool | None = None
    """为空时使用设置项 `mcp_verify_ssl`。"""
    tools: list[BaseTool] = Field(default_factory=list)

    _raw_tools: types.ListToolsResult | None = PrivateAttr(default=None)
    _session: ClientSession | None = PrivateAttr(default=None)
    _session_task: asyncio.Task | None = PrivateAttr(default=None)
    _stop_event: anyio.Event | None = PrivateAttr(default=None)
    _loop: asyncio.AbstractEventLoop | None = PrivateAttr(default=None)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        parsed = urlparse(value or "")
        if not parsed.scheme or not parsed.netloc:
            msg = "SSE connection parameters with a valid URL are required."
            raise ValueError(msg)
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def sanitize_headers(cls, value: Any) -> dict[str, str]:
        return validate_headers(value)

    @property
    def redacted_url(self) -> str:
        return redact_sse_url(self.url)

    @property
    def initialized(self) -> bool:
        return self._raw_tools is not None and self._session is not None

    def _redact(self, text: str) -> str:
        return text.replace(self.url, self.redacted_url)

    async def initialize(self) -> None:
        """连接 MCP 服务器并拉取工具目录。

        关键路径（三步）：
        1) 在后台任务中建立 SSE 传输并完成 MCP 握手；
        2) 请求 `tools/list` 并缓存原始目录；
        3) 生成 LangChain 工具写入 `tools`。
        """
        if self._raw_tools is not None:
            return

        try:
            session = await self._open_session()
            self._raw_tools = await session.list_tools()
            self.tools = self.get_tools()
        except Exception as e:
            error = self._redact(describe_error(e))
            await logger.aerror(f"Error initializing SSEMCPToolkit for URL {self.redacted_url}: {error}")
            await self.aclose()
            msg = f"Failed to connect or list tools from MCP server at {self.redacted_url}: {error}"
            raise ValueError(msg) from e

        await logger.ainfo(f"Loaded {len(self.tools)} tools from MCP server at {self.redacted_url}")

    def get_tools(self) -> list[BaseTool]:
        """将远端工具目录转换为 `StructuredTool` 列表。

        失败语义：未初始化时抛 `ValueError`；单个 schema 转换失败只会退化为宽松校验。
        """
        if not self.initialized:
            raise ValueError(NOT_INITIALIZED_MESSAGE)
        return [self._build_tool(mcp_tool) for mcp_tool in self._raw_tools.tools]

    def _build_tool(self, mcp_tool: types.Tool) -> StructuredTool:
        args_schema = create_input_schema_from_json_schema(mcp_tool.inputSchema, model_name=f"{mcp_tool.name}_input")
        return StructuredTool(
            name=mcp_tool.name,
            description=mcp_tool.description or DEFAULT_TOOL_DESCRIPTION.format(tool_name=mcp_tool.name),
            args_schema=args_schema,
            func=create_tool_func(mcp_tool.name, self._session, loop=self._loop, redact=self._redact),
            coroutine=create_tool_coroutine(mcp_tool.name, self._session, redact=self._redact),
        )

    async def _open_session(self) -> ClientSession:
        """在后台任务中打开 SSE 传输与 MCP 会话，返回就绪的会话。"""
        settings = get_settings_service().settings
        verify_ssl = settings.mcp_verify_ssl if self.verify_ssl is None else self.verify_ssl
        client_info = types.Implementation(name=settings.mcp_client_name, version=settings.mcp_client_version)

        loop = asyncio.get_running_loop()
        session_future: asyncio.Future[ClientSession] = loop.create_future()
        stop_event = anyio.Event()

        def httpx_client_factory(
            headers: dict[str, str] | None = None,
            timeout: httpx.Timeout | None = None,
            auth: httpx.Auth | None = None,
        ) -> httpx.AsyncClient:
            return create_mcp_http_client_with_ssl_option(
                headers=headers, timeout=timeout, auth=auth, verify_ssl=verify_ssl
            )

        async def session_task():
            """后台任务：初始化会话并维持到 `stop_event`。"""
            try:
                async with sse_client(
                    self.url,
                    headers=self.headers or None,
                    timeout=settings.mcp_sse_timeout,
                    sse_read_timeout=settings.mcp_sse_read_timeout,
                    httpx_client_factory=httpx_client_factory,
                ) as (read, write):
                    async with ClientSession(read, write, client_info=client_info) as session:
                        await session.initialize()
                        await logger.adebug(f"MCP SSE session established for {self.redacted_url}")
                        session_future.set_result(session)
                        await stop_event.wait()
            except Exception as e:  # noqa: BLE001
                if not session_future.done():
                    session_future.set_exception(e)
                else:
                    error = self._redact(describe_error(e))
                    await logger.awarning(f"MCP SSE session for {self.redacted_url} ended with error: {error}")

        def on_task_done(_task: asyncio.Task) -> None:
            if not session_future.done():
                session_future.set_exception(RuntimeError("MCP SSE session task exited before the session was ready"))

        task = asyncio.create_task(session_task())
        task.add_done_callback(on_task_done)
        self._session_task = task
        self._stop_event = stop_event
        self._loop = loop

        self._session = await session_future
        return self._session

    async def aclose(self) -> None:
        """关闭会话并清空全部状态（客户端、传输、目录缓存、工具）。"""
        if self._stop_event is not None:
            self._stop_event.set()
        task = self._session_task
        if task is not None and not task.done():
            try:
                await task
            except asyncio.CancelledError:
                await logger.adebug(f"MCP SSE session task for {self.redacted_url} cancelled")

        self._session = None
        self._session_task = None
        self._stop_event = None
        self._loop = None
        self._raw_tools = None
        self.tools = []

    async def __aenter__(self) -> SSEMCPToolkit:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
