"""
模块名称：Make.com MCP 工具节点

本模块把 Make.com 的 MCP SSE 服务器上的场景暴露为工作流可用的 LangChain 工具。
主要功能包括：
- `list_make_scenarios`（宿主名称 `listMakeScenarios`）：为多选下拉框列出可用场景（UI 渲染路径，从不抛异常）
- `init`：按用户选择重新拉取并返回工具（工作流构建路径，失败直接抛出）

设计背景：两条路径各自创建独立会话，不共享任何状态。
注意事项：Token 位于 SSE 地址中，日志与返回给 UI 的文本都经过脱敏。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

import orjson

from lfx_make.base.make.util import build_sse_url, redact_secret, redact_sse_url
from lfx_make.credentials.make_api import MAKE_ZONE_FIELD, MCP_TOKEN_FIELD, MakeApiCredential
from lfx_make.custom.custom_node.base_node import BaseNode, load_method
from lfx_make.inputs.inputs import AsyncMultiOptionsInput, CredentialInput
from lfx_make.log.logger import logger
from lfx_make.schema.node import NodeData, NodeOptionsValue
from lfx_make.services.deps import get_settings_service
from lfx_make.utils.credentials import get_credential_data

if TYPE_CHECKING:
    from langchain_core.tools import BaseTool

    from lfx_make.base.mcp.util import SSEMCPToolkit

NO_CREDENTIAL_OPTION = NodeOptionsValue(
    label="Configure Make.com Credentials First",
    name="NO_CRED",
    description="Credential details missing.",
)
NO_SCENARIOS_OPTION = NodeOptionsValue(
    label="No Scenarios Found",
    name="NO_SCENARIOS",
    description="Check Make.com MCP server or token.",
)
LOAD_ERROR_LABEL = "Error Loading Scenarios"
LOAD_ERROR_NAME = "LOAD_ERROR"
MISSING_CREDENTIALS_MESSAGE = "Make.com credentials are not configured for this node."
ACTIONS_FIELD = "mcpActions"
LOAD_SCENARIOS_METHOD = "listMakeScenarios"


def _scenario_sort_key(option: NodeOptionsValue) -> tuple[str, str]:
    # 近似 localeCompare：先忽略大小写，再按原文区分
    return option.name.casefold(), option.name


def parse_selected_actions(value: Any) -> list[str]:
    """解析多选字段取值。

    契约：接受字符串列表、JSON 编码的列表或字符串，以及单个字符串；其他取值视为未选择。
    """
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = orjson.loads(value)
        except orjson.JSONDecodeError:
            # 注意：单个非 JSON 字符串按单选处理
            return [value]
        if isinstance(value, str):
            return [value] if value else []
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


class MakeToolNode(BaseNode):
    """Make.com 场景工具节点。"""

    label = "Make.com Tool"
    name = "makeTool"
    version = 1.0
    description = "Connects to Make.com MCP server and exposes scenarios as tools."
    type = "MakeTool"
    icon = "MakeTool.png"
    category = "Tools (MCP)"
    base_classes: ClassVar[list[str]] = ["Tool"]

    credential = CredentialInput(
        label="Make.com Credential",
        name="credential",
        credential_names=[MakeApiCredential.name],
    )
    inputs: ClassVar[list] = [
        AsyncMultiOptionsInput(
            label="Available Scenarios",
            name=ACTIONS_FIELD,
            load_method=LOAD_SCENARIOS_METHOD,
            refresh=True,
        ),
    ]

    def __init__(self) -> None:
        self._toolkit: SSEMCPToolkit | None = None

    @staticmethod
    async def _resolve_connection(node_data: NodeData, options: dict[str, Any] | None) -> tuple[str, str] | None:
        """读取凭据中的区域与 Token，任一缺失返回 None。"""
        context = (options or {}).get("context")
        credential_data = await get_credential_data(node_data.credential or "", context)
        make_zone = credential_data.get(MAKE_ZONE_FIELD)
        mcp_token = credential_data.get(MCP_TOKEN_FIELD)
        if not make_zone or not mcp_token:
            return None
        return str(make_zone), str(mcp_token)

    @staticmethod
    def _create_toolkit(sse_url: str) -> SSEMCPToolkit:
        from lfx_make.base.mcp.util import SSEMCPToolkit

        return SSEMCPToolkit(url=sse_url)

    @load_method(LOAD_SCENARIOS_METHOD)
    async def list_make_scenarios(
        self, node_data: NodeData, options: dict[str, Any] | None = None
    ) -> list[NodeOptionsValue]:
        """列出可选场景。

        契约：
        - 凭据缺失：返回单个 `NO_CRED` 选项
        - 目录为空：返回单个 `NO_SCENARIOS` 选项
        - 其他情况：按名称排序的场景选项（描述缺省为名称）
        失败语义：不抛异常，任何错误转为单个 `LOAD_ERROR` 选项（消息截断并脱敏）。
        """
        mcp_token: str | None = None
        try:
            connection = await self._resolve_connection(node_data, options)
            if connection is None:
                return [NO_CREDENTIAL_OPTION.model_copy()]
            make_zone, mcp_token = connection

            toolkit = self._create_toolkit(build_sse_url(make_zone, mcp_token))
            async with toolkit:
                tools = list(toolkit.tools)
        except Exception as e:  # noqa: BLE001
            message = redact_secret(redact_sse_url(str(e)), mcp_token)
            await logger.aerror(f"Error listing Make scenarios: {message}")
            max_length = get_settings_service().settings.load_error_max_length
            return [NodeOptionsValue(label=LOAD_ERROR_LABEL, name=LOAD_ERROR_NAME, description=message[:max_length])]

        if not tools:
            return [NO_SCENARIOS_OPTION.model_copy()]

        scenarios = [
            NodeOptionsValue(label=tool.name, name=tool.name, description=tool.description or tool.name)
            for tool in tools
        ]
        scenarios.sort(key=_scenario_sort_key)
        return scenarios

    async def init(
        self, node_data: NodeData, input_text: str = "", options: dict[str, Any] | None = None
    ) -> list[BaseTool]:
        """返回用户选中的场景工具。

        关键路径（三步）：
        1) 校验凭据并解析选中的场景名称（为空直接返回 `[]`，不建立连接）；
        2) 新建会话并拉取完整目录；
        3) 按名称过滤，会话保留到下一次 `init` 或 `teardown()`。

        失败语义：凭据缺失抛 `ValueError`；连接/目录失败包装为
        `Failed to initialize MakeTool: ...` 后抛出。
        """
        connection = await self._resolve_connection(node_data, options)
        if connection is None:
            raise ValueError(MISSING_CREDENTIALS_MESSAGE)
        make_zone, mcp_token = connection

        selected_actions = parse_selected_actions(node_data.inputs.get(ACTIONS_FIELD))
        if not selected_actions:
            return []

        await self.teardown()
        try:
            toolkit = self._create_toolkit(build_sse_url(make_zone, mcp_token))
            await toolkit.initialize()
        except Exception as e:
            message = redact_secret(redact_sse_url(str(e)), mcp_token)
            await logger.aerror(f"Error initializing MakeTool: {message}")
            msg = f"Failed to initialize MakeTool: {message}"
            raise ValueError(msg) from e

        self._toolkit = toolkit
        selected = set(selected_actions)
        tools = [tool for tool in toolkit.tools if tool.name in selected]
        missing = selected - {tool.name for tool in tools}
        if missing:
            await logger.awarning(f"Selected Make scenarios not found on server: {sorted(missing)}")
        return tools

    async def teardown(self) -> None:
        """关闭 `init` 保留的会话。"""
        toolkit, self._toolkit = self._toolkit, None
        if toolkit is not None:
            await toolkit.aclose()
