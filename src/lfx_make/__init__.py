"""
模块名称：lfx_make 包入口

本包提供 Make.com MCP 工具节点：通过 SSE 连接 Make 的 MCP 服务器，
拉取可用场景（工具）并将其包装为 LangChain 工具供工作流使用。

关键组件：
- `lfx_make.components.make.MakeToolNode`：节点入口
- `lfx_make.credentials.MakeApiCredential`：凭据描述
- `lfx_make.base.mcp.util.SSEMCPToolkit`：MCP SSE 工具集
"""

__version__ = "0.1.0"
