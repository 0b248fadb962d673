"""MCP 工具相关常量。"""

NO_TEXT_CONTENT = "[No text content returned]"
TOOL_ERROR_TEMPLATE = "Error executing tool {tool_name}: {error}"
DEFAULT_TOOL_DESCRIPTION = "Invoke {tool_name} via MCP"
NOT_INITIALIZED_MESSAGE = "Toolkit not initialized. Call initialize() first."
