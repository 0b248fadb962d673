from .util import SSEMCPToolkit, create_tool_coroutine, create_tool_func, extract_text_content, validate_headers

__all__ = ["SSEMCPToolkit", "create_tool_coroutine", "create_tool_func", "extract_text_content", "validate_headers"]
