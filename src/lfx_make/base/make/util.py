"""
模块名称：Make MCP 地址解析

本模块把凭据中的区域代码与 MCP Token 组合为 SSE 端点地址，并提供日志脱敏。

注意事项：Token 位于 URL 路径中，任何日志或返回给 UI 的错误文本都必须先经过
`redact_sse_url` 处理。
"""

import re

from lfx_make.services.deps import get_settings_service

SSE_PATH_TEMPLATE = "/mcp/api/v1/u/{token}/sse"
_TOKEN_SEGMENT_PATTERN = re.compile(r"(/mcp/api/v1/u/)([^/]+)(/sse)")
REDACTED = "****"


def resolve_zone_host(zone: str) -> str:
    """区域代码转主机名。

    契约：包含 `.` 的取值视为完整主机名原样返回；否则套用
    `make_zone_host_template`（默认 `{zone}.make.com`）。
    失败语义：空区域抛 `ValueError`。
    """
    zone = (zone or "").strip().lower()
    if not zone:
        msg = "Make zone is required"
        raise ValueError(msg)
    if "." in zone:
        return zone
    template = get_settings_service().settings.make_zone_host_template
    return template.format(zone=zone)


def build_sse_url(zone: str, token: str) -> str:
    """组合 `https://<zone-host>/mcp/api/v1/u/<token>/sse`。"""
    token = (token or "").strip()
    if not token:
        msg = "Make MCP token is required"
        raise ValueError(msg)
    return f"https://{resolve_zone_host(zone)}{SSE_PATH_TEMPLATE.format(token=token)}"


def redact_sse_url(url: str) -> str:
    """遮盖 URL 中的 Token 段，其余部分保持不变。"""
    return _TOKEN_SEGMENT_PATTERN.sub(rf"\g<1>{REDACTED}\g<3>", url)


def redact_secret(text: str, secret: str | None) -> str:
    """从任意文本中移除指定密文（用于异常消息）。"""
    if not secret:
        return text
    return text.replace(secret, REDACTED)
