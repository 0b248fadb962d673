"""宿主凭据读取辅助函数。"""

from __future__ import annotations

from typing import Any

from lfx_make.services.deps import get_credential_service


async def get_credential_data(credential_id: str | None, context: dict[str, Any] | None = None) -> dict[str, Any]:
    """按凭据 ID 读取字段字典。

    契约：
    - 输入：节点上保存的凭据 ID；`context` 为宿主调用上下文，
      可通过 `credential_service` 键注入替代的凭据服务
    - 输出：字段字典；ID 为空或不存在时返回 `{}`
    - 失败语义：不抛异常
    """
    if not credential_id:
        return {}
    credential_service = (context or {}).get("credential_service") or get_credential_service()
    return credential_service.get_credential_data(credential_id)
