"""
模块名称：节点组件导出

本模块提供节点类的延迟导入入口，避免在加载节点列表时就导入 MCP SDK。
注意事项：新增节点需同步更新 `__all__` 与 `_dynamic_imports`。
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .make import MakeToolNode

_dynamic_imports = {
    "MakeToolNode": "make",
}

__all__ = ["MakeToolNode"]


def __getattr__(attr_name: str) -> Any:
    """按需导入节点类。

    副作用：首次访问会执行动态导入并缓存到模块全局。
    失败语义：未注册属性抛 `AttributeError`。
    """
    if attr_name not in _dynamic_imports:
        msg = f"module '{__name__}' has no attribute '{attr_name}'"
        raise AttributeError(msg)
    try:
        module = import_module(f".{_dynamic_imports[attr_name]}", __spec__.parent)
        result = getattr(module, attr_name)
    except (ModuleNotFoundError, ImportError, AttributeError) as e:
        msg = f"Could not import '{attr_name}' from '{__name__}': {e}"
        raise AttributeError(msg) from e
    globals()[attr_name] = result
    return result


def __dir__() -> list[str]:
    return list(__all__)
