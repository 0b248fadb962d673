"""
模块名称：节点基类

本模块定义宿主平台加载插件节点所需的接口：节点描述（标签、名称、版本、分类、输入）、
按名称注册的选项加载方法，以及在工作流构建时调用的 `init`。

关键组件：
- `BaseNode`：节点基类
- `load_method`：注册选项加载方法的装饰器

设计背景：描述结构由宿主协议固定，插件只负责填充，不应重新设计。
注意事项：选项加载方法运行在 UI 渲染路径上，`init` 运行在工作流构建路径上，
两者的失败策略由具体节点决定。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from lfx_make.inputs.inputs import CredentialInput, InputTypes
    from lfx_make.schema.node import NodeData, NodeOptionsValue

LOAD_METHOD_MARKER = "_load_method_name"


def load_method(func_or_name: Callable[..., Awaitable[list[NodeOptionsValue]]] | str | None = None):
    """将节点方法注册为选项加载方法。

    契约：`@load_method` 以方法名为键；`@load_method("hostName")` 以宿主协议中的名称为键。
    """
    if callable(func_or_name):
        setattr(func_or_name, LOAD_METHOD_MARKER, func_or_name.__name__)
        return func_or_name

    def register(func: Callable[..., Awaitable[list[NodeOptionsValue]]]):
        setattr(func, LOAD_METHOD_MARKER, func_or_name or func.__name__)
        return func

    return register


class BaseNode(ABC):
    """插件节点基类。

    契约：
    - 子类以类属性声明节点描述；
    - 用 `@load_method` 标记的协程方法可通过 `load_options` 按宿主名称调用；
    - `init` 返回交给工作流引擎的对象（本项目中为工具列表）。
    """

    label: ClassVar[str] = ""
    name: ClassVar[str] = ""
    version: ClassVar[float] = 1.0
    description: ClassVar[str] = ""
    type: ClassVar[str] = ""
    icon: ClassVar[str] = ""
    category: ClassVar[str] = ""
    base_classes: ClassVar[list[str]] = []
    credential: ClassVar[CredentialInput | None] = None
    inputs: ClassVar[list[InputTypes]] = []

    load_methods: ClassVar[dict[str, str]] = {}
    """宿主名称到方法属性名的映射。"""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.load_methods = {}
        for attr_name in dir(cls):
            host_name = getattr(getattr(cls, attr_name, None), LOAD_METHOD_MARKER, None)
            if isinstance(host_name, str):
                cls.load_methods[host_name] = attr_name

    async def load_options(
        self, method_name: str, node_data: NodeData, options: dict[str, Any] | None = None
    ) -> list[NodeOptionsValue]:
        """按名称调用选项加载方法。

        失败语义：方法未注册时抛 `ValueError`；方法自身的异常原样透传。
        """
        if method_name not in self.load_methods:
            msg = f"Node '{self.name}' has no load method named '{method_name}'"
            raise ValueError(msg)
        method = getattr(self, self.load_methods[method_name])
        return await method(node_data, options or {})

    @abstractmethod
    async def init(self, node_data: NodeData, input_text: str = "", options: dict[str, Any] | None = None) -> Any:
        """在工作流构建时实例化节点输出。"""

    async def teardown(self) -> None:  # noqa: B027
        """释放 `init` 期间创建的资源，默认无操作。"""

    def to_dict(self) -> dict[str, Any]:
        """输出宿主协议中的节点描述。"""
        descriptor: dict[str, Any] = {
            "label": self.label,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "type": self.type,
            "icon": self.icon,
            "category": self.category,
            "baseClasses": list(self.base_classes),
            "inputs": [field.to_dict() for field in self.inputs],
            "loadMethods": sorted(self.load_methods),
        }
        if self.credential is not None:
            descriptor["credential"] = self.credential.to_dict()
        return descriptor
