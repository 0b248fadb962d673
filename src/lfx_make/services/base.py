"""
模块名称：服务基类

本模块定义 lfx-make 服务的生命周期接口：以 `name` 注册、创建后标记就绪、统一 `teardown`。
"""

from abc import ABC, abstractmethod
from typing import ClassVar


class Service(ABC):
    """服务基类。

    契约：子类以类属性 `name` 声明服务类型（对应 `ServiceType` 的取值）。
    """

    name: ClassVar[str]

    def __init__(self) -> None:
        self._ready = False

    def set_ready(self) -> None:
        self._ready = True

    @property
    def ready(self) -> bool:
        return self._ready

    @abstractmethod
    async def teardown(self) -> None:
        """释放服务持有的资源。"""
