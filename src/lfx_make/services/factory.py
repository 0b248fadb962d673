"""服务工厂：按服务类创建实例，需要定制初始化时由子类覆盖 `create`。"""

from __future__ import annotations

from typing import Generic, TypeVar

from lfx_make.services.base import Service
from lfx_make.services.schema import ServiceType

ServiceT = TypeVar("ServiceT", bound=Service)


class ServiceFactory(Generic[ServiceT]):
    def __init__(self, service_class: type[ServiceT]) -> None:
        self.service_class = service_class

    @property
    def service_type(self) -> ServiceType:
        return ServiceType(self.service_class.name)

    def create(self) -> ServiceT:
        return self.service_class()
