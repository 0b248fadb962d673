"""
模块名称：服务管理器

本模块持有进程内的服务实例：按 `ServiceType` 注册工厂，首次访问时创建并缓存，
结束时统一 teardown。

注意事项：设置服务与凭据服务的工厂在管理器构造时注册，宿主可用
`register_factory` 覆盖（例如接入自己的凭据存储）。
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from lfx_make.log.logger import logger

if TYPE_CHECKING:
    from lfx_make.services.base import Service
    from lfx_make.services.factory import ServiceFactory
    from lfx_make.services.schema import ServiceType


class NoFactoryRegisteredError(Exception):
    """请求的服务类型没有注册工厂。"""


class ServiceManager:
    def __init__(self) -> None:
        self.services: dict[ServiceType, Service] = {}
        self.factories: dict[ServiceType, ServiceFactory] = {}
        self._lock = threading.RLock()
        self._register_default_factories()

    def _register_default_factories(self) -> None:
        from lfx_make.services.credential.factory import CredentialServiceFactory
        from lfx_make.services.settings.factory import SettingsServiceFactory

        self.register_factory(SettingsServiceFactory())
        self.register_factory(CredentialServiceFactory())

    def register_factory(self, service_factory: ServiceFactory) -> None:
        """注册工厂；同一服务类型后注册者生效，已创建的实例不受影响。"""
        with self._lock:
            self.factories[service_factory.service_type] = service_factory

    def get(self, service_type: ServiceType) -> Service:
        """返回服务实例，不存在时用已注册工厂创建。

        失败语义：未注册工厂时抛 `NoFactoryRegisteredError`。
        """
        with self._lock:
            service = self.services.get(service_type)
            if service is None:
                service = self._create_service(service_type)
                self.services[service_type] = service
            return service

    def _create_service(self, service_type: ServiceType) -> Service:
        factory = self.factories.get(service_type)
        if factory is None:
            msg = f"No factory registered for the service class '{service_type.name}'"
            raise NoFactoryRegisteredError(msg)
        logger.debug(f"Create service {service_type.value}")
        service = factory.create()
        service.set_ready()
        return service

    async def teardown(self) -> None:
        """销毁全部已创建的服务并清空缓存。

        失败语义：单个服务销毁失败只记录日志，其余服务照常销毁。
        """
        with self._lock:
            services, self.services = list(self.services.values()), {}
        for service in services:
            await logger.adebug(f"Teardown service {service.name}")
            try:
                await service.teardown()
            except Exception as exc:  # noqa: BLE001
                await logger.aexception(f"Error in teardown of {service.name}: {exc}")


_service_manager: ServiceManager | None = None
_service_manager_lock = threading.Lock()


def get_service_manager() -> ServiceManager:
    """返回进程级服务管理器（懒创建，线程安全）。"""
    global _service_manager  # noqa: PLW0603
    if _service_manager is None:
        with _service_manager_lock:
            if _service_manager is None:
                _service_manager = ServiceManager()
    return _service_manager
