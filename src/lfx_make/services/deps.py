"""
模块名称：服务依赖注入

本模块提供获取服务实例的便捷函数。

设计背景：统一服务访问入口，减少调用方对管理器的耦合。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lfx_make.services.schema import ServiceType

if TYPE_CHECKING:
    from lfx_make.services.base import Service
    from lfx_make.services.credential.service import CredentialService
    from lfx_make.services.settings.service import SettingsService


def get_service(service_type: ServiceType) -> Service:
    """获取指定类型的服务实例。

    失败语义：未注册工厂时抛 `NoFactoryRegisteredError`。
    """
    from lfx_make.services.manager import get_service_manager

    return get_service_manager().get(service_type)


def get_settings_service() -> SettingsService:
    """获取设置服务实例。"""
    return get_service(ServiceType.SETTINGS_SERVICE)  # type: ignore[return-value]


def get_credential_service() -> CredentialService:
    """获取凭据服务实例。"""
    return get_service(ServiceType.CREDENTIAL_SERVICE)  # type: ignore[return-value]


async def teardown_services() -> None:
    """销毁全部服务。"""
    from lfx_make.services.manager import get_service_manager

    await get_service_manager().teardown()
