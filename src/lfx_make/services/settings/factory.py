"""设置服务工厂：从环境变量构建 `Settings`。"""

from typing_extensions import override

from lfx_make.services.factory import ServiceFactory
from lfx_make.services.settings.service import SettingsService


class SettingsServiceFactory(ServiceFactory[SettingsService]):
    def __init__(self) -> None:
        super().__init__(SettingsService)

    @override
    def create(self) -> SettingsService:
        return SettingsService.initialize()
