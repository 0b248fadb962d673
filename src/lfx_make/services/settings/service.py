"""
模块名称：settings.service

本模块提供设置服务的运行时封装。
"""

from __future__ import annotations

from lfx_make.services.base import Service
from lfx_make.services.settings.base import Settings


class SettingsService(Service):
    """设置服务。

    契约：
    - 输入：Settings
    - 输出：可读写的设置服务实例
    - 失败语义：环境变量非法时 Settings 构建抛出 ValidationError
    """

    name = "settings_service"

    def __init__(self, settings: Settings):
        super().__init__()
        self.settings: Settings = settings

    @classmethod
    def initialize(cls) -> SettingsService:
        """从环境变量构建设置服务。"""
        return cls(Settings())

    def set(self, key, value):
        """按键更新设置项并返回当前 Settings。"""
        setattr(self.settings, key, value)
        return self.settings

    async def teardown(self):
        pass
