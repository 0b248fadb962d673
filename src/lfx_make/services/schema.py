"""服务类型枚举，用于注册与依赖注入。"""

from enum import Enum


class ServiceType(str, Enum):
    """服务类型枚举。"""

    SETTINGS_SERVICE = "settings_service"
    CREDENTIAL_SERVICE = "credential_service"
