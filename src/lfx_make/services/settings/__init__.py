from .base import Settings
from .service import SettingsService

__all__ = ["Settings", "SettingsService"]
