from .base import BaseCredential
from .make_api import MAKE_ZONE_FIELD, MCP_TOKEN_FIELD, MakeApiCredential, MakeZone

__all__ = ["MAKE_ZONE_FIELD", "MCP_TOKEN_FIELD", "BaseCredential", "MakeApiCredential", "MakeZone"]
