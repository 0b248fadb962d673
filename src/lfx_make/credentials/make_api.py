"""Make.com MCP 凭据描述。"""

from enum import Enum

from lfx_make.credentials.base import BaseCredential
from lfx_make.inputs import OptionsInput, PasswordInput
from lfx_make.schema.node import NodeOptionsValue


class MakeZone(str, Enum):
    """Make 账号所在区域代码。"""

    US1 = "us1"
    EU1 = "eu1"
    EU2 = "eu2"
    AP1 = "ap1"
    AP2 = "ap2"
    SA1 = "sa1"
    CA1 = "ca1"
    AU1 = "au1"


MAKE_ZONE_FIELD = "makeZone"
MCP_TOKEN_FIELD = "mcpToken"  # noqa: S105


class MakeApiCredential(BaseCredential):
    label = "Make API"
    name = "makeApi"
    version = 1.0
    inputs = [
        OptionsInput(
            label="Make Zone",
            name=MAKE_ZONE_FIELD,
            options=[NodeOptionsValue(label=zone.value.upper(), name=zone.value) for zone in MakeZone],
            default=MakeZone.US1.value,
            description="Select the zone your Make account is hosted in.",
        ),
        PasswordInput(
            label="Make MCP Token",
            name=MCP_TOKEN_FIELD,
            description="Your Make MCP Token. Refer to Make documentation for generating this token.",
            placeholder="Paste your Make MCP Token here",
        ),
    ]
