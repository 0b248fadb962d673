from .input_mixin import FieldTypes
from .inputs import (
    AsyncMultiOptionsInput,
    CredentialInput,
    InputTypes,
    OptionsInput,
    PasswordInput,
)

__all__ = [
    "AsyncMultiOptionsInput",
    "CredentialInput",
    "FieldTypes",
    "InputTypes",
    "OptionsInput",
    "PasswordInput",
]
