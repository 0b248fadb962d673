"""
模块名称：输入字段定义

本模块定义各类参数描述模型及其校验逻辑。

关键组件：
- `PasswordInput`/`OptionsInput`/`CredentialInput`/`AsyncMultiOptionsInput`
"""

from typing import Any, TypeAlias

from pydantic import field_validator, model_validator

from .input_mixin import (
    BaseInputMixin,
    CredentialMixin,
    FieldTypes,
    LoadMethodMixin,
    OptionsMixin,
    SerializableFieldTypes,
)


class PasswordInput(BaseInputMixin):
    """密文字段输入。

    契约：默认值必须为空，密文只能由用户在凭据中填写。
    """

    field_type: SerializableFieldTypes = FieldTypes.PASSWORD

    @field_validator("default")
    @classmethod
    def validate_default(cls, v: Any):
        if v not in (None, ""):
            msg = "PasswordInput cannot declare a default value"
            raise ValueError(msg)
        return v


class OptionsInput(BaseInputMixin, OptionsMixin):
    """单选下拉输入字段。

    失败语义：`default` 不在选项中时抛 `ValueError`。
    """

    field_type: SerializableFieldTypes = FieldTypes.OPTIONS

    @model_validator(mode="after")
    def validate_default(self):
        if self.default is not None and self.default not in self.option_names():
            msg = f"Default '{self.default}' of '{self.name}' is not one of its options: {self.option_names()}"
            raise ValueError(msg)
        return self


class CredentialInput(BaseInputMixin, CredentialMixin):
    """凭据选择字段。"""

    field_type: SerializableFieldTypes = FieldTypes.CREDENTIAL


class AsyncMultiOptionsInput(BaseInputMixin, LoadMethodMixin):
    """异步加载的多选输入字段。

    契约：
    - 输入：字符串列表
    - 输出：字符串列表
    - 失败语义：非列表或含非字符串项时抛 `ValueError`
    """

    field_type: SerializableFieldTypes = FieldTypes.ASYNC_MULTI_OPTIONS

    @field_validator("default")
    @classmethod
    def validate_default(cls, v: Any):
        """校验多选默认值为字符串列表。"""
        if v is None:
            return v
        if not isinstance(v, list):
            msg = f"AsyncMultiOptionsInput default must be a list. Value: '{v}'"
            raise ValueError(msg)  # noqa: TRY004
        for item in v:
            if not isinstance(item, str):
                msg = f"AsyncMultiOptionsInput default must be a list of strings. Item: '{item}' is not a string"
                raise ValueError(msg)  # noqa: TRY004
        return v


InputTypes: TypeAlias = PasswordInput | OptionsInput | CredentialInput | AsyncMultiOptionsInput
