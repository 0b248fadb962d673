"""
模块名称：输入字段混入模型

本模块定义节点/凭据参数描述的通用属性与混入类，用于组合出不同类型的输入模型。
主要功能包括：
- 统一字段类型枚举与序列化规则
- 提供选项、动态加载、凭据引用等常用混入

关键组件：
- `BaseInputMixin`
- `FieldTypes`
- 各类 *Mixin

注意事项：序列化结果直接交给宿主，键名使用宿主协议的 camelCase 别名。
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    model_serializer,
)

from lfx_make.schema.node import NodeOptionsValue


class FieldTypes(str, Enum):
    """输入字段类型枚举（取值即宿主协议中的 `type`）。"""

    STRING = "string"
    PASSWORD = "password"  # noqa: S105 pragma: allowlist secret
    OPTIONS = "options"
    CREDENTIAL = "credential"
    ASYNC_MULTI_OPTIONS = "asyncMultiOptions"


SerializableFieldTypes = Annotated[FieldTypes, PlainSerializer(lambda v: v.value, return_type=str)]


class BaseInputMixin(BaseModel, validate_assignment=True):  # type: ignore[call-arg]
    """输入字段通用混入。

    契约：
    - 输入：字段配置与默认值
    - 输出：可序列化的参数描述
    - 失败语义：字段校验失败抛 `ValueError`
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
        populate_by_name=True,
    )

    field_type: SerializableFieldTypes = Field(default=FieldTypes.STRING, alias="type")

    name: str = Field(description="Name of the field.")
    """字段名，同时是 `NodeData.inputs`/凭据数据中的键。"""

    label: str = ""
    """展示名。"""

    description: str | None = None
    """提示说明。"""

    placeholder: str | None = None
    """输入占位文本。"""

    optional: bool = False
    """是否可不填。"""

    additional_params: bool = Field(default=False, alias="additionalParams")
    """是否归入“附加参数”折叠区。"""

    default: Any = None
    """默认值。"""

    def to_dict(self) -> dict[str, Any]:
        """输出可序列化字典，忽略空值字段。"""
        return self.model_dump(exclude_none=True, by_alias=True)

    @model_serializer(mode="wrap")
    def serialize_model(self, handler):
        """序列化时输出 `type` 字段并标记 `_input_type`。"""
        dump = handler(self)
        if "field_type" in dump:
            dump["type"] = dump.pop("field_type")
        dump["_input_type"] = self.__class__.__name__
        return dump


class OptionsMixin(BaseModel):
    """静态选项混入。"""

    options: list[NodeOptionsValue] = Field(default_factory=list)

    def option_names(self) -> list[str]:
        return [option.name for option in self.options]


class LoadMethodMixin(BaseModel):
    """动态选项混入：选项由节点的加载方法异步提供。"""

    load_method: str = Field(alias="loadMethod")
    """节点上已注册的加载方法名。"""
    refresh: bool = False
    """是否显示刷新按钮。"""


class CredentialMixin(BaseModel):
    """凭据引用混入。"""

    credential_names: list[str] = Field(default_factory=list, alias="credentialNames")
    """可选的凭据描述名称（如 `makeApi`）。"""
