"""JSON Schema 转 Pydantic 模型工具函数。"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, create_model

from lfx_make.log.logger import logger

# 注意：使用严格类型，避免把 "1" 之类的字符串静默转换为数字或布尔值
JSON_TYPE_MAP: dict[str, Any] = {
    "string": StrictStr,
    "number": StrictInt | StrictFloat,
    "boolean": StrictBool,
    "integer": StrictInt,
}


class PermissiveArgsSchema(BaseModel):
    """转换失败时的兜底参数模型：接受任意字段与取值。"""

    model_config = ConfigDict(extra="allow")


def _field_for_property(prop_schema: Any, *, required: bool) -> tuple[Any, Any]:
    """将单个属性 schema 映射为 `(类型, FieldInfo)`。"""
    prop_type = prop_schema.get("type") if isinstance(prop_schema, dict) else None
    python_type = JSON_TYPE_MAP.get(prop_type, Any) if isinstance(prop_type, str) else Any
    description = prop_schema.get("description") if isinstance(prop_schema, dict) else None

    if required:
        return python_type, Field(..., description=description)
    return python_type | None if python_type is not Any else Any, Field(default=None, description=description)


def create_input_schema_from_json_schema(
    schema: dict[str, Any] | None, model_name: str = "InputSchema"
) -> type[BaseModel]:
    """从 MCP 工具的 `inputSchema` 构建 Pydantic 参数模型。

    关键路径（三步）：
    1) 非 object 或无 `properties` 的 schema 返回空模型；
    2) 按 `type` 映射为 str/数字/bool/int，未知类型不限制取值；
    3) 不在 `required` 中的字段设为可选，并附带 `description`。

    失败语义：转换过程中的任何异常都回退为 `PermissiveArgsSchema`，
    工具依然可用，只是不再做参数校验。
    """
    if not isinstance(schema, dict) or schema.get("type") != "object" or not isinstance(schema.get("properties"), dict):
        logger.warning("Invalid or empty input schema received for MCP tool. Defaulting to empty object schema.")
        return create_model(model_name)
    if not schema["properties"]:
        return create_model(model_name)

    try:
        required = schema.get("required")
        required_names = set(required) if isinstance(required, list) else set()

        fields = {
            key: _field_for_property(prop_schema, required=key in required_names)
            for key, prop_schema in schema["properties"].items()
        }
        return create_model(model_name, **fields)
    except Exception as e:  # noqa: BLE001
        logger.error(f"Error converting MCP schema to pydantic model: {e}. Input schema: {schema}")
        return PermissiveArgsSchema
