"""
模块名称：凭据描述基类

本模块定义凭据描述的通用结构：宿主的凭据存储据此渲染表单并保存字段。

契约：凭据描述是纯声明数据，没有行为，也没有失败路径。
"""

from typing import Any, ClassVar

from lfx_make.inputs.inputs import InputTypes


class BaseCredential:
    """凭据描述基类。

    子类以类属性声明 `label`、`name`、`version` 与 `inputs`，
    `name` 即节点 `CredentialInput.credential_names` 中引用的标识。
    """

    label: ClassVar[str] = ""
    name: ClassVar[str] = ""
    version: ClassVar[float] = 1.0
    description: ClassVar[str | None] = None
    inputs: ClassVar[list[InputTypes]] = []

    def input_names(self) -> list[str]:
        return [field.name for field in self.inputs]

    def to_dict(self) -> dict[str, Any]:
        """输出宿主协议中的凭据描述。"""
        descriptor: dict[str, Any] = {
            "label": self.label,
            "name": self.name,
            "version": self.version,
            "inputs": [field.to_dict() for field in self.inputs],
        }
        if self.description:
            descriptor["description"] = self.description
        return descriptor
