"""
模块名称：节点数据与选项值模型

本模块定义宿主与节点之间交换的数据结构。
主要功能包括：
- `NodeOptionsValue`：下拉选项（名称/标签/描述）
- `NodeData`：宿主传入的节点实例状态（凭据 ID 与输入值）

注意事项：字段名遵循宿主协议，序列化时使用别名。
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeOptionsValue(BaseModel):
    """下拉选项值。

    契约：`name` 为提交给节点的取值，`label` 为展示文本。
    """

    model_config = ConfigDict(populate_by_name=True)

    label: str
    name: str
    description: str | None = None
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NodeData(BaseModel):
    """宿主传入的节点实例数据。

    契约：
    - `credential`：用户选择的凭据 ID，可能为空
    - `inputs`：按输入字段 `name` 索引的取值
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = ""
    label: str = ""
    name: str = ""
    credential: str | None = None
    inputs: dict[str, Any] = Field(default_factory=dict)
