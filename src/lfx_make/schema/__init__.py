from .json_schema import PermissiveArgsSchema, create_input_schema_from_json_schema
from .node import NodeData, NodeOptionsValue

__all__ = ["NodeData", "NodeOptionsValue", "PermissiveArgsSchema", "create_input_schema_from_json_schema"]
