from .custom_node.base_node import BaseNode, load_method

__all__ = ["BaseNode", "load_method"]
