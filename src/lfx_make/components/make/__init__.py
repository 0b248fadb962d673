from .make_tool import MakeToolNode, parse_selected_actions

__all__ = ["MakeToolNode", "parse_selected_actions"]
