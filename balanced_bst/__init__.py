"""Binary search tree that rebalances by rebuilding from its sorted contents."""

from .config import DemoConfig, DemoConfigError, load_demo_config
from .node import Node
from .render import pretty_format, render_levels
from .tree import Tree, UnorderableValueError, build_tree, node_height

__all__ = [
    "DemoConfig",
    "DemoConfigError",
    "Node",
    "Tree",
    "UnorderableValueError",
    "build_tree",
    "load_demo_config",
    "node_height",
    "pretty_format",
    "render_levels",
]
