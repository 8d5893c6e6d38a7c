from .bus import SpyBus
from .nodes import find_node, find_nodes
from .workspace import WorkspaceFactory

__all__ = ["SpyBus", "WorkspaceFactory", "find_node", "find_nodes"]
