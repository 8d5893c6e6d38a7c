from typing import Any, List, Optional, Sequence, Tuple

from tree_sitter import Node

from appexplorer.spec import VisitCallback
from .syntax import Printer

INDENT = "  "


class DebugSink:
    """
    Appends human-readable trace lines to a scan's debug log.

    `sink("message", node)` records `message: (<kind>) <printed node>`. Sinks
    derived with `indented` prefix their lines by two spaces per level.
    """

    def __init__(self, lines: List[str], printer: Optional[Printer] = None, depth: int = 0):
        self.lines = lines
        self.printer = printer
        self.depth = depth

    def __call__(self, message: str, node: Optional[Node] = None) -> None:
        line = f"{INDENT * self.depth}{message}"
        if node is not None:
            printed = self.printer.print(node) if self.printer else ""
            line = f"{line}: ({node.type}) {printed}"
        self.lines.append(line)

    def indented(self, levels: int = 1) -> "DebugSink":
        return DebugSink(self.lines, self.printer, self.depth + levels)


def walk(
    root: Node,
    on_visit: VisitCallback,
    debug: DebugSink,
    ancestors: Sequence[Node] = (),
) -> Any:
    """
    Pre-order walk over the named nodes under and including `root`.

    `on_visit(node, debug, ancestors)` receives a sink indented to the node's
    depth and its strict ancestors, outermost first. The first truthy return
    value stops the walk and is returned; otherwise the result is None. The
    tree is never modified.

    The walk keeps its own stack, so nesting depth is bounded by memory
    rather than by the interpreter's recursion limit.
    """
    stack: List[Tuple[Node, DebugSink, Tuple[Node, ...]]] = [(root, debug, tuple(ancestors))]
    while stack:
        node, node_debug, node_ancestors = stack.pop()
        result = on_visit(node, node_debug, node_ancestors)
        if result:
            return result

        children = node.named_children
        if not children:
            continue
        child_debug = node_debug.indented()
        child_ancestors = node_ancestors + (node,)
        # Reversed so the leftmost child is visited first
        for child in reversed(children):
            stack.append((child, child_debug, child_ancestors))
    return None
