from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from appexplorer.scanner import CompilationSession


def find_nodes(session: "CompilationSession", kind: str, text: Optional[str] = None) -> List[Any]:
    """All nodes of `kind` in document order, optionally only those spelling `text`."""
    found = []
    stack = [session.root]
    while stack:
        node = stack.pop()
        if node.type == kind and (text is None or session.text(node) == text):
            found.append(node)
        stack.extend(reversed(node.children))
    return found


def find_node(session: "CompilationSession", kind: str, text: Optional[str] = None, index: int = 0) -> Any:
    nodes = find_nodes(session, kind, text)
    if len(nodes) <= index:
        raise LookupError(f"No {kind} node #{index} matching {text!r}")
    return nodes[index]
