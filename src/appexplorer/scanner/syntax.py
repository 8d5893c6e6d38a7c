"""
Node kinds and small structural helpers over the tree-sitter TypeScript/TSX
grammars. Nothing here knows about components or annotations.
"""

import re
from typing import Iterator, Optional, Tuple

from tree_sitter import Node

NodeKey = Tuple[int, int, str]

FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}
FUNCTION_EXPRESSIONS = {
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
}
FUNCTION_LIKE = FUNCTION_DECLARATIONS | FUNCTION_EXPRESSIONS | {"method_definition"}
CLASS_DECLARATIONS = {"class_declaration", "abstract_class_declaration"}
VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
TYPE_DECLARATIONS = {
    "interface_declaration",
    "type_alias_declaration",
    "enum_declaration",
}
MEMBER_DEFINITIONS = {"method_definition", "public_field_definition"}
MEMBER_SIGNATURES = {"property_signature", "method_signature", "abstract_method_signature"}
# Members keyed by a `name` field, plus object literal `pair`s keyed by `key`
MEMBERS = MEMBER_DEFINITIONS | MEMBER_SIGNATURES | {"enum_assignment", "pair"}
# `enum E { A, "b" }` lists bare names directly under the body
ENUM_MEMBER_NAMES = {"property_identifier", "string", "number"}
JSX_ELEMENTS = {"jsx_opening_element", "jsx_self_closing_element"}

# Declarations a `/** */` comment can be attached to
ATTACHABLE = (
    FUNCTION_DECLARATIONS
    | CLASS_DECLARATIONS
    | VARIABLE_DECLARATIONS
    | TYPE_DECLARATIONS
    | MEMBERS
)
# Containers whose named children are statements
STATEMENT_LISTS = {"program", "statement_block", "switch_case", "switch_default"}


def node_key(node: Node) -> NodeKey:
    return (node.start_byte, node.end_byte, node.type)


def name_of(node: Node) -> Optional[Node]:
    return node.child_by_field_name("name")


def is_enum_member(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "enum_body" and node.type in ENUM_MEMBER_NAMES


def member_name_of(member: Node) -> Optional[Node]:
    """The node a class, interface, enum or object member is declared under."""
    if member.type == "pair":
        return member.child_by_field_name("key")
    if is_enum_member(member):
        return member
    return name_of(member)


def is_attachable(node: Node) -> bool:
    """
    True for nodes a `/** */` comment documents: declarations, members of
    classes, interfaces, enums and object literals, and plain statements.

    An export statement that wraps a declaration is documented through that
    declaration, so it does not count on its own.
    """
    if node.type in ATTACHABLE or is_enum_member(node):
        return True
    parent = node.parent
    if parent is None or parent.type not in STATEMENT_LISTS or node.type == "comment":
        return False
    return not (
        node.type == "export_statement" and node.child_by_field_name("declaration") is not None
    )


def unwrap_export(node: Node) -> Tuple[Node, bool]:
    """
    Returns `(declaration, default)` for a top-level statement.

    `export function f` and `export default class C` unwrap to their
    declaration; any other node is returned as-is.
    """
    if node.type != "export_statement":
        return node, False
    declaration = node.child_by_field_name("declaration")
    is_default = any(child.type == "default" for child in node.children)
    if declaration is None:
        # `export default function () {}` and friends carry a value instead
        declaration = node.child_by_field_name("value")
    if declaration is None:
        return node, False
    return declaration, is_default


def statement_of(declaration: Node) -> Node:
    """
    The outermost node a doc comment for `declaration` precedes: the
    declaration itself, its variable statement, or its export wrapper.
    """
    node = declaration
    if node.type == "variable_declarator" and node.parent is not None:
        node = node.parent
    if node.parent is not None and node.parent.type == "export_statement":
        node = node.parent
    return node


def declarators(declaration: Node) -> Iterator[Node]:
    for child in declaration.named_children:
        if child.type == "variable_declarator":
            yield child


def is_dynamic_import(node: Node) -> bool:
    """`import("./X")` with a plain string or substitution-free template."""
    if node.type != "call_expression":
        return False
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "import":
        return False
    arguments = node.child_by_field_name("arguments")
    if arguments is None or not arguments.named_children:
        return False
    specifier = arguments.named_children[0]
    if specifier.type == "string":
        return True
    return specifier.type == "template_string" and not any(
        child.type == "template_substitution" for child in specifier.named_children
    )


def heritage_base(class_node: Node) -> Optional[Node]:
    """The expression after `extends`, if the class has one."""
    for child in class_node.children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type == "extends_clause":
                value = clause.child_by_field_name("value")
                if value is not None:
                    return value
                return clause.named_children[0] if clause.named_children else None
        # The plain JavaScript grammar puts the expression directly under the heritage
        if child.named_children and child.named_children[0].type != "implements_clause":
            return child.named_children[0]
    return None


class Printer:
    """
    Renders nodes back to source text for diagnostics and name matching.

    Whitespace runs collapse to one space and member access loses its
    surrounding whitespace, so a `React.Component` split over two lines
    still prints as `React.Component`.
    """

    _WHITESPACE = re.compile(r"\s+")
    _MEMBER_GAP = re.compile(r"\s*(\??\.)\s*(?=[A-Za-z_$#])")

    def __init__(self, source: bytes):
        self._source = source

    def text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", "replace")

    def print(self, node: Node) -> str:
        collapsed = self._WHITESPACE.sub(" ", self.text(node)).strip()
        return self._MEMBER_GAP.sub(r"\1", collapsed)
