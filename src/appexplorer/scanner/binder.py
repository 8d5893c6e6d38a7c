from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tree_sitter import Node

from .jsdoc import attached_comment, parse_doc_comment
from .syntax import (
    CLASS_DECLARATIONS,
    FUNCTION_DECLARATIONS,
    FUNCTION_EXPRESSIONS,
    FUNCTION_LIKE,
    MEMBERS,
    TYPE_DECLARATIONS,
    NodeKey,
    Printer,
    is_enum_member,
    member_name_of,
    name_of,
    node_key,
)

REFERENCE_KINDS = {"identifier", "type_identifier", "shorthand_property_identifier"}
PARAMETER_KINDS = {"required_parameter", "optional_parameter"}
BLOCK_SCOPES = {"statement_block", "catch_clause", "for_statement", "for_in_statement"}
JSX_TAG_PARENTS = {
    "jsx_opening_element",
    "jsx_self_closing_element",
    "jsx_closing_element",
}

# Declarations typed by an annotation or, failing that, their initializer
VALUE_DECLARATIONS = {
    "variable_declarator",
    "public_field_definition",
    "property_signature",
    "pair",
    "enum_assignment",
} | PARAMETER_KINDS

LITERAL_TYPES = {
    "string": "string",
    "template_string": "string",
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "null": "null",
    "regex": "RegExp",
    "array": "any[]",
    "object": "object",
}


@dataclass
class Symbol:
    name: str
    kind: str
    declarations: List[Node] = field(default_factory=list)

    @property
    def is_ambient(self) -> bool:
        return not self.declarations


class Scope:
    def __init__(self, node: Node, parent: Optional["Scope"], is_function: bool):
        self.node = node
        self.parent = parent
        self.is_function = is_function
        self.symbols: Dict[str, Symbol] = {}

    def lookup(self, name: str) -> Optional[Symbol]:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.symbols:
                return scope.symbols[name]
            scope = scope.parent
        return None

    def function_scope(self) -> "Scope":
        scope = self
        while not scope.is_function and scope.parent is not None:
            scope = scope.parent
        return scope


def binding_names(pattern: Optional[Node]) -> List[Node]:
    """Identifier nodes a (possibly destructuring) binding pattern introduces."""
    if pattern is None:
        return []
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern]
    if kind == "pair_pattern":
        return binding_names(pattern.child_by_field_name("value"))
    if kind in ("assignment_pattern", "object_assignment_pattern"):
        return binding_names(pattern.child_by_field_name("left"))
    if kind in ("object_pattern", "array_pattern", "rest_pattern"):
        names: List[Node] = []
        for child in pattern.named_children:
            names.extend(binding_names(child))
        return names
    return []


class Binder:
    """
    A single-file, lexical stand-in for a type checker.

    Declarations are collected in one pass before anything is resolved, so
    hoisted functions and `var`s resolve regardless of source order. Names the
    file cannot see a declaration for resolve to an ambient symbol without
    declarations instead of to nothing.
    """

    def __init__(self, root: Node, source: bytes):
        self._source = source
        self._printer = Printer(source)
        self._scopes: Dict[NodeKey, Scope] = {}
        self._declared: Dict[NodeKey, Symbol] = {}
        self._ambient: Dict[str, Symbol] = {}
        self.global_scope = self._bind(root)

    # --- Binding ---

    def _bind(self, root: Node) -> Scope:
        program = Scope(root, None, is_function=True)
        self._scopes[node_key(root)] = program
        stack = [(root, program)]
        while stack:
            node, scope = stack.pop()
            inner = self._declare(node, scope)
            # Reversed so declarations are recorded in document order
            for child in reversed(node.named_children):
                stack.append((child, inner))
        return program

    def _open(self, node: Node, parent: Scope, is_function: bool) -> Scope:
        scope = Scope(node, parent, is_function)
        self._scopes[node_key(node)] = scope
        return scope

    def _add(self, scope: Scope, name_node: Node, kind: str, declaration: Node) -> None:
        name = self._printer.text(name_node)
        symbol = scope.symbols.get(name)
        if symbol is None:
            symbol = Symbol(name=name, kind=kind)
            scope.symbols[name] = symbol
        symbol.declarations.append(declaration)
        self._declared[node_key(name_node)] = symbol

    def _declare(self, node: Node, scope: Scope) -> Scope:
        kind = node.type

        if kind in FUNCTION_DECLARATIONS or kind in CLASS_DECLARATIONS or kind in TYPE_DECLARATIONS:
            name = name_of(node)
            if name is not None:
                symbol_kind = "class" if kind in CLASS_DECLARATIONS else kind.split("_")[0]
                self._add(scope, name, symbol_kind, node)
        elif kind == "variable_declarator":
            parent = node.parent
            # `var` is function scoped, `let` and `const` are block scoped
            target = (
                scope.function_scope()
                if parent is not None and parent.type == "variable_declaration"
                else scope
            )
            for ident in binding_names(node.child_by_field_name("name")):
                self._add(target, ident, "variable", node)
        elif kind == "import_clause":
            for child in node.named_children:
                if child.type == "identifier":
                    self._add(scope, child, "import", node)
        elif kind == "import_specifier":
            local = node.child_by_field_name("alias") or node.child_by_field_name("name")
            if local is not None:
                self._add(scope, local, "import", node)
        elif kind == "namespace_import":
            for child in node.named_children:
                if child.type == "identifier":
                    self._add(scope, child, "import", node)

        if kind in MEMBERS or is_enum_member(node):
            self._declare_member(node)

        if kind in FUNCTION_LIKE:
            inner = self._open(node, scope, is_function=True)
            name = name_of(node)
            if kind in FUNCTION_EXPRESSIONS and name is not None:
                # A named function expression sees its own name
                self._add(inner, name, "function", node)
            self._declare_parameters(node, inner)
            return inner

        if kind in BLOCK_SCOPES:
            parent = node.parent
            if kind == "statement_block" and parent is not None and parent.type in FUNCTION_LIKE:
                # A function body shares the scope of its parameters
                return scope
            inner = self._open(node, scope, is_function=False)
            if kind == "catch_clause":
                for ident in binding_names(node.child_by_field_name("parameter")):
                    self._add(inner, ident, "parameter", node)
            return inner

        return scope

    def _declare_parameters(self, function: Node, scope: Scope) -> None:
        single = function.child_by_field_name("parameter")
        if single is not None:
            # `x => ...`
            for ident in binding_names(single):
                self._add(scope, ident, "parameter", single)
        params = function.child_by_field_name("parameters")
        if params is None:
            return
        for param in params.named_children:
            if param.type in PARAMETER_KINDS:
                pattern = param.child_by_field_name("pattern")
            else:
                pattern = param
            for ident in binding_names(pattern):
                self._add(scope, ident, "parameter", param)

    def _declare_member(self, member: Node) -> None:
        name = member_name_of(member)
        if name is None:
            return
        member_name = self._member_text(name)
        # Members sit in a body; the body's parent names the owner
        owner = member.parent.parent if member.parent is not None else None
        owner_name = member_name_of(owner) if owner is not None else None
        if owner_name is not None and owner_name.type not in ("object_pattern", "array_pattern"):
            # Qualified so same-named members of different owners stay apart
            member_name = f"{self._member_text(owner_name)}.{member_name}"
        self._declared[node_key(name)] = Symbol(
            name=member_name, kind="member", declarations=[member]
        )

    def _member_text(self, name: Node) -> str:
        text = self._printer.text(name)
        # `"quoted-key": 1` is keyed by the string's contents
        if name.type == "string" and len(text) >= 2:
            return text[1:-1]
        return text

    # --- Resolution ---

    def scope_of(self, node: Node) -> Scope:
        current: Optional[Node] = node.parent
        while current is not None:
            scope = self._scopes.get(node_key(current))
            if scope is not None:
                return scope
            current = current.parent
        return self.global_scope

    def ambient(self, name: str) -> Symbol:
        symbol = self._ambient.get(name)
        if symbol is None:
            symbol = Symbol(name=name, kind="ambient")
            self._ambient[name] = symbol
        return symbol

    def symbol_at(self, node: Node) -> Optional[Symbol]:
        """
        The symbol a name node declares or refers to.

        Declaration names return their own symbol, references resolve
        through the enclosing scopes, and member-style JSX tags such as
        `<Foo.Bar>` resolve to an ambient symbol named after the tag. Nodes
        that are not names return None.
        """
        declared = self._declared.get(node_key(node))
        if declared is not None:
            return declared
        if node.type in REFERENCE_KINDS:
            name = self._printer.text(node)
            return self.scope_of(node).lookup(name) or self.ambient(name)
        if node.type in ("member_expression", "nested_identifier"):
            parent = node.parent
            if parent is not None and parent.type in JSX_TAG_PARENTS:
                return self.ambient(self._printer.print(node))
        return None

    # --- Descriptions ---

    def documentation(self, symbol: Symbol) -> str:
        for declaration in symbol.declarations:
            comment = attached_comment(declaration, self._source)
            if comment is not None:
                return parse_doc_comment(comment, self._source).main or ""
        return ""

    def type_signature(self, symbol: Symbol) -> str:
        """A printed approximation of the symbol's type."""
        if symbol.is_ambient:
            return "any"
        declaration = symbol.declarations[0]
        kind = declaration.type
        if kind in FUNCTION_LIKE or kind in {"method_signature", "abstract_method_signature"}:
            return self._signature(declaration)
        if kind in CLASS_DECLARATIONS:
            return f"typeof {symbol.name}"
        if kind in TYPE_DECLARATIONS:
            return symbol.name
        if kind in VALUE_DECLARATIONS:
            annotation = self._annotation(declaration.child_by_field_name("type"))
            if annotation:
                return annotation
            value = declaration.child_by_field_name("value")
            if value is not None:
                if value.type in FUNCTION_EXPRESSIONS:
                    return self._signature(value)
                return LITERAL_TYPES.get(value.type, "any")
        return "any"

    def _annotation(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self._printer.print(node).lstrip(":").strip()

    def _signature(self, function: Node) -> str:
        params = function.child_by_field_name("parameters")
        if params is not None:
            printed_params = self._printer.print(params)
        else:
            single = function.child_by_field_name("parameter")
            printed_params = f"({self._printer.print(single)})" if single is not None else "()"
        returns = self._annotation(function.child_by_field_name("return_type"))
        return f"{printed_params} => {returns or 'any'}"
