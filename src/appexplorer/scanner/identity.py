from dataclasses import dataclass
from typing import Callable, List, Optional

from tree_sitter import Node

from appexplorer.spec import NodeIdentity, UnresolvableIdentityError
from .binder import binding_names
from .session import CompilationSession
from .syntax import (
    CLASS_DECLARATIONS,
    FUNCTION_DECLARATIONS,
    FUNCTION_EXPRESSIONS,
    MEMBERS,
    TYPE_DECLARATIONS,
    VARIABLE_DECLARATIONS,
    declarators,
    member_name_of,
    name_of,
)


@dataclass(frozen=True)
class IdentityRule:
    """
    One fallback step: when `matches(node)` holds, identity is computed for
    `descend(node)` instead. `descend` always returns a strict descendant, so
    the chain terminates.
    """

    name: str
    matches: Callable[[Node], bool]
    descend: Callable[[Node], Optional[Node]]


def _first(iterable) -> Optional[Node]:
    return next(iter(iterable), None)


def _is_named(kinds) -> Callable[[Node], bool]:
    return lambda node: node.type in kinds and name_of(node) is not None


def _declarator_name(node: Node) -> Optional[Node]:
    return node.child_by_field_name("name")


def _export_declaration(node: Node) -> Optional[Node]:
    return node.child_by_field_name("declaration")


def _export_value(node: Node) -> Optional[Node]:
    return node.child_by_field_name("value")


DEFAULT_RULES: List[IdentityRule] = [
    IdentityRule("function declaration", _is_named(FUNCTION_DECLARATIONS), name_of),
    IdentityRule(
        "variable declaration list",
        lambda node: node.type in VARIABLE_DECLARATIONS and _first(declarators(node)) is not None,
        lambda node: _first(declarators(node)),
    ),
    IdentityRule(
        "variable declarator",
        lambda node: node.type == "variable_declarator" and _declarator_name(node) is not None,
        _declarator_name,
    ),
    IdentityRule(
        "destructuring pattern",
        lambda node: node.type in ("object_pattern", "array_pattern") and bool(binding_names(node)),
        lambda node: _first(binding_names(node)),
    ),
    IdentityRule("class declaration", _is_named(CLASS_DECLARATIONS), name_of),
    IdentityRule(
        "export statement",
        lambda node: node.type == "export_statement" and _export_declaration(node) is not None,
        _export_declaration,
    ),
    IdentityRule(
        "default export value",
        lambda node: node.type == "export_statement" and _export_value(node) is not None,
        _export_value,
    ),
    IdentityRule("named expression", _is_named(FUNCTION_EXPRESSIONS | {"class"}), name_of),
    IdentityRule("type declaration", _is_named(TYPE_DECLARATIONS), name_of),
    IdentityRule(
        "namespace or declared function",
        _is_named({"internal_module", "module", "function_signature"}),
        name_of,
    ),
    IdentityRule(
        "ambient declaration",
        lambda node: node.type == "ambient_declaration" and bool(node.named_children),
        lambda node: node.named_children[0],
    ),
    # Class, interface, enum and object literal members
    IdentityRule(
        "member",
        lambda node: node.type in MEMBERS and member_name_of(node) is not None,
        member_name_of,
    ),
]


class IdentityResolver:
    """
    Computes `<path>:<symbolName>` keys for syntax nodes.

    A node the binder resolves to a symbol is keyed by that symbol. Otherwise
    the first matching rule descends into a child and resolution repeats. A
    node no rule covers is a gap in the rules, so it raises instead of
    producing an unstable key.
    """

    def __init__(self, session: CompilationSession, rules: Optional[List[IdentityRule]] = None):
        self.session = session
        self.rules = rules if rules is not None else DEFAULT_RULES

    def identify(self, node: Node) -> NodeIdentity:
        current: Optional[Node] = node
        while current is not None:
            symbol = self.session.checker.symbol_at(current)
            if symbol is not None:
                return f"{self.session.path}:{symbol.name}"

            for rule in self.rules:
                if rule.matches(current):
                    current = rule.descend(current)
                    break
            else:
                raise UnresolvableIdentityError(current.type, self.session.printer.print(current))

        raise UnresolvableIdentityError(node.type, self.session.printer.print(node))
