from typing import List, Optional, Sequence

from tree_sitter import Node

from appexplorer.spec import (
    UNKNOWN_LOCATION,
    DefinedComponent,
    NodeIdentity,
    ReferencedComponent,
    UnsupportedSyntaxError,
)
from .context import ScannerContext
from .syntax import (
    CLASS_DECLARATIONS,
    FUNCTION_DECLARATIONS,
    FUNCTION_EXPRESSIONS,
    JSX_ELEMENTS,
    VARIABLE_DECLARATIONS,
    declarators,
    heritage_base,
    is_dynamic_import,
    name_of,
    unwrap_export,
)
from .traversal import DebugSink, walk


def _unique(identities: List[NodeIdentity]) -> List[NodeIdentity]:
    return list(dict.fromkeys(identities))


def _definition_location(tag: Node, context: ScannerContext) -> str:
    symbol = context.session.checker.symbol_at(tag)
    if symbol is None or not symbol.declarations:
        return UNKNOWN_LOCATION
    return context.session.location(symbol.declarations[0])


def _route_component(attribute: Node, context: ScannerContext, debug: DebugSink) -> Optional[NodeIdentity]:
    """`component={Something}` on an element counts as rendering `Something`."""
    children = attribute.named_children
    if len(children) < 2:
        return None
    name, value = children[0], children[1]
    if name.type != "property_identifier" or context.session.text(name) != "component":
        debug("attribute", attribute)
        return None
    if value.type != "jsx_expression" or not value.named_children:
        return None
    expression = value.named_children[0]
    if expression.type != "identifier":
        return None

    symbol = context.session.checker.symbol_at(expression)
    if symbol is None or not symbol.declarations:
        return None
    identity = context.identify(expression)
    context.data.reference(
        identity,
        ReferencedComponent(
            name=symbol.name,
            definition_location=context.session.location(symbol.declarations[0]),
        ),
    )
    return identity


def find_jsx(node: Node, context: ScannerContext) -> List[NodeIdentity]:
    """
    Collects the components a function-like or member body renders.

    Tags that start with a lowercase letter are host elements like `<div>`
    and are skipped at any depth; `<Foo>`, `<_Foo>` and `<$Foo>` all count.
    Every match is also registered as a referenced-only component, with
    `"?"` as its location when the file has no declaration for it. The
    result is deduplicated in first-seen order.
    """
    found: List[NodeIdentity] = []

    def on_visit(n: Node, debug: DebugSink, ancestors: Sequence[Node]) -> None:
        if n.type not in JSX_ELEMENTS:
            return None
        tag = n.child_by_field_name("name")
        if tag is None:
            # Fragments have no tag name
            return None
        if tag.type == "jsx_namespace_name":
            raise UnsupportedSyntaxError(
                f"Namespaced JSX tag names are not supported: {context.session.text(tag)}"
            )
        printed = context.session.printer.print(tag)
        if printed[:1].islower():
            return None

        identity = context.identify(tag)
        symbol = context.session.checker.symbol_at(tag)
        context.data.reference(
            identity,
            ReferencedComponent(
                name=symbol.name if symbol is not None else printed,
                definition_location=_definition_location(tag, context),
            ),
        )
        found.append(identity)

        for attribute in n.named_children:
            if attribute.type == "jsx_attribute":
                route = _route_component(attribute, context, debug)
                if route is not None:
                    found.append(route)
        return None

    walk(node, on_visit, context.debug)
    return _unique(found)


def _exported_as(
    context: ScannerContext, declaration: Node, name: str, is_default: bool
) -> Optional[str]:
    if not context.session.is_exported(declaration):
        return None
    return "default" if is_default else name


def _define(
    context: ScannerContext,
    name_node: Node,
    references: List[NodeIdentity],
    exported_as: Optional[str],
    display_name: Optional[str] = None,
    identity: Optional[NodeIdentity] = None,
) -> NodeIdentity:
    session = context.session
    identity = identity or context.identify(name_node)
    symbol = session.checker.symbol_at(name_node)
    location = session.location(name_node)
    context.data.define(
        identity,
        DefinedComponent(
            name=display_name or symbol.name,
            location=location,
            exported_as=exported_as,
            referenced_components=_unique(references),
            meta=session.serialize_symbol(symbol, location),
        ),
    )
    if exported_as is not None:
        context.data.export(identity)
    return identity


def detect_function_component(node: Node, context: ScannerContext) -> None:
    """
    Top-level `function Name()` declarations, and `const Name = () => ...`
    or `const Name = function () {}`, that render at least one component.
    """
    declaration, is_default = unwrap_export(node)

    # `export default function Name()` may parse as a named function expression
    named_default = is_default and declaration.type in FUNCTION_EXPRESSIONS
    if declaration.type in FUNCTION_DECLARATIONS or named_default:
        name = name_of(declaration)
        if name is None:
            return
        references = find_jsx(declaration, context)
        if references:
            context.debug("Function component", name)
            _define(
                context,
                name,
                references,
                _exported_as(context, declaration, context.session.text(name), is_default),
            )
        return

    if declaration.type in VARIABLE_DECLARATIONS:
        for declarator in declarators(declaration):
            name = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name is None or name.type != "identifier" or value is None:
                continue
            if value.type not in FUNCTION_EXPRESSIONS:
                continue
            references = find_jsx(value, context)
            if references:
                context.debug("Function component", name)
                _define(
                    context,
                    name,
                    references,
                    _exported_as(context, declarator, context.session.text(name), is_default),
                )


def detect_class_component(node: Node, context: ScannerContext) -> None:
    """
    Classes whose `extends` clause prints to a known component base class.

    `render` contributes the class's references. Any other method or field
    that renders components becomes a `<Class>.<member>()` pseudo-component
    the class references in turn.
    """
    declaration, is_default = unwrap_export(node)
    if declaration.type not in CLASS_DECLARATIONS:
        return
    name = name_of(declaration)
    base = heritage_base(declaration)
    if name is None or base is None:
        return
    if not context.base_classes.matches(context.session.printer.print(base)):
        return

    context.debug(
        "WARNING: This was checked by the string name, not resolving the import",
        declaration,
    )
    session = context.session
    class_id = context.identify(name)
    class_name = session.text(name)
    references: List[NodeIdentity] = []

    body = declaration.child_by_field_name("body")
    members = body.named_children if body is not None else []
    for member in members:
        if member.type == "comment":
            continue
        if member.type == "method_definition":
            rendered_in = member
        elif member.type == "public_field_definition":
            rendered_in = member.child_by_field_name("value")
        else:
            context.debug("Unhandled member type", member)
            continue

        member_name_node = name_of(member)
        if member_name_node is None or rendered_in is None:
            continue
        rendered = find_jsx(rendered_in, context)
        if not rendered:
            continue

        member_name = session.text(member_name_node)
        if member_name == "render":
            references.extend(rendered)
            continue

        member_id = f"{class_id}.{member_name}()"
        _define(
            context,
            member_name_node,
            rendered,
            None,
            display_name=f"{class_name}.{member_name}()",
            identity=member_id,
        )
        references.append(member_id)

    _define(
        context,
        name,
        references,
        _exported_as(context, declaration, class_name, is_default),
        identity=class_id,
    )


def detect_lazy_component(node: Node, context: ScannerContext) -> None:
    """
    `const X = React.lazy(() => import("./X"))`: registers `X` as a
    referenced-only component at the variable.

    The loader is recognized by how its callee is spelled, not by resolving
    the import it came from.
    """

    def on_visit(n: Node, debug: DebugSink, ancestors: Sequence[Node]) -> None:
        if not is_dynamic_import(n):
            return None

        found_loader = False
        for ancestor in reversed(ancestors):
            if not found_loader:
                if ancestor.type != "call_expression":
                    continue
                callee = ancestor.child_by_field_name("function")
                if callee is None or not context.lazy_loaders.matches(
                    context.session.printer.print(callee)
                ):
                    continue
                debug("WARNING: This was detected with a string check against the lazy loader")
                found_loader = True
            elif ancestor.type == "variable_declarator":
                name = ancestor.child_by_field_name("name")
                if name is None or name.type != "identifier":
                    raise UnsupportedSyntaxError(
                        f"Unhandled node type: {name.type if name is not None else 'missing name'}"
                    )
                context.data.reference(
                    context.identify(name),
                    ReferencedComponent(
                        name=context.session.text(name),
                        definition_location=context.session.location(ancestor),
                    ),
                )
                break
        return None

    walk(node, on_visit, context.debug)
