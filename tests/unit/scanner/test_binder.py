from pathlib import Path
from textwrap import dedent

from appexplorer.scanner import CompilationSession
from appexplorer.test_utils import find_node, find_nodes
from appexplorer.workspace import RepoInfo


def make_session(source: str) -> CompilationSession:
    return CompilationSession(Path("/repo"), "src/app.tsx", source=dedent(source), repo_info=RepoInfo())


def test_references_resolve_to_hoisted_declarations():
    session = make_session(
        """\
        const el = <Title />;
        function Title() {
          return null;
        }
        """
    )
    reference, declaration = find_nodes(session, "identifier", "Title")

    symbol = session.checker.symbol_at(reference)

    assert symbol is session.checker.symbol_at(declaration)
    assert symbol.name == "Title"
    assert [d.type for d in symbol.declarations] == ["function_declaration"]


def test_unbound_names_resolve_to_one_ambient_symbol():
    session = make_session(
        """\
        const a = <Missing />;
        const b = <Missing />;
        """
    )
    first, second = find_nodes(session, "identifier", "Missing")

    symbol = session.checker.symbol_at(first)

    assert symbol.is_ambient
    assert symbol.declarations == []
    assert session.checker.symbol_at(second) is symbol


def test_inner_declarations_shadow_outer_ones():
    session = make_session(
        """\
        const Title = 1;
        function Page() {
          const Title = 2;
          return Title;
        }
        """
    )
    outer_decl, inner_decl, inner_ref = find_nodes(session, "identifier", "Title")

    inner = session.checker.symbol_at(inner_ref)

    assert inner is session.checker.symbol_at(inner_decl)
    assert inner is not session.checker.symbol_at(outer_decl)


def test_var_is_function_scoped_and_let_is_block_scoped():
    session = make_session(
        """\
        function f(flag) {
          if (flag) {
            var a = 1;
            let b = 2;
          }
          return a + b;
        }
        """
    )
    a_ref = find_node(session, "identifier", "a", index=1)
    b_ref = find_node(session, "identifier", "b", index=1)

    assert not session.checker.symbol_at(a_ref).is_ambient
    assert session.checker.symbol_at(b_ref).is_ambient


def test_imports_bind_their_local_names():
    session = make_session(
        """\
        import React, { Card as Tile } from "ui";
        import * as Icons from "icons";
        const a = <Tile />;
        const b = React;
        const c = Icons;
        """
    )
    tile = session.checker.symbol_at(find_node(session, "identifier", "Tile", index=1))
    react = session.checker.symbol_at(find_node(session, "identifier", "React", index=1))
    icons = session.checker.symbol_at(find_node(session, "identifier", "Icons", index=1))

    assert tile.name == "Tile"
    assert tile.declarations[0].type == "import_specifier"
    assert react.kind == "import"
    assert icons.kind == "import"


def test_parameters_and_destructuring_bind():
    session = make_session(
        """\
        function Row({ item, onSelect: select }, [first]) {
          return [item, select, first];
        }
        """
    )
    for name in ("item", "select", "first"):
        ref = find_nodes(session, "identifier", name)[-1]
        symbol = session.checker.symbol_at(ref)
        assert symbol.kind == "parameter", name


def test_catch_parameter_binds_in_its_clause():
    session = make_session(
        """\
        try {
          run();
        } catch (err) {
          report(err);
        }
        """
    )
    err_ref = find_node(session, "identifier", "err", index=1)
    assert session.checker.symbol_at(err_ref).kind == "parameter"


def test_class_members_get_qualified_symbols():
    session = make_session(
        """\
        class Board {
          render() {}
        }
        class Card {
          render() {}
        }
        """
    )
    first, second = find_nodes(session, "property_identifier", "render")

    assert session.checker.symbol_at(first).name == "Board.render"
    assert session.checker.symbol_at(second).name == "Card.render"


def test_interface_enum_and_object_members_are_qualified_by_owner():
    # Arrange
    session = make_session(
        """\
        interface Props {
          size: number;
        }
        enum Mode {
          Dark,
          Light = 2,
        }
        const theme = {
          accent: "red",
        };
        """
    )
    checker = session.checker

    # Act
    names = [
        checker.symbol_at(find_node(session, "property_identifier", text)).name
        for text in ("size", "Dark", "Light", "accent")
    ]

    # Assert
    assert names == ["Props.size", "Mode.Dark", "Mode.Light", "theme.accent"]
    size = checker.symbol_at(find_node(session, "property_identifier", "size"))
    assert checker.type_signature(size) == "number"


def test_member_expression_tags_are_ambient():
    session = make_session("const a = <Menu.Item />;\n")
    element = find_node(session, "jsx_self_closing_element")
    tag = element.child_by_field_name("name")

    symbol = session.checker.symbol_at(tag)

    assert symbol.name == "Menu.Item"
    assert symbol.is_ambient


def test_non_name_nodes_have_no_symbol():
    session = make_session("const a = 1 + 2;\n")
    assert session.checker.symbol_at(find_node(session, "binary_expression")) is None


def test_type_signatures():
    session = make_session(
        """\
        class Widget {}
        const count: number = 1;
        const label = "x";
        const render = (props: Props) => null;
        interface Props {}
        """
    )
    checker = session.checker

    def signature(kind, name):
        node = find_node(session, kind, name)
        return checker.type_signature(checker.symbol_at(node))

    assert signature("type_identifier", "Widget") == "typeof Widget"
    assert signature("identifier", "count") == "number"
    assert signature("identifier", "label") == "string"
    assert signature("identifier", "render") == "(props: Props) => any"
    assert signature("type_identifier", "Props") == "Props"
