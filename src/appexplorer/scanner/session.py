from pathlib import Path
from typing import Dict, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from appexplorer.spec import (
    SourceLocation,
    SourceNotFoundError,
    SourceParseError,
    SymbolDescriptor,
    format_location,
)
from appexplorer.spec.location import normalize_rel_path
from appexplorer.workspace.git import RepoInfo, read_repo_info
from .binder import Binder, Symbol
from .syntax import Printer, statement_of

TSX_EXTENSIONS = {".tsx", ".jsx", ".js", ".mjs", ".cjs"}
TYPESCRIPT_EXTENSIONS = {".ts", ".mts", ".cts"}

_languages: Dict[str, Language] = {}


def language_for(rel_path: str) -> Language:
    """
    Picks the grammar by extension. JSX is only legal in the TSX grammar,
    while the TypeScript grammar is needed for `<T>expr` casts in `.ts` files.
    """
    suffix = Path(rel_path).suffix.lower()
    if suffix in TSX_EXTENSIONS:
        grammar = "tsx"
    elif suffix in TYPESCRIPT_EXTENSIONS:
        grammar = "typescript"
    else:
        raise SourceParseError(f"Unsupported source extension '{suffix}' for {rel_path}")

    if grammar not in _languages:
        if grammar == "tsx":
            _languages[grammar] = Language(tree_sitter_typescript.language_tsx())
        else:
            _languages[grammar] = Language(tree_sitter_typescript.language_typescript())
    return _languages[grammar]


def _first_error(node: Node) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(child for child in reversed(current.children) if child.has_error)
    return None


class CompilationSession:
    """
    A parsed, bound single-file program.

    Holds the syntax tree, the binder standing in for a checker, and a
    printer. Sessions share nothing, so independent files can be scanned
    side by side.
    """

    def __init__(
        self,
        root_path: Path,
        rel_path: str,
        source: Union[str, bytes, None] = None,
        repo_info: Optional[RepoInfo] = None,
    ):
        self.root_path = root_path
        self.path = normalize_rel_path(rel_path)
        self.full_path = root_path / self.path

        if source is None:
            source = self._read_source()
        self.source: bytes = source.encode("utf-8") if isinstance(source, str) else source

        parser = Parser(language_for(self.path))
        self.tree = parser.parse(self.source)
        self.root: Node = self.tree.root_node
        if self.root.has_error:
            error = _first_error(self.root)
            line = error.start_point[0] + 1 if error is not None else 1
            raise SourceParseError(f"Syntax error in {self.path} near line {line}")

        self.printer = Printer(self.source)
        self.checker = Binder(self.root, self.source)
        self._repo_info = repo_info

    @classmethod
    def open(cls, root_path: Path, rel_path: str) -> "CompilationSession":
        return cls(root_path, rel_path)

    def _read_source(self) -> bytes:
        if not self.full_path.is_file():
            raise SourceNotFoundError(f"Expected to find a file at {self.full_path}")
        return self.full_path.read_bytes()

    @property
    def repo_info(self) -> RepoInfo:
        # Resolved on first use; git failures degrade to placeholders
        if self._repo_info is None:
            self._repo_info = read_repo_info(self.full_path)
        return self._repo_info

    def location(self, node: Node) -> str:
        return format_location(self.path, node.start_point[0] + 1, node.end_point[0] + 1)

    def text(self, node: Node) -> str:
        return self.printer.text(node)

    def is_exported(self, node: Node) -> bool:
        """True when the declaration is visible outside this file."""
        statement = statement_of(node)
        return statement.type == "export_statement"

    def serialize_symbol(self, symbol: Symbol, location: str) -> SymbolDescriptor:
        return SymbolDescriptor(
            path=self.path,
            location=location,
            name=symbol.name,
            documentation=self.checker.documentation(symbol),
            type_signature=self.checker.type_signature(symbol),
            code_link=self.repo_info.permalink(
                self.path, SourceLocation.parse(location).start_line
            ),
        )
