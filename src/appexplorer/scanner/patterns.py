from typing import Iterable


class NamePattern:
    """
    Matches printed source text against a fixed set of spellings.

    This recognizes `class X extends React.Component` or `React.lazy(...)` by
    how the expression is written, not by what it resolves to: an aliased or
    renamed import is not recognized. Swap in another NamePatternProtocol
    implementation to resolve imports instead.
    """

    def __init__(self, names: Iterable[str]):
        self.names = frozenset(names)

    def matches(self, printed: str) -> bool:
        return printed in self.names

    def __repr__(self) -> str:
        return f"NamePattern({sorted(self.names)!r})"
