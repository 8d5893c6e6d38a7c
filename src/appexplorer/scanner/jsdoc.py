import re
from dataclasses import dataclass, field
from typing import List, Optional

from tree_sitter import Node

from .syntax import statement_of

DOC_OPEN = "/**"
DOC_CLOSE = "*/"

BLOCK_TAG = re.compile(r"^@([A-Za-z_][\w-]*)(.*)$")
INLINE_LINK = re.compile(r"\{@(?:link|linkcode|linkplain)\b[^}]*\}")
LINE_PREFIX = re.compile(r"^\s*\*? ?")


@dataclass
class DocTag:
    name: str
    argument: str
    # 1-indexed file lines covered by the tag and its continuation lines
    start_line: int
    end_line: int
    segments: List[str] = field(default_factory=list)


@dataclass
class DocComment:
    node: Node
    main: Optional[str]
    segments: List[str]
    tags: List[DocTag]

    def find_tag(self, name: str) -> Optional[DocTag]:
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None


def split_segments(text: str) -> List[str]:
    """
    Splits comment text around inline `{@link ...}` tags.

    Each link becomes its own segment; surrounding text is stripped and empty
    pieces are dropped.
    """
    segments: List[str] = []
    cursor = 0
    for match in INLINE_LINK.finditer(text):
        before = text[cursor : match.start()].strip()
        if before:
            segments.append(before)
        segments.append(match.group(0))
        cursor = match.end()
    rest = text[cursor:].strip()
    if rest:
        segments.append(rest)
    return segments


def is_doc_comment(node: Node, source: bytes) -> bool:
    if node.type != "comment":
        return False
    raw = source[node.start_byte : node.end_byte]
    # `/**/` is an empty block comment, not a doc comment
    return raw.startswith(b"/**") and raw != b"/**/"


def attached_comment(declaration: Node, source: bytes) -> Optional[Node]:
    """The `/** */` comment directly preceding a declaration, if any."""
    previous = statement_of(declaration).prev_named_sibling
    if previous is not None and is_doc_comment(previous, source):
        return previous
    return None


def parse_doc_comment(node: Node, source: bytes) -> DocComment:
    raw = source[node.start_byte : node.end_byte].decode("utf-8", "replace")
    body = raw[len(DOC_OPEN) :]
    if body.endswith(DOC_CLOSE):
        body = body[: -len(DOC_CLOSE)]

    first_row = node.start_point[0]
    main_lines: List[str] = []
    tags: List[DocTag] = []
    tag_lines: List[List[str]] = []

    for offset, raw_line in enumerate(body.split("\n")):
        line = LINE_PREFIX.sub("", raw_line, count=1).rstrip()
        row = first_row + offset + 1
        match = BLOCK_TAG.match(line.lstrip())
        if match:
            tags.append(DocTag(match.group(1), "", start_line=row, end_line=row))
            tag_lines.append([match.group(2).strip()])
        elif tags:
            tag_lines[-1].append(line)
            if line.strip():
                tags[-1].end_line = row
        else:
            main_lines.append(line)

    for tag, lines in zip(tags, tag_lines):
        tag.argument = "\n".join(lines).strip()
        tag.segments = split_segments(tag.argument)

    main = "\n".join(main_lines).strip() or None
    return DocComment(
        node=node,
        main=main,
        segments=split_segments(main) if main else [],
        tags=tags,
    )
