from .markdown import (
    HEADER,
    MarkdownData,
    MDFileIndex,
    MDLink,
    generate_markdown,
    make_index_from_report,
    make_index_from_reports,
    read_markdown,
)

__all__ = [
    "HEADER",
    "MarkdownData",
    "MDFileIndex",
    "MDLink",
    "generate_markdown",
    "make_index_from_report",
    "make_index_from_reports",
    "read_markdown",
]
