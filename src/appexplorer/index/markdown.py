import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from appexplorer.spec import ScanReport, location_file

HEADER = """\
# What is this file?

AppExplorer is an app for documenting and drawing information about a project.
Its main target is a visual board, but it uses this markdown file as an index.
That produces a useful (local) guide to points of interest, but for way more
context, check out the board and how those points connect."""

INDEX_HEADING = "# INDEX"
PROJECTS_HEADING = "# SUB-PROJECTS"
INDENT = "  "

LINK_LINE = re.compile(r"- \[(.*)\]\((.*)\)")
FILE_LINE = re.compile(r"- (.*)")


@dataclass
class MDLink:
    name: str
    location: str


@dataclass
class MDFileIndex:
    filename: str
    items: List[MDLink] = field(default_factory=list)


@dataclass
class MarkdownData:
    projects: List[MDLink] = field(default_factory=list)
    files: List[MDFileIndex] = field(default_factory=list)


def _link(item: MDLink) -> str:
    return f"- [{item.name}]({item.location})\n"


def _file_index(file: MDFileIndex) -> str:
    return f"- {file.filename}\n" + "".join(INDENT + _link(item) for item in file.items)


def generate_markdown(data: MarkdownData) -> str:
    files = "".join(_file_index(f) for f in data.files)
    projects = "".join(_link(p) for p in data.projects)
    return (
        f"{HEADER}\n\n"
        f"{INDEX_HEADING}\n\n{files}\n"
        f"{PROJECTS_HEADING}\n\n{projects}"
    )


def read_markdown(md: str) -> MarkdownData:
    """Parses a document produced by `generate_markdown`."""
    _, _, body = md.partition(INDEX_HEADING)
    index_part, _, projects_part = body.partition(PROJECTS_HEADING)

    data = MarkdownData()
    current: Optional[MDFileIndex] = None
    for line in index_part.split("\n"):
        link = LINK_LINE.search(line)
        if link:
            if current is None:
                raise ValueError(f"Index link without a file heading: {line.strip()}")
            current.items.append(MDLink(name=link.group(1), location=link.group(2)))
            continue
        file_match = FILE_LINE.search(line)
        if file_match:
            current = MDFileIndex(filename=file_match.group(1).strip())
            data.files.append(current)

    for line in projects_part.split("\n"):
        link = LINK_LINE.search(line)
        if link:
            data.projects.append(MDLink(name=link.group(1), location=link.group(2)))
    return data


def _item_name(text: str) -> str:
    # Links are single-line
    return " ".join(text.split())


def make_index_from_report(report: ScanReport) -> List[MDFileIndex]:
    """Groups a report's annotations by file, keeping their order."""
    index: List[MDFileIndex] = []
    for annotation in report.annotations:
        filename = location_file(annotation.location)
        if not index or index[-1].filename != filename:
            index.append(MDFileIndex(filename=filename))
        index[-1].items.append(
            MDLink(name=_item_name(annotation.text), location=annotation.location)
        )
    return index


def make_index_from_reports(reports: Iterable[ScanReport]) -> List[MDFileIndex]:
    index: List[MDFileIndex] = []
    for report in reports:
        index.extend(make_index_from_report(report))
    return index
