import logging
import re
from pathlib import Path
from typing import Dict, List, Sequence

from appexplorer.spec import (
    CrossReferenceLink,
    LocationFormatError,
    SourceLocation,
    SourceNotFoundError,
)

log = logging.getLogger(__name__)

# surrogateescape keeps undecodable bytes intact through the round trip
ENCODING = "utf-8"
ERRORS = "surrogateescape"


class CrossReferenceWriter:
    """
    Writes a confirmed permalink into the cross-reference tag of a source line.

    The patch is line-oriented: only the first line of the location is
    rewritten and every other byte of the file is preserved, including `\\r`
    line terminators. Writing the same permalink twice leaves the file as
    the first write did.
    """

    def __init__(self, root_path: Path, tag: str = "AppExplorer"):
        self.root_path = root_path
        self.tag = tag
        # The tag and its argument, up to the end of the line or a closing `*/`
        self._pattern = re.compile(
            "@" + re.escape(tag) + r"(?:(?!\*/)[^\n])*?(?=\s*\*/|$)"
        )

    def patch_line(self, line: str, permalink: str) -> str:
        body, terminator = (line[:-1], "\r") if line.endswith("\r") else (line, "")
        replacement = f"@{self.tag} {permalink}"
        patched = self._pattern.sub(lambda _: replacement, body, count=1)
        return patched + terminator

    def write(self, link: CrossReferenceLink) -> bool:
        """Returns True when the file content changed."""
        location = SourceLocation.parse(link.location)
        full_path = (self.root_path / location.path).resolve()
        if not full_path.is_relative_to(self.root_path.resolve()):
            raise LocationFormatError(f"{link.location} points outside {self.root_path}")
        if not full_path.is_file():
            raise SourceNotFoundError(f"Expected to find a file at {full_path}")
        if location.start_line < 1:
            raise LocationFormatError(f"First line not found in {link.location}")

        original = full_path.read_bytes().decode(ENCODING, ERRORS)
        lines = original.split("\n")
        index = location.start_line - 1
        if index >= len(lines):
            raise LocationFormatError(
                f"Line {location.start_line} is beyond the end of {location.path}"
            )

        lines[index] = self.patch_line(lines[index], link.permalink)
        updated = "\n".join(lines)
        if updated == original:
            log.debug(f"No change needed for {link.location}")
            return False

        full_path.write_bytes(updated.encode(ENCODING, ERRORS))
        return True

    def write_all(self, links: Sequence[CrossReferenceLink]) -> List[bool]:
        """
        Applies links one after another, file by file in order of first
        appearance. Results line up with `links`.
        """
        groups: Dict[str, List[int]] = {}
        for i, link in enumerate(links):
            groups.setdefault(SourceLocation.parse(link.location).path, []).append(i)

        results = [False] * len(links)
        for indices in groups.values():
            for i in indices:
                results[i] = self.write(links[i])
        return results
