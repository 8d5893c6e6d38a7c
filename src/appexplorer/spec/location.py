from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

from .exceptions import LocationFormatError

LINE_MARKER = "#L"


@dataclass(frozen=True)
class SourceLocation:
    """
    A 1-indexed, inclusive line span inside a repository-relative file.

    Wire format: `<relativePath>#L<startLine>` or
    `<relativePath>#L<startLine>-<endLine>`. Every collaborator that correlates
    a visual element with source code parses this string, so `format` and
    `parse` must stay inverse to each other.
    """

    path: str
    start_line: int
    end_line: Optional[int] = None

    def format(self) -> str:
        if self.end_line is None or self.end_line == self.start_line:
            return f"{self.path}{LINE_MARKER}{self.start_line}"
        return f"{self.path}{LINE_MARKER}{self.start_line}-{self.end_line}"

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, location: str) -> "SourceLocation":
        parts = location.split(LINE_MARKER)
        if len(parts) != 2 or not parts[0]:
            raise LocationFormatError(
                f"Cannot split '{location}' into a file and a line range"
            )
        file_part, lines_part = parts

        start_str, _, end_str = lines_part.partition("-")
        try:
            start_line = int(start_str, 10)
        except ValueError:
            raise LocationFormatError(f"First line not found in {location}") from None

        end_line: Optional[int] = None
        if end_str:
            # GitHub style ranges repeat the marker: #L3-L5
            try:
                end_line = int(end_str.lstrip("L"), 10)
            except ValueError:
                raise LocationFormatError(
                    f"Last line is not a number in {location}"
                ) from None

        return cls(path=file_part, start_line=start_line, end_line=end_line)


def format_location(path: str, start_line: int, end_line: Optional[int] = None) -> str:
    return SourceLocation(path, start_line, end_line).format()


def location_file(location: str) -> str:
    """Returns the file part of a location string without validating the lines."""
    return location.split(LINE_MARKER, 1)[0]


def normalize_rel_path(rel_path: str) -> str:
    # Locations always use forward slashes regardless of platform
    return PurePosixPath(rel_path.replace("\\", "/")).as_posix()
