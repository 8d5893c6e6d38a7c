from pathlib import Path

import pytest

from appexplorer.patch import CrossReferenceWriter
from appexplorer.spec import CrossReferenceLink, LocationFormatError, SourceNotFoundError

PERMALINK = "https://app.example.com/board/1"

BOARD = """\
/**
 * Main board.
 * @AppExplorer
 */
export class Board {}

/**
 * Side panel.
 * @AppExplorer https://app.example.com/board/old
 */
export class Panel {}
"""


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "src" / "board.tsx"
    path.parent.mkdir(parents=True)
    path.write_text(BOARD, encoding="utf-8")
    return path


def test_write_fills_the_tag_on_the_given_line(tmp_path, source_file):
    # Arrange
    writer = CrossReferenceWriter(tmp_path)

    # Act
    changed = writer.write(CrossReferenceLink("src/board.tsx#L3", PERMALINK))

    # Assert
    assert changed is True
    lines = source_file.read_text(encoding="utf-8").split("\n")
    assert lines[2] == f" * @AppExplorer {PERMALINK}"
    # Only that line changed
    expected = BOARD.split("\n")
    expected[2] = lines[2]
    assert lines == expected


def test_write_is_idempotent(tmp_path, source_file):
    writer = CrossReferenceWriter(tmp_path)
    link = CrossReferenceLink("src/board.tsx#L3", PERMALINK)

    assert writer.write(link) is True
    after_first = source_file.read_bytes()
    assert writer.write(link) is False
    assert source_file.read_bytes() == after_first


def test_write_replaces_an_existing_permalink(tmp_path, source_file):
    writer = CrossReferenceWriter(tmp_path)

    writer.write(CrossReferenceLink("src/board.tsx#L9-11", PERMALINK))

    lines = source_file.read_text(encoding="utf-8").split("\n")
    assert lines[8] == f" * @AppExplorer {PERMALINK}"
    assert lines[2] == " * @AppExplorer"


def test_write_stops_before_closing_comment(tmp_path):
    path = tmp_path / "a.ts"
    path.write_text("/** Board @AppExplorer old */\nconst a = 1;\n", encoding="utf-8")

    CrossReferenceWriter(tmp_path).write(CrossReferenceLink("a.ts#L1", PERMALINK))

    assert path.read_text(encoding="utf-8") == (
        f"/** Board @AppExplorer {PERMALINK} */\nconst a = 1;\n"
    )


def test_write_preserves_crlf_line_endings(tmp_path):
    path = tmp_path / "a.ts"
    path.write_bytes(b"/**\r\n * Board\r\n * @AppExplorer\r\n */\r\nclass Board {}\r\n")

    CrossReferenceWriter(tmp_path).write(CrossReferenceLink("a.ts#L3", PERMALINK))

    assert path.read_bytes() == (
        b"/**\r\n * Board\r\n * @AppExplorer "
        + PERMALINK.encode()
        + b"\r\n */\r\nclass Board {}\r\n"
    )


def test_line_without_tag_is_left_alone(tmp_path, source_file):
    changed = CrossReferenceWriter(tmp_path).write(
        CrossReferenceLink("src/board.tsx#L2", PERMALINK)
    )
    assert changed is False
    assert source_file.read_text(encoding="utf-8") == BOARD


def test_custom_tag(tmp_path):
    path = tmp_path / "a.ts"
    path.write_text("// @Board\n", encoding="utf-8")

    CrossReferenceWriter(tmp_path, tag="Board").write(CrossReferenceLink("a.ts#L1", PERMALINK))

    assert path.read_text(encoding="utf-8") == f"// @Board {PERMALINK}\n"


def test_missing_file_raises(tmp_path):
    with pytest.raises(SourceNotFoundError):
        CrossReferenceWriter(tmp_path).write(CrossReferenceLink("missing.ts#L1", PERMALINK))


@pytest.mark.parametrize("location", ["src/board.tsx#L0", "src/board.tsx#L99", "src/board.tsx"])
def test_bad_locations_raise(tmp_path, source_file, location):
    with pytest.raises(LocationFormatError):
        CrossReferenceWriter(tmp_path).write(CrossReferenceLink(location, PERMALINK))
    assert source_file.read_text(encoding="utf-8") == BOARD


def test_write_all_results_follow_input_order(tmp_path, source_file):
    other = tmp_path / "other.ts"
    other.write_text("/** x @AppExplorer */\n", encoding="utf-8")
    links = [
        CrossReferenceLink("src/board.tsx#L3", PERMALINK),
        CrossReferenceLink("other.ts#L1", PERMALINK),
        CrossReferenceLink("src/board.tsx#L2", PERMALINK),
        CrossReferenceLink("src/board.tsx#L9", PERMALINK),
    ]

    results = CrossReferenceWriter(tmp_path).write_all(links)

    assert results == [True, True, False, True]
    assert other.read_text(encoding="utf-8") == f"/** x @AppExplorer {PERMALINK} */\n"


@pytest.mark.parametrize("location", ["../outside.tsx#L1", "src/../../outside.tsx#L1"])
def test_locations_outside_the_root_are_rejected(tmp_path, location):
    # Arrange
    root = tmp_path / "repo"
    root.mkdir()
    outside = tmp_path / "outside.tsx"
    outside.write_text("/** @AppExplorer */\n", encoding="utf-8")
    writer = CrossReferenceWriter(root)

    # Act / Assert
    with pytest.raises(LocationFormatError, match="outside"):
        writer.write(CrossReferenceLink(location, PERMALINK))
    assert outside.read_text(encoding="utf-8") == "/** @AppExplorer */\n"


def test_absolute_location_is_rejected(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    target = tmp_path / "elsewhere.tsx"
    target.write_text("/** @AppExplorer */\n", encoding="utf-8")

    with pytest.raises(LocationFormatError):
        CrossReferenceWriter(root).write(CrossReferenceLink(f"{target}#L1", PERMALINK))
