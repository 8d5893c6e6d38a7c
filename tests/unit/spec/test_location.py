import pytest

from appexplorer.spec import LocationFormatError, SourceLocation, format_location, location_file


def test_format_single_line_and_range():
    assert format_location("src/app.tsx", 3) == "src/app.tsx#L3"
    assert format_location("src/app.tsx", 3, 3) == "src/app.tsx#L3"
    assert format_location("src/app.tsx", 3, 7) == "src/app.tsx#L3-7"


@pytest.mark.parametrize(
    "location, expected",
    [
        ("src/app.tsx#L3", SourceLocation("src/app.tsx", 3)),
        ("src/app.tsx#L3-7", SourceLocation("src/app.tsx", 3, 7)),
        ("src/app.tsx#L3-L7", SourceLocation("src/app.tsx", 3, 7)),
    ],
)
def test_parse(location, expected):
    assert SourceLocation.parse(location) == expected


def test_parse_then_format_keeps_the_string():
    assert SourceLocation.parse("a/b/c.ts#L10-12").format() == "a/b/c.ts#L10-12"


@pytest.mark.parametrize(
    "location",
    [
        "src/app.tsx",
        "#L3",
        "src/app.tsx#L3#L4",
    ],
)
def test_parse_rejects_unsplittable_locations(location):
    with pytest.raises(LocationFormatError):
        SourceLocation.parse(location)


def test_parse_rejects_non_numeric_start():
    with pytest.raises(LocationFormatError, match="First line not found"):
        SourceLocation.parse("src/app.tsx#Lten")


def test_location_file():
    assert location_file("src/app.tsx#L3-7") == "src/app.tsx"
