import pytest

from studybot.utils.formatting import (
    compact_code,
    file_display_name,
    file_type,
    human_size,
    to_display_name,
)


def test_to_display_name_strips_direction_and_underscores():
    raw = "\u200eHello_\u200fWorld"
    assert to_display_name(raw) == "Hello World"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1718000000000_unit_1-notes.pdf", "unit 1 notes"),
        ("Lab-Manual.docx", "Lab Manual"),
        ("plain", "plain"),
        ("", ""),
    ],
)
def test_file_display_name(raw, expected):
    assert file_display_name(raw) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("a.PDF", "pdf"),
        ("slides.pptx", "ppt"),
        ("data.csv", "xlsx"),
        ("photo.jpeg", "image"),
        ("archive.7z", "zip"),
        ("README", "other"),
        ("binary.exe", "other"),
    ],
)
def test_file_type(name, expected):
    assert file_type(name) == expected


@pytest.mark.parametrize(
    "size, expected",
    [
        (None, "0 KB"),
        (0, "0 KB"),
        (1, "1 KB"),
        (1024, "1 KB"),
        (1025, "2 KB"),
        (1024 * 1024, "1024 KB"),
        (3 * 1024 * 1024 // 2, "1.5 MB"),
    ],
)
def test_human_size(size, expected):
    assert human_size(size) == expected


def test_compact_code():
    assert compact_code("CSA 103") == "CSA103"
    assert compact_code("") == ""
