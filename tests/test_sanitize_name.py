import pytest

from tidy_core import is_valid_filename, sanitize_filename
from tidy_core.sanitize_name import INVALID_CHARS, MAX_FILENAME_LENGTH, RESERVED_NAMES, split_filename


def test_valid_names():
    assert is_valid_filename("report.pdf") == (True, None)
    assert is_valid_filename("a" * MAX_FILENAME_LENGTH)[0]


def test_invalid_names():
    assert not is_valid_filename("")[0]
    assert not is_valid_filename("a/b.txt")[0]
    assert not is_valid_filename("what?.txt")[0]
    assert not is_valid_filename("a" * (MAX_FILENAME_LENGTH + 1))[0]
    assert not is_valid_filename("file.")[0]
    assert not is_valid_filename("file ")[0]


def test_reserved_names_any_case():
    valid, reason = is_valid_filename("con.txt")
    assert not valid
    assert "reserved" in reason
    assert not is_valid_filename("LPT1")[0]


def test_split_filename():
    assert split_filename("photo.jpg") == ("photo", ".jpg")
    assert split_filename("archive.tar.gz") == ("archive.tar", ".gz")
    assert split_filename(".gitignore") == (".gitignore", "")
    assert split_filename("README") == ("README", "")


def test_replaces_invalid_characters():
    result = sanitize_filename("a<b>c.txt")
    assert result.sanitized == "a_b_c.txt"
    assert result.was_modified
    assert result.changes[0].change_type == "char_replacement"


def test_collapses_replacement_runs():
    assert sanitize_filename("a::b.txt").sanitized == "a_b.txt"


def test_reserved_name_gets_suffix():
    result = sanitize_filename("CON.txt")
    assert result.sanitized == "CON_file.txt"
    assert [c.change_type for c in result.changes] == ["reserved_name"]


def test_trailing_dots_and_spaces_removed():
    assert sanitize_filename("file. .txt").sanitized == "file.txt"
    assert sanitize_filename("notes...").sanitized == "notes"
    assert sanitize_filename("photo.jpg ").sanitized == "photo.jpg"


def test_truncation_keeps_extension():
    result = sanitize_filename("a" * 300 + ".txt")
    assert len(result.sanitized) == MAX_FILENAME_LENGTH
    assert result.sanitized.endswith("....txt")
    assert result.changes[-1].change_type == "truncation"


def test_clean_name_is_untouched():
    result = sanitize_filename("2024-07-15_vacation.jpg")
    assert result.sanitized == "2024-07-15_vacation.jpg"
    assert not result.was_modified
    assert result.changes == []


def test_sanitized_output_is_valid():
    for name in ["a<b>.txt", "CON.txt", "x" * 400 + ".md", "bad|name?.png"]:
        assert is_valid_filename(sanitize_filename(name).sanitized)[0], name


@pytest.mark.parametrize("name", [
    "CON..",
    "CON .txt",
    "aux ..png",
    "nul. . .",
    "LPT1 .tar.gz",
    "com3.",
    "prn:",
    "a<b>.txt",
    "what?.txt ",
    "report. .pdf",
    "trailing   ",
    "x" * 400 + ".md",
    "y" * 300,
    "bad|name?.png",
])
def test_sanitized_output_has_no_invalid_parts(name):
    sanitized = sanitize_filename(name).sanitized
    assert not any(c in INVALID_CHARS for c in sanitized)
    assert len(sanitized) <= MAX_FILENAME_LENGTH
    assert sanitized.split(".")[0].upper() not in RESERVED_NAMES


def test_trim_exposing_reserved_name_gets_suffix():
    assert sanitize_filename("CON..").sanitized == "CON_file"
    assert sanitize_filename("CON .txt").sanitized == "CON_file.txt"
    assert sanitize_filename("aux ..png").sanitized == "aux_file.png"
