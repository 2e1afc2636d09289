import pytest

from tidy_core import CaseStyle, normalize_case, normalize_filename
from tidy_core.case_style import split_into_words


def test_split_on_separators():
    assert split_into_words("hello_world-foo bar.baz") == ["hello", "world", "foo", "bar", "baz"]


def test_split_on_camel_case_boundary():
    assert split_into_words("helloWorld") == ["hello", "World"]
    assert split_into_words("HelloWorld") == ["Hello", "World"]


def test_split_ignores_repeated_separators():
    assert split_into_words("__a  b--") == ["a", "b"]


@pytest.mark.parametrize("style,source,expected", [
    (CaseStyle.NONE, "Hello World", "Hello World"),
    (CaseStyle.LOWERCASE, "Hello World", "hello world"),
    (CaseStyle.UPPERCASE, "Hello World", "HELLO WORLD"),
    (CaseStyle.CAPITALIZE, "HELLO WORLD", "Hello world"),
    (CaseStyle.TITLE_CASE, "hello world", "Hello World"),
    (CaseStyle.KEBAB_CASE, "helloWorld", "hello-world"),
    (CaseStyle.SNAKE_CASE, "Hello World", "hello_world"),
    (CaseStyle.CAMEL_CASE, "Hello World", "helloWorld"),
    (CaseStyle.PASCAL_CASE, "hello world", "HelloWorld"),
])
def test_normalize_case(style, source, expected):
    assert normalize_case(source, style) == expected


def test_filename_extension_is_lowercased():
    assert normalize_filename("Hello World.JPG", CaseStyle.KEBAB_CASE) == "hello-world.jpg"
    assert normalize_filename("My Document.PDF", CaseStyle.SNAKE_CASE) == "my_document.pdf"


def test_filename_none_is_passthrough():
    assert normalize_filename("Hello World.JPG", CaseStyle.NONE) == "Hello World.JPG"


def test_hidden_file_keeps_leading_dot():
    assert normalize_filename(".Hidden File.txt", CaseStyle.KEBAB_CASE) == ".hidden-file.txt"
    assert normalize_filename(".gitignore", CaseStyle.UPPERCASE) == ".GITIGNORE"


def test_filename_without_extension():
    assert normalize_filename("My Notes", CaseStyle.SNAKE_CASE) == "my_notes"


@pytest.mark.parametrize("style", list(CaseStyle))
def test_normalization_is_idempotent(style):
    once = normalize_filename("my Photo file.JPG", style)
    assert normalize_filename(once, style) == once


def test_parse_accepts_aliases():
    assert CaseStyle.parse("kebab-case") is CaseStyle.KEBAB_CASE
    assert CaseStyle.parse("snake_case") is CaseStyle.SNAKE_CASE
    assert CaseStyle.parse("camelCase") is CaseStyle.CAMEL_CASE
    assert CaseStyle.parse("PascalCase") is CaseStyle.PASCAL_CASE


def test_parse_rejects_unknown():
    with pytest.raises(ValueError):
        CaseStyle.parse("sponge-case")


@pytest.mark.parametrize("style", [CaseStyle.KEBAB_CASE, CaseStyle.SNAKE_CASE, CaseStyle.PASCAL_CASE])
def test_separator_only_name_is_kept(style):
    assert normalize_filename("---.jpg", style) == "---.jpg"
    assert normalize_filename("_ _.JPG", style) == "_ _.jpg"
