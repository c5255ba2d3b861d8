import pytest

from midikit.optregister import (
    OptionError,
    OptionRegister,
    OptionType,
    parse_definition,
    split_command_string,
)


def test_parse_simple_boolean():
    names, entry = parse_definition("author=b")
    assert names == ["author"]
    assert entry.type is OptionType.BOOLEAN
    assert entry.default == ""
    assert entry.definition == "author=b"


def test_parse_aliases_and_default():
    names, entry = parse_definition("n|max-number=i:10000")
    assert names == ["n", "max-number"]
    assert entry.type is OptionType.INT
    assert entry.default == "10000"


def test_parse_strips_whitespace_in_names_and_type():
    names, entry = parse_definition(" a | all = d :1.5")
    assert names == ["a", "all"]
    assert entry.type is OptionType.DOUBLE
    assert entry.default == "1.5"


def test_parse_empty_default_after_colon():
    names, entry = parse_definition("c|compile=s:")
    assert names == ["c", "compile"]
    assert entry.type is OptionType.STRING
    assert entry.option() == ""


def test_parse_default_keeps_colons():
    _, entry = parse_definition("t=s:a:b")
    assert entry.default == "a:b"


@pytest.mark.parametrize("code", ["s", "i", "f", "d", "b", "c"])
def test_all_type_codes_accepted(code):
    _, entry = parse_definition(f"x={code}")
    assert entry.type.value == code


def test_missing_equals_raises():
    with pytest.raises(OptionError):
        parse_definition("author")


def test_long_type_raises():
    with pytest.raises(OptionError):
        parse_definition("x=bb")


def test_empty_type_raises():
    with pytest.raises(OptionError):
        parse_definition("x=:3")


def test_unknown_type_raises():
    with pytest.raises(OptionError):
        parse_definition("x=z")


def test_duplicate_alias_raises():
    with pytest.raises(OptionError):
        parse_definition("a|a=b")


def test_register_option_default_then_modified():
    entry = OptionRegister("w|width=i:25", OptionType.INT, "25")
    assert entry.option() == "25"
    assert entry.is_modified is False
    entry.set_modified("40")
    assert entry.is_modified is True
    assert entry.option() == "40"


def test_register_clear_modified_restores_default():
    _, entry = parse_definition("o|output=s:test.mid")
    entry.set_modified("out.mid")
    entry.clear_modified()
    assert entry.is_modified is False
    assert entry.modified == ""
    assert entry.option() == "test.mid"


def test_register_modified_to_empty_string_counts():
    _, entry = parse_definition("o=s:test.mid")
    entry.set_modified("")
    assert entry.is_modified is True
    assert entry.option() == ""


def test_split_plain_words():
    assert split_command_string("prog -a  file.mid") == ["prog", "-a", "file.mid"]


def test_split_empty_string():
    assert split_command_string("   ") == []


def test_split_double_quotes_group_words():
    assert split_command_string('-T "hello world" x') == ["-T", "hello world", "x"]


def test_split_single_quotes_keep_double_quotes():
    assert split_command_string("-T '\"\"'") == ["-T", '""']


def test_split_empty_quotes_give_empty_argument():
    assert split_command_string("-T ''") == ["-T", ""]


def test_split_escaped_quote():
    assert split_command_string('-T "\\"\\""') == ["-T", '""']


def test_split_round_trip_of_simple_words():
    words = ["alpha", "beta", "gamma"]
    assert split_command_string(" ".join(words)) == words