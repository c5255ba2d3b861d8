"""Definitions and stored values of command-line options.

An option definition has the form::

    name|alias1|alias2=type:default

where ``type`` is a single character (see :class:`OptionType`) and the
``:default`` part may be left out.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OptionError(Exception):
    """Raised for malformed option definitions and bad command lines."""


class OptionType(str, Enum):
    """The data type of an option, named by its one-letter code."""

    STRING = "s"
    INT = "i"
    FLOAT = "f"
    DOUBLE = "d"
    BOOLEAN = "b"
    CHAR = "c"


@dataclass
class OptionRegister:
    """One defined option: its definition, default and any value given."""

    definition: str
    type: OptionType = OptionType.STRING
    default: str = ""
    description: str = ""
    modified: str = ""
    is_modified: bool = False

    def option(self) -> str:
        """The value given on the command line, or the default if none was."""
        return self.modified if self.is_modified else self.default

    def set_modified(self, value: str) -> None:
        """Record a value given on the command line."""
        self.modified = value
        self.is_modified = True

    def clear_modified(self) -> None:
        """Forget any value given on the command line."""
        self.modified = ""
        self.is_modified = False


def parse_definition(definition: str) -> tuple[list[str], OptionRegister]:
    """Split a definition into its option names and a fresh register entry.

    Whitespace in the names and in the type field is ignored.  Raises
    :class:`OptionError` if there is no ``=``, if the type is not a single
    known character, or if a name is repeated within the definition.
    """
    aliases, sep, rest = definition.partition("=")
    if not sep:
        raise OptionError(f'no "=" in option definition: {definition}')
    type_field, _, default = rest.partition(":")
    code = "".join(type_field.split())
    if len(code) != 1:
        raise OptionError(
            f"option type is invalid: {code} in option definition: {definition}"
        )
    try:
        option_type = OptionType(code)
    except ValueError:
        raise OptionError(
            f"unknown option type '{code}' in definition: {definition}"
        ) from None

    names: list[str] = []
    for alias in aliases.split("|"):
        name = "".join(alias.split())
        if not name:
            continue
        if name in names:
            raise OptionError(
                f'option "{name}" is defined twice in definition: {definition}'
            )
        names.append(name)

    return names, OptionRegister(definition, option_type, default)


_QUOTES = "\"'"


def split_command_string(text: str) -> list[str]:
    """Split a command line into arguments.

    Whitespace separates arguments.  Text in double or single quotes forms
    one argument, which is kept even when empty; a closing quote ends the
    argument.  A backslash before a quote character makes it literal.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    chars = iter(enumerate(text))
    for index, ch in chars:
        following = text[index + 1] if index + 1 < len(text) else ""
        if ch == "\\" and following in _QUOTES and following:
            current.append(following)
            next(chars)
        elif quote is None and ch in _QUOTES:
            quote = ch
        elif ch == quote:
            tokens.append("".join(current))
            current = []
            quote = None
        elif quote is None and ch.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens