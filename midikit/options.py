"""Command-line option parsing driven by compact option definitions.

Options are defined with strings such as ``"o|output=s:out.mid"`` (see
:func:`midikit.optregister.parse_definition`) and then looked up by any of
their names after the command line has been processed.

Short options are written ``-x``.  Several boolean short options can share
one dash (``-abc``).  A short option that takes a value accepts it either
attached (``-ofile``) or as the next argument (``-o file``).  Long options
are written ``--name=value`` or ``--name value``.  A lone ``--`` ends the
options; everything after it is an argument.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .optregister import OptionError, OptionRegister, OptionType, parse_definition
from .optregister import split_command_string

_INT_PREFIX = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?"
    r"|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_OPTIONS_LISTING = "options"


def _parse_int_prefix(text: str) -> int:
    """Read a leading integer in decimal, 0x-hex or 0-octal form; 0 if none."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def _parse_float_prefix(text: str) -> float:
    """Read a leading floating-point number; 0.0 if none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


class Options:
    """A set of option definitions and the command line parsed against them."""

    def __init__(self, argv: Iterable[str] | None = None):
        self._registers: list[OptionRegister] = []
        self._names: dict[str, int] = {}
        self._argv: list[str] = []
        self._arguments: list[str] = []
        self._error_check = True
        self._suppress = False
        self.options_requested = False
        if argv is not None:
            self.set_options(argv)

    # ------------------------------------------------------------------
    # definitions

    def define(self, definition: str, description: str = "") -> int:
        """Define an option and return its index in the register.

        Raises :class:`OptionError` for a malformed definition or a name
        that is already defined.
        """
        names, register = parse_definition(definition)
        for name in names:
            if name in self._names:
                raise OptionError(
                    f'option "{name}" from definition: {definition} '
                    f"is already defined in: {self.definition(name)}"
                )
        register.description = description
        index = len(self._registers)
        self._registers.append(register)
        for name in names:
            self._names[name] = index
        return index

    def is_defined(self, name: str) -> bool:
        return name in self._names

    def definition(self, name: str) -> str:
        """The definition string of an option, or "" if it is not defined."""
        index = self._names.get(name)
        return "" if index is None else self._registers[index].definition

    def describe(self) -> str:
        """One line per defined option: its definition and its description."""
        return "".join(
            f"{register.definition}\t{register.description}\n"
            for register in self._registers
        )

    # ------------------------------------------------------------------
    # command line storage

    def set_options(self, argv: Iterable[str]) -> None:
        """Replace the stored command line (``argv[0]`` is the command)."""
        self._argv = list(argv)

    def append_options(self, argv: Iterable[str]) -> None:
        """Add arguments to the end of the stored command line."""
        self._argv.extend(argv)

    def append_option_string(self, text: str) -> None:
        """Split ``text`` like a shell command line and append the pieces."""
        self.append_options(split_command_string(text))

    def command_line(self) -> str:
        """The stored command line, joined with spaces."""
        return " ".join(self._argv)

    def reset(self) -> None:
        """Forget all definitions and the stored command line."""
        self._registers.clear()
        self._names.clear()
        self._argv.clear()
        self._arguments.clear()
        self.options_requested = False

    # ------------------------------------------------------------------
    # processing

    def process(
        self,
        argv: Iterable[str] | None = None,
        error_check: bool = True,
        suppress: bool = False,
    ) -> None:
        """Parse the command line against the defined options.

        With ``error_check`` an unknown option raises :class:`OptionError`;
        without it, unknown options are skipped.  ``--options``, unless
        defined, prints the option list and exits; with ``suppress`` it only
        sets :attr:`options_requested`.
        """
        if argv is not None:
            self.set_options(argv)
        self._error_check = error_check
        self._suppress = suppress

        argv_list = self._argv
        self._arguments = [argv_list[0] if argv_list else ""]
        index = 1
        while index < len(argv_list):
            token = argv_list[index]
            if token == "--":
                index += 1
                break
            if len(token) > 1 and token[0] == "-":
                index = self._store_option(argv_list, index)
            else:
                self._arguments.append(token)
                index += 1
        self._arguments.extend(argv_list[index:])

    def _kind(self, name: str) -> OptionType | None:
        index = self._names.get(name)
        if index is not None:
            return self._registers[index].type
        if self._error_check:
            raise OptionError(f'unknown option "{name}"')
        return None

    def _store(self, name: str, value: str) -> None:
        index = self._names.get(name)
        if index is not None:
            self._registers[index].set_modified(value)

    def _store_option(self, argv: list[str], index: int) -> int:
        token = argv[index]
        if token.startswith("--"):
            name, eq, value = token[2:].partition("=")
            if name == _OPTIONS_LISTING and not self.is_defined(name):
                if self._suppress:
                    self.options_requested = True
                    return index + 1
                print(self.describe(), end="")
                raise SystemExit(0)
            kind = self._kind(name)
            if kind is OptionType.BOOLEAN:
                if eq:
                    raise OptionError(
                        f"boolean variable cannot have any options: {name}"
                    )
                self._store(name, "")
                return index + 1
            if eq:
                self._store(name, value)
                return index + 1
            return self._store_next(argv, index, name)

        for position in range(1, len(token)):
            name = token[position]
            if self._kind(name) is OptionType.BOOLEAN:
                self._store(name, "")
                continue
            rest = token[position + 1:]
            if rest:
                self._store(name, rest)
                return index + 1
            return self._store_next(argv, index, name)
        return index + 1

    def _store_next(self, argv: list[str], index: int, name: str) -> int:
        if index + 1 >= len(argv):
            raise OptionError("last option requires a parameter")
        self._store(name, argv[index + 1])
        return index + 2

    # ------------------------------------------------------------------
    # arguments

    def args(self) -> list[str]:
        """The command followed by the non-option arguments."""
        return list(self._arguments)

    def arg(self, index: int) -> str:
        """Argument ``index``; 0 is the command."""
        if not 0 <= index < len(self._arguments):
            raise IndexError(f"argument {index} does not exist")
        return self._arguments[index]

    def arg_count(self) -> int:
        """The number of non-option arguments, not counting the command."""
        return max(len(self._arguments) - 1, 0)

    def command(self) -> str:
        return self._arguments[0] if self._arguments else ""

    # ------------------------------------------------------------------
    # values

    def _register(self, name: str) -> OptionRegister | None:
        index = self._names.get(name)
        if index is None:
            if self._error_check:
                raise OptionError(f'unknown option "{name}"')
            return None
        return self._registers[index]

    def get_boolean(self, name: str) -> bool:
        """True if the option was given on the command line."""
        register = self._register(name)
        return register is not None and register.is_modified

    def get_string(self, name: str) -> str | None:
        """The option's value, or its default; None for an unknown option."""
        register = self._register(name)
        return None if register is None else register.option()

    def get_int(self, name: str) -> int:
        """The option's value read as a decimal, 0x-hex or 0-octal integer."""
        return _parse_int_prefix(self.get_string(name) or "")

    def get_double(self, name: str) -> float:
        """The option's value read as a floating-point number."""
        return _parse_float_prefix(self.get_string(name) or "")

    def get_char(self, name: str) -> str:
        """The first character of the option's value, or "" if it is empty."""
        return (self.get_string(name) or "")[:1]

    def get_type(self, name: str) -> OptionType | None:
        register = self._register(name)
        return None if register is None else register.type

    def set_modified(self, name: str, value: str) -> None:
        """Set an option's value as if it had been given on the command line."""
        register = self._register(name)
        if register is not None:
            register.set_modified(value)