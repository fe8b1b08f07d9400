"""Token types, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from sexpr.utf8 import extended_math_operator

if TYPE_CHECKING:
    from sexpr.atoms import Atom


class GroupKind(Enum):
    PAREN = auto()  # ( )
    BRACKET = auto()  # [ ]
    BRACE = auto()  # { }

    @property
    def open_char(self) -> str:
        return _OPEN_CHARS[self]

    @property
    def close_char(self) -> str:
        return _CLOSE_CHARS[self]


_OPEN_CHARS = {GroupKind.PAREN: "(", GroupKind.BRACKET: "[", GroupKind.BRACE: "{"}
_CLOSE_CHARS = {GroupKind.PAREN: ")", GroupKind.BRACKET: "]", GroupKind.BRACE: "}"}


class TokenType(Enum):
    LEFT = auto()  # opening delimiter, value is a GroupKind
    RIGHT = auto()  # closing delimiter, value is a GroupKind
    COMMENT = auto()  # ';' up to end of line, value is the text
    ATOM = auto()  # value is an Atom


@dataclass(frozen=True, slots=True)
class Position:
    """Source position: 1-based line, 0-based column counted in characters."""

    line: int = 1
    col: int = 0

    def advance(self, ch: str) -> Position:
        if ch == "\n":
            return Position(self.line + 1, 0)
        return Position(self.line, self.col + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position

    def extend(self, other: Span) -> Span:
        return Span(self.start, other.end)

    @classmethod
    def on_line(cls, line: int, start_col: int, end_col: int) -> Span:
        return cls(Position(line, start_col), Position(line, end_col))

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its payload and source span."""

    type: TokenType
    value: GroupKind | str | Atom
    span: Span

    @property
    def is_comment(self) -> bool:
        return self.type is TokenType.COMMENT


# Any ascii punctuation except the delimiters ( ) [ ] { } and " ; \
ASCII_OPERATORS = frozenset("?!#@$+-*/=<>,.:|%^&~'`")

WHITESPACE = frozenset(" \t\n")


def is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is an ASCII hexadecimal digit."""
    return ch in "0123456789abcdefABCDEF"


def is_ident_start(ch: str, unicode: bool = True) -> bool:
    """Return True if ch may begin an identifier.

    With *unicode* enabled, any XID_Start character and the mathematical
    operator blocks are accepted on top of the ASCII rules.
    """
    if ch == "_" or ch in ASCII_OPERATORS:
        return True
    if unicode:
        return ch.isidentifier() or extended_math_operator(ch)
    return ch.isascii() and ch.isalpha()


def is_ident_continue(ch: str, unicode: bool = True) -> bool:
    """Return True if ch may appear after the first identifier character."""
    if is_ascii_digit(ch) or is_ident_start(ch, unicode):
        return True
    # XID_Continue: valid after a leading underscore
    return unicode and ("_" + ch).isidentifier()
