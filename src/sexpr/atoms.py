"""Atom literal types: numbers, decimals, bytes, strings, identifiers.

Payloads are kept as the raw source text. Interpretation (numeric
conversion, unescaping, hex pairs) is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class NumBase(Enum):
    BINARY = 2
    DECIMAL = 10
    HEXADECIMAL = 16

    @property
    def radix(self) -> int:
        return self.value

    @classmethod
    def from_radix(cls, radix: int) -> NumBase | None:
        for base in cls:
            if base.value == radix:
                return base
        return None


_PREFIXES = {NumBase.BINARY: "0b", NumBase.DECIMAL: "", NumBase.HEXADECIMAL: "0x"}


def _strip_separators(raw: str) -> str:
    return raw.replace("_", "")


class _AtomProjections:
    """Safe-cast accessors shared by every atom type."""

    __slots__ = ()

    def number(self) -> ANum | None:
        return self if isinstance(self, ANum) else None

    def decimal(self) -> ADecimal | None:
        return self if isinstance(self, ADecimal) else None

    def bytes(self) -> ABytes | None:
        return self if isinstance(self, ABytes) else None

    def string(self) -> AStr | None:
        return self if isinstance(self, AStr) else None

    def ident(self) -> str | None:
        return self.text if isinstance(self, Ident) else None


@dataclass(frozen=True, slots=True)
class ANum(_AtomProjections):
    """Integral number literal; *raw* holds the digits without base prefix."""

    base: NumBase
    raw: str

    @property
    def radix(self) -> int:
        return self.base.radix

    @property
    def raw_data(self) -> str:
        return self.raw

    def digits(self) -> str:
        """The digits with '_' separators removed."""
        return _strip_separators(self.raw)

    def to_unsigned(self, bits: int) -> int:
        """Convert to an unsigned integer of *bits* width.

        Raises ValueError on an empty digit string, an invalid digit, or
        a value that does not fit.
        """
        digits = self.digits()
        if not digits or not all(_digit_ok(c, self.base) for c in digits):
            raise ValueError(f"invalid base {self.radix} integer literal {self.raw!r}")
        value = int(digits, self.radix)
        if value >> bits:
            raise ValueError(f"integer literal {self.raw!r} does not fit in u{bits}")
        return value

    def to_u8(self) -> int:
        return self.to_unsigned(8)

    def to_u16(self) -> int:
        return self.to_unsigned(16)

    def to_u32(self) -> int:
        return self.to_unsigned(32)

    def to_u64(self) -> int:
        return self.to_unsigned(64)

    def to_u128(self) -> int:
        return self.to_unsigned(128)

    def __str__(self) -> str:
        return _PREFIXES[self.base] + self.raw


def _digit_ok(ch: str, base: NumBase) -> bool:
    if base is NumBase.BINARY:
        return ch in "01"
    if base is NumBase.DECIMAL:
        return "0" <= ch <= "9"
    return ch in "0123456789abcdefABCDEF"


@dataclass(frozen=True, slots=True)
class ADecimal(_AtomProjections):
    """Decimal number literal such as ``12.34``; the fractional part may be empty."""

    raw_integral: str
    raw_fractional: str

    def integral(self) -> str:
        return _strip_separators(self.raw_integral)

    def fractional(self) -> str:
        return _strip_separators(self.raw_fractional)

    def __str__(self) -> str:
        return f"{self.raw_integral}.{self.raw_fractional}"


@dataclass(frozen=True, slots=True)
class AStr(_AtomProjections):
    """String literal, raw text between the quotes.

    When *has_escape* is set the text still contains backslash escapes
    that the caller must resolve.
    """

    has_escape: bool
    raw_data: str

    def to_string(self) -> str:
        return self.raw_data

    def __str__(self) -> str:
        return f'"{self.raw_data}"'


@dataclass(frozen=True, slots=True)
class ABytes(_AtomProjections):
    """Bytes literal, the hex digit text between the ``#`` delimiters."""

    raw: str

    def __str__(self) -> str:
        return f"#{self.raw}#"


@dataclass(frozen=True, slots=True)
class Ident(_AtomProjections):
    text: str

    def __str__(self) -> str:
        return self.text


Atom = Union[ANum, ADecimal, ABytes, AStr, Ident]
