"""UTF-8 code-point decoding over a byte buffer.

The tokenizer walks raw bytes so that byte offsets and character columns
can be tracked together; this module decodes one scalar value at a time.
See RFC 3629 for the sequence layout.
"""

from __future__ import annotations

from sexpr.errors import (
    EmptyDataStream,
    IncompleteSequence,
    InvalidContinuationByte,
    InvalidSequence,
)

# Sequence length selected by the leading byte, 0 for bytes that can never lead.
# fmt: off
UTF8_CHAR_WIDTH: tuple[int, ...] = (
    # 0  1  2  3  4  5  6  7  8  9  A  B  C  D  E  F
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 0
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 1
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 2
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 3
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 4
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 5
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 6
    1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,  # 7
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # 8
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # 9
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # A
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # B
    0, 0, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,  # C
    2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2,  # D
    3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3,  # E
    4, 4, 4, 4, 4, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,  # F
)
# fmt: on

_HEAD_MASKS = {2: 0b0001_1111, 3: 0b0000_1111, 4: 0b0000_0111}

# Smallest scalar value each width may encode; anything below is overlong.
_MIN_SCALAR = {2: 0x80, 3: 0x800, 4: 0x10000}


def utf8_char_width(lead: int) -> int:
    return UTF8_CHAR_WIDTH[lead]


def extended_math_operator(ch: str) -> bool:
    """Mathematical Operators and Supplemental Mathematical Operators blocks."""
    c = ord(ch)
    return 0x2200 <= c <= 0x22FF or 0x2A00 <= c <= 0x2AFF


def _is_cont(b: int) -> bool:
    return b & 0b1100_0000 == 0b1000_0000


def next_char(data: bytes, index: int) -> tuple[str, int] | None:
    """Decode the character starting at *index* in *data*.

    Returns ``(char, width_in_bytes)``, or ``None`` when *index* is exactly
    the end of the buffer. Raises a :class:`~sexpr.errors.DecodeError`
    subclass when the bytes at *index* are not a valid UTF-8 sequence.
    """
    if index == len(data):
        return None
    if index > len(data):
        raise EmptyDataStream()

    lead = data[index]
    width = UTF8_CHAR_WIDTH[lead]
    if width == 0:
        raise InvalidSequence()
    if width == 1:
        return chr(lead), 1

    if index + width > len(data):
        raise IncompleteSequence(lead)

    value = lead & _HEAD_MASKS[width]
    for b in data[index + 1 : index + width]:
        if not _is_cont(b):
            raise InvalidContinuationByte()
        value = (value << 6) | (b & 0b0011_1111)

    if value < _MIN_SCALAR[width] or 0xD800 <= value <= 0xDFFF or value > 0x10FFFF:
        raise InvalidSequence()
    return chr(value), width
