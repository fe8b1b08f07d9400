"""Tests for the UTF-8 code-point decoder."""

import pytest

from sexpr.errors import (
    DecodeError,
    EmptyDataStream,
    IncompleteSequence,
    InvalidContinuationByte,
    InvalidSequence,
)
from sexpr.utf8 import UTF8_CHAR_WIDTH, extended_math_operator, next_char, utf8_char_width


class TestDecode:
    def test_end_of_stream(self):
        assert next_char(b"", 0) is None
        assert next_char(b"ab", 2) is None

    def test_ascii(self):
        assert next_char(b"a", 0) == ("a", 1)

    def test_two_byte(self):
        assert next_char("é".encode(), 0) == ("é", 2)

    def test_three_byte(self):
        assert next_char("€".encode(), 0) == ("€", 3)

    def test_four_byte(self):
        assert next_char("\U0001d400".encode(), 0) == ("\U0001d400", 4)

    def test_decode_at_offset(self):
        data = "aé".encode()
        assert next_char(data, 1) == ("é", 2)

    def test_walk_whole_buffer(self):
        text = "a€b\U0001f600c"
        data = text.encode()
        out = []
        i = 0
        while (res := next_char(data, i)) is not None:
            ch, width = res
            out.append(ch)
            i += width
        assert "".join(out) == text


class TestDecodeErrors:
    def test_past_end(self):
        with pytest.raises(EmptyDataStream):
            next_char(b"a", 2)

    def test_bare_continuation_byte(self):
        with pytest.raises(InvalidSequence):
            next_char(b"\x80", 0)

    def test_invalid_lead_byte(self):
        with pytest.raises(InvalidSequence):
            next_char(b"\xff", 0)

    def test_incomplete(self):
        with pytest.raises(IncompleteSequence) as exc_info:
            next_char(b"\xe2\x82", 0)
        assert exc_info.value.lead == 0xE2

    def test_bad_continuation(self):
        with pytest.raises(InvalidContinuationByte):
            next_char(b"\xc3\x28", 0)

    def test_bad_third_byte(self):
        with pytest.raises(InvalidContinuationByte):
            next_char(b"\xe2\x82\x28", 0)

    def test_surrogate(self):
        with pytest.raises(InvalidSequence):
            next_char(b"\xed\xa0\x80", 0)

    def test_above_max_scalar(self):
        with pytest.raises(InvalidSequence):
            next_char(b"\xf4\x90\x80\x80", 0)

    def test_overlong(self):
        with pytest.raises(InvalidSequence):
            next_char(b"\xe0\x80\x80", 0)

    def test_all_are_decode_errors(self):
        for data in (b"\x80", b"\xc3", b"\xc3\x28"):
            with pytest.raises(DecodeError):
                next_char(data, 0)


class TestWidthTable:
    def test_size(self):
        assert len(UTF8_CHAR_WIDTH) == 256

    def test_widths(self):
        assert utf8_char_width(0x41) == 1
        assert utf8_char_width(0xC1) == 0
        assert utf8_char_width(0xC2) == 2
        assert utf8_char_width(0xE0) == 3
        assert utf8_char_width(0xF4) == 4
        assert utf8_char_width(0xF5) == 0


class TestMathOperators:
    def test_ranges(self):
        assert extended_math_operator("∀")
        assert extended_math_operator("√")
        assert extended_math_operator("⫿")
        assert not extended_math_operator("⌀")
        assert not extended_math_operator("a")
