"""Tests for atom data accessors and element projections."""

import pytest

from sexpr.ast import AtomElement, Comment, Group
from sexpr.atoms import ABytes, ADecimal, ANum, AStr, Ident, NumBase
from sexpr.tokens import GroupKind, Span

SPAN = Span.on_line(1, 0, 1)


class TestNumBase:
    def test_radix(self):
        assert NumBase.BINARY.radix == 2
        assert NumBase.DECIMAL.radix == 10
        assert NumBase.HEXADECIMAL.radix == 16

    def test_from_radix(self):
        assert NumBase.from_radix(16) is NumBase.HEXADECIMAL
        assert NumBase.from_radix(8) is None


class TestANum:
    def test_digits_strip_separators(self):
        assert ANum(NumBase.DECIMAL, "1_000_000").digits() == "1000000"

    def test_widths(self):
        n = ANum(NumBase.DECIMAL, "255")
        assert n.to_u8() == 255
        assert n.to_u16() == 255
        assert n.to_u32() == 255
        assert n.to_u64() == 255
        assert n.to_u128() == 255

    def test_overflow(self):
        with pytest.raises(ValueError):
            ANum(NumBase.DECIMAL, "256").to_u8()
        with pytest.raises(ValueError):
            ANum(NumBase.HEXADECIMAL, "1_0000").to_u16()
        assert ANum(NumBase.HEXADECIMAL, "ffff").to_u16() == 0xFFFF

    def test_u128(self):
        n = ANum(NumBase.HEXADECIMAL, "ffff_ffff_ffff_ffff_ffff_ffff_ffff_ffff")
        assert n.to_u128() == 2**128 - 1
        with pytest.raises(ValueError):
            n.to_u64()

    def test_binary(self):
        assert ANum(NumBase.BINARY, "1111_0000").to_u8() == 0xF0

    def test_invalid_digit(self):
        with pytest.raises(ValueError):
            ANum(NumBase.BINARY, "102").to_u8()
        with pytest.raises(ValueError):
            ANum(NumBase.DECIMAL, "+1").to_u8()

    def test_empty(self):
        with pytest.raises(ValueError):
            ANum(NumBase.BINARY, "").to_u8()

    def test_str(self):
        assert str(ANum(NumBase.HEXADECIMAL, "01_ab")) == "0x01_ab"
        assert str(ANum(NumBase.BINARY, "10")) == "0b10"
        assert str(ANum(NumBase.DECIMAL, "42")) == "42"


class TestOtherAtoms:
    def test_decimal(self):
        d = ADecimal("1_2", "5_0")
        assert (d.integral(), d.fractional()) == ("12", "50")
        assert str(d) == "1_2.5_0"
        assert str(ADecimal("1", "")) == "1."

    def test_string(self):
        s = AStr(True, r"a\"b")
        assert s.to_string() == r"a\"b"
        assert str(s) == r'"a\"b"'

    def test_bytes(self):
        assert str(ABytes("00ff")) == "#00ff#"

    def test_ident(self):
        assert str(Ident("let")) == "let"


class TestAtomProjections:
    def test_matching(self):
        n = ANum(NumBase.DECIMAL, "1")
        assert n.number() is n
        d = ADecimal("1", "0")
        assert d.decimal() is d
        b = ABytes("ab")
        assert b.bytes() is b
        s = AStr(False, "x")
        assert s.string() is s
        assert Ident("x").ident() == "x"

    def test_mismatch(self):
        ident = Ident("x")
        assert ident.number() is None
        assert ident.decimal() is None
        assert ident.bytes() is None
        assert ident.string() is None
        assert ANum(NumBase.DECIMAL, "1").ident() is None


class TestElementProjections:
    def test_group(self):
        child = AtomElement(Ident("a"), SPAN)
        g = Group(GroupKind.BRACKET, (child,), SPAN)
        assert g.bracket() == (child,)
        assert g.group(GroupKind.BRACKET) == (child,)
        assert g.paren() is None
        assert g.brace() is None
        assert g.atom() is None
        assert g.comment() is None

    def test_atom(self):
        el = AtomElement(Ident("a"), SPAN)
        assert el.atom() == Ident("a")
        assert el.paren() is None

    def test_comment(self):
        el = Comment("; x", SPAN)
        assert el.comment() == "; x"
        assert el.atom() is None
