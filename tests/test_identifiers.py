"""Test identifier and operator lexing, ASCII and Unicode modes."""

import pytest

from sexpr.atoms import Ident
from sexpr.errors import UnprocessableChar
from sexpr.tokenizer import TokenizerConfig
from sexpr.tokens import Position, Span, is_ident_continue, is_ident_start

from .conftest import atoms, single_atom

ASCII = TokenizerConfig().unicode_idents(False)


class TestAsciiIdentifiers:
    @pytest.mark.parametrize(
        "name",
        ["x", "define", "zero?", "_x1", "a-b", "set!", "+", "==", "<=>", "'quote", "a.b", "x:y"],
    )
    def test_single_identifier(self, lex, name):
        assert single_atom(lex(name)) == Ident(name)

    def test_span(self, lex):
        tokens = lex("  foo")
        assert tokens[0].span == Span.on_line(1, 2, 5)

    def test_identifier_stops_at_delimiter(self, lex):
        assert atoms(lex("(abc)")) == [Ident("abc")]

    def test_identifier_stops_at_quote(self, lex):
        result = atoms(lex('abc"d"'))
        assert result[0] == Ident("abc")

    def test_digits_continue(self, lex):
        assert single_atom(lex("x123")) == Ident("x123")

    def test_backslash_is_unprocessable(self, lex):
        with pytest.raises(UnprocessableChar) as exc_info:
            lex("a\\b")
        assert exc_info.value.char == "\\"
        assert exc_info.value.position == Position(1, 1)


class TestUnicodeIdentifiers:
    def test_letters(self, lex):
        assert single_atom(lex("héllo")) == Ident("héllo")

    def test_math_operator_inside(self, lex):
        assert single_atom(lex("p√öjk")) == Ident("p√öjk")

    def test_math_operator_start(self, lex):
        assert single_atom(lex("∀x")) == Ident("∀x")

    def test_ascii_mode_rejects_letters(self, lex):
        with pytest.raises(UnprocessableChar) as exc_info:
            lex("é", ASCII)
        assert exc_info.value.char == "é"

    def test_ascii_mode_splits_identifier(self, lex):
        with pytest.raises(UnprocessableChar) as exc_info:
            lex("p√öjk", ASCII)
        assert exc_info.value.position == Position(1, 1)

    def test_emoji_unprocessable(self, lex):
        with pytest.raises(UnprocessableChar):
            lex("\U0001f600")


class TestClassifiers:
    def test_start(self):
        assert is_ident_start("a")
        assert is_ident_start("_")
        assert is_ident_start("#")
        assert not is_ident_start("1")
        assert not is_ident_start("(")
        assert not is_ident_start(";")
        assert not is_ident_start('"')

    def test_continue(self):
        assert is_ident_continue("1")
        assert is_ident_continue("a")
        assert not is_ident_continue(" ")
        assert not is_ident_continue(")")

    def test_unicode_flag(self):
        assert is_ident_start("λ")
        assert not is_ident_start("λ", unicode=False)
        assert is_ident_continue("\u0301")  # combining acute accent
        assert not is_ident_continue("\u0301", unicode=False)
