"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from sexpr.ast import Element
from sexpr.atoms import Atom
from sexpr.parser import parse
from sexpr.tokenizer import TokenizerConfig, tokenize
from sexpr.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str | bytes, config: TokenizerConfig | None = None) -> list[Token]:
        return tokenize(source, config)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns the top-level elements."""

    def _parse(
        source: str | bytes,
        config: TokenizerConfig | None = None,
        max_depth: int | None = None,
    ) -> list[Element]:
        return parse(source, config, max_depth=max_depth)

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def atoms(tokens: list[Token]) -> list[Atom]:
    """Return the atom payloads of all ATOM tokens."""
    return [t.value for t in tokens if t.type == TokenType.ATOM]


def single_atom(tokens: list[Token]) -> Atom:
    assert len(tokens) == 1, f"Expected one token, got {len(tokens)}"
    assert tokens[0].type == TokenType.ATOM
    return tokens[0].value
