"""--debug and --tokens dumps."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from sexpr.ast import AtomElement, Comment, Element, Group
from sexpr.atoms import ABytes, ADecimal, ANum, AStr, Atom, Ident
from sexpr.tokens import GroupKind, Token, TokenType


def dump_tree(elements: Iterable[Element], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable element tree to *file*."""
    file.write("Document\n")
    for element in elements:
        _dump_element(element, 1, file)


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stdout) -> None:
    """Print one line per token: span, type and payload."""
    for tok in tokens:
        file.write(f"{tok.span} {tok.type.name} {describe_token_value(tok)}\n")


def describe_token_value(tok: Token) -> str:
    if tok.type in (TokenType.LEFT, TokenType.RIGHT):
        kind: GroupKind = tok.value
        return kind.open_char if tok.type is TokenType.LEFT else kind.close_char
    if tok.type is TokenType.COMMENT:
        return repr(tok.value)
    return describe_atom(tok.value)


def describe_atom(atom: Atom) -> str:
    if isinstance(atom, ANum):
        return f"Integral(base={atom.radix}, {atom.raw!r})"
    if isinstance(atom, ADecimal):
        return f"Decimal({atom.raw_integral!r}, {atom.raw_fractional!r})"
    if isinstance(atom, AStr):
        escape = ", escaped" if atom.has_escape else ""
        return f"String({atom.raw_data!r}{escape})"
    if isinstance(atom, ABytes):
        return f"Bytes({atom.raw!r})"
    if isinstance(atom, Ident):
        return f"Ident({atom.text!r})"
    raise TypeError(f"not an atom: {type(atom).__name__}")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_element(element: Element, depth: int, f: TextIO) -> None:
    if isinstance(element, Group):
        f.write(f"{_indent(depth)}Group {element.kind.name} @ {element.span}\n")
        for child in element.children:
            _dump_element(child, depth + 1, f)
    elif isinstance(element, AtomElement):
        f.write(f"{_indent(depth)}{describe_atom(element.value)} @ {element.span}\n")
    elif isinstance(element, Comment):
        f.write(f"{_indent(depth)}Comment({element.text!r}) @ {element.span}\n")
