"""S-expression parser: balances groups over the token stream.

Each call to :meth:`Parser.next_element` returns one complete top-level
element. Open groups are kept on an explicit stack rather than the
Python call stack, so nesting depth is bounded only by ``max_depth``.
"""

from __future__ import annotations

from collections.abc import Iterator

from sexpr.ast import AtomElement, Comment, Element, Group
from sexpr.errors import (
    GroupTooDeep,
    LexError,
    TokenizerError,
    UnbalancedEmpty,
    UnbalancedMismatch,
    UnfinishedGroup,
)
from sexpr.tokenizer import Tokenizer, TokenizerConfig
from sexpr.tokens import GroupKind, Span, Token, TokenType


class _Frame:
    __slots__ = ("kind", "span", "children")

    def __init__(self, kind: GroupKind, span: Span) -> None:
        self.kind = kind
        self.span = span
        self.children: list[Element] = []


class Parser:
    """Pull parser producing one top-level element per call."""

    def __init__(
        self,
        source: str | bytes,
        config: TokenizerConfig | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        self._tokenizer = Tokenizer(source, config)
        self._max_depth = max_depth

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def next_element(self) -> Element | None:
        """Return the next top-level element, or None at the end of input."""
        stack: list[_Frame] = []
        source = self._tokenizer.source

        while True:
            tok = self._next_token()

            if tok is None:
                if not stack:
                    return None
                top = stack[-1]
                raise UnfinishedGroup(top.kind, top.span, source)

            if tok.type is TokenType.LEFT:
                if self._max_depth is not None and len(stack) >= self._max_depth:
                    raise GroupTooDeep(tok.span, self._max_depth, source)
                stack.append(_Frame(tok.value, tok.span))
                continue

            if tok.type is TokenType.RIGHT:
                if not stack:
                    raise UnbalancedEmpty(tok.span, tok.value, source)
                frame = stack.pop()
                span = frame.span.extend(tok.span)
                if frame.kind is not tok.value:
                    raise UnbalancedMismatch(span, frame.kind, tok.value, source)
                element: Element = Group(frame.kind, tuple(frame.children), span)
            else:
                element = _leaf(tok)

            if not stack:
                return element
            stack[-1].children.append(element)

    def __iter__(self) -> Iterator[Element]:
        while (element := self.next_element()) is not None:
            yield element

    def _next_token(self) -> Token | None:
        try:
            return self._tokenizer.next_token()
        except LexError as exc:
            raise TokenizerError(exc) from exc


def _leaf(tok: Token) -> AtomElement | Comment:
    if tok.type is TokenType.COMMENT:
        return Comment(tok.value, tok.span)
    return AtomElement(tok.value, tok.span)


def parse(
    source: str | bytes,
    config: TokenizerConfig | None = None,
    *,
    max_depth: int | None = None,
) -> list[Element]:
    """Parse a whole document and return its top-level elements."""
    return list(Parser(source, config, max_depth=max_depth))
