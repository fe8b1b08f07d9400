"""Printer: writes groups, atoms and comments back out as text."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, auto

from sexpr.ast import AtomElement, Comment, Element, Group
from sexpr.tokens import GroupKind


class _State(Enum):
    OPEN = auto()  # start of output or just after an opening delimiter
    TEXT = auto()  # after text or a closing delimiter
    LINE = auto()  # after a comment, a line break is pending


class Printer:
    """Incremental text emitter with single-space separation.

    A space goes before text or an opening delimiter unless it directly
    follows an opening delimiter; nothing goes before a closing delimiter.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._state = _State.OPEN

    def _separate(self) -> None:
        if self._state is _State.TEXT:
            self._parts.append(" ")
        elif self._state is _State.LINE:
            self._parts.append("\n")

    def open(self, kind: GroupKind) -> None:
        self._separate()
        self._parts.append(kind.open_char)
        self._state = _State.OPEN

    def close(self, kind: GroupKind) -> None:
        if self._state is _State.LINE:
            self._parts.append("\n")
        self._parts.append(kind.close_char)
        self._state = _State.TEXT

    def text(self, s: str) -> None:
        self._separate()
        self._parts.append(s)
        self._state = _State.TEXT

    def comment(self, s: str) -> None:
        self._separate()
        self._parts.append(s)
        self._state = _State.LINE

    def newline(self) -> None:
        """End the current line; the next write starts without a space."""
        self._parts.append("\n")
        self._state = _State.OPEN

    def element(self, element: Element) -> None:
        if isinstance(element, Group):
            self.open(element.kind)
            for child in element.children:
                self.element(child)
            self.close(element.kind)
        elif isinstance(element, AtomElement):
            self.text(str(element.value))
        elif isinstance(element, Comment):
            self.comment(element.text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.getvalue()


def print_element(element: Element) -> str:
    """Print a single element tree on one line (comments force a break)."""
    p = Printer()
    p.element(element)
    return p.getvalue()


def print_elements(elements: Iterable[Element]) -> str:
    """Print top-level elements, one per line."""
    p = Printer()
    for i, element in enumerate(elements):
        if i:
            p.newline()
        p.element(element)
    return p.getvalue()
