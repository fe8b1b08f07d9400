"""Element node types for parsed s-expression documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sexpr.atoms import Atom
from sexpr.tokens import GroupKind, Span


class _ElementProjections:
    __slots__ = ()

    def atom(self) -> Atom | None:
        return self.value if isinstance(self, AtomElement) else None

    def comment(self) -> str | None:
        return self.text if isinstance(self, Comment) else None

    def group(self, kind: GroupKind) -> tuple[Element, ...] | None:
        """Children of a group of the given kind, otherwise None."""
        if isinstance(self, Group) and self.kind is kind:
            return self.children
        return None

    def paren(self) -> tuple[Element, ...] | None:
        return self.group(GroupKind.PAREN)

    def bracket(self) -> tuple[Element, ...] | None:
        return self.group(GroupKind.BRACKET)

    def brace(self) -> tuple[Element, ...] | None:
        return self.group(GroupKind.BRACE)


@dataclass(frozen=True, slots=True)
class Group(_ElementProjections):
    """Delimited group; the span runs from the open to the close delimiter."""

    kind: GroupKind
    children: tuple[Element, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class AtomElement(_ElementProjections):
    value: Atom
    span: Span


@dataclass(frozen=True, slots=True)
class Comment(_ElementProjections):
    """Line comment, text includes the leading ';'."""

    text: str
    span: Span


Element = Union[Group, AtomElement, Comment]
