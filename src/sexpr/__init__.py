"""S-expression tokenizer, group-balancing parser and printer."""

from __future__ import annotations

__version__ = "0.1.0"

from sexpr.ast import AtomElement, Comment, Element, Group
from sexpr.atoms import ABytes, ADecimal, ANum, AStr, Atom, Ident, NumBase
from sexpr.errors import DecodeError, LexError, ParseError
from sexpr.parser import Parser, parse
from sexpr.printer import Printer, print_element, print_elements
from sexpr.tokenizer import Tokenizer, TokenizerConfig, tokenize
from sexpr.tokens import GroupKind, Position, Span, Token, TokenType

__all__ = [
    "ABytes",
    "ADecimal",
    "ANum",
    "AStr",
    "Atom",
    "AtomElement",
    "Comment",
    "DecodeError",
    "Element",
    "Group",
    "GroupKind",
    "Ident",
    "LexError",
    "NumBase",
    "ParseError",
    "Parser",
    "Position",
    "Printer",
    "Span",
    "Token",
    "TokenType",
    "Tokenizer",
    "TokenizerConfig",
    "parse",
    "print_element",
    "print_elements",
    "tokenize",
]
