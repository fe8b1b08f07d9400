"""S-expression tokenizer: pulls one token at a time from a UTF-8 buffer."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace

from sexpr.atoms import ABytes, ADecimal, ANum, AStr, Atom, Ident, NumBase
from sexpr.errors import (
    DataError,
    DecodeError,
    UnprocessableChar,
    UnterminatedBytes,
    UnterminatedBytesChar,
    UnterminatedString,
)
from sexpr.tokens import (
    WHITESPACE,
    GroupKind,
    Position,
    Span,
    Token,
    TokenType,
    is_ascii_digit,
    is_hex_digit,
    is_ident_continue,
    is_ident_start,
)
from sexpr.utf8 import next_char


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """Feature flags for the tokenizer. ``( )`` groups are always enabled."""

    comments: bool = True  # emit comment tokens rather than dropping them
    bytes: bool = True  # '#<hex>#' literals
    brackets: bool = True  # '[ ]' groups
    braces: bool = True  # '{ }' groups
    unicode: bool = True  # Unicode identifier and math operator characters

    def comment(self, enabled: bool) -> TokenizerConfig:
        return replace(self, comments=enabled)

    def support_bytes(self, enabled: bool) -> TokenizerConfig:
        return replace(self, bytes=enabled)

    def bracket(self, enabled: bool) -> TokenizerConfig:
        return replace(self, brackets=enabled)

    def brace(self, enabled: bool) -> TokenizerConfig:
        return replace(self, braces=enabled)

    def unicode_idents(self, enabled: bool) -> TokenizerConfig:
        return replace(self, unicode=enabled)


_LEFT = {"(": GroupKind.PAREN, "[": GroupKind.BRACKET, "{": GroupKind.BRACE}
_RIGHT = {")": GroupKind.PAREN, "]": GroupKind.BRACKET, "}": GroupKind.BRACE}


class Tokenizer:
    """Stateful cursor over a source buffer producing one token per call."""

    def __init__(self, source: str | bytes, config: TokenizerConfig | None = None) -> None:
        if isinstance(source, str):
            # surrogatepass lets the decoder report lone surrogates itself
            self._data = source.encode("utf-8", "surrogatepass")
            self._source = source
        else:
            self._data = bytes(source)
            self._source = self._data.decode("utf-8", "replace")
        self._config = config if config is not None else TokenizerConfig()
        self._index = 0
        self._position = Position()

    @property
    def config(self) -> TokenizerConfig:
        return self._config

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> Position:
        return self._position

    def next_token(self) -> Token | None:
        """Return the next token, or None at the end of the stream."""
        while True:
            self._skip_while(lambda c: c in WHITESPACE)
            peeked = self._peek_char()
            if peeked is None:
                return None

            leading, width = peeked
            start = self._position
            start_index = self._index
            self._advance(leading, width)
            tok = self._lex(leading, start, start_index)
            if tok.is_comment and not self._config.comments:
                continue
            return tok

    def __iter__(self) -> Iterator[Token]:
        while (tok := self.next_token()) is not None:
            yield tok

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _peek_char(self) -> tuple[str, int] | None:
        try:
            return next_char(self._data, self._index)
        except DecodeError as exc:
            raise DataError(exc, self._index, self._position, self._source) from exc

    def _advance(self, ch: str, width: int) -> None:
        self._position = self._position.advance(ch)
        self._index += width

    def _skip_while(self, pred: Callable[[str], bool]) -> None:
        while (peeked := self._peek_char()) is not None:
            ch, width = peeked
            if not pred(ch):
                return
            self._advance(ch, width)

    def _slice_from(self, start_index: int) -> str:
        return self._data[start_index : self._index].decode("utf-8")

    def _emit(self, tt: TokenType, value: GroupKind | str | Atom, start: Position) -> Token:
        return Token(tt, value, Span(start, self._position))

    # ------------------------------------------------------------------
    # Dispatch on the leading character
    # ------------------------------------------------------------------

    def _lex(self, leading: str, start: Position, start_index: int) -> Token:
        cfg = self._config

        if leading in _LEFT and self._group_enabled(_LEFT[leading]):
            return self._emit(TokenType.LEFT, _LEFT[leading], start)

        if leading in _RIGHT and self._group_enabled(_RIGHT[leading]):
            return self._emit(TokenType.RIGHT, _RIGHT[leading], start)

        if leading == ";":
            self._skip_while(lambda c: c != "\n")
            return self._emit(TokenType.COMMENT, self._slice_from(start_index), start)

        if leading == '"':
            return self._emit(TokenType.ATOM, self._lex_string(start), start)

        if cfg.bytes and leading == "#":
            return self._emit(TokenType.ATOM, self._lex_bytes(), start)

        if is_ascii_digit(leading):
            return self._emit(TokenType.ATOM, self._lex_number(leading, start_index), start)

        if is_ident_start(leading, cfg.unicode):
            self._skip_while(lambda c: is_ident_continue(c, cfg.unicode))
            return self._emit(TokenType.ATOM, Ident(self._slice_from(start_index)), start)

        raise UnprocessableChar(start, leading, self._source)

    def _group_enabled(self, kind: GroupKind) -> bool:
        if kind is GroupKind.BRACKET:
            return self._config.brackets
        if kind is GroupKind.BRACE:
            return self._config.braces
        return True

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _lex_string(self, start: Position) -> AStr:
        content_start = self._index
        has_escape = False
        escaped = False
        while True:
            peeked = self._peek_char()
            if peeked is None:
                raise UnterminatedString(start, self._position, self._source)
            ch, width = peeked
            if escaped:
                escaped = False
            elif ch == "\\":
                has_escape = True
                escaped = True
            elif ch == '"':
                raw = self._slice_from(content_start)
                self._advance(ch, width)  # closing quote
                return AStr(has_escape, raw)
            self._advance(ch, width)

    def _lex_bytes(self) -> ABytes:
        content_start = self._index
        self._skip_while(is_hex_digit)
        peeked = self._peek_char()
        if peeked is None:
            raise UnterminatedBytes(self._position, self._source)
        ch, width = peeked
        if ch != "#":
            raise UnterminatedBytesChar(self._position, ch, self._source)
        raw = self._slice_from(content_start)
        self._advance(ch, width)  # closing '#'
        return ABytes(raw)

    def _lex_number(self, leading: str, start_index: int) -> ANum | ADecimal:
        peeked = self._peek_char()
        if peeked is not None and leading == "0" and peeked[0] in "bx":
            prefix, width = peeked
            self._advance(prefix, width)
            digits_start = self._index
            if prefix == "b":
                self._skip_while(lambda c: c in "01_")
                return ANum(NumBase.BINARY, self._slice_from(digits_start))
            self._skip_while(lambda c: is_hex_digit(c) or c == "_")
            return ANum(NumBase.HEXADECIMAL, self._slice_from(digits_start))

        # A lone "0" followed by anything but a digit is just zero; "012" stays decimal.
        if leading != "0" or (peeked is not None and is_ascii_digit(peeked[0])):
            self._skip_while(lambda c: is_ascii_digit(c) or c == "_")
        integral = self._slice_from(start_index)

        peeked = self._peek_char()
        if peeked is None or peeked[0] != ".":
            return ANum(NumBase.DECIMAL, integral)

        dot, width = peeked
        self._advance(dot, width)
        fractional_start = self._index
        self._skip_while(is_ascii_digit)
        return ADecimal(integral, self._slice_from(fractional_start))


def tokenize(source: str | bytes, config: TokenizerConfig | None = None) -> list[Token]:
    """Convenience function: tokenize source text and return the token list."""
    return list(Tokenizer(source, config))
