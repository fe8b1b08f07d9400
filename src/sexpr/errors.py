"""Error types with formatted source context.

Three tiers, each wrapping the one below: decode errors raised by the
UTF-8 decoder, lexical errors raised by the tokenizer, and structural
errors raised by the parser.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sexpr.tokens import GroupKind, Position, Span


def _snippet(
    message: str, source: str, filename: str, start: Position, end: Position | None
) -> str:
    lines = source.split("\n")
    line_idx = start.line - 1
    col = start.col

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx]
    else:
        source_line = ""

    # Underline the full range when on one line, otherwise to end of line
    if end is not None and end.line == start.line:
        underline_len = max(1, end.col - col)
    else:
        underline_len = max(1, len(source_line) - col)

    pad = " " * col
    carets = "^" * underline_len

    line_num = str(start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{start.line}:{col + 1}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


# ----------------------------------------------------------------------
# Decode errors
# ----------------------------------------------------------------------


class DecodeError(Exception):
    """The byte buffer does not hold a valid UTF-8 sequence at some offset."""

    message = "invalid UTF-8"

    def __init__(self) -> None:
        super().__init__(self.message)


class EmptyDataStream(DecodeError):
    message = "read past the end of the data stream"


class IncompleteSequence(DecodeError):
    """The buffer ends in the middle of a multi-byte sequence.

    More input could complete it, unlike the other decode errors.
    """

    def __init__(self, lead: int) -> None:
        self.lead = lead
        self.message = f"incomplete UTF-8 sequence starting with byte 0x{lead:02x}"
        super().__init__()


class InvalidSequence(DecodeError):
    message = "invalid UTF-8 sequence"


class InvalidContinuationByte(DecodeError):
    message = "invalid UTF-8 continuation byte"


# ----------------------------------------------------------------------
# Lexical errors
# ----------------------------------------------------------------------


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.sexp") -> str:
        return _snippet(self.message, self.source, filename, self.position, None)


class DataError(LexError):
    """The input is not valid UTF-8 at byte *offset*."""

    def __init__(
        self, error: DecodeError, offset: int, position: Position, source: str
    ) -> None:
        self.error = error
        self.offset = offset
        super().__init__(f"{error.message} at byte offset {offset}", position, source)


class UnterminatedString(LexError):
    """End of input before the closing quote.

    *position* is the opening quote, *reached* where the input ran out.
    """

    def __init__(self, position: Position, reached: Position, source: str) -> None:
        self.reached = reached
        super().__init__("unterminated string literal", position, source)


class UnterminatedBytes(LexError):
    """End of input inside a ``#...#`` bytes literal."""

    def __init__(self, position: Position, source: str) -> None:
        super().__init__("unterminated bytes literal: unexpected end of input", position, source)


class UnterminatedBytesChar(LexError):
    """A bytes literal was followed by something other than ``#``."""

    def __init__(self, position: Position, char: str, source: str) -> None:
        self.char = char
        super().__init__(
            f"unterminated bytes literal: expected '#', found {char!r}", position, source
        )


class UnprocessableChar(LexError):
    def __init__(self, position: Position, char: str, source: str) -> None:
        self.char = char
        super().__init__(f"unprocessable character {char!r}", position, source)


# ----------------------------------------------------------------------
# Structural errors
# ----------------------------------------------------------------------


class ParseError(Exception):
    """Raised on the first parse error, with span and source context."""

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.sexp") -> str:
        return _snippet(self.message, self.source, filename, self.span.start, self.span.end)


class TokenizerError(ParseError):
    """A lexical error surfaced through the parser."""

    def __init__(self, error: LexError) -> None:
        from sexpr.tokens import Span

        self.error = error
        super().__init__(error.message, Span(error.position, error.position), error.source)


class UnbalancedEmpty(ParseError):
    """A closing delimiter with no open group."""

    def __init__(self, span: Span, kind: GroupKind, source: str) -> None:
        self.kind = kind
        self.position = span.start
        super().__init__(f"unbalanced: unexpected close '{kind.close_char}'", span, source)


class UnbalancedMismatch(ParseError):
    """A group was closed by a delimiter of a different kind."""

    def __init__(
        self, span: Span, expected: GroupKind, got: GroupKind, source: str
    ) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            f"mismatched group: expected '{expected.close_char}', found '{got.close_char}'",
            span,
            source,
        )


class UnfinishedGroup(ParseError):
    """End of input while a group was still open; *span* is its opening delimiter."""

    def __init__(self, kind: GroupKind, span: Span, source: str) -> None:
        self.kind = kind
        super().__init__(
            f"unfinished group: '{kind.open_char}' is never closed", span, source
        )


class GroupTooDeep(ParseError):
    def __init__(self, span: Span, limit: int, source: str) -> None:
        self.limit = limit
        super().__init__(f"groups nested deeper than {limit} levels", span, source)
