"""Tokenizer: source text -> flat sequence of tokens.

Scans strictly left to right. At each position the first matching rule wins:
whitespace, brackets, strings, keywords, character literals, comments,
numbers, symbols. Anything else is a lexical error.
"""

import logging
from typing import Iterator, Optional

from .token import (
    CHAR_NAMES,
    CLOSE_BRACKETS,
    DIGITS,
    INT64_MAX,
    INT64_MIN,
    KEYWORD_CHARS,
    OPEN_BRACKETS,
    STRING_ESCAPES,
    SYMBOL_CHARS,
    Token,
)
from .types import Pos

logger = logging.getLogger(__name__)


class LexError(SyntaxError):
    """Raised on the first malformed lexeme.

    Attributes:
        pos: Where the offending lexeme starts (None if unknown)
        text: The offending character or the partial literal read so far
        lexeme: Same as text
    """

    def __init__(self, message: str, pos: Optional[Pos] = None, lexeme: Optional[str] = None):
        if pos is not None:
            message = f"{message} at {pos}"
        super().__init__(message)
        self.pos = pos
        self.text = lexeme
        self.lexeme = lexeme


class _Cursor:
    __slots__ = ("src", "i", "line", "column")

    def __init__(self, src: str):
        self.src = src
        self.i = 0
        self.line = 1
        self.column = 1

    def peek(self, offset: int = 0) -> str:
        """Character `offset` places ahead, or "" past the end."""
        j = self.i + offset
        return self.src[j] if j < len(self.src) else ""

    def advance(self) -> str:
        ch = self.src[self.i]
        self.i += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def pos(self) -> Pos:
        return Pos(self.line, self.column)


def iter_tokens(source: str) -> Iterator[Token]:
    """Yield tokens from `source` lazily. Raises LexError when a bad lexeme is reached."""
    cur = _Cursor(source)
    while True:
        ch = cur.peek()
        if not ch:
            return
        start = cur.pos()

        if ch.isspace():
            cur.advance()
            continue

        if ch in OPEN_BRACKETS:
            cur.advance()
            yield Token.open(ch, start)
            continue

        if ch in CLOSE_BRACKETS:
            cur.advance()
            yield Token.close(ch, start)
            continue

        if ch == '"':
            yield _lex_string(cur, start)
            continue

        if ch == ":":
            yield _lex_keyword(cur, start)
            continue

        if ch == "\\":
            yield _lex_char(cur, start)
            continue

        if ch == ";":
            _skip_comment(cur)
            continue

        if ch in DIGITS or (ch in "-." and cur.peek(1) in DIGITS):
            yield _lex_number(cur, start)
            continue

        if ch in SYMBOL_CHARS:
            yield _lex_symbol(cur, start)
            continue

        raise LexError(f"unexpected character {ch!r}", start, ch)


def tokenize(source: str) -> list[Token]:
    """Tokenize `source` completely, failing atomically on the first LexError."""
    tokens = list(iter_tokens(source))
    logger.debug("tokenized %d chars into %d tokens", len(source), len(tokens))
    return tokens


def _lex_string(cur: _Cursor, start: Pos) -> Token:
    cur.advance()  # opening quote
    buf: list[str] = []
    while True:
        ch = cur.peek()
        if not ch:
            raise LexError("unterminated string", start, '"' + "".join(buf))
        cur.advance()
        if ch == '"':
            return Token.string("".join(buf), start)
        if ch != "\\":
            buf.append(ch)
            continue
        esc_pos = Pos(cur.line, cur.column - 1)
        esc = cur.peek()
        if not esc:
            raise LexError("unterminated string", start, '"' + "".join(buf) + "\\")
        cur.advance()
        if esc not in STRING_ESCAPES:
            raise LexError(f"illegal escape sequence '\\{esc}' in string", esc_pos, "\\" + esc)
        buf.append(STRING_ESCAPES[esc])


def _lex_keyword(cur: _Cursor, start: Pos) -> Token:
    cur.advance()  # `:`
    buf: list[str] = []
    while cur.peek() and cur.peek() in KEYWORD_CHARS:
        buf.append(cur.advance())
    if not buf:
        raise LexError("empty keyword", start, ":")
    return Token.keyword("".join(buf), start)


def _lex_char(cur: _Cursor, start: Pos) -> Token:
    cur.advance()  # backslash
    buf: list[str] = []
    while cur.peek() and not cur.peek().isspace():
        buf.append(cur.advance())
    text = "".join(buf)
    if text in CHAR_NAMES:
        return Token.char(CHAR_NAMES[text], start)
    if len(text) == 1:
        return Token.char(text, start)
    raise LexError(f"invalid character literal '\\{text}'", start, "\\" + text)


def _skip_comment(cur: _Cursor) -> None:
    while cur.peek():
        if cur.advance() == "\n":
            return


def _lex_number(cur: _Cursor, start: Pos) -> Token:
    buf = [cur.advance()]
    while cur.peek() and (cur.peek() in DIGITS or cur.peek() == "."):
        buf.append(cur.advance())
    text = "".join(buf)
    if text.count(".") > 1:
        raise LexError(f"invalid number {text!r}: more than one decimal point", start, text)
    try:
        if "." in text:
            return Token.float(float(text), start)
        value = int(text)
    except ValueError:
        raise LexError(f"invalid number {text!r}", start, text) from None
    if not INT64_MIN <= value <= INT64_MAX:
        raise LexError(f"integer {text} does not fit in 64 bits", start, text)
    return Token.integer(value, start)


def _lex_symbol(cur: _Cursor, start: Pos) -> Token:
    segments: list[str] = []
    buf: list[str] = []
    while True:
        ch = cur.peek()
        if ch and ch in SYMBOL_CHARS:
            buf.append(cur.advance())
        elif ch == ".":
            if not buf:
                partial = ".".join(segments) + ".."
                raise LexError(f"empty segment in symbol {partial!r}", start, partial)
            segments.append("".join(buf))
            buf = []
            cur.advance()
        else:
            break
    if not buf:
        partial = ".".join(segments) + "."
        raise LexError(f"symbol {partial!r} cannot end with '.'", start, partial)
    segments.append("".join(buf))
    head, *tail = segments
    return Token.symbol(head, *tail, pos=start)
