"""Lexical tokens exchanged between the tokenizer and the reader."""

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from .types import Pos, Symbol

# Characters allowed after `:` in a keyword
KEYWORD_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-")
# Characters allowed in a symbol path segment
SYMBOL_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-+*/|<>=!?@#$%"
)
DIGITS = frozenset("0123456789")

# Character following `\` inside a string -> resolved character
STRING_ESCAPES = {
    '"': '"',
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}

# Named character literals: `\newline`, `\return`, `\tab`, `\space`
CHAR_NAMES = {
    "newline": "\n",
    "return": "\r",
    "tab": "\t",
    "space": " ",
}

MATCHING = {"(": ")", "[": "]", "{": "}"}
OPEN_BRACKETS = frozenset(MATCHING)
CLOSE_BRACKETS = frozenset(MATCHING.values())

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class TokenKind(enum.Enum):
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    CHAR = "char"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    OPEN = "open"
    CLOSE = "close"


LITERAL_KINDS = frozenset({
    TokenKind.INTEGER,
    TokenKind.FLOAT,
    TokenKind.STRING,
    TokenKind.CHAR,
    TokenKind.SYMBOL,
    TokenKind.KEYWORD,
})


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    `value` depends on `kind`:
        INTEGER -> int, FLOAT -> float, STRING -> str (escapes resolved),
        CHAR -> single-character str, SYMBOL -> Symbol,
        KEYWORD -> str (name without the `:`), OPEN/CLOSE -> bracket char.
    """

    kind: TokenKind
    value: Any
    pos: Optional[Pos] = field(default=None, compare=False)

    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS

    def is_open(self, bracket: Optional[str] = None) -> bool:
        return self.kind is TokenKind.OPEN and (bracket is None or self.value == bracket)

    def is_close(self, bracket: Optional[str] = None) -> bool:
        return self.kind is TokenKind.CLOSE and (bracket is None or self.value == bracket)

    def describe(self) -> str:
        """Short source-like rendering for error messages."""
        if self.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            return f"`{self.value}`"
        if self.kind is TokenKind.STRING:
            return f"string {self.value!r}"
        if self.kind is TokenKind.KEYWORD:
            return f"keyword `:{self.value}`"
        if self.kind is TokenKind.CHAR:
            return f"char {self.value!r}"
        return f"{self.kind.value} `{self.value}`"

    # --- Constructors ---

    @classmethod
    def integer(cls, value: int, pos: Optional[Pos] = None) -> "Token":
        return cls(TokenKind.INTEGER, value, pos)

    @classmethod
    def float(cls, value: float, pos: Optional[Pos] = None) -> "Token":
        return cls(TokenKind.FLOAT, value, pos)

    @classmethod
    def string(cls, value: str, pos: Optional[Pos] = None) -> "Token":
        return cls(TokenKind.STRING, value, pos)

    @classmethod
    def char(cls, value: str, pos: Optional[Pos] = None) -> "Token":
        return cls(TokenKind.CHAR, value, pos)

    @classmethod
    def symbol(cls, head: str, *tail: str, pos: Optional[Pos] = None) -> "Token":
        if not head or not all(tail):
            raise ValueError(f"empty segment in symbol path: {'.'.join((head,) + tail)!r}")
        return cls(TokenKind.SYMBOL, Symbol(head, tail, pos), pos)

    @classmethod
    def keyword(cls, name: str, pos: Optional[Pos] = None) -> "Token":
        return cls(TokenKind.KEYWORD, name, pos)

    @classmethod
    def open(cls, bracket: str, pos: Optional[Pos] = None) -> "Token":
        if bracket not in OPEN_BRACKETS:
            raise ValueError(f"not an opening bracket: {bracket!r}")
        return cls(TokenKind.OPEN, bracket, pos)

    @classmethod
    def close(cls, bracket: str, pos: Optional[Pos] = None) -> "Token":
        if bracket not in CLOSE_BRACKETS:
            raise ValueError(f"not a closing bracket: {bracket!r}")
        return cls(TokenKind.CLOSE, bracket, pos)
