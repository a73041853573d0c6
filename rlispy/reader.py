"""Recursive-descent reader: token sequence -> syntax-tree forms.

`read_form` is the primitive: it consumes exactly one form from the front of a
token sequence and hands back the unconsumed remainder. `Forms` wraps it to
walk every top-level form, and `parse`/`parse_all` take source text directly.
"""

import logging
from collections.abc import Sequence
from typing import Iterable, Iterator, Optional

from .lexer import tokenize
from .token import MATCHING, Token, TokenKind
from .types import (
    Call,
    Char,
    Float,
    Form,
    Integer,
    Keyword,
    List,
    Map,
    Pos,
    ReaderOptions,
    String,
    Symbol,
)

logger = logging.getLogger(__name__)


class ParseError(SyntaxError):
    """Structural error while reading forms.

    Attributes:
        token: The offending token, or None at end of input
        pos: Source position of the problem, when known
    """

    def __init__(self, message: str, token: Optional[Token] = None, pos: Optional[Pos] = None):
        if pos is None and token is not None:
            pos = token.pos
        if pos is not None:
            message = f"{message} at {pos}"
        super().__init__(message)
        self.token = token
        self.pos = pos


class UnexpectedEOF(ParseError):
    pass


class MismatchedBracket(ParseError):
    pass


class UnexpectedToken(ParseError):
    pass


class DepthExceeded(ParseError):
    pass


class EmptyCall(ParseError):
    pass


class DuplicateKey(ParseError):
    pass


def read_form(
    tokens: Iterable[Token], options: Optional[ReaderOptions] = None
) -> tuple[Form, tuple[Token, ...]]:
    """Read one form from the front of `tokens`.

    Returns:
        (form, remaining_tokens). `tokens` itself is left untouched, so reading
        it again yields an equal form.

    Raises:
        ParseError (or a subclass) on the first structural error.
    """
    if not isinstance(tokens, Sequence):
        tokens = tuple(tokens)
    form, idx = _read_top(tokens, 0, options or ReaderOptions())
    return form, tuple(tokens[idx:])


class Forms:
    """All top-level forms of a token sequence, read lazily.

    Iterating again starts over from the first token.
    """

    def __init__(self, tokens: Iterable[Token], options: Optional[ReaderOptions] = None):
        self.tokens = tuple(tokens)
        self.options = options or ReaderOptions()

    def __iter__(self) -> Iterator[Form]:
        idx = 0
        while idx < len(self.tokens):
            form, idx = _read_top(self.tokens, idx, self.options)
            yield form


def read_forms(tokens: Iterable[Token], options: Optional[ReaderOptions] = None) -> Forms:
    return Forms(tokens, options)


def parse(source: str, options: Optional[ReaderOptions] = None) -> Form:
    """Parse source text holding exactly one form."""
    tokens = tokenize(source)
    if not tokens:
        raise UnexpectedEOF("unexpected EOF")
    form, idx = _read_top(tokens, 0, options or ReaderOptions())
    if idx != len(tokens):
        extra = tokens[idx]
        raise ParseError(f"extra tokens after form, starting with {extra.describe()}", extra)
    return form


def parse_all(source: str, options: Optional[ReaderOptions] = None) -> list[Form]:
    """Parse every top-level form in source text."""
    forms = list(Forms(tokenize(source), options))
    logger.debug("read %d top-level forms", len(forms))
    return forms


def _read_top(tokens: Sequence[Token], idx: int, opts: ReaderOptions) -> tuple[Form, int]:
    # max_depth above the interpreter stack limit still ends in DepthExceeded.
    try:
        return _read(tokens, idx, opts, 0)
    except RecursionError:
        raise DepthExceeded(
            "nesting too deep for the interpreter stack", tokens[idx] if idx < len(tokens) else None
        ) from None


def _read(tokens: Sequence[Token], idx: int, opts: ReaderOptions, depth: int) -> tuple[Form, int]:
    if idx >= len(tokens):
        raise UnexpectedEOF("unexpected end of input, expected a form")
    tok = tokens[idx]
    if tok.kind is TokenKind.OPEN:
        if depth >= opts.max_depth:
            raise DepthExceeded(f"max nesting depth of {opts.max_depth} exceeded", tok)
        if tok.value == "{":
            return _read_map(tokens, idx + 1, tok, opts, depth + 1)
        return _read_seq(tokens, idx + 1, tok, opts, depth + 1)
    if tok.is_literal():
        return _leaf(tok), idx + 1
    raise UnexpectedToken(f"unexpected {tok.describe()}", tok)


def _leaf(tok: Token) -> Form:
    kind = tok.kind
    if kind is TokenKind.INTEGER:
        return Integer(tok.value, tok.pos)
    if kind is TokenKind.FLOAT:
        return Float(tok.value, tok.pos)
    if kind is TokenKind.STRING:
        return String(tok.value, tok.pos)
    if kind is TokenKind.CHAR:
        return Char(tok.value, tok.pos)
    if kind is TokenKind.SYMBOL:
        return Symbol(tok.value.head, tok.value.tail, tok.pos)
    if kind is TokenKind.KEYWORD:
        return Keyword(tok.value, tok.pos)
    raise UnexpectedToken(f"unexpected {tok.describe()}", tok)


def _check_close(tok: Token, opener: Token) -> None:
    closer = MATCHING[opener.value]
    if tok.value != closer:
        raise MismatchedBracket(
            f"mismatched bracket: expected `{closer}` to close `{opener.value}`, got `{tok.value}`",
            tok,
        )


def _unterminated(opener: Token) -> UnexpectedEOF:
    return UnexpectedEOF(f"unexpected end of input, unterminated `{opener.value}`", opener)


def _read_seq(
    tokens: Sequence[Token], idx: int, opener: Token, opts: ReaderOptions, depth: int
) -> tuple[Form, int]:
    items: list[Form] = []
    while True:
        if idx >= len(tokens):
            raise _unterminated(opener)
        tok = tokens[idx]
        if tok.kind is TokenKind.CLOSE:
            _check_close(tok, opener)
            idx += 1
            break
        form, idx = _read(tokens, idx, opts, depth)
        items.append(form)

    if opener.value == "[":
        return List(tuple(items), opener.pos), idx
    if not items and not opts.allow_empty_call:
        raise EmptyCall("empty call `()`", opener)
    return Call(tuple(items), opener.pos), idx


def _read_map(
    tokens: Sequence[Token], idx: int, opener: Token, opts: ReaderOptions, depth: int
) -> tuple[Form, int]:
    pairs: list[tuple[Form, Form]] = []
    check_keys = opts.duplicate_keys != "allow"
    seen: set[Form] = set()
    while True:
        if idx >= len(tokens):
            raise _unterminated(opener)
        tok = tokens[idx]
        if tok.kind is TokenKind.CLOSE:
            _check_close(tok, opener)
            idx += 1
            break
        # An odd entry count surfaces here as an unexpected `}` for the value.
        key, idx = _read(tokens, idx, opts, depth)
        value, idx = _read(tokens, idx, opts, depth)
        if check_keys:
            if key in seen:
                if opts.duplicate_keys == "error":
                    raise DuplicateKey(f"duplicate map key {key!r}", tok)
                logger.warning("duplicate map key %r at %s", key, tok.pos)
            seen.add(key)
        pairs.append((key, value))
    return Map(tuple(pairs), opener.pos), idx
