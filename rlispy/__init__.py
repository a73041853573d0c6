from .lexer import LexError, iter_tokens, tokenize
from .reader import (
    DepthExceeded,
    DuplicateKey,
    EmptyCall,
    Forms,
    MismatchedBracket,
    ParseError,
    UnexpectedEOF,
    UnexpectedToken,
    parse,
    parse_all,
    read_form,
    read_forms,
)
from .token import Token, TokenKind
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

__all__ = [
    "tokenize", "iter_tokens", "read_form", "read_forms", "Forms", "parse", "parse_all",
    "Token", "TokenKind", "Pos", "ReaderOptions",
    "Call", "List", "Map", "Symbol", "Integer", "Float", "String", "Char", "Keyword", "Form",
    "LexError", "ParseError", "UnexpectedEOF", "MismatchedBracket", "UnexpectedToken",
    "DepthExceeded", "EmptyCall", "DuplicateKey",
]
