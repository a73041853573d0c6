import pytest
from rlispy.lexer import LexError, iter_tokens, tokenize
from rlispy.token import Token, TokenKind
from rlispy.types import Pos, Symbol


def test_empty_source():
    assert tokenize("") == []


def test_whitespace_only():
    assert tokenize(" \t\r\n  ") == []


def test_unicode_whitespace():
    assert tokenize("a\u00a0b\u2003c\u3000") == [
        Token.symbol("a"),
        Token.symbol("b"),
        Token.symbol("c"),
    ]


def test_call_tokens():
    assert tokenize("(+ 1 2)") == [
        Token.open("("),
        Token.symbol("+"),
        Token.integer(1),
        Token.integer(2),
        Token.close(")"),
    ]


def test_brackets_not_matched_by_lexer():
    toks = tokenize("(]{)[}")
    assert [t.kind for t in toks] == [
        TokenKind.OPEN, TokenKind.CLOSE, TokenKind.OPEN,
        TokenKind.CLOSE, TokenKind.OPEN, TokenKind.CLOSE,
    ]
    assert "".join(t.value for t in toks) == "(]{)[}"


# --- Numbers ---

def test_integer():
    assert tokenize("42") == [Token.integer(42)]


def test_negative_integer():
    assert tokenize("-123") == [Token.integer(-123)]


def test_float():
    (tok,) = tokenize("3.14")
    assert tok.kind is TokenKind.FLOAT
    assert tok.value == 3.14


def test_negative_float():
    assert tokenize("-3.14") == [Token.float(-3.14)]


def test_leading_dot_float():
    assert tokenize(".5") == [Token.float(0.5)]


def test_trailing_dot_float():
    assert tokenize("7.") == [Token.float(7.0)]


def test_integer_not_float():
    (tok,) = tokenize("10")
    assert tok.kind is TokenKind.INTEGER
    assert isinstance(tok.value, int)


def test_two_decimal_points():
    with pytest.raises(LexError, match="more than one decimal point"):
        tokenize("1.2.3")


def test_integer_out_of_range():
    with pytest.raises(LexError, match="64 bits"):
        tokenize("9223372036854775808")


def test_integer_range_edges():
    assert tokenize("9223372036854775807") == [Token.integer(2 ** 63 - 1)]
    assert tokenize("-9223372036854775808") == [Token.integer(-(2 ** 63))]


def test_number_stops_at_minus():
    assert tokenize("1-2") == [Token.integer(1), Token.integer(-2)]


def test_number_followed_by_symbol():
    assert tokenize("12abc") == [Token.integer(12), Token.symbol("abc")]


# --- Strings ---

def test_string():
    assert tokenize('"hello world"') == [Token.string("hello world")]


def test_string_newline_escape():
    (tok,) = tokenize(r'"a\nb"')
    assert tok.value == "a\nb"


def test_string_all_escapes():
    (tok,) = tokenize(r'"\"\n\t\r\\"')
    assert tok.value == '"\n\t\r\\'


def test_string_keeps_raw_newline_and_parens():
    (tok,) = tokenize('"(a\n b)"')
    assert tok.value == "(a\n b)"


def test_illegal_escape():
    with pytest.raises(LexError, match=r"illegal escape sequence '\\q'"):
        tokenize(r'"a\qb"')


def test_unterminated_string():
    with pytest.raises(LexError, match="unterminated string"):
        tokenize('"abc')


def test_unterminated_string_after_backslash():
    with pytest.raises(LexError, match="unterminated string"):
        tokenize('"abc\\')


# --- Keywords ---

def test_keyword():
    assert tokenize(":foo-bar2") == [Token.keyword("foo-bar2")]


def test_keyword_stops_outside_alphabet():
    assert tokenize(":abc)") == [Token.keyword("abc"), Token.close(")")]


def test_keyword_no_path_splitting():
    assert tokenize(":a/b") == [Token.keyword("a"), Token.symbol("/b")]


def test_empty_keyword_at_end():
    with pytest.raises(LexError, match="empty keyword"):
        tokenize(":")


def test_empty_keyword_before_delimiter():
    with pytest.raises(LexError, match="empty keyword"):
        tokenize("(: 1)")


def test_uppercase_keyword_is_empty():
    with pytest.raises(LexError, match="empty keyword"):
        tokenize(":Foo")


# --- Characters ---

def test_char_single():
    assert tokenize("\\a") == [Token.char("a")]


def test_char_unicode():
    assert tokenize("\\é") == [Token.char("é")]


@pytest.mark.parametrize("name,expected", [
    ("newline", "\n"),
    ("return", "\r"),
    ("tab", "\t"),
    ("space", " "),
])
def test_char_names(name, expected):
    assert tokenize("\\" + name) == [Token.char(expected)]


def test_char_terminated_by_space():
    assert tokenize("\\x \\y") == [Token.char("x"), Token.char("y")]


def test_char_unknown_name():
    with pytest.raises(LexError, match="invalid character literal"):
        tokenize("\\bogus")


def test_char_empty():
    with pytest.raises(LexError, match="invalid character literal"):
        tokenize("\\")


# --- Comments ---

def test_comment_discarded():
    assert tokenize("; nothing here\n42 ; trailing") == [Token.integer(42)]


def test_comment_to_end_of_input():
    assert tokenize("1 ;; (unclosed") == [Token.integer(1)]


# --- Symbols ---

def test_simple_symbol():
    (tok,) = tokenize("foo")
    assert tok.kind is TokenKind.SYMBOL
    assert tok.value == Symbol("foo")
    assert tok.value.tail == ()


def test_operator_symbols():
    toks = tokenize("+ - * / <= != ?x@y #t $%|_")
    assert [t.value.head for t in toks] == ["+", "-", "*", "/", "<=", "!=", "?x@y", "#t", "$%|_"]


def test_dotted_symbol():
    assert tokenize("foo.bar.baz") == [Token.symbol("foo", "bar", "baz")]


def test_symbol_trailing_dot():
    with pytest.raises(LexError, match="cannot end with"):
        tokenize("foo.")


def test_symbol_double_dot():
    with pytest.raises(LexError, match="empty segment"):
        tokenize("foo..bar")


def test_leading_dot_is_unexpected():
    with pytest.raises(LexError, match="unexpected character"):
        tokenize(".foo")


def test_minus_alone_is_symbol():
    assert tokenize("-") == [Token.symbol("-")]


# --- Errors and positions ---

def test_unexpected_character():
    with pytest.raises(LexError, match="unexpected character '~'") as exc:
        tokenize("(a ~)")
    assert exc.value.text == "~"
    assert exc.value.lexeme == "~"
    assert exc.value.pos == Pos(1, 4)


def test_lex_error_is_syntax_error():
    with pytest.raises(SyntaxError):
        tokenize("~")


def test_positions():
    toks = tokenize("(a\n  :b)")
    assert [t.pos for t in toks] == [Pos(1, 1), Pos(1, 2), Pos(2, 3), Pos(2, 5)]


def test_position_not_part_of_equality():
    assert tokenize("  1") == tokenize("1")
    assert tokenize("  1")[0].pos != tokenize("1")[0].pos


def test_error_position_in_later_line():
    with pytest.raises(LexError) as exc:
        tokenize('1\n2 "x\\z"')
    assert exc.value.pos == Pos(2, 5)


def test_iter_tokens_is_lazy():
    it = iter_tokens("1 2 ~")
    assert next(it) == Token.integer(1)
    assert next(it) == Token.integer(2)
    with pytest.raises(LexError):
        next(it)


def test_tokenize_defn():
    src = """
        (defn add [a b]
            (+ a b))
    """
    kinds = [t.kind for t in tokenize(src)]
    assert kinds.count(TokenKind.OPEN) == 3
    assert kinds.count(TokenKind.CLOSE) == 3
    assert kinds.count(TokenKind.SYMBOL) == 7


def test_symbol_constructor_rejects_empty_segments():
    with pytest.raises(ValueError, match="empty segment"):
        Token.symbol("a", "")
    with pytest.raises(ValueError, match="empty segment"):
        Token.symbol("", "b")
