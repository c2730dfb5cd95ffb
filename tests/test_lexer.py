import pytest

from octools.expr import LexicalError
from octools.lexer import Lexer, Token, TokenKind, tokenize, unescape

K = TokenKind
EOF = Token(K.EOF)


def sym(name):
    return Token(K.SYMBOL, name)


def all_tokens(text):
    lexer = Lexer(text)
    got = []
    while True:
        token = lexer.next_token()
        got.append(token)
        if token == EOF:
            return got


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "(abc def ghi 0 123 45.6 :abc)",
            [
                Token(K.LPAREN),
                sym("abc"),
                sym("def"),
                sym("ghi"),
                Token(K.INT, 0),
                Token(K.INT, 123),
                Token(K.FLOAT, 45.6),
                Token(K.KEYWORD, "abc"),
                Token(K.RPAREN),
                EOF,
            ],
        ),
        ("", [EOF]),
        ("abc", [sym("abc"), EOF]),
        ("123", [Token(K.INT, 123), EOF]),
        ("-123", [Token(K.INT, -123), EOF]),
        ("-abc", [sym("-abc"), EOF]),
        (
            "[-abc -a1]",
            [Token(K.LBRACKET), sym("-abc"), sym("-a1"), Token(K.RBRACKET), EOF],
        ),
        ("*", [sym("*"), EOF]),
        ("*abc*", [sym("*abc*"), EOF]),
        ("abc123", [sym("abc123"), EOF]),
        (
            "(#{})",
            [Token(K.LPAREN), Token(K.LSHARP_BRACE), Token(K.RBRACE), Token(K.RPAREN), EOF],
        ),
        (
            "(fn [x] (+ x 1))",
            [
                Token(K.LPAREN),
                sym("fn"),
                Token(K.LBRACKET),
                sym("x"),
                Token(K.RBRACKET),
                Token(K.LPAREN),
                sym("+"),
                sym("x"),
                Token(K.INT, 1),
                Token(K.RPAREN),
                Token(K.RPAREN),
                EOF,
            ],
        ),
        ('"hello, world"', [Token(K.STRING, "hello, world"), EOF]),
    ],
)
def test_source_cases(text, expected):
    assert all_tokens(text) == expected


@pytest.mark.parametrize("text", [":0", '"hello, world'])
def test_source_error_cases(text):
    with pytest.raises(LexicalError):
        Lexer(text).next_token()


def test_literals():
    assert tokenize("true false nil") == [
        Token(K.BOOL, True),
        Token(K.BOOL, False),
        Token(K.NIL),
    ]


def test_quote_and_braces():
    assert tokenize("'a {}") == [
        Token(K.SINGLE_QUOTE),
        sym("a"),
        Token(K.LBRACE),
        Token(K.RBRACE),
    ]


def test_negative_float_and_lone_minus():
    assert tokenize("-1.5 -") == [Token(K.FLOAT, -1.5), sym("-")]


def test_number_followed_by_symbol():
    assert tokenize("-1abc") == [Token(K.INT, -1), sym("abc")]


@pytest.mark.parametrize("text", ["#a", "1-2", "1.5.2", "~", "99999999999999999999"])
def test_errors(text):
    with pytest.raises(LexicalError):
        tokenize(text)


def test_string_escapes():
    assert tokenize(r'"a\tb\nc"') == [Token(K.STRING, "a\tb\nc")]


def test_whitespace_skipped():
    assert tokenize(" \t\r\n(a)\n") == [Token(K.LPAREN), sym("a"), Token(K.RPAREN)]


def test_tokenize_excludes_eof():
    assert Lexer("abc 1").tokenize() == [sym("abc"), Token(K.INT, 1)]


def test_unescape():
    assert unescape(r"a\nb\rc\td\\e\'f") == "a\nb\rc\td\\e'f"
    assert unescape("plain") == "plain"


def test_eof_repeats():
    lexer = Lexer("x")
    assert lexer.next_token() == sym("x")
    assert lexer.next_token() == EOF
    assert lexer.next_token() == EOF