import pytest

from webrpc.ridl.lexer import Token, TokenType, lex, tokenize, unescape_string

T = TokenType


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", [(0, 0)]),
        ("A", [(1, 1), (1, 1)]),
        (" ", [(1, 1), (1, 1)]),
        (" ABC", [(1, 1), (1, 4), (1, 4)]),
        (
            " ABC\nZ\nDEF ",
            [(1, 1), (1, 4), (1, 5), (2, 1), (2, 2), (3, 3), (3, 4), (3, 4)],
        ),
        (
            " ABC\n\n\nZ\nDEF ",
            [(1, 1), (1, 4), (1, 5), (2, 1), (3, 1), (4, 1), (4, 2), (5, 3), (5, 4), (5, 4)],
        ),
        (
            "=\nA\nC\nD EFG HIJK L",
            [
                (1, 1), (1, 2), (2, 1), (2, 2), (3, 1), (3, 2), (4, 1),
                (4, 2), (4, 5), (4, 6), (4, 10), (4, 11), (4, 12), (4, 12),
            ],
        ),
        ("=", [(1, 1), (1, 1)]),
        ("=>", [(1, 2), (1, 2)]),
        ("=> =>", [(1, 2), (1, 3), (1, 5), (1, 5)]),
        ("=> =<", [(1, 2), (1, 3), (1, 4), (1, 5), (1, 5)]),
        ("=>    =<", [(1, 2), (1, 6), (1, 7), (1, 8), (1, 8)]),
        (
            "=>   ... =>   =<",
            [
                (1, 2), (1, 5), (1, 6), (1, 7), (1, 8), (1, 9),
                (1, 11), (1, 14), (1, 15), (1, 16), (1, 16),
            ],
        ),
        ("=>=>==>", [(1, 2), (1, 4), (1, 5), (1, 7), (1, 7)]),
        ('""', [(1, 1), (1, 2), (1, 2)]),
        ('"abc\\"', [(1, 1), (1, 5), (1, 6), (1, 6)]),
    ],
)
def test_lexer_column_and_line(text, expected):
    assert [(tok.line, tok.col) for tok in lex(text)] == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", [T.EOF]),
        ("=", [T.EQUAL, T.EOF]),
        ("===", [T.EQUAL, T.EQUAL, T.EQUAL, T.EOF]),
        ("=ABC=", [T.EQUAL, T.WORD, T.EQUAL, T.EOF]),
        (
            "...===>=>",
            [T.DOT, T.DOT, T.DOT, T.EQUAL, T.EQUAL, T.ROCKET, T.ROCKET, T.EOF],
        ),
        ('"abc\\""', [T.QUOTE, T.WORD, T.QUOTE, T.QUOTE, T.EOF]),
    ],
)
def test_lexer_emitter(text, expected):
    assert [tok.type for tok in lex(text)] == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ('""\\"', ['"', '"', "\\", '"']),
        ("=ABC", ["=", "ABC"]),
        ("=> =>", ["=>", " ", "=>"]),
        ("=> ==>", ["=>", " ", "=", "=>"]),
        ("=>=== >", ["=>", "=", "=", "=", " ", ">"]),
        (
            "=ABC<>\nDEF=(=)==>=>\n=\n\n\n=>=>==>...ABC\n\n",
            [
                "=", "ABC", "<", ">", "\n", "DEF", "=", "(", "=", ")", "=",
                "=>", "=>", "\n", "=", "\n", "\n", "\n", "=>", "=>", "=",
                "=>", ".", ".", ".", "ABC", "\n", "\n",
            ],
        ),
        (
            " \n\n\t\twebrpc    =v1 + foo = bar",
            [
                " ", "\n", "\n", "\t\t", "webrpc", "    ", "=", "v1", " ",
                "+", " ", "foo", " ", "=", " ", "bar",
            ],
        ),
    ],
)
def test_lexer_string_tokens(text, expected):
    values = [tok.value for tok in lex(text) if tok.type is not T.EOF]
    assert values == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        (" ", [T.WHITESPACE]),
        ("AAAA", [T.WORD]),
        (" \tAAAA       ", [T.WHITESPACE, T.WORD, T.WHITESPACE]),
        (
            " -AAAA + - +-",
            [
                T.WHITESPACE, T.MINUS_SIGN, T.WORD, T.WHITESPACE, T.PLUS_SIGN,
                T.WHITESPACE, T.MINUS_SIGN, T.WHITESPACE, T.PLUS_SIGN, T.MINUS_SIGN,
            ],
        ),
        (
            "- -A - --( AA?:AA AA:? BB AA-A-A-A-A-",
            [
                T.MINUS_SIGN, T.WHITESPACE, T.MINUS_SIGN, T.WORD, T.WHITESPACE,
                T.MINUS_SIGN, T.WHITESPACE, T.MINUS_SIGN, T.MINUS_SIGN,
                T.OPEN_PAREN, T.WHITESPACE, T.WORD, T.QUESTION_MARK, T.COLON,
                T.WORD, T.WHITESPACE, T.WORD, T.COLON, T.QUESTION_MARK,
                T.WHITESPACE, T.WORD, T.WHITESPACE, T.WORD,
            ],
        ),
        (
            "AAA BBBB CCC =",
            [T.WORD, T.WHITESPACE, T.WORD, T.WHITESPACE, T.WORD, T.WHITESPACE, T.EQUAL],
        ),
        (
            "   AAA    \t\t         BBBB CCC =\t\t=>",
            [
                T.WHITESPACE, T.WORD, T.WHITESPACE, T.WORD, T.WHITESPACE,
                T.WORD, T.WHITESPACE, T.EQUAL, T.WHITESPACE, T.ROCKET,
            ],
        ),
        (
            "  \t\t\t\t AAA    \t\t         BBBB CCC          \t\t\t\t =",
            [
                T.WHITESPACE, T.WORD, T.WHITESPACE, T.WORD, T.WHITESPACE,
                T.WORD, T.WHITESPACE, T.EQUAL,
            ],
        ),
        ("A\n\tB", [T.WORD, T.NEW_LINE, T.WHITESPACE, T.WORD]),
        (
            '""" AA=\\',
            [T.QUOTE, T.QUOTE, T.QUOTE, T.WHITESPACE, T.WORD, T.EQUAL, T.BACKSLASH],
        ),
    ],
)
def test_lexer_simple_tokens(text, expected):
    assert [tok.type for tok in tokenize(text)] == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("\n\n\nwebrpc", ["\n", "\n", "\n", "webrpc"]),
        ("\n\n\nwebrpc\n=v1", ["\n", "\n", "\n", "webrpc", "\n", "=", "v1"]),
        (
            "\n\n\nwebrpc\n=v1\n\t\t\t+   foo = bar - baz = 56 # a    comment\n\nversion = v0.0.0.1",
            [
                "\n", "\n", "\n", "webrpc", "\n", "=", "v1", "\n", "\t\t\t",
                "+", "   ", "foo", " ", "=", " ", "bar", " ", "-", " ", "baz",
                " ", "=", " ", "56", " ", "#", " ", "a", "    ", "comment",
                "\n", "\n", "version", " ", "=", " ", "v0.0.0.1",
            ],
        ),
    ],
)
def test_lexer_ridl_tokens(text, expected):
    assert [tok.value for tok in tokenize(text)] == expected


def test_tokenize_accepts_bytes():
    assert [tok.value for tok in tokenize(b"name = x")] == ["name", " ", "=", " ", "x"]


def test_tokenize_excludes_eof_and_lex_ends_with_it():
    tokens = list(lex("a b"))
    assert tokens[-1].type is T.EOF
    assert all(tok.type is not T.EOF for tok in tokenize("a b"))


def test_word_continues_through_punctuation():
    assert [tok.value for tok in tokenize("foo-bar# x")] == ["foo-bar#", " ", "x"]


def test_token_str():
    assert str(Token(T.WORD, "abc")) == "abc"
    assert str(Token(T.EOF)) == "[EOF]"
    assert str(Token(T.EOL)) == "[invalid]"


def test_dash_is_minus_sign():
    assert [tok.type for tok in tokenize("-")] == [T.DASH]
    assert [str(tok.type) for tok in tokenize("- ")] == ["[minus]", "[space]"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("plain", "plain"),
        ("a\\nb", "a\nb"),
        ("a\\tb", "a\tb"),
        ('say \\"hi\\"', 'say "hi"'),
        ("", ""),
    ],
)
def test_unescape_string(text, expected):
    assert unescape_string(text) == expected


def test_unescape_string_trailing_backslash():
    with pytest.raises(ValueError, match="unexpected end after backslash"):
        unescape_string("abc\\")


def test_unescape_string_unknown_escape():
    with pytest.raises(ValueError, match="after backslash"):
        unescape_string("a\\xb")