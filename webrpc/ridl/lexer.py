"""Lexer for the RIDL schema language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union


class TokenType(Enum):
    """Kinds of token produced by the RIDL lexer."""

    INVALID = 0
    WHITESPACE = 1
    NEW_LINE = 2
    EQUAL = 3
    OPEN_PAREN = 4
    CLOSE_PAREN = 5
    OPEN_BRACKET = 6
    CLOSE_BRACKET = 7
    OPEN_ANGLE_BRACKET = 8
    CLOSE_ANGLE_BRACKET = 9
    PLUS_SIGN = 10
    MINUS_SIGN = 11
    HASH = 12
    COLON = 13
    COMMA = 14
    BACKSLASH = 15
    SLASH = 16
    QUOTE = 17
    DOT = 18
    QUESTION_MARK = 19
    ROCKET = 20
    WORD = 21
    EXTRA = 22
    OPTIONAL_WHITESPACE = 23
    COMPOSED = 24
    EOL = 25
    EOF = 26

    DASH = 11

    def __str__(self) -> str:
        return _TOKEN_TYPE_NAMES.get(self, _TOKEN_TYPE_NAMES[TokenType.INVALID])


_TOKEN_TYPE_NAMES: dict[TokenType, str] = {
    TokenType.INVALID: "[invalid]",
    TokenType.WHITESPACE: "[space]",
    TokenType.NEW_LINE: "[newline]",
    TokenType.EQUAL: "[equal sign]",
    TokenType.OPEN_PAREN: "[open parenthesis]",
    TokenType.CLOSE_PAREN: "[close parenthesis]",
    TokenType.OPEN_BRACKET: "[open bracket]",
    TokenType.CLOSE_BRACKET: "[close bracket]",
    TokenType.OPEN_ANGLE_BRACKET: "[open angle bracket]",
    TokenType.CLOSE_ANGLE_BRACKET: "[close angle bracket]",
    TokenType.PLUS_SIGN: "[plus]",
    TokenType.MINUS_SIGN: "[minus]",
    TokenType.HASH: "[hash]",
    TokenType.COLON: "[colon]",
    TokenType.COMMA: "[comma]",
    TokenType.DOT: "[dot]",
    TokenType.QUOTE: "[quote]",
    TokenType.BACKSLASH: "[backslash]",
    TokenType.SLASH: "[slash]",
    TokenType.QUESTION_MARK: "[question mark]",
    TokenType.ROCKET: "[rocket]",
    TokenType.WORD: "[word]",
    TokenType.EXTRA: "[extra]",
    TokenType.COMPOSED: "[composed]",
    TokenType.EOF: "[EOF]",
}

_EMPTY = "\x00"
_SPACE_CHARS = frozenset(" \t\r")
_WORD_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)
_WORD_BREAK = frozenset("\x00 \t\r\n[]()<>{}=:¿?¡!,\"")

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    '"': TokenType.QUOTE,
    "/": TokenType.SLASH,
    "\\": TokenType.BACKSLASH,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "<": TokenType.OPEN_ANGLE_BRACKET,
    ">": TokenType.CLOSE_ANGLE_BRACKET,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    "#": TokenType.HASH,
    "+": TokenType.PLUS_SIGN,
    "-": TokenType.MINUS_SIGN,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION_MARK,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}


@dataclass(frozen=True)
class Token:
    """A lexed token with its text and end position (1-based line and column)."""

    type: TokenType
    value: str = ""
    pos: int = 0
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        return self.value if self.value else str(self.type)


class _Lexer:
    def __init__(self, text: str) -> None:
        self._input = text
        self._length = len(text)
        self._start = 0
        self._pos = 0
        self._line = 0
        self._col = 0

    def _peek(self) -> str:
        if self._pos >= self._length:
            return _EMPTY
        return self._input[self._pos]

    def _advance(self) -> None:
        if self._pos + 1 > self._length:
            return
        self._pos += 1
        if self._col < 1:
            self._line += 1
        self._col += 1

    def _emit(self, token_type: TokenType) -> Token:
        token = Token(
            type=token_type,
            value=self._input[self._start:self._pos],
            pos=self._pos,
            line=self._line,
            col=self._col,
        )
        self._start = self._pos
        return token

    def tokens(self) -> Iterator[Token]:
        while True:
            char = self._peek()
            if char == _EMPTY:
                break

            if char in _SPACE_CHARS:
                self._advance()
                while self._peek() in _SPACE_CHARS:
                    self._advance()
                yield self._emit(TokenType.WHITESPACE)
            elif char == "\n":
                self._advance()
                yield self._emit(TokenType.NEW_LINE)
                self._col = 0
            elif char == "=":
                self._advance()
                if self._peek() == ">":
                    self._advance()
                    yield self._emit(TokenType.ROCKET)
                else:
                    yield self._emit(TokenType.EQUAL)
            elif char in _SINGLE_CHAR_TOKENS:
                self._advance()
                yield self._emit(_SINGLE_CHAR_TOKENS[char])
            elif char in _WORD_CHARS:
                self._advance()
                while self._peek() not in _WORD_BREAK:
                    self._advance()
                yield self._emit(TokenType.WORD)
            else:
                self._advance()
                yield self._emit(TokenType.EXTRA)

        yield self._emit(TokenType.EOF)


def lex(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text``, ending with an EOF token."""
    return _Lexer(text).tokens()


def tokenize(text: Union[str, bytes]) -> list[Token]:
    """Return all tokens of ``text`` except the final EOF token."""
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")
    return [tok for tok in lex(text) if tok.type is not TokenType.EOF]


_ESCAPES = {"n": "\n", "t": "\t", '"': '"'}


def unescape_string(text: str) -> str:
    """Resolve the ``\\n``, ``\\t`` and ``\\"`` escapes of a quoted RIDL string."""
    out: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        escaped = next(chars, None)
        if escaped is None:
            raise ValueError("unexpected end after backslash")
        if escaped not in _ESCAPES:
            raise ValueError(f"unexpected character {escaped!r} after backslash")
        out.append(_ESCAPES[escaped])
    return "".join(out)