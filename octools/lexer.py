"""Tokenizer for the jell language."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from octools.expr import LexicalError

_END = "\0"
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1
_SPECIAL = frozenset("!%&-@+*/=<>?")
_WHITESPACE = frozenset(" \t\n\r")


class TokenKind(enum.Enum):
    NIL = "nil"
    BOOL = "bool"
    SYMBOL = "symbol"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    KEYWORD = "keyword"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LSHARP_BRACE = "#{"
    SINGLE_QUOTE = "'"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None


_SINGLE_CHAR = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
}


def _is_alpha(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def _is_num(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_symbol_start(ch: str) -> bool:
    return _is_alpha(ch) or ch in _SPECIAL


def _is_symbol_char(ch: str) -> bool:
    return _is_alpha(ch) or _is_num(ch) or ch in _SPECIAL


def unescape(text: str) -> str:
    """Replace the backslash escapes jell strings understand."""
    return (
        text.replace("\\n", "\n")
        .replace("\\r", "\r")
        .replace("\\t", "\t")
        .replace("\\\\", "\\")
        .replace("\\'", "'")
    )


class Lexer:
    """Splits source text into tokens, one call to next_token at a time."""

    def __init__(self, text: str) -> None:
        self._input = text
        self._pos = 0
        self._read_pos = 0
        self._ch = _END
        self._read_char()

    def _read_char(self) -> Optional[str]:
        if self._read_pos >= len(self._input):
            self._ch = _END
        else:
            self._ch = self._input[self._read_pos]
        self._pos = self._read_pos
        self._read_pos += 1
        return None if self._ch == _END else self._ch

    def _state(self) -> tuple:
        return self._pos, self._read_pos, self._ch

    def _restore(self, state: tuple) -> None:
        self._pos, self._read_pos, self._ch = state

    def next_token(self) -> Token:
        """Return the next token, or an EOF token at the end of input."""
        while self._ch in _WHITESPACE:
            self._read_char()

        ch = self._ch
        kind = _SINGLE_CHAR.get(ch)
        if kind is not None:
            self._read_char()
            return Token(kind)
        if ch == "#":
            self._read_char()
            if self._ch == "{":
                self._read_char()
                return Token(TokenKind.LSHARP_BRACE)
            raise LexicalError("failed to tokenize left sharp brace")
        if ch == ":":
            self._read_char()
            return Token(TokenKind.KEYWORD, self._read_symbol())
        if ch == '"':
            self._read_char()
            return Token(TokenKind.STRING, self._read_string())
        if ch == "'":
            self._read_char()
            return Token(TokenKind.SINGLE_QUOTE)
        if ch == _END:
            self._read_char()
            return Token(TokenKind.EOF)

        if ch == "-":
            saved = self._state()
            try:
                return self._read_numeral()
            except LexicalError:
                self._restore(saved)
        if _is_symbol_start(ch):
            name = self._read_symbol()
            if name == "true":
                return Token(TokenKind.BOOL, True)
            if name == "false":
                return Token(TokenKind.BOOL, False)
            if name == "nil":
                return Token(TokenKind.NIL)
            return Token(TokenKind.SYMBOL, name)
        if _is_num(ch):
            return self._read_numeral()
        raise LexicalError(ch)

    def tokenize(self) -> list[Token]:
        """Return every remaining token, without the final EOF."""
        tokens = []
        while (token := self.next_token()).kind is not TokenKind.EOF:
            tokens.append(token)
        return tokens

    def _read_symbol(self) -> str:
        if not _is_symbol_start(self._ch):
            raise LexicalError("not a symbol")
        start = self._pos
        while _is_symbol_char(self._ch):
            self._read_char()
        return self._input[start : self._pos]

    def _read_numeral(self) -> Token:
        start = self._pos
        has_decimal = False
        while _is_num(self._ch) or self._ch in ".-":
            if self._ch == ".":
                has_decimal = True
            self._read_char()
        numeral = self._input[start : self._pos]
        if has_decimal:
            try:
                return Token(TokenKind.FLOAT, float(numeral))
            except ValueError:
                raise LexicalError("failed to parse float") from None
        try:
            value = int(numeral)
        except ValueError:
            raise LexicalError("failed to parse int") from None
        if not _INT_MIN <= value <= _INT_MAX:
            raise LexicalError("failed to parse int")
        return Token(TokenKind.INT, value)

    def _read_string(self) -> str:
        start = self._pos
        while self._ch != '"':
            if self._ch == _END:
                raise LexicalError("unclosed string literal")
            self._read_char()
        self._read_char()
        return unescape(self._input[start : self._pos - 1])


def tokenize(text: str) -> list[Token]:
    """Split text into tokens, without the final EOF."""
    return Lexer(text).tokenize()