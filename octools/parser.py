"""Turns jell tokens into expressions."""

from __future__ import annotations

from collections import deque
from typing import Iterable

from octools.expr import (
    Bool,
    Expr,
    Float,
    Int,
    JellSyntaxError,
    Keyword,
    List,
    Set,
    Str,
    Symbol,
    Vector,
)
from octools.lexer import Token, TokenKind, tokenize

_ATOMS = {
    TokenKind.SYMBOL: Symbol,
    TokenKind.BOOL: Bool,
    TokenKind.INT: Int,
    TokenKind.FLOAT: Float,
    TokenKind.STRING: Str,
    TokenKind.KEYWORD: Keyword,
}

_COLLECTIONS = {
    TokenKind.LPAREN: (TokenKind.RPAREN, List),
    TokenKind.LBRACKET: (TokenKind.RBRACKET, Vector),
    TokenKind.LSHARP_BRACE: (TokenKind.RBRACE, Set),
}


class Parser:
    """Consumes a sequence of tokens and builds expressions from them."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = deque(tokens)

    def parse_program(self) -> list[Expr]:
        """Parse every remaining expression."""
        exprs = []
        while self._tokens:
            exprs.append(self.parse())
        return exprs

    def parse(self) -> Expr:
        """Parse a single expression from the front of the token stream."""
        if not self._tokens:
            raise JellSyntaxError("unexpected end of input")
        token = self._tokens.popleft()

        atom = _ATOMS.get(token.kind)
        if atom is not None:
            return atom(token.value)

        collection = _COLLECTIONS.get(token.kind)
        if collection is not None:
            closing, build = collection
            return build(self._parse_items(closing))

        if token.kind is TokenKind.SINGLE_QUOTE:
            return List((Symbol("quote"), self.parse()))

        raise JellSyntaxError(f"unsupported token: {token.kind.value}")

    def _parse_items(self, closing: TokenKind) -> list[Expr]:
        items = []
        while self._tokens and self._tokens[0].kind is not closing:
            items.append(self.parse())
        if not self._tokens:
            raise JellSyntaxError(f"expected {closing.value}")
        self._tokens.popleft()
        return items


def parse(text: str) -> Expr:
    """Tokenize text and parse its first expression."""
    return Parser(tokenize(text)).parse()


def parse_program(text: str) -> list[Expr]:
    """Tokenize text and parse all of its expressions."""
    return Parser(tokenize(text)).parse_program()