"""
Tokenizer for the Ember language.

The Lexer hands out one token per ``next_token()`` call; it keeps nothing
but its cursor, so the parser pulls tokens on demand.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum, auto

from ember.core.errors import MalformedNumber, TokenPayloadError, UnknownSymbol, context_at

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the Ember language."""

    # Structure
    BEGIN = auto()
    END = auto()
    SEMICOLON = auto()
    ASSIGN = auto()

    # Operators
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()

    # Payload-bearing
    NUMBER = auto()
    IDENTIFIER = auto()

    # End of input
    EOF = auto()


_SINGLE_CHAR: dict[str, TokenKind] = {
    "{": TokenKind.BEGIN,
    "}": TokenKind.END,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.ASSIGN,
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "(": TokenKind.LPAR,
    ")": TokenKind.RPAR,
}

_DIGITS = frozenset("0123456789")
_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_IDENT_CHARS = _IDENT_START | _DIGITS


class Token:
    """
    A single lexical unit.

    ``value`` is a float for NUMBER tokens, a str for IDENTIFIER tokens and
    None otherwise. ``pos`` is the offset of the token in its source and is
    ignored by equality.
    """

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: float | str | None = None, pos: int = 0) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"

    def __copy__(self) -> Token:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, object]) -> Token:
        return self.copy()

    @classmethod
    def basic(cls, kind: TokenKind, pos: int = 0) -> Token:
        if kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
            raise TokenPayloadError(f"{kind} tokens carry a payload")
        return cls(kind, None, pos)

    @classmethod
    def number(cls, value: float, pos: int = 0) -> Token:
        return cls(TokenKind.NUMBER, float(value), pos)

    @classmethod
    def identifier(cls, name: str, pos: int = 0) -> Token:
        return cls(TokenKind.IDENTIFIER, name, pos)

    def get_number(self) -> float:
        if self.kind != TokenKind.NUMBER:
            raise TokenPayloadError(f"{self.kind} token has no number payload")
        assert isinstance(self.value, float)
        return self.value

    def get_identifier(self) -> str:
        if self.kind != TokenKind.IDENTIFIER:
            raise TokenPayloadError(f"{self.kind} token has no identifier payload")
        assert isinstance(self.value, str)
        return self.value

    def copy(self) -> Token:
        return Token(self.kind, self.value, self.pos)

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {format_number(self.get_number())})"
        if self.kind == TokenKind.IDENTIFIER:
            return f"Token({self.kind}, {self.value})"
        return f"Token({self.kind}, null)"


def format_number(value: float) -> str:
    """Render a number without a trailing '.0' for integral values."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class Lexer:
    """Produces tokens from a source string, one per ``next_token()`` call."""

    def __init__(self, source: str, file: str | None = None) -> None:
        self.source = source
        self.file = file
        self.pos = 0

    def _skip_whitespace(self) -> None:
        n = len(self.source)
        while self.pos < n and self.source[self.pos].isspace():
            self.pos += 1

    def next_token(self) -> Token:
        """Skip whitespace and return the next token, EOF once exhausted."""
        self._skip_whitespace()
        if self.pos >= len(self.source):
            return Token(TokenKind.EOF, None, self.pos)

        start = self.pos
        c = self.source[start]

        if c in _SINGLE_CHAR:
            self.pos += 1
            return Token(_SINGLE_CHAR[c], None, start)

        if c in _IDENT_START:
            return Token(TokenKind.IDENTIFIER, self._read_identifier(), start)

        if c in _DIGITS or c == ".":
            return Token(TokenKind.NUMBER, self._read_number(), start)

        raise UnknownSymbol(c, context_at(self.source, start, self.file))

    def _read_identifier(self) -> str:
        start = self.pos
        n = len(self.source)
        while self.pos < n and self.source[self.pos] in _IDENT_CHARS:
            self.pos += 1
        return self.source[start : self.pos]

    def _read_number(self) -> float:
        start = self.pos
        n = len(self.source)
        while self.pos < n and (self.source[self.pos] in _DIGITS or self.source[self.pos] == "."):
            self.pos += 1
        text = self.source[start : self.pos]
        if text.count(".") > 1 or text == ".":
            raise MalformedNumber(text, context_at(self.source, start, self.file))
        return float(text)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Tokenize a source string into a list of tokens ending with EOF."""
    tokens = list(Lexer(source))
    logger.debug("Tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens
