# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for field paths and output-spec accessors.

Both mini-languages share one token set::

    mylist[0].myfield{"key"}=42
    $resp.books[0].author

An ``=`` ends the scannable part of the input: everything after it is a raw
literal that the caller reads from the source using the ``=`` token's offset.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the scanner."""

    # Symbols
    DOT = "."
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    EQUALS = "="

    # Literals
    STRING = "STRING"
    INT = "INT"

    # Identifiers
    IDENT = "IDENT"

    # End of input
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token (or the unquoted content for STRING tokens).
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
        offset: 0-based index of the first character in the source.
    """

    type: TokenType
    value: str
    line: int
    column: int
    offset: int


class ScanError(ValueError):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize a field path or accessor expression.

    Whitespace is skipped. Scanning stops after the first ``=`` token.

    Args:
        source: The expression text.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        ScanError: On unexpected characters or unterminated string literals.
    """
    return _Scanner(source).tokenize()


# ################
# Implementation
# ################

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    ".": TokenType.DOT,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "=": TokenType.EQUALS,
}


class _Scanner:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace()
            if self._pos >= len(self._source):
                break
            self._scan_token()
            if self._tokens[-1].type is TokenType.EQUALS:
                break
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column, self._pos))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._pos < len(self._source) and self._current() in " \t\r\n":
            self._advance()

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column
        offset = self._pos

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col, offset))
        elif ch == '"':
            self._scan_string(line, col, offset)
        elif ch.isdigit() or (ch in "+-" and self._peek().isdigit()):
            self._scan_int(line, col, offset)
        elif ch.isalpha() or ch in "_$":
            self._scan_identifier(line, col, offset)
        else:
            raise ScanError(f"Unexpected character: {ch!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int, offset: int) -> None:
        """Scan a double-quoted string literal. Escape sequences are not supported."""
        self._advance()  # opening "
        start = self._pos
        while self._pos < len(self._source):
            if self._current() == '"':
                value = self._source[start : self._pos]
                self._advance()  # closing "
                self._tokens.append(Token(TokenType.STRING, value, line, col, offset))
                return
            if self._current() == "\n":
                break
            self._advance()
        raise ScanError("Unterminated string literal", line, col)

    def _scan_int(self, line: int, col: int, offset: int) -> None:
        start = self._pos
        if self._current() in "+-":
            self._advance()
        while self._pos < len(self._source) and self._current().isdigit():
            self._advance()
        self._tokens.append(Token(TokenType.INT, self._source[start : self._pos], line, col, offset))

    def _scan_identifier(self, line: int, col: int, offset: int) -> None:
        start = self._pos
        self._advance()
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        self._tokens.append(Token(TokenType.IDENT, self._source[start : self._pos], line, col, offset))
