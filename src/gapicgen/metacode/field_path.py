# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for field paths, the strings naming the request fields a sample sets.

Grammar::

    path     := segment ('.' segment)*
    segment  := IDENT (index | map-key)*
    index    := '[' (INT | IDENT) ']'
    map-key  := '{' (STRING | IDENT | INT) '}'
    assign   := path '=' literal

The literal is everything after the first ``=``, taken verbatim. It is
validated against the field's type only when the tree is resolved.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass

from gapicgen.metacode.scanner import ScanError, Token, TokenType, tokenize
from gapicgen.metacode.tree import InitCodeLineType, InitCodeNode, InitValueConfig

# ###############
# Public Interface
# ###############


class FieldPathError(ValueError):
    """Raised for a field path that does not follow the grammar."""

    def __init__(self, message: str, spec: str) -> None:
        super().__init__(f"Invalid field path '{spec}': {message}")
        self.spec = spec


class SegmentKind(enum.Enum):
    FIELD = "field"
    INDEX = "index"
    MAP_KEY = "map_key"


@dataclass(frozen=True)
class PathSegment:
    """One step of a field path.

    String map keys keep their double quotes so that they are validated like
    any other string literal.
    """

    kind: SegmentKind
    key: str


@dataclass(frozen=True)
class FieldPath:
    """A parsed field path.

    Attributes:
        text: The path without its assignment, stripped of surrounding blanks.
        segments: The steps of the path; the first one is always a field.
        literal: The assigned literal, or None for a bare path.
    """

    text: str
    segments: tuple[PathSegment, ...]
    literal: str | None = None


def parse_path(spec: str) -> FieldPath:
    """Parse *spec* into its segments and optional literal.

    Raises:
        FieldPathError: If *spec* is not a valid field path.
    """
    try:
        tokens = tokenize(spec)
    except ScanError as exc:
        raise FieldPathError(str(exc), spec) from exc
    return _PathParser(spec, tokens).parse()


def parse_field_path(spec: str, init_value_configs: Mapping[str, InitValueConfig] | None = None) -> InitCodeNode:
    """Parse *spec* into an untyped chain of init-code nodes.

    Each node's line type follows from the segment after it: a field makes
    the node a structure, an index a list and a map key a map. The last node
    carries the assigned literal; without one, a value from
    *init_value_configs* keyed by the path text is used, and otherwise the
    node is left as a placeholder.

    Example::

        >>> parse_field_path("shelf.books[0]")
        InitCodeNode('shelf', StructureInitLine, [InitCodeNode('books', ListInitLine, [...])])

    Raises:
        FieldPathError: If *spec* is not a valid field path.
    """
    path = parse_path(spec)
    configs = init_value_configs or {}

    leaf_key = path.segments[-1].key
    if path.literal is not None:
        node = InitCodeNode.create_with_value(leaf_key, InitValueConfig(path.literal))
    elif path.text in configs:
        node = InitCodeNode.create_with_value(leaf_key, configs[path.text])
    else:
        node = InitCodeNode.create(leaf_key)

    for index in range(len(path.segments) - 2, -1, -1):
        line_type = _LINE_TYPES[path.segments[index + 1].kind]
        node = InitCodeNode.create_with_children(path.segments[index].key, line_type, node)
    return node


# ################
# Implementation
# ################

_LINE_TYPES: dict[SegmentKind, InitCodeLineType] = {
    SegmentKind.FIELD: InitCodeLineType.STRUCTURE,
    SegmentKind.INDEX: InitCodeLineType.LIST,
    SegmentKind.MAP_KEY: InitCodeLineType.MAP,
}


class _PathParser:
    """Recursive-descent parser over the scanner's token stream."""

    def __init__(self, spec: str, tokens: list[Token]) -> None:
        self._spec = spec
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> FieldPath:
        segments = [PathSegment(SegmentKind.FIELD, self._expect(TokenType.IDENT).value)]
        while True:
            if self._check(TokenType.DOT):
                self._advance()
                segments.append(PathSegment(SegmentKind.FIELD, self._expect(TokenType.IDENT).value))
            elif self._check(TokenType.LBRACKET):
                self._advance()
                index = self._expect(TokenType.INT, TokenType.IDENT)
                self._expect(TokenType.RBRACKET)
                segments.append(PathSegment(SegmentKind.INDEX, index.value))
            elif self._check(TokenType.LBRACE):
                self._advance()
                key = self._expect(TokenType.STRING, TokenType.IDENT, TokenType.INT)
                self._expect(TokenType.RBRACE)
                value = f'"{key.value}"' if key.type is TokenType.STRING else key.value
                segments.append(PathSegment(SegmentKind.MAP_KEY, value))
            else:
                break

        literal = None
        text = self._spec.strip()
        if self._check(TokenType.EQUALS):
            equals = self._advance()
            text = self._spec[: equals.offset].strip()
            literal = self._spec[equals.offset + 1 :]
        self._expect(TokenType.EOF)
        return FieldPath(text=text, segments=tuple(segments), literal=literal)

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _expect(self, *types: TokenType) -> Token:
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(t.name for t in types)
            got = "end of path" if tok.type is TokenType.EOF else repr(tok.value)
            raise FieldPathError(f"column {tok.column}: expected {expected}, got {got}", self._spec)
        return self._advance()
