# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Init-code trees: one node per field, list element or map entry to initialize.

Trees are first built untyped from field paths and merged; a later pass in
:mod:`gapicgen.metacode.init_code` produces a new, typed tree from them.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gapicgen.metacode.lines import InitCodeLine
    from gapicgen.model.api import TypeModel

# ###############
# Public Interface
# ###############


class InitCodeLineType(enum.Enum):
    """The shape of the statement a node turns into."""

    UNKNOWN = "Unknown"
    SIMPLE = "SimpleInitLine"
    STRUCTURE = "StructureInitLine"
    LIST = "ListInitLine"
    MAP = "MapInitLine"


@dataclass(frozen=True)
class InitValueConfig:
    """The value a leaf is initialized with, if one is known.

    Attributes:
        initial_value: A literal as written by the user, or after validation
            (string quotes stripped, booleans lowercased), or a generated
            placeholder. None when the leaf has no value.
    """

    initial_value: str | None = None

    @property
    def has_initial_value(self) -> bool:
        return self.initial_value is not None

    def with_value(self, value: str) -> InitValueConfig:
        return replace(self, initial_value=value)


class InitCodeNode:
    """A node of an init-code tree.

    Children are kept in insertion order, which is the order fields are set
    in the generated code. A node added to a parent is copied first, so a
    node never belongs to two trees.
    """

    def __init__(
        self,
        key: str,
        line_type: InitCodeLineType = InitCodeLineType.UNKNOWN,
        init_value_config: InitValueConfig | None = None,
        children: Iterable[InitCodeNode] = (),
    ) -> None:
        self._key = key
        self._line_type = line_type
        self._init_value_config = init_value_config or InitValueConfig()
        self._children: dict[str, InitCodeNode] = {}
        self._type: TypeModel | None = None
        self._identifier: str | None = None
        self._init_code_line: InitCodeLine | None = None
        for child in children:
            self.add_child(child)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, key: str) -> InitCodeNode:
        """A placeholder leaf whose shape is decided during type resolution."""
        return cls(key)

    @classmethod
    def create_with_value(cls, key: str, init_value_config: InitValueConfig) -> InitCodeNode:
        return cls(key, InitCodeLineType.SIMPLE, init_value_config)

    @classmethod
    def create_with_children(cls, key: str, line_type: InitCodeLineType, *children: InitCodeNode) -> InitCodeNode:
        return cls(key, line_type, children=children)

    @classmethod
    def create_resolved(
        cls,
        key: str,
        line_type: InitCodeLineType,
        type_model: TypeModel,
        identifier: str,
        init_value_config: InitValueConfig,
        children: Mapping[str, InitCodeNode],
        init_code_line: InitCodeLine,
    ) -> InitCodeNode:
        """A typed node. *children* must already be typed and are taken as they are."""
        node = cls(key, line_type, init_value_config)
        node._children = dict(children)
        node._type = type_model
        node._identifier = identifier
        node._init_code_line = init_code_line
        return node

    def copy(self) -> InitCodeNode:
        """Return a deep copy of this node and its subtree."""
        node = InitCodeNode(self._key, self._line_type, self._init_value_config)
        node._children = {key: child.copy() for key, child in self._children.items()}
        node._type = self._type
        node._identifier = self._identifier
        node._init_code_line = self._init_code_line
        return node

    def add_child(self, child: InitCodeNode) -> None:
        """Add *child*, merging it into an existing child with the same key.

        An existing child that already has a shape absorbs the new child's
        children. An existing placeholder (``UNKNOWN``) is replaced, keeping
        its position.
        """
        existing = self._children.get(child.key)
        if existing is not None and existing.line_type is not InitCodeLineType.UNKNOWN:
            for grandchild in child.children.values():
                existing.add_child(grandchild)
        else:
            self._children[child.key] = child.copy()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def key(self) -> str:
        return self._key

    @property
    def line_type(self) -> InitCodeLineType:
        return self._line_type

    @property
    def init_value_config(self) -> InitValueConfig:
        return self._init_value_config

    @property
    def children(self) -> Mapping[str, InitCodeNode]:
        return MappingProxyType(self._children)

    @property
    def type(self) -> TypeModel | None:
        """The resolved type, or None for an untyped node."""
        return self._type

    @property
    def identifier(self) -> str | None:
        return self._identifier

    @property
    def init_code_line(self) -> InitCodeLine | None:
        return self._init_code_line

    @property
    def is_resolved(self) -> bool:
        return self._type is not None

    def list_in_initialization_order(self) -> list[InitCodeNode]:
        """Return the subtree in post-order: every child before its parent."""
        ordered: list[InitCodeNode] = []
        for child in self._children.values():
            ordered.extend(child.list_in_initialization_order())
        ordered.append(self)
        return ordered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InitCodeNode):
            return NotImplemented
        return (
            self._key == other._key
            and self._line_type == other._line_type
            and self._init_value_config == other._init_value_config
            and self._type == other._type
            and self._identifier == other._identifier
            and self._children == other._children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        children = ", ".join(repr(child) for child in self._children.values())
        return f"InitCodeNode({self._key!r}, {self._line_type.value}, [{children}])"
