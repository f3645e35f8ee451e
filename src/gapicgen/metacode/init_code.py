# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Synthesis of request initialization code for samples and smoke tests.

The synthesizer turns a set of field paths into a dependency-ordered list of
initialization statements:

1. Every field path is parsed into an untyped node chain and the chains are
   merged into one tree under a ``root`` structure node.
2. If a field set is given, top-level subtrees outside it are dropped and
   placeholders are added for the fields of the set that no path mentions.
3. A single recursive pass, starting from the request type, builds a typed
   copy of the tree. Map keys and list indices are validated as literals,
   line types are checked against the resolved types, identifiers are
   allocated and leaf literals are validated or generated.
4. The typed tree is listed in post-order, so every variable is initialized
   before the statement that uses it.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from gapicgen.metacode.field_path import parse_field_path
from gapicgen.metacode.lines import (
    FieldSetting,
    InitCodeLine,
    ListInitCodeLine,
    MapInitCodeLine,
    SimpleInitCodeLine,
    StructureInitCodeLine,
)
from gapicgen.metacode.literals import validate_literal
from gapicgen.metacode.tree import InitCodeLineType, InitCodeNode, InitValueConfig
from gapicgen.metacode.value_generator import ValueGenerator
from gapicgen.model.api import FieldModel, TypeModel
from gapicgen.model.types import FieldKind
from gapicgen.util.name import lower_underscore
from gapicgen.util.symbol_table import SymbolTable

# ###############
# Public Interface
# ###############

ROOT_KEY = "root"


class InitCodeError(ValueError):
    """Raised when an init-code tree does not fit the types it initializes."""


class InitCodeOutputType(enum.Enum):
    """How the initialized request is handed to the method call."""

    SINGLE_OBJECT = "single_object"
    FIELD_LIST = "field_list"


@dataclass(frozen=True)
class InitCodeContext:
    """Inputs of one synthesis call.

    Attributes:
        root_type: The request message type.
        init_fields: Field paths, optionally with ``=literal`` assignments.
        init_field_set: When given, only these top-level fields are
            initialized; fields no path mentions get placeholders.
        init_value_configs: Values for bare paths, keyed by path text.
        suggested_name: Identifier suggested for the request variable.
        output_type: Whether the request is passed as one object or as its
            top-level fields.
        value_generator: Fills primitive leaves that have no literal. Leaves
            stay empty when omitted.
        symbol_table: Identifier table; a fresh one is used when omitted.
    """

    root_type: TypeModel
    init_fields: tuple[str, ...] = ()
    init_field_set: tuple[FieldModel, ...] | None = None
    init_value_configs: Mapping[str, InitValueConfig] = field(default_factory=dict)
    suggested_name: str = "request"
    output_type: InitCodeOutputType = InitCodeOutputType.SINGLE_OBJECT
    value_generator: ValueGenerator | None = None
    symbol_table: SymbolTable | None = None


@dataclass(frozen=True)
class InitCode:
    """The result of a synthesis call.

    Attributes:
        top_level_line: The statement initializing the request object.
        lines: Statements in initialization order. With
            :attr:`InitCodeOutputType.FIELD_LIST` the request object itself
            is not included.
        arg_fields: For field-list output, the top-level fields passed to
            the method, in field-set order when a field set was given.
    """

    top_level_line: InitCodeLine
    lines: tuple[InitCodeLine, ...]
    arg_fields: tuple[FieldSetting, ...] = ()


def build_untyped_tree(context: InitCodeContext) -> InitCodeNode:
    """Parse and merge the context's field paths under an untyped root."""
    subtrees = [parse_field_path(spec, context.init_value_configs) for spec in context.init_fields]
    root = InitCodeNode.create_with_children(ROOT_KEY, InitCodeLineType.STRUCTURE, *subtrees)
    if context.init_field_set is None:
        return root

    names = [f.simple_name for f in context.init_field_set]
    kept = [child for key, child in root.children.items() if key in names]
    for name in names:
        if name not in root.children:
            config = context.init_value_configs.get(name)
            kept.append(
                InitCodeNode.create_with_value(name, config) if config is not None else InitCodeNode.create(name)
            )
    return InitCodeNode.create_with_children(ROOT_KEY, InitCodeLineType.STRUCTURE, *kept)


def resolve_tree(
    root: InitCodeNode,
    root_type: TypeModel,
    suggested_name: str = "request",
    *,
    symbol_table: SymbolTable | None = None,
    value_generator: ValueGenerator | None = None,
) -> InitCodeNode:
    """Return a typed copy of the untyped tree *root*.

    Raises:
        InitCodeError: If the tree does not fit *root_type*.
        LiteralValueError: If a literal, map key or list index does not fit
            its type.
    """
    resolver = _TreeResolver(symbol_table or SymbolTable(), value_generator)
    return resolver.resolve(root, root_type, suggested_name)


def build_init_tree(context: InitCodeContext) -> InitCodeNode:
    """Build, filter and resolve the init-code tree for *context*."""
    return resolve_tree(
        build_untyped_tree(context),
        context.root_type,
        context.suggested_name,
        symbol_table=context.symbol_table,
        value_generator=context.value_generator,
    )


def generate_init_code(context: InitCodeContext) -> InitCode:
    """Synthesize the initialization statements for *context*."""
    root = build_init_tree(context)
    ordered = root.list_in_initialization_order()
    top_level_line = _line(root)

    if context.output_type is InitCodeOutputType.SINGLE_OBJECT:
        return InitCode(top_level_line=top_level_line, lines=tuple(_line(node) for node in ordered))

    assert isinstance(top_level_line, StructureInitCodeLine)
    settings = {setting.field_name: setting for setting in top_level_line.field_settings}
    if context.init_field_set is not None:
        arg_fields = tuple(settings[f.simple_name] for f in context.init_field_set if f.simple_name in settings)
    else:
        arg_fields = top_level_line.field_settings
    return InitCode(
        top_level_line=top_level_line,
        lines=tuple(_line(node) for node in ordered[:-1]),
        arg_fields=arg_fields,
    )


# ################
# Implementation
# ################


def _line(node: InitCodeNode) -> InitCodeLine:
    line = node.init_code_line
    if line is None:
        raise InitCodeError(f"node '{node.key}' has not been resolved")
    return line


class _TreeResolver:
    """Builds typed nodes bottom-up from an untyped tree."""

    def __init__(self, symbol_table: SymbolTable, value_generator: ValueGenerator | None) -> None:
        self._symbol_table = symbol_table
        self._value_generator = value_generator

    def resolve(self, node: InitCodeNode, type_model: TypeModel, suggested_name: str) -> InitCodeNode:
        children: dict[str, InitCodeNode] = {}
        for child in node.children.values():
            key = self._key_value(type_model, child.key)
            child_name = self._child_suggested_name(node, suggested_name, key)
            typed_child = self._retyped(self.resolve(child, self._child_type(type_model, key), child_name), key)
            if key in children:
                raise InitCodeError(f"duplicate key '{key}' under '{node.key}'")
            children[key] = typed_child

        line_type = self._validate_type(node, type_model, children)
        identifier = self._symbol_table.get_new_symbol(lower_underscore(suggested_name))

        config = node.init_value_config
        if not children:
            if config.initial_value is not None:
                config = config.with_value(validate_literal(type_model.kind, config.initial_value))
            elif self._value_generator is not None and type_model.is_primitive and not type_model.is_repeated:
                config = config.with_value(self._value_generator.get_and_store_value(type_model, identifier))

        line = self._init_code_line(line_type, type_model, identifier, config, children)
        return InitCodeNode.create_resolved(node.key, line_type, type_model, identifier, config, children, line)

    # ------------------------------------------------------------------
    # Child keys, types and names
    # ------------------------------------------------------------------

    @staticmethod
    def _key_value(parent_type: TypeModel, key: str) -> str:
        if parent_type.is_map:
            return validate_literal(parent_type.map_key_type().kind, key)
        if parent_type.is_repeated:
            return validate_literal(FieldKind.TYPE_UINT64, key)
        return key

    @staticmethod
    def _child_type(parent_type: TypeModel, key: str) -> TypeModel:
        if parent_type.is_map:
            return parent_type.map_value_type()
        if parent_type.is_repeated:
            return parent_type.make_optional()
        if parent_type.is_message:
            child_field = parent_type.get_field(key)
            if child_field is None:
                raise InitCodeError(f"Message type {parent_type.full_name} does not have field {key}")
            return child_field.type
        raise InitCodeError(f"Primitive type {parent_type.full_name} cannot have children. Child key: {key}")

    @staticmethod
    def _child_suggested_name(node: InitCodeNode, suggested_name: str, key: str) -> str:
        if node.line_type is InitCodeLineType.STRUCTURE:
            return key
        if node.line_type is InitCodeLineType.LIST:
            return f"{suggested_name}_element"
        if node.line_type is InitCodeLineType.MAP:
            return f"{suggested_name}_item"
        raise InitCodeError(f"node '{node.key}' with {node.line_type.value} type cannot have children")

    @staticmethod
    def _retyped(child: InitCodeNode, key: str) -> InitCodeNode:
        if child.key == key:
            return child
        assert child.type is not None and child.identifier is not None and child.init_code_line is not None
        return InitCodeNode.create_resolved(
            key,
            child.line_type,
            child.type,
            child.identifier,
            child.init_value_config,
            child.children,
            child.init_code_line,
        )

    # ------------------------------------------------------------------
    # Line types and statements
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_type(
        node: InitCodeNode, type_model: TypeModel, children: Mapping[str, InitCodeNode]
    ) -> InitCodeLineType:
        line_type = node.line_type
        if line_type is InitCodeLineType.UNKNOWN or line_type is InitCodeLineType.SIMPLE:
            if children:
                raise InitCodeError(f"node '{node.key}' with {line_type.value} type cannot have children")
            return InitCodeLineType.SIMPLE
        if line_type is InitCodeLineType.STRUCTURE:
            if not type_model.is_message or type_model.is_repeated:
                raise InitCodeError(f"typeRef {type_model!r} not compatible with {line_type.value}")
        elif line_type is InitCodeLineType.LIST:
            if not type_model.is_repeated or type_model.is_map:
                raise InitCodeError(f"typeRef {type_model!r} not compatible with {line_type.value}")
            _check_ordered_indices(type_model, list(children))
        elif line_type is InitCodeLineType.MAP:
            if not type_model.is_map:
                raise InitCodeError(f"typeRef {type_model!r} not compatible with {line_type.value}")
        return line_type

    @staticmethod
    def _init_code_line(
        line_type: InitCodeLineType,
        type_model: TypeModel,
        identifier: str,
        config: InitValueConfig,
        children: Mapping[str, InitCodeNode],
    ) -> InitCodeLine:
        if line_type is InitCodeLineType.STRUCTURE:
            settings = tuple(
                FieldSetting(
                    type=_resolved_type(child),
                    field_name=key,
                    identifier=_resolved_identifier(child),
                    init_value_config=child.init_value_config,
                )
                for key, child in children.items()
            )
            return StructureInitCodeLine(type=type_model, identifier=identifier, field_settings=settings)
        if line_type is InitCodeLineType.LIST:
            elements = tuple(_resolved_identifier(children[str(index)]) for index in range(len(children)))
            return ListInitCodeLine(type=type_model, identifier=identifier, element_identifiers=elements)
        if line_type is InitCodeLineType.MAP:
            entries = tuple((key, _resolved_identifier(child)) for key, child in children.items())
            return MapInitCodeLine(
                key_type=type_model.map_key_type(),
                value_type=type_model.map_value_type(),
                type=type_model,
                identifier=identifier,
                element_identifiers=entries,
            )
        return SimpleInitCodeLine(type=type_model, identifier=identifier, init_value_config=config)


def _check_ordered_indices(type_model: TypeModel, keys: Sequence[str]) -> None:
    expected = {str(index) for index in range(len(keys))}
    if set(keys) != expected:
        raise InitCodeError(f"typeRef {type_model!r} must have ordered indices, got [{', '.join(keys)}]")


def _resolved_type(node: InitCodeNode) -> TypeModel:
    assert node.type is not None
    return node.type


def _resolved_identifier(node: InitCodeNode) -> str:
    assert node.identifier is not None
    return node.identifier
