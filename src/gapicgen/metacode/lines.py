# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Initialization statements produced from a typed init-code tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from gapicgen.metacode.tree import InitCodeLineType, InitValueConfig
from gapicgen.model.api import TypeModel

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class SimpleInitCodeLine:
    """``identifier = value`` for a scalar, enum or an empty collection or message."""

    line_type: ClassVar[InitCodeLineType] = InitCodeLineType.SIMPLE

    type: TypeModel
    identifier: str
    init_value_config: InitValueConfig


@dataclass(frozen=True)
class FieldSetting:
    """One field of a structure, set from a previously initialized variable.

    Attributes:
        type: The field's type.
        field_name: The field's simple name in the API.
        identifier: The variable holding the field's value.
        init_value_config: The value of that variable, when it is a literal.
    """

    type: TypeModel
    field_name: str
    identifier: str
    init_value_config: InitValueConfig


@dataclass(frozen=True)
class StructureInitCodeLine:
    line_type: ClassVar[InitCodeLineType] = InitCodeLineType.STRUCTURE

    type: TypeModel
    identifier: str
    field_settings: tuple[FieldSetting, ...]


@dataclass(frozen=True)
class ListInitCodeLine:
    """A list built from element variables, in index order."""

    line_type: ClassVar[InitCodeLineType] = InitCodeLineType.LIST

    type: TypeModel
    identifier: str
    element_identifiers: tuple[str, ...]


@dataclass(frozen=True)
class MapInitCodeLine:
    """A map built from ``(key literal, value variable)`` pairs."""

    line_type: ClassVar[InitCodeLineType] = InitCodeLineType.MAP

    key_type: TypeModel
    value_type: TypeModel
    type: TypeModel
    identifier: str
    element_identifiers: tuple[tuple[str, str], ...]


InitCodeLine = SimpleInitCodeLine | StructureInitCodeLine | ListInitCodeLine | MapInitCodeLine
