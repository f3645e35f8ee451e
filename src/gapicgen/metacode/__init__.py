# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field paths, init-code trees and the request initialization synthesizer."""

from gapicgen.metacode.field_path import (
    FieldPath,
    FieldPathError,
    PathSegment,
    SegmentKind,
    parse_field_path,
    parse_path,
)
from gapicgen.metacode.init_code import (
    ROOT_KEY,
    InitCode,
    InitCodeContext,
    InitCodeError,
    InitCodeOutputType,
    build_init_tree,
    build_untyped_tree,
    generate_init_code,
    resolve_tree,
)
from gapicgen.metacode.lines import (
    FieldSetting,
    InitCodeLine,
    ListInitCodeLine,
    MapInitCodeLine,
    SimpleInitCodeLine,
    StructureInitCodeLine,
)
from gapicgen.metacode.literals import LiteralValueError, validate_literal
from gapicgen.metacode.scanner import ScanError, Token, TokenType, tokenize
from gapicgen.metacode.tree import InitCodeLineType, InitCodeNode, InitValueConfig
from gapicgen.metacode.value_generator import ValueGenerator

__all__ = [
    "ROOT_KEY",
    "FieldPath",
    "FieldPathError",
    "FieldSetting",
    "InitCode",
    "InitCodeContext",
    "InitCodeError",
    "InitCodeLine",
    "InitCodeLineType",
    "InitCodeNode",
    "InitCodeOutputType",
    "InitValueConfig",
    "ListInitCodeLine",
    "LiteralValueError",
    "MapInitCodeLine",
    "PathSegment",
    "ScanError",
    "SegmentKind",
    "SimpleInitCodeLine",
    "StructureInitCodeLine",
    "Token",
    "TokenType",
    "ValueGenerator",
    "build_init_tree",
    "build_untyped_tree",
    "generate_init_code",
    "parse_field_path",
    "parse_path",
    "resolve_tree",
    "tokenize",
]
