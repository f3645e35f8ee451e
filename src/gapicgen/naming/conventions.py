# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-language naming tables.

Each target language is described by one :class:`LanguageConventions` value.
The tables only hold data: case styles, accessor patterns, literal spellings
and primitive type names. All logic lives in
:class:`gapicgen.naming.namer.SurfaceNamer`.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field

from gapicgen.model.types import FieldKind

# ###############
# Public Interface
# ###############


class CaseStyle(enum.Enum):
    LOWER_CAMEL = "lowerCamel"
    UPPER_CAMEL = "UpperCamel"
    LOWER_UNDERSCORE = "lower_underscore"
    UPPER_UNDERSCORE = "UPPER_UNDERSCORE"
    LOWER_HYPHEN = "lower-hyphen"


class InterpolationStyle(enum.Enum):
    """How print arguments are combined with a format string.

    ``POSITIONAL`` keeps arguments apart and uses the same placeholder for
    each; ``INDEXED`` numbers the placeholders; ``INLINE`` splices each
    argument expression into the string.
    """

    POSITIONAL = "positional"
    INDEXED = "indexed"
    INLINE = "inline"


@dataclass(frozen=True)
class LanguageConventions:
    """The naming table of one target language.

    Accessor and name patterns are ``str.format`` templates receiving
    ``name`` (in the language's case for the position) and, where relevant,
    ``index``, ``key``, ``type`` or ``arg``.
    """

    language: str
    file_extension: str
    local_var_case: CaseStyle
    method_case: CaseStyle
    field_case: CaseStyle
    file_name_case: CaseStyle
    constant_case: CaseStyle = CaseStyle.UPPER_UNDERSCORE
    getter_pattern: str = "get{name}"
    setter_pattern: str = "set{name}"
    count_getter_pattern: str = "get{name}Count"
    field_accessor_pattern: str = ".{name}"
    index_accessor_pattern: str = "[{index}]"
    map_key_accessor_pattern: str = "[{key}]"
    string_quote: str = '"'
    true_literal: str = "true"
    false_literal: str = "false"
    null_literal: str = "null"
    long_suffix: str = ""
    float_suffix: str = ""
    empty_list_literal: str = "[]"
    empty_map_literal: str = "{}"
    repeated_type_pattern: str = "{type}[]"
    map_type_pattern: str = "Map<{key}, {value}>"
    primitive_type_names: Mapping[FieldKind, str] = field(default_factory=dict)
    interpolation: InterpolationStyle = InterpolationStyle.POSITIONAL
    format_placeholder: str = "%s"
    reserved_words: frozenset[str] = frozenset()
    sample_reserved_names: frozenset[str] = frozenset({"client", "request", "response"})
    client_suffix: str = "Client"


def default_conventions() -> dict[str, LanguageConventions]:
    """Return the naming tables of the built-in target languages, keyed by language."""
    return {conventions.language: conventions for conventions in _BUILT_IN}


# ################
# Implementation
# ################


def _primitive_names(
    *,
    double: str,
    float_: str,
    int64: str,
    uint64: str,
    int32: str,
    uint32: str,
    bool_: str,
    string: str,
    bytes_: str,
) -> dict[FieldKind, str]:
    return {
        FieldKind.TYPE_DOUBLE: double,
        FieldKind.TYPE_FLOAT: float_,
        FieldKind.TYPE_INT64: int64,
        FieldKind.TYPE_SINT64: int64,
        FieldKind.TYPE_SFIXED64: int64,
        FieldKind.TYPE_UINT64: uint64,
        FieldKind.TYPE_FIXED64: uint64,
        FieldKind.TYPE_INT32: int32,
        FieldKind.TYPE_SINT32: int32,
        FieldKind.TYPE_SFIXED32: int32,
        FieldKind.TYPE_UINT32: uint32,
        FieldKind.TYPE_FIXED32: uint32,
        FieldKind.TYPE_BOOL: bool_,
        FieldKind.TYPE_STRING: string,
        FieldKind.TYPE_BYTES: bytes_,
    }


_JAVA = LanguageConventions(
    language="java",
    file_extension=".java",
    local_var_case=CaseStyle.LOWER_CAMEL,
    method_case=CaseStyle.LOWER_CAMEL,
    field_case=CaseStyle.UPPER_CAMEL,
    file_name_case=CaseStyle.UPPER_CAMEL,
    field_accessor_pattern=".get{name}()",
    index_accessor_pattern=".get({index})",
    map_key_accessor_pattern=".get({key})",
    long_suffix="L",
    float_suffix="F",
    empty_list_literal="new ArrayList<>()",
    empty_map_literal="new HashMap<>()",
    repeated_type_pattern="List<{type}>",
    primitive_type_names=_primitive_names(
        double="double",
        float_="float",
        int64="long",
        uint64="long",
        int32="int",
        uint32="int",
        bool_="boolean",
        string="String",
        bytes_="ByteString",
    ),
    reserved_words=frozenset(
        {"abstract", "boolean", "class", "default", "double", "final", "import", "int", "new", "package", "private"}
        | {"public", "return", "static", "super", "switch", "this", "throw", "try", "void", "while"}
    ),
)

_PYTHON = LanguageConventions(
    language="python",
    file_extension=".py",
    local_var_case=CaseStyle.LOWER_UNDERSCORE,
    method_case=CaseStyle.LOWER_UNDERSCORE,
    field_case=CaseStyle.LOWER_UNDERSCORE,
    file_name_case=CaseStyle.LOWER_UNDERSCORE,
    getter_pattern="{name}",
    setter_pattern="{name}",
    count_getter_pattern="{name}",
    string_quote="'",
    true_literal="True",
    false_literal="False",
    null_literal="None",
    repeated_type_pattern="list[{type}]",
    map_type_pattern="dict[{key}, {value}]",
    primitive_type_names=_primitive_names(
        double="float",
        float_="float",
        int64="int",
        uint64="int",
        int32="int",
        uint32="int",
        bool_="bool",
        string="str",
        bytes_="bytes",
    ),
    interpolation=InterpolationStyle.POSITIONAL,
    format_placeholder="{}",
    reserved_words=frozenset(
        {"and", "as", "class", "def", "del", "from", "global", "import", "in", "is", "lambda", "not", "or"}
        | {"pass", "raise", "return", "try", "while", "with", "yield", "type", "id", "filter", "list", "dict"}
    ),
)

_GO = LanguageConventions(
    language="go",
    file_extension=".go",
    local_var_case=CaseStyle.LOWER_CAMEL,
    method_case=CaseStyle.UPPER_CAMEL,
    field_case=CaseStyle.UPPER_CAMEL,
    file_name_case=CaseStyle.LOWER_UNDERSCORE,
    constant_case=CaseStyle.LOWER_CAMEL,
    getter_pattern="Get{name}",
    setter_pattern="{name}",
    count_getter_pattern="Get{name}",
    field_accessor_pattern=".Get{name}()",
    null_literal="nil",
    empty_list_literal="nil",
    empty_map_literal="nil",
    repeated_type_pattern="[]{type}",
    map_type_pattern="map[{key}]{value}",
    primitive_type_names=_primitive_names(
        double="float64",
        float_="float32",
        int64="int64",
        uint64="uint64",
        int32="int32",
        uint32="uint32",
        bool_="bool",
        string="string",
        bytes_="[]byte",
    ),
    format_placeholder="%v",
    reserved_words=frozenset({"break", "case", "chan", "default", "func", "go", "map", "range", "select", "type"}),
    client_suffix="Client",
)

_CSHARP = LanguageConventions(
    language="csharp",
    file_extension=".cs",
    local_var_case=CaseStyle.LOWER_CAMEL,
    method_case=CaseStyle.UPPER_CAMEL,
    field_case=CaseStyle.UPPER_CAMEL,
    file_name_case=CaseStyle.UPPER_CAMEL,
    constant_case=CaseStyle.UPPER_CAMEL,
    getter_pattern="{name}",
    setter_pattern="{name}",
    count_getter_pattern="{name}.Count",
    field_accessor_pattern=".{name}",
    float_suffix="F",
    long_suffix="L",
    empty_list_literal="{ }",
    empty_map_literal="{ }",
    repeated_type_pattern="IEnumerable<{type}>",
    map_type_pattern="IDictionary<{key}, {value}>",
    primitive_type_names=_primitive_names(
        double="double",
        float_="float",
        int64="long",
        uint64="ulong",
        int32="int",
        uint32="uint",
        bool_="bool",
        string="string",
        bytes_="ByteString",
    ),
    interpolation=InterpolationStyle.INDEXED,
    format_placeholder="{{{index}}}",
    reserved_words=frozenset({"base", "class", "event", "fixed", "lock", "object", "operator", "params", "string"}),
)

_RUBY = LanguageConventions(
    language="ruby",
    file_extension=".rb",
    local_var_case=CaseStyle.LOWER_UNDERSCORE,
    method_case=CaseStyle.LOWER_UNDERSCORE,
    field_case=CaseStyle.LOWER_UNDERSCORE,
    file_name_case=CaseStyle.LOWER_UNDERSCORE,
    getter_pattern="{name}",
    setter_pattern="{name}=",
    count_getter_pattern="{name}.size",
    null_literal="nil",
    string_quote="'",
    repeated_type_pattern="Array<{type}>",
    map_type_pattern="Hash{{{key} => {value}}}",
    primitive_type_names=_primitive_names(
        double="Float",
        float_="Float",
        int64="Integer",
        uint64="Integer",
        int32="Integer",
        uint32="Integer",
        bool_="true, false",
        string="String",
        bytes_="String",
    ),
    interpolation=InterpolationStyle.INLINE,
    format_placeholder="#{{{arg}}}",
    reserved_words=frozenset({"begin", "class", "def", "end", "ensure", "module", "next", "redo", "retry", "then"}),
)

_PHP = LanguageConventions(
    language="php",
    file_extension=".php",
    local_var_case=CaseStyle.LOWER_CAMEL,
    method_case=CaseStyle.LOWER_CAMEL,
    field_case=CaseStyle.UPPER_CAMEL,
    file_name_case=CaseStyle.UPPER_CAMEL,
    field_accessor_pattern="->get{name}()",
    string_quote="'",
    repeated_type_pattern="{type}[]",
    map_type_pattern="array",
    primitive_type_names=_primitive_names(
        double="float",
        float_="float",
        int64="int",
        uint64="int",
        int32="int",
        uint32="int",
        bool_="bool",
        string="string",
        bytes_="string",
    ),
    reserved_words=frozenset({"array", "clone", "echo", "empty", "function", "global", "list", "new", "print"}),
)

_NODEJS = LanguageConventions(
    language="nodejs",
    file_extension=".js",
    local_var_case=CaseStyle.LOWER_CAMEL,
    method_case=CaseStyle.LOWER_CAMEL,
    field_case=CaseStyle.LOWER_CAMEL,
    file_name_case=CaseStyle.LOWER_UNDERSCORE,
    getter_pattern="{name}",
    setter_pattern="{name}",
    count_getter_pattern="{name}.length",
    string_quote="'",
    repeated_type_pattern="{type}[]",
    map_type_pattern="Object.<{key}, {value}>",
    primitive_type_names=_primitive_names(
        double="number",
        float_="number",
        int64="number",
        uint64="number",
        int32="number",
        uint32="number",
        bool_="boolean",
        string="string",
        bytes_="string",
    ),
    interpolation=InterpolationStyle.INLINE,
    format_placeholder="${{{arg}}}",
    reserved_words=frozenset({"arguments", "await", "class", "const", "delete", "function", "let", "new", "var"}),
)

_BUILT_IN: tuple[LanguageConventions, ...] = (_JAVA, _PYTHON, _GO, _CSHARP, _RUBY, _PHP, _NODEJS)
