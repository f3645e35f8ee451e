# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-independent type vocabulary shared by the proto and discovery models."""

from __future__ import annotations

from enum import Enum

# ###############
# Public Interface
# ###############


class ApiSource(Enum):
    """The kind of API description a model element was read from."""

    PROTO = "proto"
    DISCOVERY = "discovery"


class FieldKind(Enum):
    """Scalar and composite field kinds, named after their protobuf counterparts."""

    TYPE_DOUBLE = "double"
    TYPE_FLOAT = "float"
    TYPE_INT64 = "int64"
    TYPE_UINT64 = "uint64"
    TYPE_INT32 = "int32"
    TYPE_FIXED64 = "fixed64"
    TYPE_FIXED32 = "fixed32"
    TYPE_BOOL = "bool"
    TYPE_STRING = "string"
    TYPE_BYTES = "bytes"
    TYPE_UINT32 = "uint32"
    TYPE_SFIXED32 = "sfixed32"
    TYPE_SFIXED64 = "sfixed64"
    TYPE_SINT32 = "sint32"
    TYPE_SINT64 = "sint64"
    TYPE_MESSAGE = "message"
    TYPE_ENUM = "enum"


class Cardinality(Enum):
    """How many values a field holds within its parent."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    REPEATED = "repeated"


INTEGER_KINDS: frozenset[FieldKind] = frozenset(
    {
        FieldKind.TYPE_INT64,
        FieldKind.TYPE_UINT64,
        FieldKind.TYPE_SINT64,
        FieldKind.TYPE_FIXED64,
        FieldKind.TYPE_SFIXED64,
        FieldKind.TYPE_INT32,
        FieldKind.TYPE_UINT32,
        FieldKind.TYPE_SINT32,
        FieldKind.TYPE_FIXED32,
        FieldKind.TYPE_SFIXED32,
    }
)

FLOATING_KINDS: frozenset[FieldKind] = frozenset({FieldKind.TYPE_DOUBLE, FieldKind.TYPE_FLOAT})

PRIMITIVE_KINDS: frozenset[FieldKind] = INTEGER_KINDS | FLOATING_KINDS | {
    FieldKind.TYPE_BOOL,
    FieldKind.TYPE_STRING,
    FieldKind.TYPE_BYTES,
}

# HTTP verbs whose methods may be retried safely.
IDEMPOTENT_HTTP_VERBS: frozenset[str] = frozenset({"GET", "HEAD", "PUT", "DELETE"})
