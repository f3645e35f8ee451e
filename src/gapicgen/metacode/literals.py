# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation and normalization of literals written in field paths."""

from __future__ import annotations

import re

from gapicgen.model.types import FLOATING_KINDS, INTEGER_KINDS, FieldKind

# ###############
# Public Interface
# ###############


class LiteralValueError(ValueError):
    """Raised when a literal does not fit the type it is assigned to."""


def validate_literal(kind: FieldKind, value: str) -> str:
    """Check *value* against *kind* and return its normalized form.

    Booleans are lowercased and string or bytes literals lose their
    surrounding double quotes. Numbers are returned unchanged.

    Raises:
        LiteralValueError: If the value does not match, or the kind takes no
            literals (messages, enums).
    """
    if kind is FieldKind.TYPE_BOOL:
        lowered = value.lower()
        if lowered in ("true", "false"):
            return lowered
    elif kind in FLOATING_KINDS:
        if _FLOAT_RE.fullmatch(value):
            return value
    elif kind in INTEGER_KINDS:
        if _INTEGER_RE.fullmatch(value):
            return value
    elif kind in (FieldKind.TYPE_STRING, FieldKind.TYPE_BYTES):
        match = _QUOTED_RE.fullmatch(value)
        if match:
            return match.group(1)
    else:
        raise LiteralValueError(f"Tried to assign value for unsupported type {kind.value}; value {value}")
    raise LiteralValueError(f"Could not assign value '{value}' to type {kind.value}")


# ################
# Implementation
# ################

_FLOAT_RE = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_QUOTED_RE = re.compile(r'"([^"]*)"')
