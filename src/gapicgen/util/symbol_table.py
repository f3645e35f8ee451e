# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Allocation of unique identifiers within one synthesis call."""

from __future__ import annotations

import enum

# ###############
# Public Interface
# ###############


class SuffixStyle(enum.Enum):
    """How a clashing name is disambiguated."""

    NUMERIC = "numeric"
    UNDERSCORE = "underscore"


class SymbolTable:
    """A set of allocated names that hands out unique variants on request.

    With :attr:`SuffixStyle.NUMERIC` the second ``foo`` becomes ``foo2``, the
    third ``foo3``. With :attr:`SuffixStyle.UNDERSCORE` they become ``foo_``
    and ``foo__``. Names are compared case-sensitively.
    """

    def __init__(self, style: SuffixStyle = SuffixStyle.NUMERIC, seed: set[str] | None = None) -> None:
        self._style = style
        self._symbols: set[str] = set(seed or ())

    def seed(self, name: str) -> None:
        """Reserve *name* without returning it."""
        self._symbols.add(name)

    def contains(self, name: str) -> bool:
        return name in self._symbols

    def get_new_symbol(self, desired: str) -> str:
        """Allocate and return the first free variant of *desired*."""
        if desired not in self._symbols:
            self._symbols.add(desired)
            return desired

        if self._style is SuffixStyle.NUMERIC:
            counter = 2
            while f"{desired}{counter}" in self._symbols:
                counter += 1
            candidate = f"{desired}{counter}"
        else:
            candidate = desired + "_"
            while candidate in self._symbols:
                candidate += "_"

        self._symbols.add(candidate)
        return candidate
