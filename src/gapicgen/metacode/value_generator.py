# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Deterministic placeholder values for fields a sample does not set explicitly."""

from __future__ import annotations

from gapicgen.model.api import TypeModel
from gapicgen.util.name import lower_hyphen

# ###############
# Public Interface
# ###############


class ValueGenerator:
    """Hands out placeholder literals seeded by a counter.

    The same identifier always gets the same value, so a sample and the test
    built from it agree. Values are in normalized form: strings carry no
    quotes.
    """

    def __init__(self, seed: int = 0) -> None:
        self._counter = seed
        self._values: dict[str, str] = {}

    def get_and_store_value(self, type_model: TypeModel, identifier: str) -> str:
        if identifier not in self._values:
            self._values[identifier] = self._generate(type_model, identifier)
        return self._values[identifier]

    def _generate(self, type_model: TypeModel, identifier: str) -> str:
        self._counter += 1
        if type_model.is_string_type or type_model.is_bytes_type:
            return f"{lower_hyphen(identifier)}-{self._counter}"
        if type_model.is_boolean_type:
            return "true" if self._counter % 2 else "false"
        if type_model.is_integer_type:
            return str(self._counter)
        if type_model.is_floating_type:
            return f"{self._counter}.0"
        raise ValueError(f"cannot generate a value for type {type_model.full_name}")
