# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Variable scopes of sample output statements."""

from __future__ import annotations

from gapicgen.model.api import TypeModel

# ###############
# Public Interface
# ###############


class ScopeTable:
    """Tracks the variables declared by a sample's output statements.

    Two scopes are kept. The sample scope holds every name ever declared and
    is shared by all tables of one sample; a name can be declared in it only
    once. The local scope holds the names of the current block and is
    chained to the enclosing block's table for lookups.
    """

    def __init__(self, parent: ScopeTable | None = None) -> None:
        self._parent = parent
        if parent is None:
            self._sample: set[str] = set()
            self._all_types: set[TypeModel] = set()
        else:
            self._sample = parent._sample
            self._all_types = parent._all_types
        self._types: dict[str, TypeModel] = {}
        self._type_names: dict[str, str] = {}

    @property
    def parent(self) -> ScopeTable | None:
        return self._parent

    def get_type_model(self, name: str) -> TypeModel | None:
        """Return the type of *name* in this block or an enclosing one."""
        table: ScopeTable | None = self
        while table is not None:
            if name in table._types:
                return table._types[name]
            table = table._parent
        return None

    def get_type_name(self, name: str) -> str | None:
        table: ScopeTable | None = self
        while table is not None:
            if name in table._type_names:
                return table._type_names[name]
            table = table._parent
        return None

    def is_declared(self, name: str) -> bool:
        """True if *name* was declared anywhere in the sample, in scope or not."""
        return name in self._sample

    def put(self, name: str, type_model: TypeModel, type_name: str) -> bool:
        """Declare *name* in this block. Returns False if the sample already declares it."""
        if name in self._sample:
            return False
        self._sample.add(name)
        self._all_types.add(type_model)
        self._types[name] = type_model
        self._type_names[name] = type_name
        return True

    def all_types(self) -> set[TypeModel]:
        return set(self._all_types)

    def new_child(self) -> ScopeTable:
        return ScopeTable(self)
