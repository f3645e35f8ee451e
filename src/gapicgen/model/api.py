# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-agnostic API model facade.

The generation pipeline is written once against the abstract classes in this
module. Proto descriptions and discovery documents each provide a concrete
realization. Capabilities that exist only for one source are exposed on the
common classes but raise :class:`UnsupportedOperationError` on the other.
"""

from __future__ import annotations

import abc
from typing import Any

from gapicgen.model.types import (
    FLOATING_KINDS,
    IDEMPOTENT_HTTP_VERBS,
    INTEGER_KINDS,
    PRIMITIVE_KINDS,
    ApiSource,
    Cardinality,
    FieldKind,
)

# ###############
# Public Interface
# ###############


class UnsupportedOperationError(Exception):
    """Raised when a source-specific accessor is used on the other source."""

    def __init__(self, accessor: str, source: ApiSource) -> None:
        super().__init__(f"'{accessor}' is not available for {source.value} models")
        self.accessor = accessor
        self.source = source


class TypeModel(abc.ABC):
    """The type of a field, or the input/output type of a method."""

    @property
    @abc.abstractmethod
    def api_source(self) -> ApiSource: ...

    @property
    @abc.abstractmethod
    def kind(self) -> FieldKind: ...

    @property
    @abc.abstractmethod
    def cardinality(self) -> Cardinality: ...

    @property
    @abc.abstractmethod
    def full_name(self) -> str:
        """Fully qualified message or enum name, or the kind name for primitives."""

    @property
    @abc.abstractmethod
    def is_map(self) -> bool: ...

    @property
    @abc.abstractmethod
    def fields(self) -> list[FieldModel]:
        """Fields of a message type, in declaration order. Empty for other kinds."""

    @abc.abstractmethod
    def make_optional(self) -> TypeModel:
        """Return the singular element type of a repeated type."""

    @abc.abstractmethod
    def map_key_type(self) -> TypeModel: ...

    @abc.abstractmethod
    def map_value_type(self) -> TypeModel: ...

    @property
    def simple_name(self) -> str:
        return self.full_name.rsplit(".", 1)[-1]

    @property
    def is_repeated(self) -> bool:
        return self.cardinality is Cardinality.REPEATED

    @property
    def is_message(self) -> bool:
        return self.kind is FieldKind.TYPE_MESSAGE

    @property
    def is_enum(self) -> bool:
        return self.kind is FieldKind.TYPE_ENUM

    @property
    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_KINDS

    @property
    def is_string_type(self) -> bool:
        return self.kind is FieldKind.TYPE_STRING

    @property
    def is_bytes_type(self) -> bool:
        return self.kind is FieldKind.TYPE_BYTES

    @property
    def is_boolean_type(self) -> bool:
        return self.kind is FieldKind.TYPE_BOOL

    @property
    def is_integer_type(self) -> bool:
        return self.kind in INTEGER_KINDS

    @property
    def is_floating_type(self) -> bool:
        return self.kind in FLOATING_KINDS

    @property
    def is_empty_type(self) -> bool:
        """True for a message type that declares no fields."""
        return self.is_message and not self.is_repeated and not self.fields

    def get_field(self, name: str) -> FieldModel | None:
        for candidate in self.fields:
            if candidate.simple_name == name:
                return candidate
        return None

    def _identity(self) -> tuple[Any, ...]:
        return (self.api_source, self.kind, self.cardinality, self.full_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeModel):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        suffix = "[]" if self.is_repeated else ""
        return f"{type(self).__name__}({self.full_name}{suffix})"


class FieldModel(abc.ABC):
    """A field of a message type."""

    @property
    @abc.abstractmethod
    def api_source(self) -> ApiSource: ...

    @property
    @abc.abstractmethod
    def simple_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def type(self) -> TypeModel: ...

    @property
    @abc.abstractmethod
    def parent(self) -> TypeModel:
        """The message type that declares this field."""

    @property
    @abc.abstractmethod
    def description(self) -> str: ...

    @property
    @abc.abstractmethod
    def is_required(self) -> bool: ...

    @property
    def oneof(self) -> str | None:
        """Name of the oneof group this field belongs to (proto only)."""
        raise UnsupportedOperationError("oneof", self.api_source)

    @property
    def proto_field(self) -> Any:
        """The underlying proto field definition (proto only)."""
        raise UnsupportedOperationError("proto_field", self.api_source)

    @property
    def discovery_schema(self) -> Any:
        """The underlying discovery schema (discovery only)."""
        raise UnsupportedOperationError("discovery_schema", self.api_source)

    @property
    def full_name(self) -> str:
        return f"{self.parent.full_name}.{self.simple_name}"

    @property
    def cardinality(self) -> Cardinality:
        return self.type.cardinality

    @property
    def kind(self) -> FieldKind:
        return self.type.kind

    @property
    def is_repeated(self) -> bool:
        return self.type.is_repeated

    @property
    def is_map(self) -> bool:
        return self.type.is_map

    @property
    def is_message(self) -> bool:
        return self.type.is_message

    @property
    def is_enum(self) -> bool:
        return self.type.is_enum

    @property
    def is_primitive(self) -> bool:
        return self.type.is_primitive

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldModel):
            return NotImplemented
        return (self.api_source, self.full_name) == (other.api_source, other.full_name)

    def __hash__(self) -> int:
        return hash((self.api_source, self.full_name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_name})"


class MethodModel(abc.ABC):
    """A method of an API interface."""

    @property
    @abc.abstractmethod
    def api_source(self) -> ApiSource: ...

    @property
    @abc.abstractmethod
    def simple_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def full_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def raw_name(self) -> str:
        """The name exactly as it appears in the source description."""

    @property
    @abc.abstractmethod
    def input_type(self) -> TypeModel: ...

    @property
    @abc.abstractmethod
    def output_type(self) -> TypeModel: ...

    @property
    @abc.abstractmethod
    def request_streaming(self) -> bool: ...

    @property
    @abc.abstractmethod
    def response_streaming(self) -> bool: ...

    @property
    @abc.abstractmethod
    def http_verb(self) -> str | None: ...

    @property
    @abc.abstractmethod
    def description(self) -> str: ...

    @abc.abstractmethod
    def resource_patterns(self) -> dict[str, str]:
        """Map of request field path to the resource path template it carries.

        Templates use ``*`` for variable segments, for example
        ``{"name": "shelves/*/books/*"}``.
        """

    @property
    def input_fields(self) -> list[FieldModel]:
        return self.input_type.fields

    @property
    def output_fields(self) -> list[FieldModel]:
        return self.output_type.fields

    @property
    def is_idempotent(self) -> bool:
        verb = self.http_verb
        return verb is not None and verb.upper() in IDEMPOTENT_HTTP_VERBS

    @property
    def has_return_value(self) -> bool:
        return not self.output_type.is_empty_type

    def input_field(self, name: str) -> FieldModel | None:
        return self.input_type.get_field(name)

    def output_field(self, name: str) -> FieldModel | None:
        return self.output_type.get_field(name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MethodModel):
            return NotImplemented
        return (self.api_source, self.full_name) == (other.api_source, other.full_name)

    def __hash__(self) -> int:
        return hash((self.api_source, self.full_name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_name})"


class InterfaceModel(abc.ABC):
    """An API interface (a proto service or a discovery resource)."""

    @property
    @abc.abstractmethod
    def api_source(self) -> ApiSource: ...

    @property
    @abc.abstractmethod
    def full_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def methods(self) -> list[MethodModel]: ...

    @property
    @abc.abstractmethod
    def is_reachable(self) -> bool: ...

    @property
    @abc.abstractmethod
    def package(self) -> str:
        """Package of the file that declares the interface."""

    @property
    @abc.abstractmethod
    def description(self) -> str: ...

    @property
    def simple_name(self) -> str:
        return self.full_name.rsplit(".", 1)[-1]

    def get_method(self, simple_name: str) -> MethodModel | None:
        for method in self.methods:
            if method.simple_name == simple_name:
                return method
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InterfaceModel):
            return NotImplemented
        return (self.api_source, self.full_name) == (other.api_source, other.full_name)

    def __hash__(self) -> int:
        return hash((self.api_source, self.full_name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_name})"


class ApiModel(abc.ABC):
    """A whole API: the symbol table of interfaces and types."""

    @property
    @abc.abstractmethod
    def api_source(self) -> ApiSource: ...

    @property
    @abc.abstractmethod
    def title(self) -> str: ...

    @property
    @abc.abstractmethod
    def interfaces(self) -> list[InterfaceModel]: ...

    @abc.abstractmethod
    def lookup_type(self, full_name: str) -> TypeModel | None:
        """Return the message or enum type with the given full name, if any."""

    def lookup_interface(self, full_name: str) -> InterfaceModel | None:
        for interface in self.interfaces:
            if interface.full_name == full_name:
                return interface
        return None
