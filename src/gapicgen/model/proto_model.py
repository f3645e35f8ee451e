# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Proto realization of the API model facade."""

from __future__ import annotations

import re

from gapicgen.model.api import ApiModel, FieldModel, InterfaceModel, MethodModel, TypeModel
from gapicgen.model.proto import (
    EnumDef,
    MessageDef,
    ProtoApi,
    ProtoFieldDef,
    ProtoMethodDef,
    ProtoTypeRef,
    ServiceDef,
)
from gapicgen.model.types import ApiSource, Cardinality, FieldKind

# ###############
# Public Interface
# ###############


class ProtoApiModel(ApiModel):
    """An :class:`ApiModel` backed by a :class:`ProtoApi` description."""

    def __init__(self, api: ProtoApi) -> None:
        self._api = api
        self._messages: dict[str, MessageDef] = {}
        self._enums: dict[str, EnumDef] = {}
        for proto_file in api.files:
            for message in proto_file.messages:
                self._messages[message.full_name] = message
            for enum in proto_file.enums:
                self._enums[enum.full_name] = enum
        self._interfaces = [
            ProtoInterfaceModel(self, service, proto_file.package)
            for proto_file in api.files
            for service in proto_file.services
        ]

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.PROTO

    @property
    def title(self) -> str:
        if self._api.title:
            return self._api.title
        return self._interfaces[0].simple_name if self._interfaces else ""

    @property
    def description(self) -> ProtoApi:
        return self._api

    @property
    def interfaces(self) -> list[InterfaceModel]:
        return list(self._interfaces)

    def lookup_type(self, full_name: str) -> TypeModel | None:
        name = full_name.lstrip(".")
        if name in self._messages:
            return ProtoTypeModel(self, ProtoTypeRef(kind=FieldKind.TYPE_MESSAGE, type_name=name))
        if name in self._enums:
            return ProtoTypeModel(self, ProtoTypeRef(kind=FieldKind.TYPE_ENUM, type_name=name))
        return None

    def message(self, full_name: str) -> MessageDef | None:
        return self._messages.get(full_name.lstrip("."))


class ProtoTypeModel(TypeModel):
    """A proto field type or method input/output type."""

    def __init__(self, model: ProtoApiModel, ref: ProtoTypeRef) -> None:
        self._model = model
        self._ref = ref

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.PROTO

    @property
    def kind(self) -> FieldKind:
        return self._ref.kind

    @property
    def cardinality(self) -> Cardinality:
        return self._ref.cardinality

    @property
    def full_name(self) -> str:
        if self._ref.type_name:
            return self._ref.type_name.lstrip(".")
        return self._ref.kind.value

    @property
    def is_map(self) -> bool:
        return self._ref.map_key is not None and self._ref.map_value is not None

    @property
    def fields(self) -> list[FieldModel]:
        if self.kind is not FieldKind.TYPE_MESSAGE or self.is_map:
            return []
        message = self._model.message(self.full_name)
        if message is None:
            return []
        return [ProtoFieldModel(self._model, self, field_def) for field_def in message.fields]

    def make_optional(self) -> TypeModel:
        return ProtoTypeModel(self._model, self._ref.model_copy(update={"cardinality": Cardinality.OPTIONAL}))

    def map_key_type(self) -> TypeModel:
        if self._ref.map_key is None:
            raise ValueError(f"type {self.full_name} is not a map")
        return ProtoTypeModel(self._model, self._ref.map_key)

    def map_value_type(self) -> TypeModel:
        if self._ref.map_value is None:
            raise ValueError(f"type {self.full_name} is not a map")
        return ProtoTypeModel(self._model, self._ref.map_value)

    def _identity(self) -> tuple[object, ...]:
        key = self._ref.map_key.kind if self._ref.map_key else None
        value = self._ref.map_value.type_name or self._ref.map_value.kind if self._ref.map_value else None
        return super()._identity() + (key, value)


class ProtoFieldModel(FieldModel):
    """A field of a proto message."""

    def __init__(self, model: ProtoApiModel, parent: ProtoTypeModel, field_def: ProtoFieldDef) -> None:
        self._model = model
        self._parent = parent
        self._def = field_def

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.PROTO

    @property
    def simple_name(self) -> str:
        return self._def.name

    @property
    def type(self) -> TypeModel:
        return ProtoTypeModel(self._model, self._def.type)

    @property
    def parent(self) -> TypeModel:
        return self._parent

    @property
    def description(self) -> str:
        return self._def.description or ""

    @property
    def is_required(self) -> bool:
        return self._def.type.cardinality is Cardinality.REQUIRED

    @property
    def oneof(self) -> str | None:
        return self._def.oneof

    @property
    def proto_field(self) -> ProtoFieldDef:
        return self._def


class ProtoMethodModel(MethodModel):
    """An RPC of a proto service."""

    def __init__(self, model: ProtoApiModel, interface: ProtoInterfaceModel, method_def: ProtoMethodDef) -> None:
        self._model = model
        self._interface = interface
        self._def = method_def

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.PROTO

    @property
    def simple_name(self) -> str:
        return self._def.name

    @property
    def full_name(self) -> str:
        return f"{self._interface.full_name}.{self._def.name}"

    @property
    def raw_name(self) -> str:
        return self._def.name

    @property
    def input_type(self) -> TypeModel:
        return _message_type(self._model, self._def.input_type)

    @property
    def output_type(self) -> TypeModel:
        return _message_type(self._model, self._def.output_type)

    @property
    def request_streaming(self) -> bool:
        return self._def.request_streaming

    @property
    def response_streaming(self) -> bool:
        return self._def.response_streaming

    @property
    def http_verb(self) -> str | None:
        return self._def.http.verb if self._def.http else None

    @property
    def description(self) -> str:
        return self._def.description or ""

    def resource_patterns(self) -> dict[str, str]:
        if self._def.http is None:
            return {}
        return parse_path_template_bindings(self._def.http.path)


class ProtoInterfaceModel(InterfaceModel):
    """A proto service."""

    def __init__(self, model: ProtoApiModel, service: ServiceDef, package: str) -> None:
        self._model = model
        self._service = service
        self._package = package

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.PROTO

    @property
    def full_name(self) -> str:
        return self._service.full_name

    @property
    def methods(self) -> list[MethodModel]:
        return [ProtoMethodModel(self._model, self, method_def) for method_def in self._service.methods]

    @property
    def is_reachable(self) -> bool:
        return self._service.reachable

    @property
    def package(self) -> str:
        return self._package

    @property
    def description(self) -> str:
        return self._service.description or ""


def parse_path_template_bindings(path: str) -> dict[str, str]:
    """Extract ``{field=template}`` bindings from an HTTP path.

    Example::

        >>> parse_path_template_bindings("/v1/{name=shelves/*/books/*}:get")
        {'name': 'shelves/*/books/*'}

    Bindings without a template (``{name}``) are ignored.
    """
    return {match.group(1): match.group(2) for match in _BINDING_RE.finditer(path)}


# ################
# Implementation
# ################

_BINDING_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_.]*)=([^}]+)\}")


def _message_type(model: ProtoApiModel, type_name: str) -> ProtoTypeModel:
    return ProtoTypeModel(model, ProtoTypeRef(kind=FieldKind.TYPE_MESSAGE, type_name=type_name.lstrip(".")))
