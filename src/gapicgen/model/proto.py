# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Protocol-buffer style API description.

Only the parts of a proto descriptor that the generation pipeline reads are
modelled: packages, messages with their fields, enums, and services with
their methods and optional HTTP bindings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from gapicgen.model.types import Cardinality, FieldKind

# ###############
# Public Interface
# ###############


class ProtoTypeRef(BaseModel):
    """The declared type of a proto field.

    ``type_name`` names the message or enum for composite kinds. Map fields
    are repeated message fields whose ``map_key`` and ``map_value`` are set.
    """

    model_config = ConfigDict(extra="forbid")

    kind: FieldKind
    cardinality: Cardinality = Cardinality.OPTIONAL
    type_name: str | None = None
    map_key: ProtoTypeRef | None = None
    map_value: ProtoTypeRef | None = None


class ProtoFieldDef(BaseModel):
    """A field declared in a proto message."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: ProtoTypeRef
    oneof: str | None = None
    description: str | None = None


class MessageDef(BaseModel):
    """A proto message: a named, ordered list of fields."""

    model_config = ConfigDict(extra="forbid")

    full_name: str
    fields: list[ProtoFieldDef] = _Field(default_factory=list)
    description: str | None = None


class EnumDef(BaseModel):
    """A proto enum."""

    model_config = ConfigDict(extra="forbid")

    full_name: str
    values: list[str] = _Field(default_factory=list)


class HttpRule(BaseModel):
    """The HTTP binding of a method, e.g. ``GET /v1/{name=shelves/*}``."""

    model_config = ConfigDict(extra="forbid")

    verb: str
    path: str
    body: str | None = None


class ProtoMethodDef(BaseModel):
    """An RPC method of a service."""

    model_config = ConfigDict(extra="forbid")

    name: str
    input_type: str
    output_type: str
    request_streaming: bool = False
    response_streaming: bool = False
    http: HttpRule | None = None
    description: str | None = None


class ServiceDef(BaseModel):
    """A proto service (an API interface)."""

    model_config = ConfigDict(extra="forbid")

    full_name: str
    methods: list[ProtoMethodDef] = _Field(default_factory=list)
    reachable: bool = True
    description: str | None = None


class ProtoFile(BaseModel):
    """The declarations of one proto file."""

    model_config = ConfigDict(extra="forbid")

    package: str
    messages: list[MessageDef] = _Field(default_factory=list)
    enums: list[EnumDef] = _Field(default_factory=list)
    services: list[ServiceDef] = _Field(default_factory=list)


class ProtoApi(BaseModel):
    """A complete proto API description made of one or more files."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    files: list[ProtoFile] = _Field(default_factory=list)


# Resolve forward references in self-referential models.
ProtoTypeRef.model_rebuild()
