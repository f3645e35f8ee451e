# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discovery document description.

Mirrors the subset of the discovery JSON format that the generator reads.
Keys are camelCase on disk and snake_case in Python.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Schema(BaseModel):
    """A JSON schema node: an object, an array, a scalar, or a ``$ref``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    type: str | None = None
    format: str | None = None
    description: str | None = None
    ref: str | None = _Field(default=None, alias="$ref")
    properties: dict[str, Schema] = _Field(default_factory=dict)
    items: Schema | None = None
    additional_properties: Schema | None = _Field(default=None, alias="additionalProperties")
    enum: list[str] | None = None
    location: str | None = None
    required: bool = False
    repeated: bool = False
    pattern: str | None = None


class DiscoveryMethod(BaseModel):
    """A REST method of a discovery resource."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    path: str
    http_method: str = _Field(alias="httpMethod")
    description: str | None = None
    parameters: dict[str, Schema] = _Field(default_factory=dict)
    parameter_order: list[str] = _Field(default_factory=list, alias="parameterOrder")
    request: Schema | None = None
    response: Schema | None = None


class DiscoveryResource(BaseModel):
    """A named group of methods, possibly with nested resources."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    methods: dict[str, DiscoveryMethod] = _Field(default_factory=dict)
    resources: dict[str, DiscoveryResource] = _Field(default_factory=dict)


class DiscoveryDocument(BaseModel):
    """Top-level discovery document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    discovery_version: str = _Field(default="v1", alias="discoveryVersion")
    name: str
    version: str
    canonical_name: str | None = _Field(default=None, alias="canonicalName")
    owner_domain: str = _Field(default="googleapis.com", alias="ownerDomain")
    base_url: str | None = _Field(default=None, alias="baseUrl")
    schemas: dict[str, Schema] = _Field(default_factory=dict)
    resources: dict[str, DiscoveryResource] = _Field(default_factory=dict)


# Resolve forward references in self-referential models.
Schema.model_rebuild()
DiscoveryResource.model_rebuild()
