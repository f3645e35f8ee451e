# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolved, immutable generation configuration.

These objects are produced once per run by :mod:`gapicgen.config.resolver`
from a :class:`~gapicgen.config.schema.ConfigProto` and the API model. All
field references are bound to model elements.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeVar

from gapicgen.config.schema import SampleValueSetProto
from gapicgen.model.api import FieldModel, InterfaceModel, MethodModel, TypeModel

# ###############
# Public Interface
# ###############

RETRY_CODES_IDEMPOTENT_NAME = "idempotent"
RETRY_CODES_NON_IDEMPOTENT_NAME = "non_idempotent"
RETRY_PARAMS_DEFAULT_NAME = "default"
DEFAULT_TIMEOUT_MILLIS = 60000


class FieldSelectorError(ValueError):
    """Raised when a field path does not name an existing field."""


@dataclass(frozen=True)
class FieldSelector:
    """A chain of fields reached from a root type, e.g. ``shelf.name``."""

    fields: tuple[FieldModel, ...]

    @classmethod
    def resolve(cls, root_type: TypeModel, path: str) -> FieldSelector:
        """Bind a dotted field path to the fields it names.

        Raises:
            FieldSelectorError: If a segment does not name a field of the
                type reached so far.
        """
        current = root_type
        fields: list[FieldModel] = []
        for name in path.split("."):
            found = current.get_field(name)
            if found is None:
                raise FieldSelectorError(f"type {current.full_name} does not have field {name}")
            fields.append(found)
            current = found.type
        return cls(tuple(fields))

    @property
    def last_field(self) -> FieldModel:
        return self.fields[-1]

    @property
    def path(self) -> str:
        return ".".join(f.simple_name for f in self.fields)

    @property
    def param_name(self) -> str:
        return "_".join(f.simple_name for f in self.fields)


@dataclass(frozen=True)
class PageStreamingConfig:
    """Paging fields of a list method.

    The request token and page-size fields are optional: some APIs page
    with only one of them.
    """

    request_token_field: FieldModel | None
    page_size_field: FieldModel | None
    response_token_field: FieldModel
    resources_field: FieldModel

    @property
    def token_field_name(self) -> str | None:
        return self.request_token_field.simple_name if self.request_token_field else None

    @property
    def page_size_field_name(self) -> str | None:
        return self.page_size_field.simple_name if self.page_size_field else None

    @property
    def resources_field_name(self) -> str:
        return self.resources_field.simple_name

    @property
    def resources_element_type(self) -> TypeModel:
        """The type a caller iterates over: list element or map value."""
        resources_type = self.resources_field.type
        if resources_type.is_map:
            return resources_type.map_value_type()
        return resources_type.make_optional()

    @property
    def has_page_size_field(self) -> bool:
        return self.page_size_field is not None


@dataclass(frozen=True)
class BatchingConfig:
    """Request bundling settings of a method."""

    batched_field: FieldModel
    discriminator_fields: tuple[FieldSelector, ...]
    subresponse_field: FieldModel | None
    element_count_threshold: int
    request_byte_threshold: int
    delay_threshold_millis: int
    element_count_limit: int = 0
    request_byte_limit: int = 0
    flow_control_element_limit: int | None = None
    flow_control_byte_limit: int | None = None
    flow_control_limit_exceeded_behavior: str = "IGNORE"

    @property
    def has_subresponse_field(self) -> bool:
        return self.subresponse_field is not None


@dataclass(frozen=True)
class FlatteningConfig:
    """One flattened overload: the request fields exposed as parameters."""

    fields: tuple[FieldModel, ...]

    @property
    def parameters(self) -> tuple[str, ...]:
        return tuple(f.simple_name for f in self.fields)


@dataclass(frozen=True)
class RetryParamsDefinition:
    name: str
    initial_retry_delay_millis: int
    retry_delay_multiplier: float
    max_retry_delay_millis: int
    initial_rpc_timeout_millis: int
    rpc_timeout_multiplier: float
    max_rpc_timeout_millis: int
    total_timeout_millis: int


@dataclass(frozen=True)
class LongRunningConfig:
    """Return and metadata types of a long-running method plus poll settings."""

    return_type: TypeModel
    metadata_type: TypeModel
    implements_get_operation: bool = True
    initial_poll_delay_millis: int = 3000
    poll_delay_multiplier: float = 1.3
    max_poll_delay_millis: int = 60000
    total_poll_timeout_millis: int = 600000


class ResourceNameTreatment:
    """How resource-name fields are typed in the generated surface."""

    NONE = "NONE"
    STATIC_TYPES = "STATIC_TYPES"
    VALIDATE = "VALIDATE"

    ALL = frozenset({NONE, STATIC_TYPES, VALIDATE})


@dataclass(frozen=True)
class MethodConfig:
    """Resolved generation policy of one method."""

    method: MethodModel
    page_streaming: PageStreamingConfig | None = None
    batching: BatchingConfig | None = None
    flattening: tuple[FlatteningConfig, ...] = ()
    required_fields: tuple[FieldModel, ...] = ()
    optional_fields: tuple[FieldModel, ...] = ()
    request_object_method: bool = True
    retry_codes_name: str = RETRY_CODES_IDEMPOTENT_NAME
    retry_params_name: str = RETRY_PARAMS_DEFAULT_NAME
    field_name_patterns: Mapping[str, str] = field(default_factory=dict)
    long_running: LongRunningConfig | None = None
    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    sample_code_init_fields: tuple[str, ...] = ()
    sample_value_sets: tuple[SampleValueSetProto, ...] = ()
    resource_name_treatment: str = ResourceNameTreatment.NONE

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_name_patterns", _frozen(self.field_name_patterns))

    @property
    def is_page_streaming(self) -> bool:
        return self.page_streaming is not None

    @property
    def is_flattening(self) -> bool:
        return len(self.flattening) > 0

    @property
    def is_long_running(self) -> bool:
        return self.long_running is not None


@dataclass(frozen=True)
class SmokeTestConfig:
    """A method to call in a generated smoke test and its request fields."""

    method: MethodModel
    init_fields: tuple[str, ...]

    @property
    def init_field_names(self) -> tuple[str, ...]:
        """Top-level field names of the init specs (``a.b=1`` yields ``a``), each listed once."""
        names = []
        for spec in self.init_fields:
            path = _INIT_FIELD_SPLIT_RE.split(spec, maxsplit=1)[0]
            names.append(_PATH_HEAD_RE.split(path.strip(), maxsplit=1)[0])
        return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class InterfaceConfig:
    """Resolved generation settings of one interface."""

    interface: InterfaceModel
    method_configs: tuple[MethodConfig, ...]
    retry_codes: Mapping[str, tuple[str, ...]]
    retry_params: Mapping[str, RetryParamsDefinition]
    required_constructor_params: tuple[str, ...] = ()
    smoke_test: SmokeTestConfig | None = None
    collections: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "retry_codes", _frozen(self.retry_codes))
        object.__setattr__(self, "retry_params", _frozen(self.retry_params))
        object.__setattr__(self, "collections", _frozen(self.collections))

    def method_config(self, simple_name: str) -> MethodConfig | None:
        for method_config in self.method_configs:
            if method_config.method.simple_name == simple_name:
                return method_config
        return None


@dataclass(frozen=True)
class ApiConfig:
    """Resolved configuration of a whole run, keyed by interface full name."""

    interface_configs: Mapping[str, InterfaceConfig]
    package_name: str | None = None
    language: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "interface_configs", _frozen(self.interface_configs))

    def interface_config(self, full_name: str) -> InterfaceConfig | None:
        return self.interface_configs.get(full_name)


# ################
# Implementation
# ################

_INIT_FIELD_SPLIT_RE = re.compile(r"[<=>]")
_PATH_HEAD_RE = re.compile(r"[.\[{]")

_K = TypeVar("_K")
_V = TypeVar("_V")


def _frozen(mapping: Mapping[_K, _V]) -> Mapping[_K, _V]:
    return MappingProxyType(dict(mapping))
