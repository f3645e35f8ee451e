# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""On-disk generation configuration document.

The document is a YAML mapping. Keys are snake_case and match the field
names below. Everything except the interface name is optional; missing
settings are either filled in by heuristics or left disabled.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

CONFIG_TYPE = "com.google.api.codegen.ConfigProto"
CONFIG_SCHEMA_VERSION = "1.0.0"


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class LanguageSettingsProto(_Strict):
    """Per-language package naming."""

    package_name: str
    domain_layer_location: str | None = None


class CollectionConfigProto(_Strict):
    """A resource collection: a path template and the entity it names."""

    name_pattern: str
    entity_name: str


class RetryCodesDefinitionProto(_Strict):
    name: str
    retry_codes: list[str] = _Field(default_factory=list)


class RetryParamsDefinitionProto(_Strict):
    name: str
    initial_retry_delay_millis: int
    retry_delay_multiplier: float
    max_retry_delay_millis: int
    initial_rpc_timeout_millis: int
    rpc_timeout_multiplier: float
    max_rpc_timeout_millis: int
    total_timeout_millis: int


class FlatteningGroupProto(_Strict):
    parameters: list[str] = _Field(default_factory=list)


class FlatteningConfigProto(_Strict):
    groups: list[FlatteningGroupProto] = _Field(default_factory=list)


class PageStreamingRequestProto(_Strict):
    token_field: str | None = None
    page_size_field: str | None = None


class PageStreamingResponseProto(_Strict):
    token_field: str
    resources_field: str


class PageStreamingConfigProto(_Strict):
    request: PageStreamingRequestProto
    response: PageStreamingResponseProto


class BatchingSettingsProto(_Strict):
    """Thresholds that trigger sending a batch, and flow-control limits."""

    element_count_threshold: int = 0
    request_byte_threshold: int = 0
    delay_threshold_millis: int = 0
    element_count_limit: int = 0
    request_byte_limit: int = 0
    flow_control_element_limit: int | None = None
    flow_control_byte_limit: int | None = None
    flow_control_limit_exceeded_behavior: str = "IGNORE"


class BatchingDescriptorProto(_Strict):
    """How requests are merged into a batch and responses split apart."""

    batched_field: str
    discriminator_fields: list[str] = _Field(default_factory=list)
    subresponse_field: str | None = None


class BatchingConfigProto(_Strict):
    thresholds: BatchingSettingsProto
    batch_descriptor: BatchingDescriptorProto


class LongRunningConfigProto(_Strict):
    return_type: str
    metadata_type: str
    implements_get_operation: bool = True
    initial_poll_delay_millis: int = 3000
    poll_delay_multiplier: float = 1.3
    max_poll_delay_millis: int = 60000
    total_poll_timeout_millis: int = 600000


class LoopStatementProto(_Strict):
    """Iteration over a repeated field (`collection` + `variable`) or a map (`map` + `key`/`value`)."""

    collection: str = ""
    variable: str = ""
    map: str = ""
    key: str = ""
    value: str = ""
    body: list[OutputSpecProto] = _Field(default_factory=list)


class WriteFileStatementProto(_Strict):
    file_name: list[str] = _Field(default_factory=list)
    contents: str


class OutputSpecProto(_Strict):
    """One statement of a sample's output handling. Exactly one field must be set."""

    loop: LoopStatementProto | None = None
    print_: list[str] = _Field(default_factory=list, alias="print")
    define: str = ""
    comment: list[str] = _Field(default_factory=list)
    write_file: WriteFileStatementProto | None = None


LoopStatementProto.model_rebuild()


class SampleParametersProto(_Strict):
    defaults: list[str] = _Field(default_factory=list)


class SampleValueSetProto(_Strict):
    """Request values and output handling of one generated sample."""

    id: str
    title: str = ""
    description: str = ""
    parameters: SampleParametersProto = _Field(default_factory=SampleParametersProto)
    on_success: list[OutputSpecProto] | None = None


class MethodConfigProto(_Strict):
    """Generation settings of one method."""

    name: str
    flattening: FlatteningConfigProto | None = None
    required_fields: list[str] = _Field(default_factory=list)
    request_object_method: bool | None = None
    page_streaming: PageStreamingConfigProto | None = None
    retry_codes_name: str | None = None
    retry_params_name: str | None = None
    field_name_patterns: dict[str, str] = _Field(default_factory=dict)
    batching: BatchingConfigProto | None = None
    long_running: LongRunningConfigProto | None = None
    timeout_millis: int | None = None
    sample_code_init_fields: list[str] = _Field(default_factory=list)
    sample_value_sets: list[SampleValueSetProto] = _Field(default_factory=list)
    resource_name_treatment: str | None = None


class SmokeTestConfigProto(_Strict):
    method: str
    init_fields: list[str] = _Field(default_factory=list)


class InterfaceConfigProto(_Strict):
    """Generation settings of one interface, keyed by its full name."""

    name: str
    collections: list[CollectionConfigProto] = _Field(default_factory=list)
    retry_codes_def: list[RetryCodesDefinitionProto] = _Field(default_factory=list)
    retry_params_def: list[RetryParamsDefinitionProto] = _Field(default_factory=list)
    required_constructor_params: list[str] = _Field(default_factory=list)
    smoke_test: SmokeTestConfigProto | None = None
    methods: list[MethodConfigProto] = _Field(default_factory=list)


class ConfigProto(_Strict):
    """Top-level generation configuration document."""

    type: str = CONFIG_TYPE
    config_schema_version: str = CONFIG_SCHEMA_VERSION
    language: str | None = None
    language_settings: dict[str, LanguageSettingsProto] = _Field(default_factory=dict)
    interfaces: list[InterfaceConfigProto] = _Field(default_factory=list)
