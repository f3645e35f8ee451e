# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""View objects handed to templates.

Views hold only names, literals and flags already spelled for the target
language, so templates need no knowledge of the API model.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from gapicgen.metacode.tree import InitCodeLineType
from gapicgen.model.api import TypeModel

# ###############
# Public Interface
# ###############

# ------------------------------------------------------------------
# Init code
# ------------------------------------------------------------------


@dataclass(frozen=True)
class SimpleInitCodeLineView:
    line_type = InitCodeLineType.SIMPLE

    type_name: str
    identifier: str
    value: str


@dataclass(frozen=True)
class FieldSettingView:
    field_name: str
    setter_name: str
    type_name: str
    identifier: str
    value: str | None = None


@dataclass(frozen=True)
class StructureInitCodeLineView:
    line_type = InitCodeLineType.STRUCTURE

    type_name: str
    identifier: str
    field_settings: tuple[FieldSettingView, ...]


@dataclass(frozen=True)
class ListInitCodeLineView:
    line_type = InitCodeLineType.LIST

    type_name: str
    element_type_name: str
    identifier: str
    element_identifiers: tuple[str, ...]


@dataclass(frozen=True)
class MapEntryView:
    key: str
    value_identifier: str


@dataclass(frozen=True)
class MapInitCodeLineView:
    line_type = InitCodeLineType.MAP

    type_name: str
    key_type_name: str
    value_type_name: str
    identifier: str
    entries: tuple[MapEntryView, ...]


InitCodeLineView = SimpleInitCodeLineView | StructureInitCodeLineView | ListInitCodeLineView | MapInitCodeLineView


@dataclass(frozen=True)
class InitCodeView:
    """Initialization statements of a sample, in emission order.

    Attributes:
        top_level_identifier: The variable holding the request object.
        lines: The statements.
        arg_fields: For flattened calls, the arguments passed to the method.
    """

    top_level_identifier: str
    lines: tuple[InitCodeLineView, ...]
    arg_fields: tuple[FieldSettingView, ...] = ()


# ------------------------------------------------------------------
# Output statements
# ------------------------------------------------------------------


@dataclass(frozen=True)
class VariableView:
    """A variable and the accessors applied to it, e.g. ``response`` + ``.getBooks()``."""

    variable: str
    accessors: tuple[str, ...]
    type: TypeModel

    @property
    def expression(self) -> str:
        return self.variable + "".join(self.accessors)


@dataclass(frozen=True)
class StringFormatView:
    format: str
    args: tuple[str, ...]


@dataclass(frozen=True)
class PrintView:
    kind = "print"

    formatted_string: StringFormatView


@dataclass(frozen=True)
class DefineView:
    kind = "define"

    variable_type_name: str
    variable_name: str
    reference: VariableView


@dataclass(frozen=True)
class CommentView:
    kind = "comment"

    lines: tuple[str, ...]


@dataclass(frozen=True)
class ArrayLoopView:
    kind = "array_loop"

    variable_type_name: str
    variable_name: str
    collection: VariableView
    body: tuple[OutputView, ...]


@dataclass(frozen=True)
class MapLoopView:
    kind = "map_loop"

    key_type_name: str
    key_variable_name: str
    value_type_name: str
    value_variable_name: str
    map: VariableView
    body: tuple[OutputView, ...]


@dataclass(frozen=True)
class WriteFileView:
    kind = "write_file"

    file_name: StringFormatView
    contents: VariableView
    is_first: bool


OutputView = PrintView | DefineView | CommentView | ArrayLoopView | MapLoopView | WriteFileView


# ------------------------------------------------------------------
# Methods
# ------------------------------------------------------------------


@dataclass(frozen=True)
class SampleView:
    """One generated usage sample of a method."""

    id: str
    title: str
    description: str
    init_code: InitCodeView
    outputs: tuple[OutputView, ...]


@dataclass(frozen=True)
class ParameterView:
    name: str
    field_name: str
    type_name: str
    setter_name: str
    is_required: bool
    description: str = ""


@dataclass(frozen=True)
class FlattenedMethodView:
    """An overload taking some request fields as parameters."""

    name: str
    parameters: tuple[ParameterView, ...]
    init_code: InitCodeView


@dataclass(frozen=True)
class PageStreamingDescriptorView:
    method_name: str
    descriptor_name: str
    paged_response_type_name: str
    resource_type_name: str
    request_token_setter: str | None
    request_page_size_setter: str | None
    response_token_getter: str
    resources_field_getter: str
    resources_field_is_map: bool


@dataclass(frozen=True)
class BatchingConfigView:
    element_count_threshold: int
    request_byte_threshold: int
    delay_threshold_millis: int
    element_count_limit: int
    request_byte_limit: int
    flow_control_element_limit: int | None
    flow_control_byte_limit: int | None
    flow_control_limit_exceeded_behavior: str


@dataclass(frozen=True)
class BatchingDescriptorView:
    """Accessors a batching implementation needs to merge and split calls.

    Attributes:
        discriminator_field_getters: Getter chains of the fields whose values
            must be equal for requests to share a batch.
        subresponse_field_getter: Getter of the response field that is split
            back to the individual callers, if any.
    """

    method_name: str
    descriptor_name: str
    batched_field_getter: str
    batched_field_setter: str
    batched_field_count_getter: str
    discriminator_field_getters: tuple[tuple[str, ...], ...]
    subresponse_field_getter: str | None
    subresponse_field_setter: str | None
    config: BatchingConfigView


@dataclass(frozen=True)
class LongRunningView:
    return_type_name: str
    metadata_type_name: str
    implements_get_operation: bool
    initial_poll_delay_millis: int
    poll_delay_multiplier: float
    max_poll_delay_millis: int
    total_poll_timeout_millis: int


@dataclass(frozen=True)
class ResourceNamePatternView:
    """A request field that carries a resource name of a collection."""

    field_path: str
    entity_name: str
    name_pattern: str | None
    format_function_name: str


@dataclass(frozen=True)
class ApiMethodView:
    """Everything templates need to emit one API method."""

    name: str
    full_name: str
    raw_name: str
    description: str
    request_type_name: str
    response_type_name: str
    has_return_value: bool
    is_idempotent: bool
    request_streaming: bool
    response_streaming: bool
    retry_codes_name: str
    retry_params_name: str
    timeout_millis: int
    request_object_method: bool
    request_object_init_code: InitCodeView | None
    flattened_methods: tuple[FlattenedMethodView, ...]
    required_fields: tuple[str, ...]
    page_streaming: PageStreamingDescriptorView | None
    batching: BatchingDescriptorView | None
    long_running: LongRunningView | None
    resource_name_patterns: tuple[ResourceNamePatternView, ...]
    resource_name_treatment: str
    samples: tuple[SampleView, ...]


# ------------------------------------------------------------------
# Generated unit tests
# ------------------------------------------------------------------


class GrpcStreamingType(enum.Enum):
    NON_STREAMING = "non_streaming"
    CLIENT_STREAMING = "client_streaming"
    SERVER_STREAMING = "server_streaming"
    BIDI_STREAMING = "bidi_streaming"


class ClientMethodType(enum.Enum):
    """Which client overload a test case calls."""

    REQUEST_OBJECT = "request_object"
    FLATTENED = "flattened"


class ExpectedResponseKind(enum.Enum):
    """What a test compares the call result against.

    ``ELEMENT`` is used for paged and server-streaming calls, whose result is
    iterated. ``RESULTS_AND_METADATA`` is used for long-running calls.
    """

    EMPTY = "empty"
    RESPONSE = "response"
    ELEMENT = "element"
    RESULTS_AND_METADATA = "results_and_metadata"


@dataclass(frozen=True)
class MockGrpcMethodView:
    name: str
    request_type_name: str
    response_type_name: str
    streaming_type: GrpcStreamingType


@dataclass(frozen=True)
class MockServiceView:
    """An in-process stand-in for the service that returns queued responses."""

    class_name: str
    impl_class_name: str
    service_full_name: str
    methods: tuple[MockGrpcMethodView, ...]


@dataclass(frozen=True)
class PageStreamingResponseView:
    """How a paged test reads the resources back from the call result.

    Attributes:
        resources_var_name: Variable holding the resources of the result.
        resource_type_name: Type of one resource.
        resources_field_getters: Getter chain from the expected response to
            its resources field.
        resources_iterate_method: Method of the paged result that iterates
            over every resource.
    """

    resources_var_name: str
    resource_type_name: str
    resources_field_getters: tuple[str, ...]
    resources_iterate_method: str
    resources_field_is_map: bool


@dataclass(frozen=True)
class UnitTestCaseView:
    """One test calling a method against the mock service.

    Attributes:
        request_init_code: Builds the request, or the flattened arguments.
        expected_response: Builds the response the mock returns, if the
            method returns anything.
    """

    name: str
    method_name: str
    client_method_type: ClientMethodType
    streaming_type: GrpcStreamingType
    request_init_code: InitCodeView
    expected_response: InitCodeView | None
    response_kind: ExpectedResponseKind
    page_streaming_response: PageStreamingResponseView | None


@dataclass(frozen=True)
class UnitTestView:
    class_name: str
    client_name: str
    mock_service: MockServiceView | None
    test_cases: tuple[UnitTestCaseView, ...]


# ------------------------------------------------------------------
# Interfaces
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RetryCodesDefinitionView:
    name: str
    constant_name: str
    codes: tuple[str, ...]


@dataclass(frozen=True)
class RetryParamsDefinitionView:
    name: str
    constant_name: str
    initial_retry_delay_millis: int
    retry_delay_multiplier: float
    max_retry_delay_millis: int
    initial_rpc_timeout_millis: int
    rpc_timeout_multiplier: float
    max_rpc_timeout_millis: int
    total_timeout_millis: int


@dataclass(frozen=True)
class CollectionView:
    name_pattern: str
    entity_name: str
    format_function_name: str
    parse_function_name: str


@dataclass(frozen=True)
class SmokeTestView:
    class_name: str
    method_name: str
    flattened: bool
    init_code: InitCodeView


@dataclass(frozen=True)
class InterfaceView:
    """The generated client of one interface."""

    language: str
    file_name: str
    client_name: str
    full_name: str
    simple_name: str
    package_name: str | None
    description: str
    methods: tuple[ApiMethodView, ...]
    retry_codes: tuple[RetryCodesDefinitionView, ...]
    retry_params: tuple[RetryParamsDefinitionView, ...]
    collections: tuple[CollectionView, ...]
    required_constructor_params: tuple[str, ...]
    smoke_test: SmokeTestView | None
    unit_test: UnitTestView | None = None

    @property
    def page_streaming_descriptors(self) -> tuple[PageStreamingDescriptorView, ...]:
        return tuple(m.page_streaming for m in self.methods if m.page_streaming is not None)

    @property
    def batching_descriptors(self) -> tuple[BatchingDescriptorView, ...]:
        return tuple(m.batching for m in self.methods if m.batching is not None)

    @property
    def long_running_methods(self) -> tuple[ApiMethodView, ...]:
        return tuple(m for m in self.methods if m.long_running is not None)
