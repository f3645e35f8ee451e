# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Views of the generated unit tests: a mock service plus one test case per method.

Each test case queues an expected response on the mock, calls the client
method and compares the result. Requests are built with the same init-code
synthesis as samples, so a test sets exactly the fields a sample would.
"""

from __future__ import annotations

from gapicgen.config.resolved import InterfaceConfig, MethodConfig
from gapicgen.metacode.init_code import InitCodeContext, InitCodeOutputType
from gapicgen.metacode.value_generator import ValueGenerator
from gapicgen.model.api import FieldModel, MethodModel, TypeModel
from gapicgen.model.types import ApiSource, FieldKind
from gapicgen.naming.namer import SurfaceNamer
from gapicgen.util.symbol_table import SymbolTable
from gapicgen.viewmodel.init_code import InitCodeTransformer
from gapicgen.viewmodel.views import (
    ClientMethodType,
    ExpectedResponseKind,
    GrpcStreamingType,
    InitCodeView,
    MockGrpcMethodView,
    MockServiceView,
    PageStreamingResponseView,
    UnitTestCaseView,
    UnitTestView,
)

# ###############
# Public Interface
# ###############


def streaming_type(method: MethodModel) -> GrpcStreamingType:
    if method.request_streaming and method.response_streaming:
        return GrpcStreamingType.BIDI_STREAMING
    if method.request_streaming:
        return GrpcStreamingType.CLIENT_STREAMING
    if method.response_streaming:
        return GrpcStreamingType.SERVER_STREAMING
    return GrpcStreamingType.NON_STREAMING


class UnitTestTransformer:
    """Builds the unit-test view of an interface.

    Args:
        namer: Naming table of the target language.
        value_generator_seed: Seed used when no generator is passed in.
    """

    def __init__(self, namer: SurfaceNamer, *, value_generator_seed: int = 0) -> None:
        self._namer = namer
        self._init_code = InitCodeTransformer(namer)
        self._seed = value_generator_seed

    def unit_test_view(
        self, interface_config: InterfaceConfig, value_generator: ValueGenerator | None = None
    ) -> UnitTestView:
        interface = interface_config.interface
        generator = value_generator if value_generator is not None else ValueGenerator(self._seed)
        return UnitTestView(
            class_name=self._namer.unit_test_class_name(interface),
            client_name=self._namer.api_wrapper_class_name(interface),
            mock_service=self.mock_service_view(interface_config),
            test_cases=tuple(
                self.test_case_view(method_config, generator) for method_config in interface_config.method_configs
            ),
        )

    def mock_service_view(self, interface_config: InterfaceConfig) -> MockServiceView | None:
        """The mock gRPC service, or None for interfaces that are not served over gRPC."""
        interface = interface_config.interface
        if interface.api_source is not ApiSource.PROTO:
            return None
        namer = self._namer
        return MockServiceView(
            class_name=namer.mock_service_class_name(interface),
            impl_class_name=namer.mock_service_impl_class_name(interface),
            service_full_name=interface.full_name,
            methods=tuple(
                MockGrpcMethodView(
                    name=namer.api_method_name(method_config.method),
                    request_type_name=namer.type_name(method_config.method.input_type),
                    response_type_name=namer.type_name(method_config.method.output_type),
                    streaming_type=streaming_type(method_config.method),
                )
                for method_config in interface_config.method_configs
            ),
        )

    def test_case_view(self, method_config: MethodConfig, value_generator: ValueGenerator) -> UnitTestCaseView:
        namer = self._namer
        method = method_config.method
        symbol_table = SymbolTable()

        if method_config.is_flattening:
            client_method_type = ClientMethodType.FLATTENED
            request_init_code = self._init_code.generate_init_code_view(
                InitCodeContext(
                    root_type=method.input_type,
                    init_fields=method_config.sample_code_init_fields,
                    init_field_set=method_config.flattening[0].fields,
                    output_type=InitCodeOutputType.FIELD_LIST,
                    value_generator=value_generator,
                    symbol_table=symbol_table,
                )
            )
        else:
            client_method_type = ClientMethodType.REQUEST_OBJECT
            field_set = None
            if not method_config.sample_code_init_fields and method_config.required_fields:
                field_set = method_config.required_fields
            request_init_code = self._init_code.generate_init_code_view(
                InitCodeContext(
                    root_type=method.input_type,
                    init_fields=method_config.sample_code_init_fields,
                    init_field_set=field_set,
                    value_generator=value_generator,
                    symbol_table=symbol_table,
                )
            )

        response_type = _expected_response_type(method_config)
        expected_response = None
        if response_type is not None:
            expected_response = self._expected_response_view(
                method_config, response_type, value_generator, symbol_table
            )

        return UnitTestCaseView(
            name=namer.test_case_name(method),
            method_name=namer.api_method_name(method),
            client_method_type=client_method_type,
            streaming_type=streaming_type(method),
            request_init_code=request_init_code,
            expected_response=expected_response,
            response_kind=_response_kind(method_config),
            page_streaming_response=self._page_streaming_response_view(method_config, symbol_table),
        )

    # ------------------------------------------------------------------
    # Expected responses
    # ------------------------------------------------------------------

    def _expected_response_view(
        self,
        method_config: MethodConfig,
        response_type: TypeModel,
        value_generator: ValueGenerator,
        symbol_table: SymbolTable,
    ) -> InitCodeView:
        init_fields = [f.simple_name for f in response_type.fields if f.is_primitive and not f.is_repeated]
        page_streaming = method_config.page_streaming
        if page_streaming is not None and not method_config.is_long_running:
            init_fields.append(_first_element_spec(page_streaming.resources_field))
        return self._init_code.generate_init_code_view(
            InitCodeContext(
                root_type=response_type,
                init_fields=tuple(init_fields),
                suggested_name="expected_response",
                value_generator=value_generator,
                symbol_table=symbol_table,
            )
        )

    def _page_streaming_response_view(
        self, method_config: MethodConfig, symbol_table: SymbolTable
    ) -> PageStreamingResponseView | None:
        page_streaming = method_config.page_streaming
        if page_streaming is None or method_config.is_long_running:
            return None
        namer = self._namer
        resources_field = page_streaming.resources_field
        return PageStreamingResponseView(
            resources_var_name=namer.local_var_name(symbol_table.get_new_symbol("resources")),
            resource_type_name=namer.type_name(page_streaming.resources_element_type),
            resources_field_getters=(namer.field_getter_name(resources_field),),
            resources_iterate_method=namer.method_name("iterate_all"),
            resources_field_is_map=resources_field.type.is_map,
        )


# ################
# Implementation
# ################


def _expected_response_type(method_config: MethodConfig) -> TypeModel | None:
    method = method_config.method
    if not method.has_return_value:
        return None
    long_running = method_config.long_running
    if long_running is not None:
        return None if long_running.return_type.is_empty_type else long_running.return_type
    return method.output_type


def _response_kind(method_config: MethodConfig) -> ExpectedResponseKind:
    method = method_config.method
    if not method.has_return_value:
        return ExpectedResponseKind.EMPTY
    if method_config.is_long_running:
        return ExpectedResponseKind.RESULTS_AND_METADATA
    if method_config.is_page_streaming or method.response_streaming:
        return ExpectedResponseKind.ELEMENT
    return ExpectedResponseKind.RESPONSE


def _first_element_spec(field: FieldModel) -> str:
    """A field path that puts one element into a repeated or map field."""
    if not field.type.is_map:
        return f"{field.simple_name}[0]"
    key_kind = field.type.map_key_type().kind
    if key_kind is FieldKind.TYPE_BOOL:
        return f"{field.simple_name}{{true}}"
    if key_kind is FieldKind.TYPE_STRING:
        return f'{field.simple_name}{{"key"}}'
    return f"{field.simple_name}{{0}}"
