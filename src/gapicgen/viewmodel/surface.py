# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of interface and method views from the resolved configuration."""

from __future__ import annotations

from gapicgen.config.resolved import (
    ApiConfig,
    BatchingConfig,
    FlatteningConfig,
    InterfaceConfig,
    LongRunningConfig,
    MethodConfig,
    PageStreamingConfig,
)
from gapicgen.metacode.init_code import InitCodeContext, InitCodeError, InitCodeOutputType
from gapicgen.metacode.value_generator import ValueGenerator
from gapicgen.model.api import FieldModel, MethodModel, TypeModel
from gapicgen.naming.namer import SurfaceNamer
from gapicgen.viewmodel.init_code import InitCodeTransformer
from gapicgen.viewmodel.output import OutputTransformer, default_output_specs
from gapicgen.viewmodel.testing import UnitTestTransformer
from gapicgen.viewmodel.views import (
    ApiMethodView,
    BatchingConfigView,
    BatchingDescriptorView,
    CollectionView,
    FlattenedMethodView,
    InitCodeView,
    InterfaceView,
    LongRunningView,
    PageStreamingDescriptorView,
    ParameterView,
    ResourceNamePatternView,
    RetryCodesDefinitionView,
    RetryParamsDefinitionView,
    SampleView,
    SmokeTestView,
)

# ###############
# Public Interface
# ###############


class SurfaceTransformer:
    """Builds the views of every configured interface.

    Args:
        namer: Naming table of the target language.
        value_generator_seed: Seed of the placeholder values. Each interface
            gets its own generator, so output does not depend on the order
            interfaces are processed in.
    """

    def __init__(self, namer: SurfaceNamer, *, value_generator_seed: int = 0) -> None:
        self._namer = namer
        self._init_code = InitCodeTransformer(namer)
        self._unit_tests = UnitTestTransformer(namer, value_generator_seed=value_generator_seed)
        self._seed = value_generator_seed

    def transform(self, api_config: ApiConfig) -> list[InterfaceView]:
        return [
            self.interface_view(interface_config, api_config.package_name)
            for interface_config in api_config.interface_configs.values()
        ]

    def interface_view(self, interface_config: InterfaceConfig, package_name: str | None = None) -> InterfaceView:
        namer = self._namer
        interface = interface_config.interface
        generator = ValueGenerator(self._seed)
        methods = tuple(
            self.method_view(interface_config, method_config, generator)
            for method_config in interface_config.method_configs
        )
        return InterfaceView(
            language=namer.language,
            file_name=namer.file_name(interface),
            client_name=namer.api_wrapper_class_name(interface),
            full_name=interface.full_name,
            simple_name=interface.simple_name,
            package_name=package_name,
            description=interface.description,
            methods=methods,
            retry_codes=tuple(
                RetryCodesDefinitionView(name=name, constant_name=namer.retry_codes_constant_name(name), codes=codes)
                for name, codes in interface_config.retry_codes.items()
            ),
            retry_params=tuple(
                RetryParamsDefinitionView(
                    name=name,
                    constant_name=namer.retry_params_constant_name(name),
                    initial_retry_delay_millis=params.initial_retry_delay_millis,
                    retry_delay_multiplier=params.retry_delay_multiplier,
                    max_retry_delay_millis=params.max_retry_delay_millis,
                    initial_rpc_timeout_millis=params.initial_rpc_timeout_millis,
                    rpc_timeout_multiplier=params.rpc_timeout_multiplier,
                    max_rpc_timeout_millis=params.max_rpc_timeout_millis,
                    total_timeout_millis=params.total_timeout_millis,
                )
                for name, params in interface_config.retry_params.items()
            ),
            collections=tuple(
                CollectionView(
                    name_pattern=template,
                    entity_name=entity,
                    format_function_name=namer.method_name(f"format_{entity}_name"),
                    parse_function_name=namer.method_name(f"parse_{entity}_name"),
                )
                for template, entity in interface_config.collections.items()
            ),
            required_constructor_params=interface_config.required_constructor_params,
            smoke_test=self._smoke_test_view(interface_config, generator),
            unit_test=self._unit_tests.unit_test_view(interface_config, generator),
        )

    def method_view(
        self,
        interface_config: InterfaceConfig,
        method_config: MethodConfig,
        value_generator: ValueGenerator | None = None,
    ) -> ApiMethodView:
        namer = self._namer
        method = method_config.method
        generator = value_generator if value_generator is not None else ValueGenerator(self._seed)

        request_object_init_code = None
        if method_config.request_object_method:
            field_set = None
            if not method_config.sample_code_init_fields and method_config.required_fields:
                field_set = method_config.required_fields
            request_object_init_code = self._init_code_view(
                method.input_type,
                method_config.sample_code_init_fields,
                field_set,
                InitCodeOutputType.SINGLE_OBJECT,
                generator,
            )

        return ApiMethodView(
            name=namer.api_method_name(method),
            full_name=method.full_name,
            raw_name=method.raw_name,
            description=method.description,
            request_type_name=namer.type_name(method.input_type),
            response_type_name=namer.type_name(method.output_type),
            has_return_value=method.has_return_value,
            is_idempotent=method.is_idempotent,
            request_streaming=method.request_streaming,
            response_streaming=method.response_streaming,
            retry_codes_name=method_config.retry_codes_name,
            retry_params_name=method_config.retry_params_name,
            timeout_millis=method_config.timeout_millis,
            request_object_method=method_config.request_object_method,
            request_object_init_code=request_object_init_code,
            flattened_methods=tuple(
                self._flattened_method_view(method_config, group, generator) for group in method_config.flattening
            ),
            required_fields=tuple(f.simple_name for f in method_config.required_fields),
            page_streaming=self._page_streaming_view(method, method_config.page_streaming),
            batching=self._batching_view(method, method_config.batching),
            long_running=self._long_running_view(method_config.long_running),
            resource_name_patterns=self._resource_name_patterns(interface_config, method_config),
            resource_name_treatment=method_config.resource_name_treatment,
            samples=self._sample_views(method_config, generator),
        )

    # ------------------------------------------------------------------
    # Method parts
    # ------------------------------------------------------------------

    def _flattened_method_view(
        self, method_config: MethodConfig, group: FlatteningConfig, generator: ValueGenerator
    ) -> FlattenedMethodView:
        namer = self._namer
        parameters = tuple(
            ParameterView(
                name=namer.local_var_name(f.simple_name),
                field_name=f.simple_name,
                type_name=namer.type_name(f.type),
                setter_name=namer.field_setter_name(f),
                is_required=f in method_config.required_fields,
                description=f.description,
            )
            for f in group.fields
        )
        init_code = self._init_code_view(
            method_config.method.input_type,
            method_config.sample_code_init_fields,
            group.fields,
            InitCodeOutputType.FIELD_LIST,
            generator,
        )
        return FlattenedMethodView(
            name=namer.api_method_name(method_config.method), parameters=parameters, init_code=init_code
        )

    def _page_streaming_view(
        self, method: MethodModel, page_streaming: PageStreamingConfig | None
    ) -> PageStreamingDescriptorView | None:
        if page_streaming is None:
            return None
        namer = self._namer
        token = page_streaming.request_token_field
        page_size = page_streaming.page_size_field
        return PageStreamingDescriptorView(
            method_name=namer.api_method_name(method),
            descriptor_name=namer.page_streaming_descriptor_name(method),
            paged_response_type_name=namer.paged_response_type_name(method),
            resource_type_name=namer.type_name(page_streaming.resources_element_type),
            request_token_setter=namer.field_setter_name(token) if token is not None else None,
            request_page_size_setter=namer.field_setter_name(page_size) if page_size is not None else None,
            response_token_getter=namer.field_getter_name(page_streaming.response_token_field),
            resources_field_getter=namer.field_getter_name(page_streaming.resources_field),
            resources_field_is_map=page_streaming.resources_field.type.is_map,
        )

    def _batching_view(self, method: MethodModel, batching: BatchingConfig | None) -> BatchingDescriptorView | None:
        if batching is None:
            return None
        namer = self._namer
        subresponse = batching.subresponse_field
        return BatchingDescriptorView(
            method_name=namer.api_method_name(method),
            descriptor_name=namer.batching_descriptor_name(method),
            batched_field_getter=namer.field_getter_name(batching.batched_field),
            batched_field_setter=namer.field_setter_name(batching.batched_field),
            batched_field_count_getter=namer.field_count_getter_name(batching.batched_field),
            discriminator_field_getters=tuple(
                tuple(namer.field_getter_name(f) for f in selector.fields) for selector in batching.discriminator_fields
            ),
            subresponse_field_getter=namer.field_getter_name(subresponse) if subresponse is not None else None,
            subresponse_field_setter=namer.field_setter_name(subresponse) if subresponse is not None else None,
            config=BatchingConfigView(
                element_count_threshold=batching.element_count_threshold,
                request_byte_threshold=batching.request_byte_threshold,
                delay_threshold_millis=batching.delay_threshold_millis,
                element_count_limit=batching.element_count_limit,
                request_byte_limit=batching.request_byte_limit,
                flow_control_element_limit=batching.flow_control_element_limit,
                flow_control_byte_limit=batching.flow_control_byte_limit,
                flow_control_limit_exceeded_behavior=batching.flow_control_limit_exceeded_behavior,
            ),
        )

    def _long_running_view(self, long_running: LongRunningConfig | None) -> LongRunningView | None:
        if long_running is None:
            return None
        return LongRunningView(
            return_type_name=self._namer.type_name(long_running.return_type),
            metadata_type_name=self._namer.type_name(long_running.metadata_type),
            implements_get_operation=long_running.implements_get_operation,
            initial_poll_delay_millis=long_running.initial_poll_delay_millis,
            poll_delay_multiplier=long_running.poll_delay_multiplier,
            max_poll_delay_millis=long_running.max_poll_delay_millis,
            total_poll_timeout_millis=long_running.total_poll_timeout_millis,
        )

    def _resource_name_patterns(
        self, interface_config: InterfaceConfig, method_config: MethodConfig
    ) -> tuple[ResourceNamePatternView, ...]:
        templates = {entity: template for template, entity in interface_config.collections.items()}
        return tuple(
            ResourceNamePatternView(
                field_path=field_path,
                entity_name=entity,
                name_pattern=templates.get(entity),
                format_function_name=self._namer.method_name(f"format_{entity}_name"),
            )
            for field_path, entity in method_config.field_name_patterns.items()
        )

    def _sample_views(self, method_config: MethodConfig, generator: ValueGenerator) -> tuple[SampleView, ...]:
        samples = []
        for value_set in method_config.sample_value_sets:
            init_code = self._init_code_view(
                method_config.method.input_type,
                tuple(value_set.parameters.defaults),
                None,
                InitCodeOutputType.SINGLE_OBJECT,
                generator,
            )
            specs = value_set.on_success if value_set.on_success is not None else default_output_specs(method_config)
            outputs = OutputTransformer(method_config, self._namer, value_set.id).to_views(list(specs))
            samples.append(
                SampleView(
                    id=value_set.id,
                    title=value_set.title,
                    description=value_set.description,
                    init_code=init_code,
                    outputs=outputs,
                )
            )
        return tuple(samples)

    # ------------------------------------------------------------------
    # Interface parts
    # ------------------------------------------------------------------

    def _smoke_test_view(self, interface_config: InterfaceConfig, generator: ValueGenerator) -> SmokeTestView | None:
        smoke_test = interface_config.smoke_test
        if smoke_test is None:
            return None
        method = smoke_test.method
        method_config = interface_config.method_config(method.simple_name)
        flattened = method_config is not None and method_config.is_flattening

        if flattened:
            field_set = []
            for name in smoke_test.init_field_names:
                found = method.input_field(name)
                if found is None:
                    raise InitCodeError(f"Message type {method.input_type.full_name} does not have field {name}")
                field_set.append(found)
            init_code = self._init_code_view(
                method.input_type, smoke_test.init_fields, tuple(field_set), InitCodeOutputType.FIELD_LIST, generator
            )
        else:
            init_code = self._init_code_view(
                method.input_type, smoke_test.init_fields, None, InitCodeOutputType.SINGLE_OBJECT, generator
            )
        return SmokeTestView(
            class_name=self._namer.smoke_test_class_name(interface_config.interface),
            method_name=self._namer.api_method_name(method),
            flattened=flattened,
            init_code=init_code,
        )

    def _init_code_view(
        self,
        root_type: TypeModel,
        init_fields: tuple[str, ...],
        field_set: tuple[FieldModel, ...] | None,
        output_type: InitCodeOutputType,
        generator: ValueGenerator,
    ) -> InitCodeView:
        context = InitCodeContext(
            root_type=root_type,
            init_fields=tuple(init_fields),
            init_field_set=field_set,
            output_type=output_type,
            value_generator=generator,
        )
        return self._init_code.generate_init_code_view(context)
