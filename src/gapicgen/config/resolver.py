# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of a configuration document against an API model.

Every name in the configuration (interfaces, methods, fields, types, retry
definitions, collections) is bound to the model. Reference errors do not
stop resolution: they are collected so that a single run reports every
problem, and the resolved configuration is only returned when none was
found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gapicgen.config.diagnostics import DiagCollector, Diagnostic, Severity
from gapicgen.config.resolved import (
    DEFAULT_TIMEOUT_MILLIS,
    RETRY_CODES_IDEMPOTENT_NAME,
    RETRY_CODES_NON_IDEMPOTENT_NAME,
    RETRY_PARAMS_DEFAULT_NAME,
    ApiConfig,
    BatchingConfig,
    FieldSelector,
    FieldSelectorError,
    FlatteningConfig,
    InterfaceConfig,
    LongRunningConfig,
    MethodConfig,
    PageStreamingConfig,
    ResourceNameTreatment,
    RetryParamsDefinition,
    SmokeTestConfig,
)
from gapicgen.config.schema import (
    BatchingConfigProto,
    ConfigProto,
    FlatteningGroupProto,
    InterfaceConfigProto,
    MethodConfigProto,
    PageStreamingConfigProto,
)
from gapicgen.model.api import ApiModel, FieldModel, InterfaceModel, MethodModel

if TYPE_CHECKING:
    from gapicgen.policy.engine import MethodPolicyEngine, PolicyWarning

# ###############
# Public Interface
# ###############

STATUS_CODES: frozenset[str] = frozenset(
    {
        "OK",
        "CANCELLED",
        "UNKNOWN",
        "INVALID_ARGUMENT",
        "DEADLINE_EXCEEDED",
        "NOT_FOUND",
        "ALREADY_EXISTS",
        "PERMISSION_DENIED",
        "RESOURCE_EXHAUSTED",
        "FAILED_PRECONDITION",
        "ABORTED",
        "OUT_OF_RANGE",
        "UNIMPLEMENTED",
        "INTERNAL",
        "UNAVAILABLE",
        "DATA_LOSS",
        "UNAUTHENTICATED",
    }
)

DEFAULT_RETRY_CODES: dict[str, tuple[str, ...]] = {
    RETRY_CODES_IDEMPOTENT_NAME: ("DEADLINE_EXCEEDED", "UNAVAILABLE"),
    RETRY_CODES_NON_IDEMPOTENT_NAME: (),
}

DEFAULT_RETRY_PARAMS = RetryParamsDefinition(
    name=RETRY_PARAMS_DEFAULT_NAME,
    initial_retry_delay_millis=100,
    retry_delay_multiplier=1.3,
    max_retry_delay_millis=60000,
    initial_rpc_timeout_millis=20000,
    rpc_timeout_multiplier=1.0,
    max_rpc_timeout_millis=20000,
    total_timeout_millis=600000,
)


class ConfigResolutionError(Exception):
    """Raised by :func:`resolve_or_raise` when resolution produced errors.

    Attributes:
        diagnostics: Every diagnostic collected during resolution.
    """

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        errors = [d for d in diagnostics if d.severity is Severity.ERROR]
        super().__init__("\n".join(str(d) for d in errors))
        self.diagnostics = diagnostics


@dataclass
class ResolutionResult:
    """Outcome of :func:`resolve`.

    Attributes:
        config: The resolved configuration, or None if any error was found.
        diagnostics: All errors and warnings, in the order they were found.
    """

    config: ApiConfig | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        """Return True if any error was found."""
        return len(self.errors) > 0


def resolve(
    model: ApiModel,
    config_proto: ConfigProto,
    *,
    engine: MethodPolicyEngine | None = None,
) -> ResolutionResult:
    """Resolve *config_proto* against *model*.

    Interfaces and methods that the configuration names but the model lacks
    are reported and skipped; resolution continues with the rest. Methods are
    resolved in the order the interface declares them. When *engine* is
    given, methods absent from the configuration are included as well and
    any unset page streaming, flattening, required fields, request object
    decision, retry names and field name patterns are taken from its
    heuristics.

    Args:
        model: The API model.
        config_proto: The validated configuration document.
        engine: Optional heuristics used to fill unset settings.

    Returns:
        A :class:`ResolutionResult` whose ``config`` is None if any error was
        collected.

    Raises:
        FieldSelectorError: If a batching section names a field that does
            not exist. Such a configuration is malformed rather than stale.
    """
    return _ConfigResolver(model, config_proto, engine).resolve()


def resolve_or_raise(
    model: ApiModel,
    config_proto: ConfigProto,
    *,
    engine: MethodPolicyEngine | None = None,
) -> ApiConfig:
    """Like :func:`resolve`, but raise :class:`ConfigResolutionError` on errors."""
    result = resolve(model, config_proto, engine=engine)
    if result.config is None:
        raise ConfigResolutionError(result.diagnostics)
    return result.config


# ################
# Implementation
# ################


class _ConfigResolver:
    """Stateful helper that resolves one configuration document."""

    def __init__(self, model: ApiModel, config_proto: ConfigProto, engine: MethodPolicyEngine | None) -> None:
        self.model = model
        self.config_proto = config_proto
        self.engine = engine
        self.diag = DiagCollector()

    def resolve(self) -> ResolutionResult:
        interface_configs: dict[str, InterfaceConfig] = {}
        for interface_proto in self.config_proto.interfaces:
            name = interface_proto.name
            if name in interface_configs:
                self.diag.error(name, f"duplicate interface configuration: {name}")
                continue
            interface = self.model.lookup_interface(name)
            if interface is None or not interface.is_reachable:
                self.diag.error("toplevel", f"interface not found: {name}")
                continue
            interface_config = self._interface_config(interface, interface_proto)
            if interface_config is not None:
                interface_configs[name] = interface_config

        package_name = None
        language = self.config_proto.language
        if language and language in self.config_proto.language_settings:
            package_name = self.config_proto.language_settings[language].package_name

        if self.diag.has_errors:
            return ResolutionResult(config=None, diagnostics=list(self.diag.diagnostics))
        config = ApiConfig(interface_configs=interface_configs, package_name=package_name, language=language)
        return ResolutionResult(config=config, diagnostics=list(self.diag.diagnostics))

    # ------------------------------------------------------------------
    # Interfaces
    # ------------------------------------------------------------------

    def _interface_config(
        self, interface: InterfaceModel, interface_proto: InterfaceConfigProto
    ) -> InterfaceConfig | None:
        errors_before = self.diag.error_count
        location = interface.full_name

        retry_codes = self._retry_codes(location, interface_proto)
        retry_params = self._retry_params(location, interface_proto)
        collections = {c.name_pattern: c.entity_name for c in interface_proto.collections}

        method_protos: dict[str, MethodConfigProto] = {}
        for method_proto in interface_proto.methods:
            if method_proto.name in method_protos:
                self.diag.error(location, f"duplicate method configuration: {method_proto.name}")
                continue
            if interface.get_method(method_proto.name) is None:
                self.diag.error(location, f"method not found: {location}.{method_proto.name}")
                continue
            method_protos[method_proto.name] = method_proto

        method_configs: list[MethodConfig] = []
        for method in interface.methods:
            method_proto = method_protos.get(method.simple_name)
            if method_proto is None and self.engine is None:
                continue
            if method_proto is None:
                method_proto = MethodConfigProto(name=method.simple_name)
            method_config = self._method_config(method, method_proto, retry_codes, retry_params, collections)
            if method_config is not None:
                method_configs.append(method_config)

        smoke_test = None
        if interface_proto.smoke_test is not None:
            smoke_method = interface.get_method(interface_proto.smoke_test.method)
            if smoke_method is None:
                self.diag.error("toplevel", "The configured smoke test method does not exist.")
            else:
                smoke_test = SmokeTestConfig(smoke_method, tuple(interface_proto.smoke_test.init_fields))

        if self.diag.error_count > errors_before:
            return None
        return InterfaceConfig(
            interface=interface,
            method_configs=tuple(method_configs),
            retry_codes=retry_codes,
            retry_params=retry_params,
            required_constructor_params=tuple(interface_proto.required_constructor_params),
            smoke_test=smoke_test,
            collections=collections,
        )

    def _retry_codes(self, location: str, interface_proto: InterfaceConfigProto) -> dict[str, tuple[str, ...]]:
        if not interface_proto.retry_codes_def:
            return dict(DEFAULT_RETRY_CODES)
        retry_codes: dict[str, tuple[str, ...]] = {}
        for definition in interface_proto.retry_codes_def:
            if definition.name in retry_codes:
                self.diag.error(location, f"duplicate retry codes definition: {definition.name}")
                continue
            for code in definition.retry_codes:
                if code not in STATUS_CODES:
                    self.diag.error(
                        location, f"unknown status code '{code}' in retry codes definition '{definition.name}'"
                    )
            retry_codes[definition.name] = tuple(definition.retry_codes)
        return retry_codes

    def _retry_params(self, location: str, interface_proto: InterfaceConfigProto) -> dict[str, RetryParamsDefinition]:
        if not interface_proto.retry_params_def:
            return {DEFAULT_RETRY_PARAMS.name: DEFAULT_RETRY_PARAMS}
        retry_params: dict[str, RetryParamsDefinition] = {}
        for definition in interface_proto.retry_params_def:
            if definition.name in retry_params:
                self.diag.error(location, f"duplicate retry params definition: {definition.name}")
                continue
            retry_params[definition.name] = RetryParamsDefinition(**definition.model_dump())
        return retry_params

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def _method_config(
        self,
        method: MethodModel,
        proto: MethodConfigProto,
        retry_codes: dict[str, tuple[str, ...]],
        retry_params: dict[str, RetryParamsDefinition],
        collections: dict[str, str],
    ) -> MethodConfig | None:
        errors_before = self.diag.error_count
        location = method.full_name
        policy = None
        if self.engine is not None:
            policy = self.engine.evaluate(method, collections)
            self._record_warnings(policy.warnings)

        if proto.page_streaming is not None:
            page_streaming = self._page_streaming(method, proto.page_streaming)
        else:
            page_streaming = policy.page_streaming if policy else None

        if proto.flattening is not None:
            flattening = self._flattening(method, proto.flattening.groups)
        else:
            flattening = policy.flattening if policy else ()

        if proto.required_fields:
            required_fields = self._input_fields(method, proto.required_fields, "required field")
        else:
            required_fields = policy.required_fields if policy else ()
        optional_fields = tuple(f for f in method.input_fields if f not in required_fields)

        if proto.request_object_method is not None:
            request_object_method = proto.request_object_method
        else:
            request_object_method = policy.request_object_method if policy else True

        retry_codes_name = proto.retry_codes_name or (
            policy.retry.retry_codes_name
            if policy
            else (RETRY_CODES_IDEMPOTENT_NAME if method.is_idempotent else RETRY_CODES_NON_IDEMPOTENT_NAME)
        )
        if retry_codes_name not in retry_codes:
            self.diag.error(location, f"retry codes definition not found: {retry_codes_name}")
        retry_params_name = proto.retry_params_name or (
            policy.retry.retry_params_name if policy else RETRY_PARAMS_DEFAULT_NAME
        )
        if retry_params_name not in retry_params:
            self.diag.error(location, f"retry params definition not found: {retry_params_name}")

        if proto.field_name_patterns:
            field_name_patterns = self._field_name_patterns(method, proto.field_name_patterns, collections)
        else:
            field_name_patterns = dict(policy.field_name_patterns) if policy else {}

        batching = self._batching(method, proto.batching) if proto.batching is not None else None
        long_running = self._long_running(method, proto)

        if proto.resource_name_treatment is not None:
            treatment = proto.resource_name_treatment
            if treatment not in ResourceNameTreatment.ALL:
                self.diag.error(location, f"unknown resource name treatment: {treatment}")
        else:
            treatment = policy.resource_name_treatment if policy else ResourceNameTreatment.NONE

        if self.diag.error_count > errors_before:
            return None
        return MethodConfig(
            method=method,
            page_streaming=page_streaming,
            batching=batching,
            flattening=flattening,
            required_fields=tuple(required_fields),
            optional_fields=optional_fields,
            request_object_method=request_object_method,
            retry_codes_name=retry_codes_name,
            retry_params_name=retry_params_name,
            field_name_patterns=field_name_patterns,
            long_running=long_running,
            timeout_millis=proto.timeout_millis or DEFAULT_TIMEOUT_MILLIS,
            sample_code_init_fields=tuple(proto.sample_code_init_fields),
            sample_value_sets=tuple(proto.sample_value_sets),
            resource_name_treatment=treatment,
        )

    def _record_warnings(self, warnings: tuple[PolicyWarning, ...]) -> None:
        for warning in warnings:
            self.diag.warning(warning.method, warning.message)

    def _page_streaming(self, method: MethodModel, proto: PageStreamingConfigProto) -> PageStreamingConfig | None:
        location = method.full_name
        errors_before = self.diag.error_count

        token_field = None
        if proto.request.token_field:
            token_field = self._lookup(method, proto.request.token_field, output=False)
        page_size_field = None
        if proto.request.page_size_field:
            page_size_field = self._lookup(method, proto.request.page_size_field, output=False)
        response_token = self._lookup(method, proto.response.token_field, output=True)
        resources = self._lookup(method, proto.response.resources_field, output=True)
        if resources is not None and not resources.is_repeated:
            self.diag.error(location, f"page streaming resources field '{resources.simple_name}' is not repeated")

        if self.diag.error_count > errors_before or response_token is None or resources is None:
            return None
        return PageStreamingConfig(
            request_token_field=token_field,
            page_size_field=page_size_field,
            response_token_field=response_token,
            resources_field=resources,
        )

    def _flattening(
        self, method: MethodModel, group_protos: list[FlatteningGroupProto]
    ) -> tuple[FlatteningConfig, ...]:
        groups: list[FlatteningConfig] = []
        for group in group_protos:
            fields = self._input_fields(method, group.parameters, "flattening parameter")
            if len(fields) == len(group.parameters):
                groups.append(FlatteningConfig(tuple(fields)))
        return tuple(groups)

    def _input_fields(self, method: MethodModel, names: list[str], what: str) -> tuple[FieldModel, ...]:
        fields: list[FieldModel] = []
        for name in names:
            found = method.input_field(name)
            if found is None:
                self.diag.error(
                    method.full_name, f"{what} '{name}' not found in request type {method.input_type.full_name}"
                )
            else:
                fields.append(found)
        return tuple(fields)

    def _lookup(self, method: MethodModel, name: str, *, output: bool) -> FieldModel | None:
        message_type = method.output_type if output else method.input_type
        found = message_type.get_field(name)
        if found is None:
            self.diag.error(method.full_name, f"type {message_type.full_name} does not have field {name}")
        return found

    def _field_name_patterns(
        self, method: MethodModel, patterns: dict[str, str], collections: dict[str, str]
    ) -> dict[str, str]:
        entity_names = set(collections.values())
        resolved: dict[str, str] = {}
        for field_path, entity_name in patterns.items():
            try:
                FieldSelector.resolve(method.input_type, field_path)
            except FieldSelectorError as exc:
                self.diag.error(method.full_name, str(exc))
                continue
            if entity_name not in entity_names:
                self.diag.error(method.full_name, f"entity name '{entity_name}' is not a declared collection")
                continue
            resolved[field_path] = entity_name
        return resolved

    def _batching(self, method: MethodModel, proto: BatchingConfigProto) -> BatchingConfig:
        descriptor = proto.batch_descriptor
        batched_field = FieldSelector.resolve(method.input_type, descriptor.batched_field).last_field
        discriminators = tuple(
            FieldSelector.resolve(method.input_type, path) for path in descriptor.discriminator_fields
        )
        subresponse_field = None
        if descriptor.subresponse_field:
            subresponse_field = FieldSelector.resolve(method.output_type, descriptor.subresponse_field).last_field
        settings = proto.thresholds
        return BatchingConfig(
            batched_field=batched_field,
            discriminator_fields=discriminators,
            subresponse_field=subresponse_field,
            element_count_threshold=settings.element_count_threshold,
            request_byte_threshold=settings.request_byte_threshold,
            delay_threshold_millis=settings.delay_threshold_millis,
            element_count_limit=settings.element_count_limit,
            request_byte_limit=settings.request_byte_limit,
            flow_control_element_limit=settings.flow_control_element_limit,
            flow_control_byte_limit=settings.flow_control_byte_limit,
            flow_control_limit_exceeded_behavior=settings.flow_control_limit_exceeded_behavior,
        )

    def _long_running(self, method: MethodModel, proto: MethodConfigProto) -> LongRunningConfig | None:
        if proto.long_running is None:
            return None
        lro = proto.long_running
        return_type = self.model.lookup_type(lro.return_type)
        if return_type is None:
            self.diag.error(method.full_name, f"long running return type not found: {lro.return_type}")
        metadata_type = self.model.lookup_type(lro.metadata_type)
        if metadata_type is None:
            self.diag.error(method.full_name, f"long running metadata type not found: {lro.metadata_type}")
        if return_type is None or metadata_type is None:
            return None
        return LongRunningConfig(
            return_type=return_type,
            metadata_type=metadata_type,
            implements_get_operation=lro.implements_get_operation,
            initial_poll_delay_millis=lro.initial_poll_delay_millis,
            poll_delay_multiplier=lro.poll_delay_multiplier,
            max_poll_delay_millis=lro.max_poll_delay_millis,
            total_poll_timeout_millis=lro.total_poll_timeout_millis,
        )
