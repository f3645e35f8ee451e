# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation of a starter configuration document from an API model.

The document records what the heuristics in :mod:`gapicgen.policy.engine`
decided for every method, so that it can be reviewed and edited by hand
before code generation.
"""

from __future__ import annotations

from gapicgen.config.diagnostics import DiagCollector
from gapicgen.config.language_settings import FormatterRegistry, default_formatter_registry, merge_language_settings
from gapicgen.config.resolved import ResourceNameTreatment
from gapicgen.config.resolver import DEFAULT_RETRY_CODES, DEFAULT_RETRY_PARAMS
from gapicgen.config.schema import (
    CollectionConfigProto,
    ConfigProto,
    FlatteningConfigProto,
    FlatteningGroupProto,
    InterfaceConfigProto,
    MethodConfigProto,
    PageStreamingConfigProto,
    PageStreamingRequestProto,
    PageStreamingResponseProto,
    RetryCodesDefinitionProto,
    RetryParamsDefinitionProto,
)
from gapicgen.model.api import ApiModel, InterfaceModel
from gapicgen.policy.engine import MethodPolicy, MethodPolicyEngine, entity_name_for_template

# ###############
# Public Interface
# ###############


def generate_config(
    model: ApiModel,
    *,
    engine: MethodPolicyEngine | None = None,
    registry: FormatterRegistry | None = None,
    diagnostics: DiagCollector | None = None,
) -> ConfigProto:
    """Build a configuration document for every reachable interface of *model*.

    Args:
        model: The API model.
        engine: Heuristics to apply. Defaults to a stock engine.
        registry: Package formatters for ``language_settings``. Defaults to
            :func:`~gapicgen.config.language_settings.default_formatter_registry`.
        diagnostics: Collector for heuristic warnings and the missing
            interface error. A private collector is used when omitted.

    Returns:
        The generated configuration document.
    """
    engine = engine or MethodPolicyEngine()
    registry = registry or default_formatter_registry()
    diag = diagnostics if diagnostics is not None else DiagCollector()

    language_settings = merge_language_settings(model, registry, diag) or {}
    interfaces = [_interface_config(i, engine, diag) for i in model.interfaces if i.is_reachable]
    return ConfigProto(language_settings=language_settings, interfaces=interfaces)


# ################
# Implementation
# ################


def _interface_config(
    interface: InterfaceModel, engine: MethodPolicyEngine, diag: DiagCollector
) -> InterfaceConfigProto:
    collections: dict[str, str] = {}
    for method in interface.methods:
        for template in method.resource_patterns().values():
            collections.setdefault(template, entity_name_for_template(template))

    methods: list[MethodConfigProto] = []
    for method in interface.methods:
        policy = engine.evaluate(method, collections)
        for warning in policy.warnings:
            diag.warning(warning.method, warning.message)
        methods.append(_method_config(policy))

    return InterfaceConfigProto(
        name=interface.full_name,
        collections=[
            CollectionConfigProto(name_pattern=template, entity_name=entity) for template, entity in collections.items()
        ],
        retry_codes_def=[
            RetryCodesDefinitionProto(name=name, retry_codes=list(codes)) for name, codes in DEFAULT_RETRY_CODES.items()
        ],
        retry_params_def=[
            RetryParamsDefinitionProto(
                name=DEFAULT_RETRY_PARAMS.name,
                initial_retry_delay_millis=DEFAULT_RETRY_PARAMS.initial_retry_delay_millis,
                retry_delay_multiplier=DEFAULT_RETRY_PARAMS.retry_delay_multiplier,
                max_retry_delay_millis=DEFAULT_RETRY_PARAMS.max_retry_delay_millis,
                initial_rpc_timeout_millis=DEFAULT_RETRY_PARAMS.initial_rpc_timeout_millis,
                rpc_timeout_multiplier=DEFAULT_RETRY_PARAMS.rpc_timeout_multiplier,
                max_rpc_timeout_millis=DEFAULT_RETRY_PARAMS.max_rpc_timeout_millis,
                total_timeout_millis=DEFAULT_RETRY_PARAMS.total_timeout_millis,
            )
        ],
        methods=methods,
    )


def _method_config(policy: MethodPolicy) -> MethodConfigProto:
    flattening = None
    if policy.flattening:
        flattening = FlatteningConfigProto(
            groups=[FlatteningGroupProto(parameters=list(group.parameters)) for group in policy.flattening]
        )

    page_streaming = None
    if policy.page_streaming is not None:
        paging = policy.page_streaming
        page_streaming = PageStreamingConfigProto(
            request=PageStreamingRequestProto(
                token_field=paging.token_field_name,
                page_size_field=paging.page_size_field_name,
            ),
            response=PageStreamingResponseProto(
                token_field=paging.response_token_field.simple_name,
                resources_field=paging.resources_field_name,
            ),
        )

    treatment = None
    if policy.resource_name_treatment != ResourceNameTreatment.NONE:
        treatment = policy.resource_name_treatment

    return MethodConfigProto(
        name=policy.method.simple_name,
        flattening=flattening,
        required_fields=[f.simple_name for f in policy.required_fields],
        request_object_method=policy.request_object_method,
        page_streaming=page_streaming,
        retry_codes_name=policy.retry.retry_codes_name,
        retry_params_name=policy.retry.retry_params_name,
        field_name_patterns=dict(policy.field_name_patterns),
        timeout_millis=policy.timeout_millis,
        resource_name_treatment=treatment,
    )
