# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation configuration: the on-disk document, its loader and its resolution."""

from gapicgen.config.diagnostics import DiagCollector, Diagnostic, Severity
from gapicgen.config.language_settings import (
    FormatterRegistry,
    FormatterRegistryError,
    GoLanguageFormatter,
    LanguageFormatter,
    NodeJSLanguageFormatter,
    PythonLanguageFormatter,
    RewriteRule,
    SimpleLanguageFormatter,
    default_formatter_registry,
    merge_language_settings,
)
from gapicgen.config.loader import ConfigLoadError, dump_config, load_config, parse_config, save_config
from gapicgen.config.resolved import (
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
from gapicgen.config.resolver import ConfigResolutionError, ResolutionResult, resolve, resolve_or_raise
from gapicgen.config.schema import ConfigProto, InterfaceConfigProto, MethodConfigProto

__all__ = [
    "ApiConfig",
    "BatchingConfig",
    "ConfigLoadError",
    "ConfigProto",
    "ConfigResolutionError",
    "DiagCollector",
    "Diagnostic",
    "FieldSelector",
    "FieldSelectorError",
    "FlatteningConfig",
    "FormatterRegistry",
    "FormatterRegistryError",
    "GoLanguageFormatter",
    "InterfaceConfig",
    "InterfaceConfigProto",
    "LanguageFormatter",
    "LongRunningConfig",
    "MethodConfig",
    "MethodConfigProto",
    "NodeJSLanguageFormatter",
    "PageStreamingConfig",
    "PythonLanguageFormatter",
    "ResolutionResult",
    "ResourceNameTreatment",
    "RetryParamsDefinition",
    "RewriteRule",
    "Severity",
    "SimpleLanguageFormatter",
    "SmokeTestConfig",
    "default_formatter_registry",
    "dump_config",
    "load_config",
    "merge_language_settings",
    "parse_config",
    "resolve",
    "resolve_or_raise",
    "save_config",
]
