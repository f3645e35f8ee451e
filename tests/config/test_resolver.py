# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resolving configuration documents against an API model."""

from typing import Any

import pytest

from gapicgen.config.resolved import FieldSelector, FieldSelectorError, ResourceNameTreatment
from gapicgen.config.resolver import (
    DEFAULT_RETRY_PARAMS,
    ConfigResolutionError,
    ResolutionResult,
    resolve,
    resolve_or_raise,
)
from gapicgen.config.schema import ConfigProto
from gapicgen.model.api import ApiModel
from gapicgen.policy.engine import MethodPolicyEngine

# ###############
# Test Helpers
# ###############

SERVICE = "google.example.library.v1.LibraryService"
PKG = "google.example.library.v1"


def _config(*methods: dict[str, Any], **interface: Any) -> ConfigProto:
    return ConfigProto.model_validate(
        {"interfaces": [{"name": SERVICE, "methods": list(methods), **interface}]},
    )


def _errors(result: ResolutionResult) -> list[str]:
    return [str(d) for d in result.errors]


def _assert_error(result: ResolutionResult, fragment: str) -> None:
    messages = _errors(result)
    assert any(fragment in m for m in messages), f"Expected error containing {fragment!r}, got: {messages}"
    assert result.config is None


# ###############
# Interfaces
# ###############


class TestInterfaceResolution:
    def test_minimal_config(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook"}))
        assert result.diagnostics == []
        assert result.config is not None
        interface_config = result.config.interface_config(SERVICE)
        assert interface_config is not None
        assert [m.method.simple_name for m in interface_config.method_configs] == ["GetBook"]

    def test_default_retry_definitions(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "GetBook"}))
        interface_config = config.interface_configs[SERVICE]
        assert interface_config.retry_codes == {
            "idempotent": ("DEADLINE_EXCEEDED", "UNAVAILABLE"),
            "non_idempotent": (),
        }
        assert interface_config.retry_params == {"default": DEFAULT_RETRY_PARAMS}

    def test_method_defaults(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "GetBook"}))
        method_config = config.interface_configs[SERVICE].method_configs[0]
        assert method_config.request_object_method
        assert method_config.retry_codes_name == "idempotent"
        assert method_config.retry_params_name == "default"
        assert method_config.timeout_millis == 60000
        assert not method_config.is_flattening
        assert not method_config.is_page_streaming

    def test_non_idempotent_method_defaults_to_non_idempotent_codes(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "CreateShelf"}))
        method_config = config.interface_configs[SERVICE].method_configs[0]
        assert not method_config.method.is_idempotent
        assert method_config.retry_codes_name == "non_idempotent"

    def test_resolved_mappings_are_read_only(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "GetBook"}))
        interface_config = config.interface_configs[SERVICE]
        method_config = interface_config.method_configs[0]
        with pytest.raises(TypeError):
            config.interface_configs["other"] = interface_config  # type: ignore[index]
        with pytest.raises(TypeError):
            interface_config.retry_codes["custom"] = ()  # type: ignore[index]
        with pytest.raises(TypeError):
            interface_config.collections["shelves/*"] = "shelf"  # type: ignore[index]
        with pytest.raises(TypeError):
            method_config.field_name_patterns["name"] = "book"  # type: ignore[index]

    def test_unknown_interface(self, library_model: ApiModel) -> None:
        config = ConfigProto.model_validate({"interfaces": [{"name": "google.example.Missing"}]})
        result = resolve(library_model, config)
        assert _errors(result) == ["toplevel: interface not found: google.example.Missing"]
        assert result.config is None

    def test_unreachable_interface_is_not_found(self, library_model: ApiModel) -> None:
        config = ConfigProto.model_validate({"interfaces": [{"name": f"{PKG}.HiddenService"}]})
        _assert_error(resolve(library_model, config), "interface not found")

    def test_duplicate_interface(self, library_model: ApiModel) -> None:
        config = ConfigProto.model_validate({"interfaces": [{"name": SERVICE}, {"name": SERVICE}]})
        _assert_error(resolve(library_model, config), "duplicate interface configuration")

    def test_package_name_from_language_settings(self, library_model: ApiModel) -> None:
        config = ConfigProto.model_validate(
            {
                "language": "java",
                "language_settings": {"java": {"package_name": "com.example.library"}},
                "interfaces": [{"name": SERVICE}],
            }
        )
        resolved = resolve_or_raise(library_model, config)
        assert resolved.package_name == "com.example.library"
        assert resolved.language == "java"

    def test_collections(self, library_model: ApiModel) -> None:
        config = _config(collections=[{"name_pattern": "shelves/*", "entity_name": "shelf"}])
        resolved = resolve_or_raise(library_model, config)
        assert resolved.interface_configs[SERVICE].collections == {"shelves/*": "shelf"}

    def test_all_errors_are_reported(self, library_model: ApiModel) -> None:
        """Resolution continues after an error so that every problem is reported."""
        config = ConfigProto.model_validate(
            {
                "interfaces": [
                    {"name": "google.example.Missing"},
                    {"name": SERVICE, "methods": [{"name": "Nope"}, {"name": "GetBook", "retry_codes_name": "x"}]},
                ]
            }
        )
        assert len(resolve(library_model, config).errors) == 3

    def test_resolve_is_deterministic(self, library_model: ApiModel) -> None:
        config = _config({"name": "GetBook"}, {"name": "ListBooks"})
        engine = MethodPolicyEngine()
        assert resolve(library_model, config, engine=engine) == resolve(library_model, config, engine=engine)

    def test_resolve_or_raise(self, library_model: ApiModel) -> None:
        with pytest.raises(ConfigResolutionError, match="method not found") as exc_info:
            resolve_or_raise(library_model, _config({"name": "Nope"}))
        assert len(exc_info.value.diagnostics) == 1


# ###############
# Methods
# ###############


class TestMethodResolution:
    def test_unknown_method(self, library_model: ApiModel) -> None:
        _assert_error(resolve(library_model, _config({"name": "Nope"})), f"method not found: {SERVICE}.Nope")

    def test_duplicate_method(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook"}, {"name": "GetBook"}))
        _assert_error(result, "duplicate method configuration: GetBook")

    def test_methods_follow_interface_order(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "DeleteBook"}, {"name": "GetBook"}))
        names = [m.method.simple_name for m in config.interface_configs[SERVICE].method_configs]
        assert names == ["GetBook", "DeleteBook"]

    def test_unknown_status_code(self, library_model: ApiModel) -> None:
        config = _config(retry_codes_def=[{"name": "custom", "retry_codes": ["UNAVAILABLE", "SOMETIMES"]}])
        _assert_error(
            resolve(library_model, config),
            "unknown status code 'SOMETIMES' in retry codes definition 'custom'",
        )

    def test_missing_retry_codes_definition(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook", "retry_codes_name": "custom"}))
        _assert_error(result, "retry codes definition not found: custom")

    def test_missing_retry_params_definition(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook", "retry_params_name": "slow"}))
        _assert_error(result, "retry params definition not found: slow")

    def test_custom_retry_definitions(self, library_model: ApiModel) -> None:
        config = _config(
            {"name": "GetBook", "retry_codes_name": "custom", "retry_params_name": "slow"},
            retry_codes_def=[{"name": "custom", "retry_codes": ["UNAVAILABLE"]}],
            retry_params_def=[
                {
                    "name": "slow",
                    "initial_retry_delay_millis": 1000,
                    "retry_delay_multiplier": 2.0,
                    "max_retry_delay_millis": 10000,
                    "initial_rpc_timeout_millis": 5000,
                    "rpc_timeout_multiplier": 1.0,
                    "max_rpc_timeout_millis": 5000,
                    "total_timeout_millis": 60000,
                }
            ],
        )
        interface_config = resolve_or_raise(library_model, config).interface_configs[SERVICE]
        assert interface_config.retry_codes == {"custom": ("UNAVAILABLE",)}
        assert interface_config.retry_params["slow"].retry_delay_multiplier == 2.0

    def test_flattening_and_required_fields(self, library_model: ApiModel) -> None:
        config = _config(
            {"name": "GetBook", "flattening": {"groups": [{"parameters": ["name"]}]}, "required_fields": ["name"]}
        )
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        assert [group.parameters for group in method_config.flattening] == [("name",)]
        assert [f.simple_name for f in method_config.required_fields] == ["name"]
        assert method_config.optional_fields == ()

    def test_unknown_flattening_parameter(self, library_model: ApiModel) -> None:
        config = _config({"name": "GetBook", "flattening": {"groups": [{"parameters": ["nope"]}]}})
        _assert_error(
            resolve(library_model, config),
            f"flattening parameter 'nope' not found in request type {PKG}.GetBookRequest",
        )

    def test_unknown_required_field(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook", "required_fields": ["nope"]}))
        _assert_error(result, "required field 'nope' not found")

    def test_unknown_resource_name_treatment(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config({"name": "GetBook", "resource_name_treatment": "SOMETIMES"}))
        _assert_error(result, "unknown resource name treatment: SOMETIMES")

    def test_resource_name_treatment(self, library_model: ApiModel) -> None:
        config = _config({"name": "GetBook", "resource_name_treatment": "VALIDATE"})
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        assert method_config.resource_name_treatment == ResourceNameTreatment.VALIDATE


# ###############
# Page Streaming
# ###############


class TestPageStreamingResolution:
    def test_explicit_page_streaming(self, library_model: ApiModel) -> None:
        config = _config(
            {
                "name": "ListBooks",
                "page_streaming": {
                    "request": {"token_field": "pageToken", "page_size_field": "pageSize"},
                    "response": {"token_field": "nextPageToken", "resources_field": "books"},
                },
            }
        )
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        paging = method_config.page_streaming
        assert paging is not None
        assert paging.token_field_name == "pageToken"
        assert paging.has_page_size_field
        assert paging.resources_field_name == "books"
        assert paging.resources_element_type.full_name == f"{PKG}.Book"

    def test_missing_response_field(self, library_model: ApiModel) -> None:
        config = _config(
            {
                "name": "ListBooks",
                "page_streaming": {
                    "request": {"token_field": "pageToken"},
                    "response": {"token_field": "nextPageToken", "resources_field": "shelves"},
                },
            }
        )
        _assert_error(resolve(library_model, config), f"type {PKG}.ListBooksResponse does not have field shelves")

    def test_resources_field_must_be_repeated(self, library_model: ApiModel) -> None:
        config = _config(
            {
                "name": "ListBooks",
                "page_streaming": {
                    "request": {"token_field": "pageToken"},
                    "response": {"token_field": "nextPageToken", "resources_field": "nextPageToken"},
                },
            }
        )
        _assert_error(resolve(library_model, config), "page streaming resources field 'nextPageToken' is not repeated")


# ###############
# Field Name Patterns
# ###############


class TestFieldNamePatterns:
    def test_declared_collection(self, library_model: ApiModel) -> None:
        config = _config(
            {"name": "GetBook", "field_name_patterns": {"name": "book"}},
            collections=[{"name_pattern": "shelves/*/books/*", "entity_name": "book"}],
        )
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        assert method_config.field_name_patterns == {"name": "book"}

    def test_undeclared_entity(self, library_model: ApiModel) -> None:
        config = _config({"name": "GetBook", "field_name_patterns": {"name": "book"}})
        _assert_error(resolve(library_model, config), "entity name 'book' is not a declared collection")

    def test_unknown_field_path(self, library_model: ApiModel) -> None:
        config = _config(
            {"name": "GetBook", "field_name_patterns": {"shelf.name": "book"}},
            collections=[{"name_pattern": "shelves/*/books/*", "entity_name": "book"}],
        )
        _assert_error(resolve(library_model, config), f"type {PKG}.GetBookRequest does not have field shelf")


# ###############
# Batching and Long Running
# ###############


class TestBatchingResolution:
    def _batching(self, **descriptor: Any) -> dict[str, Any]:
        return {
            "name": "Publish",
            "batching": {
                "thresholds": {"element_count_threshold": 10, "delay_threshold_millis": 50},
                "batch_descriptor": {"batched_field": "books", **descriptor},
            },
        }

    def test_batching_fields(self, library_model: ApiModel) -> None:
        config = _config(
            self._batching(discriminator_fields=["topic", "shelf.name"], subresponse_field="book_ids")
        )
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        batching = method_config.batching
        assert batching is not None
        assert batching.batched_field.simple_name == "books"
        assert [d.path for d in batching.discriminator_fields] == ["topic", "shelf.name"]
        assert batching.has_subresponse_field
        assert batching.element_count_threshold == 10
        assert batching.flow_control_limit_exceeded_behavior == "IGNORE"

    def test_unknown_batched_field_raises(self, library_model: ApiModel) -> None:
        """A batching section naming a missing field is malformed and aborts resolution."""
        config = _config(self._batching(discriminator_fields=["shelf.nope"]))
        with pytest.raises(FieldSelectorError, match=f"type {PKG}.Shelf does not have field nope"):
            resolve(library_model, config)


class TestLongRunningResolution:
    def test_long_running_types(self, library_model: ApiModel) -> None:
        config = _config(
            {
                "name": "ExportBook",
                "long_running": {"return_type": f"{PKG}.Book", "metadata_type": f"{PKG}.ExportMetadata"},
            }
        )
        method_config = resolve_or_raise(library_model, config).interface_configs[SERVICE].method_configs[0]
        assert method_config.is_long_running
        assert method_config.long_running is not None
        assert method_config.long_running.return_type.full_name == f"{PKG}.Book"
        assert method_config.long_running.initial_poll_delay_millis == 3000

    def test_unknown_return_type(self, library_model: ApiModel) -> None:
        config = _config(
            {
                "name": "ExportBook",
                "long_running": {"return_type": f"{PKG}.Nope", "metadata_type": f"{PKG}.ExportMetadata"},
            }
        )
        _assert_error(resolve(library_model, config), f"long running return type not found: {PKG}.Nope")


# ###############
# Smoke Test
# ###############


class TestSmokeTestResolution:
    def test_smoke_test(self, library_model: ApiModel) -> None:
        config = _config(smoke_test={"method": "GetBook", "init_fields": ['name="shelves/1/books/1"']})
        smoke_test = resolve_or_raise(library_model, config).interface_configs[SERVICE].smoke_test
        assert smoke_test is not None
        assert smoke_test.method.simple_name == "GetBook"
        assert smoke_test.init_field_names == ("name",)

    def test_init_field_names_strip_paths(self, library_model: ApiModel) -> None:
        init_fields = ['book.title="x"', "etag", 'book.author="y"']
        config = _config(smoke_test={"method": "UpdateBook", "init_fields": init_fields})
        smoke_test = resolve_or_raise(library_model, config).interface_configs[SERVICE].smoke_test
        assert smoke_test is not None
        assert smoke_test.init_field_names == ("book", "etag")

    def test_missing_smoke_test_method(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config(smoke_test={"method": "Nope"}))
        assert _errors(result) == ["toplevel: The configured smoke test method does not exist."]


# ###############
# Heuristics
# ###############


class TestResolutionWithHeuristics:
    def test_unconfigured_methods_are_included(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config(), engine=MethodPolicyEngine())
        interface = library_model.lookup_interface(SERVICE)
        assert interface is not None
        names = [m.method.simple_name for m in config.interface_configs[SERVICE].method_configs]
        assert names == [m.simple_name for m in interface.methods]
        assert len(names) == 10

    def test_heuristic_page_streaming(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config({"name": "ListFoos"}), engine=MethodPolicyEngine())
        method_config = config.interface_configs[SERVICE].method_config("ListFoos")
        assert method_config is not None
        assert method_config.page_streaming is not None
        assert method_config.page_streaming.resources_field_name == "foos"

    def test_heuristic_warnings_become_diagnostics(self, library_model: ApiModel) -> None:
        result = resolve(library_model, _config(), engine=MethodPolicyEngine())
        assert not result.has_errors
        assert [str(w) for w in result.warnings] == [
            f"{SERVICE}.ListMixed: Page Streaming resource field could not be heuristically determined "
            "for method ListMixed"
        ]

    def test_configured_settings_take_precedence(self, library_model: ApiModel) -> None:
        config = _config({"name": "GetBook", "request_object_method": True, "timeout_millis": 5})
        method_config = resolve_or_raise(library_model, config, engine=MethodPolicyEngine()).interface_configs[
            SERVICE
        ].method_config("GetBook")
        assert method_config is not None
        assert method_config.request_object_method
        assert method_config.timeout_millis == 5
        assert [g.parameters for g in method_config.flattening] == [("name",)]

    def test_heuristic_retry_names(self, library_model: ApiModel) -> None:
        config = resolve_or_raise(library_model, _config(), engine=MethodPolicyEngine())
        interface_config = config.interface_configs[SERVICE]
        create = interface_config.method_config("CreateShelf")
        get = interface_config.method_config("GetBook")
        assert create is not None and get is not None
        assert create.retry_codes_name == "non_idempotent"
        assert get.retry_codes_name == "idempotent"


# ###############
# Field Selectors
# ###############


class TestFieldSelector:
    def test_nested_path(self, library_model: ApiModel) -> None:
        request = library_model.lookup_type(f"{PKG}.PublishRequest")
        assert request is not None
        selector = FieldSelector.resolve(request, "shelf.name")
        assert selector.path == "shelf.name"
        assert selector.param_name == "shelf_name"
        assert selector.last_field.simple_name == "name"

    def test_unknown_segment(self, library_model: ApiModel) -> None:
        request = library_model.lookup_type(f"{PKG}.PublishRequest")
        assert request is not None
        with pytest.raises(FieldSelectorError, match=f"type {PKG}.PublishRequest does not have field nope"):
            FieldSelector.resolve(request, "nope")
