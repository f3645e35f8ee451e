# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the discovery-document realization of the API model."""

from typing import Any

import pytest

from gapicgen.model.api import ApiModel, InterfaceModel, MethodModel, UnsupportedOperationError
from gapicgen.model.loader import api_model_from_dict
from gapicgen.model.types import ApiSource, Cardinality, FieldKind

# ###############
# Test Helpers
# ###############

BUCKETS = "google.storage.v1.Buckets"


def _buckets(model: ApiModel) -> InterfaceModel:
    interface = model.lookup_interface(BUCKETS)
    assert interface is not None
    return interface


def _method(model: ApiModel, name: str) -> MethodModel:
    method = _buckets(model).get_method(name)
    assert method is not None
    return method


# ###############
# Interfaces
# ###############


class TestDiscoveryInterfaces:
    def test_api_source(self, discovery_model: ApiModel) -> None:
        assert discovery_model.api_source == ApiSource.DISCOVERY

    def test_title_from_name(self, discovery_model: ApiModel) -> None:
        assert discovery_model.title == "Storage"

    def test_canonical_name_is_title(self, discovery_data: dict[str, Any]) -> None:
        discovery_data["canonicalName"] = "Cloud Storage"
        assert api_model_from_dict(discovery_data).title == "Cloud Storage"

    def test_top_level_resource_is_interface(self, discovery_model: ApiModel) -> None:
        assert [i.full_name for i in discovery_model.interfaces] == [BUCKETS]
        buckets = _buckets(discovery_model)
        assert buckets.package == "google.storage.v1"
        assert buckets.is_reachable

    def test_methods_in_declaration_order(self, discovery_model: ApiModel) -> None:
        assert [m.simple_name for m in _buckets(discovery_model).methods] == ["list", "get", "insert"]

    def test_nested_resources_fold_into_interface(self, discovery_data: dict[str, Any]) -> None:
        discovery_data["resources"]["buckets"]["resources"] = {
            "objects": {
                "methods": {
                    "list": {"id": "storage.buckets.objects.list", "path": "b/o", "httpMethod": "GET"},
                }
            }
        }
        interface = api_model_from_dict(discovery_data).lookup_interface(BUCKETS)
        assert interface is not None
        assert interface.get_method("objectsList") is not None


# ###############
# Methods
# ###############


class TestDiscoveryMethods:
    def test_names(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "list")
        assert method.full_name == "storage.buckets.list"
        assert method.raw_name == "list"
        assert method.http_verb == "GET"
        assert method.is_idempotent

    def test_request_type_is_synthesized_from_parameters(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "list")
        assert method.input_type.full_name == "ListBucketsHttpRequest"
        assert [f.simple_name for f in method.input_fields] == ["project", "pageToken", "maxResults"]

    def test_request_body_becomes_resource_field(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "insert")
        assert [f.simple_name for f in method.input_fields] == ["project", "bucketResource"]
        body = method.input_field("bucketResource")
        assert body is not None
        assert body.type.full_name == "Bucket"
        assert not method.is_idempotent

    def test_required_parameters(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "list")
        project = method.input_field("project")
        token = method.input_field("pageToken")
        assert project is not None and token is not None
        assert project.is_required
        assert project.cardinality == Cardinality.REQUIRED
        assert not token.is_required

    def test_parameter_format_selects_kind(self, discovery_model: ApiModel) -> None:
        max_results = _method(discovery_model, "list").input_field("maxResults")
        assert max_results is not None
        assert max_results.kind == FieldKind.TYPE_UINT32

    def test_output_type(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "list")
        assert method.output_type.full_name == "Buckets"
        items = method.output_field("items")
        assert items is not None
        assert items.is_repeated
        assert items.type.make_optional().full_name == "Bucket"

    def test_missing_response_is_empty(self, discovery_data: dict[str, Any]) -> None:
        del discovery_data["resources"]["buckets"]["methods"]["insert"]["response"]
        method = _method(api_model_from_dict(discovery_data), "insert")
        assert method.output_type.full_name == "Empty"
        assert not method.has_return_value

    def test_resource_patterns_from_path_parameter_regex(self, discovery_model: ApiModel) -> None:
        assert _method(discovery_model, "get").resource_patterns() == {"bucket": "projects/*/buckets/*"}
        assert _method(discovery_model, "list").resource_patterns() == {}

    def test_never_streams(self, discovery_model: ApiModel) -> None:
        method = _method(discovery_model, "list")
        assert not method.request_streaming
        assert not method.response_streaming


# ###############
# Schemas
# ###############


class TestDiscoverySchemas:
    def test_int64_string_format(self, discovery_model: ApiModel) -> None:
        bucket = discovery_model.lookup_type("Bucket")
        assert bucket is not None
        size = bucket.get_field("size")
        assert size is not None
        assert size.kind == FieldKind.TYPE_INT64

    def test_additional_properties_is_string_keyed_map(self, discovery_model: ApiModel) -> None:
        bucket = discovery_model.lookup_type("Bucket")
        assert bucket is not None
        labels = bucket.get_field("labels")
        assert labels is not None
        assert labels.is_map
        assert labels.type.map_key_type().is_string_type
        assert labels.type.map_value_type().is_string_type

    def test_lookup_unknown_schema(self, discovery_model: ApiModel) -> None:
        assert discovery_model.lookup_type("Nope") is None

    def test_oneof_is_unsupported(self, discovery_model: ApiModel) -> None:
        project = _method(discovery_model, "list").input_field("project")
        assert project is not None
        with pytest.raises(UnsupportedOperationError, match="oneof"):
            _ = project.oneof

    def test_discovery_schema_is_exposed(self, discovery_model: ApiModel) -> None:
        project = _method(discovery_model, "list").input_field("project")
        assert project is not None
        assert project.discovery_schema.location == "query"
