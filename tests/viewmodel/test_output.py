# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the sample output statement interpreter."""

from typing import Any

import pytest

from gapicgen.config.resolved import MethodConfig
from gapicgen.config.resolver import resolve_or_raise
from gapicgen.config.schema import ConfigProto, OutputSpecProto
from gapicgen.model.api import ApiModel, MethodModel
from gapicgen.naming.namer import SurfaceNamer
from gapicgen.viewmodel.output import (
    OutputContext,
    OutputSpecError,
    OutputTransformer,
    default_output_specs,
    response_type,
)
from gapicgen.viewmodel.views import ArrayLoopView, CommentView, DefineView, MapLoopView, PrintView, WriteFileView

# ###############
# Test Helpers
# ###############

SERVICE = "google.example.library.v1.LibraryService"
PKG = "google.example.library.v1"


def _method(model: ApiModel, name: str) -> MethodModel:
    interface = model.lookup_interface(SERVICE)
    assert interface is not None
    method = interface.get_method(name)
    assert method is not None
    return method


def _resolved(model: ApiModel, method: dict[str, Any]) -> MethodConfig:
    config = ConfigProto.model_validate({"interfaces": [{"name": SERVICE, "methods": [method]}]})
    return resolve_or_raise(model, config).interface_configs[SERVICE].method_configs[0]


def _specs(*specs: dict[str, Any]) -> list[OutputSpecProto]:
    return [OutputSpecProto.model_validate(spec) for spec in specs]


def _views(model: ApiModel, *specs: dict[str, Any], language: str = "java", method: str = "GetBook") -> tuple:
    method_config = MethodConfig(method=_method(model, method))
    transformer = OutputTransformer(method_config, SurfaceNamer.for_language(language), "v1")
    return transformer.to_views(_specs(*specs))


def _assert_fails(model: ApiModel, fragment: str, *specs: dict[str, Any]) -> None:
    with pytest.raises(OutputSpecError) as exc_info:
        _views(model, *specs)
    assert fragment in str(exc_info.value), str(exc_info.value)


# ###############
# Response Types
# ###############


class TestResponseType:
    def test_plain_method(self, library_model: ApiModel) -> None:
        method_config = MethodConfig(method=_method(library_model, "GetBook"))
        assert response_type(method_config).full_name == f"{PKG}.Book"

    def test_paged_method_yields_resources(self, library_model: ApiModel) -> None:
        method_config = _resolved(
            library_model,
            {
                "name": "ListBooks",
                "page_streaming": {
                    "request": {"token_field": "pageToken"},
                    "response": {"token_field": "nextPageToken", "resources_field": "books"},
                },
            },
        )
        assert response_type(method_config).full_name == f"{PKG}.Book"
        assert not response_type(method_config).is_repeated

    def test_long_running_method_yields_result(self, library_model: ApiModel) -> None:
        method_config = _resolved(
            library_model,
            {
                "name": "ExportBook",
                "long_running": {"return_type": f"{PKG}.Book", "metadata_type": f"{PKG}.ExportMetadata"},
            },
        )
        assert response_type(method_config).full_name == f"{PKG}.Book"


class TestDefaultOutputSpecs:
    def test_prints_response(self, library_model: ApiModel) -> None:
        specs = default_output_specs(MethodConfig(method=_method(library_model, "GetBook")))
        assert [spec.print_ for spec in specs] == [["%s", "$resp"]]

    def test_empty_response_prints_nothing(self, library_model: ApiModel) -> None:
        assert default_output_specs(MethodConfig(method=_method(library_model, "DeleteBook"))) == []

    def test_empty_long_running_result_prints_nothing(self, library_model: ApiModel) -> None:
        method_config = _resolved(
            library_model,
            {
                "name": "ExportBook",
                "long_running": {"return_type": f"{PKG}.Empty", "metadata_type": f"{PKG}.ExportMetadata"},
            },
        )
        assert default_output_specs(method_config) == []


# ###############
# Print
# ###############


class TestPrint:
    def test_java_print(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"print": ["Title: %s", "$resp.title"]})
        assert isinstance(view, PrintView)
        assert view.formatted_string.format == "Title: %s"
        assert view.formatted_string.args == ("response.getTitle()",)

    def test_python_print(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"print": ["Title: %s", "$resp.title"]}, language="python")
        assert view.formatted_string.format == "Title: {}"
        assert view.formatted_string.args == ("response.title",)

    def test_ruby_print_is_inline(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"print": ["Title: %s", "$resp.title"]}, language="ruby")
        assert view.formatted_string.format == "Title: #{response.title}"
        assert view.formatted_string.args == ()

    def test_index_and_map_accessors(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"print": ["%s %s", "$resp.tags[0]", '$resp.labels{"k"}']})
        assert view.formatted_string.args == ("response.getTags().get(0)", 'response.getLabels().get("k")')

    def test_printed_types_are_recorded(self, library_model: ApiModel) -> None:
        transformer = OutputTransformer(
            MethodConfig(method=_method(library_model, "GetBook")), SurfaceNamer.for_language("java"), "v1"
        )
        context = OutputContext()
        transformer.to_views(_specs({"print": ["%s", "$resp.rating"]}), context)
        assert [t.is_floating_type for t in context.string_formatted_variable_types] == [True]

    def test_placeholder_count_mismatch(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "GetBook:v1: format '%s %s' has 2 placeholders", {"print": ["%s %s", "$resp"]})


# ###############
# Accessor Errors
# ###############


class TestAccessorErrors:
    @pytest.mark.parametrize(
        ("accessor", "fragment"),
        [
            ("nope", "GetBook:v1: variable not defined: nope"),
            ("$resp.nope", f"type {PKG}.Book does not have field nope"),
            ("$resp.title[0]", "$resp.title[0] is not a repeated field"),
            ('$resp.tags{"a"}', 'is not a map field'),
            ("$resp.tags.x", "is not a message"),
            ('$resp.editions{"x"}', "expected integral type for map key"),
            ("$resp.labels{1}", "expected string type for map key"),
            ("$resp.tags[x]", "expected int in index expression"),
            ("$resp.tags[0", "expected ']'"),
            ("$resp#", "Unexpected character"),
            ("$resp=", "unexpected character: '='"),
        ],
    )
    def test_invalid_accessors(self, accessor: str, fragment: str, library_model: ApiModel) -> None:
        _assert_fails(library_model, fragment, {"print": ["%s", accessor]})


# ###############
# Define
# ###############


class TestDefine:
    def test_define_declares_variable(self, library_model: ApiModel) -> None:
        define, show = _views(library_model, {"define": "bookTitle=$resp.title"}, {"print": ["%s", "bookTitle"]})
        assert isinstance(define, DefineView)
        assert define.variable_type_name == "String"
        assert define.variable_name == "bookTitle"
        assert define.reference.expression == "response.getTitle()"
        assert show.formatted_string.args == ("bookTitle",)

    def test_define_requires_equals(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "invalid definition, expecting '='", {"define": "x"})

    def test_define_requires_identifier(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "expected identifier", {"define": "[0]=$resp"})

    def test_template_names_are_reserved(self, library_model: ApiModel) -> None:
        _assert_fails(
            library_model,
            'GetBook: v1 cannot define variable "response": it is used by the sample template.',
            {"define": "response=$resp"},
        )

    def test_duplicate_definition(self, library_model: ApiModel) -> None:
        _assert_fails(
            library_model,
            "duplicate variable declaration not allowed: t",
            {"define": "t=$resp.title"},
            {"define": "t=$resp.author"},
        )


# ###############
# Loops
# ###############


class TestLoops:
    def test_collection_loop(self, library_model: ApiModel) -> None:
        (view,) = _views(
            library_model,
            {"loop": {"collection": "$resp.tags", "variable": "tag", "body": [{"print": ["%s", "tag"]}]}},
        )
        assert isinstance(view, ArrayLoopView)
        assert view.variable_type_name == "String"
        assert view.variable_name == "tag"
        assert view.collection.expression == "response.getTags()"
        assert view.body[0].formatted_string.args == ("tag",)

    def test_map_loop(self, library_model: ApiModel) -> None:
        (view,) = _views(
            library_model,
            {"loop": {"map": "$resp.editions", "key": "k", "value": "v", "body": [{"print": ["%s: %s", "k", "v"]}]}},
        )
        assert isinstance(view, MapLoopView)
        assert (view.key_type_name, view.value_type_name) == ("int", "String")
        assert (view.key_variable_name, view.value_variable_name) == ("k", "v")
        assert view.map.expression == "response.getEditions()"

    def test_map_loop_with_key_only(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"loop": {"map": "$resp.labels", "key": "k"}})
        assert view.value_variable_name == ""

    def test_collection_must_be_repeated(self, library_model: ApiModel) -> None:
        loop = {"collection": "$resp.title", "variable": "t"}
        _assert_fails(library_model, "$resp.title is not a repeated field", {"loop": loop})

    def test_map_loop_over_list(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "$resp.tags is not a map field", {"loop": {"map": "$resp.tags", "key": "k"}})

    def test_loop_variable_is_local(self, library_model: ApiModel) -> None:
        _assert_fails(
            library_model,
            "variable not defined: tag",
            {"loop": {"collection": "$resp.tags", "variable": "tag"}},
            {"print": ["%s", "tag"]},
        )

    def test_loop_variable_cannot_be_reused(self, library_model: ApiModel) -> None:
        _assert_fails(
            library_model,
            "duplicate variable declaration not allowed: tag",
            {"loop": {"collection": "$resp.tags", "variable": "tag"}},
            {"define": "tag=$resp.title"},
        )

    @pytest.mark.parametrize(
        ("loop", "fragment"),
        [
            ({"collection": "$resp.tags"}, "`variable` must be specified if `collection` is specified"),
            ({"collection": "$resp.tags", "variable": "t", "key": "k"}, "neither `key` nor `value` can be specified"),
            ({"map": "$resp.labels", "variable": "t"}, "`variable` can't be specified if `map` is specified"),
            ({"map": "$resp.labels"}, "at least one of `key` and `value` must be specified"),
            ({"map": "$resp.labels", "collection": "$resp.tags"}, "exactly one of `map` and `collection`"),
            ({}, "exactly one of `map` and `collection`"),
        ],
    )
    def test_bad_loop_format(self, loop: dict[str, Any], fragment: str, library_model: ApiModel) -> None:
        _assert_fails(library_model, f"Bad format: {fragment}", {"loop": loop})


# ###############
# Other Statements
# ###############


class TestOtherStatements:
    def test_comment(self, library_model: ApiModel) -> None:
        (view,) = _views(library_model, {"comment": ["Read %s\nthen stop", "page_token"]})
        assert isinstance(view, CommentView)
        assert view.lines == ("Read pageToken", "then stop")

    def test_comment_placeholder_mismatch(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "has 1 placeholders but 0 arguments", {"comment": ["Read %s"]})

    def test_write_file(self, library_model: ApiModel) -> None:
        first, second = _views(
            library_model,
            {"write_file": {"file_name": ["cover-%s.jpg", "$resp.name"], "contents": "$resp.cover"}},
            {"write_file": {"file_name": ["title.txt"], "contents": "$resp.title"}},
        )
        assert isinstance(first, WriteFileView)
        assert first.file_name.args == ("response.getName()",)
        assert first.contents.expression == "response.getCover()"
        assert first.is_first
        assert not second.is_first

    def test_write_file_requires_string_or_bytes(self, library_model: ApiModel) -> None:
        _assert_fails(
            library_model,
            "Output to file: expected string or bytes",
            {"write_file": {"file_name": ["r.txt"], "contents": "$resp.rating"}},
        )

    def test_write_file_name_cannot_be_empty(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "print spec cannot be empty", {"write_file": {"contents": "$resp.title"}})

    def test_exactly_one_field(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "only one field of OutputSpec may be set", {"print": ["x"], "comment": ["y"]})

    def test_empty_statement(self, library_model: ApiModel) -> None:
        _assert_fails(library_model, "GetBook:v1: one field of OutputSpec must be set", {})
