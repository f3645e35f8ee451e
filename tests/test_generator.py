# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for end-to-end generation."""

from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from gapicgen.config.schema import ConfigProto
from gapicgen.generator import GenerationError, generate
from gapicgen.model.api import ApiModel
from gapicgen.naming.conventions import default_conventions
from gapicgen.policy.engine import MethodPolicyEngine
from gapicgen.render.templates import TemplateEngine

# ###############
# Test Helpers
# ###############

SERVICE = "google.example.library.v1.LibraryService"


def _config(*methods: dict[str, Any], **document: Any) -> ConfigProto:
    return ConfigProto.model_validate({"interfaces": [{"name": SERVICE, "methods": list(methods)}], **document})


def _messages(exc_info: pytest.ExceptionInfo[GenerationError]) -> list[str]:
    return exc_info.value.messages


# ###############
# Successful Runs
# ###############


def test_language_from_document(library_model: ApiModel) -> None:
    """Without an explicit language the document's language is used."""
    result = generate(library_model, _config({"name": "GetBook"}, language="python"))
    assert list(result.outputs) == ["library_service_client.py"]
    assert result.outputs["library_service_client.py"].startswith("LibraryServiceClient: client of")


def test_explicit_language_wins(library_model: ApiModel) -> None:
    result = generate(library_model, _config({"name": "GetBook"}, language="python"), "java")
    assert list(result.outputs) == ["LibraryServiceClient.java"]
    assert result.views[0].language == "java"


def test_package_name_follows_language(library_model: ApiModel) -> None:
    config = _config(
        {"name": "GetBook"},
        language="python",
        language_settings={"java": {"package_name": "com.example.library"}},
    )
    result = generate(library_model, config, "java")
    assert result.views[0].package_name == "com.example.library"


def test_heuristics_fill_every_method(library_model: ApiModel) -> None:
    config = ConfigProto.model_validate({"interfaces": [{"name": SERVICE}]})
    result = generate(library_model, config, "java", engine=MethodPolicyEngine())
    assert len(result.views[0].methods) == 10
    assert [str(w) for w in result.warnings] == [
        f"{SERVICE}.ListMixed: Page Streaming resource field could not be heuristically determined for method ListMixed"
    ]


def test_custom_template(library_model: ApiModel) -> None:
    engine = TemplateEngine(templates={"java.j2": "{% for m in interface.methods %}{{ m.name }};{% endfor %}"})
    config = _config({"name": "GetBook"}, {"name": "DeleteBook"})
    result = generate(library_model, config, "java", template_engine=engine)
    assert result.outputs == {"LibraryServiceClient.java": "getBook;deleteBook;"}


def test_custom_conventions(library_model: ApiModel) -> None:
    conventions = default_conventions()
    conventions["kotlin"] = replace(conventions["java"], language="kotlin", file_extension=".kt")
    result = generate(library_model, _config({"name": "GetBook"}), "kotlin", conventions=conventions)
    assert list(result.outputs) == ["LibraryServiceClient.kt"]


def test_write(tmp_path: Path, library_model: ApiModel) -> None:
    result = generate(library_model, _config({"name": "GetBook"}), "java")
    written = result.write(tmp_path)
    assert written == [tmp_path / "LibraryServiceClient.java"]
    assert written[0].read_text(encoding="utf-8") == result.outputs["LibraryServiceClient.java"]


# ###############
# Failures
# ###############


class TestFailures:
    def test_no_language(self, library_model: ApiModel) -> None:
        with pytest.raises(GenerationError) as exc_info:
            generate(library_model, _config({"name": "GetBook"}))
        assert _messages(exc_info) == ["no target language given"]

    def test_unknown_language(self, library_model: ApiModel) -> None:
        with pytest.raises(GenerationError, match="no naming conventions for language 'cobol'"):
            generate(library_model, _config({"name": "GetBook"}), "cobol")

    def test_configuration_errors(self, library_model: ApiModel) -> None:
        config = ConfigProto.model_validate({"interfaces": [{"name": "google.example.Missing"}]})
        with pytest.raises(GenerationError) as exc_info:
            generate(library_model, config, "java")
        assert _messages(exc_info) == ["toplevel: interface not found: google.example.Missing"]

    def test_init_code_errors(self, library_model: ApiModel) -> None:
        with pytest.raises(GenerationError, match="does not have field nope"):
            generate(library_model, _config({"name": "GetBook", "sample_code_init_fields": ['nope="x"']}), "java")

    def test_literal_errors(self, library_model: ApiModel) -> None:
        config = _config({"name": "ListBooks", "sample_code_init_fields": ['pageSize="ten"']})
        with pytest.raises(GenerationError, match="Could not assign value"):
            generate(library_model, config, "java")

    def test_field_path_errors(self, library_model: ApiModel) -> None:
        with pytest.raises(GenerationError, match="Invalid field path"):
            generate(library_model, _config({"name": "GetBook", "sample_code_init_fields": ["name."]}), "java")

    def test_output_errors(self, library_model: ApiModel) -> None:
        sample = {"id": "get", "on_success": [{"print": ["%s", "$resp.nope"]}]}
        with pytest.raises(GenerationError, match="GetBook:get: type .* does not have field nope"):
            generate(library_model, _config({"name": "GetBook", "sample_value_sets": [sample]}), "java")

    def test_template_errors(self, library_model: ApiModel) -> None:
        engine = TemplateEngine(templates={"java.j2": "{{ missing }}"})
        with pytest.raises(GenerationError, match="Failed to render template java.j2"):
            generate(library_model, _config({"name": "GetBook"}), "java", template_engine=engine)
