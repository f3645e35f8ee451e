# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Jinja2 rendering of interface views into output files.

A template receives one :class:`~gapicgen.viewmodel.views.InterfaceView` as
``interface``. For a view of language ``java`` the engine renders
``java.j2`` when such a template is available and falls back to the
built-in ``outline.j2``, a language-neutral summary of the client surface.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import jinja2

from gapicgen.util.name import lower_camel, lower_hyphen, lower_underscore, upper_camel, upper_underscore
from gapicgen.viewmodel.views import InterfaceView

# ###############
# Public Interface
# ###############

OUTLINE_TEMPLATE_NAME = "outline.j2"


class TemplateError(Exception):
    """Raised when a template is missing, malformed or fails to render."""


class TemplateEngine:
    """Jinja2 environment with the filters code templates rely on.

    Args:
        template_dir: Directory searched first for templates.
        templates: Additional in-memory templates keyed by name. They take
            precedence over the built-in ones.
    """

    def __init__(self, template_dir: Path | None = None, templates: Mapping[str, str] | None = None) -> None:
        mapping = dict(BUILTIN_TEMPLATES)
        mapping.update(templates or {})
        self._memory = jinja2.DictLoader(mapping)
        loaders: list[jinja2.BaseLoader] = []
        if template_dir is not None:
            loaders.append(jinja2.FileSystemLoader(str(template_dir)))
        loaders.append(self._memory)
        self._env = jinja2.Environment(
            loader=jinja2.ChoiceLoader(loaders),
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["lower_camel"] = lower_camel
        self._env.filters["upper_camel"] = upper_camel
        self._env.filters["lower_underscore"] = lower_underscore
        self._env.filters["upper_underscore"] = upper_underscore
        self._env.filters["lower_hyphen"] = lower_hyphen
        self._env.filters["comment"] = _comment_filter

    @property
    def environment(self) -> jinja2.Environment:
        return self._env

    def add_template(self, name: str, content: str) -> None:
        self._memory.mapping[name] = content

    def has_template(self, name: str) -> bool:
        assert self._env.loader is not None
        try:
            self._env.loader.get_source(self._env, name)
        except jinja2.TemplateNotFound:
            return False
        return True

    def template_for(self, view: InterfaceView) -> str:
        """Name of the template that renders *view*."""
        name = f"{view.language}.j2"
        return name if self.has_template(name) else OUTLINE_TEMPLATE_NAME

    def render_template(self, name: str, context: Mapping[str, Any]) -> str:
        try:
            return self._env.get_template(name).render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Failed to render template {name}: {exc}") from exc

    def render_string(self, source: str, context: Mapping[str, Any]) -> str:
        try:
            return self._env.from_string(source).render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Failed to render template string: {exc}") from exc


def render_views(views: Iterable[InterfaceView], engine: TemplateEngine | None = None) -> dict[str, str]:
    """Render every view and return the texts keyed by output file name.

    Raises:
        TemplateError: If rendering fails or two views map to the same file.
    """
    engine = engine or TemplateEngine()
    outputs: dict[str, str] = {}
    for view in views:
        if view.file_name in outputs:
            raise TemplateError(f"Duplicate output file '{view.file_name}' for interface {view.full_name}")
        outputs[view.file_name] = engine.render_template(engine.template_for(view), {"interface": view})
    return outputs


def write_outputs(outputs: Mapping[str, str], output_dir: Path) -> list[Path]:
    """Write rendered files below *output_dir*, creating directories as needed."""
    written = []
    for name, text in outputs.items():
        path = output_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(path)
    return written


# ################
# Implementation
# ################


def _comment_filter(value: str, prefix: str = "# ") -> str:
    return "\n".join(f"{prefix}{line}".rstrip() for line in str(value).splitlines())


_OUTLINE_TEMPLATE = """\
{% macro init_lines(code, indent) %}
{% for line in code.lines %}
{% if line.line_type.name == "STRUCTURE" %}
{{ indent }}{{ line.type_name }} {{ line.identifier }} = {{ line.type_name }}()
{% for setting in line.field_settings %}
{{ indent }}  .{{ setting.setter_name }}({{ setting.identifier }})
{% endfor %}
{% elif line.line_type.name == "LIST" %}
{{ indent }}{{ line.type_name }} {{ line.identifier }} = [{{ line.element_identifiers | join(", ") }}]
{% elif line.line_type.name == "MAP" %}
{{ indent }}{{ line.type_name }} {{ line.identifier }} = {{ "{" }}\
{% for entry in line.entries %}{{ entry.key }}: {{ entry.value_identifier }}{% if not loop.last %}, {% endif %}\
{% endfor %}{{ "}" }}
{% else %}
{{ indent }}{{ line.type_name }} {{ line.identifier }} = {{ line.value }}
{% endif %}
{% endfor %}
{% endmacro %}
{% macro output_lines(views, indent) %}
{% for view in views %}
{% if view.kind == "print" %}
{{ indent }}print("{{ view.formatted_string.format }}"\
{% for arg in view.formatted_string.args %}, {{ arg }}{% endfor %})
{% elif view.kind == "define" %}
{{ indent }}{{ view.variable_type_name }} {{ view.variable_name }} = {{ view.reference.expression }}
{% elif view.kind == "comment" %}
{{ view.lines | join("\\n") | comment(indent ~ "# ") }}
{% elif view.kind == "array_loop" %}
{{ indent }}for {{ view.variable_type_name }} {{ view.variable_name }} in {{ view.collection.expression }}:
{{ output_lines(view.body, indent ~ "  ") -}}
{% elif view.kind == "map_loop" %}
{{ indent }}for {{ view.key_variable_name }}, {{ view.value_variable_name }} in {{ view.map.expression }}:
{{ output_lines(view.body, indent ~ "  ") -}}
{% elif view.kind == "write_file" %}
{{ indent }}write("{{ view.file_name.format }}"\
{% for arg in view.file_name.args %}, {{ arg }}{% endfor %}, {{ view.contents.expression }})
{% endif %}
{% endfor %}
{% endmacro %}
{{ interface.client_name }}: client of {{ interface.full_name }} ({{ interface.language }})
{% if interface.package_name %}
package {{ interface.package_name }}
{% endif %}
{% if interface.description %}
{{ interface.description | comment }}
{% endif %}
{% if interface.required_constructor_params %}
constructor parameters: {{ interface.required_constructor_params | join(", ") }}
{% endif %}
{% for codes in interface.retry_codes %}
retry codes {{ codes.constant_name }}: [{{ codes.codes | join(", ") }}]
{% endfor %}
{% for params in interface.retry_params %}
retry params {{ params.constant_name }}: \
delay {{ params.initial_retry_delay_millis }}-{{ params.max_retry_delay_millis }}ms \
x{{ params.retry_delay_multiplier }}, \
rpc timeout {{ params.initial_rpc_timeout_millis }}-{{ params.max_rpc_timeout_millis }}ms \
x{{ params.rpc_timeout_multiplier }}, total {{ params.total_timeout_millis }}ms
{% endfor %}
{% for collection in interface.collections %}
collection {{ collection.entity_name }} "{{ collection.name_pattern }}": \
{{ collection.format_function_name }}, {{ collection.parse_function_name }}
{% endfor %}
{% for method in interface.methods %}

method {{ method.name }}({{ method.request_type_name }}) -> {{ method.response_type_name }}
{% if method.description %}
{{ method.description | comment("  # ") }}
{% endif %}
  retry {{ method.retry_codes_name }}/{{ method.retry_params_name }}, timeout {{ method.timeout_millis }}ms
{% if method.request_streaming or method.response_streaming %}
  streaming request={{ method.request_streaming }} response={{ method.response_streaming }}
{% endif %}
{% if method.required_fields %}
  required: {{ method.required_fields | join(", ") }}
{% endif %}
{% if method.page_streaming %}
  paged {{ method.page_streaming.paged_response_type_name }} of {{ method.page_streaming.resource_type_name }} \
({{ method.page_streaming.descriptor_name }})
{% endif %}
{% if method.batching %}
  batched on {{ method.batching.batched_field_getter }} ({{ method.batching.descriptor_name }})
{% endif %}
{% if method.long_running %}
  long running -> {{ method.long_running.return_type_name }}, metadata {{ method.long_running.metadata_type_name }}
{% endif %}
{% for pattern in method.resource_name_patterns %}
  resource name {{ pattern.field_path }}: {{ pattern.entity_name }}\
{{ (' "' ~ pattern.name_pattern ~ '"') if pattern.name_pattern else "" }}
{% endfor %}
{% for flattened in method.flattened_methods %}
  overload {{ flattened.name }}(\
{% for parameter in flattened.parameters %}{{ parameter.type_name }} {{ parameter.name }}\
{% if not loop.last %}, {% endif %}{% endfor %})
{{ init_lines(flattened.init_code, "    ") }}\
    {{ flattened.name }}({{ flattened.init_code.arg_fields | map(attribute="identifier") | join(", ") }})
{% endfor %}
{% if method.request_object_init_code %}
  request object
{{ init_lines(method.request_object_init_code, "    ") }}\
    {{ method.name }}({{ method.request_object_init_code.top_level_identifier }})
{% endif %}
{% for sample in method.samples %}
  sample {{ sample.id }}{{ (": " ~ sample.title) if sample.title else "" }}
{{ init_lines(sample.init_code, "    ") }}\
    response = {{ method.name }}({{ sample.init_code.top_level_identifier }})
{{ output_lines(sample.outputs, "    ") -}}
{% endfor %}
{% endfor %}
{% if interface.smoke_test %}

smoke test {{ interface.smoke_test.class_name }} calls {{ interface.smoke_test.method_name }}
{{ init_lines(interface.smoke_test.init_code, "  ") -}}
{% endif %}
{% if interface.unit_test %}
{% set unit_test = interface.unit_test %}

unit test {{ unit_test.class_name }}\
{{ (" mocking " ~ unit_test.mock_service.class_name) if unit_test.mock_service else "" }}
{% for case in unit_test.test_cases %}
  test {{ case.name }} calls {{ case.method_name }} \
({{ case.client_method_type.value }}, expects {{ case.response_kind.value }})
{% endfor %}
{% endif %}
"""

BUILTIN_TEMPLATES: dict[str, str] = {OUTLINE_TEMPLATE_NAME: _OUTLINE_TEMPLATE}
