# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discovery-document realization of the API model facade.

Discovery documents have no service or request message concepts, so they are
mapped onto the facade as follows:

* each top-level resource is an interface; methods of nested resources are
  folded into it with the nested resource name as prefix,
* each method gets a synthesized request type whose fields are the method's
  parameters (``parameterOrder`` first) followed by a ``<schema>Resource``
  field for the request body, if any,
* ``array`` schemas are repeated, ``object`` schemas with
  ``additionalProperties`` are string-keyed maps, and scalar JSON types map to
  proto kinds by their ``format``.
"""

from __future__ import annotations

from gapicgen.model.api import ApiModel, FieldModel, InterfaceModel, MethodModel, TypeModel
from gapicgen.model.discovery import DiscoveryDocument, DiscoveryMethod, DiscoveryResource, Schema
from gapicgen.model.types import ApiSource, Cardinality, FieldKind
from gapicgen.util.name import lower_camel, upper_camel

# ###############
# Public Interface
# ###############

EMPTY_TYPE_NAME = "Empty"


class DiscoveryApiModel(ApiModel):
    """An :class:`ApiModel` backed by a :class:`DiscoveryDocument`."""

    def __init__(self, document: DiscoveryDocument) -> None:
        self._document = document
        self._schemas: dict[str, Schema] = dict(document.schemas)
        self._schemas.setdefault(EMPTY_TYPE_NAME, Schema(id=EMPTY_TYPE_NAME, type="object"))
        self._interfaces = [
            DiscoveryInterfaceModel(self, name, resource) for name, resource in document.resources.items()
        ]

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.DISCOVERY

    @property
    def title(self) -> str:
        return self._document.canonical_name or upper_camel(self._document.name)

    @property
    def document(self) -> DiscoveryDocument:
        return self._document

    @property
    def package(self) -> str:
        return f"google.{self._document.name}.{self._document.version}"

    @property
    def interfaces(self) -> list[InterfaceModel]:
        return list(self._interfaces)

    def lookup_type(self, full_name: str) -> TypeModel | None:
        if full_name not in self._schemas:
            return None
        return DiscoveryTypeModel(self, Schema(ref=full_name), full_name)

    def schema(self, name: str) -> Schema | None:
        return self._schemas.get(name)

    def register_schema(self, name: str, schema: Schema) -> None:
        self._schemas[name] = schema


class DiscoveryTypeModel(TypeModel):
    """The type of a discovery schema node.

    ``schema`` is the node as written (possibly an ``array`` or a ``$ref``);
    ``name`` is used as the type name of inline objects and enums.
    """

    def __init__(
        self,
        model: DiscoveryApiModel,
        schema: Schema,
        name: str,
        cardinality: Cardinality | None = None,
    ) -> None:
        self._model = model
        self._schema = schema
        self._name = name
        if cardinality is None:
            if schema.type == "array" or schema.repeated or schema.additional_properties is not None:
                cardinality = Cardinality.REPEATED
            elif schema.required:
                cardinality = Cardinality.REQUIRED
            else:
                cardinality = Cardinality.OPTIONAL
        self._cardinality = cardinality

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.DISCOVERY

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def cardinality(self) -> Cardinality:
        return self._cardinality

    @property
    def is_map(self) -> bool:
        return self._cardinality is Cardinality.REPEATED and self._schema.additional_properties is not None

    @property
    def kind(self) -> FieldKind:
        return _schema_kind(self._element_schema())

    @property
    def full_name(self) -> str:
        element = self._element_schema()
        if element.ref:
            return element.ref
        if element.id:
            return element.id
        if _schema_kind(element) in (FieldKind.TYPE_MESSAGE, FieldKind.TYPE_ENUM):
            return self._name
        return _schema_kind(element).value

    @property
    def fields(self) -> list[FieldModel]:
        if self.kind is not FieldKind.TYPE_MESSAGE or self.is_map:
            return []
        resolved = self._resolve(self._element_schema())
        return [
            DiscoveryFieldModel(self._model, self, name, property_schema)
            for name, property_schema in resolved.properties.items()
        ]

    def make_optional(self) -> TypeModel:
        if self._schema.type == "array" and self._schema.items is not None:
            return DiscoveryTypeModel(self._model, self._schema.items, self._name, Cardinality.OPTIONAL)
        return DiscoveryTypeModel(self._model, self._schema, self._name, Cardinality.OPTIONAL)

    def map_key_type(self) -> TypeModel:
        if not self.is_map:
            raise ValueError(f"type {self.full_name} is not a map")
        return DiscoveryTypeModel(self._model, Schema(type="string"), "string", Cardinality.OPTIONAL)

    def map_value_type(self) -> TypeModel:
        if not self.is_map or self._schema.additional_properties is None:
            raise ValueError(f"type {self.full_name} is not a map")
        return DiscoveryTypeModel(self._model, self._schema.additional_properties, self._name + "Value")

    def _element_schema(self) -> Schema:
        if self._schema.type == "array" and self._schema.items is not None:
            return self._schema.items
        if self.is_map:
            # The entry type of a map is a message, as for proto map entries.
            return Schema(type="object", id=self._name + "Entry")
        return self._schema

    def _resolve(self, schema: Schema) -> Schema:
        if schema.ref:
            target = self._model.schema(schema.ref)
            if target is None:
                raise ValueError(f"unresolved schema reference '{schema.ref}'")
            return target
        return schema


class DiscoveryFieldModel(FieldModel):
    """A property of a discovery schema, or a parameter of a method."""

    def __init__(self, model: DiscoveryApiModel, parent: DiscoveryTypeModel, name: str, schema: Schema) -> None:
        self._model = model
        self._parent = parent
        self._name = name
        self._schema = schema

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.DISCOVERY

    @property
    def simple_name(self) -> str:
        return self._name

    @property
    def type(self) -> TypeModel:
        return DiscoveryTypeModel(self._model, self._schema, upper_camel(self._name))

    @property
    def parent(self) -> TypeModel:
        return self._parent

    @property
    def description(self) -> str:
        return self._schema.description or ""

    @property
    def is_required(self) -> bool:
        return self._schema.required

    @property
    def discovery_schema(self) -> Schema:
        return self._schema


class DiscoveryMethodModel(MethodModel):
    """A REST method of a discovery resource."""

    def __init__(
        self,
        model: DiscoveryApiModel,
        interface: DiscoveryInterfaceModel,
        simple_name: str,
        method: DiscoveryMethod,
    ) -> None:
        self._model = model
        self._interface = interface
        self._simple_name = simple_name
        self._method = method
        self._request_type_name = f"{upper_camel(simple_name)}{interface.simple_name}HttpRequest"
        model.register_schema(self._request_type_name, _request_schema(self._request_type_name, method))

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.DISCOVERY

    @property
    def simple_name(self) -> str:
        return self._simple_name

    @property
    def full_name(self) -> str:
        return self._method.id

    @property
    def raw_name(self) -> str:
        return self._method.id.rsplit(".", 1)[-1]

    @property
    def input_type(self) -> TypeModel:
        return DiscoveryTypeModel(self._model, Schema(ref=self._request_type_name), self._request_type_name)

    @property
    def output_type(self) -> TypeModel:
        name = self._method.response.ref if self._method.response and self._method.response.ref else EMPTY_TYPE_NAME
        return DiscoveryTypeModel(self._model, Schema(ref=name), name)

    @property
    def request_streaming(self) -> bool:
        return False

    @property
    def response_streaming(self) -> bool:
        return False

    @property
    def http_verb(self) -> str | None:
        return self._method.http_method

    @property
    def description(self) -> str:
        return self._method.description or ""

    def resource_patterns(self) -> dict[str, str]:
        patterns: dict[str, str] = {}
        for name, parameter in self._method.parameters.items():
            if parameter.location == "path" and parameter.pattern:
                patterns[name] = _regex_to_template(parameter.pattern)
        return patterns


class DiscoveryInterfaceModel(InterfaceModel):
    """A top-level discovery resource."""

    def __init__(self, model: DiscoveryApiModel, name: str, resource: DiscoveryResource) -> None:
        self._model = model
        self._name = name
        self._methods = [
            DiscoveryMethodModel(model, self, simple_name, method)
            for simple_name, method in _collect_methods(resource, prefix="")
        ]

    @property
    def api_source(self) -> ApiSource:
        return ApiSource.DISCOVERY

    @property
    def full_name(self) -> str:
        return f"{self._model.package}.{upper_camel(self._name)}"

    @property
    def methods(self) -> list[MethodModel]:
        return list(self._methods)

    @property
    def is_reachable(self) -> bool:
        return True

    @property
    def package(self) -> str:
        return self._model.package

    @property
    def description(self) -> str:
        return ""


# ################
# Implementation
# ################

_STRING_FORMATS: dict[str, FieldKind] = {
    "int64": FieldKind.TYPE_INT64,
    "uint64": FieldKind.TYPE_UINT64,
    "byte": FieldKind.TYPE_BYTES,
}

_INTEGER_FORMATS: dict[str, FieldKind] = {
    "int32": FieldKind.TYPE_INT32,
    "uint32": FieldKind.TYPE_UINT32,
}


def _schema_kind(schema: Schema) -> FieldKind:
    if schema.ref or schema.type in ("object", "any", None):
        return FieldKind.TYPE_MESSAGE
    if schema.enum:
        return FieldKind.TYPE_ENUM
    if schema.type == "string":
        return _STRING_FORMATS.get(schema.format or "", FieldKind.TYPE_STRING)
    if schema.type == "integer":
        return _INTEGER_FORMATS.get(schema.format or "", FieldKind.TYPE_INT32)
    if schema.type == "number":
        return FieldKind.TYPE_FLOAT if schema.format == "float" else FieldKind.TYPE_DOUBLE
    if schema.type == "boolean":
        return FieldKind.TYPE_BOOL
    raise ValueError(f"unsupported discovery schema type '{schema.type}'")


def _collect_methods(resource: DiscoveryResource, prefix: str) -> list[tuple[str, DiscoveryMethod]]:
    collected = [
        (lower_camel(prefix + "_" + key) if prefix else key, method) for key, method in resource.methods.items()
    ]
    for child_name, child in resource.resources.items():
        child_prefix = f"{prefix}_{child_name}" if prefix else child_name
        collected.extend(_collect_methods(child, child_prefix))
    return collected


def _request_schema(name: str, method: DiscoveryMethod) -> Schema:
    ordered = [key for key in method.parameter_order if key in method.parameters]
    ordered += [key for key in method.parameters if key not in ordered]
    properties = {key: method.parameters[key] for key in ordered}
    if method.request is not None and method.request.ref:
        properties[lower_camel(method.request.ref) + "Resource"] = Schema(ref=method.request.ref)
    return Schema(id=name, type="object", properties=properties)


def _regex_to_template(pattern: str) -> str:
    template = pattern.removeprefix("^").removesuffix("$")
    return template.replace("[^/]+", "*").replace(".+", "**").replace(".*", "**")
