# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Names, accessors and literals of the generated surface, per target language."""

from __future__ import annotations

from gapicgen.model.api import FieldModel, InterfaceModel, MethodModel, TypeModel
from gapicgen.naming.conventions import CaseStyle, InterpolationStyle, LanguageConventions, default_conventions
from gapicgen.util.name import lower_camel, lower_hyphen, lower_underscore, upper_camel, upper_underscore

# ###############
# Public Interface
# ###############

FORMAT_PLACEHOLDER = "%s"


class NamingError(ValueError):
    """Raised for an unknown target language or a malformed print format."""


class SurfaceNamer:
    """Derives every generated name from a :class:`LanguageConventions` table.

    Names are accepted in any case style (``listShelves``, ``list_shelves``)
    and converted to the style the table prescribes for their position.
    """

    def __init__(self, conventions: LanguageConventions) -> None:
        self._conventions = conventions

    @classmethod
    def for_language(
        cls, language: str, conventions: dict[str, LanguageConventions] | None = None
    ) -> SurfaceNamer:
        """Return a namer for *language*, looked up in *conventions* or the built-in tables.

        Raises:
            NamingError: If no table exists for *language*.
        """
        tables = conventions if conventions is not None else default_conventions()
        if language not in tables:
            known = ", ".join(sorted(tables))
            raise NamingError(f"no naming conventions for language '{language}' (known: {known})")
        return cls(tables[language])

    @property
    def conventions(self) -> LanguageConventions:
        return self._conventions

    @property
    def language(self) -> str:
        return self._conventions.language

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def local_var_name(self, name: str) -> str:
        """A local variable name; reserved words get a trailing underscore."""
        converted = _apply_case(self._conventions.local_var_case, name)
        if converted in self._conventions.reserved_words:
            return converted + "_"
        return converted

    def method_name(self, name: str) -> str:
        return _apply_case(self._conventions.method_case, name)

    def class_name(self, name: str) -> str:
        return upper_camel(name)

    def constant_name(self, name: str) -> str:
        return _apply_case(self._conventions.constant_case, name)

    def api_wrapper_class_name(self, interface: InterfaceModel) -> str:
        return self.class_name(interface.simple_name) + self._conventions.client_suffix

    def api_method_name(self, method: MethodModel) -> str:
        return self.method_name(method.simple_name)

    def file_name(self, interface: InterfaceModel) -> str:
        base = _apply_case(self._conventions.file_name_case, self.api_wrapper_class_name(interface))
        return base + self._conventions.file_extension

    def smoke_test_class_name(self, interface: InterfaceModel) -> str:
        return self.class_name(interface.simple_name) + "SmokeTest"

    def unit_test_class_name(self, interface: InterfaceModel) -> str:
        return self.api_wrapper_class_name(interface) + "Test"

    def mock_service_class_name(self, interface: InterfaceModel) -> str:
        return "Mock" + self.class_name(interface.simple_name)

    def mock_service_impl_class_name(self, interface: InterfaceModel) -> str:
        return self.mock_service_class_name(interface) + "Impl"

    def test_case_name(self, method: MethodModel) -> str:
        return self.method_name(f"{lower_underscore(method.simple_name)}_test")

    def paged_response_type_name(self, method: MethodModel) -> str:
        return self.class_name(method.simple_name) + "PagedResponse"

    def page_streaming_descriptor_name(self, method: MethodModel) -> str:
        return self.constant_name(f"{lower_underscore(method.simple_name)}_page_str_desc")

    def batching_descriptor_name(self, method: MethodModel) -> str:
        return self.constant_name(f"{lower_underscore(method.simple_name)}_batching_desc")

    def retry_codes_constant_name(self, name: str) -> str:
        return self.constant_name(f"{name}_retry_codes")

    def retry_params_constant_name(self, name: str) -> str:
        return self.constant_name(f"{name}_retry_params")

    def sample_response_var_name(self) -> str:
        return self.local_var_name("response")

    def sample_used_var_names(self) -> frozenset[str]:
        """Names the sample template declares itself; output statements may not reuse them."""
        return self._conventions.sample_reserved_names

    # ------------------------------------------------------------------
    # Field accessors
    # ------------------------------------------------------------------

    def field_getter_name(self, field: FieldModel) -> str:
        return self._conventions.getter_pattern.format(name=self._field_name(field))

    def field_setter_name(self, field: FieldModel) -> str:
        return self._conventions.setter_pattern.format(name=self._field_name(field))

    def field_count_getter_name(self, field: FieldModel) -> str:
        return self._conventions.count_getter_pattern.format(name=self._field_name(field))

    def field_accessor_name(self, field: FieldModel) -> str:
        return self._conventions.field_accessor_pattern.format(name=self._field_name(field))

    def index_accessor_name(self, index: int) -> str:
        return self._conventions.index_accessor_pattern.format(index=index)

    def map_key_accessor_name(self, key_type: TypeModel, key: str) -> str:
        """Accessor for a map entry; *key* is the normalized key literal."""
        return self._conventions.map_key_accessor_pattern.format(key=self.literal(key_type, key))

    # ------------------------------------------------------------------
    # Types and literals
    # ------------------------------------------------------------------

    def type_name(self, type_model: TypeModel) -> str:
        """The language's name for *type_model*, including collection wrappers."""
        if type_model.is_map:
            return self._conventions.map_type_pattern.format(
                key=self.type_name(type_model.map_key_type()),
                value=self.type_name(type_model.map_value_type()),
            )
        element = self._element_type_name(type_model)
        if type_model.is_repeated:
            return self._conventions.repeated_type_pattern.format(type=element)
        return element

    def literal(self, type_model: TypeModel, value: str) -> str:
        """Spell the normalized literal *value* of *type_model* in the target language."""
        conventions = self._conventions
        if type_model.is_string_type or type_model.is_bytes_type:
            quote = conventions.string_quote
            return f"{quote}{value}{quote}"
        if type_model.is_boolean_type:
            return conventions.true_literal if value == "true" else conventions.false_literal
        if type_model.is_integer_type and type_model.kind.value.endswith("64"):
            return value + conventions.long_suffix
        if type_model.is_floating_type and type_model.kind.value == "float":
            return value + conventions.float_suffix
        return value

    def zero_value(self, type_model: TypeModel) -> str:
        """The value of a variable the sample declares but does not fill."""
        conventions = self._conventions
        if type_model.is_map:
            return conventions.empty_map_literal
        if type_model.is_repeated:
            return conventions.empty_list_literal
        if type_model.is_string_type or type_model.is_bytes_type:
            return self.literal(type_model, "")
        if type_model.is_boolean_type:
            return conventions.false_literal
        if type_model.is_primitive:
            return self.literal(type_model, "0")
        return conventions.null_literal

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def formatted_print_arg(self, variable: str, accessors: tuple[str, ...]) -> str:
        return variable + "".join(accessors)

    def interpolated_format_and_args(self, format_string: str, args: tuple[str, ...]) -> tuple[str, tuple[str, ...]]:
        """Rewrite a ``%s`` format string for the target language.

        Returns:
            The rewritten format string and the arguments still to be passed
            separately (none for inline interpolation).

        Raises:
            NamingError: If the number of placeholders and arguments differ.
        """
        pieces = format_string.split(FORMAT_PLACEHOLDER)
        if len(pieces) - 1 != len(args):
            raise NamingError(
                f"format '{format_string}' has {len(pieces) - 1} placeholders but {len(args)} arguments were given"
            )
        style = self._conventions.interpolation
        if style is InterpolationStyle.POSITIONAL:
            return self._conventions.format_placeholder.join(pieces), args

        result = [pieces[0]]
        for index, (arg, piece) in enumerate(zip(args, pieces[1:])):
            result.append(self._conventions.format_placeholder.format(index=index, arg=arg))
            result.append(piece)
        if style is InterpolationStyle.INLINE:
            return "".join(result), ()
        return "".join(result), args

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _field_name(self, field: FieldModel) -> str:
        return _apply_case(self._conventions.field_case, field.simple_name)

    def _element_type_name(self, type_model: TypeModel) -> str:
        names = self._conventions.primitive_type_names
        if type_model.kind in names:
            return names[type_model.kind]
        return self.class_name(type_model.simple_name)


# ################
# Implementation
# ################

_CASE_CONVERTERS = {
    CaseStyle.LOWER_CAMEL: lower_camel,
    CaseStyle.UPPER_CAMEL: upper_camel,
    CaseStyle.LOWER_UNDERSCORE: lower_underscore,
    CaseStyle.UPPER_UNDERSCORE: upper_underscore,
    CaseStyle.LOWER_HYPHEN: lower_hyphen,
}


def _apply_case(style: CaseStyle, name: str) -> str:
    return _CASE_CONVERTERS[style](name)
