# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Views of synthesized initialization code."""

from __future__ import annotations

from gapicgen.metacode.init_code import InitCode, InitCodeContext, generate_init_code
from gapicgen.metacode.lines import (
    FieldSetting,
    InitCodeLine,
    ListInitCodeLine,
    MapInitCodeLine,
    SimpleInitCodeLine,
    StructureInitCodeLine,
)
from gapicgen.model.api import TypeModel
from gapicgen.naming.namer import SurfaceNamer
from gapicgen.viewmodel.views import (
    FieldSettingView,
    InitCodeLineView,
    InitCodeView,
    ListInitCodeLineView,
    MapEntryView,
    MapInitCodeLineView,
    SimpleInitCodeLineView,
    StructureInitCodeLineView,
)

# ###############
# Public Interface
# ###############


class InitCodeTransformer:
    """Spells init-code statements in the target language."""

    def __init__(self, namer: SurfaceNamer) -> None:
        self._namer = namer

    def generate_init_code_view(self, context: InitCodeContext) -> InitCodeView:
        return self.init_code_view(generate_init_code(context))

    def init_code_view(self, init_code: InitCode) -> InitCodeView:
        assert isinstance(init_code.top_level_line, StructureInitCodeLine)
        root_type = init_code.top_level_line.type
        return InitCodeView(
            top_level_identifier=self._namer.local_var_name(init_code.top_level_line.identifier),
            lines=tuple(self.line_view(line) for line in init_code.lines),
            arg_fields=tuple(self._field_setting_view(root_type, setting) for setting in init_code.arg_fields),
        )

    def line_view(self, line: InitCodeLine) -> InitCodeLineView:
        namer = self._namer
        if isinstance(line, StructureInitCodeLine):
            return StructureInitCodeLineView(
                type_name=namer.type_name(line.type),
                identifier=namer.local_var_name(line.identifier),
                field_settings=tuple(self._field_setting_view(line.type, s) for s in line.field_settings),
            )
        if isinstance(line, ListInitCodeLine):
            return ListInitCodeLineView(
                type_name=namer.type_name(line.type),
                element_type_name=namer.type_name(line.type.make_optional()),
                identifier=namer.local_var_name(line.identifier),
                element_identifiers=tuple(namer.local_var_name(e) for e in line.element_identifiers),
            )
        if isinstance(line, MapInitCodeLine):
            return MapInitCodeLineView(
                type_name=namer.type_name(line.type),
                key_type_name=namer.type_name(line.key_type),
                value_type_name=namer.type_name(line.value_type),
                identifier=namer.local_var_name(line.identifier),
                entries=tuple(
                    MapEntryView(key=namer.literal(line.key_type, key), value_identifier=namer.local_var_name(ident))
                    for key, ident in line.element_identifiers
                ),
            )
        assert isinstance(line, SimpleInitCodeLine)
        return SimpleInitCodeLineView(
            type_name=namer.type_name(line.type),
            identifier=namer.local_var_name(line.identifier),
            value=self._value(line.type, line.init_value_config.initial_value),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _field_setting_view(self, parent_type: TypeModel, setting: FieldSetting) -> FieldSettingView:
        namer = self._namer
        field = parent_type.get_field(setting.field_name)
        setter = namer.field_setter_name(field) if field is not None else namer.method_name(setting.field_name)
        value = setting.init_value_config.initial_value
        return FieldSettingView(
            field_name=setting.field_name,
            setter_name=setter,
            type_name=namer.type_name(setting.type),
            identifier=namer.local_var_name(setting.identifier),
            value=self._value(setting.type, value) if value is not None else None,
        )

    def _value(self, type_model: TypeModel, value: str | None) -> str:
        if value is None:
            return self._namer.zero_value(type_model)
        return self._namer.literal(type_model, value)
