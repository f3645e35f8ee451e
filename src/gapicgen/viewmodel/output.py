# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Interpreter for sample output statements.

Output statements describe what a sample does with the response: print
values, loop over a repeated field or a map, define local variables, write
bytes to a file or emit a comment. Every statement is type-checked against
the API model before it becomes a view.

Values are named by accessor expressions::

    accessor := IDENT ( '.' IDENT | '[' INT ']' | '{' key '}' )*

The base identifier is either ``$resp`` (the response) or a variable
declared by an earlier statement.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gapicgen.config.resolved import MethodConfig
from gapicgen.config.schema import LoopStatementProto, OutputSpecProto, WriteFileStatementProto
from gapicgen.metacode.literals import LiteralValueError, validate_literal
from gapicgen.metacode.scanner import ScanError, Token, TokenType, tokenize
from gapicgen.model.api import TypeModel
from gapicgen.naming.namer import FORMAT_PLACEHOLDER, NamingError, SurfaceNamer
from gapicgen.viewmodel.scope import ScopeTable
from gapicgen.viewmodel.views import (
    ArrayLoopView,
    CommentView,
    DefineView,
    MapLoopView,
    OutputView,
    PrintView,
    StringFormatView,
    VariableView,
    WriteFileView,
)

# ###############
# Public Interface
# ###############

RESPONSE_PLACEHOLDER = "$resp"


class OutputSpecError(ValueError):
    """Raised for an output statement that is malformed or does not type-check."""


@dataclass
class OutputContext:
    """State shared by the output statements of one sample.

    Attributes:
        scope_table: Variables visible to the current block.
        string_formatted_variable_types: Types of all values printed.
        file_output_types: Types of all values written to files.
        map_specs: Map loops, for templates that need helper imports.
    """

    scope_table: ScopeTable = field(default_factory=ScopeTable)
    string_formatted_variable_types: list[TypeModel] = field(default_factory=list)
    file_output_types: list[TypeModel] = field(default_factory=list)
    map_specs: list[LoopStatementProto] = field(default_factory=list)

    def create_with_new_child_scope(self) -> OutputContext:
        return OutputContext(
            scope_table=self.scope_table.new_child(),
            string_formatted_variable_types=self.string_formatted_variable_types,
            file_output_types=self.file_output_types,
            map_specs=self.map_specs,
        )

    @property
    def has_multiple_file_outputs(self) -> bool:
        return len(self.file_output_types) > 1


def response_type(method_config: MethodConfig) -> TypeModel:
    """The type ``$resp`` denotes for a method.

    Page-streaming methods yield resources one by one, and long-running
    methods yield their final result.
    """
    if method_config.page_streaming is not None:
        return method_config.page_streaming.resources_element_type
    if method_config.long_running is not None:
        return method_config.long_running.return_type
    return method_config.method.output_type


def default_output_specs(method_config: MethodConfig) -> list[OutputSpecProto]:
    """Print the response, unless the method returns nothing."""
    if method_config.method.output_type.is_empty_type:
        return []
    if method_config.long_running is not None and method_config.long_running.return_type.is_empty_type:
        return []
    return [OutputSpecProto(print_=[FORMAT_PLACEHOLDER, RESPONSE_PLACEHOLDER])]


class OutputTransformer:
    """Turns the output statements of one sample into views.

    Args:
        method_config: The method the sample calls.
        namer: Names variables and accessors in the target language.
        value_set_id: Identifier of the sample, used in error messages.
    """

    def __init__(self, method_config: MethodConfig, namer: SurfaceNamer, value_set_id: str) -> None:
        self._method_config = method_config
        self._namer = namer
        self._value_set_id = value_set_id

    def to_views(self, specs: list[OutputSpecProto], context: OutputContext | None = None) -> tuple[OutputView, ...]:
        context = context if context is not None else OutputContext()
        return tuple(self.to_view(spec, context) for spec in specs)

    def to_view(self, spec: OutputSpecProto, context: OutputContext) -> OutputView:
        """Convert one statement. Exactly one of its fields must be set."""
        once = _Once(self._prefix)
        view: OutputView | None = None
        if spec.loop is not None:
            once()
            view = self._loop_view(spec.loop, context)
        if spec.print_:
            once()
            view = self._print_view(spec.print_, context)
        if spec.define:
            once()
            view = self._define_view(spec.define, context)
        if spec.comment:
            once()
            view = self._comment_view(spec.comment)
        if spec.write_file is not None:
            once()
            view = self._write_file_view(spec.write_file, context)

        if view is None:
            raise OutputSpecError(f"{self._prefix}: one field of OutputSpec must be set")
        return view

    def accessor(
        self,
        expression: str,
        scope: ScopeTable,
        new_var: str | None = None,
        scalar_type_for_collection: bool = False,
    ) -> VariableView:
        """Type-check an accessor expression and build its view.

        If *new_var* is given it is declared in *scope* with the type the
        expression evaluates to, or with the element type when
        *scalar_type_for_collection* is set.
        """
        tokens = self._tokenize(expression)
        return _AccessorParser(self, expression, tokens).parse(scope, new_var, scalar_type_for_collection)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _print_view(self, config: list[str], context: OutputContext) -> PrintView:
        return PrintView(formatted_string=self._string_format_view(config, context))

    def _write_file_view(self, config: WriteFileStatementProto, context: OutputContext) -> WriteFileView:
        file_name = self._string_format_view(config.file_name, context)
        contents = self.accessor(config.contents, context.scope_table)
        if not (contents.type.is_string_type or contents.type.is_bytes_type):
            raise OutputSpecError(f"Output to file: expected string or bytes, found {contents.type.full_name}")
        context.file_output_types.append(contents.type)
        return WriteFileView(file_name=file_name, contents=contents, is_first=not context.has_multiple_file_outputs)

    def _string_format_view(self, config: list[str], context: OutputContext) -> StringFormatView:
        if not config:
            raise OutputSpecError(f"{self._prefix}: print spec cannot be empty")
        args = []
        for path in config[1:]:
            variable = self.accessor(path, context.scope_table)
            context.string_formatted_variable_types.append(variable.type)
            args.append(self._namer.formatted_print_arg(variable.variable, variable.accessors))
        try:
            format_string, remaining = self._namer.interpolated_format_and_args(config[0], tuple(args))
        except NamingError as exc:
            raise OutputSpecError(f"{self._prefix}: {exc}") from exc
        return StringFormatView(format=format_string, args=remaining)

    def _loop_view(self, loop: LoopStatementProto, context: OutputContext) -> OutputView:
        if loop.collection and not loop.map:
            if not loop.variable:
                raise OutputSpecError("Bad format: `variable` must be specified if `collection` is specified.")
            if loop.key or loop.value:
                raise OutputSpecError(
                    "Bad format: neither `key` nor `value` can be specified if `collection` is specified."
                )
            return self._array_loop_view(loop, context.create_with_new_child_scope())
        if loop.map and not loop.collection:
            if loop.variable:
                raise OutputSpecError("Bad format: `variable` can't be specified if `map` is specified.")
            if not (loop.key or loop.value):
                raise OutputSpecError(
                    "Bad format: at least one of `key` and `value` must be specified if `map` is specified."
                )
            return self._map_loop_view(loop, context.create_with_new_child_scope())
        raise OutputSpecError("Bad format: exactly one of `map` and `collection` should be specified in `loop`.")

    def _array_loop_view(self, loop: LoopStatementProto, context: OutputContext) -> ArrayLoopView:
        scope = context.scope_table
        self._assert_identifier_not_used(loop.variable)
        collection = self.accessor(loop.collection, scope, new_var=loop.variable, scalar_type_for_collection=True)
        return ArrayLoopView(
            variable_type_name=scope.get_type_name(loop.variable) or "",
            variable_name=self._namer.local_var_name(loop.variable),
            collection=collection,
            body=tuple(self.to_view(body, context) for body in loop.body),
        )

    def _map_loop_view(self, loop: LoopStatementProto, context: OutputContext) -> MapLoopView:
        context.map_specs.append(loop)
        scope = context.scope_table
        map_var = self.accessor(loop.map, scope)
        if not map_var.type.is_map:
            raise OutputSpecError(f"{self._prefix}: {loop.map} is not a map field")
        key_type = map_var.type.map_key_type()
        value_type = map_var.type.map_value_type()
        key_type_name = self._namer.type_name(key_type)
        value_type_name = self._namer.type_name(value_type)

        declared = ((loop.key, key_type, key_type_name), (loop.value, value_type, value_type_name))
        for name, type_model, type_name in declared:
            if name:
                self._assert_identifier_not_used(name)
                if not scope.put(name, type_model, type_name):
                    raise OutputSpecError(f"{self._prefix}: duplicate variable declaration not allowed: {name}")

        return MapLoopView(
            key_type_name=key_type_name,
            key_variable_name=self._namer.local_var_name(loop.key) if loop.key else "",
            value_type_name=value_type_name,
            value_variable_name=self._namer.local_var_name(loop.value) if loop.value else "",
            map=map_var,
            body=tuple(self.to_view(body, context) for body in loop.body),
        )

    def _define_view(self, definition: str, context: OutputContext) -> DefineView:
        tokens = self._tokenize(definition)
        if tokens[0].type is not TokenType.IDENT:
            raise OutputSpecError(f"{self._prefix}: expected identifier: {definition}")
        identifier = tokens[0].value
        self._assert_identifier_not_used(identifier)
        if tokens[1].type is not TokenType.EQUALS:
            raise OutputSpecError(f"{self._prefix} invalid definition, expecting '=': {definition}")
        reference = self.accessor(definition[tokens[1].offset + 1 :], context.scope_table, new_var=identifier)
        return DefineView(
            variable_type_name=context.scope_table.get_type_name(identifier) or "",
            variable_name=self._namer.local_var_name(identifier),
            reference=reference,
        )

    def _comment_view(self, config: list[str]) -> CommentView:
        pieces = config[0].split(FORMAT_PLACEHOLDER)
        args = [self._namer.local_var_name(arg) for arg in config[1:]]
        if len(pieces) - 1 != len(args):
            raise OutputSpecError(
                f"{self._prefix}: comment '{config[0]}' has {len(pieces) - 1} placeholders but {len(args)} arguments"
            )
        text = pieces[0] + "".join(arg + piece for arg, piece in zip(args, pieces[1:]))
        return CommentView(lines=tuple(text.split("\n")))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _prefix(self) -> str:
        return f"{self._method_config.method.simple_name}:{self._value_set_id}"

    def _tokenize(self, expression: str) -> list[Token]:
        try:
            return tokenize(expression)
        except ScanError as exc:
            raise OutputSpecError(f"{self._prefix}: {exc}: {expression}") from exc

    def _assert_identifier_not_used(self, identifier: str) -> None:
        if identifier in self._namer.sample_used_var_names():
            raise OutputSpecError(
                f'{self._method_config.method.simple_name}: {self._value_set_id} cannot define variable "{identifier}":'
                " it is used by the sample template."
            )


# ################
# Implementation
# ################


class _Once:
    """Raises on the second call."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._ran = False

    def __call__(self) -> None:
        if self._ran:
            raise OutputSpecError(f"{self._prefix}: only one field of OutputSpec may be set")
        self._ran = True


class _AccessorParser:
    """Walks an accessor's tokens, tracking the type reached after each step."""

    def __init__(self, transformer: OutputTransformer, expression: str, tokens: list[Token]) -> None:
        self._transformer = transformer
        self._namer = transformer._namer
        self._prefix = transformer._prefix
        self._expression = expression
        self._tokens = tokens
        self._pos = 0

    def parse(self, scope: ScopeTable, new_var: str | None, scalar_type_for_collection: bool) -> VariableView:
        base = self._expect(TokenType.IDENT, "expected identifier")
        if base.value == RESPONSE_PLACEHOLDER:
            variable = self._namer.sample_response_var_name()
            type_model = response_type(self._transformer._method_config)
        else:
            variable = self._namer.local_var_name(base.value)
            found = scope.get_type_model(base.value)
            if found is None:
                raise OutputSpecError(f"{self._prefix}: variable not defined: {base.value}")
            type_model = found

        accessors: list[str] = []
        while self._current().type is not TokenType.EOF:
            token = self._advance()
            if token.type is TokenType.DOT:
                type_model = self._field_step(type_model, accessors)
            elif token.type is TokenType.LBRACKET:
                type_model = self._index_step(type_model, accessors)
            elif token.type is TokenType.LBRACE:
                type_model = self._map_key_step(type_model, accessors)
            else:
                raise OutputSpecError(f"{self._prefix}: unexpected character: {token.value!r}")

        if new_var is not None:
            self._transformer._assert_identifier_not_used(new_var)
            if scalar_type_for_collection:
                if not type_model.is_repeated or type_model.is_map:
                    raise OutputSpecError(f"{self._prefix}: {self._expression} is not a repeated field")
                type_model = type_model.make_optional()
            if not scope.put(new_var, type_model, self._namer.type_name(type_model)):
                raise OutputSpecError(f"{self._prefix}: duplicate variable declaration not allowed: {new_var}")

        return VariableView(variable=variable, accessors=tuple(accessors), type=type_model)

    # ------------------------------------------------------------------
    # Accessor steps
    # ------------------------------------------------------------------

    def _field_step(self, type_model: TypeModel, accessors: list[str]) -> TypeModel:
        if not type_model.is_message:
            raise OutputSpecError(f"{self._prefix}: {self._expression} is not a message")
        if type_model.is_repeated or type_model.is_map:
            raise OutputSpecError(f"{self._prefix}: {self._expression} is not scalar")
        name = self._expect(TokenType.IDENT, "expected identifier").value
        found = type_model.get_field(name)
        if found is None:
            raise OutputSpecError(f"{self._prefix}: type {type_model.full_name} does not have field {name}")
        accessors.append(self._namer.field_accessor_name(found))
        return found.type

    def _index_step(self, type_model: TypeModel, accessors: list[str]) -> TypeModel:
        if not type_model.is_repeated or type_model.is_map:
            raise OutputSpecError(f"{self._prefix}: {self._expression} is not a repeated field")
        index = self._expect(TokenType.INT, "expected int in index expression")
        accessors.append(self._namer.index_accessor_name(int(index.value)))
        self._expect(TokenType.RBRACKET, "expected ']'")
        return type_model.make_optional()

    def _map_key_step(self, type_model: TypeModel, accessors: list[str]) -> TypeModel:
        if not type_model.is_map:
            raise OutputSpecError(f"{self._prefix}: {self._expression} is not a map field")
        key_type = type_model.map_key_type()
        if key_type.is_string_type:
            key = self._expect(TokenType.STRING, "expected string type for map key")
            literal = f'"{key.value}"'
        elif key_type.is_boolean_type:
            key = self._expect(TokenType.IDENT, "expected boolean type for map key")
            literal = key.value
        else:
            key = self._expect(TokenType.INT, "expected integral type for map key")
            literal = key.value
        try:
            normalized = validate_literal(key_type.kind, literal)
        except LiteralValueError as exc:
            raise OutputSpecError(f"{self._prefix}: {exc}") from exc
        accessors.append(self._namer.map_key_accessor_name(key_type, normalized))
        self._expect(TokenType.RBRACE, "expected '}'")
        return type_model.map_value_type()

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if self._current().type is not token_type:
            raise OutputSpecError(f"{self._prefix}: {message}: {self._expression}")
        return self._advance()
