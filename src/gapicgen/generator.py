# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end generation: resolve the configuration, build views, render files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gapicgen.config.diagnostics import Diagnostic
from gapicgen.config.resolved import FieldSelectorError
from gapicgen.config.resolver import resolve
from gapicgen.config.schema import ConfigProto
from gapicgen.metacode.field_path import FieldPathError
from gapicgen.metacode.init_code import InitCodeError
from gapicgen.metacode.literals import LiteralValueError
from gapicgen.model.api import ApiModel
from gapicgen.naming.conventions import LanguageConventions
from gapicgen.naming.namer import NamingError, SurfaceNamer
from gapicgen.policy.engine import MethodPolicyEngine
from gapicgen.render.templates import TemplateEngine, TemplateError, render_views, write_outputs
from gapicgen.viewmodel.output import OutputSpecError
from gapicgen.viewmodel.surface import SurfaceTransformer
from gapicgen.viewmodel.views import InterfaceView

# ###############
# Public Interface
# ###############


class GenerationError(Exception):
    """Raised when a run cannot produce output. No file is written in that case.

    Attributes:
        messages: One entry per problem found.
    """

    def __init__(self, messages: list[str]) -> None:
        super().__init__("\n".join(messages))
        self.messages = messages


@dataclass
class GenerationResult:
    """Rendered files of a successful run.

    Attributes:
        outputs: File text keyed by file name relative to the output directory.
        views: The interface views the files were rendered from.
        warnings: Warnings collected while resolving the configuration.
    """

    outputs: dict[str, str]
    views: list[InterfaceView]
    warnings: list[Diagnostic] = field(default_factory=list)

    def write(self, output_dir: Path) -> list[Path]:
        return write_outputs(self.outputs, output_dir)


def generate(
    model: ApiModel,
    config_proto: ConfigProto,
    language: str | None = None,
    *,
    engine: MethodPolicyEngine | None = None,
    template_engine: TemplateEngine | None = None,
    conventions: dict[str, LanguageConventions] | None = None,
) -> GenerationResult:
    """Generate the client files of every configured interface.

    Args:
        model: The API model.
        config_proto: The configuration document.
        language: Target language. Defaults to the document's ``language``.
        engine: Heuristics that fill settings the document leaves unset.
        template_engine: Renders the views. A stock engine is used when omitted.
        conventions: Naming tables keyed by language, replacing the built-in ones.

    Returns:
        The rendered files. Nothing is written to disk.

    Raises:
        GenerationError: If the configuration has errors, or if building or
            rendering a view fails.
    """
    language = language or config_proto.language
    if not language:
        raise GenerationError(["no target language given"])
    if config_proto.language != language:
        config_proto = config_proto.model_copy(update={"language": language})

    try:
        namer = SurfaceNamer.for_language(language, conventions)
        result = resolve(model, config_proto, engine=engine)
    except (NamingError, FieldSelectorError) as exc:
        raise GenerationError([str(exc)]) from exc
    if result.config is None:
        raise GenerationError([str(d) for d in result.errors])

    try:
        views = SurfaceTransformer(namer).transform(result.config)
        outputs = render_views(views, template_engine)
    except (FieldPathError, InitCodeError, LiteralValueError, OutputSpecError, TemplateError) as exc:
        raise GenerationError([str(exc)]) from exc
    return GenerationResult(outputs=outputs, views=views, warnings=result.warnings)
