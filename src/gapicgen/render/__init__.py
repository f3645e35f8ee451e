# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Template rendering of interface views."""

from gapicgen.render.templates import (
    BUILTIN_TEMPLATES,
    OUTLINE_TEMPLATE_NAME,
    TemplateEngine,
    TemplateError,
    render_views,
    write_outputs,
)

__all__ = [
    "BUILTIN_TEMPLATES",
    "OUTLINE_TEMPLATE_NAME",
    "TemplateEngine",
    "TemplateError",
    "render_views",
    "write_outputs",
]
