# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-language naming of the generated surface."""

from gapicgen.naming.conventions import CaseStyle, InterpolationStyle, LanguageConventions, default_conventions
from gapicgen.naming.namer import FORMAT_PLACEHOLDER, NamingError, SurfaceNamer

__all__ = [
    "FORMAT_PLACEHOLDER",
    "CaseStyle",
    "InterpolationStyle",
    "LanguageConventions",
    "NamingError",
    "SurfaceNamer",
    "default_conventions",
]
