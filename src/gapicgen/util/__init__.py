# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Small shared helpers: case conversion and unique identifier allocation."""

from gapicgen.util.name import (
    is_version_segment,
    lower_camel,
    lower_hyphen,
    lower_underscore,
    singularize,
    split_words,
    upper_camel,
    upper_underscore,
)
from gapicgen.util.symbol_table import SuffixStyle, SymbolTable

__all__ = [
    "SuffixStyle",
    "SymbolTable",
    "is_version_segment",
    "lower_camel",
    "lower_hyphen",
    "lower_underscore",
    "singularize",
    "split_words",
    "upper_camel",
    "upper_underscore",
]
