# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Case conversion and small word utilities used by the naming layer."""

from __future__ import annotations

import re

# ###############
# Public Interface
# ###############


def split_words(name: str) -> list[str]:
    """Split an identifier in any common case style into lowercase words.

    Example::

        >>> split_words("listFoos_page-token")
        ['list', 'foos', 'page', 'token']
    """
    spaced = _BOUNDARY_RE.sub(r"\1_\2", name)
    spaced = _ACRONYM_RE.sub(r"\1_\2", spaced)
    return [word.lower() for word in _SEPARATOR_RE.split(spaced) if word]


def lower_camel(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def upper_camel(name: str) -> str:
    return "".join(word.capitalize() for word in split_words(name))


def lower_underscore(name: str) -> str:
    return "_".join(split_words(name))


def upper_underscore(name: str) -> str:
    return lower_underscore(name).upper()


def lower_hyphen(name: str) -> str:
    return "-".join(split_words(name))


def singularize(word: str) -> str:
    """Return a best-effort singular form of an English plural noun."""
    lowered = word.lower()
    if lowered.endswith("lves"):
        return word[:-3] + "f"
    if lowered.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if lowered.endswith(("sses", "shes", "ches", "xes")):
        return word[:-2]
    if lowered.endswith("s") and not lowered.endswith("ss") and len(word) > 1:
        return word[:-1]
    return word


def is_version_segment(segment: str) -> bool:
    """Return True for API version package segments such as ``v1`` or ``v2beta1``."""
    return _VERSION_RE.match(segment) is not None


# ################
# Implementation
# ################

_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[_\-\s.]+")
_VERSION_RE = re.compile(r"^v\d+(p\d+)?((alpha|beta)\d*)?$")
