# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-language package naming for configuration generation.

A proto package such as ``google.example.library.v1`` is rewritten into the
package or namespace string each target language uses. The formatters are
kept in an explicit :class:`FormatterRegistry` that is built once and passed
to :func:`merge_language_settings`.
"""

from __future__ import annotations

import abc
import re
from dataclasses import dataclass

from gapicgen.config.diagnostics import DiagCollector
from gapicgen.config.schema import LanguageSettingsProto
from gapicgen.model.api import ApiModel
from gapicgen.util.name import is_version_segment

# ###############
# Public Interface
# ###############


class FormatterRegistryError(Exception):
    """Raised when a language has no registered formatter."""


@dataclass(frozen=True)
class RewriteRule:
    """A regex substitution applied to the whole package name."""

    pattern: str
    replacement: str

    def rewrite(self, package_name: str) -> str:
        return re.sub(self.pattern, self.replacement, package_name)


class LanguageFormatter(abc.ABC):
    """Turns a dotted proto package name into a language package name."""

    @abc.abstractmethod
    def format_package_name(self, package_name: str) -> str: ...


class SimpleLanguageFormatter(LanguageFormatter):
    """Rewrite, then join the dotted segments with *separator*.

    With *capitalize* set, each segment gets an upper-case first letter.
    """

    def __init__(self, separator: str, rewrite_rules: list[RewriteRule] | None = None, capitalize: bool = False):
        self.separator = separator
        self.rewrite_rules = list(rewrite_rules or [])
        self.capitalize = capitalize

    def format_package_name(self, package_name: str) -> str:
        for rule in self.rewrite_rules:
            package_name = rule.rewrite(package_name)
        segments = package_name.split(_PACKAGE_SEPARATOR)
        if self.capitalize:
            segments = [segment[:1].upper() + segment[1:] for segment in segments]
        return self.separator.join(segments)


class GoLanguageFormatter(LanguageFormatter):
    """``google.logging.v2`` becomes ``cloud.google.com/go/logging/apiv2``.

    Packages that do not look like ``google.<name>.v<N>`` become
    ``google.golang.org/<segments>``.
    """

    def format_package_name(self, package_name: str) -> str:
        segments = package_name.split(_PACKAGE_SEPARATOR)
        if len(segments) >= 3 and segments[0] == "google" and segments[-1].startswith("v"):
            return "cloud.google.com/go/" + "/".join(segments[1:-1]) + "/api" + segments[-1]
        return "/".join(["google.golang.org", *segments])


class NodeJSLanguageFormatter(LanguageFormatter):
    """Keeps the last two segments, e.g. ``library.v1``."""

    def format_package_name(self, package_name: str) -> str:
        segments = package_name.split(_PACKAGE_SEPARATOR)
        return ".".join(segments[-2:])


class PythonLanguageFormatter(LanguageFormatter):
    """Rewrite, then append ``.gapic``, folding a trailing version into the last segment.

    ``google.logging.v2`` becomes ``google.cloud.logging_v2.gapic``.
    """

    def __init__(self, rewrite_rules: list[RewriteRule] | None = None):
        self.rewrite_rules = list(rewrite_rules or [])

    def format_package_name(self, package_name: str) -> str:
        for rule in self.rewrite_rules:
            package_name = rule.rewrite(package_name)
        segments = package_name.split(_PACKAGE_SEPARATOR)
        if not is_version_segment(segments[-1]):
            return f"{package_name}.gapic"
        unversioned = _PACKAGE_SEPARATOR.join(segments[:-1])
        return f"{unversioned}_{segments[-1]}.gapic"


class FormatterRegistry:
    """Language name to :class:`LanguageFormatter` table, in registration order."""

    def __init__(self) -> None:
        self._formatters: dict[str, LanguageFormatter] = {}

    def register(self, language: str, formatter: LanguageFormatter) -> None:
        self._formatters[language.lower()] = formatter

    def get(self, language: str) -> LanguageFormatter:
        try:
            return self._formatters[language.lower()]
        except KeyError:
            raise FormatterRegistryError(f"No package formatter registered for language '{language}'") from None

    def languages(self) -> list[str]:
        return list(self._formatters)

    def __contains__(self, language: object) -> bool:
        return isinstance(language, str) and language.lower() in self._formatters


def default_formatter_registry() -> FormatterRegistry:
    """Return a registry with the formatters of all supported languages."""
    java_rules = [RewriteRule(r"^google(\.cloud)?", "com.google.cloud")]
    common_rules = [RewriteRule(r"^google(?!\.cloud)", "google.cloud")]

    registry = FormatterRegistry()
    registry.register("java", SimpleLanguageFormatter(".", java_rules))
    registry.register("python", PythonLanguageFormatter(common_rules))
    registry.register("go", GoLanguageFormatter())
    registry.register("csharp", SimpleLanguageFormatter(".", capitalize=True))
    registry.register("ruby", SimpleLanguageFormatter("::", common_rules, capitalize=True))
    registry.register("php", SimpleLanguageFormatter("\\", common_rules, capitalize=True))
    registry.register("nodejs", NodeJSLanguageFormatter())
    return registry


def merge_language_settings(
    model: ApiModel,
    registry: FormatterRegistry,
    diagnostics: DiagCollector,
) -> dict[str, LanguageSettingsProto] | None:
    """Compute the ``language_settings`` section for *model*.

    The package of the first interface is formatted for every registered
    language. Returns None and records an error when the model has no
    interface.
    """
    interfaces = model.interfaces
    if not interfaces:
        diagnostics.error("toplevel", "No interface found")
        return None
    package_name = interfaces[0].package
    return {
        language: LanguageSettingsProto(package_name=registry.get(language).format_package_name(package_name))
        for language in registry.languages()
    }


# ################
# Implementation
# ################

_PACKAGE_SEPARATOR = "."
