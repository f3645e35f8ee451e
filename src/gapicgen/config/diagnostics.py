# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Batch diagnostics collected while resolving configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


class Severity(enum.Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A problem found in the configuration or the model.

    Attributes:
        severity: Whether the problem aborts generation.
        message: Human-readable description.
        location: Where the problem was found, e.g. an interface or method name.
    """

    severity: Severity
    message: str
    location: str = "toplevel"

    @classmethod
    def error(cls, location: str, message: str) -> Diagnostic:
        return cls(Severity.ERROR, message, location)

    @classmethod
    def warning(cls, location: str, message: str) -> Diagnostic:
        return cls(Severity.WARNING, message, location)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class DiagCollector:
    """Accumulates diagnostics so that all problems are reported in one run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def error(self, location: str, message: str) -> None:
        self.add(Diagnostic.error(location, message))

    def warning(self, location: str, message: str) -> None:
        self.add(Diagnostic.warning(location, message))

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def has_errors(self) -> bool:
        """Return True if any error was collected."""
        return self.error_count > 0
