# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading and writing generation configuration documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gapicgen.config.schema import ConfigProto

# ###############
# Public Interface
# ###############


class ConfigLoadError(Exception):
    """Raised when a configuration document cannot be read, written, or is invalid."""


def load_config(path: Path) -> ConfigProto:
    """Load and validate a configuration document from disk.

    An empty file is treated as an empty configuration.

    Args:
        path: Path to the YAML configuration document.

    Returns:
        A validated ConfigProto instance.

    Raises:
        ConfigLoadError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Cannot read config '{path}': {exc}") from exc

    return parse_config(raw, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> ConfigProto:
    """Parse configuration YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Invalid YAML in config '{source_label}': {exc}") from exc

    if data is None:
        data = {}

    try:
        return ConfigProto.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid config '{source_label}': {exc}") from exc


def dump_config(config: ConfigProto) -> str:
    """Serialize a configuration document to YAML, omitting unset settings."""
    data: dict[str, Any] = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(_prune_empty(data), default_flow_style=False, sort_keys=False)


def save_config(config: ConfigProto, path: Path) -> None:
    """Write a configuration document to disk.

    Raises:
        ConfigLoadError: If the file cannot be written.
    """
    try:
        path.write_text(dump_config(config), encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Cannot write config '{path}': {exc}") from exc


# ################
# Implementation
# ################


def _prune_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _prune_empty(item) for key, item in value.items() if item not in ([], {})}
    if isinstance(value, list):
        return [_prune_empty(item) for item in value]
    return value
