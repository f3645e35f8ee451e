# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of API descriptions from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gapicgen.model.api import ApiModel
from gapicgen.model.discovery import DiscoveryDocument
from gapicgen.model.discovery_model import DiscoveryApiModel
from gapicgen.model.proto import ProtoApi
from gapicgen.model.proto_model import ProtoApiModel

# ###############
# Public Interface
# ###############


class ModelLoadError(Exception):
    """Raised when an API description cannot be read or is invalid."""


def load_api_model(path: Path) -> ApiModel:
    """Load a proto description or a discovery document.

    ``.json`` files are parsed as JSON, everything else as YAML. A document
    with a ``discoveryVersion`` or a ``kind`` of ``discovery#restDescription``
    is read as a discovery document; any other mapping as a proto description.

    Args:
        path: Path to the description file.

    Returns:
        The model facade over the loaded description.

    Raises:
        ModelLoadError: If the file cannot be read, cannot be parsed, or does
            not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(f"Cannot read API description '{path}': {exc}") from exc

    data = _parse(raw, path)
    if not isinstance(data, dict):
        raise ModelLoadError(f"{path}: API description must be a mapping")
    return api_model_from_dict(data, source_label=str(path))


def api_model_from_dict(data: dict[str, Any], source_label: str = "<dict>") -> ApiModel:
    """Build a model facade from already-parsed description data."""
    try:
        if _is_discovery(data):
            return DiscoveryApiModel(DiscoveryDocument.model_validate(data))
        return ProtoApiModel(ProtoApi.model_validate(data))
    except ValidationError as exc:
        raise ModelLoadError(f"Invalid API description '{source_label}': {exc}") from exc


# ################
# Implementation
# ################


def _parse(raw: str, path: Path) -> Any:
    if path.suffix == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ModelLoadError(f"Invalid JSON in API description '{path}': {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ModelLoadError(f"Invalid YAML in API description '{path}': {exc}") from exc


def _is_discovery(data: dict[str, Any]) -> bool:
    return "discoveryVersion" in data or data.get("kind") == "discovery#restDescription"
