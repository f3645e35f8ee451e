# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""API model: source descriptions and the source-agnostic facade over them."""

from gapicgen.model.api import (
    ApiModel,
    FieldModel,
    InterfaceModel,
    MethodModel,
    TypeModel,
    UnsupportedOperationError,
)
from gapicgen.model.discovery import DiscoveryDocument, DiscoveryMethod, DiscoveryResource, Schema
from gapicgen.model.discovery_model import (
    DiscoveryApiModel,
    DiscoveryFieldModel,
    DiscoveryInterfaceModel,
    DiscoveryMethodModel,
    DiscoveryTypeModel,
)
from gapicgen.model.loader import ModelLoadError, api_model_from_dict, load_api_model
from gapicgen.model.proto import (
    EnumDef,
    HttpRule,
    MessageDef,
    ProtoApi,
    ProtoFieldDef,
    ProtoFile,
    ProtoMethodDef,
    ProtoTypeRef,
    ServiceDef,
)
from gapicgen.model.proto_model import (
    ProtoApiModel,
    ProtoFieldModel,
    ProtoInterfaceModel,
    ProtoMethodModel,
    ProtoTypeModel,
    parse_path_template_bindings,
)
from gapicgen.model.types import ApiSource, Cardinality, FieldKind

__all__ = [
    "ApiModel",
    "ApiSource",
    "Cardinality",
    "DiscoveryApiModel",
    "DiscoveryDocument",
    "DiscoveryFieldModel",
    "DiscoveryInterfaceModel",
    "DiscoveryMethod",
    "DiscoveryMethodModel",
    "DiscoveryResource",
    "DiscoveryTypeModel",
    "EnumDef",
    "FieldKind",
    "FieldModel",
    "HttpRule",
    "InterfaceModel",
    "MessageDef",
    "MethodModel",
    "ModelLoadError",
    "ProtoApi",
    "ProtoApiModel",
    "ProtoFieldDef",
    "ProtoFieldModel",
    "ProtoFile",
    "ProtoInterfaceModel",
    "ProtoMethodDef",
    "ProtoMethodModel",
    "ProtoTypeModel",
    "ProtoTypeRef",
    "Schema",
    "ServiceDef",
    "TypeModel",
    "UnsupportedOperationError",
    "api_model_from_dict",
    "load_api_model",
    "parse_path_template_bindings",
]
