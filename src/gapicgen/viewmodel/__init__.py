# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Views of interfaces, methods and samples handed to templates."""

from gapicgen.viewmodel.init_code import InitCodeTransformer
from gapicgen.viewmodel.output import (
    RESPONSE_PLACEHOLDER,
    OutputContext,
    OutputSpecError,
    OutputTransformer,
    default_output_specs,
    response_type,
)
from gapicgen.viewmodel.scope import ScopeTable
from gapicgen.viewmodel.surface import SurfaceTransformer
from gapicgen.viewmodel.views import (
    ApiMethodView,
    ArrayLoopView,
    BatchingConfigView,
    BatchingDescriptorView,
    CollectionView,
    CommentView,
    DefineView,
    FieldSettingView,
    FlattenedMethodView,
    InitCodeView,
    InterfaceView,
    ListInitCodeLineView,
    LongRunningView,
    MapEntryView,
    MapInitCodeLineView,
    MapLoopView,
    PageStreamingDescriptorView,
    ParameterView,
    PrintView,
    ResourceNamePatternView,
    RetryCodesDefinitionView,
    RetryParamsDefinitionView,
    SampleView,
    SimpleInitCodeLineView,
    SmokeTestView,
    StringFormatView,
    StructureInitCodeLineView,
    VariableView,
    WriteFileView,
)

__all__ = [
    "RESPONSE_PLACEHOLDER",
    "ApiMethodView",
    "ArrayLoopView",
    "BatchingConfigView",
    "BatchingDescriptorView",
    "CollectionView",
    "CommentView",
    "DefineView",
    "FieldSettingView",
    "FlattenedMethodView",
    "InitCodeTransformer",
    "InitCodeView",
    "InterfaceView",
    "ListInitCodeLineView",
    "LongRunningView",
    "MapEntryView",
    "MapInitCodeLineView",
    "MapLoopView",
    "OutputContext",
    "OutputSpecError",
    "OutputTransformer",
    "PageStreamingDescriptorView",
    "ParameterView",
    "PrintView",
    "ResourceNamePatternView",
    "RetryCodesDefinitionView",
    "RetryParamsDefinitionView",
    "SampleView",
    "ScopeTable",
    "SimpleInitCodeLineView",
    "SmokeTestView",
    "StringFormatView",
    "StructureInitCodeLineView",
    "SurfaceTransformer",
    "VariableView",
    "WriteFileView",
    "default_output_specs",
    "response_type",
]
