# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-method code generation heuristics.

The engine looks only at the shape of a method's request and response and
decides which generation features apply:

1. **Page streaming**: the request has a page-token or page-size field, the
   response has a next-page-token field and exactly one repeated field.
   When the response has more than one repeated field the heuristic gives
   up and records a :class:`PolicyWarning` instead of guessing.
   Discovery documents spell collections either as an ``array`` or as an
   ``object`` with ``additionalProperties``. Both are repeated fields, so
   a map-valued field becomes the resources field without a separate rule.
2. **Flattening**: request fields outside any oneof and not used for paging
   become a single flattened overload, provided there are at most
   :data:`FLATTENING_THRESHOLD` of them.
3. **Request object method**: generated whenever the request has more
   than one field or some field is not part of the flattened overload,
   unless the method streams requests.
4. **Retry**: idempotent methods use the ``idempotent`` retry codes, all
   others ``non_idempotent``; both share the ``default`` retry params.

Each method is evaluated independently; the engine holds no per-run state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gapicgen.config.resolved import (
    DEFAULT_TIMEOUT_MILLIS,
    RETRY_CODES_IDEMPOTENT_NAME,
    RETRY_CODES_NON_IDEMPOTENT_NAME,
    RETRY_PARAMS_DEFAULT_NAME,
    FlatteningConfig,
    PageStreamingConfig,
    ResourceNameTreatment,
)
from gapicgen.model.api import FieldModel, MethodModel
from gapicgen.model.types import ApiSource
from gapicgen.util.name import lower_underscore, singularize

# ###############
# Public Interface
# ###############

FLATTENING_THRESHOLD = 4
REQUEST_OBJECT_METHOD_THRESHOLD = 1


@dataclass(frozen=True)
class PagingParameters:
    """Field names that identify paging in requests and responses."""

    page_token: str = "pageToken"
    page_size: str = "pageSize"
    next_page_token: str = "nextPageToken"

    @property
    def ignored_parameters(self) -> frozenset[str]:
        """Request fields that are never exposed as flattened parameters."""
        return frozenset({self.page_token, self.page_size})


@dataclass(frozen=True)
class PolicyWarning:
    """A heuristic that could not decide for a method.

    The affected feature is left disabled for the method.
    """

    method: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class RetryConfig:
    retry_codes_name: str
    retry_params_name: str


@dataclass(frozen=True)
class MethodPolicy:
    """Everything the engine decided for one method."""

    method: MethodModel
    page_streaming: PageStreamingConfig | None
    flattening: tuple[FlatteningConfig, ...]
    required_fields: tuple[FieldModel, ...]
    request_object_method: bool
    retry: RetryConfig
    field_name_patterns: dict[str, str]
    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    resource_name_treatment: str = ResourceNameTreatment.NONE
    warnings: tuple[PolicyWarning, ...] = ()


class MethodPolicyEngine:
    """Evaluates generation heuristics for individual methods."""

    def __init__(
        self,
        paging: PagingParameters | None = None,
        flattening_threshold: int = FLATTENING_THRESHOLD,
    ) -> None:
        self.paging = paging or PagingParameters()
        self.flattening_threshold = flattening_threshold

    def evaluate(self, method: MethodModel, collections: dict[str, str] | None = None) -> MethodPolicy:
        """Run every heuristic for *method*.

        Args:
            method: The method to evaluate.
            collections: Map of resource path template to entity name, used
                to name resource fields. Unlisted templates get an entity
                name derived from their last literal segment.
        """
        warnings: list[PolicyWarning] = []
        page_streaming = self.page_streaming(method, warnings)
        flattening, required_fields, request_object_method = self.flattening(method)
        treatment = ResourceNameTreatment.NONE
        if method.api_source is ApiSource.DISCOVERY:
            treatment = ResourceNameTreatment.STATIC_TYPES
        return MethodPolicy(
            method=method,
            page_streaming=page_streaming,
            flattening=flattening,
            required_fields=required_fields,
            request_object_method=request_object_method,
            retry=self.retry(method),
            field_name_patterns=self.field_name_patterns(method, collections or {}),
            resource_name_treatment=treatment,
            warnings=tuple(warnings),
        )

    def page_streaming(
        self, method: MethodModel, warnings: list[PolicyWarning] | None = None
    ) -> PageStreamingConfig | None:
        """Detect list-style paging.

        Appends a :class:`PolicyWarning` to *warnings* when the resources
        field is ambiguous.
        """
        token_field = method.input_field(self.paging.page_token)
        page_size_field = method.input_field(self.paging.page_size)
        if token_field is None and page_size_field is None:
            return None

        response_token: FieldModel | None = None
        resources: FieldModel | None = None
        for output_field in method.output_fields:
            if output_field.simple_name == self.paging.next_page_token:
                response_token = output_field
            elif output_field.is_repeated:
                if resources is None:
                    resources = output_field
                else:
                    if warnings is not None:
                        warnings.append(
                            PolicyWarning(
                                method=method.full_name,
                                message=(
                                    "Page Streaming resource field could not be heuristically "
                                    f"determined for method {method.simple_name}"
                                ),
                            )
                        )
                    return None

        if response_token is None or resources is None:
            return None
        return PageStreamingConfig(
            request_token_field=token_field,
            page_size_field=page_size_field,
            response_token_field=response_token,
            resources_field=resources,
        )

    def flattening(self, method: MethodModel) -> tuple[tuple[FlatteningConfig, ...], tuple[FieldModel, ...], bool]:
        """Return the flattening groups, required fields and request-object decision."""
        input_fields = method.input_fields
        parameters: list[FieldModel] = []
        for input_field in input_fields:
            # Oneofs exist only in proto descriptions.
            if method.api_source is ApiSource.PROTO and input_field.oneof is not None:
                continue
            if input_field.simple_name in self.paging.ignored_parameters:
                continue
            parameters.append(input_field)

        groups: tuple[FlatteningConfig, ...] = ()
        if 0 < len(parameters) <= self.flattening_threshold and not method.request_streaming:
            groups = (FlatteningConfig(tuple(parameters)),)

        request_object_method = (
            len(input_fields) > REQUEST_OBJECT_METHOD_THRESHOLD or len(input_fields) != len(parameters)
        ) and not method.request_streaming
        return groups, tuple(parameters), request_object_method

    def retry(self, method: MethodModel) -> RetryConfig:
        codes = RETRY_CODES_IDEMPOTENT_NAME if method.is_idempotent else RETRY_CODES_NON_IDEMPOTENT_NAME
        return RetryConfig(retry_codes_name=codes, retry_params_name=RETRY_PARAMS_DEFAULT_NAME)

    def field_name_patterns(self, method: MethodModel, collections: dict[str, str]) -> dict[str, str]:
        """Map each resource-carrying request field to its entity name."""
        return {
            field_path: collections.get(template) or entity_name_for_template(template)
            for field_path, template in method.resource_patterns().items()
        }


def entity_name_for_template(template: str) -> str:
    """Derive an entity name from a resource path template.

    Example::

        >>> entity_name_for_template("shelves/*/books/*")
        'book'
    """
    literals = [segment for segment in template.split("/") if segment and not _WILDCARD_RE.match(segment)]
    if not literals:
        return "resource"
    return lower_underscore(singularize(literals[-1]))


# ################
# Implementation
# ################

_WILDCARD_RE = re.compile(r"^(\*\*?|\{[^}]*\})$")
