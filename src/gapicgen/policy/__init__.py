# Copyright 2026 GapicGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Method policy heuristics and the starter configuration built from them."""

from gapicgen.policy.configgen import generate_config
from gapicgen.policy.engine import (
    DEFAULT_TIMEOUT_MILLIS,
    FLATTENING_THRESHOLD,
    RETRY_CODES_IDEMPOTENT_NAME,
    RETRY_CODES_NON_IDEMPOTENT_NAME,
    RETRY_PARAMS_DEFAULT_NAME,
    MethodPolicy,
    MethodPolicyEngine,
    PagingParameters,
    PolicyWarning,
    RetryConfig,
    entity_name_for_template,
)

__all__ = [
    "DEFAULT_TIMEOUT_MILLIS",
    "FLATTENING_THRESHOLD",
    "RETRY_CODES_IDEMPOTENT_NAME",
    "RETRY_CODES_NON_IDEMPOTENT_NAME",
    "RETRY_PARAMS_DEFAULT_NAME",
    "MethodPolicy",
    "MethodPolicyEngine",
    "PagingParameters",
    "PolicyWarning",
    "RetryConfig",
    "entity_name_for_template",
    "generate_config",
]
