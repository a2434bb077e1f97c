# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Models for the metric queries accepted by the builder and the fragments it produces.

Models are implemented as frozen dataclasses. They are validated on creation, so a
model that exists is always well formed and the formatters that consume them do not
repeat the checks.
"""
from .metric_query import (
    InvalidMetricQuery,
    MetricQuery,
    MetricQueryParams,
    sort_dimensions,
    validate_as_metric_query_params,
)
from .query_fragment import QueryFragment

__all__ = [
    "InvalidMetricQuery",
    "MetricQuery",
    "MetricQueryParams",
    "QueryFragment",
    "sort_dimensions",
    "validate_as_metric_query_params",
]
