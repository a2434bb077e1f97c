# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class ErrorCode(str, Enum):
    INVALID_QUERY = "InvalidQuery"
    SEARCH_EXPRESSION_LIMIT_EXCEEDED = "SearchExpressionLimitExceeded"
    METRIC_DATA_QUERY_LIMIT_EXCEEDED = "MetricDataQueryLimitExceeded"
    QUERY_PERIOD_TOO_LONG = "QueryPeriodTooLong"
    BATCH_ABANDONED = "BatchAbandoned"
