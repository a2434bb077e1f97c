# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Optional

from cloudwatch_query.observability.error_codes import ErrorCode


class MetricDataQueryBuildError(Exception):
    """A batch of metric data queries could not be built"""

    error_code: ErrorCode = ErrorCode.INVALID_QUERY

    def __init__(self, message: str, ref_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.ref_id = ref_id


class MetricDataQueryLimitExceeded(MetricDataQueryBuildError):
    """The batch needs more sub-queries than GetMetricData allows in one request"""

    def __init__(
        self,
        *,
        error_code: ErrorCode,
        limit: int,
        attempted: int,
        ref_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{error_code.value}: batch would contain {attempted} queries, limit is {limit}",
            ref_id,
        )
        self.error_code = error_code
        self.limit = limit
        self.attempted = attempted


class QueryPeriodTooLong(MetricDataQueryBuildError):
    """The requested time range holds more high resolution data points than are retained"""

    error_code = ErrorCode.QUERY_PERIOD_TOO_LONG


class BatchAbandoned(MetricDataQueryBuildError):
    """A limit was already exceeded for this batch, no further queries are accepted"""

    error_code = ErrorCode.BATCH_ABANDONED
