# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Final, NoReturn

from cloudwatch_query.errors import (
    BatchAbandoned,
    MetricDataQueryLimitExceeded,
    QueryPeriodTooLong,
)
from cloudwatch_query.model.metric_query import MetricQuery
from cloudwatch_query.model.query_fragment import QueryFragment
from cloudwatch_query.observability.error_codes import ErrorCode
from cloudwatch_query.observability.powertools_logging import (
    powertools_logger,
    should_log_events,
)
from cloudwatch_query.search_expression import build_search_expression
from cloudwatch_query.util.validation import ValidationException

if TYPE_CHECKING:
    from mypy_boto3_cloudwatch.type_defs import GetMetricDataInputRequestTypeDef
else:
    GetMetricDataInputRequestTypeDef = object

SUB_QUERY_ID_SEPARATOR: Final = "_____"

# most data points a high resolution query may request: one per minute over the
# 15 days that CloudWatch retains 1 minute data
MAX_HIGH_RESOLUTION_DATA_POINTS: Final = 15 * 24 * 60

logger = powertools_logger()


@dataclass(frozen=True)
class MetricDataQueryLimits:
    max_search_expressions: int
    max_metric_data_queries: int

    def __post_init__(self) -> None:
        if self.max_search_expressions < 0:
            raise ValidationException(
                f"max_search_expressions must not be negative, found {self.max_search_expressions}"
            )
        if self.max_metric_data_queries < 1:
            raise ValidationException(
                f"max_metric_data_queries must be at least 1, found {self.max_metric_data_queries}"
            )


def sub_query_id(query: MetricQuery, index: int) -> str:
    return f"{query.sub_query_base}{SUB_QUERY_ID_SEPARATOR}{index}"


class MetricDataQueryBuilder:
    """
    Expands metric queries into the MetricDataQuery entries of one GetMetricData request.

    A builder holds the running totals of a single outbound batch and must not be reused
    for another one. The totals are checked against the limits after each query is
    added; once a limit is exceeded the batch is abandoned and every later call fails,
    so the caller has to split its queries and start over with fresh builders.
    """

    def __init__(self, limits: MetricDataQueryLimits) -> None:
        self._limits = limits
        self._lock = threading.Lock()
        self._search_expression_count = 0
        self._metric_data_query_count = 0
        self._abandoned = False

    @property
    def limits(self) -> MetricDataQueryLimits:
        return self._limits

    @property
    def search_expression_count(self) -> int:
        return self._search_expression_count

    @property
    def metric_data_query_count(self) -> int:
        return self._metric_data_query_count

    def build_metric_data_queries(self, query: MetricQuery) -> list[QueryFragment]:
        fragments: list[QueryFragment] = []
        generates_search = not query.expression
        for index, statistic in enumerate(query.statistics):
            if generates_search:
                expression = build_search_expression(query, statistic)
            else:
                expression = query.expression
            fragments.append(
                QueryFragment(
                    id=sub_query_id(query, index),
                    expression=expression,
                    statistic=statistic,
                    period=query.period,
                    return_data=query.return_data,
                )
            )

        search_expression_count, metric_data_query_count = self._count(
            query,
            search_expressions=len(fragments) if generates_search else 0,
            metric_data_queries=len(fragments),
        )

        logger.debug(
            "Built metric data queries",
            extra={
                "ref_id": query.ref_id,
                "ids": [fragment.id for fragment in fragments],
                "search_expression_count": search_expression_count,
                "metric_data_query_count": metric_data_query_count,
            },
        )
        if should_log_events(logger):
            for fragment in fragments:
                logger.debug(fragment.expression, extra={"id": fragment.id})
        return fragments

    def _count(
        self, query: MetricQuery, *, search_expressions: int, metric_data_queries: int
    ) -> tuple[int, int]:
        """Add to the running totals and return them as of this query"""
        with self._lock:
            if self._abandoned:
                raise BatchAbandoned(
                    "a limit was already exceeded for this batch, split the queries into smaller batches",
                    query.ref_id,
                )
            self._search_expression_count += search_expressions
            self._metric_data_query_count += metric_data_queries

            if self._search_expression_count > self._limits.max_search_expressions:
                self._abandon(
                    query,
                    ErrorCode.SEARCH_EXPRESSION_LIMIT_EXCEEDED,
                    self._limits.max_search_expressions,
                    self._search_expression_count,
                )
            if self._metric_data_query_count > self._limits.max_metric_data_queries:
                self._abandon(
                    query,
                    ErrorCode.METRIC_DATA_QUERY_LIMIT_EXCEEDED,
                    self._limits.max_metric_data_queries,
                    self._metric_data_query_count,
                )
            return self._search_expression_count, self._metric_data_query_count

    def _abandon(
        self, query: MetricQuery, error_code: ErrorCode, limit: int, attempted: int
    ) -> NoReturn:
        self._abandoned = True
        logger.warning(
            "Metric data query limit exceeded",
            extra={
                "ref_id": query.ref_id,
                "error_code": error_code.value,
                "limit": limit,
                "attempted": attempted,
            },
        )
        raise MetricDataQueryLimitExceeded(
            error_code=error_code,
            limit=limit,
            attempted=attempted,
            ref_id=query.ref_id,
        )

    def build_get_metric_data_input(
        self,
        start_time: datetime,
        end_time: datetime,
        queries: Iterable[MetricQuery],
    ) -> GetMetricDataInputRequestTypeDef:
        if end_time <= start_time:
            raise ValidationException(
                f"end time {end_time.isoformat()} must be after start time {start_time.isoformat()}"
            )
        range_seconds = int((end_time - start_time).total_seconds())

        batch_queries = list(queries)
        # nothing is counted into the batch unless every query fits the time range
        for query in batch_queries:
            if (
                query.high_resolution
                and range_seconds // query.period > MAX_HIGH_RESOLUTION_DATA_POINTS
            ):
                raise QueryPeriodTooLong(
                    f"time range of {range_seconds}s at a period of {query.period}s exceeds "
                    f"{MAX_HIGH_RESOLUTION_DATA_POINTS} high resolution data points",
                    query.ref_id,
                )

        metric_data_queries = []
        for query in batch_queries:
            metric_data_queries.extend(
                fragment.to_cloudwatch_data()
                for fragment in self.build_metric_data_queries(query)
            )

        return {
            "StartTime": start_time,
            "EndTime": end_time,
            "ScanBy": "TimestampAscending",
            "MetricDataQueries": metric_data_queries,
        }
