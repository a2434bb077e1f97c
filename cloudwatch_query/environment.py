# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from os import environ
from typing import Final

from cloudwatch_query.metric_data_query_builder import MetricDataQueryLimits
from cloudwatch_query.util.app_env_utils import env_to_bool, env_to_int

DEFAULT_MAX_SEARCH_EXPRESSIONS: Final = 5
# GetMetricData accepts at most 500 MetricDataQuery structures per request
DEFAULT_MAX_METRIC_DATA_QUERIES: Final = 500


@dataclass(frozen=True)
class QueryBuilderEnvironment:
    max_search_expressions: int
    max_metric_data_queries: int
    default_match_exact: bool

    def limits(self) -> MetricDataQueryLimits:
        return MetricDataQueryLimits(
            max_search_expressions=self.max_search_expressions,
            max_metric_data_queries=self.max_metric_data_queries,
        )

    @staticmethod
    def from_env() -> "QueryBuilderEnvironment":
        return QueryBuilderEnvironment(
            max_search_expressions=env_to_int(
                environ.get("MAX_SEARCH_EXPRESSIONS", str(DEFAULT_MAX_SEARCH_EXPRESSIONS)),
                name="MAX_SEARCH_EXPRESSIONS",
                minimum=0,
            ),
            max_metric_data_queries=env_to_int(
                environ.get(
                    "MAX_METRIC_DATA_QUERIES", str(DEFAULT_MAX_METRIC_DATA_QUERIES)
                ),
                name="MAX_METRIC_DATA_QUERIES",
            ),
            default_match_exact=env_to_bool(environ.get("DEFAULT_MATCH_EXACT", "true")),
        )
