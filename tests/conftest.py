# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from os import environ
from unittest.mock import patch

from pytest import fixture

from cloudwatch_query.metric_data_query_builder import (
    MetricDataQueryBuilder,
    MetricDataQueryLimits,
)


@fixture(autouse=True)
def clean_environment() -> Iterator[None]:
    with patch.dict(environ, {}, clear=True):
        yield


@fixture
def limits() -> MetricDataQueryLimits:
    return MetricDataQueryLimits(max_search_expressions=2, max_metric_data_queries=10)


@fixture
def builder(limits: MetricDataQueryLimits) -> MetricDataQueryBuilder:
    return MetricDataQueryBuilder(limits)
