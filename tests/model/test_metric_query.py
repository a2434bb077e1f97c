# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any

import pytest

from cloudwatch_query.model import (
    InvalidMetricQuery,
    MetricQuery,
    sort_dimensions,
    validate_as_metric_query_params,
)
from cloudwatch_query.util.validation import ValidationException
from tests.test_utils.metric_queries import ec2_cpu_query


def panel_model(**overrides: Any) -> dict[str, Any]:
    model: dict[str, Any] = {
        "refId": "A",
        "region": "us-east-1",
        "namespace": "AWS/EC2",
        "metricName": "CPUUtilization",
        "dimensions": {"InstanceId": ["i-123", "i-456"]},
        "statistics": ["Average"],
        "period": 300,
    }
    model.update(overrides)
    return model


def test_sort_dimensions_orders_keys_only() -> None:
    dimensions = {"b": ["2", "1"], "a": ["z"], "c": ["*"]}

    result = sort_dimensions(dimensions)

    assert list(result.keys()) == ["a", "b", "c"]
    assert result["b"] == ["2", "1"]


def test_sort_dimensions_returns_a_copy() -> None:
    dimensions = {"b": ["1"], "a": ["2"]}

    sort_dimensions(dimensions)["a"].append("3")

    assert dimensions == {"b": ["1"], "a": ["2"]}


def test_dimensions_are_sorted_on_creation() -> None:
    query = ec2_cpu_query({"LoadBalancer": ["lb1"], "InstanceId": ["i-1"]})

    assert list(query.dimensions.keys()) == ["InstanceId", "LoadBalancer"]


def test_known_and_wildcard_dimensions() -> None:
    query = ec2_cpu_query(
        {"LoadBalancer": ["lb1"], "InstanceId": ["i-1", "*"], "AZ": ["*"]}
    )

    assert query.known_dimensions() == {"LoadBalancer": ["lb1"]}
    assert query.wildcard_dimension_keys() == ["AZ", "InstanceId"]


def test_sub_query_base_prefers_id() -> None:
    assert ec2_cpu_query(id="cpu", identifier="queryA").sub_query_base == "cpu"
    assert ec2_cpu_query(id="", identifier="queryA").sub_query_base == "queryA"


@pytest.mark.parametrize(
    "overrides",
    [
        {"statistics": []},
        {"statistics": ["Average", ""]},
        {"statistics": "Sum"},
        {"statistics": ("Average",)},
        {"statistics": ["Average", 5]},
        {"dimensions": {"InstanceId": "i-1"}},
        {"dimensions": {"InstanceId": ("i-1",)}},
        {"dimensions": {"InstanceId": ["i-1", 5]}},
        {"namespace": ""},
        {"metric_name": ""},
        {"dimensions": {"InstanceId": []}},
        {"dimensions": {"": ["i-1"]}},
        {"period": 0},
        {"period": -60},
        {"id": "Id1"},
        {"id": "1abc"},
        {"id": "has-dash"},
        {"id": "", "identifier": ""},
    ],
)
def test_invalid_queries_are_rejected(overrides: dict[str, Any]) -> None:
    with pytest.raises(InvalidMetricQuery):
        ec2_cpu_query(**overrides)


def test_metric_name_is_optional_with_an_expression() -> None:
    query = ec2_cpu_query(metric_name="", expression="SUM(METRICS())")

    assert query.expression == "SUM(METRICS())"


def test_invalid_query_is_a_validation_exception() -> None:
    with pytest.raises(ValidationException):
        ec2_cpu_query(statistics=[])


def test_valid_panel_model_passes_validation() -> None:
    assert validate_as_metric_query_params(panel_model())


@pytest.mark.parametrize(
    "overrides",
    [
        {"unknownKey": "value"},
        {"namespace": 5},
        {"statistics": "Average"},
        {"statistics": ["Average", 5]},
        {"period": "five minutes"},
        {"period": 3.5},
        {"dimensions": ["InstanceId"]},
        {"dimensions": {"InstanceId": 5}},
        {"dimensions": {"InstanceId": ["i-1", 5]}},
        {"matchExact": "true"},
    ],
)
def test_invalid_panel_models_fail_validation(overrides: dict[str, Any]) -> None:
    with pytest.raises(ValidationException):
        validate_as_metric_query_params(panel_model(**overrides))


@pytest.mark.parametrize("missing", ["refId", "namespace", "metricName", "statistics"])
def test_panel_model_required_keys(missing: str) -> None:
    model = panel_model()
    del model[missing]

    with pytest.raises(ValidationException):
        validate_as_metric_query_params(model)


def test_from_query_params() -> None:
    params = panel_model(
        dimensions={"LoadBalancer": "lb1", "InstanceId": ["i-1", "i-2"]},
        statistics=["Average", "Sum"],
        period="60",
        id="cpu",
        matchExact=False,
        returnData=False,
        highResolution=True,
    )
    assert validate_as_metric_query_params(params)

    query = MetricQuery.from_query_params(params)

    assert query == MetricQuery(
        ref_id="A",
        region="us-east-1",
        namespace="AWS/EC2",
        metric_name="CPUUtilization",
        dimensions={"InstanceId": ["i-1", "i-2"], "LoadBalancer": ["lb1"]},
        statistics=["Average", "Sum"],
        period=60,
        id="cpu",
        identifier="cpu",
        expression="",
        match_exact=False,
        return_data=False,
        high_resolution=True,
    )


def test_from_query_params_defaults() -> None:
    params = panel_model(refId="B")
    del params["dimensions"]
    assert validate_as_metric_query_params(params)

    query = MetricQuery.from_query_params(params)

    assert query.identifier == "queryB"
    assert query.sub_query_base == "queryB"
    assert query.dimensions == {}
    assert query.match_exact is True
    assert query.return_data is True
    assert query.high_resolution is False


def test_from_query_params_uses_configured_match_exact_default() -> None:
    params = panel_model()
    assert validate_as_metric_query_params(params)

    query = MetricQuery.from_query_params(params, default_match_exact=False)

    assert query.match_exact is False


def test_missing_dimension_map_is_rejected() -> None:
    with pytest.raises(InvalidMetricQuery):
        MetricQuery(
            namespace="AWS/EC2",
            metric_name="CPUUtilization",
            statistics=["Average"],
            period=300,
            dimensions=None,  # type: ignore[arg-type]
            identifier="id1",
        )
