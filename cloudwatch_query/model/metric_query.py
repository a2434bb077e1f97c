# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Final, Mapping, NotRequired, TypedDict, TypeGuard, Union

from cloudwatch_query.util.validation import (
    ValidationException,
    validate_boolean,
    validate_int_or_numeric_string,
    validate_string,
    validate_string_list,
    validate_string_or_string_list,
    validate_sub_dict,
)

WILDCARD: Final = "*"

# GetMetricData query ids must start with a lowercase letter
_QUERY_ID_PATTERN: Final = re.compile(r"^[a-z][a-zA-Z0-9_]*$")


class InvalidMetricQuery(ValidationException):
    pass


class MetricQueryParams(TypedDict):
    """
    Dict definition of a metric query as stored in a dashboard panel model
    """

    refId: str
    region: NotRequired[str]
    namespace: str
    metricName: str
    dimensions: NotRequired[dict[str, Union[str, list[str]]]]
    statistics: list[str]
    period: Union[int, str]
    id: NotRequired[str]
    expression: NotRequired[str]
    matchExact: NotRequired[bool]
    returnData: NotRequired[bool]
    highResolution: NotRequired[bool]


def _validate_dimension_values(dimensions: Mapping[str, Any]) -> bool:
    for key in dimensions.keys():
        validate_string_or_string_list(dimensions, key, required=True)
    return True


def validate_as_metric_query_params(
    untyped_dict: dict[str, Any]
) -> TypeGuard[MetricQueryParams]:
    """
    validate if an unknown dict conforms to the MetricQueryParams shape

    This method will either return true (no errors) or raise a ValidationException describing why the provided dict
    does not conform to MetricQueryParams
    """
    valid_keys = inspect.get_annotations(MetricQueryParams).keys()
    for key in untyped_dict.keys():
        if key not in valid_keys:
            raise ValidationException(
                f"{key} is not a valid parameter, valid parameters are {valid_keys}"
            )

    validate_string(untyped_dict, "refId", required=True)
    validate_string(untyped_dict, "region", required=False)
    validate_string(untyped_dict, "namespace", required=True)
    validate_string(untyped_dict, "metricName", required=True)
    validate_sub_dict(
        untyped_dict, "dimensions", _validate_dimension_values, required=False
    )
    validate_string_list(untyped_dict, "statistics", required=True)
    validate_int_or_numeric_string(untyped_dict, "period", required=True)
    validate_string(untyped_dict, "id", required=False)
    validate_string(untyped_dict, "expression", required=False)
    validate_boolean(untyped_dict, "matchExact", required=False)
    validate_boolean(untyped_dict, "returnData", required=False)
    validate_boolean(untyped_dict, "highResolution", required=False)
    return True


def sort_dimensions(dimensions: Mapping[str, list[str]]) -> dict[str, list[str]]:
    """Return a copy of the dimensions ordered by key. Values keep their order."""
    return {key: list(dimensions[key]) for key in sorted(dimensions.keys())}


def is_wildcard(values: list[str]) -> bool:
    return WILDCARD in values


@dataclass(frozen=True)
class MetricQuery:
    """
    A request for the time series of a single CloudWatch metric.

    Dimensions are stored ordered by key. A dimension whose values contain "*" matches
    any value for that dimension.
    """

    namespace: str
    metric_name: str
    statistics: list[str]
    period: int
    dimensions: Mapping[str, list[str]] = field(default_factory=dict)
    region: str = ""
    ref_id: str = ""
    id: str = ""
    identifier: str = ""
    expression: str = ""
    match_exact: bool = True
    return_data: bool = True
    high_resolution: bool = False

    def __post_init__(self) -> None:
        self.validate()
        object.__setattr__(self, "dimensions", sort_dimensions(self.dimensions))
        object.__setattr__(self, "statistics", list(self.statistics))

    def validate(self) -> None:
        # will throw validation exceptions
        if not self.namespace:
            raise InvalidMetricQuery("namespace is required")
        if not self.metric_name and not self.expression:
            raise InvalidMetricQuery("metric name is required")
        if type(self.statistics) is not list:
            raise InvalidMetricQuery(
                f"statistics must be a list, found {type(self.statistics)}"
            )
        if not self.statistics:
            raise InvalidMetricQuery("at least one statistic is required")
        if any(
            type(statistic) is not str or not statistic
            for statistic in self.statistics
        ):
            raise InvalidMetricQuery(
                f"statistics must be non-empty strings, found {self.statistics}"
            )
        if self.dimensions is None:
            raise InvalidMetricQuery("dimensions must be a mapping, found None")
        for key, values in self.dimensions.items():
            if type(key) is not str or not key:
                raise InvalidMetricQuery("dimension keys must be non-empty strings")
            if type(values) is not list:
                raise InvalidMetricQuery(
                    f'dimension "{key}" values must be a list, found {type(values)}'
                )
            if not values:
                raise InvalidMetricQuery(f'dimension "{key}" has no values')
            if any(type(value) is not str for value in values):
                raise InvalidMetricQuery(
                    f'dimension "{key}" values must be strings, found {values}'
                )
        if type(self.period) is not int or self.period <= 0:
            raise InvalidMetricQuery(
                f"period must be a positive number of seconds, found {self.period!r}"
            )
        if self.id and not _QUERY_ID_PATTERN.match(self.id):
            raise InvalidMetricQuery(
                f'invalid query id "{self.id}", ids must start with a lowercase letter '
                "and contain only letters, numbers and underscores"
            )
        if not self.sub_query_base:
            raise InvalidMetricQuery("either id or identifier is required")

    @property
    def sub_query_base(self) -> str:
        return self.id or self.identifier

    def known_dimensions(self) -> dict[str, list[str]]:
        return {
            key: values
            for key, values in self.dimensions.items()
            if not is_wildcard(values)
        }

    def wildcard_dimension_keys(self) -> list[str]:
        return [key for key, values in self.dimensions.items() if is_wildcard(values)]

    @classmethod
    def from_query_params(
        cls, params: MetricQueryParams, *, default_match_exact: bool = True
    ) -> "MetricQuery":
        ref_id = params["refId"]
        query_id = params.get("id", "")
        return MetricQuery(
            ref_id=ref_id,
            region=params.get("region", ""),
            namespace=params["namespace"],
            metric_name=params["metricName"],
            dimensions=_parse_dimensions(params.get("dimensions", {})),
            statistics=list(params["statistics"]),
            period=int(params["period"]),
            id=query_id,
            identifier=query_id or f"query{ref_id}",
            expression=params.get("expression", ""),
            match_exact=params.get("matchExact", default_match_exact),
            return_data=params.get("returnData", True),
            high_resolution=params.get("highResolution", False),
        )


def _parse_dimensions(
    raw: Mapping[str, Union[str, list[str]]]
) -> dict[str, list[str]]:
    return {
        key: [value] if isinstance(value, str) else list(value)
        for key, value in raw.items()
    }
