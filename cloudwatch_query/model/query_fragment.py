# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mypy_boto3_cloudwatch.type_defs import MetricDataQueryTypeDef
else:
    MetricDataQueryTypeDef = object


@dataclass(frozen=True)
class QueryFragment:
    id: str
    expression: str
    statistic: str
    period: int
    return_data: bool = True

    def to_cloudwatch_data(self) -> MetricDataQueryTypeDef:
        return {
            "Id": self.id,
            "Expression": self.expression,
            "Period": self.period,
            "ReturnData": self.return_data,
        }
