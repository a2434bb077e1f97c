# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""
CloudWatch SEARCH expressions for metric queries.

A search expression lets CloudWatch resolve every metric matching a pattern instead of
one exact metric. With an exact match the expression is scoped to the schema made of the
namespace and all dimension keys of the query, e.g.

    REMOVE_EMPTY(SEARCH('{AWS/EC2,InstanceId} MetricName="CPUUtilization"
        "InstanceId"=("i-123" OR "i-456")', 'Average', 300))

otherwise the namespace is a plain search term and any metric carrying the dimensions
matches, whatever other dimensions it has.
"""
import re
from collections.abc import Iterable
from typing import Final

from cloudwatch_query.model.metric_query import MetricQuery

# schema entries made only of these characters need no quoting
_BARE_SCHEMA_ENTRY: Final = re.compile(r"^[A-Za-z0-9_./:#-]+$")


def escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def quote(value: str) -> str:
    return f'"{escape(value)}"'


def schema_entry(value: str) -> str:
    if _BARE_SCHEMA_ENTRY.match(value):
        return value
    return quote(value)


def dimension_filter(key: str, values: Iterable[str]) -> str:
    joined = " OR ".join(quote(value) for value in values)
    return f"{quote(key)}=({joined})"


def search_terms(query: MetricQuery) -> str:
    terms: list[str] = []
    if query.match_exact:
        schema = ",".join(
            schema_entry(entry) for entry in [query.namespace, *query.dimensions]
        )
        terms.append(f"{{{schema}}}")
    else:
        terms.append(f"Namespace={quote(query.namespace)}")
    terms.append(f"MetricName={quote(query.metric_name)}")

    for key, values in query.known_dimensions().items():
        terms.append(dimension_filter(key, values))

    # wildcard keys only narrow a fuzzy search, the exact schema already names them
    if not query.match_exact:
        terms.extend(quote(key) for key in query.wildcard_dimension_keys())

    return " ".join(terms)


def build_search_expression(query: MetricQuery, statistic: str) -> str:
    terms = search_terms(query).replace("'", "\\'")
    return f"REMOVE_EMPTY(SEARCH('{terms}', '{statistic}', {query.period}))"
