# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
class AppEnvError(RuntimeError):
    pass


def env_to_bool(value: str) -> bool:
    return value.strip().lower() in {"true", "yes"}


def env_to_int(value: str, *, name: str, minimum: int = 1) -> int:
    try:
        parsed = int(value.strip())
    except ValueError as err:
        raise AppEnvError(f"{name} must be an integer, found {value!r}") from err
    if parsed < minimum:
        raise AppEnvError(f"{name} must be at least {minimum}, found {parsed}")
    return parsed
