# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import Any, Callable, Mapping, TypeGuard


class ValidationException(Exception):
    pass


def validate_int_or_numeric_string(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    panel models store some numbers as strings (e.g. a period of "300")

    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is an int or a string of decimal digits.
             a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is int:
        return True
    if type(value) is str and value.strip().isdecimal():
        return True
    raise ValidationException(
        f"{key} must be an int or a numeric string, found {value!r}"
    )


def validate_string(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a str. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not str:
        raise ValidationException(f"{key} must be a string, found {type(value)}")
    return True


def validate_string_list(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a list[str]. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not list:
        raise ValidationException(f"{key} must be a list, found {type(value)}")
    for item in value:
        if type(item) is not str:
            raise ValidationException(
                f"All elements of {key} must be strings, found {type(item)}"
            )
    return True


def validate_string_or_string_list(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a str or a list[str]. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if type(value) is str:
        return True
    return validate_string_list(untyped_dict, key, required)


def validate_boolean(  # NOSONAR -- (duplicate-returns) function is expected to return true or throw an error per the TypeGuard spec
    untyped_dict: Mapping[str, Any], key: str, required: bool = True
) -> TypeGuard[Mapping[str, Any]]:
    """
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :return: true if the value stored at {key} is a bool. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not bool:
        raise ValidationException(f"{key} must be a boolean, found {type(value)}")
    return True


def validate_sub_dict(
    untyped_dict: Mapping[str, Any],
    key: str,
    validator: Callable[[Mapping[str, Any]], bool],
    required: bool = True,
) -> TypeGuard[Mapping[str, Any]]:
    """
    validate the shape of a dictionary (the sub-dict) within another dictionary
    :param untyped_dict: a mapping of strings to unknown values
    :param key: the key to check
    :param required: if true, an error will be thrown if the value is missing, if false, no error will be thrown
    :param validator: sub validator that will be called to validate the sub_dict
    :return: true if the value stored at {key} passes the validator. a ValidationException will be raised otherwise
    """
    value = untyped_dict.get(key, None)
    if value is None:
        if required:
            raise ValidationException(f"required key {key} is missing")
        else:
            return True
    if type(value) is not dict:
        raise ValidationException(f"{key} must be a dict, found {type(value)}")
    try:
        return validator(value)
    except ValidationException as ve:
        raise ValidationException(f"{key} failed validation: {ve}")
