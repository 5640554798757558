"""
Validation of configuration values against declared parameters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .bindings import UNSET, Parameter
from .errors import InvalidParameterError


def validate_parameter(parameter: Parameter, value: Any, service_name: str) -> Any:
    """
    Check a value against a parameter's validator.

    Unset values are never validated.

    Returns:
        The value, unchanged

    Raises:
        InvalidParameterError: If the validator rejects the value
    """
    if value is UNSET or parameter.accepts(value):
        return value
    raise InvalidParameterError(parameter.name, service_name)


def match_parameters(
    parameters: Sequence[Parameter], values: Sequence[Any], service_name: str
) -> dict[str, Any]:
    """
    Pair positional values with declared parameters and validate each one.

    Values beyond the declared parameters are ignored.
    """
    return {
        parameter.name: validate_parameter(parameter, value, service_name)
        for parameter, value in zip(parameters, values, strict=False)
    }
