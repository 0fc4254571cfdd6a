"""
Runtime values for the expression language.

A value is either a number or a boolean. Numbers are always floats so that
integer and fractional results share one representation; booleans are never
numbers even though Python's bool subclasses int.
"""

import math
from typing import Any, Union

# Runtime value types for the expression language.
Value = Union[float, bool]


def is_number(value: Any) -> bool:
    """Checks if a value is a number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    """Checks if a value is a boolean."""
    return isinstance(value, bool)


def get_type_name(value: Any) -> str:
    """Gets the type name of a value for error messages."""
    if is_boolean(value):
        return "boolean"
    if is_number(value):
        return "number"
    return type(value).__name__


def format_value(value: Value) -> str:
    """
    Formats a value for display.

    Rules:
    - booleans -> "true" / "false"
    - numbers with no fractional part -> integer digits ("14", "-2")
    - other finite numbers -> shortest round-trip decimal ("3.5")
    - non-finite numbers -> "inf", "-inf", "nan"
    """
    if is_boolean(value):
        return "true" if value else "false"

    number = float(value)
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        return str(int(number))
    return repr(number)
