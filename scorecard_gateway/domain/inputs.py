"""Validation of caller-supplied parameters"""

import math
from typing import Any

from scorecard_gateway.domain.exceptions import InvalidInputError


def coerce_income(value: Any) -> float:
    """
    Validate a household income supplied by a caller.

    Accepts numbers and numeric strings.

    Raises:
        InvalidInputError: If income is missing, non-numeric, non-finite or negative
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError("income is required")
    if isinstance(value, bool):
        raise InvalidInputError(f"income must be a number, got {value!r}")
    try:
        income = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"income must be a number, got {value!r}") from e
    if not math.isfinite(income):
        raise InvalidInputError("income must be finite")
    if income < 0:
        raise InvalidInputError("income must not be negative")
    return income


def coerce_school_id(value: Any, name: str = "schoolId") -> int:
    """
    Validate a Scorecard unit id (e.g. 139755).

    Raises:
        InvalidInputError: If the id is missing or not a positive integer
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"{name} is required")
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        school_id = int(str(value).strip())
    except ValueError as e:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}") from e
    if school_id <= 0:
        raise InvalidInputError(f"{name} must be positive")
    return school_id
