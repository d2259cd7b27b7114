"""
resilient_client.validation - Field-level parsing of raw patient values.

Every function returns a result dict; invalid input is reported through
``is_valid: False`` and never raised.
"""

import math
import re

BLOOD_PRESSURE_PATTERN = re.compile(r"([0-9]+)?/([0-9]+)?")

# Leading numeric prefix, so "98.6F" parses as 98.6 and "45 years" as 45
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")

TEMPERATURE_MIN = 90.0
TEMPERATURE_MAX = 120.0
AGE_MIN_EXCLUSIVE = 0
AGE_MAX_EXCLUSIVE = 120


def _parse_float(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    match = _FLOAT_PREFIX.match(str(value))
    return float(match.group(1)) if match else None


def _parse_int(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if math.isnan(value) or math.isinf(value) else int(value)
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def validate_blood_pressure(value) -> dict:
    """
    Parse ``"<systolic>/<diastolic>"``.

    Either side may be missing (``"120/"``, ``"/80"``) and comes back as
    ``None``; the reading is valid only when both sides are present.
    """
    if not value or not isinstance(value, str):
        return {"systolic": None, "diastolic": None, "is_valid": False}

    match = BLOOD_PRESSURE_PATTERN.fullmatch(value)
    if not match:
        return {"systolic": None, "diastolic": None, "is_valid": False}

    systolic = int(match.group(1)) if match.group(1) else None
    diastolic = int(match.group(2)) if match.group(2) else None

    return {
        "systolic": systolic,
        "diastolic": diastolic,
        "is_valid": systolic is not None and diastolic is not None,
    }


def validate_temperature(value) -> dict:
    """Valid range is [90, 120] inclusive."""
    number = _parse_float(value)
    is_valid = number is not None and TEMPERATURE_MIN <= number <= TEMPERATURE_MAX
    return {"value": number if is_valid else None, "is_valid": is_valid}


def validate_age(value) -> dict:
    """Valid range is (0, 120) exclusive."""
    number = _parse_int(value)
    is_valid = number is not None and AGE_MIN_EXCLUSIVE < number < AGE_MAX_EXCLUSIVE
    return {"value": number if is_valid else None, "is_valid": is_valid}
