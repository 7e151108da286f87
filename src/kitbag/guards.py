"""Type-guard predicates for loosely typed values."""

import math
from typing import Any, TypeGuard

PrimitiveType = str | int | float | bool | None
"""A basic, non-container value."""

CompoundType = PrimitiveType | list[PrimitiveType] | dict[str, PrimitiveType]
"""A primitive, a list of primitives or a record of primitives."""


def is_string(v: Any) -> TypeGuard[str]:
    return isinstance(v, str)


def is_boolean(v: Any) -> TypeGuard[bool]:
    return isinstance(v, bool)


def is_number(v: Any) -> TypeGuard[int | float]:
    """Check that `v` is an int or float. Booleans are not numbers."""
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def is_numeric(v: Any) -> TypeGuard[int | float | str]:
    """Check that `v` is a number or a string holding a finite number.

    Examples:
        >>> is_numeric("12.5"), is_numeric("inf"), is_numeric("")
        (True, False, False)
    """
    if is_number(v):
        return math.isfinite(v)
    if not isinstance(v, str):
        return False
    try:
        return math.isfinite(float(v))
    except ValueError:
        return False


def to_number(v: Any) -> float | None:
    """Convert a numeric value to a float, or return None."""
    if is_numeric(v):
        return float(v)
    return None


def is_array(v: Any) -> TypeGuard[list[Any] | tuple[Any, ...]]:
    return isinstance(v, (list, tuple))


def is_object(v: Any) -> TypeGuard[dict[Any, Any]]:
    """Check that `v` is a dict (not None, not a list)."""
    return isinstance(v, dict)


def is_primitive(v: Any) -> TypeGuard[PrimitiveType]:
    """Check that `v` is None, a string, a number or a boolean."""
    return v is None or is_string(v) or is_number(v) or is_boolean(v)


def is_primitive_array(v: Any) -> TypeGuard[list[PrimitiveType]]:
    return is_array(v) and all(is_primitive(item) for item in v)


def is_primitive_record(v: Any) -> TypeGuard[dict[str, PrimitiveType]]:
    return is_object(v) and all(is_primitive(value) for value in v.values())


def is_compound_type(v: Any) -> TypeGuard[CompoundType]:
    """Check that `v` is a primitive, or a list or record of primitives."""
    return is_primitive(v) or is_primitive_array(v) or is_primitive_record(v)
