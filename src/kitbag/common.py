"""Value fallbacks and the deep-clone primitive.

Provides the `UNDEFINED` sentinel used to mark a key whose value is
absent, which is distinct from an explicit `None`.
"""

import copy
import datetime
from collections.abc import Mapping, Set
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class _Undefined:
    """Singleton marking an absent value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_Undefined":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()

_PRIMITIVES = (str, bytes, int, float, complex, bool, type(None), _Undefined)
_DATES = (datetime.date, datetime.time)


def nullish(v: T | None, alt: T) -> T:
    """Return `v` unless it is None or UNDEFINED, otherwise `alt`.

    Examples:
        >>> nullish(0, 10)
        0
        >>> nullish(None, 10)
        10
    """
    if v is None or v is UNDEFINED:
        return alt
    return v


def alter(v: T, alt: T) -> T:
    """Return `v` if it is truthy, otherwise `alt`."""
    return v or alt


def to_array(v: Any) -> list[Any]:
    """Return `v` as a list if it is a list or tuple, otherwise an empty list."""
    if isinstance(v, list):
        return v
    if isinstance(v, tuple):
        return list(v)
    return []


def _clone_set(obj: Set) -> Any:
    # Views such as dict.keys() cannot be built from an iterable.
    try:
        return type(obj)(obj)  # type: ignore[call-arg]
    except TypeError:
        pass
    try:
        return frozenset(obj)
    except TypeError:
        return [deep_clone(item) for item in obj]


def deep_clone(obj: T) -> T:
    """Return a structurally independent copy of `obj`.

    Primitives are returned as-is. Dates are copied to a new instance with
    the same value, sets to a new set of the same type (a frozenset when
    that type cannot be built from an iterable, as with dict views). Lists,
    tuples and dicts are copied recursively.

    Mappings that are not dicts (ChainMap, MappingProxyType, custom
    mappings) are only copied one level deep: the container is new but the
    values are shared with the source mapping.

    Args:
        obj: The value to clone.

    Returns:
        The cloned value.

    Examples:
        >>> src = {"a": [1, {"b": 2}]}
        >>> out = deep_clone(src)
        >>> out == src, out["a"] is src["a"]
        (True, False)
    """
    if isinstance(obj, _PRIMITIVES):
        return obj

    if isinstance(obj, _DATES):
        return copy.copy(obj)

    if isinstance(obj, dict):
        cloned = copy.copy(obj)
        for key, value in obj.items():
            cloned[key] = deep_clone(value)
        return cloned

    if isinstance(obj, MappingProxyType):
        return MappingProxyType(dict(obj))  # type: ignore[return-value]

    if isinstance(obj, Mapping):
        return copy.copy(obj)

    if isinstance(obj, Set):
        return _clone_set(obj)  # type: ignore[return-value]

    if isinstance(obj, list):
        return [deep_clone(item) for item in obj]  # type: ignore[return-value]

    if type(obj) is tuple:
        return tuple(deep_clone(item) for item in obj)  # type: ignore[return-value]

    if isinstance(obj, BaseModel):
        return obj.model_copy(deep=True)

    return copy.deepcopy(obj)
