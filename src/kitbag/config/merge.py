"""Deep merge utility for configuration dictionaries."""

from typing import Any, Literal, TypeVar

from kitbag.common import UNDEFINED, deep_clone

MergeStrategy = Literal["merge", "replace", "safe"]
"""How an override value combines with the base value at one path.

- ``"merge"``: deep merge nested dicts (the default behavior).
- ``"replace"``: replace the base value with the override, whatever its type.
- ``"safe"``: ignore the override when it is UNDEFINED.
"""

MergeOptions = dict[str, MergeStrategy]
"""Dot-separated paths mapped to strategies, e.g. ``{"theme.colors.primary": "replace"}``."""

MERGE_STRATEGIES: tuple[str, ...] = ("merge", "replace", "safe")

ConfigT = TypeVar("ConfigT")


def merge_config(
    config: ConfigT,
    new_config: Any,
    options: MergeOptions | None = None,
) -> ConfigT:
    """Deep merge a partial configuration into a base configuration.

    `config` is deep-cloned first and the clone is merged in place, so
    neither input is modified and the result shares no dict or list with
    them. Nested dicts are merged recursively. Lists and tuples in
    `new_config` always replace the base value entirely. Keys whose value
    is UNDEFINED are skipped unless their path has the ``"merge"`` or
    ``"replace"`` strategy.

    A strategy applies to its exact path only, never to descendants. Paths
    with an unrecognized strategy get the default behavior.

    Args:
        config: The base configuration.
        new_config: The partial configuration to apply. Anything other than
            a dict is ignored.
        options: Merge strategies keyed by dotted path.

    Returns:
        A new configuration with `new_config` merged in.

    Examples:
        >>> merge_config({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}

        >>> merge_config({"a": [1, 2]}, {"a": [3]})
        {'a': [3]}

        >>> merge_config({"b": {"c": 2, "d": 3}}, {"b": {"c": 9}}, {"b": "replace"})
        {'b': {'c': 9}}
    """
    strategies = options or {}

    def merge(target: dict[Any, Any], source: Any, path: str = "") -> None:
        if not isinstance(source, dict):
            return

        for key, source_value in source.items():
            current_path = f"{path}.{key}" if path else str(key)
            strategy = strategies.get(current_path)

            if strategy == "safe" and source_value is UNDEFINED:
                continue

            if strategy not in MERGE_STRATEGIES and source_value is UNDEFINED:
                continue

            # Lists are never merged element-wise
            if strategy == "replace" or isinstance(source_value, (list, tuple)):
                target[key] = deep_clone(source_value)
                continue

            target_value = target.get(key)
            if isinstance(source_value, dict) and isinstance(target_value, dict):
                merge(target_value, source_value, current_path)
            else:
                target[key] = deep_clone(source_value)

    result = deep_clone(config)
    if isinstance(result, dict):
        merge(result, new_config)
    return result
