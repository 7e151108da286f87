"""kitbag - small utilities: config merging, value formatting and inline HTML."""

from kitbag.common import UNDEFINED, alter, deep_clone, nullish, to_array
from kitbag.config import MergeOptions, MergeStrategy, merge_config
from kitbag.inliner import Inliner

__all__ = [
    "UNDEFINED",
    "Inliner",
    "MergeOptions",
    "MergeStrategy",
    "alter",
    "deep_clone",
    "merge_config",
    "nullish",
    "to_array",
]
