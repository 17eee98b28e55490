"""Utility functions for the kvcli package."""

import dataclasses
import os
import typing
from typing import Any
from typing import Callable
from typing import Dict
from typing import TypeVar


T = TypeVar("T")


def env(key: str, convert: Callable[[str], T] = typing.cast(Callable[[str], T], str), **kwargs: Any) -> T:
    """Load a value from environment variables with optional default and type conversion."""
    key, partition, default = key.partition(":")

    def default_factory(
        key_val: str = key, default_val: str = default, convert_func: Callable[[str], T] = convert
    ) -> T:
        if key_val in os.environ:
            return convert_func(os.environ[key_val])

        if partition == ":":
            return convert_func(default_val)

        raise KeyError(key_val)

    return typing.cast(T, dataclasses.field(default_factory=default_factory, **kwargs))


def as_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def parse_pairs(value: str) -> Dict[str, str]:
    """Parse ``name=value,name2=value2`` into a dict, ignoring blank entries."""
    pairs: Dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, val = item.partition("=")
        if not sep or not name.strip() or not val.strip():
            raise ValueError(f"Expected name=value, got {item!r}")
        pairs[name.strip()] = val.strip()
    return pairs
