"""Thin wrapper around the pytz zone database.

Everything the resolver needs to know about the runtime's timezone data goes
through here: which names are canonical, which are backward-compatible links,
and how zones get built.
"""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from typing import AbstractSet

import pytz


def is_known_zone_name(name: str) -> bool:
    """True for canonical names, the ones pytz lists in ``common_timezones``."""
    return name in pytz.common_timezones_set


@lru_cache(maxsize=None)
def backward_compatible_names() -> AbstractSet[str]:
    """Links and deprecated names pytz still accepts (``US/Eastern``, ``Etc/GMT+5`` ...)."""
    return frozenset(pytz.all_timezones_set - pytz.common_timezones_set)


def construct_zone(name: str) -> tzinfo:
    return pytz.timezone(name)


def construct_fixed_offset_zone(name: str) -> tzinfo:
    if not name.startswith("Etc/"):
        raise ValueError(f"Not a fixed-offset zone name: {name}")
    return pytz.timezone(name)


def default_process_zone(name: str) -> tzinfo:
    return pytz.timezone(name)
