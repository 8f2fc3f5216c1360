"""Map the timezone identifiers calendar software actually emits onto Olson zones.

Containers can be plain ``Calendar``/``VTimezone`` records, or parsed
iCalendar data wrapped in ``IcalendarContainer``.
"""

from __future__ import annotations

import threading
from datetime import tzinfo
from typing import Optional

from .config import ResolverConfig, load_config
from .errors import TableLoadError, TimezoneError, UncertainTimezoneError
from .finders import TimezoneFinder
from .guessers import TimezoneGuesser
from .ical import IcalendarBlock, IcalendarContainer
from .models import Calendar, TimezoneBlock, TimezoneContainer, VTimezone
from .resolver import Resolver

__all__ = [
    "Calendar",
    "IcalendarBlock",
    "IcalendarContainer",
    "Resolver",
    "ResolverConfig",
    "TableLoadError",
    "TimezoneBlock",
    "TimezoneContainer",
    "TimezoneError",
    "TimezoneFinder",
    "TimezoneGuesser",
    "UncertainTimezoneError",
    "VTimezone",
    "get_resolver",
    "load_config",
    "register_finder",
    "register_guesser",
    "resolve",
    "set_resolver",
]

_lock = threading.Lock()
_resolver: Optional[Resolver] = None
_config: Optional[ResolverConfig] = None


def get_resolver() -> Resolver:
    """The process-wide resolver, built from the environment on first use."""
    global _resolver, _config
    if _resolver is None:
        with _lock:
            if _resolver is None:
                _config = load_config()
                _resolver = Resolver.from_config(_config)
    return _resolver


def set_resolver(resolver: Optional[Resolver], config: Optional[ResolverConfig] = None) -> None:
    """Swap the shared resolver (``None`` rebuilds it lazily from the environment)."""
    global _resolver, _config
    with _lock:
        _resolver = resolver
        _config = config


def resolve(
    tzid: str,
    container: Optional[TimezoneContainer] = None,
    fail_if_uncertain: Optional[bool] = None,
) -> tzinfo:
    resolver = get_resolver()
    if fail_if_uncertain is None:
        fail_if_uncertain = bool(_config and _config.strict)
    return resolver.resolve(tzid, container, fail_if_uncertain)


def register_finder(key: str, finder: TimezoneFinder) -> None:
    get_resolver().register_finder(key, finder)


def register_guesser(key: str, guesser: TimezoneGuesser) -> None:
    get_resolver().register_guesser(key, guesser)
