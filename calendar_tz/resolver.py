from __future__ import annotations

import logging
import threading
from datetime import tzinfo
from typing import Optional, Tuple, TypeVar

from . import tzdb
from .config import ResolverConfig
from .errors import UncertainTimezoneError
from .finders import (
    DecoratedNameFinder,
    DirectNameFinder,
    OffsetFinder,
    TableFinder,
    TimezoneFinder,
)
from .guessers import LicEntryGuesser, MsTzIdGuesser, TimezoneGuesser
from .models import TimezoneContainer
from .timezones import MappingTables

LOGGER = logging.getLogger(__name__)

S = TypeVar("S")


def _register(entries: Tuple[Tuple[str, S], ...], key: str, strategy: S) -> Tuple[Tuple[str, S], ...]:
    """Replace in place when ``key`` exists (keeping its slot), append otherwise."""
    for i, (existing, _) in enumerate(entries):
        if existing == key:
            return entries[:i] + ((key, strategy),) + entries[i + 1:]
    return entries + ((key, strategy),)


class Resolver:
    """Turns a calendar TZID into a pytz zone.

    Finders get the first shot, in registration order, using nothing but the
    TZID string. If they all pass and a container was supplied, each VTIMEZONE
    whose TZID matches exactly is handed to the guessers, again in order. If
    nothing sticks, the configured default zone comes back, or
    :class:`UncertainTimezoneError` is raised when ``fail_if_uncertain`` is set.

    Registering under a key that already exists swaps the strategy but keeps
    its original position in the chain.
    """

    def __init__(
        self,
        *,
        default_timezone: str = "UTC",
        tables: Optional[MappingTables] = None,
        builtins: bool = True,
    ) -> None:
        self.default_timezone = default_timezone
        self.tables = tables or MappingTables()

        self._lock = threading.Lock()
        self._finders: Tuple[Tuple[str, TimezoneFinder], ...] = ()
        self._guessers: Tuple[Tuple[str, TimezoneGuesser], ...] = ()

        if builtins:
            self.register_finder("tzid", DirectNameFinder())
            self.register_finder("tzmap", TableFinder(self.tables))
            self.register_finder("decorated", DecoratedNameFinder(self.tables))
            self.register_finder("offset", OffsetFinder())
            self.register_guesser("lic", LicEntryGuesser(self.tables))
            self.register_guesser("msTzId", MsTzIdGuesser())

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "Resolver":
        return cls(
            default_timezone=config.default_timezone,
            tables=MappingTables(extra_path=config.extra_map_path),
        )

    # ---------------- Registration ----------------
    def register_finder(self, key: str, finder: TimezoneFinder) -> None:
        with self._lock:
            self._finders = _register(self._finders, key, finder)

    def register_guesser(self, key: str, guesser: TimezoneGuesser) -> None:
        with self._lock:
            self._guessers = _register(self._guessers, key, guesser)

    @property
    def finders(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self._finders)

    @property
    def guessers(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self._guessers)

    # ---------------- Resolution ----------------
    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        """Run the finder chain only. ``None`` when no finder recognises ``tzid``."""
        for key, finder in self._finders:
            zone = finder.find(tzid, strict)
            if zone is not None:
                LOGGER.debug("TZID %r resolved by finder '%s' to %s", tzid, key, zone)
                return zone
        return None

    def guess(self, tzid: str, container: TimezoneContainer, strict: bool = False) -> Optional[tzinfo]:
        """Run the guessers over every VTIMEZONE in ``container`` declaring ``tzid``."""
        guessers = self._guessers
        for block in container.timezone_blocks():
            if block.tzid != tzid:
                continue
            for key, guesser in guessers:
                zone = guesser.guess(block, strict)
                if zone is not None:
                    LOGGER.debug("TZID %r resolved by guesser '%s' to %s", tzid, key, zone)
                    return zone
        return None

    def resolve(
        self,
        tzid: str,
        container: Optional[TimezoneContainer] = None,
        fail_if_uncertain: bool = False,
    ) -> tzinfo:
        zone = self.find(tzid, fail_if_uncertain)
        if zone is not None:
            return zone

        if container is not None:
            zone = self.guess(tzid, container, fail_if_uncertain)
            if zone is not None:
                return zone

        if fail_if_uncertain:
            raise UncertainTimezoneError(tzid)

        LOGGER.warning("Could not resolve TZID %r, falling back to %s", tzid, self.default_timezone)
        return tzdb.default_process_zone(self.default_timezone)
