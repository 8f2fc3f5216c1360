"""Finders: resolve a TZID from the identifier string alone."""

from __future__ import annotations

import re
from datetime import tzinfo
from typing import Optional, Protocol

from . import tzdb
from .timezones import MappingTables

_GMT_OFFSET_EXACT = re.compile(r"^GMT([+-])([0-9]{4})$")
_GMT_OFFSET_ANYWHERE = re.compile(r"GMT([+-])([0-9]{4})(?![0-9])")

# Outlook prefixes display names with the offset, e.g. "(UTC+01:00) Amsterdam, Berlin, ..."
_DECORATION_PATTERNS = (
    re.compile(r"^\((?:UTC|GMT)[+-][0-9]{2}:[0-9]{2}\) (.*)$"),
    re.compile(r"^\((?:UTC|GMT)[+-][0-9]{2}\.[0-9]{2}\) (.*)$"),
    re.compile(r"^\((?:UTC|GMT)\) (.*)$"),
)

# Range covered by the Etc/GMT* zones, in hours east of UTC
_MAX_HOURS_EAST = 14
_MAX_HOURS_WEST = 12


class TimezoneFinder(Protocol):
    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        ...


def gmt_offset_zone_name(tzid: str, *, anywhere: bool = False) -> Optional[str]:
    """Translate ``GMT+HHMM`` / ``GMT-HHMM`` into an ``Etc/GMT`` zone name.

    Only the hour is kept: ``GMT+0530`` becomes UTC+05:00. The ``Etc/`` names
    use POSIX signs, so the written sign is inverted in the result
    (``GMT+0530`` -> ``Etc/GMT-5``). Offsets beyond what ``Etc/`` covers give
    ``None``.
    """
    pattern = _GMT_OFFSET_ANYWHERE if anywhere else _GMT_OFFSET_EXACT
    m = pattern.search(tzid or "")
    if not m:
        return None

    sign, digits = m.group(1), m.group(2)
    hours = int(digits[:2])
    if hours == 0:
        return "Etc/GMT"
    if sign == "+":
        return f"Etc/GMT-{hours}" if hours <= _MAX_HOURS_EAST else None
    return f"Etc/GMT+{hours}" if hours <= _MAX_HOURS_WEST else None


def strip_offset_decoration(tzid: str) -> Optional[str]:
    """``"(UTC+01:00) Amsterdam, ..."`` -> ``"Amsterdam, ..."``; None if undecorated."""
    for pattern in _DECORATION_PATTERNS:
        m = pattern.match(tzid or "")
        if m:
            return m.group(1)
    return None


class DirectNameFinder:
    """The TZID already is something the zone database understands."""

    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        # Microsoft products emit things like "(GMT+01.00) Sarajevo/Warsaw/Zagreb";
        # those are left to the table finders.
        if not tzid or tzid[0] == "(":
            return None

        if tzdb.is_known_zone_name(tzid):
            return tzdb.construct_zone(tzid)

        if _GMT_OFFSET_EXACT.match(tzid):
            name = gmt_offset_zone_name(tzid)
            return tzdb.construct_fixed_offset_zone(name) if name else None

        if tzid in tzdb.backward_compatible_names():
            return tzdb.construct_zone(tzid)

        return None


class TableFinder:
    def __init__(self, tables: MappingTables) -> None:
        self.tables = tables

    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        if not tzid:
            return None
        name = self.tables.lookup(tzid)
        return tzdb.construct_zone(name) if name else None


class DecoratedNameFinder:
    """Strips an Outlook-style ``(UTC+HH:MM)`` prefix and retries the tables.

    Runs after :class:`TableFinder` so a decorated name listed verbatim in a
    table keeps its own mapping.
    """

    def __init__(self, tables: MappingTables) -> None:
        self.tables = tables

    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        rest = strip_offset_decoration(tzid)
        if not rest:
            return None
        name = self.tables.lookup(rest)
        return tzdb.construct_zone(name) if name else None


class OffsetFinder:
    """Last resort for identifiers that merely mention ``GMT+HHMM`` somewhere."""

    def find(self, tzid: str, strict: bool = False) -> Optional[tzinfo]:
        name = gmt_offset_zone_name(tzid, anywhere=True)
        return tzdb.construct_fixed_offset_zone(name) if name else None
