"""Guessers: resolve a TZID by sniffing vendor hints inside its VTIMEZONE."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Dict, Optional, Protocol

from . import tzdb
from .finders import DirectNameFinder, TableFinder
from .models import LIC_LOCATION, MS_CDO_TZID, TimezoneBlock
from .timezones import MappingTables, SystemVTable

LOGGER = logging.getLogger(__name__)

SYSTEMV_PREFIX = "SystemV/"

# Exchange CDO zone ids. Id 2 covers both Lisbon and Sarajevo, see MsTzIdGuesser.
MICROSOFT_EXCHANGE_MAP: Dict[int, str] = {
    0: "UTC",
    31: "Africa/Casablanca",
    2: "Europe/Lisbon",
    1: "Europe/London",
    4: "Europe/Berlin",
    6: "Europe/Prague",
    3: "Europe/Paris",
    69: "Africa/Luanda",  # best guess
    7: "Europe/Athens",
    5: "Africa/Cairo",
    59: "Europe/Helsinki",
    27: "Asia/Jerusalem",
    50: "Africa/Harare",
    26: "Asia/Baghdad",
    74: "Asia/Kuwait",
    51: "Europe/Moscow",
    56: "Africa/Nairobi",
    25: "Asia/Tehran",
    24: "Asia/Muscat",  # best guess
    54: "Asia/Baku",
    48: "Asia/Kabul",
    58: "Asia/Yekaterinburg",
    47: "Asia/Karachi",
    23: "Asia/Kolkata",
    62: "Asia/Kathmandu",
    46: "Asia/Almaty",
    71: "Asia/Dhaka",
    66: "Asia/Colombo",
    61: "Asia/Rangoon",
    22: "Asia/Bangkok",
    64: "Asia/Krasnoyarsk",
    45: "Asia/Shanghai",
    63: "Asia/Irkutsk",
    21: "Asia/Singapore",
    73: "Australia/Perth",
    75: "Asia/Taipei",
    20: "Asia/Tokyo",
    72: "Asia/Seoul",
    70: "Asia/Yakutsk",
    19: "Australia/Adelaide",
    44: "Australia/Darwin",
    18: "Australia/Brisbane",
    76: "Australia/Sydney",
    43: "Pacific/Guam",
    42: "Australia/Hobart",
    68: "Asia/Vladivostok",
    41: "Asia/Magadan",
    17: "Pacific/Auckland",
    40: "Pacific/Fiji",
    67: "Pacific/Tongatapu",
    29: "Atlantic/Azores",
    53: "Atlantic/Cape_Verde",
    30: "America/Noronha",
    8: "America/Sao_Paulo",  # best guess
    32: "America/Argentina/Buenos_Aires",
    60: "America/Godthab",
    28: "America/St_Johns",
    9: "America/Halifax",
    33: "America/Caracas",
    65: "America/Santiago",
    35: "America/Bogota",
    10: "America/New_York",
    34: "America/Indiana/Indianapolis",
    55: "America/Guatemala",
    11: "America/Chicago",
    37: "America/Mexico_City",
    36: "America/Edmonton",
    38: "America/Phoenix",
    12: "America/Denver",  # best guess
    13: "America/Los_Angeles",  # best guess
    14: "America/Anchorage",
    15: "Pacific/Honolulu",
    16: "Pacific/Midway",
    39: "Pacific/Kwajalein",
}


class TimezoneGuesser(Protocol):
    def guess(self, block: TimezoneBlock, strict: bool = False) -> Optional[tzinfo]:
        ...


class LicEntryGuesser:
    """Uses the ``X-LIC-LOCATION`` hint written by libical-based producers.

    The value is usually an Olson name; some generators write ``SystemV/EST5EDT``
    style names instead, which go through a dedicated table first.
    """

    def __init__(self, tables: MappingTables, systemv: Optional[SystemVTable] = None) -> None:
        self.systemv = systemv or SystemVTable()
        self._direct = DirectNameFinder()
        self._table = TableFinder(tables)

    def guess(self, block: TimezoneBlock, strict: bool = False) -> Optional[tzinfo]:
        lic = (block.get(LIC_LOCATION) or "").strip()
        if not lic:
            return None

        if lic.startswith(SYSTEMV_PREFIX):
            lic = lic[len(SYSTEMV_PREFIX):]
            name = self.systemv.lookup(lic)
            if name:
                return tzdb.construct_zone(name)

        return self._direct.find(lic, strict) or self._table.find(lic, strict)


class MsTzIdGuesser:
    """Uses the numeric ``X-MICROSOFT-CDO-TZID`` hint written by Outlook/Exchange."""

    def guess(self, block: TimezoneBlock, strict: bool = False) -> Optional[tzinfo]:
        raw = (block.get(MS_CDO_TZID) or "").strip()
        if not raw:
            return None
        try:
            cdo_id = int(raw)
        except ValueError:
            LOGGER.debug("Ignoring non-numeric %s value %r", MS_CDO_TZID, raw)
            return None

        if cdo_id == 2 and "Sarajevo" in (block.tzid or ""):
            return tzdb.construct_zone("Europe/Sarajevo")

        name = MICROSOFT_EXCHANGE_MAP.get(cdo_id)
        return tzdb.construct_zone(name) if name else None
