from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol

# Hint properties written into VTIMEZONE blocks by specific producers
LIC_LOCATION = "X-LIC-LOCATION"          # libical / groupware exports
MS_CDO_TZID = "X-MICROSOFT-CDO-TZID"     # Outlook / Exchange numeric zone id


class TimezoneBlock(Protocol):
    """An embedded VTIMEZONE, as far as the resolver cares."""

    @property
    def tzid(self) -> Optional[str]:
        ...

    def get(self, name: str) -> Optional[str]:
        ...


class TimezoneContainer(Protocol):
    def timezone_blocks(self) -> Iterable[TimezoneBlock]:
        ...


@dataclass(slots=True)
class VTimezone:
    tzid: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        # iCalendar property names are case-insensitive
        wanted = name.upper()
        for key, value in self.properties.items():
            if key.upper() == wanted:
                return value
        return None


@dataclass(slots=True)
class Calendar:
    timezones: List[VTimezone] = field(default_factory=list)

    def timezone_blocks(self) -> List[VTimezone]:
        return list(self.timezones)
