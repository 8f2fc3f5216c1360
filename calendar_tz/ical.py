"""Adapter exposing an ``icalendar.Calendar`` as a timezone container."""

from __future__ import annotations

from typing import Iterator, Optional, Union

from icalendar import Calendar as ICalendar
from icalendar import Component


def _text(value) -> Optional[str]:
    if value is None:
        return None
    # Repeated properties come back as a list; the first one wins.
    if isinstance(value, list):
        value = value[0] if value else None
        if value is None:
            return None
    text = str(value)
    return text if text else None


class IcalendarBlock:
    def __init__(self, component: Component) -> None:
        self.component = component

    @property
    def tzid(self) -> Optional[str]:
        return _text(self.component.get("TZID"))

    def get(self, name: str) -> Optional[str]:
        return _text(self.component.get(name))


class IcalendarContainer:
    def __init__(self, calendar: ICalendar) -> None:
        self.calendar = calendar

    @classmethod
    def from_ical(cls, data: Union[str, bytes]) -> "IcalendarContainer":
        return cls(ICalendar.from_ical(data))

    def timezone_blocks(self) -> Iterator[IcalendarBlock]:
        for component in self.calendar.walk("VTIMEZONE"):
            yield IcalendarBlock(component)
