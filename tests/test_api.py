import json

import pytest
import pytz

import calendar_tz
from calendar_tz import Calendar, Resolver, UncertainTimezoneError, VTimezone


def test_shared_resolver_is_built_once():
    assert calendar_tz.get_resolver() is calendar_tz.get_resolver()


def test_resolve_through_shared_resolver():
    assert calendar_tz.resolve("Eastern Standard Time").zone == "America/New_York"
    assert calendar_tz.resolve("Middle Earth Time") is pytz.utc


def test_resolve_with_container():
    cal = Calendar(timezones=[VTimezone(tzid="Lotus Custom", properties={"X-LIC-LOCATION": "Europe/Rome"})])
    assert calendar_tz.resolve("Lotus Custom", cal).zone == "Europe/Rome"


def test_resolve_with_icalendar_container():
    ics = "\r\n".join(
        [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "BEGIN:VTIMEZONE",
            "TZID:Lotus Custom",
            "X-LIC-LOCATION:Europe/Rome",
            "BEGIN:STANDARD",
            "DTSTART:19701025T030000",
            "TZOFFSETFROM:+0200",
            "TZOFFSETTO:+0100",
            "END:STANDARD",
            "END:VTIMEZONE",
            "END:VCALENDAR",
            "",
        ]
    )
    container = calendar_tz.IcalendarContainer.from_ical(ics)

    assert "IcalendarContainer" in calendar_tz.__all__
    assert calendar_tz.resolve("Lotus Custom", container).zone == "Europe/Rome"


def test_injected_resolver_is_used():
    calendar_tz.set_resolver(Resolver(default_timezone="Asia/Tokyo"))
    assert calendar_tz.resolve("Middle Earth Time").zone == "Asia/Tokyo"


def test_default_timezone_from_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEZONE", "Europe/Paris")
    assert calendar_tz.resolve("Middle Earth Time").zone == "Europe/Paris"


def test_strict_default_from_environment(monkeypatch):
    monkeypatch.setenv("CALENDAR_TZ_STRICT", "1")

    with pytest.raises(UncertainTimezoneError):
        calendar_tz.resolve("Middle Earth Time")
    assert calendar_tz.resolve("Middle Earth Time", fail_if_uncertain=False) is pytz.utc


def test_extra_map_from_environment(monkeypatch, tmp_path):
    overlay = tmp_path / "extra.json"
    overlay.write_text(json.dumps({"HQ Time": "Europe/Dublin"}))
    monkeypatch.setenv("CALENDAR_TZ_EXTRA_MAP", str(overlay))

    assert calendar_tz.resolve("HQ Time").zone == "Europe/Dublin"


def test_register_finder_on_shared_resolver():
    class HqFinder:
        def find(self, tzid, strict=False):
            return pytz.timezone("Europe/Dublin") if tzid == "HQ" else None

    calendar_tz.register_finder("hq", HqFinder())

    assert calendar_tz.get_resolver().finders[-1] == "hq"
    assert calendar_tz.resolve("HQ").zone == "Europe/Dublin"


def test_register_guesser_on_shared_resolver():
    class AlwaysOslo:
        def guess(self, block, strict=False):
            return pytz.timezone("Europe/Oslo")

    calendar_tz.register_guesser("oslo", AlwaysOslo())
    cal = Calendar(timezones=[VTimezone(tzid="Mystery")])

    assert calendar_tz.resolve("Mystery", cal).zone == "Europe/Oslo"
