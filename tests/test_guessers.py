import pytest
import pytz

from calendar_tz.guessers import MICROSOFT_EXCHANGE_MAP, LicEntryGuesser, MsTzIdGuesser
from calendar_tz.models import VTimezone


def _block(properties=None, tzid="Custom Zone"):
    return VTimezone(tzid=tzid, properties=dict(properties or {}))


class TestLicEntryGuesser:
    def test_olson_name(self, tables):
        block = _block({"X-LIC-LOCATION": "Europe/Amsterdam"})
        assert LicEntryGuesser(tables).guess(block).zone == "Europe/Amsterdam"

    def test_systemv_prefix(self, tables):
        block = _block({"X-LIC-LOCATION": "SystemV/EST5EDT"})
        assert LicEntryGuesser(tables).guess(block).zone == "America/New_York"

    def test_systemv_prefix_falls_back_to_plain_name(self, tables):
        block = _block({"X-LIC-LOCATION": "SystemV/Europe/Oslo"})
        assert LicEntryGuesser(tables).guess(block).zone == "Europe/Oslo"

    def test_vendor_name_goes_through_tables(self, tables):
        block = _block({"X-LIC-LOCATION": "Eastern Standard Time"})
        assert LicEntryGuesser(tables).guess(block).zone == "America/New_York"

    def test_property_name_is_case_insensitive(self, tables):
        block = VTimezone(tzid="Custom Zone", properties={"x-lic-location": "Asia/Tokyo"})
        assert LicEntryGuesser(tables).guess(block).zone == "Asia/Tokyo"

    @pytest.mark.parametrize("value", [None, "", "   ", "Nowhere/Special", "SystemV/XYZ9"])
    def test_nothing_usable(self, tables, value):
        block = _block() if value is None else _block({"X-LIC-LOCATION": value})
        assert LicEntryGuesser(tables).guess(block) is None


class TestMsTzIdGuesser:
    def test_known_id(self):
        assert MsTzIdGuesser().guess(_block({"X-MICROSOFT-CDO-TZID": "4"})).zone == "Europe/Berlin"

    def test_whitespace_is_tolerated(self):
        assert MsTzIdGuesser().guess(_block({"X-MICROSOFT-CDO-TZID": " 13 "})).zone == "America/Los_Angeles"

    def test_id_two_is_lisbon(self):
        block = _block({"X-MICROSOFT-CDO-TZID": "2"}, tzid="Greenwich Mean Time: Lisbon")
        assert MsTzIdGuesser().guess(block).zone == "Europe/Lisbon"

    def test_id_two_with_sarajevo_tzid(self):
        block = _block({"X-MICROSOFT-CDO-TZID": "2"}, tzid="Sarajevo, Skopje, Warsaw, Zagreb")
        assert MsTzIdGuesser().guess(block).zone == "Europe/Sarajevo"

    @pytest.mark.parametrize("value", [None, "", "abc", "4.5", "999"])
    def test_nothing_usable(self, value):
        block = _block() if value is None else _block({"X-MICROSOFT-CDO-TZID": value})
        assert MsTzIdGuesser().guess(block) is None

    def test_every_id_maps_to_a_real_zone(self):
        assert all(name in pytz.all_timezones_set for name in MICROSOFT_EXCHANGE_MAP.values())
