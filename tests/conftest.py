import pytest

import calendar_tz
from calendar_tz.resolver import Resolver
from calendar_tz.timezones import MappingTables


@pytest.fixture
def tables():
    return MappingTables()


@pytest.fixture
def resolver(tables):
    return Resolver(default_timezone="UTC", tables=tables)


@pytest.fixture(autouse=True)
def shared_resolver_reset(monkeypatch):
    for name in ("DEFAULT_TIMEZONE", "CALENDAR_TZ_EXTRA_MAP", "CALENDAR_TZ_STRICT"):
        monkeypatch.delenv(name, raising=False)
    calendar_tz.set_resolver(None)
    yield
    calendar_tz.set_resolver(None)
