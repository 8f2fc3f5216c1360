from __future__ import annotations

from typing import Optional


class TimezoneError(RuntimeError):
    """Base class for everything this package raises on purpose."""


class UncertainTimezoneError(TimezoneError):
    """Raised in strict mode when no finder or guesser recognised a TZID."""

    def __init__(self, tzid: Optional[str]) -> None:
        self.tzid = tzid
        super().__init__(f"Unable to determine the timezone for tzid: {tzid!r}")


class TableLoadError(TimezoneError):
    """A mapping table resource is missing or malformed. Not retried."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load timezone table '{source}': {reason}")
