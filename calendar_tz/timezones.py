"""Vendor timezone name tables.

Calendar producers name zones however they like. The tables bundled in
``calendar_tz/data`` translate those names into Olson names. They are merged
in a fixed order and later tables win on key collisions:

    windows -> lotus -> exchange -> runtime_workarounds -> integration_workarounds

An operator overlay (``CALENDAR_TZ_EXTRA_MAP``) is layered on top of all of them.
"""

from __future__ import annotations

import json
import logging
import threading
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

import pytz

from .errors import TableLoadError

LOGGER = logging.getLogger(__name__)

DATA_PACKAGE = "calendar_tz.data"

MERGE_ORDER = (
    "windows.json",
    "lotus.json",
    "exchange.json",
    "runtime_workarounds.json",
    "integration_workarounds.json",
)

SYSTEMV_TABLE = "systemv.json"


def _read_source(source: str, extra_path: Optional[Path] = None) -> Dict[str, str]:
    try:
        if extra_path is not None:
            raw = extra_path.read_text(encoding="utf-8")
        else:
            raw = resources.files(DATA_PACKAGE).joinpath(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ModuleNotFoundError) as exc:
        raise TableLoadError(source, str(exc)) from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise TableLoadError(source, f"invalid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise TableLoadError(source, "expected a JSON object")
    for key, value in data.items():
        if not isinstance(value, str) or not value:
            raise TableLoadError(source, f"entry {key!r} must map to a zone name")
        if value not in pytz.all_timezones_set:
            raise TableLoadError(source, f"entry {key!r} maps to unknown zone {value!r}")
    return data


class MappingTables:
    """Loads and merges the vendor tables once, then serves read-only lookups."""

    def __init__(
        self,
        *,
        sources: Sequence[str] = MERGE_ORDER,
        extra_path: Optional[Path] = None,
    ) -> None:
        self.sources = tuple(sources)
        self.extra_path = extra_path
        self.load_count = 0

        self._lock = threading.Lock()
        self._merged: Optional[Mapping[str, str]] = None
        self._failure: Optional[TableLoadError] = None

    @property
    def loaded(self) -> bool:
        return self._merged is not None

    def load(self) -> Mapping[str, str]:
        merged = self._merged
        if merged is not None:
            return merged

        with self._lock:
            if self._merged is not None:
                return self._merged
            if self._failure is not None:
                raise self._failure

            self.load_count += 1
            combined: Dict[str, str] = {}
            try:
                for source in self.sources:
                    combined.update(_read_source(source))
                if self.extra_path is not None:
                    combined.update(_read_source(str(self.extra_path), self.extra_path))
            except TableLoadError as exc:
                LOGGER.error("Timezone table load failed: %s", exc)
                self._failure = exc
                raise

            self._merged = MappingProxyType(combined)
            LOGGER.info("Loaded %d timezone aliases from %d tables", len(combined), len(self.sources))
            return self._merged

    def lookup(self, name: str) -> Optional[str]:
        return self.load().get(name)

    def reset(self) -> None:
        """Forget the merged table (and any remembered failure)."""
        with self._lock:
            self._merged = None
            self._failure = None


class SystemVTable:
    """Dedicated lookup for libical's ``SystemV/`` POSIX-style names. Not merged."""

    def __init__(self, source: str = SYSTEMV_TABLE) -> None:
        self.source = source
        self.load_count = 0
        self._lock = threading.Lock()
        self._table: Optional[Mapping[str, str]] = None
        self._failure: Optional[TableLoadError] = None

    def load(self) -> Mapping[str, str]:
        table = self._table
        if table is not None:
            return table

        with self._lock:
            if self._table is not None:
                return self._table
            if self._failure is not None:
                raise self._failure

            self.load_count += 1
            try:
                self._table = MappingProxyType(_read_source(self.source))
            except TableLoadError as exc:
                LOGGER.error("SystemV table load failed: %s", exc)
                self._failure = exc
                raise
            return self._table

    def lookup(self, name: str) -> Optional[str]:
        return self.load().get(name)

    def reset(self) -> None:
        with self._lock:
            self._table = None
            self._failure = None
