from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytz

LOGGER = logging.getLogger(__name__)

FALLBACK_TIMEZONE = "UTC"


@dataclass(slots=True)
class ResolverConfig:
    # Zone returned when nothing recognises a TZID (lenient mode)
    default_timezone: str = FALLBACK_TIMEZONE

    # Optional JSON object {"vendor name": "Area/City"} layered over the bundled tables
    extra_map_path: Optional[Path] = None

    # Default for fail_if_uncertain on the module-level resolve()
    strict: bool = False


def _flag(name: str, default: bool) -> bool:
    v = os.getenv(name, "").strip().lower()
    if not v:
        return default
    return v in {"1", "true", "yes", "on"}


def load_config() -> ResolverConfig:
    """Build a ``ResolverConfig`` from ``DEFAULT_TIMEZONE``, ``CALENDAR_TZ_EXTRA_MAP`` and ``CALENDAR_TZ_STRICT``."""
    default_tz = os.getenv("DEFAULT_TIMEZONE", FALLBACK_TIMEZONE).strip() or FALLBACK_TIMEZONE
    if default_tz not in pytz.all_timezones_set:
        LOGGER.warning("DEFAULT_TIMEZONE %r is not a known zone, using %s", default_tz, FALLBACK_TIMEZONE)
        default_tz = FALLBACK_TIMEZONE

    extra_raw = os.getenv("CALENDAR_TZ_EXTRA_MAP", "").strip()

    return ResolverConfig(
        default_timezone=default_tz,
        extra_map_path=Path(extra_raw) if extra_raw else None,
        strict=_flag("CALENDAR_TZ_STRICT", False),
    )
