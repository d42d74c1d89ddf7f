"""
payroll_services.holiday_calendar -- Public holiday feed mapping and per-year cache.

Responsibility:
    Turn entries of the public holiday feed (Nager.Date ``PublicHolidays``
    shape: ``date``, ``localName``, ``name`` ...) into ``HolidayDefinition``
    values, and cache hydrated pools per year.

Architecture position:
    Services -- the network call itself is NOT made here.  The caller
    injects a ``fetch(year)`` callable returning the decoded JSON payload.

Invariants enforced:
    - Feed holidays are national, active, open to every group and carry a
      zero allowance multiplier; they shape work-day counts, not pay.
    - Whichever pool ``HolidayPoolCache.get`` returns is authoritative: the
      hydrated feed, or the fallback when hydration yields nothing.  The two
      are never merged.
    - Only non-empty hydrations are cached, so a failed fetch is retried.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable, Sequence
from typing import Any, Mapping

from payroll_kernel.domain.holiday import HolidayDefinition, HolidayType
from payroll_kernel.domain.values import ZERO
from payroll_kernel.exceptions import InvalidInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.holiday_calendar")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

FeedFetcher = Callable[[int], Any]


def feed_url(year: int, country_code: str = "PH") -> str:
    """Public holiday feed endpoint for ``year``; fetching it is up to the caller."""
    return f"https://date.nager.at/api/v3/PublicHolidays/{year}/{country_code}"


def holiday_from_feed_entry(entry: Mapping[str, Any]) -> HolidayDefinition:
    """
    Map one feed entry to a holiday definition.

    The id is the lower-cased local name (or English name) with runs of
    non-alphanumerics collapsed to ``_``; entries without any name use
    their date as id.
    """
    if not isinstance(entry, Mapping):
        raise InvalidInputError("holiday_feed.entry", entry, "expected an object")

    local_name = entry.get("localName") or entry.get("name") or ""
    english_name = entry.get("name") or entry.get("localName") or ""
    raw_date = entry.get("date")
    holiday_id = _NON_ALNUM.sub("_", local_name.lower())

    return HolidayDefinition.from_dict(
        {
            "id": holiday_id or str(raw_date),
            "name": local_name or "Holiday",
            "date": raw_date,
            "type": HolidayType.NATIONAL.value,
            "allowance_multiplier": ZERO,
            "is_active": True,
            "eligible_religions": ["all"],
            "description": english_name,
            "local_name": local_name,
            "english_name": english_name,
        }
    )


def holidays_from_feed(payload: Any) -> list[HolidayDefinition]:
    """Map a whole feed payload; anything but a JSON array is rejected."""
    if not isinstance(payload, list):
        raise InvalidInputError("holiday_feed", type(payload).__name__, "expected a list of holidays")
    return [holiday_from_feed_entry(entry) for entry in payload]


class HolidayPoolCache:
    """Per-year holiday pools hydrated from an injected fetch.

    Contract:
        - ``get(year)`` returns the cached pool, else hydrates it, else
          returns ``fallback``.
        - ``invalidate(year)`` forgets one year; ``invalidate()`` forgets all.

    Non-goals:
        - Does NOT perform HTTP itself.
        - Does NOT persist pools between processes.
    """

    def __init__(
        self,
        fetch: FeedFetcher,
        fallback: Sequence[HolidayDefinition] = (),
    ) -> None:
        self._fetch = fetch
        self._fallback = tuple(fallback)
        self._pools: dict[int, tuple[HolidayDefinition, ...]] = {}
        self._lock = threading.Lock()

    def get(self, year: int) -> tuple[HolidayDefinition, ...]:
        with self._lock:
            cached = self._pools.get(year)
        if cached is not None:
            return cached

        try:
            pool = tuple(holidays_from_feed(self._fetch(year)))
        except (OSError, InvalidInputError):
            logger.warning(
                "holiday_feed_hydration_failed",
                extra={"year": year, "fallback_size": len(self._fallback)},
                exc_info=True,
            )
            return self._fallback

        if not pool:
            logger.info("holiday_feed_empty", extra={"year": year})
            return self._fallback

        with self._lock:
            self._pools[year] = pool
        logger.info("holiday_feed_hydrated", extra={"year": year, "holiday_count": len(pool)})
        return pool

    def invalidate(self, year: int | None = None) -> None:
        with self._lock:
            if year is None:
                self._pools.clear()
            else:
                self._pools.pop(year, None)

    def is_cached(self, year: int) -> bool:
        with self._lock:
            return year in self._pools
