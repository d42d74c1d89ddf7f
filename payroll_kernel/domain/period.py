"""
PayPeriod -- the "month/year" token identifying one payroll cycle.

Tokens look like ``"9/2025"`` (1-indexed month, four-digit year).  A token
is parsed on demand; it carries no Date identity of its own.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

from payroll_kernel.exceptions import InvalidPeriodError

_PERIOD_RE = re.compile(r"^\s*(\d{1,2})\s*/\s*(\d{4})\s*$", re.ASCII)


@dataclass(frozen=True, slots=True)
class PayPeriod:
    """
    A calendar month pay period.

    ``token`` keeps the caller's month spelling (``"09/2025"`` stays
    zero-padded, surrounding whitespace is dropped) because pay-slip ids are
    derived from it.
    """

    month: int
    year: int
    token: str

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidPeriodError(self.token, f"month {self.month} outside 1..12")

    @classmethod
    def parse(cls, token: str | PayPeriod) -> PayPeriod:
        """
        Parse a ``"month/year"`` token.

        Raises:
            InvalidPeriodError: if the token is not ``M/YYYY`` or the month
                is outside 1..12.
        """
        if isinstance(token, PayPeriod):
            return token
        if not isinstance(token, str):
            raise InvalidPeriodError(token, "expected a 'month/year' string")
        match = _PERIOD_RE.match(token)
        if match is None:
            raise InvalidPeriodError(token, "expected 'month/year', e.g. '9/2025'")
        month_text, year_text = match.group(1), match.group(2)
        return cls(
            month=int(month_text),
            year=int(year_text),
            token=f"{month_text}/{year_text}",
        )

    @classmethod
    def containing(cls, day: date) -> PayPeriod:
        """The period containing ``day``."""
        return cls(month=day.month, year=day.year, token=f"{day.month}/{day.year}")

    @property
    def start(self) -> date:
        """First calendar day of the period."""
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        """Last calendar day of the period."""
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def compact(self) -> str:
        """Token with the slash removed, as used in pay-slip ids."""
        return self.token.replace("/", "")

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def __str__(self) -> str:
        return self.token
