"""
Holiday Domain Models (``payroll_kernel.domain.holiday``).

A ``HolidayDefinition`` is one entry of a holiday pool -- either the
built-in pool shipped with the configuration set or a list hydrated from the
public holiday feed.  The resolver engine treats whichever pool it is handed
as authoritative.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from payroll_kernel.domain.employee import ALL_GROUPS
from payroll_kernel.domain.values import to_decimal
from payroll_kernel.exceptions import InvalidInputError


class HolidayType(str, Enum):
    """Philippine holiday categories, plus company anniversaries."""

    REGULAR = "regular"
    SPECIAL_NON_WORKING = "special_non_working"
    SPECIAL_WORKING = "special_working"
    NATIONAL = "national"
    LOCAL = "local"
    ANNIVERSARY = "anniversary"


@dataclass(frozen=True)
class HolidayDefinition:
    """One holiday and the allowance it carries."""

    id: str
    name: str
    date: date
    type: HolidayType
    allowance_multiplier: Decimal
    is_active: bool = True
    eligible_religions: tuple[str, ...] = (ALL_GROUPS,)
    description: str = ""
    local_name: str | None = None
    english_name: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", HolidayType(self.type))
        except ValueError as e:
            raise InvalidInputError("holiday.type", self.type, "unknown holiday type") from e
        multiplier = to_decimal(self.allowance_multiplier, "holiday.allowance_multiplier")
        if multiplier < 0:
            raise InvalidInputError(
                "holiday.allowance_multiplier", self.allowance_multiplier, "cannot be negative"
            )
        object.__setattr__(self, "allowance_multiplier", multiplier)
        object.__setattr__(
            self,
            "eligible_religions",
            tuple(group.strip().lower() for group in self.eligible_religions),
        )

    @property
    def counts_as_day_off(self) -> bool:
        """Active non-working holidays reduce the work-day count."""
        return self.is_active and self.type != HolidayType.SPECIAL_WORKING

    def is_eligible(self, religion: str) -> bool:
        """True when ``religion`` is listed or the list holds the ``"all"`` sentinel."""
        return ALL_GROUPS in self.eligible_religions or religion in self.eligible_religions

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HolidayDefinition:
        """
        Build a definition from a configuration or API record.

        A record without an eligibility list is open to every group.
        """
        raw_date = data.get("date")
        if isinstance(raw_date, date):
            holiday_date = raw_date
        else:
            try:
                holiday_date = date.fromisoformat(str(raw_date)[:10])
            except ValueError as e:
                raise InvalidInputError("holiday.date", raw_date, "expected YYYY-MM-DD") from e

        eligible = data.get("eligible_religions", data.get("eligibleReligions"))
        return cls(
            id=str(data.get("id") or holiday_date.isoformat()),
            name=str(data.get("name") or "Holiday"),
            date=holiday_date,
            type=data.get("type", HolidayType.NATIONAL.value),
            allowance_multiplier=data.get(
                "allowance_multiplier", data.get("allowanceMultiplier", 0)
            ),
            is_active=bool(data.get("is_active", data.get("isActive", True))),
            eligible_religions=tuple(eligible) if eligible is not None else (ALL_GROUPS,),
            description=str(data.get("description") or ""),
            local_name=data.get("local_name", data.get("localName")),
            english_name=data.get("english_name", data.get("englishName")),
        )
