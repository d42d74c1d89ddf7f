"""
Attendance Domain Models (``payroll_kernel.domain.attendance``).

``AttendanceRecord`` is one day of attendance as captured by the time clock
or entered manually.  ``AttendanceAggregate`` is the period summary the
payroll assembler consumes; building it from records is the job of
``payroll_engines.attendance.summarize_attendance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from payroll_kernel.domain.values import ZERO, amount_or_zero, optional_decimal
from payroll_kernel.exceptions import InvalidInputError


class AttendanceStatus(str, Enum):
    """Daily attendance states."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"
    PENDING = "pending"


@dataclass(frozen=True)
class AttendanceAggregate:
    """
    Attendance summary for one employee over one pay period.

    Every field is optional.  ``work_days``/``days_present`` drive base-salary
    proration only when both are present; ``expected_hours`` is the
    hourly-rate denominator for overtime.
    """

    work_days: Decimal | None = None
    days_present: Decimal | None = None
    overtime_hours: Decimal | None = None
    expected_hours: Decimal | None = None

    def __post_init__(self) -> None:
        for name in ("work_days", "days_present", "overtime_hours", "expected_hours"):
            object.__setattr__(self, name, optional_decimal(getattr(self, name), name))

    @property
    def supports_proration(self) -> bool:
        return self.work_days is not None and self.days_present is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AttendanceAggregate:
        return cls(
            work_days=data.get("work_days", data.get("workDays")),
            days_present=data.get("days_present", data.get("daysPresent")),
            overtime_hours=data.get("overtime_hours", data.get("overtimeHours")),
            expected_hours=data.get("expected_hours", data.get("expectedHours")),
        )


def _parse_day(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as e:
            raise InvalidInputError("date", value, "expected YYYY-MM-DD") from e
    raise InvalidInputError("date", value, "expected a date")


def _parse_timestamp(value: Any, field: str) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidInputError(field, value, "expected an ISO timestamp") from e
    raise InvalidInputError(field, value, "expected a timestamp")


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee-day of attendance."""

    date: date
    status: AttendanceStatus = AttendanceStatus.ABSENT
    hours_worked: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    late_minutes: int = 0
    time_in: datetime | None = None
    time_out: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", AttendanceStatus(self.status))
        object.__setattr__(self, "hours_worked", amount_or_zero(self.hours_worked, "hours_worked"))
        object.__setattr__(
            self, "overtime_hours", amount_or_zero(self.overtime_hours, "overtime_hours")
        )

    @property
    def counts_as_present(self) -> bool:
        """A day counts toward ``days_present`` when marked present or hours were logged."""
        return self.status == AttendanceStatus.PRESENT or self.hours_worked > ZERO

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AttendanceRecord:
        """Build a record from the attendance API's JSON shape."""
        status = data.get("status") or AttendanceStatus.ABSENT.value
        try:
            status = AttendanceStatus(status)
        except ValueError as e:
            raise InvalidInputError("status", status, "unknown attendance status") from e
        return cls(
            date=_parse_day(data.get("date")),
            status=status,
            hours_worked=data.get("hours_worked", data.get("hoursWorked")),
            overtime_hours=data.get("overtime_hours", data.get("overtimeHours")),
            late_minutes=int(data.get("late_minutes", data.get("lateMinutes")) or 0),
            time_in=_parse_timestamp(data.get("time_in", data.get("timeIn")), "time_in"),
            time_out=_parse_timestamp(data.get("time_out", data.get("timeOut")), "time_out"),
        )
