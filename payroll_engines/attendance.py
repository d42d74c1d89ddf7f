"""
Attendance Engine -- base-salary proration, overtime pay and attendance aggregation.

Responsibility:
    Scale the monthly base salary by attendance, price overtime hours, and
    build the period ``AttendanceAggregate`` from daily records.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Overtime defaults arrive as
    an ``OvertimeSettings`` argument.

Invariants enforced:
    - "No data" preserves full pay: a missing aggregate, or one without both
      ``work_days`` and ``days_present``, returns the base salary unchanged.
    - Present-but-zero attendance prorates to zero.
    - ``days_present`` is clamped into ``[0, max(1, work_days)]``, so extra
      days never pay more than a full month.
    - Negative overtime hours are clamped to zero, never subtracted.

Failure modes:
    - None for well-typed input; malformed values are rejected earlier by the
      domain constructors.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from payroll_config.schema import OvertimeSettings
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.attendance import (
    AttendanceAggregate,
    AttendanceRecord,
    AttendanceStatus,
)
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.holiday import HolidayDefinition
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.domain.values import CENT, ONE, ZERO, clamp, round_half_up
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.attendance")

DEFAULT_SCHEDULED_START = time(9, 0)
DEFAULT_GRACE_MINUTES = 15
DEFAULT_STANDARD_HOURS = Decimal("8")

_SECONDS_PER_HOUR = Decimal("3600")
_SECONDS_PER_MINUTE = Decimal("60")


@dataclass(frozen=True)
class OvertimeResult:
    """Overtime hours as supplied, the hourly rate applied, and the pay."""

    hours: Decimal
    rate: Decimal
    pay: Decimal


# ---------------------------------------------------------------------------
# Proration and overtime
# ---------------------------------------------------------------------------


@traced_engine("attendance.prorate", "1.0", fingerprint_fields=("attendance",))
def prorate_base(
    employee: EmployeeProfile,
    attendance: AttendanceAggregate | None,
) -> Decimal:
    """
    Base salary scaled by ``days_present / work_days``.

    Returns the full base salary when attendance is absent or incomplete.
    """
    base = employee.base_salary
    if attendance is None or not attendance.supports_proration:
        return base

    work_days = max(ONE, attendance.work_days)
    days_present = clamp(attendance.days_present, ZERO, work_days)
    prorated = base * days_present / work_days

    if days_present != attendance.days_present:
        logger.warning(
            "attendance_days_present_clamped",
            extra={
                "employee_id": employee.id,
                "days_present": str(attendance.days_present),
                "work_days": str(attendance.work_days),
            },
        )
    logger.debug(
        "attendance_base_prorated",
        extra={
            "employee_id": employee.id,
            "base_salary": str(base),
            "prorated_base": str(prorated),
        },
    )
    return prorated


@traced_engine("attendance.overtime", "1.0", fingerprint_fields=("attendance", "settings"))
def compute_overtime_pay(
    employee: EmployeeProfile,
    attendance: AttendanceAggregate | None,
    settings: OvertimeSettings,
) -> OvertimeResult:
    """
    Overtime pay for the period.

    The hourly rate is the employee's own ``overtime_rate`` when positive,
    else ``base_salary / expected_hours * settings.multiplier`` where
    ``expected_hours`` falls back to ``settings.default_monthly_hours`` only
    when absent; an explicit 0 gives a zero base hourly rate.
    """
    hours = ZERO
    expected = settings.default_monthly_hours
    if attendance is not None:
        if attendance.overtime_hours is not None:
            hours = attendance.overtime_hours
        if attendance.expected_hours is not None:
            expected = attendance.expected_hours

    base_hourly = employee.base_salary / expected if expected > ZERO else ZERO
    if employee.overtime_rate is not None and employee.overtime_rate > ZERO:
        rate = employee.overtime_rate
    else:
        rate = base_hourly * settings.multiplier

    pay = max(ZERO, hours) * rate
    if hours < ZERO:
        logger.warning(
            "attendance_negative_overtime_clamped",
            extra={"employee_id": employee.id, "overtime_hours": str(hours)},
        )
    return OvertimeResult(hours=hours, rate=rate, pay=pay)


# ---------------------------------------------------------------------------
# Aggregation from daily records
# ---------------------------------------------------------------------------


def count_work_days(
    start: date,
    end: date,
    holidays: Iterable[HolidayDefinition] = (),
) -> int:
    """
    Monday-Friday dates in ``[start, end]`` minus weekday holidays.

    Only active holidays that are not ``special_working`` count as days off.
    Several holidays on one date remove that date once.  Never negative.
    """
    if end < start:
        return 0

    weekdays = 0
    day = start
    while day <= end:
        if day.weekday() < 5:
            weekdays += 1
        day += timedelta(days=1)

    days_off = {
        h.date
        for h in holidays
        if h.counts_as_day_off and start <= h.date <= end and h.date.weekday() < 5
    }
    return max(0, weekdays - len(days_off))


@traced_engine("attendance.summarize", "1.0", fingerprint_fields=("period",))
def summarize_attendance(
    records: Sequence[AttendanceRecord],
    period: str | PayPeriod,
    holidays: Iterable[HolidayDefinition] = (),
    hours_per_day: Decimal = DEFAULT_STANDARD_HOURS,
) -> AttendanceAggregate:
    """
    Build the period aggregate from daily records.

    Records dated outside the period are ignored.
    """
    pay_period = PayPeriod.parse(period)
    in_period = [r for r in records if pay_period.contains(r.date)]

    days_present = sum(1 for r in in_period if r.counts_as_present)
    overtime = round_half_up(sum((r.overtime_hours for r in in_period), ZERO), CENT)
    work_days = count_work_days(pay_period.start, pay_period.end, holidays)

    aggregate = AttendanceAggregate(
        work_days=Decimal(work_days),
        days_present=Decimal(days_present),
        overtime_hours=overtime,
        expected_hours=Decimal(work_days) * hours_per_day,
    )
    logger.info(
        "attendance_summarized",
        extra={
            "period": pay_period.token,
            "record_count": len(records),
            "records_in_period": len(in_period),
            "work_days": work_days,
            "days_present": days_present,
            "overtime_hours": str(overtime),
        },
    )
    return aggregate


def derive_attendance_record(
    work_date: date,
    time_in: datetime | None,
    time_out: datetime | None,
    scheduled_start: time = DEFAULT_SCHEDULED_START,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    standard_hours: Decimal = DEFAULT_STANDARD_HOURS,
) -> AttendanceRecord:
    """
    Derive hours, overtime, lateness and status from clock-in/out times.

    Both times -> present with hours, overtime above ``standard_hours`` and
    lateness beyond the grace period.  Only time-in -> present.  Only
    time-out -> pending.  Neither -> absent.
    """
    if time_in is not None and time_out is not None:
        worked_seconds = Decimal(str((time_out - time_in).total_seconds()))
        hours = max(ZERO, worked_seconds / _SECONDS_PER_HOUR)
        overtime = hours - standard_hours if hours > standard_hours else ZERO

        scheduled = datetime.combine(work_date, scheduled_start, tzinfo=time_in.tzinfo)
        late_seconds = Decimal(str((time_in - scheduled).total_seconds()))
        late = max(0, int(round_half_up(late_seconds / _SECONDS_PER_MINUTE)))

        return AttendanceRecord(
            date=work_date,
            status=AttendanceStatus.PRESENT,
            hours_worked=round_half_up(hours, CENT),
            overtime_hours=round_half_up(overtime, CENT),
            late_minutes=late if late > grace_minutes else 0,
            time_in=time_in,
            time_out=time_out,
        )

    if time_in is not None:
        status = AttendanceStatus.PRESENT
    elif time_out is not None:
        status = AttendanceStatus.PENDING
    else:
        status = AttendanceStatus.ABSENT
    return AttendanceRecord(date=work_date, status=status, time_in=time_in, time_out=time_out)
