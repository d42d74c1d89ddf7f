"""
Pure domain layer.

This module contains immutable value types and helpers with NO
dependencies on:
- ORM / database
- HTTP
- Time/clock (except through the injected Clock)
- I/O

All domain objects are immutable and deterministic.
"""

from payroll_kernel.domain.attendance import (
    AttendanceAggregate,
    AttendanceRecord,
    AttendanceStatus,
)
from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.employee import (
    ALL_GROUPS,
    RELIGION_GROUPS,
    AllowanceSeeds,
    DeductionSeeds,
    EmployeeProfile,
)
from payroll_kernel.domain.holiday import HolidayDefinition, HolidayType
from payroll_kernel.domain.payslip import (
    AllowanceBreakdown,
    DeductionBreakdown,
    PaySlip,
)
from payroll_kernel.domain.period import PayPeriod

__all__ = [
    "ALL_GROUPS",
    "RELIGION_GROUPS",
    "AllowanceBreakdown",
    "AllowanceSeeds",
    "AttendanceAggregate",
    "AttendanceRecord",
    "AttendanceStatus",
    "Clock",
    "DeductionBreakdown",
    "DeductionSeeds",
    "DeterministicClock",
    "EmployeeProfile",
    "HolidayDefinition",
    "HolidayType",
    "PayPeriod",
    "PaySlip",
    "SystemClock",
]
