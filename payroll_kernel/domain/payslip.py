"""
Pay-Slip Domain Models (``payroll_kernel.domain.payslip``).

Responsibility
--------------
The immutable result of one payroll computation: earnings breakdown,
deductions breakdown, gross and net.  Pay slips are created only by the
payroll assembler and owned by the caller afterwards; notification, report
and PDF consumers read them and never recompute totals.

Invariants enforced
-------------------
* ``AllowanceBreakdown.total`` and ``DeductionBreakdown.total`` are derived
  properties, so they always equal the sum of their components.
* ``net_salary == gross_salary - deductions.total`` by construction.
* Net salary is NOT clamped; a negative value surfaces data-entry errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from payroll_kernel.domain.holiday import HolidayType


@dataclass(frozen=True)
class AllowanceBreakdown:
    """Earnings on top of the (prorated) base salary."""

    transport: Decimal
    meal: Decimal
    bonus: Decimal
    overtime: Decimal
    tips: Decimal
    holiday_allowance: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.transport
            + self.meal
            + self.bonus
            + self.tips
            + self.holiday_allowance
            + self.overtime
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "transport": str(self.transport),
            "meal": str(self.meal),
            "bonus": str(self.bonus),
            "overtime": str(self.overtime),
            "tips": str(self.tips),
            "holiday_allowance": str(self.holiday_allowance),
            "total": str(self.total),
        }


@dataclass(frozen=True)
class DeductionBreakdown:
    """Voluntary pass-through deductions plus the three statutory schemes."""

    tax: Decimal
    insurance: Decimal
    other: Decimal
    cooperative_fund: Decimal
    health_insurance: Decimal
    loan_deduction: Decimal
    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal

    @property
    def voluntary_total(self) -> Decimal:
        return (
            self.tax
            + self.insurance
            + self.other
            + self.cooperative_fund
            + self.health_insurance
            + self.loan_deduction
        )

    @property
    def statutory_total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig

    @property
    def total(self) -> Decimal:
        return self.voluntary_total + self.statutory_total

    def to_dict(self) -> dict[str, str]:
        return {
            "tax": str(self.tax),
            "insurance": str(self.insurance),
            "other": str(self.other),
            "cooperative_fund": str(self.cooperative_fund),
            "health_insurance": str(self.health_insurance),
            "loan_deduction": str(self.loan_deduction),
            "sss": str(self.sss),
            "philhealth": str(self.philhealth),
            "pagibig": str(self.pagibig),
            "total": str(self.total),
        }


@dataclass(frozen=True)
class PaySlip:
    """One employee's pay slip for one period."""

    id: str
    employee_id: str
    period: str
    base_salary: Decimal
    prorated_base: Decimal
    allowances: AllowanceBreakdown
    deductions: DeductionBreakdown
    overtime_hours: Decimal
    holiday_type: HolidayType | None
    generated_at: datetime

    @property
    def gross_salary(self) -> Decimal:
        return self.prorated_base + self.allowances.total

    @property
    def net_salary(self) -> Decimal:
        return self.gross_salary - self.deductions.total

    @property
    def is_prorated(self) -> bool:
        return self.prorated_base != self.base_salary

    @property
    def has_negative_net(self) -> bool:
        return self.net_salary < 0

    @staticmethod
    def make_id(employee_id: str, period_compact: str) -> str:
        return f"PS-{employee_id}-{period_compact}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view; amounts are strings so no precision is lost."""
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "period": self.period,
            "base_salary": str(self.base_salary),
            "prorated_base": str(self.prorated_base),
            "allowances": self.allowances.to_dict(),
            "deductions": self.deductions.to_dict(),
            "gross_salary": str(self.gross_salary),
            "net_salary": str(self.net_salary),
            "overtime_hours": str(self.overtime_hours),
            "holiday_type": self.holiday_type.value if self.holiday_type else None,
            "generated_at": self.generated_at.isoformat(),
        }
