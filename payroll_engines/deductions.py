"""
Deduction Engine -- Philippine statutory contributions and voluntary deductions.

Responsibility:
    Compute the employee share of SSS, PhilHealth and Pag-IBIG from gross
    pay, each gated on a well-formed member identifier, and total them with
    the voluntary pass-through deductions seeded on the employee.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Every rate and cap comes
    from the ``StatutoryRates`` argument.

Invariants enforced:
    - A missing or malformed identifier yields a ZERO contribution for that
      scheme.  Opted-out and not-yet-registered members are not told apart.
    - Contributions are never negative for a non-negative gross.
    - Totals are not clamped; net pay may go negative downstream.

Failure modes:
    - None for well-typed input.

Usage:
    from payroll_engines.deductions import compute_statutory_deductions

    statutory = compute_statutory_deductions(Decimal("30000"), employee, rates)
    statutory.sss  # Decimal("1350.000") when sss_number is valid
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from payroll_config.schema import StatutoryRates
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.values import ZERO
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.deductions")


class StatutoryScheme(str, Enum):
    """Government contribution schemes."""

    SSS = "sss"
    PHILHEALTH = "philhealth"
    PAGIBIG = "pagibig"


# Dashed form or bare digits, matched after trimming whitespace
IDENTIFIER_PATTERNS: dict[StatutoryScheme, re.Pattern[str]] = {
    StatutoryScheme.SSS: re.compile(r"^(\d{2}-\d{7}-\d{1}|\d{10})$", re.ASCII),
    StatutoryScheme.PHILHEALTH: re.compile(r"^(\d{2}-\d{9}-\d{1}|\d{12})$", re.ASCII),
    StatutoryScheme.PAGIBIG: re.compile(r"^(\d{4}-\d{4}-\d{4}|\d{12})$", re.ASCII),
}


@dataclass(frozen=True)
class StatutoryDeductions:
    """Employee share of each statutory contribution."""

    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig


def is_valid_identifier(scheme: StatutoryScheme | str, value: str | None) -> bool:
    """True when ``value`` is a well-formed member number for ``scheme``."""
    if value is None:
        return False
    pattern = IDENTIFIER_PATTERNS[StatutoryScheme(scheme)]
    return pattern.match(value.strip()) is not None


def sss_contribution(gross: Decimal, rates: StatutoryRates) -> Decimal:
    return rates.sss_rate * min(gross, rates.sss_salary_cap)


def philhealth_contribution(gross: Decimal, rates: StatutoryRates) -> Decimal:
    return min(
        rates.philhealth_rate * min(gross, rates.philhealth_salary_cap),
        rates.philhealth_max_contribution,
    )


def pagibig_contribution(gross: Decimal, rates: StatutoryRates) -> Decimal:
    return min(rates.pagibig_rate * gross, rates.pagibig_max_contribution)


@traced_engine("deductions", "1.0", fingerprint_fields=("gross", "rates"))
def compute_statutory_deductions(
    gross: Decimal,
    employee: EmployeeProfile,
    rates: StatutoryRates,
) -> StatutoryDeductions:
    """
    Statutory contributions on ``gross``.

    Args:
        gross: Gross pay for the period (prorated base plus allowances).
        employee: Profile carrying the three member identifiers.
        rates: Contribution rates and caps.

    Returns:
        ``StatutoryDeductions``; schemes without a valid identifier are zero.
    """
    sss = ZERO
    philhealth = ZERO
    pagibig = ZERO
    skipped: list[str] = []

    if is_valid_identifier(StatutoryScheme.SSS, employee.sss_number):
        sss = sss_contribution(gross, rates)
    else:
        skipped.append(StatutoryScheme.SSS.value)

    if is_valid_identifier(StatutoryScheme.PHILHEALTH, employee.philhealth_number):
        philhealth = philhealth_contribution(gross, rates)
    else:
        skipped.append(StatutoryScheme.PHILHEALTH.value)

    if is_valid_identifier(StatutoryScheme.PAGIBIG, employee.pagibig_number):
        pagibig = pagibig_contribution(gross, rates)
    else:
        skipped.append(StatutoryScheme.PAGIBIG.value)

    if skipped:
        logger.info(
            "statutory_scheme_skipped",
            extra={"employee_id": employee.id, "schemes": skipped},
        )

    result = StatutoryDeductions(sss=sss, philhealth=philhealth, pagibig=pagibig)
    logger.debug(
        "statutory_deductions_computed",
        extra={
            "employee_id": employee.id,
            "gross": str(gross),
            "sss": str(sss),
            "philhealth": str(philhealth),
            "pagibig": str(pagibig),
        },
    )
    return result


def sum_deductions(employee: EmployeeProfile, statutory: StatutoryDeductions) -> Decimal:
    """Voluntary seeded deductions plus the statutory contributions."""
    return employee.deductions.total + statutory.total
