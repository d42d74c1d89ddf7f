"""
Employee Domain Models (``payroll_kernel.domain.employee``).

Responsibility
--------------
Frozen value objects for the compensation profile the payroll engines read:
the employee identity, base salary, overtime rate, management flag,
religion group, statutory member identifiers and the fixed monthly
allowance / deduction seeds.

Architecture position
---------------------
**Kernel > Domain** -- pure data definitions with ZERO I/O.  Profiles are
owned by the employee CRUD layer; ``EmployeeProfile.from_dict`` is the
ingestion boundary for its JSON records.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields are ``Decimal``; missing seeds default to zero ONCE,
  here, so engines never apply their own fallbacks.
* ``base_salary >= 0``.

Failure modes
-------------
* Non-numeric / non-finite amounts or a negative base salary raise
  ``InvalidInputError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Any, Mapping

from payroll_kernel.domain.values import (
    ZERO,
    amount_or_zero,
    optional_decimal,
    to_decimal,
)
from payroll_kernel.exceptions import InvalidInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("domain.employee")

# Token in a holiday's eligibility list that matches every religion group.
ALL_GROUPS = "all"

RELIGION_GROUPS = ("islam", "kristen", "katolik", "hindu", "budha", "other")


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins; accepts snake_case and camelCase spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


_TRUE_TEXT = frozenset({"true", "1", "yes"})
_FALSE_TEXT = frozenset({"false", "0", "no", ""})


def _parse_flag(value: Any, field_name: str) -> bool:
    """Booleans pass through; "true"/"false" style strings and 0/1 are parsed."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_TEXT:
            return True
        if text in _FALSE_TEXT:
            return False
    raise InvalidInputError(field_name, value, "expected a boolean")


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class AllowanceSeeds:
    """Fixed monthly allowance amounts seeded on the employee record."""

    transport: Decimal = ZERO
    meal: Decimal = ZERO
    bonus: Decimal = ZERO
    tips: Decimal = ZERO
    holiday_allowance: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(
                self, f.name, amount_or_zero(getattr(self, f.name), f"allowances.{f.name}")
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AllowanceSeeds:
        data = data or {}
        return cls(
            transport=_pick(data, "transport", default=ZERO),
            meal=_pick(data, "meal", default=ZERO),
            bonus=_pick(data, "bonus", default=ZERO),
            tips=_pick(data, "tips", default=ZERO),
            holiday_allowance=_pick(data, "holiday_allowance", "holidayAllowance", default=ZERO),
        )


@dataclass(frozen=True)
class DeductionSeeds:
    """Voluntary pass-through deductions seeded on the employee record."""

    tax: Decimal = ZERO
    insurance: Decimal = ZERO
    other: Decimal = ZERO
    cooperative_fund: Decimal = ZERO
    health_insurance: Decimal = ZERO
    loan_deduction: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(
                self, f.name, amount_or_zero(getattr(self, f.name), f"deductions.{f.name}")
            )

    @property
    def total(self) -> Decimal:
        return (
            self.tax
            + self.insurance
            + self.other
            + self.cooperative_fund
            + self.health_insurance
            + self.loan_deduction
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> DeductionSeeds:
        data = data or {}
        return cls(
            tax=_pick(data, "tax", default=ZERO),
            insurance=_pick(data, "insurance", default=ZERO),
            other=_pick(data, "other", default=ZERO),
            cooperative_fund=_pick(data, "cooperative_fund", "cooperativeFund", default=ZERO),
            health_insurance=_pick(data, "health_insurance", "healthInsurance", default=ZERO),
            loan_deduction=_pick(data, "loan_deduction", "loanDeduction", default=ZERO),
        )


@dataclass(frozen=True)
class EmployeeProfile:
    """An employee's compensation profile for one payroll computation."""

    id: str
    name: str
    base_salary: Decimal
    position: str = ""
    department: str = ""
    overtime_rate: Decimal | None = None
    is_management: bool = False
    religion: str = "other"
    sss_number: str | None = None
    philhealth_number: str | None = None
    pagibig_number: str | None = None
    allowances: AllowanceSeeds = field(default_factory=AllowanceSeeds)
    deductions: DeductionSeeds = field(default_factory=DeductionSeeds)
    phone: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        base_salary = to_decimal(self.base_salary, "base_salary")
        if base_salary < ZERO:
            logger.warning(
                "employee_negative_base_salary",
                extra={"employee_id": self.id, "base_salary": str(base_salary)},
            )
            raise InvalidInputError("base_salary", self.base_salary, "cannot be negative")
        object.__setattr__(self, "base_salary", base_salary)
        object.__setattr__(
            self, "overtime_rate", optional_decimal(self.overtime_rate, "overtime_rate")
        )
        object.__setattr__(self, "is_management", _parse_flag(self.is_management, "is_management"))
        object.__setattr__(self, "religion", (self.religion or "other").strip().lower())

        logger.debug(
            "employee_profile_created",
            extra={
                "employee_id": self.id,
                "is_management": self.is_management,
                "religion": self.religion,
            },
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EmployeeProfile:
        """
        Build a profile from an employee record as returned by the CRUD layer.

        Accepts both snake_case and the camelCase keys of the JSON API
        (``baseSalary``, ``sssNumber``, ``isManagement`` ...).
        """
        if "id" not in data:
            raise InvalidInputError("id", None, "employee record has no id")
        return cls(
            id=str(data["id"]),
            name=str(_pick(data, "name", default="")),
            base_salary=_pick(data, "base_salary", "baseSalary"),
            position=str(_pick(data, "position", default="")),
            department=str(_pick(data, "department", default="")),
            overtime_rate=_pick(data, "overtime_rate", "overtimeRate"),
            is_management=_parse_flag(
                _pick(data, "is_management", "isManagement", default=False), "is_management"
            ),
            religion=str(_pick(data, "religion", default="other")),
            sss_number=_optional_text(_pick(data, "sss_number", "sssNumber")),
            philhealth_number=_optional_text(_pick(data, "philhealth_number", "philHealthNumber")),
            pagibig_number=_optional_text(_pick(data, "pagibig_number", "pagIbigNumber")),
            allowances=AllowanceSeeds.from_dict(_pick(data, "allowances")),
            deductions=DeductionSeeds.from_dict(_pick(data, "deductions")),
            phone=_optional_text(_pick(data, "phone")),
        )
