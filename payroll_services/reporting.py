"""
payroll_services.reporting -- Period payroll report aggregation.

Responsibility:
    Summarise a period's pay slips: total payroll, per-department totals,
    distribution over net-salary bands and the top earners.

Architecture position:
    Services -- read-only over ``PaySlip`` values.  Figures come from the
    pay-slip fields only; nothing is recomputed through the engines.

Invariants enforced:
    - ``total_payroll`` is the sum of net salaries of the reported slips.
    - Department rows are sorted by total net, highest first; ties keep
      roster order.
    - Band bounds are half-open ``[lower, upper)``; ``None`` means unbounded.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.payslip import PaySlip
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.domain.values import CENT, ZERO, round_half_up
from payroll_kernel.exceptions import InvalidInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.reporting")

UNASSIGNED_DEPARTMENT = "-"
_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SalaryBand:
    """Half-open net-salary range ``[lower, upper)``."""

    label: str
    lower: Decimal | None = None
    upper: Decimal | None = None

    def __post_init__(self) -> None:
        if self.lower is not None and self.upper is not None and self.upper <= self.lower:
            raise InvalidInputError("salary_band", self.label, "upper bound must exceed lower bound")

    def contains(self, amount: Decimal) -> bool:
        if self.lower is not None and amount < self.lower:
            return False
        if self.upper is not None and amount >= self.upper:
            return False
        return True


DEFAULT_SALARY_BANDS: tuple[SalaryBand, ...] = (
    SalaryBand("< 20K", None, Decimal("20000")),
    SalaryBand("20K - 40K", Decimal("20000"), Decimal("40000")),
    SalaryBand("40K - 60K", Decimal("40000"), Decimal("60000")),
    SalaryBand("60K - 100K", Decimal("60000"), Decimal("100000")),
    SalaryBand("> 100K", Decimal("100000"), None),
)


@dataclass(frozen=True)
class ReportConfig:
    bands: tuple[SalaryBand, ...] = DEFAULT_SALARY_BANDS
    top_earner_count: int = 10


@dataclass(frozen=True)
class DepartmentSummary:
    department: str
    employee_count: int
    total_net: Decimal
    average_net: Decimal


@dataclass(frozen=True)
class BandCount:
    label: str
    count: int
    percentage: Decimal


@dataclass(frozen=True)
class EarnerEntry:
    employee_id: str
    name: str
    position: str
    department: str
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollReport:
    """Aggregated view of one period's payroll."""

    period: PayPeriod
    generated_at: datetime
    employee_count: int
    total_payroll: Decimal
    total_gross: Decimal
    department_breakdown: tuple[DepartmentSummary, ...] = field(default_factory=tuple)
    salary_distribution: tuple[BandCount, ...] = field(default_factory=tuple)
    top_earners: tuple[EarnerEntry, ...] = field(default_factory=tuple)

    @property
    def average_net(self) -> Decimal:
        if self.employee_count == 0:
            return ZERO
        return self.total_payroll / self.employee_count


def _department(employee: EmployeeProfile) -> str:
    return employee.department or UNASSIGNED_DEPARTMENT


def build_payroll_report(
    period: str | PayPeriod,
    employees: Sequence[EmployeeProfile],
    payslips: Sequence[PaySlip],
    config: ReportConfig | None = None,
    clock: Clock | None = None,
) -> PayrollReport:
    """
    Build the period report.

    Employees without a pay slip count toward department headcount and band
    percentages but add nothing to the totals.  Pay slips of employees not
    on the roster are ignored.
    """
    config = config or ReportConfig()
    clock = clock or SystemClock()
    pay_period = PayPeriod.parse(period)

    by_employee = {p.employee_id: p for p in payslips}
    roster_ids = {e.id for e in employees}
    orphans = [p.id for p in payslips if p.employee_id not in roster_ids]
    if orphans:
        logger.warning("report_payslips_without_employee", extra={"payslip_ids": orphans})

    rows = [(e, by_employee[e.id]) for e in employees if e.id in by_employee]
    total_payroll = sum((p.net_salary for _, p in rows), ZERO)
    total_gross = sum((p.gross_salary for _, p in rows), ZERO)

    headcount: dict[str, int] = {}
    dept_totals: dict[str, Decimal] = {}
    for employee in employees:
        dept = _department(employee)
        headcount[dept] = headcount.get(dept, 0) + 1
        dept_totals.setdefault(dept, ZERO)
    for employee, payslip in rows:
        dept_totals[_department(employee)] += payslip.net_salary

    departments = sorted(
        (
            DepartmentSummary(
                department=dept,
                employee_count=count,
                total_net=dept_totals[dept],
                average_net=dept_totals[dept] / count,
            )
            for dept, count in headcount.items()
        ),
        key=lambda d: d.total_net,
        reverse=True,
    )

    distribution = []
    for band in config.bands:
        count = sum(1 for _, p in rows if band.contains(p.net_salary))
        percentage = (
            round_half_up(Decimal(count) / len(employees) * _HUNDRED, CENT) if employees else ZERO
        )
        distribution.append(BandCount(label=band.label, count=count, percentage=percentage))

    earners = sorted(rows, key=lambda row: row[1].net_salary, reverse=True)
    top = tuple(
        EarnerEntry(
            employee_id=e.id,
            name=e.name,
            position=e.position,
            department=_department(e),
            net_salary=p.net_salary,
        )
        for e, p in earners[: config.top_earner_count]
    )

    report = PayrollReport(
        period=pay_period,
        generated_at=clock.now(),
        employee_count=len(employees),
        total_payroll=total_payroll,
        total_gross=total_gross,
        department_breakdown=tuple(departments),
        salary_distribution=tuple(distribution),
        top_earners=top,
    )
    logger.info(
        "payroll_report_built",
        extra={
            "period": pay_period.token,
            "employee_count": len(employees),
            "payslip_count": len(rows),
            "total_payroll": str(total_payroll),
        },
    )
    return report
