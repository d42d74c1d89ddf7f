"""
payroll_services.payroll_run -- Payroll run over a roster for one period.

Responsibility:
    Compute one pay slip per employee for a period through a shared
    ``PayrollAssembler``, collect negative-net warnings and total the run.

Architecture position:
    Services -- imperative shell over the pure engines.  Loading employees
    and attendance, and persisting pay slips, is the caller's job.

Invariants enforced:
    - Pay slips come back in roster order whatever ``max_workers`` is.
    - A negative net salary is reported, never clamped or rejected.
    - Every log record of a run carries its ``run_id`` and ``period``.

Failure modes:
    - InvalidPeriodError before any computation for a malformed period.
    - The first engine exception aborts the run and propagates.
"""

from __future__ import annotations

import contextvars
import time
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID, uuid4

from payroll_engines.assembler import PayrollAssembler
from payroll_kernel.domain.attendance import AttendanceAggregate
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.holiday import HolidayDefinition
from payroll_kernel.domain.payslip import PaySlip
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.domain.values import ZERO
from payroll_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.payroll_run")


@dataclass(frozen=True)
class NegativeNetWarning:
    """A pay slip whose deductions exceed its gross."""

    employee_id: str
    payslip_id: str
    net_salary: Decimal

    @property
    def message(self) -> str:
        return f"Net salary for employee {self.employee_id} is negative ({self.net_salary})"


@dataclass(frozen=True)
class PayrollRunResult:
    """All pay slips of one run, in roster order."""

    run_id: UUID
    period: PayPeriod
    payslips: tuple[PaySlip, ...]
    warnings: tuple[NegativeNetWarning, ...] = field(default_factory=tuple)

    @property
    def total_net(self) -> Decimal:
        return sum((p.net_salary for p in self.payslips), ZERO)

    @property
    def total_gross(self) -> Decimal:
        return sum((p.gross_salary for p in self.payslips), ZERO)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def payslip_for(self, employee_id: str) -> PaySlip | None:
        for payslip in self.payslips:
            if payslip.employee_id == employee_id:
                return payslip
        return None


class PayrollRunService:
    """Runs the payroll for a roster.

    Contract:
        - ``run()`` returns one pay slip per employee, in input order.

    Non-goals:
        - Does NOT load employees or attendance (caller provides them).
        - Does NOT persist pay slips or dispatch notifications.
    """

    def __init__(self, assembler: PayrollAssembler | None = None) -> None:
        self._assembler = assembler or PayrollAssembler()

    def run(
        self,
        period: str | PayPeriod,
        employees: Sequence[EmployeeProfile],
        attendance: Mapping[str, AttendanceAggregate] | None = None,
        holiday_pool: Sequence[HolidayDefinition] | None = None,
        max_workers: int = 1,
    ) -> PayrollRunResult:
        """Compute the payroll for ``employees`` in ``period``.

        Args:
            period: "M/YYYY" token or a parsed ``PayPeriod``.
            employees: The roster.
            attendance: Aggregates keyed by employee id; employees without
                an entry are paid in full.
            holiday_pool: Overrides the assembler's configured pool.
            max_workers: Worker threads; 1 computes inline.

        Returns:
            PayrollRunResult with pay slips and negative-net warnings.
        """
        pay_period = PayPeriod.parse(period)
        attendance = attendance or {}
        run_id = uuid4()

        with LogContext.bind(run_id=str(run_id), period=pay_period.token):
            logger.info(
                "payroll_run_started",
                extra={"employee_count": len(employees), "max_workers": max_workers},
            )
            t0 = time.monotonic()

            def compute(employee: EmployeeProfile) -> PaySlip:
                with LogContext.bind(employee_id=employee.id):
                    return self._assembler.calculate(
                        employee,
                        pay_period,
                        attendance.get(employee.id),
                        holiday_pool=holiday_pool,
                    )

            if max_workers > 1 and len(employees) > 1:
                with ThreadPoolExecutor(max_workers=max_workers) as executor:
                    # each task runs in a copy of the caller's context so LogContext follows it
                    futures = [
                        executor.submit(contextvars.copy_context().run, compute, employee)
                        for employee in employees
                    ]
                    payslips = tuple(f.result() for f in futures)
            else:
                payslips = tuple(compute(employee) for employee in employees)

            warnings = []
            for payslip in payslips:
                if payslip.has_negative_net:
                    warning = NegativeNetWarning(
                        employee_id=payslip.employee_id,
                        payslip_id=payslip.id,
                        net_salary=payslip.net_salary,
                    )
                    warnings.append(warning)
                    logger.warning(
                        "payroll_negative_net",
                        extra={
                            "employee_id": payslip.employee_id,
                            "payslip_id": payslip.id,
                            "net_salary": str(payslip.net_salary),
                        },
                    )

            result = PayrollRunResult(
                run_id=run_id,
                period=pay_period,
                payslips=payslips,
                warnings=tuple(warnings),
            )
            duration_ms = round((time.monotonic() - t0) * 1000, 2)
            logger.info(
                "payroll_run_completed",
                extra={
                    "payslip_count": len(payslips),
                    "warning_count": len(warnings),
                    "total_gross": str(result.total_gross),
                    "total_net": str(result.total_net),
                    "duration_ms": duration_ms,
                },
            )
            return result
