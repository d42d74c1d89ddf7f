"""
Payroll Assembler -- one employee, one period, one immutable pay slip.

Responsibility:
    Orchestrate the attendance, holiday, tip and deduction engines in a
    fixed order and freeze the result into a ``PaySlip``.

Architecture position:
    Engines -- pure calculation layer.  The only impure collaborators (clock
    and tip source) are injected.

Computation order:
    1. overtime pay
    2. prorated base
    3. holiday allowance, on the PRORATED base
    4. tips
    5. allowances total = transport + meal + bonus + tips + holiday + overtime
    6. gross = prorated base + allowances total
    7. statutory deductions on gross
    8. deductions total = voluntary + statutory
    9. net = gross - deductions total (may be negative)
    10. PaySlip with id ``PS-{employee_id}-{period without '/'}``

Failure modes:
    - InvalidPeriodError for a malformed period token.
    - UnknownResolutionStrategyError for an unregistered holiday strategy.
    Everything else degrades to zero or pass-through.

Usage:
    assembler = PayrollAssembler(settings=get_active_config(), clock=clock)
    payslip = assembler.calculate(employee, "9/2025", attendance)
"""

from __future__ import annotations

from collections.abc import Sequence

from payroll_config.schema import PayrollSettings
from payroll_engines.attendance import compute_overtime_pay, prorate_base
from payroll_engines.deductions import compute_statutory_deductions
from payroll_engines.holiday import DEFAULT_STRATEGY, get_strategy, resolve_holiday_allowance
from payroll_engines.tips import SimulatedTipPoolSource, TipPoolSource, distribute_tips
from payroll_kernel.domain.attendance import AttendanceAggregate
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.holiday import HolidayDefinition
from payroll_kernel.domain.payslip import AllowanceBreakdown, DeductionBreakdown, PaySlip
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.assembler")


def calculate_payroll(
    employee: EmployeeProfile,
    period: str | PayPeriod,
    attendance: AttendanceAggregate | None = None,
    *,
    holiday_pool: Sequence[HolidayDefinition] | None = None,
    tip_source: TipPoolSource | None = None,
    settings: PayrollSettings | None = None,
    clock: Clock | None = None,
    strategy: str = DEFAULT_STRATEGY,
) -> PaySlip:
    """
    Compute the pay slip for ``employee`` in ``period``.

    Args:
        employee: Compensation profile.
        period: "M/YYYY" token or a parsed ``PayPeriod``.
        attendance: Period aggregate; None means full pay and no overtime.
        holiday_pool: Authoritative holiday list.  Defaults to the pool of
            ``settings``.
        tip_source: Pool source for tip-eligible roles.  Defaults to a
            ``SimulatedTipPoolSource``.
        settings: Rates and defaults.  Defaults to ``PayrollSettings.default()``.
        clock: Source of ``generated_at``.  Defaults to the system clock.
        strategy: Holiday resolution strategy name.

    Returns:
        The immutable ``PaySlip``.
    """
    settings = settings or PayrollSettings.default()
    pool = settings.holidays if holiday_pool is None else holiday_pool
    tips_source = tip_source or SimulatedTipPoolSource(settings.tips)
    clock = clock or SystemClock()
    pay_period = PayPeriod.parse(period)

    overtime = compute_overtime_pay(employee, attendance, settings.overtime)
    prorated = prorate_base(employee, attendance)
    holiday = resolve_holiday_allowance(employee, pay_period, pool, prorated, strategy)
    tips = distribute_tips(employee, pay_period, tips_source, settings.tips)

    seeds = employee.allowances
    allowances = AllowanceBreakdown(
        transport=seeds.transport,
        meal=seeds.meal,
        bonus=seeds.bonus,
        overtime=overtime.pay,
        tips=tips,
        holiday_allowance=holiday.amount,
    )
    gross = prorated + allowances.total

    statutory = compute_statutory_deductions(gross, employee, settings.statutory)
    voluntary = employee.deductions
    deductions = DeductionBreakdown(
        tax=voluntary.tax,
        insurance=voluntary.insurance,
        other=voluntary.other,
        cooperative_fund=voluntary.cooperative_fund,
        health_insurance=voluntary.health_insurance,
        loan_deduction=voluntary.loan_deduction,
        sss=statutory.sss,
        philhealth=statutory.philhealth,
        pagibig=statutory.pagibig,
    )

    payslip = PaySlip(
        id=PaySlip.make_id(employee.id, pay_period.compact),
        employee_id=employee.id,
        period=pay_period.token,
        base_salary=employee.base_salary,
        prorated_base=prorated,
        allowances=allowances,
        deductions=deductions,
        overtime_hours=overtime.hours,
        holiday_type=holiday.type,
        generated_at=clock.now(),
    )

    logger.info(
        "payroll_calculated",
        extra={
            "payslip_id": payslip.id,
            "employee_id": employee.id,
            "period": pay_period.token,
            "prorated_base": str(prorated),
            "gross_salary": str(payslip.gross_salary),
            "deductions_total": str(deductions.total),
            "net_salary": str(payslip.net_salary),
            "holiday_type": holiday.type.value if holiday.type else None,
        },
    )
    return payslip


class PayrollAssembler:
    """
    Bundles the collaborators of ``calculate_payroll`` for repeated use.

    Safe to share between threads as long as the tip source is.
    """

    def __init__(
        self,
        settings: PayrollSettings | None = None,
        tip_source: TipPoolSource | None = None,
        clock: Clock | None = None,
        strategy: str = DEFAULT_STRATEGY,
    ):
        self.settings = settings or PayrollSettings.default()
        self.tip_source = tip_source or SimulatedTipPoolSource(self.settings.tips)
        self.clock = clock or SystemClock()
        # fail fast on an unknown strategy name
        get_strategy(strategy)
        self.strategy = strategy

    def calculate(
        self,
        employee: EmployeeProfile,
        period: str | PayPeriod,
        attendance: AttendanceAggregate | None = None,
        holiday_pool: Sequence[HolidayDefinition] | None = None,
    ) -> PaySlip:
        return calculate_payroll(
            employee,
            period,
            attendance,
            holiday_pool=holiday_pool,
            tip_source=self.tip_source,
            settings=self.settings,
            clock=self.clock,
            strategy=self.strategy,
        )
