"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    payroll calculation engines.  This is the canonical import surface for
    ``payroll_services``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May import payroll_kernel and payroll_config.schema.
    MUST NOT import payroll_services.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()``; timestamps come from an
      injected ``Clock``.
    - Decimal-only arithmetic: all monetary amounts use ``Decimal``.
    - Determinism: identical inputs produce identical outputs, except for
      ``SimulatedTipPoolSource`` without a seeded ``random.Random``.

Audit relevance:
    Engine invocations are traced via ``@traced_engine`` (see
    ``payroll_engines.tracer``), emitting PAYROLL_ENGINE_TRACE records with
    engine name, version, input fingerprint and duration.

Usage:
    from payroll_engines import PayrollAssembler, calculate_payroll
    from payroll_engines.deductions import compute_statutory_deductions
"""

from payroll_kernel.logging_config import get_logger

logger = get_logger("engines")

from payroll_engines.assembler import PayrollAssembler, calculate_payroll
from payroll_engines.attendance import (
    OvertimeResult,
    compute_overtime_pay,
    count_work_days,
    derive_attendance_record,
    prorate_base,
    summarize_attendance,
)
from payroll_engines.deductions import (
    StatutoryDeductions,
    StatutoryScheme,
    compute_statutory_deductions,
    is_valid_identifier,
    sum_deductions,
)
from payroll_engines.holiday import (
    DEFAULT_STRATEGY,
    FirstActiveInPeriod,
    HighestMultiplier,
    HolidayAllowance,
    HolidayResolutionStrategy,
    available_strategies,
    get_strategy,
    register_strategy,
    resolve_active_holiday,
    resolve_holiday_allowance,
)
from payroll_engines.tips import (
    FixedTipPoolSource,
    SimulatedTipPoolSource,
    TipLedgerSource,
    TipPool,
    TipPoolSource,
    distribute_tips,
    is_tip_eligible,
)
from payroll_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "DEFAULT_STRATEGY",
    "FirstActiveInPeriod",
    "FixedTipPoolSource",
    "HighestMultiplier",
    "HolidayAllowance",
    "HolidayResolutionStrategy",
    "OvertimeResult",
    "PayrollAssembler",
    "SimulatedTipPoolSource",
    "StatutoryDeductions",
    "StatutoryScheme",
    "TipLedgerSource",
    "TipPool",
    "TipPoolSource",
    "available_strategies",
    "calculate_payroll",
    "compute_input_fingerprint",
    "compute_overtime_pay",
    "compute_statutory_deductions",
    "count_work_days",
    "derive_attendance_record",
    "distribute_tips",
    "get_strategy",
    "is_tip_eligible",
    "is_valid_identifier",
    "prorate_base",
    "register_strategy",
    "resolve_active_holiday",
    "resolve_holiday_allowance",
    "sum_deductions",
    "summarize_attendance",
    "traced_engine",
]
