"""
Holiday Resolver -- active holiday for a pay period and allowance eligibility.

Responsibility:
    Determine which single holiday, if any, governs a pay period and whether
    an employee's religion group qualifies for its allowance.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  The holiday pool is an
    explicit argument (the built-in pool from configuration or a hydrated
    feed); pools are never merged.

Invariants enforced:
    - At most one holiday per period.  When several active holidays fall in
      the same month, a named resolution strategy picks one; the default,
      ``first_active_in_period``, keeps the first in pool order.
    - Inactive holidays never resolve.
    - An ineligible employee keeps the seeded holiday allowance and gets
      ``type = None``.

Failure modes:
    - InvalidPeriodError for a malformed period token.
    - UnknownResolutionStrategyError for an unregistered strategy name.

Usage:
    from payroll_engines.holiday import resolve_holiday_allowance

    result = resolve_holiday_allowance(
        employee, "9/2025", settings.holidays, base_amount=Decimal("8000"),
    )
    result.amount  # seed + 8000 * multiplier when eligible
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable

from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.holiday import HolidayDefinition, HolidayType
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.exceptions import UnknownResolutionStrategyError
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.holiday")

DEFAULT_STRATEGY = "first_active_in_period"


@runtime_checkable
class HolidayResolutionStrategy(Protocol):
    """Picks one holiday out of the active candidates of a period.

    Candidates arrive in pool order and are never empty.
    """

    name: str

    def select(self, candidates: Sequence[HolidayDefinition]) -> HolidayDefinition:
        ...


class FirstActiveInPeriod:
    """First active holiday of the period in pool order."""

    name = "first_active_in_period"

    def select(self, candidates: Sequence[HolidayDefinition]) -> HolidayDefinition:
        return candidates[0]


class HighestMultiplier:
    """Largest allowance multiplier; ties keep pool order."""

    name = "highest_multiplier"

    def select(self, candidates: Sequence[HolidayDefinition]) -> HolidayDefinition:
        best = candidates[0]
        for holiday in candidates[1:]:
            if holiday.allowance_multiplier > best.allowance_multiplier:
                best = holiday
        return best


_strategies: dict[str, HolidayResolutionStrategy] = {}
_registry_lock = threading.Lock()


def register_strategy(strategy: HolidayResolutionStrategy, replace: bool = False) -> None:
    """Register a resolution strategy under ``strategy.name``.

    Raises:
        ValueError: if the name is taken and ``replace`` is false.
    """
    with _registry_lock:
        if strategy.name in _strategies and not replace:
            raise ValueError(f"Holiday strategy already registered: {strategy.name}")
        _strategies[strategy.name] = strategy
    logger.debug("holiday_strategy_registered", extra={"strategy": strategy.name})


def get_strategy(name: str) -> HolidayResolutionStrategy:
    """Look up a registered strategy by name."""
    with _registry_lock:
        strategy = _strategies.get(name)
        available = sorted(_strategies)
    if strategy is None:
        logger.error(
            "holiday_strategy_not_found",
            extra={"strategy": name, "available": available},
        )
        raise UnknownResolutionStrategyError(name, available)
    return strategy


def available_strategies() -> list[str]:
    with _registry_lock:
        return sorted(_strategies)


register_strategy(FirstActiveInPeriod())
register_strategy(HighestMultiplier())


@dataclass(frozen=True)
class HolidayAllowance:
    """Outcome of holiday allowance resolution for one employee."""

    amount: Decimal
    type: HolidayType | None
    holiday: HolidayDefinition | None = None

    @property
    def applied(self) -> bool:
        return self.type is not None


def resolve_active_holiday(
    period: str | PayPeriod,
    holiday_pool: Sequence[HolidayDefinition],
    strategy: str = DEFAULT_STRATEGY,
) -> HolidayDefinition | None:
    """
    Return the holiday governing ``period``, or None.

    Candidates are active holidays dated in the period's (year, month); the
    named strategy chooses among them.
    """
    pay_period = PayPeriod.parse(period)
    chooser = get_strategy(strategy)

    candidates = [
        h for h in holiday_pool if h.is_active and pay_period.contains(h.date)
    ]
    if not candidates:
        logger.debug(
            "holiday_none_in_period",
            extra={"period": pay_period.token, "pool_size": len(holiday_pool)},
        )
        return None

    chosen = chooser.select(candidates)
    logger.debug(
        "holiday_resolved",
        extra={
            "period": pay_period.token,
            "holiday_id": chosen.id,
            "holiday_type": chosen.type.value,
            "candidate_count": len(candidates),
            "strategy": chooser.name,
        },
    )
    return chosen


@traced_engine("holiday", "1.0", fingerprint_fields=("period", "base_amount", "strategy"))
def resolve_holiday_allowance(
    employee: EmployeeProfile,
    period: str | PayPeriod,
    holiday_pool: Sequence[HolidayDefinition],
    base_amount: Decimal,
    strategy: str = DEFAULT_STRATEGY,
) -> HolidayAllowance:
    """
    Holiday allowance for ``employee`` in ``period``.

    Args:
        employee: Profile supplying the religion group and the seed amount.
        period: "M/YYYY" token or a parsed ``PayPeriod``.
        holiday_pool: Authoritative holiday list.
        base_amount: Salary the multiplier applies to (the prorated base
            when called from the assembler).
        strategy: Registered resolution strategy name.

    Returns:
        ``HolidayAllowance``; ``type`` is None when no holiday applies.
    """
    seed = employee.allowances.holiday_allowance
    holiday = resolve_active_holiday(period, holiday_pool, strategy)

    if holiday is None:
        return HolidayAllowance(amount=seed, type=None)

    if not holiday.is_eligible(employee.religion):
        logger.debug(
            "holiday_employee_ineligible",
            extra={
                "employee_id": employee.id,
                "holiday_id": holiday.id,
                "religion": employee.religion,
            },
        )
        return HolidayAllowance(amount=seed, type=None)

    amount = seed + base_amount * holiday.allowance_multiplier
    logger.info(
        "holiday_allowance_applied",
        extra={
            "employee_id": employee.id,
            "holiday_id": holiday.id,
            "holiday_type": holiday.type.value,
            "multiplier": str(holiday.allowance_multiplier),
            "base_amount": str(base_amount),
            "amount": str(amount),
        },
    )
    return HolidayAllowance(amount=amount, type=holiday.type, holiday=holiday)
