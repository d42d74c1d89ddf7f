"""
Tip Distributor -- collective tip-pool share for eligible field roles.

Responsibility:
    Add a per-head share of the period's tip pool to the tips seeded on the
    employee, for non-management staff whose position names an eligible
    role.

Architecture position:
    Engines -- pure calculation layer.  The pool itself comes from a
    ``TipPoolSource``; the simulated source is the only non-deterministic
    component in the system and takes an injectable ``random.Random``.

Invariants enforced:
    - Management never receives a pool share.
    - Role matching is a case-insensitive substring test against the
      configured role list.
    - The share is rounded half-up to whole currency units; a pool with no
      positive headcount yields zero.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable

from payroll_config.schema import TipPoolSettings
from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.domain.values import ONE, ZERO, round_half_up, to_decimal
from payroll_kernel.exceptions import InvalidInputError
from payroll_kernel.logging_config import get_logger

logger = get_logger("engines.tips")


@dataclass(frozen=True)
class TipPool:
    """Total tips collected in a period and how many people share them."""

    total: Decimal
    eligible_headcount: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "total", to_decimal(self.total, "tip_pool.total"))
        if self.total < ZERO:
            raise InvalidInputError("tip_pool.total", self.total, "cannot be negative")

    @property
    def share(self) -> Decimal:
        """Per-head share in whole units; zero without a positive headcount."""
        if self.eligible_headcount <= 0:
            return ZERO
        return round_half_up(self.total / Decimal(self.eligible_headcount))

    @classmethod
    def empty(cls) -> TipPool:
        return cls(total=ZERO, eligible_headcount=0)


@runtime_checkable
class TipPoolSource(Protocol):
    """Protocol for obtaining the tip pool of a period.

    Implementations: SimulatedTipPoolSource, FixedTipPoolSource, TipLedgerSource.
    """

    def pool_for(self, period: PayPeriod) -> TipPool:
        ...


class SimulatedTipPoolSource:
    """
    Random pool around a configured base, for demos and the default run.

    ``total = base_pool * (1 + uniform(-variation, +variation))`` with the
    configured assumed headcount.  The headcount does not follow the roster.
    """

    def __init__(self, settings: TipPoolSettings, rng: random.Random | None = None):
        self._settings = settings
        self._rng = rng or random.Random()

    def pool_for(self, period: PayPeriod) -> TipPool:
        variation = float(self._settings.variation)
        factor = Decimal(str(self._rng.uniform(-variation, variation)))
        total = self._settings.base_pool * (ONE + factor)
        logger.debug(
            "tip_pool_simulated",
            extra={"period": period.token, "total": str(total)},
        )
        return TipPool(total=total, eligible_headcount=self._settings.assumed_headcount)


class FixedTipPoolSource:
    """Same pool for every period."""

    def __init__(self, total: Decimal | int | str, eligible_headcount: int):
        self._pool = TipPool(total=total, eligible_headcount=eligible_headcount)

    def pool_for(self, period: PayPeriod) -> TipPool:
        return self._pool


class TipLedgerSource:
    """Pools recorded per period token ("M/YYYY"); unknown periods are empty."""

    def __init__(self, pools: Mapping[str, TipPool]):
        self._pools: dict[tuple[int, int], TipPool] = {}
        for token, pool in pools.items():
            parsed = PayPeriod.parse(token)
            self._pools[(parsed.year, parsed.month)] = pool

    def pool_for(self, period: PayPeriod) -> TipPool:
        pool = self._pools.get((period.year, period.month))
        if pool is None:
            logger.info("tip_pool_not_recorded", extra={"period": period.token})
            return TipPool.empty()
        return pool


def is_tip_eligible(employee: EmployeeProfile, settings: TipPoolSettings) -> bool:
    """Non-management staff whose position contains an eligible role."""
    if employee.is_management:
        return False
    position = employee.position.lower()
    return any(role in position for role in settings.eligible_roles)


@traced_engine("tips", "1.0", fingerprint_fields=("period",))
def distribute_tips(
    employee: EmployeeProfile,
    period: str | PayPeriod,
    source: TipPoolSource,
    settings: TipPoolSettings,
) -> Decimal:
    """
    Tips for ``employee`` in ``period``: the seed plus any pool share.

    The pool is only drawn for eligible employees.
    """
    seed = employee.allowances.tips
    if not is_tip_eligible(employee, settings):
        return seed

    pay_period = PayPeriod.parse(period)
    pool = source.pool_for(pay_period)
    share = pool.share
    logger.debug(
        "tip_share_distributed",
        extra={
            "employee_id": employee.id,
            "pool_total": str(pool.total),
            "eligible_headcount": pool.eligible_headcount,
            "share": str(share),
        },
    )
    return seed + share
