"""
PayrollSettings schema.

Defines the typed, frozen form of a payroll configuration set: statutory
contribution rates, overtime defaults, tip-pool settings and the built-in
holiday pool.  YAML sets are parsed into these types by the loader;
engines receive them as explicit parameters and never read files.

Key distinction:
  sets/<name>.yaml   = source artifact (human-authored, versioned)
  PayrollSettings    = runtime artifact (validated, frozen)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from payroll_kernel.domain.employee import RELIGION_GROUPS
from payroll_kernel.domain.holiday import HolidayDefinition, HolidayType
from payroll_kernel.exceptions import InvalidConfigError

# ---------------------------------------------------------------------------
# Statutory contributions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatutoryRates:
    """
    Employee-share contribution rates for SSS, PhilHealth and Pag-IBIG.

    Salary caps bound the amount a rate is applied to; ``*_max_contribution``
    bounds the resulting contribution itself.
    """

    sss_rate: Decimal = Decimal("0.045")
    sss_salary_cap: Decimal = Decimal("30000")
    philhealth_rate: Decimal = Decimal("0.025")
    philhealth_salary_cap: Decimal = Decimal("200000")
    philhealth_max_contribution: Decimal = Decimal("10000")
    pagibig_rate: Decimal = Decimal("0.02")
    pagibig_max_contribution: Decimal = Decimal("100")

    def __post_init__(self) -> None:
        for name in (
            "sss_rate",
            "sss_salary_cap",
            "philhealth_rate",
            "philhealth_salary_cap",
            "philhealth_max_contribution",
            "pagibig_rate",
            "pagibig_max_contribution",
        ):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                raise InvalidConfigError(f"statutory.{name}", f"expected Decimal, got {value!r}")
            if value < 0:
                raise InvalidConfigError(f"statutory.{name}", "cannot be negative")
        for name in ("sss_rate", "philhealth_rate", "pagibig_rate"):
            if getattr(self, name) > 1:
                raise InvalidConfigError(f"statutory.{name}", "rate must be a fraction <= 1")


# ---------------------------------------------------------------------------
# Overtime
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OvertimeSettings:
    """Overtime premium and the hour assumptions behind the hourly rate."""

    multiplier: Decimal = Decimal("1.25")
    default_monthly_hours: Decimal = Decimal("160")
    hours_per_day: Decimal = Decimal("8")

    def __post_init__(self) -> None:
        if self.multiplier < 0:
            raise InvalidConfigError("overtime.multiplier", "cannot be negative")
        if self.default_monthly_hours <= 0:
            raise InvalidConfigError("overtime.default_monthly_hours", "must be positive")
        if self.hours_per_day <= 0:
            raise InvalidConfigError("overtime.hours_per_day", "must be positive")


# ---------------------------------------------------------------------------
# Tips
# ---------------------------------------------------------------------------

DEFAULT_TIP_ROLES = (
    "dive master",
    "senior dive master",
    "driver",
    "senior driver",
    "diving instructor",
    "senior diving instructor",
)


@dataclass(frozen=True)
class TipPoolSettings:
    """Simulated tip pool parameters and the roles that share in the pool."""

    base_pool: Decimal = Decimal("15000000")
    variation: Decimal = Decimal("0.15")
    assumed_headcount: int = 20
    eligible_roles: tuple[str, ...] = DEFAULT_TIP_ROLES

    def __post_init__(self) -> None:
        if self.base_pool < 0:
            raise InvalidConfigError("tips.base_pool", "cannot be negative")
        if not Decimal("0") <= self.variation <= Decimal("1"):
            raise InvalidConfigError("tips.variation", "must be between 0 and 1")
        if self.assumed_headcount < 0:
            raise InvalidConfigError("tips.assumed_headcount", "cannot be negative")
        if not self.eligible_roles:
            raise InvalidConfigError("tips.eligible_roles", "at least one role is required")
        object.__setattr__(
            self,
            "eligible_roles",
            tuple(role.strip().lower() for role in self.eligible_roles),
        )


# ---------------------------------------------------------------------------
# Built-in holiday pool
# ---------------------------------------------------------------------------

DEFAULT_HOLIDAY_POOL: tuple[HolidayDefinition, ...] = (
    HolidayDefinition(
        id="eid_al_fitr_2024",
        name="Eid al-Fitr 2024",
        date=date(2024, 4, 10),
        type=HolidayType.REGULAR,
        allowance_multiplier=Decimal("1.0"),
        eligible_religions=("islam",),
        description="Eid al-Fitr allowance",
    ),
    HolidayDefinition(
        id="christmas_2024",
        name="Christmas 2024",
        date=date(2024, 12, 25),
        type=HolidayType.REGULAR,
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=("kristen", "katolik"),
        description="Christmas allowance",
    ),
    HolidayDefinition(
        id="nyepi_2024",
        name="Nyepi 2024",
        date=date(2024, 3, 11),
        type=HolidayType.LOCAL,
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=("hindu",),
        description="Day of Silence allowance",
    ),
    HolidayDefinition(
        id="vesak_2024",
        name="Vesak 2024",
        date=date(2024, 5, 23),
        type=HolidayType.LOCAL,
        allowance_multiplier=Decimal("0.3"),
        eligible_religions=("budha",),
        description="Vesak allowance",
    ),
    HolidayDefinition(
        id="anniversary_2024",
        name="Anniversary Bonus September 2024",
        date=date(2024, 9, 15),
        type=HolidayType.ANNIVERSARY,
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=RELIGION_GROUPS,
        description="Company anniversary bonus for every employee",
    ),
    HolidayDefinition(
        id="eid_al_fitr_2025",
        name="Eid al-Fitr 2025",
        date=date(2025, 3, 30),
        type=HolidayType.REGULAR,
        allowance_multiplier=Decimal("1.0"),
        eligible_religions=("islam",),
        description="Eid al-Fitr allowance",
    ),
    HolidayDefinition(
        id="anniversary_2025",
        name="Anniversary Bonus September 2025",
        date=date(2025, 9, 15),
        type=HolidayType.ANNIVERSARY,
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=RELIGION_GROUPS,
        description="Company anniversary bonus for every employee",
    ),
)


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PayrollSettings:
    """One complete payroll configuration set."""

    name: str = "ph_2025"
    version: int = 1
    currency: str = "PHP"
    statutory: StatutoryRates = field(default_factory=StatutoryRates)
    overtime: OvertimeSettings = field(default_factory=OvertimeSettings)
    tips: TipPoolSettings = field(default_factory=TipPoolSettings)
    holidays: tuple[HolidayDefinition, ...] = DEFAULT_HOLIDAY_POOL
    checksum: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidConfigError("name", "configuration set needs a name")
        if self.version < 1:
            raise InvalidConfigError("version", "must be >= 1")
        if len(self.currency) != 3:
            raise InvalidConfigError("currency", f"expected an ISO 4217 code, got {self.currency!r}")
        ids = [h.id for h in self.holidays]
        if len(ids) != len(set(ids)):
            raise InvalidConfigError("holidays", "holiday ids must be unique")

    @classmethod
    def default(cls) -> PayrollSettings:
        """The 2025 Philippine settings, without touching the filesystem."""
        return cls()
