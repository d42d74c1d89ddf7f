"""
payroll_services.formatting -- Presentation-neutral currency, date and label formatting.

Every function takes an explicit ``FormattingConfig``; nothing here reads
ambient settings, locale or environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from payroll_kernel.domain.clock import Clock
from payroll_kernel.domain.holiday import HolidayType
from payroll_kernel.domain.period import PayPeriod
from payroll_kernel.domain.values import ZERO, round_half_up, to_decimal
from payroll_kernel.exceptions import InvalidInputError

CURRENCY_SYMBOLS = {
    "PHP": "₱",
    "USD": "$",
    "IDR": "Rp",
}

DATE_FORMATS = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM/DD/YYYY": "%m/%d/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
}
LONG_DATE = "long"

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

HOLIDAY_ALLOWANCE_LABELS = {
    HolidayType.REGULAR: "Regular Holiday Allowance",
    HolidayType.SPECIAL_NON_WORKING: "Special Non-Working Holiday Allowance",
    HolidayType.SPECIAL_WORKING: "Special Working Holiday Allowance",
    HolidayType.NATIONAL: "National Holiday Allowance",
    HolidayType.LOCAL: "Local Holiday Allowance",
    HolidayType.ANNIVERSARY: "Anniversary Bonus",
}
DEFAULT_HOLIDAY_LABEL = "Holiday Allowance"


@dataclass(frozen=True)
class FormattingConfig:
    """Display preferences for amounts and dates."""

    currency: str = "PHP"
    date_format: str = "DD/MM/YYYY"
    fraction_digits: int = 0

    def __post_init__(self) -> None:
        if self.date_format not in DATE_FORMATS and self.date_format != LONG_DATE:
            raise InvalidInputError("date_format", self.date_format, "unsupported date format")
        if not 0 <= self.fraction_digits <= 4:
            raise InvalidInputError("fraction_digits", self.fraction_digits, "must be 0..4")

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, f"{self.currency} ")


def format_currency(amount: Decimal | int | str, config: FormattingConfig) -> str:
    """``₱30,000`` style; rounds half-up to ``config.fraction_digits``."""
    value = to_decimal(amount, "amount")
    exponent = Decimal(1).scaleb(-config.fraction_digits)
    rounded = round_half_up(value, exponent)
    sign = "-" if rounded < ZERO else ""
    return f"{sign}{config.currency_symbol}{abs(rounded):,.{config.fraction_digits}f}"


def format_date(value: date | datetime | str, config: FormattingConfig) -> str:
    """Format a date (or ISO date string) per ``config.date_format``."""
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        try:
            day = date.fromisoformat(str(value)[:10])
        except ValueError as e:
            raise InvalidInputError("date", value, "expected YYYY-MM-DD") from e

    if config.date_format == LONG_DATE:
        return f"{_MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"
    return day.strftime(DATE_FORMATS[config.date_format])


def format_period(period: str | PayPeriod) -> str:
    """Long form of a period token, e.g. ``9/2025`` -> ``September 2025``."""
    pay_period = PayPeriod.parse(period)
    return f"{_MONTH_NAMES[pay_period.month - 1]} {pay_period.year}"


def holiday_allowance_label(holiday_type: HolidayType | str | None) -> str:
    """Display label for the holiday allowance line of a pay slip."""
    if holiday_type is None:
        return DEFAULT_HOLIDAY_LABEL
    try:
        return HOLIDAY_ALLOWANCE_LABELS[HolidayType(holiday_type)]
    except ValueError:
        return DEFAULT_HOLIDAY_LABEL


def current_period(clock: Clock) -> PayPeriod:
    """The pay period containing the clock's current date."""
    return PayPeriod.containing(clock.today())
