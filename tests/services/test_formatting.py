"""Tests for currency, date, period and label formatting."""

import dataclasses
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from payroll_kernel.domain import DeterministicClock, HolidayType
from payroll_kernel.exceptions import InvalidInputError, InvalidPeriodError
from payroll_services import (
    FormattingConfig,
    current_period,
    format_currency,
    format_date,
    format_period,
    holiday_allowance_label,
)


class TestFormattingConfig:

    def test_defaults(self):
        config = FormattingConfig()
        assert config.currency == "PHP"
        assert config.currency_symbol == "₱"

    def test_only_fields_that_drive_output(self):
        assert [f.name for f in dataclasses.fields(FormattingConfig)] == [
            "currency",
            "date_format",
            "fraction_digits",
        ]

    def test_unknown_currency_uses_code(self):
        assert FormattingConfig(currency="EUR").currency_symbol == "EUR "

    def test_bad_date_format(self):
        with pytest.raises(InvalidInputError):
            FormattingConfig(date_format="D.M.Y")

    @pytest.mark.parametrize("digits", [-1, 5])
    def test_fraction_digits_bounds(self, digits):
        with pytest.raises(InvalidInputError):
            FormattingConfig(fraction_digits=digits)


class TestFormatCurrency:

    def setup_method(self):
        self.config = FormattingConfig()

    def test_thousands_separator(self):
        assert format_currency(Decimal("28650"), self.config) == "₱28,650"

    def test_rounds_half_up(self):
        assert format_currency(Decimal("1187.5"), self.config) == "₱1,188"

    def test_fraction_digits(self):
        config = FormattingConfig(fraction_digits=2)
        assert format_currency(Decimal("1234.005"), config) == "₱1,234.01"

    def test_negative_sign_before_symbol(self):
        assert format_currency(Decimal("-1000"), self.config) == "-₱1,000"

    def test_accepts_int_and_str(self):
        assert format_currency(750000, self.config) == "₱750,000"
        assert format_currency("15000.4", self.config) == "₱15,000"

    def test_other_currencies(self):
        assert format_currency(500, FormattingConfig(currency="USD")) == "$500"
        assert format_currency(500, FormattingConfig(currency="IDR")) == "Rp500"

    def test_zero(self):
        assert format_currency(Decimal("0"), self.config) == "₱0"

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidInputError):
            format_currency("lots", self.config)


class TestFormatDate:

    def test_default_format(self):
        assert format_date(date(2025, 9, 5), FormattingConfig()) == "05/09/2025"

    def test_iso_format(self):
        config = FormattingConfig(date_format="YYYY-MM-DD")
        assert format_date(date(2025, 9, 5), config) == "2025-09-05"

    def test_us_format(self):
        config = FormattingConfig(date_format="MM/DD/YYYY")
        assert format_date(date(2025, 9, 5), config) == "09/05/2025"

    def test_long_format(self):
        config = FormattingConfig(date_format="long")
        assert format_date(date(2025, 9, 15), config) == "September 15, 2025"

    def test_datetime_and_string(self):
        config = FormattingConfig()
        assert format_date(datetime(2025, 9, 30, 23, 0, tzinfo=timezone.utc), config) == "30/09/2025"
        assert format_date("2025-09-30T12:00:00Z", config) == "30/09/2025"

    def test_invalid_string(self):
        with pytest.raises(InvalidInputError):
            format_date("next week", FormattingConfig())


class TestPeriodAndLabels:

    def test_format_period(self):
        assert format_period("9/2025") == "September 2025"
        assert format_period("01/2024") == "January 2024"

    def test_format_period_invalid(self):
        with pytest.raises(InvalidPeriodError):
            format_period("13/2025")

    @pytest.mark.parametrize(
        "holiday_type,label",
        [
            (HolidayType.ANNIVERSARY, "Anniversary Bonus"),
            (HolidayType.REGULAR, "Regular Holiday Allowance"),
            ("local", "Local Holiday Allowance"),
            (None, "Holiday Allowance"),
            ("unheard_of", "Holiday Allowance"),
        ],
    )
    def test_holiday_allowance_label(self, holiday_type, label):
        assert holiday_allowance_label(holiday_type) == label

    def test_current_period(self):
        clock = DeterministicClock(datetime(2025, 3, 31, 10, tzinfo=timezone.utc))
        assert current_period(clock).token == "3/2025"
