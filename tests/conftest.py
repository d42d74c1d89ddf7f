"""
Pytest fixtures for the payroll kernel test suite.

Provides:
- Structured logging setup and log capture
- Deterministic clock and tip sources
- Default settings and representative employee profiles
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from payroll_config import PayrollSettings, clear_config_cache
from payroll_engines import FixedTipPoolSource, PayrollAssembler
from payroll_kernel.domain import (
    AllowanceSeeds,
    DeductionSeeds,
    DeterministicClock,
    EmployeeProfile,
)
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Valid statutory identifiers in dashed form
VALID_SSS = "34-1234567-8"
VALID_PHILHEALTH = "12-345678901-2"
VALID_PAGIBIG = "1234-5678-9012"

FIXED_NOW = datetime(2025, 9, 30, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_payroll(...)
            logs = captured_logs()
            assert any(r["message"] == "payroll_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Clock frozen at 2025-09-30 12:00 UTC."""
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def settings() -> PayrollSettings:
    return PayrollSettings.default()


@pytest.fixture
def fixed_tips():
    """Pool of 15,000,000 shared by 20 -> 750,000 per head."""
    return FixedTipPoolSource(Decimal("15000000"), 20)


@pytest.fixture
def assembler(settings, fixed_tips, deterministic_clock) -> PayrollAssembler:
    return PayrollAssembler(settings=settings, tip_source=fixed_tips, clock=deterministic_clock)


@pytest.fixture
def make_employee():
    """Factory for employee profiles with sensible defaults."""

    def _make(**overrides) -> EmployeeProfile:
        fields = {
            "id": "E001",
            "name": "Maria Santos",
            "base_salary": Decimal("30000"),
            "position": "Accountant",
            "department": "Finance",
            "religion": "katolik",
        }
        fields.update(overrides)
        return EmployeeProfile(**fields)

    return _make


@pytest.fixture
def registered_employee(make_employee) -> EmployeeProfile:
    """Employee with all three statutory identifiers and seeded allowances."""
    return make_employee(
        sss_number=VALID_SSS,
        philhealth_number=VALID_PHILHEALTH,
        pagibig_number=VALID_PAGIBIG,
        allowances=AllowanceSeeds(transport=Decimal("1500"), meal=Decimal("1000")),
        deductions=DeductionSeeds(loan_deduction=Decimal("500")),
    )
