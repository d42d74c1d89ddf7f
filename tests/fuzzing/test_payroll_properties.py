"""
Hypothesis-based property tests for the payroll engines.

Properties checked:
- No attendance: prorated base == base salary and no overtime hours
- days_present > work_days prorates exactly like days_present == work_days
- net == gross - deductions total, for every generated pay slip
- Malformed statutory identifiers always yield a zero contribution
- Management never receives pool tips, whatever the position
- Holiday allowance beyond the seed only for an eligible active holiday
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from payroll_config import PayrollSettings
from payroll_engines import (
    FixedTipPoolSource,
    StatutoryScheme,
    calculate_payroll,
    compute_statutory_deductions,
    distribute_tips,
    is_valid_identifier,
    prorate_base,
    resolve_holiday_allowance,
)
from payroll_kernel.domain import (
    RELIGION_GROUPS,
    AllowanceSeeds,
    AttendanceAggregate,
    DeductionSeeds,
    DeterministicClock,
    EmployeeProfile,
    HolidayDefinition,
)

DEFAULTS = PayrollSettings.default()
CLOCK = DeterministicClock(datetime(2025, 9, 30, 12, tzinfo=timezone.utc))
TIPS = FixedTipPoolSource(Decimal("15000000"), 20)

fixture_safe = settings(
    max_examples=75,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

amounts = st.decimals(min_value=0, max_value=1_000_000, places=2, allow_nan=False)
small_amounts = st.decimals(min_value=0, max_value=20_000, places=2, allow_nan=False)
day_counts = st.integers(min_value=0, max_value=31)
hours = st.decimals(min_value=-20, max_value=120, places=2, allow_nan=False)
periods = st.builds(
    lambda m, y: f"{m}/{y}",
    st.integers(min_value=1, max_value=12),
    st.integers(min_value=2024, max_value=2026),
)
religions = st.sampled_from(RELIGION_GROUPS)
positions = st.sampled_from(
    ["Dive Master", "senior driver", "Accountant", "Operations Manager", "DIVING INSTRUCTOR", ""]
)


@st.composite
def employees(draw, **overrides):
    fields = dict(
        id=draw(st.text(alphabet="ABCDEFGH0123456789", min_size=1, max_size=6)),
        name="Fuzz",
        base_salary=draw(amounts),
        position=draw(positions),
        religion=draw(religions),
        is_management=draw(st.booleans()),
        sss_number=draw(st.sampled_from([None, "34-1234567-8", "3412345678", "34-12345"])),
        philhealth_number=draw(st.sampled_from([None, "12-345678901-2", "12345"])),
        pagibig_number=draw(st.sampled_from([None, "1234-5678-9012", "1234 5678 9012"])),
        allowances=AllowanceSeeds(
            transport=draw(small_amounts),
            meal=draw(small_amounts),
            holiday_allowance=draw(small_amounts),
        ),
        deductions=DeductionSeeds(
            loan_deduction=draw(small_amounts),
            tax=draw(small_amounts),
        ),
    )
    fields.update(overrides)
    return EmployeeProfile(**fields)


attendances = st.one_of(
    st.none(),
    st.builds(
        AttendanceAggregate,
        work_days=st.one_of(st.none(), day_counts),
        days_present=st.one_of(st.none(), day_counts),
        overtime_hours=st.one_of(st.none(), hours),
        expected_hours=st.one_of(st.none(), st.integers(min_value=0, max_value=250)),
    ),
)


class TestPayslipProperties:

    @fixture_safe
    @given(employee=employees(), period=periods)
    def test_no_attendance_means_full_base(self, employee, period):
        payslip = calculate_payroll(
            employee, period, None, tip_source=TIPS, settings=DEFAULTS, clock=CLOCK
        )
        assert payslip.prorated_base == employee.base_salary
        assert payslip.overtime_hours == 0
        assert payslip.allowances.overtime == 0

    @fixture_safe
    @given(employee=employees(), period=periods, attendance=attendances)
    def test_net_is_gross_minus_deductions(self, employee, period, attendance):
        payslip = calculate_payroll(
            employee, period, attendance, tip_source=TIPS, settings=DEFAULTS, clock=CLOCK
        )
        assert payslip.net_salary == payslip.gross_salary - payslip.deductions.total
        assert payslip.gross_salary == payslip.prorated_base + payslip.allowances.total
        assert payslip.allowances.overtime >= 0
        assert 0 <= payslip.prorated_base <= employee.base_salary

    @fixture_safe
    @given(
        employee=employees(),
        work_days=st.integers(min_value=0, max_value=31),
        extra=st.integers(min_value=1, max_value=40),
    )
    def test_extra_days_clamped(self, employee, work_days, extra):
        over = AttendanceAggregate(work_days=work_days, days_present=max(1, work_days) + extra)
        full = AttendanceAggregate(work_days=work_days, days_present=max(1, work_days))
        assert prorate_base(employee, over) == prorate_base(employee, full)


class TestDeductionProperties:

    @fixture_safe
    @given(
        value=st.text(alphabet="0123456789- ", max_size=16),
        gross=amounts,
    )
    def test_malformed_identifier_zero(self, value, gross):
        assume(not is_valid_identifier(StatutoryScheme.SSS, value))
        assume(not is_valid_identifier(StatutoryScheme.PHILHEALTH, value))
        assume(not is_valid_identifier(StatutoryScheme.PAGIBIG, value))
        employee = EmployeeProfile(
            id="X",
            name="Fuzz",
            base_salary=gross,
            sss_number=value,
            philhealth_number=value,
            pagibig_number=value,
        )
        result = compute_statutory_deductions(gross, employee, DEFAULTS.statutory)
        assert result.sss == 0
        assert result.philhealth == 0
        assert result.pagibig == 0

    @fixture_safe
    @given(gross=amounts)
    def test_contributions_bounded(self, gross):
        employee = EmployeeProfile(
            id="X",
            name="Fuzz",
            base_salary=gross,
            sss_number="34-1234567-8",
            philhealth_number="12-345678901-2",
            pagibig_number="1234-5678-9012",
        )
        rates = DEFAULTS.statutory
        result = compute_statutory_deductions(gross, employee, rates)
        assert 0 <= result.sss <= rates.sss_rate * rates.sss_salary_cap
        assert 0 <= result.philhealth <= rates.philhealth_max_contribution
        assert 0 <= result.pagibig <= rates.pagibig_max_contribution


class TestTipProperties:

    @fixture_safe
    @given(employee=employees(is_management=True), period=periods)
    def test_management_never_gets_pool_tips(self, employee, period):
        assert distribute_tips(employee, period, TIPS, DEFAULTS.tips) == employee.allowances.tips


class TestHolidayProperties:

    @fixture_safe
    @given(
        employee=employees(),
        month=st.integers(min_value=1, max_value=12),
        eligible=st.lists(religions, max_size=3),
        active=st.booleans(),
        base=amounts,
    )
    def test_allowance_only_when_eligible_and_active(self, employee, month, eligible, active, base):
        holiday = HolidayDefinition(
            id="fuzz",
            name="Fuzz Day",
            date=date(2025, month, 10),
            type="regular",
            allowance_multiplier=Decimal("0.5"),
            is_active=active,
            eligible_religions=tuple(eligible),
        )
        result = resolve_holiday_allowance(employee, f"{month}/2025", [holiday], base)
        seed = employee.allowances.holiday_allowance
        if active and employee.religion in eligible:
            assert result.amount == seed + base * Decimal("0.5")
            assert result.type is not None
        else:
            assert result.amount == seed
            assert result.type is None
