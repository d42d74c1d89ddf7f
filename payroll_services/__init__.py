"""
payroll_services -- Package init and public API.

Responsibility:
    Orchestration and presentation-neutral services over the pure payroll
    engines: roster runs, holiday pool hydration, formatting, notification
    text and period reports.  This is the only layer that may use
    wall-clock time by default or fan work out to threads.

Architecture position:
    Services -- orchestration over engines + config + kernel.

    Dependency direction (enforced by tests/architecture/test_layer_boundaries.py):
        payroll_services/ -> payroll_engines/  (allowed)
        payroll_services/ -> payroll_kernel/   (allowed)
        payroll_engines/  -> payroll_services/ (FORBIDDEN)
        payroll_kernel/   -> payroll_services/ (FORBIDDEN)

Failure modes:
    - ImportError at startup if a service's dependency graph is broken.
"""

from payroll_kernel.logging_config import get_logger

logger = get_logger("services")

from payroll_services.formatting import (
    FormattingConfig,
    current_period,
    format_currency,
    format_date,
    format_period,
    holiday_allowance_label,
)
from payroll_services.holiday_calendar import (
    HolidayPoolCache,
    feed_url,
    holiday_from_feed_entry,
    holidays_from_feed,
)
from payroll_services.notifications import build_payslip_message, chat_link
from payroll_services.payroll_run import (
    NegativeNetWarning,
    PayrollRunResult,
    PayrollRunService,
)
from payroll_services.reporting import (
    PayrollReport,
    ReportConfig,
    SalaryBand,
    build_payroll_report,
)

__all__ = [
    "FormattingConfig",
    "HolidayPoolCache",
    "NegativeNetWarning",
    "PayrollReport",
    "PayrollRunResult",
    "PayrollRunService",
    "ReportConfig",
    "SalaryBand",
    "build_payroll_report",
    "build_payslip_message",
    "chat_link",
    "current_period",
    "feed_url",
    "format_currency",
    "format_date",
    "format_period",
    "holiday_allowance_label",
    "holiday_from_feed_entry",
    "holidays_from_feed",
]
