"""
payroll_services.notifications -- Pay-slip notification text and chat deep links.

Builds the message an employee receives when a pay slip is ready and the
``wa.me`` link that opens it in a chat client.  Sending is left to the
caller; nothing here performs I/O.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from payroll_kernel.domain.employee import EmployeeProfile
from payroll_kernel.domain.payslip import PaySlip
from payroll_kernel.exceptions import InvalidInputError
from payroll_kernel.logging_config import get_logger
from payroll_services.formatting import FormattingConfig, format_currency

logger = get_logger("services.notifications")

DEFAULT_COMPANY_NAME = "Bayani Solutions"
CHAT_LINK_BASE = "https://wa.me"

_NON_DIGIT = re.compile(r"\D", re.ASCII)
# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_payslip_message(
    employee: EmployeeProfile,
    payslip: PaySlip,
    config: FormattingConfig,
    company_name: str = DEFAULT_COMPANY_NAME,
) -> str:
    """
    Plain-text pay-slip announcement.

    The prorated-base line appears only when attendance changed the base.
    """
    lines = [
        "*BAYANI PAYROLL*",
        "",
        f"Hello {employee.name},",
        "",
        f"Your pay slip for {payslip.period} is ready!",
        "",
        f"Net Salary (Take-home): {format_currency(payslip.net_salary, config)}",
    ]
    if payslip.is_prorated:
        lines.append(f"Prorated Base: {format_currency(payslip.prorated_base, config)}")
    lines.extend(["", f"Thank you for your dedication to {company_name}!"])
    return "\n".join(lines)


def normalize_phone(phone: str | None) -> str:
    """Digits only; raises when nothing dialable is left."""
    digits = _NON_DIGIT.sub("", phone or "")
    if not digits:
        raise InvalidInputError("phone", phone, "no digits to dial")
    return digits


def chat_link(phone: str | None, message: str) -> str:
    """``https://wa.me/<digits>?text=<url-encoded message>``."""
    digits = normalize_phone(phone)
    link = f"{CHAT_LINK_BASE}/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
    logger.debug("chat_link_built", extra={"phone_digits": len(digits)})
    return link
