"""
Values -- Decimal coercion at the ingestion boundary.

Responsibility:
    Converts caller-supplied numbers (Decimal, int, float, numeric str) into
    ``Decimal`` exactly once, when employee profiles, attendance aggregates
    and holiday definitions are constructed.  Engines downstream only ever
    see ``Decimal``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary and hour amounts are ``Decimal``, never ``float``.
    - Floats are converted through ``str()`` so ``0.1`` becomes
      ``Decimal("0.1")`` rather than its binary expansion.
    - NaN and infinities are rejected.

Failure modes:
    - InvalidInputError for bool, None (where required), non-numeric strings,
      and non-finite values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from payroll_kernel.exceptions import InvalidInputError

ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")
WHOLE_UNIT = Decimal("1")


def to_decimal(value: Any, field: str) -> Decimal:
    """
    Convert ``value`` to a finite ``Decimal``.

    Raises:
        InvalidInputError: if the value is not a finite number.
    """
    # bool is an int subclass; True/False are never amounts
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(field, value, "expected a number")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidInputError(field, value, "not a number") from e
    else:
        raise InvalidInputError(field, value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise InvalidInputError(field, value, "must be finite")
    return result


def optional_decimal(value: Any, field: str) -> Decimal | None:
    """Like ``to_decimal`` but passes ``None`` through."""
    if value is None:
        return None
    return to_decimal(value, field)


def amount_or_zero(value: Any, field: str) -> Decimal:
    """Like ``to_decimal`` but treats ``None`` as zero."""
    if value is None:
        return ZERO
    return to_decimal(value, field)


def round_half_up(value: Decimal, exponent: Decimal = WHOLE_UNIT) -> Decimal:
    """Round to ``exponent`` (whole units by default), halves away from zero."""
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


def clamp(value: Decimal, lower: Decimal, upper: Decimal) -> Decimal:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))
