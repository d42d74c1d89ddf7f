"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads a YAML configuration set and parses it into typed
``payroll_config.schema`` instances.  Runtime callers go through
``payroll_config.get_active_config()``; the parse helpers are public for
tests and tooling.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel domain
types only; has no dependency on engines or services.

Invariants enforced
-------------------
* Amounts and rates are parsed through ``str()`` into ``Decimal``; a YAML
  float ``0.045`` becomes ``Decimal("0.045")``.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong shapes or values  -> ``InvalidConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import (
    DEFAULT_TIP_ROLES,
    OvertimeSettings,
    PayrollSettings,
    StatutoryRates,
    TipPoolSettings,
)
from payroll_kernel.domain.holiday import HolidayDefinition
from payroll_kernel.domain.values import to_decimal
from payroll_kernel.exceptions import InvalidConfigError, InvalidInputError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfigError(str(path), "top level must be a mapping")
    return data


def parse_decimal(value: Any, source: str) -> Decimal:
    """Parse a rate or amount, reporting failures as ``InvalidConfigError``."""
    try:
        return to_decimal(value, source)
    except InvalidInputError as e:
        raise InvalidConfigError(source, e.reason) from e


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise InvalidConfigError(key, "expected a mapping")
    return section


def parse_statutory(data: dict[str, Any]) -> StatutoryRates:
    """Parse ``StatutoryRates``; omitted keys keep their 2025 defaults."""
    defaults = StatutoryRates()
    values = {}
    for name in (
        "sss_rate",
        "sss_salary_cap",
        "philhealth_rate",
        "philhealth_salary_cap",
        "philhealth_max_contribution",
        "pagibig_rate",
        "pagibig_max_contribution",
    ):
        raw = data.get(name)
        values[name] = (
            getattr(defaults, name) if raw is None else parse_decimal(raw, f"statutory.{name}")
        )
    return StatutoryRates(**values)


def parse_overtime(data: dict[str, Any]) -> OvertimeSettings:
    """Parse ``OvertimeSettings``."""
    defaults = OvertimeSettings()
    return OvertimeSettings(
        multiplier=parse_decimal(data.get("multiplier", defaults.multiplier), "overtime.multiplier"),
        default_monthly_hours=parse_decimal(
            data.get("default_monthly_hours", defaults.default_monthly_hours),
            "overtime.default_monthly_hours",
        ),
        hours_per_day=parse_decimal(
            data.get("hours_per_day", defaults.hours_per_day), "overtime.hours_per_day"
        ),
    )


def parse_tips(data: dict[str, Any]) -> TipPoolSettings:
    """Parse ``TipPoolSettings``."""
    defaults = TipPoolSettings()
    roles = data.get("eligible_roles", DEFAULT_TIP_ROLES)
    if not isinstance(roles, (list, tuple)):
        raise InvalidConfigError("tips.eligible_roles", "expected a list of role names")
    headcount = data.get("assumed_headcount", defaults.assumed_headcount)
    if isinstance(headcount, bool) or not isinstance(headcount, int):
        raise InvalidConfigError("tips.assumed_headcount", f"expected an integer, got {headcount!r}")
    return TipPoolSettings(
        base_pool=parse_decimal(data.get("base_pool", defaults.base_pool), "tips.base_pool"),
        variation=parse_decimal(data.get("variation", defaults.variation), "tips.variation"),
        assumed_headcount=headcount,
        eligible_roles=tuple(str(role) for role in roles),
    )


def parse_holiday(data: dict[str, Any]) -> HolidayDefinition:
    """Parse one holiday entry; kernel validation errors become config errors."""
    if not isinstance(data, dict):
        raise InvalidConfigError("holidays", f"expected a mapping, got {data!r}")
    try:
        return HolidayDefinition.from_dict(data)
    except InvalidInputError as e:
        raise InvalidConfigError(f"holidays.{data.get('id', '?')}", str(e)) from e


def parse_settings(data: dict[str, Any]) -> PayrollSettings:
    """
    Parse a complete ``PayrollSettings`` from a loaded YAML mapping.

    A set without a ``holidays`` key gets an empty pool, never the
    built-in one; pools are not merged.
    """
    if "name" not in data:
        raise InvalidConfigError("name", "configuration set needs a name")
    holidays_raw = data.get("holidays") or []
    if not isinstance(holidays_raw, list):
        raise InvalidConfigError("holidays", "expected a list")

    return PayrollSettings(
        name=str(data["name"]),
        version=int(data.get("version", 1)),
        currency=str(data.get("currency", "PHP")),
        statutory=parse_statutory(_section(data, "statutory")),
        overtime=parse_overtime(_section(data, "overtime")),
        tips=parse_tips(_section(data, "tips")),
        holidays=tuple(parse_holiday(h) for h in holidays_raw),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute a deterministic SHA-256 checksum of a raw configuration mapping.

    Keys are sorted and non-JSON values (dates, Decimals) are stringified,
    so the same YAML always hashes identically.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
