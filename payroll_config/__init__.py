"""
payroll_config -- single public entrypoint for payroll configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Engines and services receive the returned
    ``PayrollSettings`` as an explicit parameter; no other component reads
    configuration files.

Architecture position:
    Configuration -- YAML-driven settings.  This package sits above
    ``payroll_kernel`` and below ``payroll_engines`` / ``payroll_services``.
    The kernel MUST NEVER import from ``payroll_config``.

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - Deterministic: the same YAML always yields the same settings and checksum.
    - Loaded sets are cached per (name, directory); ``clear_config_cache()``
      drops them.

Failure modes:
    - ``ConfigNotFoundError`` -- no ``<name>.yaml`` in the sets directory.
    - ``InvalidConfigError`` -- the set fails schema validation.

Audit relevance:
    Every load emits a ``PAYROLL_CONFIG_TRACE`` log entry with the set name,
    version, checksum and holiday count, tying each pay slip back to the
    exact rates that produced it.
"""

from __future__ import annotations

import threading
from pathlib import Path

from payroll_config.loader import load_yaml_file, parse_settings
from payroll_config.schema import (
    OvertimeSettings,
    PayrollSettings,
    StatutoryRates,
    TipPoolSettings,
)
from payroll_kernel.exceptions import ConfigNotFoundError, InvalidConfigError
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

_cache: dict[tuple[str, str], PayrollSettings] = {}
_cache_lock = threading.Lock()


def get_active_config(
    name: str = "ph_2025",
    config_dir: Path | None = None,
) -> PayrollSettings:
    """The ONLY public configuration entrypoint.

    Args:
        name: Configuration set name; resolves to ``<config_dir>/<name>.yaml``.
        config_dir: Override path to the sets directory.
            Defaults to payroll_config/sets/.

    Returns:
        The validated, frozen ``PayrollSettings``.

    Raises:
        ConfigNotFoundError: If no set with that name exists.
        InvalidConfigError: If the set fails validation.
    """
    sets_dir = Path(config_dir) if config_dir is not None else _DEFAULT_CONFIG_DIR
    key = (name, str(sets_dir.resolve()))

    with _cache_lock:
        cached = _cache.get(key)
    if cached is not None:
        return cached

    path = sets_dir / f"{name}.yaml"
    if not path.is_file():
        _logger.error(
            "config_set_not_found",
            extra={"config_name": name, "config_dir": str(sets_dir)},
        )
        raise ConfigNotFoundError(name, str(sets_dir))

    data = load_yaml_file(path)
    settings = parse_settings(data)
    if settings.name != name:
        raise InvalidConfigError(
            str(path), f"set declares name {settings.name!r}, expected {name!r}"
        )

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "config_set_name": settings.name,
            "config_set_version": settings.version,
            "checksum": settings.checksum,
            "currency": settings.currency,
            "holiday_count": len(settings.holidays),
            "tip_role_count": len(settings.tips.eligible_roles),
        },
    )

    with _cache_lock:
        _cache[key] = settings
    return settings


def clear_config_cache() -> None:
    """Drop every cached configuration set."""
    with _cache_lock:
        _cache.clear()


__all__ = [
    "OvertimeSettings",
    "PayrollSettings",
    "StatutoryRates",
    "TipPoolSettings",
    "clear_config_cache",
    "get_active_config",
]
