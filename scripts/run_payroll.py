#!/usr/bin/env python3
"""
Run the payroll for a roster file and print the pay slips.

The roster is a JSON document in the employee API's shape: either a list of
employee records or ``{"employees": [...], "attendance": {id: aggregate}}``.
Attendance may also come from a separate file.

Usage:
    python3 scripts/run_payroll.py roster.json --period 9/2025
    python3 scripts/run_payroll.py roster.json --period 9/2025 --attendance att.json
    python3 scripts/run_payroll.py roster.json --period 9/2025 --tip-pool 15000000 --format text
    python3 scripts/run_payroll.py roster.json --period 9/2025 --tip-seed 42 --workers 4

Exit codes:
    0  pay slips computed
    1  invalid input or configuration
    2  --strict and at least one pay slip has a negative net salary
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from payroll_config import get_active_config  # noqa: E402
from payroll_engines import (  # noqa: E402
    FixedTipPoolSource,
    PayrollAssembler,
    SimulatedTipPoolSource,
)
from payroll_kernel.domain import AttendanceAggregate, EmployeeProfile  # noqa: E402
from payroll_kernel.domain.values import to_decimal  # noqa: E402
from payroll_kernel.exceptions import PayrollKernelError  # noqa: E402
from payroll_kernel.logging_config import configure_logging, get_logger  # noqa: E402
from payroll_services import (  # noqa: E402
    FormattingConfig,
    PayrollRunService,
    format_currency,
    format_period,
)

logger = get_logger("scripts.run_payroll")


def _read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_roster(path: Path) -> tuple[list[EmployeeProfile], dict[str, AttendanceAggregate]]:
    """Employees and any inline attendance from a roster document."""
    data = _read_json(path)
    if isinstance(data, list):
        records, attendance_raw = data, {}
    elif isinstance(data, dict):
        records = data.get("employees") or []
        attendance_raw = data.get("attendance") or {}
    else:
        raise ValueError(f"{path}: expected a list or an object with 'employees'")
    employees = [EmployeeProfile.from_dict(record) for record in records]
    return employees, load_attendance(attendance_raw)


def load_attendance(raw) -> dict[str, AttendanceAggregate]:
    if not isinstance(raw, dict):
        raise ValueError("attendance must be an object keyed by employee id")
    return {str(emp_id): AttendanceAggregate.from_dict(agg) for emp_id, agg in raw.items()}


def build_tip_source(args, settings):
    if args.tip_pool is not None:
        headcount = args.tip_headcount or settings.tips.assumed_headcount
        return FixedTipPoolSource(to_decimal(args.tip_pool, "tip_pool"), headcount)
    rng = random.Random(args.tip_seed) if args.tip_seed is not None else None
    return SimulatedTipPoolSource(settings.tips, rng=rng)


def render_text(result, employees, config: FormattingConfig) -> str:
    names = {e.id: e.name for e in employees}
    lines = [f"Payroll {format_period(result.period)}  (run {result.run_id})", ""]
    for payslip in result.payslips:
        lines.append(
            f"  {payslip.id:20s} {names.get(payslip.employee_id, ''):24s}"
            f" gross {format_currency(payslip.gross_salary, config):>14s}"
            f"  net {format_currency(payslip.net_salary, config):>14s}"
        )
    lines.append("")
    lines.append(f"  Total gross: {format_currency(result.total_gross, config)}")
    lines.append(f"  Total net:   {format_currency(result.total_net, config)}")
    for warning in result.warnings:
        lines.append(f"  WARNING: {warning.message}")
    return "\n".join(lines)


def render_json(result) -> str:
    return json.dumps(
        {
            "run_id": str(result.run_id),
            "period": result.period.token,
            "payslips": [p.to_dict() for p in result.payslips],
            "warnings": [
                {
                    "employee_id": w.employee_id,
                    "payslip_id": w.payslip_id,
                    "net_salary": str(w.net_salary),
                }
                for w in result.warnings
            ],
            "total_gross": str(result.total_gross),
            "total_net": str(result.total_net),
        },
        indent=2,
        ensure_ascii=False,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute pay slips for a roster")
    parser.add_argument("roster", type=Path, help="Roster JSON file")
    parser.add_argument("--period", required=True, help='Pay period, e.g. "9/2025"')
    parser.add_argument("--attendance", type=Path, help="Attendance JSON keyed by employee id")
    parser.add_argument("--config", default="ph_2025", help="Configuration set name")
    parser.add_argument("--config-dir", type=Path, help="Directory holding configuration sets")
    parser.add_argument("--strategy", default="first_active_in_period",
                        help="Holiday resolution strategy")
    parser.add_argument("--workers", type=int, default=1, help="Worker threads")
    parser.add_argument("--tip-pool", help="Fixed tip pool total instead of the simulation")
    parser.add_argument("--tip-headcount", type=int, help="Heads sharing the fixed tip pool")
    parser.add_argument("--tip-seed", type=int, help="Seed for the simulated tip pool")
    parser.add_argument("--format", choices=("json", "text"), default="json")
    parser.add_argument("--strict", action="store_true",
                        help="Exit 2 when any net salary is negative")
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        settings = get_active_config(args.config, config_dir=args.config_dir)
        employees, attendance = load_roster(args.roster)
        if args.attendance is not None:
            attendance.update(load_attendance(_read_json(args.attendance)))
        assembler = PayrollAssembler(
            settings=settings,
            tip_source=build_tip_source(args, settings),
            strategy=args.strategy,
        )
        result = PayrollRunService(assembler).run(
            args.period, employees, attendance, max_workers=args.workers
        )
    except PayrollKernelError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    if args.format == "text":
        print(render_text(result, employees, FormattingConfig(currency=settings.currency)))
    else:
        print(render_json(result))

    if args.strict and result.has_warnings:
        logger.warning("payroll_run_strict_failure", extra={"warning_count": len(result.warnings)})
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
