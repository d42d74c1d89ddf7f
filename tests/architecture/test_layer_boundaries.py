"""
Layer Boundary Contract.

Tests that enforce the package layering:

1. payroll_kernel/** may NOT import payroll_config, payroll_engines or
   payroll_services. The kernel never depends upward.

2. payroll_config/** may import the kernel only.

3. payroll_engines/** may NOT import payroll_services.

4. Only the sanctioned clock reads wall-clock time; engines and services
   take a Clock instead.

These tests read source code via AST -- they cannot break anything.
"""

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _python_files(package: str) -> list[Path]:
    return sorted((ROOT / package).rglob("*.py"))


def _parse(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _extract_imports(path: Path) -> list[tuple[int, str]]:
    """(line_number, module_string) for all imports in a file."""
    results: list[tuple[int, str]] = []
    for node in ast.walk(_parse(path)):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for path in _python_files(package):
        for lineno, module in _extract_imports(path):
            for prefix in forbidden:
                if module == prefix or module.startswith(f"{prefix}."):
                    found.append(f"  {path.relative_to(ROOT)}:{lineno} imports '{module}'")
    return found


# ---------------------------------------------------------------------------
# Import direction
# ---------------------------------------------------------------------------


class TestImportDirection:

    def test_packages_present(self):
        for package in ("payroll_kernel", "payroll_config", "payroll_engines", "payroll_services"):
            assert _python_files(package), f"{package} has no modules"

    def test_kernel_has_no_upward_dependencies(self):
        violations = _violations(
            "payroll_kernel", ("payroll_config", "payroll_engines", "payroll_services")
        )
        assert not violations, (
            "Kernel boundary violation -- payroll_kernel/** must not import "
            "upward packages:\n" + "\n".join(violations)
        )

    def test_config_depends_on_kernel_only(self):
        violations = _violations("payroll_config", ("payroll_engines", "payroll_services"))
        assert not violations, (
            "Config boundary violation -- payroll_config/** may import the "
            "kernel only:\n" + "\n".join(violations)
        )

    def test_engines_do_not_import_services(self):
        violations = _violations("payroll_engines", ("payroll_services",))
        assert not violations, (
            "Engine boundary violation -- payroll_engines/** must not import "
            "services:\n" + "\n".join(violations)
        )

    def test_engines_do_no_network_io(self):
        violations = _violations(
            "payroll_engines", ("socket", "urllib", "http", "requests", "httpx")
        )
        assert not violations, (
            "Engines are pure -- no network modules:\n" + "\n".join(violations)
        )


# ---------------------------------------------------------------------------
# Wall-clock access
# ---------------------------------------------------------------------------


class TestClockInjection:
    """datetime.now() / date.today() / utcnow() only in payroll_kernel/domain/clock.py."""

    SANCTIONED = ("payroll_kernel/domain/clock.py",)
    WALL_CLOCK_ATTRS = {"now", "today", "utcnow"}

    def _wall_clock_calls(self, path: Path) -> list[int]:
        lines: list[int] = []
        for node in ast.walk(_parse(path)):
            if not isinstance(node, ast.Call):
                continue
            func = node.func
            if (
                isinstance(func, ast.Attribute)
                and func.attr in self.WALL_CLOCK_ATTRS
                and isinstance(func.value, ast.Name)
                and func.value.id in {"datetime", "date"}
            ):
                lines.append(node.lineno)
        return lines

    def test_no_direct_wall_clock(self):
        violations: list[str] = []
        for package in ("payroll_kernel", "payroll_config", "payroll_engines", "payroll_services"):
            for path in _python_files(package):
                relative = path.relative_to(ROOT).as_posix()
                if relative in self.SANCTIONED:
                    continue
                for lineno in self._wall_clock_calls(path):
                    violations.append(f"  {relative}:{lineno}")
        assert not violations, (
            "Wall-clock read outside the Clock abstraction:\n" + "\n".join(violations)
        )
