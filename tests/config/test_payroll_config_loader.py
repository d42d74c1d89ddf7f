"""
Tests for payroll configuration loading.

Covers:
- The shipped ph_2025 set matches the built-in defaults
- get_active_config caching and error paths
- Loader parse helpers and checksum determinism
"""

from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from payroll_config import (
    PayrollSettings,
    StatutoryRates,
    clear_config_cache,
    get_active_config,
)
from payroll_config.loader import (
    compute_checksum,
    load_yaml_file,
    parse_decimal,
    parse_holiday,
    parse_settings,
    parse_statutory,
    parse_tips,
)
from payroll_kernel.domain import HolidayType
from payroll_kernel.exceptions import ConfigNotFoundError, InvalidConfigError


def _write_set(directory: Path, name: str, data: dict) -> Path:
    path = directory / f"{name}.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


class TestShippedSet:
    """The YAML shipped in payroll_config/sets/."""

    def test_loads(self):
        settings = get_active_config()
        assert settings.name == "ph_2025"
        assert settings.currency == "PHP"
        assert len(settings.checksum) == 64

    def test_matches_builtin_defaults(self):
        loaded = get_active_config()
        builtin = PayrollSettings.default()
        assert loaded.statutory == builtin.statutory
        assert loaded.overtime == builtin.overtime
        assert loaded.tips == builtin.tips
        assert [h.id for h in loaded.holidays] == [h.id for h in builtin.holidays]
        assert [h.allowance_multiplier for h in loaded.holidays] == [
            h.allowance_multiplier for h in builtin.holidays
        ]

    def test_holiday_types_parsed(self):
        settings = get_active_config()
        by_id = {h.id: h for h in settings.holidays}
        assert by_id["anniversary_2025"].type is HolidayType.ANNIVERSARY
        assert by_id["eid_al_fitr_2024"].eligible_religions == ("islam",)

    def test_emits_config_trace(self, captured_logs):
        get_active_config()
        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_CONFIG_TRACE"]
        assert traces[0]["config_set_name"] == "ph_2025"
        assert traces[0]["holiday_count"] == 7


class TestGetActiveConfig:

    def test_cached(self):
        assert get_active_config() is get_active_config()

    def test_cache_cleared(self):
        first = get_active_config()
        clear_config_cache()
        second = get_active_config()
        assert first is not second
        assert first == second

    def test_missing_set(self, tmp_path, captured_logs):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            get_active_config("ph_2099", config_dir=tmp_path)
        assert exc_info.value.name == "ph_2099"
        assert exc_info.value.code == "CONFIG_NOT_FOUND"
        assert any(r["message"] == "config_set_not_found" for r in captured_logs())

    def test_custom_directory(self, tmp_path):
        _write_set(
            tmp_path,
            "test_set",
            {"name": "test_set", "version": 3, "statutory": {"sss_rate": "0.05"}},
        )
        settings = get_active_config("test_set", config_dir=tmp_path)
        assert settings.version == 3
        assert settings.statutory.sss_rate == Decimal("0.05")
        assert settings.statutory.pagibig_max_contribution == Decimal("100")
        assert settings.holidays == ()

    def test_name_mismatch(self, tmp_path):
        _write_set(tmp_path, "alias", {"name": "ph_2025"})
        with pytest.raises(InvalidConfigError, match="expected 'alias'"):
            get_active_config("alias", config_dir=tmp_path)

    def test_invalid_rate(self, tmp_path):
        _write_set(tmp_path, "bad", {"name": "bad", "statutory": {"sss_rate": "1.5"}})
        with pytest.raises(InvalidConfigError) as exc_info:
            get_active_config("bad", config_dir=tmp_path)
        assert exc_info.value.source == "statutory.sss_rate"

    def test_top_level_list_rejected(self, tmp_path):
        (tmp_path / "listy.yaml").write_text("- a\n- b\n")
        with pytest.raises(InvalidConfigError, match="mapping"):
            get_active_config("listy", config_dir=tmp_path)


class TestParsers:

    def test_parse_decimal_float_via_str(self):
        assert parse_decimal(0.045, "x") == Decimal("0.045")

    def test_parse_decimal_bad(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            parse_decimal("four percent", "statutory.sss_rate")
        assert exc_info.value.source == "statutory.sss_rate"

    def test_parse_statutory_defaults(self):
        assert parse_statutory({}) == StatutoryRates()

    def test_parse_tips_requires_list(self):
        with pytest.raises(InvalidConfigError):
            parse_tips({"eligible_roles": "driver"})

    def test_parse_tips_headcount_integer(self):
        with pytest.raises(InvalidConfigError):
            parse_tips({"assumed_headcount": "twenty"})

    def test_parse_tips_empty_roles(self):
        with pytest.raises(InvalidConfigError):
            parse_tips({"eligible_roles": []})

    def test_parse_holiday_bad_type(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            parse_holiday({"id": "x", "date": "2025-01-01", "type": "mystery"})
        assert exc_info.value.source == "holidays.x"

    def test_parse_settings_requires_name(self):
        with pytest.raises(InvalidConfigError):
            parse_settings({"version": 1})

    def test_parse_settings_duplicate_holiday_ids(self):
        holiday = {"id": "dup", "date": "2025-01-01", "type": "regular"}
        with pytest.raises(InvalidConfigError, match="unique"):
            parse_settings({"name": "x", "holidays": [holiday, dict(holiday)]})

    def test_parse_settings_bad_currency(self):
        with pytest.raises(InvalidConfigError):
            parse_settings({"name": "x", "currency": "PESO"})

    def test_load_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_file(path) == {}


class TestChecksum:

    def test_key_order_irrelevant(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_value_change_detected(self):
        assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})

    def test_settings_checksum_from_raw_data(self):
        data = {"name": "x", "statutory": {"sss_rate": "0.04"}}
        assert parse_settings(data).checksum == compute_checksum(data)
