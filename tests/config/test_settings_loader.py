"""
Tests for settings loading and validation.
"""

from decimal import Decimal

import pytest
import yaml

from consignment_config import DEFAULT_SETTINGS_PATH, MetricsSettings, get_active_settings
from consignment_config.loader import compute_checksum, load_yaml_file, parse_settings
from consignment_kernel.exceptions import ConfigurationError


def _write(tmp_path, text: str):
    path = tmp_path / "settings.yaml"
    path.write_text(text)
    return path


class TestPackagedDefaults:

    def test_defaults_file_matches_schema_defaults(self):
        assert get_active_settings() == MetricsSettings()

    def test_default_path_exists(self):
        assert DEFAULT_SETTINGS_PATH.is_file()

    def test_emits_config_trace(self, captured_logs):
        settings = get_active_settings()

        trace = next(r for r in captured_logs() if r["message"] == "CONSIGNMENT_CONFIG_TRACE")
        assert trace["checksum"] == compute_checksum(settings)
        assert trace["currency"] == "USD"
        assert trace["source"] == str(DEFAULT_SETTINGS_PATH)


class TestLoadFromFile:

    def test_overrides(self, tmp_path):
        path = _write(tmp_path, (
            "currency: eur\n"
            "top_consignor_count: 10\n"
            "activity_days: 7\n"
            "minimum_payout_amount: '25.00'\n"
            "consignor_number_prefix: CSN\n"
            "invite_code_length: 12\n"
        ))

        settings = get_active_settings(path)

        assert settings.currency == "EUR"
        assert settings.top_consignor_count == 10
        assert settings.activity_days == 7
        assert settings.minimum_payout_amount == Decimal("25.00")
        assert settings.consignor_number_prefix == "CSN"
        assert settings.invite_code_length == 12

    def test_partial_file_keeps_defaults(self, tmp_path):
        settings = get_active_settings(_write(tmp_path, "activity_days: 14\n"))

        assert settings.activity_days == 14
        assert settings.top_consignor_count == 5

    def test_empty_file_is_all_defaults(self, tmp_path):
        assert get_active_settings(_write(tmp_path, "")) == MetricsSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_settings(tmp_path / "absent.yaml")

    def test_malformed_yaml(self, tmp_path):
        with pytest.raises(yaml.YAMLError):
            load_yaml_file(_write(tmp_path, "currency: [unclosed\n"))

    def test_non_mapping_document(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_yaml_file(_write(tmp_path, "- a\n- b\n"))

        assert exc_info.value.field == "<root>"


class TestParseSettingsValidation:

    @pytest.mark.parametrize("value", [0, -3, "ten", True, 2.5])
    def test_top_consignor_count_rejected(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_settings({"top_consignor_count": value})

        assert exc_info.value.field == "top_consignor_count"
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    @pytest.mark.parametrize("value", ["-1.00", "abc", False])
    def test_minimum_payout_rejected(self, value):
        with pytest.raises(ConfigurationError):
            parse_settings({"minimum_payout_amount": value})

    def test_minimum_payout_from_number(self):
        settings = parse_settings({"minimum_payout_amount": 10})

        assert settings.minimum_payout_amount == Decimal("10")

    @pytest.mark.parametrize("value", ["US", "USDX", "U$D", 123])
    def test_currency_rejected(self, value):
        with pytest.raises(ConfigurationError):
            parse_settings({"currency": value})

    def test_blank_prefix_rejected(self):
        with pytest.raises(ConfigurationError):
            parse_settings({"consignor_number_prefix": "  "})


class TestChecksum:

    def test_deterministic(self):
        assert compute_checksum(MetricsSettings()) == compute_checksum(MetricsSettings())

    def test_changes_with_values(self):
        assert compute_checksum(MetricsSettings()) != compute_checksum(
            MetricsSettings(activity_days=7)
        )
