"""Tests for configuration, logging and locale helpers."""

import logging

import pytest

from hostcost.utils.helpers import DEFAULT_CONFIG, load_config, load_config_or_default, setup_logging
from hostcost.utils.i18n import (
    FALLBACK_LOCALE,
    DisplayConfig,
    format_month_label,
    language_of,
    resolve_locale,
    translate_for,
)


class TestLoadConfig:
    """Tests for load_config."""

    def test_default_config_file(self):
        """Test the bundled config loads."""
        config = load_config()

        assert config["costs"]["horizon_days"] == 365
        assert config["costs"]["mode"] == "prorated"
        assert config["display"]["currency_symbol"] == "¥"

    def test_missing_sections_filled(self, tmp_path):
        """Test partial files are merged over defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("costs:\n  horizon_days: 90\n", encoding="utf-8")

        config = load_config(str(path))

        assert config["costs"]["horizon_days"] == 90
        assert config["costs"]["forecast_months"] == 12
        assert config["display"] == DEFAULT_CONFIG["display"]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_default_when_missing(self, tmp_path):
        """Test a missing file falls back to the built-in defaults."""
        config = load_config_or_default(str(tmp_path / "nope.yaml"))

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG
        assert config["costs"] is not DEFAULT_CONFIG["costs"]

    def test_existing_file_loaded(self, tmp_path):
        """Test an existing file is loaded normally."""
        path = tmp_path / "config.yaml"
        path.write_text("costs:\n  forecast_months: 6\n", encoding="utf-8")

        assert load_config_or_default(str(path))["costs"]["forecast_months"] == 6


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_handlers(self, tmp_path):
        """Test repeated setup keeps a single console handler."""
        log_file = tmp_path / "hostcost.log"

        setup_logging("DEBUG")
        logger = setup_logging("WARNING", log_file=str(log_file))

        assert logger.name == "hostcost"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


class TestLocale:
    """Tests for locale resolution."""

    @pytest.mark.parametrize("tag,expected", [
        ("zh-CN", "zh"), ("en_US.UTF-8", "en"), ("DE", "de"), (None, "zh"), ("", "zh"),
    ])
    def test_language_of(self, tag, expected):
        """Test primary language extraction."""
        assert language_of(tag) == expected

    def test_explicit_wins(self, monkeypatch):
        """Test explicit and configured values before the platform."""
        monkeypatch.setenv("LANG", "de_DE.UTF-8")

        assert resolve_locale("en-GB", "fr-FR") == "en-GB"
        assert resolve_locale(None, "fr-FR") == "fr-FR"

    def test_platform_language(self, monkeypatch):
        """Test the platform locale environment."""
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "de_DE.UTF-8")

        assert resolve_locale() == "de-DE"

    def test_fallback(self, monkeypatch):
        """Test the fixed fallback for C/POSIX environments."""
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "C.UTF-8")

        assert resolve_locale() == FALLBACK_LOCALE


class TestTranslate:
    """Tests for translate_for."""

    def test_chinese(self):
        """Test Chinese catalogue with arguments."""
        t = translate_for("zh-CN")

        assert t("daily_avg_cost") == "日均费用"
        assert t("unparsable_expire", name="hk", value="x") == "服务器“hk”的 expire 无法解析：x"

    def test_unknown_language_uses_english(self):
        """Test unknown languages fall back to English."""
        assert translate_for("sv-SE")("yearly_cost") == "Yearly cost"

    def test_unknown_key(self):
        """Test unknown keys are returned unchanged."""
        assert translate_for("en")("not_a_key") == "not_a_key"

    def test_display_config_default_translate(self):
        """Test DisplayConfig builds a translation for its locale."""
        config = DisplayConfig(locale="zh-CN")

        assert config.translate("yearly_cost") == "年度费用"
        assert config.currency_symbol == "¥"

    def test_display_config_custom_translate(self):
        """Test an injected translation is kept."""
        config = DisplayConfig(locale="en", translate=lambda key, **kwargs: key.upper())

        assert config.translate("yearly_cost") == "YEARLY_COST"


class TestMonthLabel:
    """Tests for format_month_label."""

    @pytest.mark.parametrize("locale,expected", [
        ("en-US", "Jun 2025"),
        ("zh-CN", "2025年6月"),
        ("ja-JP", "2025年6月"),
        ("de-DE", "Juni 2025"),
        ("fr-FR", "juin 2025"),
        ("pt-BR", "Jun 2025"),
    ])
    def test_formats(self, locale, expected):
        """Test short month/year labels per language."""
        assert format_month_label(2025, 6, locale) == expected
