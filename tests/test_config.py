from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fairpay import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FAIRPAY_ANALYSIS_PROVIDER",
        "GEMINI_API_KEY",
        "API_KEY",
        "FAIRPAY_GEMINI_MODEL",
        "FAIRPAY_GEMINI_BASE_URL",
        "FAIRPAY_ANALYSIS_TIMEOUT",
        "FAIRPAY_SEED_AWARDS",
        "FAIRPAY_SEED_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    config._warned_invalid.clear()


def test_defaults():
    assert config.analysis_provider() == "mock"
    assert config.gemini_api_key() is None
    assert config.gemini_model() == "gemini-2.5-flash"
    assert config.gemini_base_url() == "https://generativelanguage.googleapis.com/v1beta"
    assert config.analysis_timeout() == 30.0
    assert config.seed_enabled() is True
    assert config.seed_awards_path() is None


def test_api_key_falls_back_to_generic_name(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("API_KEY", " generic ")
    assert config.gemini_api_key() == "generic"

    monkeypatch.setenv("GEMINI_API_KEY", "specific")
    assert config.gemini_api_key() == "specific"


@pytest.mark.parametrize("raw, expected", [("0", False), ("off", False), ("YES", True), ("", True)])
def test_seed_enabled_parses_booleans(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool):
    monkeypatch.setenv("FAIRPAY_SEED_ENABLED", raw)
    assert config.seed_enabled() is expected


def test_invalid_values_warn_once_and_use_defaults(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monkeypatch.setenv("FAIRPAY_SEED_ENABLED", "sometimes")
    monkeypatch.setenv("FAIRPAY_ANALYSIS_TIMEOUT", "-3")

    with caplog.at_level(logging.WARNING, logger="fairpay.config"):
        assert config.seed_enabled() is True
        assert config.seed_enabled() is True
        assert config.analysis_timeout() == 30.0

    messages = [record.getMessage() for record in caplog.records]
    assert sum("FAIRPAY_SEED_ENABLED" in message for message in messages) == 1
    assert any("FAIRPAY_ANALYSIS_TIMEOUT" in message for message in messages)


def test_seed_path_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("FAIRPAY_SEED_AWARDS", str(tmp_path / "awards.json"))
    assert config.seed_awards_path() == (tmp_path / "awards.json").resolve()


def test_blank_values_count_as_unset(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    monkeypatch.setenv("API_KEY", "fallback")
    monkeypatch.setenv("FAIRPAY_GEMINI_MODEL", " ")
    monkeypatch.setenv("FAIRPAY_ANALYSIS_PROVIDER", " REAL ")

    assert config.gemini_api_key() == "fallback"
    assert config.gemini_model() == "gemini-2.5-flash"
    assert config.analysis_provider() == "real"
