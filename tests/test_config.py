"""Tests for calcpad.config.Settings."""

from calcpad.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.error_text == "Error"
    assert settings.placeholder == "0"
    assert settings.log_level == "WARNING"


def test_environment_overrides():
    settings = Settings.from_env({
        "CALCPAD_ERROR_TEXT": "Oops",
        "CALCPAD_PLACEHOLDER": "_",
        "CALCPAD_LOG_LEVEL": "debug",
    })
    assert settings.error_text == "Oops"
    assert settings.placeholder == "_"
    assert settings.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults():
    settings = Settings.from_env({"CALCPAD_ERROR_TEXT": "", "CALCPAD_PLACEHOLDER": ""})
    assert settings.error_text == "Error"
    assert settings.placeholder == "0"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CALCPAD_ERROR_TEXT", "Nope")
    assert Settings.from_env().error_text == "Nope"
