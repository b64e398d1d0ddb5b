"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from derbyjson.config import DerbyJSONSettings, LogFormat, UnknownFieldPolicy, get_settings


def test_defaults(monkeypatch):
    """Test library defaults."""
    monkeypatch.delenv("DERBYJSON_UNKNOWN_FIELDS", raising=False)
    monkeypatch.delenv("DERBYJSON_CHECK_VERSION", raising=False)
    settings = DerbyJSONSettings(_env_file=None)

    assert settings.LOG_LEVEL == "WARNING"
    assert settings.LOG_FORMAT == LogFormat.TEXT
    assert settings.UNKNOWN_FIELDS == UnknownFieldPolicy.PRESERVE
    assert settings.CHECK_VERSION is True
    assert settings.VALIDATE_ON_ENCODE is True
    assert settings.ENCODE_INDENT is None
    assert settings.is_strict() is False


def test_environment_overrides(monkeypatch):
    """Test DERBYJSON_ variables override defaults."""
    monkeypatch.setenv("DERBYJSON_LOG_LEVEL", "debug")
    monkeypatch.setenv("DERBYJSON_LOG_FORMAT", "json")
    monkeypatch.setenv("DERBYJSON_UNKNOWN_FIELDS", "strict")
    monkeypatch.setenv("DERBYJSON_CHECK_VERSION", "false")
    settings = get_settings()

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == LogFormat.JSON
    assert settings.UNKNOWN_FIELDS == UnknownFieldPolicy.FORBID
    assert settings.is_strict() is True
    assert settings.CHECK_VERSION is False


def test_settings_cached():
    """Test get_settings returns one instance until the cache is cleared."""
    assert get_settings() is get_settings()


@pytest.mark.parametrize("name,value", [
    ("DERBYJSON_LOG_LEVEL", "chatty"),
    ("DERBYJSON_UNKNOWN_FIELDS", "sometimes"),
    ("DERBYJSON_ENCODE_INDENT", "-1"),
])
def test_invalid_values(monkeypatch, name, value):
    """Test invalid settings are refused."""
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        DerbyJSONSettings(_env_file=None)


def test_policy_spellings():
    """Test the unknown-field policy accepts common synonyms."""
    assert UnknownFieldPolicy("strict") == UnknownFieldPolicy.FORBID
    assert UnknownFieldPolicy("keep") == UnknownFieldPolicy.PRESERVE
    with pytest.raises(ValueError):
        UnknownFieldPolicy("sometimes")


def test_decode_policy_follows_settings(monkeypatch, gotham_roster):
    """Test decode takes its unknown-field default from the strict setting."""
    from derbyjson import UnknownFieldError, decode

    monkeypatch.setenv("DERBYJSON_UNKNOWN_FIELDS", "deny")
    assert get_settings().is_strict() is True
    with pytest.raises(UnknownFieldError):
        decode(gotham_roster[:-1] + b',"extra":1}')
