"""Tests for configuration loading and API key resolution."""

import pytest

from config import ConfigLoader, load_api_key
from streaming import ApiKeyError, UnsupportedProviderError


@pytest.fixture
def loader(tmp_path):
    return ConfigLoader(env_path=str(tmp_path / "missing.env"))


def test_default_when_unset(loader, monkeypatch):
    monkeypatch.delenv("RELAY_TEST_PORT", raising=False)
    assert loader.get("RELAY_TEST_PORT", 8081) == 8081


@pytest.mark.parametrize(
    "raw,default,expected",
    [
        ("9000", 8081, 9000),
        ("2.5", 10.0, 2.5),
        ("yes", False, True),
        ("0", True, False),
        ("debug", "info", "debug"),
    ],
)
def test_environment_value_is_coerced(loader, monkeypatch, raw, default, expected):
    monkeypatch.setenv("RELAY_TEST_VALUE", raw)
    assert loader.get("RELAY_TEST_VALUE", default) == expected


def test_unparseable_number_falls_back(loader, monkeypatch):
    monkeypatch.setenv("RELAY_TEST_VALUE", "soon")
    assert loader.get("RELAY_TEST_VALUE", 60.0) == 60.0


def test_home_directory_defaults_are_expanded(loader, monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("RELAY_TEST_DIR", raising=False)
    assert loader.get("RELAY_TEST_DIR", "~/traces") == str(tmp_path / "traces")


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("RELAY_TEST_FROM_FILE=42\n")
    # Registers the variable with monkeypatch so the value loaded below is undone
    monkeypatch.setenv("RELAY_TEST_FROM_FILE", "placeholder")
    monkeypatch.delenv("RELAY_TEST_FROM_FILE")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("RELAY_TEST_FROM_FILE", 0) == 42


def test_load_api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-openai-0123456789  ")
    assert load_api_key("openai") == "sk-openai-0123456789"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_api_key(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    else:
        monkeypatch.setenv("ANTHROPIC_API_KEY", value)

    with pytest.raises(ApiKeyError) as exc_info:
        load_api_key("anthropic")
    assert str(exc_info.value) == "API key error: Failed to load ANTHROPIC_API_KEY: environment variable not set"


def test_unknown_provider_key():
    with pytest.raises(UnsupportedProviderError):
        load_api_key("cohere")
