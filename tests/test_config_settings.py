import pytest
from pydantic import ValidationError

from swapform.config import Settings


def test_defaults(monkeypatch):
    """Defaults match the hosted price feed and icon repository."""

    monkeypatch.delenv("PRICES_URL", raising=False)
    monkeypatch.delenv("SIMULATED_SUCCESS_RATE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.prices_url == "https://interview.switcheo.com/prices.json"
    assert settings.default_from_currency == "ETH"
    assert settings.default_to_currency == "USD"
    assert settings.simulated_success_rate == 0.9
    assert settings.max_amount_preset == "10.5432"


def test_env_override(monkeypatch):
    """Environment variables are read case-insensitively."""

    monkeypatch.setenv("prices_url", "http://localhost:9000/prices.json")
    monkeypatch.setenv("SIMULATED_LATENCY_SECONDS", "0")

    settings = Settings(_env_file=None)

    assert settings.prices_url == "http://localhost:9000/prices.json"
    assert settings.simulated_latency_seconds == 0


def test_success_rate_bounds(monkeypatch):
    monkeypatch.setenv("SIMULATED_SUCCESS_RATE", "1.5")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_icon_url():
    settings = Settings(_env_file=None, token_icon_base_url="https://icons.example.test/")

    assert settings.icon_url("SWTH") == "https://icons.example.test/SWTH.svg"


def test_log_format(monkeypatch):
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    assert Settings(_env_file=None).log_format == "auto"

    monkeypatch.setenv("LOG_FORMAT", "console")
    assert Settings(_env_file=None).log_format == "console"

    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
