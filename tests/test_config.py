import pytest

from core.config import CacheSettings
from core.errors import InvalidArgument


def test_defaults_when_env_is_empty(monkeypatch):
    for name in ("CACHE_CAPACITY", "CACHE_DEFAULT_TTL_SECONDS", "CACHE_SWEEP_INTERVAL_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = CacheSettings.from_env()

    assert settings == CacheSettings(capacity=5000, default_ttl_seconds=300.0, sweep_interval_seconds=120.0)


def test_values_are_read_from_env(monkeypatch):
    monkeypatch.setenv("CACHE_CAPACITY", "10")
    monkeypatch.setenv("CACHE_DEFAULT_TTL_SECONDS", "1.5")
    monkeypatch.setenv("CACHE_SWEEP_INTERVAL_SECONDS", " 30 ")

    settings = CacheSettings.from_env()

    assert settings.capacity == 10
    assert settings.default_ttl_seconds == 1.5
    assert settings.sweep_interval_seconds == 30.0


@pytest.mark.parametrize("value", ["abc", "0", "-3", "2.5"])
def test_bad_capacity_is_rejected(monkeypatch, value):
    monkeypatch.setenv("CACHE_CAPACITY", value)

    with pytest.raises(InvalidArgument):
        CacheSettings.from_env()
