# tests/test_config.py
import pytest

from inventory import config
from inventory.config import ConfigurationError, Settings, load_settings

ENV_KEYS = [
    "INVENTORY_DATA_FILE",
    "INVENTORY_STRICT_LOAD",
    "INVENTORY_LOG_LEVEL",
    "INVENTORY_API_HOST",
    "INVENTORY_API_PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.setattr(config, "_settings", None)


def test_defaults():
    assert load_settings() == Settings()


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("INVENTORY_DATA_FILE", "/tmp/stock.json")
    monkeypatch.setenv("INVENTORY_STRICT_LOAD", "yes")
    monkeypatch.setenv("INVENTORY_LOG_LEVEL", "debug")
    monkeypatch.setenv("INVENTORY_API_PORT", "9000")

    settings = load_settings()
    assert settings.data_file == "/tmp/stock.json"
    assert settings.strict_load is True
    assert settings.log_level == "DEBUG"
    assert settings.api_port == 9000


@pytest.mark.parametrize("key,value", [
    ("INVENTORY_STRICT_LOAD", "maybe"),
    ("INVENTORY_API_PORT", "eighty"),
    ("INVENTORY_LOG_LEVEL", "chatty"),
])
def test_invalid_values_fail_fast(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()
