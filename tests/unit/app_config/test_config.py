import logging

import pytest

from app.config import AppConfig, load_config, resolve_log_level, setup_logging
from app.domain.exceptions import ConfigurationError

ENV_KEYS = (
    "FLOWL_PORT",
    "FLOWL_DB_PATH",
    "FLOWL_MQTT_DISABLED",
    "FLOWL_MQTT_HOST",
    "FLOWL_MQTT_PORT",
    "FLOWL_MQTT_TOPIC_PREFIX",
    "FLOWL_MQTT_SYNC_INTERVAL",
    "FLOWL_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    config = AppConfig()

    assert config.port == 4100
    assert config.database_path == "/data/flowl.db"
    assert config.mqtt_enabled is True
    assert config.mqtt_host == "localhost"
    assert config.mqtt_port == 1883
    assert config.mqtt_topic_prefix == "flowl"
    assert config.mqtt_sync_interval == 60


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FLOWL_PORT", "8080")
    monkeypatch.setenv("FLOWL_DB_PATH", "/tmp/plants.db")
    monkeypatch.setenv("FLOWL_MQTT_DISABLED", "true")
    monkeypatch.setenv("FLOWL_MQTT_HOST", "mosquitto")
    monkeypatch.setenv("FLOWL_MQTT_TOPIC_PREFIX", "greenhouse")

    config = load_config()

    assert config.port == 8080
    assert config.database_path == "/tmp/plants.db"
    assert config.mqtt_enabled is False
    assert config.mqtt_host == "mosquitto"
    assert config.mqtt_topic_prefix == "greenhouse"


@pytest.mark.parametrize(
    "key, value, attr, expected",
    [
        ("FLOWL_PORT", "not-a-port", "port", 4100),
        ("FLOWL_PORT", "70000", "port", 4100),
        ("FLOWL_MQTT_PORT", "", "mqtt_port", 1883),
        ("FLOWL_MQTT_DISABLED", "maybe", "mqtt_disabled", False),
        ("FLOWL_MQTT_SYNC_INTERVAL", "0", "mqtt_sync_interval", 60),
    ],
)
def test_unparseable_values_fall_back_to_defaults(monkeypatch, key, value, attr, expected):
    monkeypatch.setenv(key, value)
    assert getattr(AppConfig(), attr) == expected


@pytest.mark.parametrize("prefix", ["", "flowl/home", "flowl+", "#"])
def test_invalid_topic_prefix(prefix):
    with pytest.raises(ConfigurationError):
        AppConfig(mqtt_topic_prefix=prefix)


def test_load_config_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="secret_key"):
        load_config(secret_key="x")


def test_resolve_log_level():
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level("WARNING") == logging.WARNING
    assert resolve_log_level("chatty") == logging.INFO
    assert resolve_log_level("error", debug=True) == logging.DEBUG


def _drop_file_handlers():
    for logger in (logging.getLogger(), logging.getLogger("flowl.mqtt")):
        for handler in list(logger.handlers):
            if handler.name in {"flowl_file", "flowl_mqtt_file"}:
                logger.removeHandler(handler)
                handler.close()


def test_setup_logging_writes_separate_mqtt_log(tmp_path):
    _drop_file_handlers()
    try:
        setup_logging("info", str(tmp_path))
        logging.getLogger("flowl.mqtt").warning("broker went away")
        for handler in logging.getLogger("flowl.mqtt").handlers:
            handler.flush()
    finally:
        _drop_file_handlers()

    assert (tmp_path / "flowl.log").exists()
    assert "broker went away" in (tmp_path / "mqtt.log").read_text(encoding="utf-8")
