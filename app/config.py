"""
Configuration for Flowl
=======================
Main application runtime settings loaded from ``FLOWL_*`` environment
variables. Unparseable numbers and booleans fall back to their defaults.
Sets up the logging configuration as well.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from app.domain.exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "off"}

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STATIC_DIR = str(BASE_DIR / "static")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _env_int(name: str, default: int, *, minimum: int | None = None, maximum: int | None = None) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    if (minimum is not None and parsed < minimum) or (maximum is not None and parsed > maximum):
        return default
    return parsed


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _env_port(name: str, default: int) -> int:
    return _env_int(name, default, minimum=0, maximum=65535)


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("FLOWL_ENV", "development"))
    host: str = field(default_factory=lambda: os.getenv("FLOWL_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_port("FLOWL_PORT", 4100))
    database_path: str = field(default_factory=lambda: os.getenv("FLOWL_DB_PATH", "/data/flowl.db"))
    static_dir: str = field(default_factory=lambda: os.getenv("FLOWL_STATIC_DIR", DEFAULT_STATIC_DIR))

    mqtt_disabled: bool = field(default_factory=lambda: _env_bool("FLOWL_MQTT_DISABLED", False))
    mqtt_host: str = field(default_factory=lambda: os.getenv("FLOWL_MQTT_HOST", "localhost"))
    mqtt_port: int = field(default_factory=lambda: _env_port("FLOWL_MQTT_PORT", 1883))
    mqtt_topic_prefix: str = field(default_factory=lambda: os.getenv("FLOWL_MQTT_TOPIC_PREFIX", "flowl"))
    mqtt_sync_interval: int = field(default_factory=lambda: _env_int("FLOWL_MQTT_SYNC_INTERVAL", 60, minimum=1))
    mqtt_discovery_timeout: float = field(default_factory=lambda: _env_float("FLOWL_MQTT_DISCOVERY_TIMEOUT", 2.0))

    log_level: str = field(default_factory=lambda: os.getenv("FLOWL_LOG_LEVEL", "info"))
    log_dir: str = field(default_factory=lambda: os.getenv("FLOWL_LOG_DIR", "logs"))
    debug: bool = field(default_factory=lambda: _env_bool("FLOWL_DEBUG", False))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        prefix = self.mqtt_topic_prefix
        if not prefix or any(ch in prefix for ch in "/+#"):
            raise ConfigurationError(
                f"FLOWL_MQTT_TOPIC_PREFIX must be a single non-empty topic level without wildcards, got {prefix!r}"
            )

    @property
    def mqtt_enabled(self) -> bool:
        return not self.mqtt_disabled

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "DATABASE_PATH": self.database_path,
            "STATIC_DIR": self.static_dir,
            "MQTT_ENABLED": self.mqtt_enabled,
            "MQTT_BROKER_HOST": self.mqtt_host,
            "MQTT_BROKER_PORT": self.mqtt_port,
            "MQTT_TOPIC_PREFIX": self.mqtt_topic_prefix,
            "JSON_SORT_KEYS": False,
        }


def resolve_log_level(level: str | int, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str | int = "info", log_dir: str | None = "logs", debug: bool = False) -> None:
    """Setup logging configuration.

    Root gets a console handler and ``flowl.log``; the ``flowl.mqtt`` logger
    additionally writes ``mqtt.log``. Pass ``log_dir=None`` to skip files.
    """
    log_level = resolve_log_level(level, debug)

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "flowl_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "flowl_file" for h in root.handlers)
    mqtt_logger = logging.getLogger("flowl.mqtt")
    has_mqtt_file = any(getattr(h, "name", "") == "flowl_mqtt_file" for h in mqtt_logger.handlers)
    added_handler = False

    # Console handler (force UTF-8 so plant icons do not break Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "flowl_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # File handler
        if not has_file:
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, "flowl.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.name = "flowl_file"
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
            added_handler = True

        # Broker traffic gets its own file; records still propagate to root.
        if not has_mqtt_file:
            mqtt_handler = RotatingFileHandler(
                os.path.join(log_dir, "mqtt.log"),
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            mqtt_handler.name = "flowl_mqtt_file"
            mqtt_handler.setFormatter(formatter)
            mqtt_logger.addHandler(mqtt_handler)

    # Ensure handler levels follow the desired log level
    for handler in (*root.handlers, *mqtt_logger.handlers):
        if getattr(handler, "name", "") in {"flowl_console", "flowl_file", "flowl_mqtt_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(log_level)}")

    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config(**overrides: Any) -> AppConfig:
    """Helper for callers to load configuration with keyword overrides."""
    known = {name for name in AppConfig.__dataclass_fields__}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return AppConfig(**overrides)
