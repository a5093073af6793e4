"""
Process-level settings for the Alchemy Table core.

Purpose
-------
Everything the core needs to know before it touches game content: which
environment it runs in, how loud and in what shape it logs, and where the
YAML content packs live. Values come from the process environment, with a
``.env`` file picked up through python-dotenv.

Scope
-----
- In: environment name, DEBUG, logging switches, LOGS_DIR, CONTENT_DIR
- Out: recipes, quests and cosmetics (content packs, ``src.modules.content``)
- Out: gameplay numbers (``src.modules.shared.constants``)

Design Notes
------------
- ``Config`` is never instantiated; settings are class attributes.
- A bad value is not fatal. It is reported, the default is used, and the
  problem shows up in ``Config.get_metrics().validation_errors``.
- Relative directories are taken relative to the project root.
- The module loads itself on import. Tests change the environment with
  monkeypatch and call ``Config.load()`` again.

Environment Variables
---------------------
All optional:
- ENVIRONMENT: development | testing | staging | production (default: development)
- DEBUG: Debug mode flag (default: False)
- LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
- LOG_JSON: Emit JSON log lines (default: on in production only)
- LOG_TO_FILE: Also write a daily rotated JSON log file (default: False)
- LOGS_DIR: Log file directory (default: <project>/logs)
- CONTENT_DIR: Content pack directory (default: <project>/config/content)
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})

# The structured logger reads Config, so this module reports through the
# plain stdlib logger.
_bootstrap_log = logging.getLogger(__name__)


class Environment(Enum):
    """Where the process is running."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Case-insensitive lookup; anything unknown means development.

        >>> Environment.from_string(" Production ")
        <Environment.PRODUCTION: 'production'>
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member

        _bootstrap_log.warning("Unknown ENVIRONMENT %r, falling back to development", value)
        return cls.DEVELOPMENT


@dataclass
class ConfigLoadReport:
    """Where each setting came from during the latest ``Config.load()``."""

    sources: Dict[str, str] = field(default_factory=dict)
    validation_errors: Dict[str, str] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def note(self, key: str, source: str) -> None:
        self.sources[key] = source

    def reject(self, key: str, message: str) -> None:
        _bootstrap_log.warning(message)
        self.validation_errors[key] = message
        self.sources[key] = "default"

    def summary(self) -> Dict[str, Any]:
        from_env = [key for key, source in self.sources.items() if source == "env"]
        return {
            "settings": len(self.sources),
            "from_environment": len(from_env),
            "from_defaults": len(self.sources) - len(from_env),
            "defaulted": sorted(set(self.sources) - set(from_env)),
            "validation_errors": len(self.validation_errors),
            "loaded_at": self.loaded_at,
        }


class Config:
    """
    Static settings, resolved once per ``load()``.

    >>> Config.LOG_LEVEL in VALID_LOG_LEVELS
    True
    >>> Config.get_config_summary()["content_dir"] == str(Config.CONTENT_DIR)
    True
    """

    APP_NAME: str = "Alchemy Table"
    APP_VERSION: str = "1.0.0"

    PROJECT_ROOT = Path(__file__).resolve().parents[3]

    ENVIRONMENT: str = Environment.DEVELOPMENT.value
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_TO_FILE: bool = False
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    CONTENT_DIR: Path = PROJECT_ROOT / "config" / "content"

    _report: ConfigLoadReport = ConfigLoadReport()
    _validated: bool = False

    # -- environment readers -------------------------------------------------

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        raw = os.environ.get(key)
        if raw is None or not raw.strip():
            cls._report.note(key, "default")
            return default
        cls._report.note(key, "env")
        return raw.strip()

    @classmethod
    def _safe_bool(cls, key: str, default: bool) -> bool:
        """Accepts 1/0, true/false, yes/no, on/off in any case."""
        raw = os.environ.get(key)
        if raw is None:
            cls._report.note(key, "default")
            return default

        token = raw.strip().lower()
        if token in _TRUTHY or token in _FALSY:
            cls._report.note(key, "env")
            return token in _TRUTHY

        cls._report.reject(key, f"{key}={raw!r} is not a boolean; keeping {default}")
        return default

    @classmethod
    def _safe_path(cls, key: str, default: Path) -> Path:
        path = Path(cls._safe_str(key, str(default))).expanduser()
        return path if path.is_absolute() else cls.PROJECT_ROOT / path

    # -- loading -------------------------------------------------------------

    @classmethod
    def load(cls) -> None:
        """Re-read every setting from the environment."""
        cls._report = ConfigLoadReport()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENVIRONMENT", Environment.DEVELOPMENT.value)
        ).value
        cls.DEBUG = cls._safe_bool("DEBUG", False)

        level = cls._safe_str("LOG_LEVEL", "INFO").upper()
        if level not in VALID_LOG_LEVELS:
            cls._report.reject("LOG_LEVEL", f"LOG_LEVEL={level!r} is not a logging level; keeping INFO")
            level = "INFO"
        cls.LOG_LEVEL = level

        cls.LOG_JSON = cls._safe_bool("LOG_JSON", cls.is_production())
        cls.LOG_TO_FILE = cls._safe_bool("LOG_TO_FILE", False)
        cls.LOGS_DIR = cls._safe_path("LOGS_DIR", cls.PROJECT_ROOT / "logs")
        cls.CONTENT_DIR = cls._safe_path("CONTENT_DIR", cls.PROJECT_ROOT / "config" / "content")

        cls._report.loaded_at = datetime.now(timezone.utc).isoformat()

    @classmethod
    def validate(cls) -> None:
        """Load once and warn about settings that look wrong."""
        if cls._validated:
            return

        cls.load()

        if cls.DEBUG and cls.is_production():
            _bootstrap_log.warning("DEBUG is on in production")
        if not cls.CONTENT_DIR.is_dir():
            _bootstrap_log.warning("CONTENT_DIR %s is not a directory", cls.CONTENT_DIR)

        _bootstrap_log.debug("Configuration loaded: %s", cls._report.summary())
        cls._validated = True

    # -- queries -------------------------------------------------------------

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == Environment.DEVELOPMENT.value

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT == Environment.TESTING.value

    @classmethod
    def get_metrics(cls) -> ConfigLoadReport:
        return cls._report

    @classmethod
    def get_config_summary(cls) -> Dict[str, Any]:
        return {
            "app_version": cls.APP_VERSION,
            "environment": cls.ENVIRONMENT,
            "debug": cls.DEBUG,
            "log_level": cls.LOG_LEVEL,
            "log_json": cls.LOG_JSON,
            "log_to_file": cls.LOG_TO_FILE,
            "logs_dir": str(cls.LOGS_DIR),
            "content_dir": str(cls.CONTENT_DIR),
        }


Config.validate()
