"""Configuration loading for TradeJournal.

Settings come from ``~/.config/tradejournal/config.toml``. The
``TRADEJOURNAL_HOME`` environment variable points the whole journal
(config, database and exports) at another directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TRADEJOURNAL_HOME"
DEFAULT_FOOTER = "TradeJournal - Personal Trading Dashboard"


def get_home_dir() -> Path:
    """Return the journal's configuration directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "tradejournal"


class Settings(BaseModel):
    """Resolved journal settings."""

    home: Path = Field(..., description="Configuration directory")
    db_path: Path = Field(..., description="SQLite database file")
    default_starting_balance: float = Field(
        default=10000.0, gt=0, allow_inf_nan=False, description="Balance restored by a full reset"
    )
    currency_symbol: str = Field(default="$", min_length=1)
    export_dir: Path = Field(..., description="Where report files are written")
    footer: str = Field(default=DEFAULT_FOOTER, description="Report footer line")
    log_level: str = Field(default="WARNING")

    model_config = {"frozen": True}

    @field_validator("home", "db_path", "export_dir")
    @classmethod
    def _expand_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value) -> str:
        if not isinstance(value, str):
            raise ValueError("log level must be a string")
        return value.upper()


def _read_config_file(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def _section(config: dict, name: str) -> dict:
    section = config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring [%s] in config: expected a table", name)
        return {}
    return section


def load_settings(home: Optional[Path] = None) -> Settings:
    """Load settings, falling back to defaults for anything missing.

    Values that fail validation are logged and replaced by their defaults.

    Args:
        home: Configuration directory. Defaults to get_home_dir().

    Returns:
        Resolved Settings.
    """
    home = home or get_home_dir()
    config = _read_config_file(home / "config.toml")

    journal = _section(config, "journal")
    reports = _section(config, "reports")
    logging_cfg = _section(config, "logging")

    defaults = {
        "home": home,
        "db_path": home / "tradejournal.db",
        "export_dir": home / "exports",
    }
    values = {
        "db_path": journal.get("db_path"),
        "default_starting_balance": journal.get("default_starting_balance"),
        "currency_symbol": journal.get("currency_symbol"),
        "export_dir": reports.get("export_dir"),
        "footer": reports.get("footer"),
        "log_level": logging_cfg.get("level"),
    }
    values = {key: value for key, value in values.items() if value is not None}

    try:
        return Settings(**{**defaults, **values})
    except ValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        logger.warning("Ignoring invalid config values (%s): %s", ", ".join(invalid), e)
        for key in invalid:
            values.pop(key, None)
        return Settings(**{**defaults, **values})


def write_default_config(home: Optional[Path] = None) -> Path:
    """Write a config template if none exists and return its path."""
    home = home or get_home_dir()
    home.mkdir(parents=True, exist_ok=True)
    config_path = home / "config.toml"
    if config_path.exists():
        return config_path

    template = {
        "journal": {
            "db_path": str(home / "tradejournal.db"),
            "default_starting_balance": 10000.0,
            "currency_symbol": "$",
        },
        "reports": {
            "export_dir": str(home / "exports"),
            "footer": DEFAULT_FOOTER,
        },
        "logging": {"level": "WARNING"},
    }
    with open(config_path, "w") as f:
        toml.dump(template, f)
    return config_path
