"""File relay configuration.

Loads settings from a single YAML file:
  * relay.settings.yaml  — server, storage and logging settings

The file location can be overridden with the ``RELAY_SETTINGS`` environment
variable, and ``RELAY_HOST`` / ``RELAY_PORT`` override the listening address.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("relay.settings.yaml")
SETTINGS_ENV  = "RELAY_SETTINGS"
HOST_ENV      = "RELAY_HOST"
PORT_ENV      = "RELAY_PORT"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host:            str           = "0.0.0.0"
    port:            int           = 3000
    public_host:     Optional[str] = None
    allowed_origins: List[str]     = Field(default_factory=lambda: ["*"])

    @field_validator("port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {value}")
        return value


class StorageSettings(BaseModel):
    """Where blobs are written and where the frontend is served from."""
    upload_dir: str           = "uploads"
    static_dir: Optional[str] = None


class LoggingSettings(BaseModel):
    level: str = "info"


class AppSettings(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def _apply_env_overrides(data: Dict[str, Any]) -> None:
    server = data.setdefault("server", {}) or {}
    data["server"] = server
    if os.environ.get(HOST_ENV):
        server["host"] = os.environ[HOST_ENV]
    if os.environ.get(PORT_ENV):
        server["port"] = os.environ[PORT_ENV]


def load_config(settings_path: Optional[Union[str, Path]] = None) -> AppSettings:
    """Load settings into a single *AppSettings* object.

    Args:
        settings_path: Explicit YAML file. Falls back to ``$RELAY_SETTINGS``,
            then ``relay.settings.yaml`` in the working directory.

    Raises:
        pydantic.ValidationError: If the file holds invalid values.
    """
    if settings_path is None:
        settings_path = os.environ.get(SETTINGS_ENV) or SETTINGS_FILE
    data = _load_yaml(Path(settings_path))
    _apply_env_overrides(data)

    settings = AppSettings(**data)
    logger.info(
        "Settings loaded (server=%s:%s, upload_dir=%s)",
        settings.server.host,
        settings.server.port,
        settings.storage.upload_dir,
    )
    return settings


_config: Optional[AppSettings] = None


def get_config() -> AppSettings:
    """Return the process-wide settings, loading them on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget cached settings (for testing)."""
    global _config
    _config = None
