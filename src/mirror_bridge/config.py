"""
mirror-bridge Configuration
===========================

This module handles configuration loading for the bridge.

Configuration Sources (in order of precedence):
    1. Command-line flags (highest priority)
    2. Environment variables
    3. mirror-bridge.yaml file
    4. Default values (lowest priority)

Environment Variable Mapping:
    MIRROR_BRIDGE_DEVICE     -> bridge.device
    MIRROR_BRIDGE_PLATFORM   -> bridge.platform
    MIRROR_BRIDGE_HOST       -> bridge.host
    MIRROR_BRIDGE_PORT       -> bridge.port
    MIRROR_BRIDGE_ADB        -> bridge.adb_path
    MIRROR_BRIDGE_LOG_LEVEL  -> logging.level
    MIRROR_BRIDGE_LOG_FORMAT -> logging.format

Example:
    from mirror_bridge.config import load_config

    settings = load_config()
    print(settings.bridge.host, settings.bridge.port)

Note:
    Nothing is loaded at import time. stdout belongs to the event
    protocol, so logging is always configured onto stderr.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 27183


# =============================================================================
# Configuration Models
# =============================================================================

class BridgeConfig(BaseModel):
    """Companion connection and device forwarding configuration."""

    device: Optional[str] = Field(
        default=None,
        description="Device id passed to adb -s (optional)",
    )
    platform: str = Field(
        default="android",
        min_length=1,
        description="Platform hint: android, ios, ios-sim, ios-device",
    )
    host: str = Field(
        default=DEFAULT_HOST,
        min_length=1,
        description="Host where the companion streams frames",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        description="Port where the companion streams frames",
    )
    adb_path: str = Field(
        default="adb",
        min_length=1,
        description="adb executable (resolved through PATH)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for mirror-bridge.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to a YAML file. If None, searches common locations.

    Returns:
        Settings: Loaded configuration

    Raises:
        ValueError: If the file is not a mapping of mappings
        pydantic.ValidationError: If a value is out of range
    """
    if config_path is None:
        search_paths = [
            Path("mirror-bridge.yaml"),
            Path("mirror-bridge.yml"),
            Path.home() / ".config" / "mirror-bridge" / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: Dict[str, Any] = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(
                f"{config_path}: expected a mapping at top level, "
                f"got {type(config_data).__name__}"
            )
    elif config_path:
        logger.warning(f"Config file not found: {config_path}, using defaults")
    else:
        logger.debug("No config file found, using defaults and environment variables")

    for name in ("bridge", "logging"):
        if name in config_data:
            _section(config_data, name)

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _section(config_data: dict, name: str) -> dict:
    """Return config section `name`, creating it if empty or missing."""
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(
            f"config section '{name}' must be a mapping, got {type(section).__name__}"
        )
    config_data[name] = section
    return section


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    if env_device := os.environ.get("MIRROR_BRIDGE_DEVICE"):
        _section(config_data, "bridge")["device"] = env_device
    if env_platform := os.environ.get("MIRROR_BRIDGE_PLATFORM"):
        _section(config_data, "bridge")["platform"] = env_platform
    if env_host := os.environ.get("MIRROR_BRIDGE_HOST"):
        _section(config_data, "bridge")["host"] = env_host
    if env_port := os.environ.get("MIRROR_BRIDGE_PORT"):
        _section(config_data, "bridge")["port"] = int(env_port)
    if env_adb := os.environ.get("MIRROR_BRIDGE_ADB"):
        _section(config_data, "bridge")["adb_path"] = env_adb

    if env_log := os.environ.get("MIRROR_BRIDGE_LOG_LEVEL"):
        _section(config_data, "logging")["level"] = env_log
    if env_fmt := os.environ.get("MIRROR_BRIDGE_LOG_FORMAT"):
        _section(config_data, "logging")["format"] = env_fmt


def apply_cli_overrides(settings: Settings, **overrides: Any) -> Settings:
    """
    Return a copy of `settings` with command-line values applied.

    Keys are BridgeConfig field names plus `log_level`. None values
    mean "flag not given" and leave the setting unchanged.
    """
    bridge = {k: v for k, v in overrides.items() if k != "log_level" and v is not None}
    data = settings.model_dump()
    data["bridge"].update(bridge)
    if overrides.get("log_level"):
        data["logging"]["level"] = overrides["log_level"]
    return Settings.model_validate(data)


def setup_logging(settings: Settings) -> None:
    """Configure logging onto stderr based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.WARNING)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
