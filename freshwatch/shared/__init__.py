"""Shared utilities for freshwatch services."""

from .models import SensorReading, as_float
from .config import ConfigError, load_yaml_config, get_config_path, get_log_level
from .logging import setup_logging

__all__ = [
    "SensorReading",
    "as_float",
    "ConfigError",
    "load_yaml_config",
    "get_config_path",
    "get_log_level",
    "setup_logging",
]
