import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from freshwatch.shared.config import ConfigError, get_config_path, get_log_level, load_yaml_config


@dataclass
class SheetConfig:
    url: str = ""
    timeout: float = 10.0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SheetConfig":
        """Create config from dictionary, falling back to FRESHWATCH_SHEET_URL"""
        data = data or {}
        return cls(
            url=data.get("url") or os.getenv("FRESHWATCH_SHEET_URL", ""),
            timeout=float(data.get("timeout", 10.0)),
        )


@dataclass
class DummyConfig:
    enabled: bool = False
    history: int = 60
    interval_seconds: float = 60.0
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DummyConfig":
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            history=int(data.get("history", 60)),
            interval_seconds=float(data.get("interval_seconds", 60.0)),
            seed=data.get("seed"),
        )


@dataclass
class Config:
    sheet: SheetConfig = field(default_factory=SheetConfig)
    dummy: DummyConfig = field(default_factory=DummyConfig)
    profile: Dict[str, Any] = field(default_factory=dict)
    exposure: Dict[str, Any] = field(default_factory=dict)
    subject: str = "The fish"
    refresh_interval: float = 5.0
    log_level: str = "INFO"


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from YAML file with environment variable support.

    Raises:
        FileNotFoundError: If no config file exists at the resolved path.
        ConfigError: If a section has the wrong shape.
    """
    if path is None:
        path = get_config_path()
        if not path.exists():
            # Fallback to current directory
            path = Path(path.name)

    config_data = load_yaml_config(path)
    return config_from_dict(config_data)


def config_from_dict(config_data: dict) -> Config:
    for section in ("sheet", "dummy", "profile", "exposure"):
        value = config_data.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(f"'{section}' section must be a mapping, got {type(value).__name__}")

    try:
        return Config(
            sheet=SheetConfig.from_dict(config_data.get("sheet")),
            dummy=DummyConfig.from_dict(config_data.get("dummy")),
            profile=config_data.get("profile") or {},
            exposure=config_data.get("exposure") or {},
            subject=str(config_data.get("subject", "The fish")),
            refresh_interval=float(config_data.get("refresh_interval", 5.0)),
            log_level=get_log_level(config_data),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e
