from .settings import Config, DummyConfig, SheetConfig, config_from_dict, load_config

__all__ = ["Config", "DummyConfig", "SheetConfig", "config_from_dict", "load_config"]
