from .manager import CONFIG_ENV, CONFIG_FILENAME, ENV_PREFIX, ConfigManager, get_config

__all__ = ["ConfigManager", "get_config", "CONFIG_FILENAME", "CONFIG_ENV", "ENV_PREFIX"]
