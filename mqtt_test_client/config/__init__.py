from .config_model import GUISettings, LoggingSettings, MQTTSettings, SeriesSettings, Settings
from .manager import ConfigError, ConfigManager

__all__ = [
    "Settings",
    "MQTTSettings",
    "SeriesSettings",
    "GUISettings",
    "LoggingSettings",
    "ConfigManager",
    "ConfigError",
]
