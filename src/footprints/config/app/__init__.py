"""App config package exports."""
from .loader import load_app_config, AppConfigLoader
from .models import AppConfig, AppInfo, AnalysisSettings, CacheSettings, StorageSettings
from .validators import AppConfigValidator
from ..base import ConfigError

__all__ = [
    "load_app_config",
    "AppConfigLoader",
    "AppConfig",
    "AppInfo",
    "AnalysisSettings",
    "CacheSettings",
    "StorageSettings",
    "AppConfigValidator",
    "ConfigError",
]
