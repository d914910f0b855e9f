"""Configuration packages: `app` (analysis/cache/storage) and `symbols`."""
from .base import ConfigError, BaseValidator, YamlConfigLoader

__all__ = ["ConfigError", "BaseValidator", "YamlConfigLoader"]
