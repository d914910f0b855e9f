"""`footprints.config.symbols` package exports."""
from .loader import load_symbols_config, SymbolsConfigLoader
from .models import SymbolsConfig, SymbolConfig
from .validators import ConfigValidator, ConfigError

__all__ = [
    "load_symbols_config",
    "SymbolsConfigLoader",
    "SymbolsConfig",
    "SymbolConfig",
    "ConfigValidator",
    "ConfigError",
]
