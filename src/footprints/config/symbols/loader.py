"""Symbols config loader."""
from typing import Any, Dict, Optional

from .models import SymbolsConfig
from .validators import ConfigValidator
from ..base import PathLike, YamlConfigLoader


class SymbolsConfigLoader(YamlConfigLoader):
    """Loads `symbols.yml` (name and tick size per instrument)."""

    default_filename = "symbols.yml"

    @staticmethod
    def validate(data: Dict[str, Any], path: Optional[str] = None) -> None:
        ConfigValidator.validate_symbols_config(data, path=path)

    @staticmethod
    def build(data: Dict[str, Any]) -> SymbolsConfig:
        return SymbolsConfig.from_dict(data)


def load_symbols_config(path: Optional[PathLike] = None) -> SymbolsConfig:
    return SymbolsConfigLoader.load(path)


__all__ = ["SymbolsConfigLoader", "load_symbols_config"]
