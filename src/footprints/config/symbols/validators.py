"""Configuration validator for the symbols config."""
from typing import Any, Dict, Optional
from ..base import BaseValidator, ConfigError


class ConfigValidator(BaseValidator):
    """Validator for symbol entries.

    Validators accept an optional `path` parameter that is prefixed to
    error messages to help locate the failing item in a nested config.
    """

    @staticmethod
    def validate_symbol(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        BaseValidator.validate_dict(obj, "symbol", path)

        name = obj.get("name")
        BaseValidator.validate_string(name, "symbol.name", path=path)

        BaseValidator.validate_positive(obj.get("tick_size"), "symbol.tick_size", path=path)

        enabled = obj.get("enabled", True)
        BaseValidator.validate_bool(enabled, "symbol.enabled", path=path)

    @staticmethod
    def validate_symbols_config(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        base = path if path else ""

        BaseValidator.validate_dict(obj, "config", path)

        symbols = obj.get("symbols", [])
        BaseValidator.validate_list(symbols, "root 'symbols'", path)

        for i, s in enumerate(symbols):
            symbol_path = f"{base}.symbols[{i}]" if base else f"symbols[{i}]"
            ConfigValidator.validate_symbol(s, path=symbol_path)


__all__ = ["ConfigValidator", "ConfigError"]
