"""Dataclass models for the symbols configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Any, Dict, Optional

from .validators import ConfigValidator


@dataclass(frozen=True)
class SymbolConfig:
    """Configuration for a single symbol."""
    name: str
    tick_size: float
    enabled: bool = True

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "SymbolConfig":
        """Create from a dict with validation."""
        ConfigValidator.validate_symbol(obj)
        return cls(
            name=obj.get("name"),
            tick_size=float(obj.get("tick_size")),
            enabled=obj.get("enabled", True)
        )

    def __repr__(self) -> str:
        return f"SymbolConfig(name={self.name!r}, tick_size={self.tick_size}, enabled={self.enabled})"


@dataclass(frozen=True)
class SymbolsConfig:
    """Root configuration containing all symbols."""
    symbols: List[SymbolConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "SymbolsConfig":
        """Create from a dict with validation."""
        ConfigValidator.validate_symbols_config(obj)
        return cls(symbols=[SymbolConfig.from_dict(s) for s in obj.get("symbols", [])])

    def get(self, name: str) -> Optional[SymbolConfig]:
        """Return the symbol entry named `name`, or None."""
        return next((s for s in self.symbols if s.name == name), None)

    def __repr__(self) -> str:
        return f"SymbolsConfig(symbols={len(self.symbols)})"


__all__ = ["SymbolConfig", "SymbolsConfig"]
