"""Dataclass models for app configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Any

from .validators import AppConfigValidator


@dataclass(frozen=True)
class AppInfo:
    """Application metadata."""
    name: str
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "AppInfo":
        AppConfigValidator.validate_app_info(obj)
        return cls(
            name=obj.get("name"),
            log_level=obj.get("log_level", "INFO")
        )

    def __repr__(self) -> str:
        return f"AppInfo(name={self.name!r}, log_level={self.log_level!r})"


@dataclass(frozen=True)
class AnalysisSettings:
    """Footprint statistics settings."""
    imbalance_threshold: float = 300.0
    value_area_percentage: float = 70.0
    tick_size_override: float = 0.0
    number_of_bins: int = 5

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "AnalysisSettings":
        AppConfigValidator.validate_analysis_settings(obj)
        return cls(
            imbalance_threshold=float(obj.get("imbalance_threshold", 300.0)),
            value_area_percentage=float(obj.get("value_area_percentage", 70.0)),
            tick_size_override=float(obj.get("tick_size_override", 0.0)),
            number_of_bins=obj.get("number_of_bins", 5)
        )

    def effective_tick_size(self, symbol_tick_size: float) -> float:
        """Return the override when set, else the symbol's own tick size."""
        if self.tick_size_override > 0:
            return self.tick_size_override
        return symbol_tick_size

    def __repr__(self) -> str:
        return (
            f"AnalysisSettings(imbalance_threshold={self.imbalance_threshold}, "
            f"value_area_percentage={self.value_area_percentage}, "
            f"tick_size_override={self.tick_size_override}, number_of_bins={self.number_of_bins})"
        )


@dataclass(frozen=True)
class CacheSettings:
    """Footprint cache and refresh settings."""
    max_cache_size: int = 200
    max_bars_to_display: int = 100
    recalculate_bars: int = 20
    render_throttle_ms: int = 250

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "CacheSettings":
        AppConfigValidator.validate_cache_settings(obj)
        return cls(
            max_cache_size=obj.get("max_cache_size", 200),
            max_bars_to_display=obj.get("max_bars_to_display", 100),
            recalculate_bars=obj.get("recalculate_bars", 20),
            render_throttle_ms=obj.get("render_throttle_ms", 250)
        )

    def __repr__(self) -> str:
        return (
            f"CacheSettings(max_cache_size={self.max_cache_size}, "
            f"max_bars_to_display={self.max_bars_to_display}, recalculate_bars={self.recalculate_bars}, "
            f"render_throttle_ms={self.render_throttle_ms})"
        )


@dataclass(frozen=True)
class StorageSettings:
    """Tick persistence settings."""
    enabled: bool = True
    database_path: str = "data/footprints.duckdb"
    max_ticks: int = 100000
    max_tick_age_days: float = 7
    max_tick_gap_hours: float = 2
    max_bar_tick_gap_hours: float = 1
    save_interval_ticks: int = 500
    cleanup_interval: int = 1000

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "StorageSettings":
        AppConfigValidator.validate_storage_settings(obj)
        return cls(
            enabled=obj.get("enabled", True),
            database_path=obj.get("database_path", "data/footprints.duckdb"),
            max_ticks=obj.get("max_ticks", 100000),
            max_tick_age_days=obj.get("max_tick_age_days", 7),
            max_tick_gap_hours=obj.get("max_tick_gap_hours", 2),
            max_bar_tick_gap_hours=obj.get("max_bar_tick_gap_hours", 1),
            save_interval_ticks=obj.get("save_interval_ticks", 500),
            cleanup_interval=obj.get("cleanup_interval", 1000)
        )

    @property
    def max_tick_age(self) -> timedelta:
        return timedelta(days=self.max_tick_age_days)

    @property
    def max_tick_gap(self) -> timedelta:
        return timedelta(hours=self.max_tick_gap_hours)

    @property
    def max_bar_tick_gap(self) -> timedelta:
        return timedelta(hours=self.max_bar_tick_gap_hours)

    def __repr__(self) -> str:
        return (
            f"StorageSettings(enabled={self.enabled}, database_path={self.database_path!r}, "
            f"max_ticks={self.max_ticks}, save_interval_ticks={self.save_interval_ticks})"
        )


@dataclass(frozen=True)
class AppConfig:
    """Root application configuration."""
    app: AppInfo
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "AppConfig":
        AppConfigValidator.validate_app_config(obj)

        return cls(
            app=AppInfo.from_dict(obj.get("app", {})),
            analysis=AnalysisSettings.from_dict(obj.get("analysis", {})),
            cache=CacheSettings.from_dict(obj.get("cache", {})),
            storage=StorageSettings.from_dict(obj.get("storage", {}))
        )

    def __repr__(self) -> str:
        return (
            f"AppConfig(app={self.app!r}, analysis={self.analysis!r}, "
            f"cache={self.cache!r}, storage={self.storage!r})"
        )


__all__ = ["AppConfig", "AppInfo", "AnalysisSettings", "CacheSettings", "StorageSettings"]
