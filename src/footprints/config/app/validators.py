"""Validators for app configuration."""
from typing import Any, Dict, Optional
from ..base import BaseValidator, ConfigError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppConfigValidator(BaseValidator):
    """Validator for app configuration objects."""

    @staticmethod
    def validate_app_info(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        BaseValidator.validate_dict(obj, "app", path)

        name = obj.get("name")
        BaseValidator.validate_string(name, "app.name", path=path)

        BaseValidator.validate_choice(
            obj.get("log_level", "INFO"), "app.log_level", LOG_LEVELS, path=path
        )

    @staticmethod
    def validate_analysis_settings(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        BaseValidator.validate_dict(obj, "analysis", path)

        threshold = obj.get("imbalance_threshold", 300.0)
        BaseValidator.validate_float(
            threshold, "analysis.imbalance_threshold", min_value=150.0, max_value=1000.0, path=path
        )

        value_area = obj.get("value_area_percentage", 70.0)
        BaseValidator.validate_float(
            value_area, "analysis.value_area_percentage", min_value=50.0, max_value=90.0, path=path
        )

        override = obj.get("tick_size_override", 0.0)
        BaseValidator.validate_float(override, "analysis.tick_size_override", min_value=0.0, path=path)

        # 0 disables binning
        bins = obj.get("number_of_bins", 5)
        BaseValidator.validate_int(bins, "analysis.number_of_bins", min_value=0, max_value=20, path=path)
        if 0 < bins < 3:
            BaseValidator.fail(f"analysis.number_of_bins must be 0 or between 3 and 20, got {bins}", path)

    @staticmethod
    def validate_cache_settings(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        BaseValidator.validate_dict(obj, "cache", path)

        max_cache_size = obj.get("max_cache_size", 200)
        BaseValidator.validate_int(max_cache_size, "cache.max_cache_size", min_value=1, path=path)

        max_bars = obj.get("max_bars_to_display", 100)
        BaseValidator.validate_int(max_bars, "cache.max_bars_to_display", min_value=10, max_value=500, path=path)

        recalc = obj.get("recalculate_bars", 20)
        BaseValidator.validate_int(recalc, "cache.recalculate_bars", min_value=0, path=path)

        throttle = obj.get("render_throttle_ms", 250)
        BaseValidator.validate_int(throttle, "cache.render_throttle_ms", min_value=0, path=path)

    @staticmethod
    def validate_storage_settings(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        BaseValidator.validate_dict(obj, "storage", path)

        BaseValidator.validate_bool(obj.get("enabled", True), "storage.enabled", path=path)

        database_path = obj.get("database_path", "data/footprints.duckdb")
        BaseValidator.validate_string(database_path, "storage.database_path", path=path)

        BaseValidator.validate_int(obj.get("max_ticks", 100000), "storage.max_ticks", min_value=1, path=path)
        BaseValidator.validate_float(
            obj.get("max_tick_age_days", 7), "storage.max_tick_age_days", min_value=0, path=path
        )
        BaseValidator.validate_float(
            obj.get("max_tick_gap_hours", 2), "storage.max_tick_gap_hours", min_value=0, path=path
        )
        BaseValidator.validate_float(
            obj.get("max_bar_tick_gap_hours", 1), "storage.max_bar_tick_gap_hours", min_value=0, path=path
        )
        BaseValidator.validate_int(
            obj.get("save_interval_ticks", 500), "storage.save_interval_ticks", min_value=1, path=path
        )
        BaseValidator.validate_int(
            obj.get("cleanup_interval", 1000), "storage.cleanup_interval", min_value=1, path=path
        )

    @staticmethod
    def validate_app_config(obj: Dict[str, Any], path: Optional[str] = None) -> None:
        base = path if path else ""
        ctx = f"{base}: " if base else ""

        BaseValidator.validate_dict(obj, "config", path)

        app = obj.get("app")
        if not app:
            raise ConfigError(f"{ctx}missing required 'app' section")
        AppConfigValidator.validate_app_info(app, path=f"{base}.app" if base else "app")

        AppConfigValidator.validate_analysis_settings(
            obj.get("analysis", {}), path=f"{base}.analysis" if base else "analysis"
        )
        AppConfigValidator.validate_cache_settings(
            obj.get("cache", {}), path=f"{base}.cache" if base else "cache"
        )
        AppConfigValidator.validate_storage_settings(
            obj.get("storage", {}), path=f"{base}.storage" if base else "storage"
        )


__all__ = ["AppConfigValidator", "ConfigError"]
