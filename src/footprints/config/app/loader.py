"""App config loader."""
from typing import Any, Dict, Optional

from .models import AppConfig
from .validators import AppConfigValidator
from ..base import PathLike, YamlConfigLoader


class AppConfigLoader(YamlConfigLoader):
    """Loads `app.yml` (analysis, cache and storage sections)."""

    default_filename = "app.yml"

    @staticmethod
    def validate(data: Dict[str, Any], path: Optional[str] = None) -> None:
        AppConfigValidator.validate_app_config(data, path=path)

    @staticmethod
    def build(data: Dict[str, Any]) -> AppConfig:
        return AppConfig.from_dict(data)


def load_app_config(path: Optional[PathLike] = None) -> AppConfig:
    """Load `path`, or app.yml from $CONFIG_DIR when no path is given."""
    return AppConfigLoader.load(path)


__all__ = ["AppConfigLoader", "load_app_config"]
