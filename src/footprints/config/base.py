"""
Validation and YAML loading shared by the app and symbols configs.

Validators raise ConfigError with an optional `path` prefix that points at the
failing item ("symbols[2]: symbol.tick_size must be > 0, got 0"). Loaders
turn a ConfigError into RuntimeError naming the file.
"""

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Base error for all config validation errors."""


def _ctx(path: Optional[str]) -> str:
    return f"{path}: " if path else ""


class BaseValidator:
    """Type and range checks used by the section validators."""

    @staticmethod
    def fail(message: str, path: Optional[str] = None) -> None:
        raise ConfigError(f"{_ctx(path)}{message}")

    @staticmethod
    def validate_dict(obj: Any, name: str, path: Optional[str] = None) -> None:
        if not isinstance(obj, dict):
            BaseValidator.fail(f"{name} must be a dict", path)

    @staticmethod
    def validate_list(obj: Any, field_name: str, path: Optional[str] = None) -> None:
        if not isinstance(obj, list):
            BaseValidator.fail(f"{field_name} must be a list", path)

    @staticmethod
    def validate_bool(obj: Any, field_name: str, path: Optional[str] = None) -> None:
        if not isinstance(obj, bool):
            BaseValidator.fail(f"{field_name} must be a boolean", path)

    @staticmethod
    def validate_string(
        obj: Any,
        field_name: str,
        allow_empty: bool = False,
        path: Optional[str] = None
    ) -> None:
        if not isinstance(obj, str):
            BaseValidator.fail(f"{field_name} must be a string", path)
        if not allow_empty and not obj:
            BaseValidator.fail(f"{field_name} must be a non-empty string", path)

    @staticmethod
    def validate_choice(obj: Any, field_name: str, choices: Iterable[Any], path: Optional[str] = None) -> None:
        choices = list(choices)
        if obj not in choices:
            BaseValidator.fail(f"{field_name} must be one of {choices}, got {obj!r}", path)

    @staticmethod
    def _check_bounds(obj, field_name, min_value, max_value, path) -> None:
        if min_value is not None and obj < min_value:
            BaseValidator.fail(f"{field_name} must be >= {min_value}, got {obj}", path)
        if max_value is not None and obj > max_value:
            BaseValidator.fail(f"{field_name} must be <= {max_value}, got {obj}", path)

    @staticmethod
    def validate_int(
        obj: Any,
        field_name: str,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        path: Optional[str] = None
    ) -> None:
        """Integer within optional inclusive bounds (bools are rejected)."""
        if isinstance(obj, bool) or not isinstance(obj, int):
            BaseValidator.fail(f"{field_name} must be an integer", path)
        BaseValidator._check_bounds(obj, field_name, min_value, max_value, path)

    @staticmethod
    def validate_float(
        obj: Any,
        field_name: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        path: Optional[str] = None
    ) -> None:
        """Int or float within optional inclusive bounds (bools are rejected)."""
        if isinstance(obj, bool) or not isinstance(obj, (int, float)):
            BaseValidator.fail(f"{field_name} must be a number", path)
        BaseValidator._check_bounds(obj, field_name, min_value, max_value, path)

    @staticmethod
    def validate_positive(obj: Any, field_name: str, path: Optional[str] = None) -> None:
        BaseValidator.validate_float(obj, field_name, path=path)
        if obj <= 0:
            BaseValidator.fail(f"{field_name} must be > 0, got {obj}", path)


class YamlConfigLoader:
    """
    Read, validate and build one YAML config file.

    Subclasses set `default_filename` and implement `validate` and `build`.
    Without an explicit path the file is looked up in $CONFIG_DIR (default
    ./config).
    """

    default_filename = ""

    @classmethod
    def default_path(cls) -> Path:
        return Path(os.getenv("CONFIG_DIR", "config")) / cls.default_filename

    @staticmethod
    def read_yaml(path: PathLike) -> Dict[str, Any]:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")

        with p.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    @staticmethod
    def validate(data: Dict[str, Any], path: Optional[str] = None) -> None:
        raise NotImplementedError

    @staticmethod
    def build(data: Dict[str, Any]):
        raise NotImplementedError

    @classmethod
    def load(cls, path: Optional[PathLike] = None):
        """
        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the file is empty
            RuntimeError: if validation fails
        """
        path = Path(path) if path is not None else cls.default_path()

        data = cls.read_yaml(path)
        if data is None:
            raise ValueError(f"Config file {path} is empty or invalid")

        try:
            cls.validate(data, path=str(path))
        except ConfigError as e:
            raise RuntimeError(f"Invalid config in {path}: {e}") from e

        return cls.build(data)


__all__ = ["ConfigError", "BaseValidator", "YamlConfigLoader", "PathLike"]
