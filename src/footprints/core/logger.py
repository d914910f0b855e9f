"""Project logging setup.

Provides a single `get_logger(name=None)` factory that returns a configured
logger. Configuration uses the standard library only: a console `StreamHandler`
and a date-based rotating handler writing to `logs/app_YYYY-MM-DD.log`.

Behavior:
- Log level is taken from the environment variable `LOG_LEVEL` (default INFO).
- Log directory is taken from `LOGS_DIR` (default `<project>/logs`).
- Rotates at midnight and archives the previous day to `logs/archive/YYYY-MM-DD/`.
- Deletes archived logs older than `LOG_RETENTION_DAYS` (default 7).
"""
import logging
import os
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class DailyRotatingFileHandler(logging.Handler):
    """Handler that writes `<prefix>_<date>.log` and archives it at midnight."""

    def __init__(self, logs_dir: str, retention_days: int = 7, prefix: str = "app"):
        super().__init__()
        self.logs_dir = Path(logs_dir)
        self.retention_days = retention_days
        self.prefix = prefix  # e.g. "app", "EURUSD"
        self.current_date = datetime.now().strftime("%Y-%m-%d")
        self.current_handler: Optional[logging.FileHandler] = None
        self._open_current()

    def _open_current(self):
        if self.current_handler:
            self.current_handler.close()

        log_file = self.logs_dir / f"{self.prefix}_{self.current_date}.log"
        self.current_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        if self.formatter:
            self.current_handler.setFormatter(self.formatter)

    def setFormatter(self, fmt):
        super().setFormatter(fmt)
        if self.current_handler:
            self.current_handler.setFormatter(fmt)

    def emit(self, record):
        try:
            today = datetime.now().strftime("%Y-%m-%d")
            if today != self.current_date:
                self._rotate(today)

            if self.current_handler:
                self.current_handler.emit(record)
        except Exception:
            self.handleError(record)

    def _rotate(self, today: str):
        old_date = self.current_date
        old_file = self.logs_dir / f"{self.prefix}_{old_date}.log"

        if self.current_handler:
            self.current_handler.close()

        if old_file.exists():
            archive_dir = self.logs_dir / "archive" / old_date
            archive_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(old_file), str(archive_dir / old_file.name))

        _cleanup_old_archive_logs(self.logs_dir, self.retention_days)

        self.current_date = today
        self._open_current()

    def close(self):
        if self.current_handler:
            self.current_handler.close()
        super().close()


def _archive_old_logs(logs_dir: Path, today: str) -> None:
    """Move `app_*.log` files from previous days into the archive."""
    try:
        for log_file in logs_dir.glob("app_*.log"):
            file_date = log_file.name[4:-4]
            if file_date == today:
                continue
            date_archive_dir = logs_dir / "archive" / file_date
            date_archive_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(log_file), str(date_archive_dir / log_file.name))
    except OSError as e:
        print(f"[Logger] Warning: Failed to archive logs: {e}")


def _cleanup_old_archive_logs(logs_dir: Path, retention_days: Optional[int] = None) -> None:
    """Delete archive directories older than the retention period."""
    try:
        if retention_days is None:
            retention_days = int(os.getenv("LOG_RETENTION_DAYS", "7"))

        archive_dir = logs_dir / "archive"
        if not archive_dir.exists():
            return

        cutoff_str = (datetime.now() - timedelta(days=retention_days)).strftime("%Y-%m-%d")
        for date_dir in archive_dir.iterdir():
            if date_dir.is_dir() and date_dir.name < cutoff_str:
                shutil.rmtree(date_dir)
    except OSError as e:
        print(f"[Logger] Warning: Failed to cleanup archive logs: {e}")


def _level_from_env() -> int:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else logging.INFO


def _logs_dir_from_env() -> str:
    logs_dir = os.getenv("LOGS_DIR")
    if not logs_dir:
        # src/footprints/core/logger.py -> project root
        project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
        logs_dir = os.path.join(project_root, "logs")
    return logs_dir


def _configure_root_logger(log_level: int, logs_dir: Optional[str]) -> None:
    root = logging.getLogger()
    if root.handlers:
        # already configured
        return

    root.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_h = logging.StreamHandler()
    console_h.setFormatter(formatter)
    root.addHandler(console_h)

    if not logs_dir:
        return

    try:
        os.makedirs(logs_dir, exist_ok=True)
        today = datetime.now().strftime("%Y-%m-%d")
        _archive_old_logs(Path(logs_dir), today)
        _cleanup_old_archive_logs(Path(logs_dir))

        file_h = DailyRotatingFileHandler(logs_dir, retention_days=int(os.getenv("LOG_RETENTION_DAYS", "7")))
        file_h.setFormatter(formatter)
        root.addHandler(file_h)
    except OSError:
        # Console-only logging when the directory is not writable.
        pass


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger for `name`.

    Example:
        from footprints.core.logger import get_logger
        log = get_logger(__name__)
        log.info("building footprint")

    The root configuration runs once on the first call.
    """
    _configure_root_logger(_level_from_env(), _logs_dir_from_env())
    return logging.getLogger(name if name else "footprints")


def get_symbol_logger(symbol: str) -> logging.Logger:
    """Return a symbol-specific logger writing to `logs/SYMBOL_YYYY-MM-DD.log`.

    The logger does not propagate to the root logger, so it carries its own
    console handler.

    Args:
        symbol: Trading symbol name (e.g. "EURUSD")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"footprints.{symbol}")
    logger.propagate = False
    logger.setLevel(_level_from_env())

    if logger.handlers:
        return logger

    console_h = logging.StreamHandler()
    console_h.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(console_h)

    logs_dir = _logs_dir_from_env()
    try:
        os.makedirs(logs_dir, exist_ok=True)
        retention_days = int(os.getenv("LOG_RETENTION_DAYS", "7"))
        file_h = DailyRotatingFileHandler(logs_dir, retention_days=retention_days, prefix=symbol)
        file_h.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(message)s", datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_h)
    except OSError as e:
        print(f"[Logger] Warning: Failed to create file handler for {symbol}: {e}")

    return logger


__all__ = ["get_logger", "get_symbol_logger", "DailyRotatingFileHandler"]
