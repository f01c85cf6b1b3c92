import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, List, Optional, Protocol

from .config import Config
from .exceptions import LoggerError

class RequestLogger(Protocol):
    """Anything the API client can hand formatted request/response lines to"""
    def logf(self, fmt: str, *args: Any) -> None:
        ...

class Logger:
    """Request logger backed by the standard logging module, stderr by default"""

    def __init__(self, config: Optional[Config] = None, name: str = "n8n_client"):
        """Initialize logger with configuration"""
        self.config = config or Config()

        # Each instance owns a child logger so its handlers survive later instances
        self.logger = logging.getLogger(f"{name}.{id(self):x}")
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.propagate = False

        # Set log level
        level = self._get_log_level()
        self.logger.setLevel(level)

        self.formatter = logging.Formatter(
            self.config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

        # Add file handler
        log_file = self.config.get("logging.file")
        if log_file:
            try:
                path = Path(log_file)
                if not path.parent.exists() and str(path.parent) != ".":
                    try:
                        path.parent.mkdir(parents=True, exist_ok=True)
                    except (OSError, PermissionError):
                        raise LoggerError(f"Cannot create log directory: {path.parent}")

                max_size = self.config.get("logging.max_size", 1024 * 1024)  # 1MB default
                backup_count = self.config.get("logging.backup_count", 3)

                handler = RotatingFileHandler(
                    str(path),
                    maxBytes=max_size,
                    backupCount=backup_count
                )
                handler.setFormatter(self.formatter)
                self.logger.addHandler(handler)
            except LoggerError:
                raise
            except Exception as e:
                raise LoggerError(f"Failed to setup log file: {str(e)}")

        if self.config.get("logging.console_output", True):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(self.formatter)
            self.logger.addHandler(console_handler)

    def _get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        level_name = str(self.config.get("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise LoggerError(f"Invalid log level: {level_name}")
        return level

    def logf(self, fmt: str, *args: Any) -> None:
        """Format and record a single line"""
        self.logger.info(fmt, *args)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message"""
        self.logger.debug(message, extra=kwargs.get('extra'))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message"""
        self.logger.info(message, extra=kwargs.get('extra'))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message"""
        self.logger.warning(message, extra=kwargs.get('extra'))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message"""
        self.logger.error(message, extra=kwargs.get('extra'))

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message"""
        self.logger.critical(message, extra=kwargs.get('extra'))

class MemoryLogger:
    """Keeps every formatted line in memory, used by tests and embedding hosts"""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def logf(self, fmt: str, *args: Any) -> None:
        self.lines.append(fmt % args if args else fmt)

    def contains(self, fragment: str) -> bool:
        return any(fragment in line for line in self.lines)

    def count(self, fragment: str) -> int:
        return sum(1 for line in self.lines if fragment in line)

    def clear(self) -> None:
        self.lines.clear()
