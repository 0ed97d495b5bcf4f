"""
Centralized logging configuration for Frame Notes

The drawing engine logs every commit, undo and redraw at DEBUG, so the file
log rotates. The console only shows INFO and above unless overridden.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..config import Config


class LoggingConfig:
    """Central logging configuration"""

    _initialized = False
    _log_file_path: Optional[Path] = None

    FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    CONSOLE_FORMAT = '[%(levelname)s] %(message)s'

    @classmethod
    def setup_logging(cls, log_dir: Path, console_level: Union[int, str] = logging.INFO):
        """
        Install file and console handlers on the package logger.

        Safe to call more than once; only the first call configures anything.

        Args:
            log_dir: Folder for the rotating log file
            console_level: Minimum level echoed to stdout
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        cls._log_file_path = log_dir / Config.LOG_FILE_NAME

        logger = logging.getLogger(Config.PACKAGE_LOGGER)
        logger.setLevel(logging.DEBUG)

        file_handler = RotatingFileHandler(
            cls._log_file_path,
            maxBytes=Config.LOG_MAX_BYTES,
            backupCount=Config.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(cls.FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(cls.CONSOLE_FORMAT))
        logger.addHandler(console_handler)

        cls._initialized = True
        logger.info(f"Logging to {cls._log_file_path}")

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get a logger instance"""
        return logging.getLogger(name)

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        """Get the log file path (None before setup)"""
        return cls._log_file_path


__all__ = ['LoggingConfig']
