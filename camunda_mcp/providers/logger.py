# -*- coding: utf-8 -*-
"""
Logging provider
"""

import sys
from pathlib import Path
from typing import Optional
from loguru import logger


class Logger:
    """Thin loguru setup shared by the server and the health CLI"""

    def __init__(self,
                 name: str = "camunda-mcp",
                 level: str = "INFO",
                 log_file: Optional[str] = None,
                 enable_file: bool = False,
                 enable_console: bool = True,
                 max_file_size: str = "10 MB",
                 retention_days: int = 7):
        """
        Configure loguru sinks.

        Console output goes to stderr: stdout is reserved for the MCP stdio
        transport and for the health check report.

        Args:
            name: logger name, bound as ``extra["service"]``
            level: minimum level
            log_file: path of the rotating log file
            enable_file: write to ``log_file``
            enable_console: write to stderr
            max_file_size: rotation threshold
            retention_days: how long rotated files are kept
        """
        self.name = name
        self.level = level
        self.log_file = log_file
        self.enable_file = enable_file
        self.enable_console = enable_console
        self.max_file_size = max_file_size
        self.retention_days = retention_days

        logger.remove()

        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        if self.enable_console:
            logger.add(
                sys.stderr,
                format=log_format,
                level=self.level,
                colorize=True
            )

        if self.enable_file and self.log_file:
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                self.log_file,
                format=log_format,
                level=self.level,
                rotation=self.max_file_size,
                retention=f"{self.retention_days} days",
                compression="zip",
                encoding="utf-8"
            )

    def get_logger(self):
        """Return the configured loguru logger"""
        return logger.bind(service=self.name)


_logger_instance: Optional[Logger] = None


def init_logger(name: str = "camunda-mcp",
                level: str = "INFO",
                log_file: Optional[str] = None,
                enable_file: bool = False,
                enable_console: bool = True,
                max_file_size: str = "10 MB",
                retention_days: int = 7) -> Logger:
    """
    Initialise the process-wide logger.

    Returns:
        Logger instance
    """
    global _logger_instance
    _logger_instance = Logger(
        name=name,
        level=level,
        log_file=log_file,
        enable_file=enable_file,
        enable_console=enable_console,
        max_file_size=max_file_size,
        retention_days=retention_days
    )
    return _logger_instance


def get_logger():
    """
    Return the loguru logger, configuring stderr output on first use.
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = Logger()
    return logger
