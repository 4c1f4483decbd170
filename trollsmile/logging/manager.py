"""
Centralized logging manager for trollsmile.

Logs go to stderr so they never interleave with command output on stdout.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional

from .json_formatter import TrollsmileJSONFormatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

COMPONENT_LOGGERS = [
    "trollsmile.registry",
    "trollsmile.discovery",
    "trollsmile.dispatch",
    "trollsmile.shell",
    "trollsmile.logging",
]


class LoggingManager:
    """Central manager for the trollsmile logging system."""

    def __init__(self, config=None):
        """
        Initialize the logging manager.

        Args:
            config: Bot configuration containing logging settings
        """
        self.config = config
        self.configured = False
        self._handlers: List[logging.Handler] = []

        # Default settings if no config provided
        self.log_level = logging.WARNING
        self.format_type = "text"
        self.output_file = None
        self.max_file_size_mb = 10
        self.backup_count = 3

        if config and hasattr(config, "logging"):
            logging_config = config.logging
            self.log_level = getattr(logging, logging_config.level)
            self.format_type = logging_config.format
            self.output_file = logging_config.output_file
            self.max_file_size_mb = logging_config.max_file_size_mb
            self.backup_count = logging_config.backup_count

    def _make_formatter(self) -> logging.Formatter:
        if self.format_type == "json":
            return TrollsmileJSONFormatter()
        return logging.Formatter(TEXT_FORMAT)

    def setup_logging(self) -> None:
        """Setup the complete trollsmile logging system."""
        if self.configured:
            return

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.log_level)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(self._make_formatter())
        console_handler.setLevel(self.log_level)
        self._add_handler(console_handler)

        if self.output_file:
            self._setup_file_logging()

        for logger_name in COMPONENT_LOGGERS:
            logger = logging.getLogger(logger_name)
            logger.setLevel(self.log_level)
            # Inherit handlers from root logger
            logger.propagate = True

        self.configured = True

        logging.getLogger("trollsmile.logging").info(
            "trollsmile logging system initialized",
            extra={
                "log_level": logging.getLevelName(self.log_level),
                "format_type": self.format_type,
                "output_file": self.output_file,
            },
        )

    def _setup_file_logging(self) -> None:
        """Setup file-based logging with rotation."""
        output_path = Path(self.output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(output_path),
            maxBytes=self.max_file_size_mb * 1024 * 1024,  # Convert MB to bytes
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(self._make_formatter())
        file_handler.setLevel(self.log_level)
        self._add_handler(file_handler)

    def _add_handler(self, handler: logging.Handler) -> None:
        logging.getLogger().addHandler(handler)
        self._handlers.append(handler)

    def get_logger(self, name: str) -> logging.Logger:
        """Get a configured logger for the given name."""
        if not self.configured:
            self.setup_logging()

        return logging.getLogger(name)

    def shutdown(self) -> None:
        """Detach and close the handlers this manager installed."""
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

        self.configured = False


# Global logging manager instance
_logging_manager: Optional[LoggingManager] = None


def get_logging_manager(config=None) -> LoggingManager:
    """Get or create the global logging manager."""
    global _logging_manager

    if _logging_manager is None:
        _logging_manager = LoggingManager(config)

    return _logging_manager


def setup_trollsmile_logging(config=None) -> None:
    """Setup trollsmile logging system."""
    manager = get_logging_manager(config)
    manager.setup_logging()


def shutdown_trollsmile_logging() -> None:
    """Shutdown the trollsmile logging system."""
    global _logging_manager

    if _logging_manager:
        _logging_manager.shutdown()
        _logging_manager = None
