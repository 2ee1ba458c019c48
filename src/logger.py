"""
Logging Setup Module.

Builds the application logger used across the ranking pipeline. Messages may be
plain strings or dictionaries; dictionaries are rendered as one JSON line so log
files stay machine-readable.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict


class StructuredFormatter(logging.Formatter):
    """Render dict messages as JSON lines and plain messages unchanged."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        if isinstance(record.msg, dict):
            payload: Dict[str, Any] = {
                "timestamp": timestamp,
                "level": record.levelname,
                "logger": record.name,
                **record.msg,
            }
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        message = super().format(record)
        return f"{timestamp} [{record.levelname}] {record.name}: {message}"


class LogManager:
    """
    Configure and expose a named application logger.

    Attributes:
        logger (logging.Logger): Configured logger instance
    """

    def __init__(
        self,
        app_name: str,
        log_dir: str = "logs",
        development: bool = False,
        level: int = logging.INFO,
    ):
        """
        Initialize the log manager.

        Args:
            app_name (str): Logger name, also used for the log file name
            log_dir (str): Directory for the log file
            development (bool): Also log to the console when True
            level (int): Logging level
        """
        self.logger = logging.getLogger(app_name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        # Avoid duplicate handlers when the module is imported more than once
        if self.logger.handlers:
            return

        formatter = StructuredFormatter()

        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"{app_name}.log"), encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        if development:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)
