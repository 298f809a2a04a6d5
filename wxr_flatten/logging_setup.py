"""
Structured logging configuration.
Sets up JSON-formatted logs with redaction of credential mentions.
"""

import logging
import re
from pathlib import Path
from datetime import datetime
from typing import Optional
from pythonjsonlogger import jsonlogger
import sys


class RedactingFilter(logging.Filter):
    """Filter that redacts messages mentioning credentials."""

    # WXR exports carry post passwords and user hashes; matched as whole words
    REDACT_PATTERN = re.compile(
        r'(?<![a-z])(password|user_pass|api_key|secret|access_token)(?![a-z])',
        re.IGNORECASE,
    )

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact sensitive fields from log record."""
        if hasattr(record, 'msg') and isinstance(record.msg, str):
            match = self.REDACT_PATTERN.search(record.msg)
            if match:
                record.msg = f"[REDACTED: {match.group(1).lower()}]"
                record.args = ()
        return True


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: str = "INFO",
    json_format: bool = True,
    console_output: bool = True,
) -> Optional[Path]:
    """
    Configure structured logging.

    Args:
        log_dir: Directory to write log files (no file log if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON-formatted file logs if True
        console_output: Also output to console (stderr) if True

    Returns:
        Path to the log file, if one was created

    Raises:
        ValueError: If log_level is not a logging level name
    """
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    root_logger.handlers.clear()

    redact_filter = RedactingFilter()
    log_file = None

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"wxr_flatten_{timestamp}.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.addFilter(redact_filter)

        if json_format:
            formatter = jsonlogger.JsonFormatter(
                '%(timestamp)s %(levelname)s %(name)s %(message)s',
                timestamp=True
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console goes to stderr so exports written to stdout stay clean
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.addFilter(redact_filter)

        console_formatter = logging.Formatter(
            '%(levelname)s - %(name)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        root_logger.info(f"Logging initialized: {log_file}")
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with a given name."""
    return logging.getLogger(name)
