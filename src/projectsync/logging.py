"""Logging setup for the receiver.

One rotating log file shared by the sync components and the uvicorn server,
plus helpers for keeping tokens and large webhook bodies out of log lines.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Default configuration
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "projectsync.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# Loggers owned by the HTTP server; uvicorn runs with log_config=None so they
# would otherwise only reach the last-resort stderr handler
SERVER_LOGGERS = ("uvicorn",)


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    server_loggers: tuple[str, ...] = SERVER_LOGGERS,
) -> logging.Logger:
    """Send projectsync and uvicorn logs to one rotating file.

    Args:
        log_dir: Directory for log files. Defaults to 'logs', or
                 PROJECTSYNC_LOG_DIR when set.
        log_file: Log file name.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        level: Log level name. Defaults to INFO, or PROJECTSYNC_LOG_LEVEL
               when set.
        console: Whether to also log to stderr.
        server_loggers: Server loggers that share the projectsync handlers.

    Returns:
        The root projectsync logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("PROJECTSYNC_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("PROJECTSYNC_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_path = log_dir / log_file

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

    logger = logging.getLogger("projectsync")
    _attach_handlers(logger, handlers, log_level)

    for name in server_loggers:
        server_logger = logging.getLogger(name)
        _attach_handlers(server_logger, handlers, log_level)
        server_logger.propagate = False

    logger.info("projectsync logging initialized (level=%s, file=%s)", level, log_path)

    return logger


def _attach_handlers(logger: logging.Logger, handlers: list[logging.Handler], level: int) -> None:
    logger.setLevel(level)
    # Repeated setup must not duplicate output
    logger.handlers.clear()
    for handler in handlers:
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'sync.orchestrator', 'github').
              Will be prefixed with 'projectsync.'.

    Returns:
        Logger instance for the component.
    """
    if not name.startswith("projectsync."):
        name = f"projectsync.{name}"
    return logging.getLogger(name)


def truncate_output(output: str, max_length: int = 100) -> str:
    """Truncate long text, such as a webhook body preview, for logging.

    Args:
        output: The string to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated string with indicator if truncated.
    """
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str) -> str:
    """Remove sensitive data from log output.

    Args:
        text: Text that may contain sensitive data.

    Returns:
        Sanitized text safe for logging.
    """
    patterns = [
        (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub PAT
        (r"gho_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub OAuth
        (r"ghs_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),  # GitHub App installation
        (r"github_pat_[a-zA-Z0-9_]{82}", "[GITHUB_TOKEN]"),  # Fine-grained PAT
        (r"Bearer [a-zA-Z0-9._-]+", "Bearer [REDACTED]"),
        (r"token=[a-zA-Z0-9._-]+", "token=[REDACTED]"),
    ]

    result = text
    for pat, replacement in patterns:
        result = re.sub(pat, replacement, result)

    return result
