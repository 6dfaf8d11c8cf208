"""
Logging Configuration — Structured logging setup.

Provides consistent logging across all modules with:
- Human-readable output for terminals
- GitHub Actions workflow commands (::warning::, ::error::, ::group::)
- JSON output (machine-readable)
- Credential redaction on every record

## Environment Variables

- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_FORMAT: text, github, json (default: github on Actions, else text)

## Usage

    from repo_sync.logging_config import setup_logging

    setup_logging()  # Call once at startup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

from .mirror.redaction import RedactingFilter, sanitize

LOG_FORMATS = ("text", "github", "json")

GROUP_START = "::group::"
GROUP_END = "::endgroup::"


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Output format:
    {"ts": "...", "level": "...", "logger": "...", "message": "..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "repo"):
            log_entry["repo"] = record.repo

        if record.exc_info:
            log_entry["exception"] = sanitize(self.formatException(record.exc_info))

        return json.dumps(log_entry)


class HumanFormatter(logging.Formatter):
    """
    Human-readable log formatter for terminals.

    Output format:
    12:34:56 INFO    [manager        ] Message
    """

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.now().strftime("%H:%M:%S")

        level = record.levelname
        if sys.stderr.isatty():
            color = self.COLORS.get(level, "")
            level = f"{color}{level:7}{self.RESET}"
        else:
            level = f"{level:7}"

        module = record.name.split(".")[-1][:15]
        msg = record.getMessage()
        if msg.startswith(GROUP_START):
            msg = f"─── {msg[len(GROUP_START):]} ───"
        elif msg == GROUP_END:
            msg = "─" * 40

        if record.exc_info:
            msg = f"{msg}\n{sanitize(self.formatException(record.exc_info))}"

        return f"{time_str} {level} [{module:15}] {msg}"


class GitHubActionsFormatter(logging.Formatter):
    """
    Formatter for GitHub Actions runners.

    Warnings and errors become workflow annotations; everything else is
    printed as-is so ::group:: markers pass through untouched.
    """

    COMMANDS = {
        "WARNING": "warning",
        "ERROR": "error",
        "CRITICAL": "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.exc_info:
            msg = f"{msg}\n{sanitize(self.formatException(record.exc_info))}"

        command = self.COMMANDS.get(record.levelname)
        if command:
            # Workflow commands are single-line; newlines must be escaped.
            escaped = msg.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            return f"::{command}::{escaped}"
        if record.levelname == "DEBUG":
            return f"::debug::{msg}"
        return msg


def default_format() -> str:
    """github when running inside GitHub Actions, text otherwise."""
    if os.environ.get("GITHUB_ACTIONS", "").lower() == "true":
        return "github"
    return "text"


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
               Defaults to LOG_LEVEL env var or INFO.
        format_type: Output format (text, github, json).
                     Defaults to LOG_FORMAT env var, then default_format().
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    log_format = (format_type or os.environ.get("LOG_FORMAT") or default_format()).lower()

    numeric_level = getattr(logging, log_level, logging.INFO)

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JSONFormatter()
    elif log_format == "github":
        formatter = GitHubActionsFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(numeric_level)
    handler.addFilter(RedactingFilter())
    root.addHandler(handler)

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={log_level}, format={log_format}"
    )


@contextmanager
def log_group(name: str) -> Iterator[None]:
    """Wrap a block in a collapsible ::group:: on GitHub Actions logs."""
    logger = logging.getLogger("repo_sync")
    logger.info(f"{GROUP_START}{name}")
    try:
        yield
    finally:
        logger.info(GROUP_END)
