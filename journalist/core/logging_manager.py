#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Structured logging for the journal.

A JournalLogger owns two stdlib loggers below `journalist.<component>`:

    <log_dir>/<component>.log   everything from DEBUG up (rotating)
    <log_dir>/errors.log        exceptions with context and traceback
    stderr                      warnings and above

Records read `KIND - message: {json details}` so log files can be grepped
by operation name. Code that may run without a logger goes through
safe_logger(), which substitutes a NullLogger.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ERRORS_FILENAME = "errors.log"


def _format(kind: str, message: str, details: Optional[Dict[str, Any]] = None) -> str:
    if details:
        return f"{kind} - {message}: {json.dumps(details, default=str)}"
    return f"{kind} - {message}"


def _format_cli_error(error: Exception, with_traceback: bool = False) -> str:
    line = f"❌ {type(error).__name__}: {error}"
    if with_traceback:
        return f"{line}\n\n{traceback.format_exc()}"
    return line


def _isolated_logger(name: str, level: int) -> logging.Logger:
    """Named logger with no inherited or leftover handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False
    return logger


class JournalLogger:
    """
    Per-component journal logger.

    Attributes:
        log_dir: Where the log files live (created if missing)
        component_name: Log file stem and logger name suffix
        main_logger: Operations, debug, info and warnings
        error_logger: Errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "journalist",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        prefix = f"journalist.{component_name}"

        self.main_logger = _isolated_logger(f"{prefix}.operations", logging.DEBUG)
        self.main_logger.addHandler(
            self._rotating_handler(self.log_dir / f"{component_name}.log", logging.DEBUG)
        )
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

        self.error_logger = _isolated_logger(f"{prefix}.errors", logging.ERROR)
        self.error_logger.addHandler(
            self._rotating_handler(self.log_dir / ERRORS_FILENAME, logging.ERROR)
        )

    def _rotating_handler(self, path: Path, level: int) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            path, maxBytes=self.max_bytes, backupCount=self.backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    def close(self) -> None:
        """Flush and detach the handlers, releasing the log files."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed operation, e.g. 'entry_saved', with its details."""
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Write an exception to errors.log.

        Three records are written: the error itself, a `key=value` context
        line (when context is given), and the current traceback.
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_format("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_format("INFO", message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Warnings also reach stderr through the console handler."""
        self.main_logger.warning(_format("WARNING", message, details))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised inside a command and return its terminal message.

        Examples:
            >>> logger.log_cli_error(StorageError("disk full"))
            '❌ StorageError: disk full'
        """
        self.log_error(error, context or {"source": "cli"})
        return _format_cli_error(error, show_traceback)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    The error goes to the logger found in ctx.obj (if any); the terminal
    gets a one-line message, plus the traceback under --verbose.

    Args:
        ctx: Click context whose obj may hold 'logger' and 'verbose'
        error: The exception
        operation: Command-level operation name, e.g. 'new_entry'
        additional_context: Extra fields such as the date or query
        exit_code: Process exit status
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}

    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Drop-in JournalLogger that records nothing."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[JournalLogger]) -> JournalLogger:
    """The given logger, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
