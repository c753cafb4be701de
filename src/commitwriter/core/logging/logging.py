# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Logging configuration for the commit-writer CLI application.

Console output goes to stderr through rich so that stdout only ever carries
the final commit message. A detailed, rotating log file is kept in the user
log directory for troubleshooting.
"""

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from commitwriter.constants import APP_NAME, LOG_DIR


class StructuredLogger:
    """Structured logging helper for consistent log formatting."""

    def __init__(self, command_name: str, debug: bool = False, silent: bool = False):
        self.command_name = command_name
        self.debug = debug
        self.silent = silent
        self.console = Console(stderr=True)
        self.logfile: Path | None = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Set up loguru with proper formatting and sinks."""
        # Clear existing sinks to avoid duplicates
        logger.remove()

        console_level = "DEBUG" if self.debug else "INFO"

        def console_sink(message):
            text = message.record["message"].rstrip("\n")
            self.console.print(text, markup=False, highlight=False)

        if not self.silent:
            logger.add(
                console_sink, level=console_level, format="{message}", catch=True
            )
        else:
            # errors must still reach the diagnostic stream
            logger.add(sys.stderr, level="ERROR", format="{message}", catch=True)

        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug(f"Log directory unavailable, file logging disabled: {e}")
            return

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        logfile = LOG_DIR / f"{APP_NAME}_{timestamp}.log"

        logger.add(
            logfile,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            rotation="10 MB",
            retention="14 days",
            catch=True,
            backtrace=True,
            diagnose=False,
        )

        logger.bind(command=self.command_name, logfile=str(logfile)).debug(
            "Logger initialized"
        )
        logger.debug(f"Log File Created At: {logfile}")

        self.logfile = logfile

    def get_logfile(self) -> Path | None:
        """Get the current log file path."""
        return self.logfile


def setup_logger(
    command_name: str, debug: bool = False, silent: bool = False
) -> Path | None:
    """
    Set up logging for a command.

    Args:
        command_name: Name of the command being executed
        debug: Enable debug output on the console
        silent: Only report errors on the console

    Returns:
        Path to the log file, or None when file logging is unavailable
    """
    structured_logger = StructuredLogger(command_name, debug=debug, silent=silent)
    return structured_logger.get_logfile()


def status(message: str) -> None:
    """Progress line on the diagnostic stream, e.g. ``[status] Diff collected``."""
    logger.opt(depth=1).info(f"[status] {message}")


def get_log_directory() -> Path:
    """Get the directory where log files are stored."""
    return LOG_DIR
