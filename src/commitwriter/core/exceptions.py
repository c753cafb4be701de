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
Custom exception hierarchy for the commit-writer CLI application.

Every error carries a user facing message, optional technical details and
the process exit code the CLI should terminate with. Pipeline stages stamp
their own exit code on errors that bubble out of them, so a transport error
raised while styling exits differently from one raised while probing.
"""

import contextlib

import typer
from colorama import Fore, Style
from loguru import logger

from commitwriter.constants import ExitCode


class CommitWriterError(Exception):
    """
    Base exception for all commit-writer errors.

    All commit-writer specific exceptions inherit from this class
    to enable consistent error handling throughout the application.
    """

    default_exit_code: int | None = None

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a CommitWriterError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        self.exit_code: int | None = self.default_exit_code
        super().__init__(message)


class ConfigurationError(CommitWriterError):
    """
    Configuration-related errors.

    Raised when configuration files, environment variables or
    command line overrides contain invalid settings.
    """

    default_exit_code = ExitCode.GENERIC


class BackendError(CommitWriterError):
    """
    Errors talking to the text generation backend.
    """

    retriable = True


class TransportError(BackendError):
    """Network level failure: connection refused, timeout, DNS..."""

    pass


class BackendUnavailableError(TransportError):
    """Raised by the liveness probe when the backend cannot be reached."""

    default_exit_code = ExitCode.PROBE


class BackendStatusError(BackendError):
    """The backend answered with an HTTP status >= 400."""

    def __init__(self, status_code: int, body: str, message: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(
            message or f"Backend error: status={status_code} body={body}",
        )


class DecodeError(BackendError):
    """The backend response stream contained malformed JSON."""

    pass


class RequestSerializationError(BackendError):
    """The request could not be encoded. Local failure, never retried."""

    retriable = False


class ProcessError(CommitWriterError):
    """
    A subprocess (git) exited with a non-zero status.

    The combined stdout/stderr of the process is kept in ``output``.
    """

    default_exit_code = ExitCode.DIFF

    def __init__(
        self,
        message: str,
        details: str | None = None,
        returncode: int | None = None,
        output: str = "",
    ):
        self.returncode = returncode
        self.output = output
        super().__init__(message, details)


class FileSystemError(CommitWriterError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as permission issues or missing files.
    """

    default_exit_code = ExitCode.GENERIC


class SummaryLoadError(FileSystemError):
    """Raised when a saved summary could not be loaded."""

    default_exit_code = ExitCode.SUMMARY_LOAD


class HookFileError(FileSystemError):
    """Raised when the commit message file could not be opened or written."""

    _exit_codes = {
        "open": ExitCode.HOOK_OPEN,
        "write": ExitCode.HOOK_WRITE,
        "replace": ExitCode.HOOK_REPLACE,
    }

    def __init__(self, operation: str, path: str, details: str | None = None):
        self.operation = operation
        self.path = path
        super().__init__(
            f"Failed to {operation} commit message file: {path}",
            details,
        )
        self.exit_code = self._exit_codes[operation]


class ExhaustedRetriesError(CommitWriterError):
    """Every summarizer attempt failed. Carries the error of the last attempt."""

    default_exit_code = ExitCode.SUMMARIZER

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Summarizer failed after {attempts} attempt(s): {last_error}",
            getattr(last_error, "details", None),
        )


# Convenience functions for creating common errors
def git_not_found() -> ProcessError:
    """Create a ProcessError for when git is not available."""
    return ProcessError(
        "Git is not installed or not in PATH",
        "Please install git and ensure it's available in your PATH environment variable",
    )


def backend_unreachable(url: str) -> BackendUnavailableError:
    """Create a BackendUnavailableError with a remediation hint."""
    return BackendUnavailableError(
        "ollama does not appear to be running; start it with 'ollama serve'",
        f"Liveness check against {url} could not connect",
    )


def backend_timeout(url: str, timeout: float) -> TransportError:
    """Create a TransportError for backend timeouts."""
    return TransportError(
        f"Backend at {url} timed out after {timeout:g} seconds",
        "Try again or increase the timeout setting in configuration",
    )


@contextlib.contextmanager
def stage_exit_code(exit_code: int):
    """
    Stamp ``exit_code`` on any CommitWriterError leaving the block that has
    not been assigned one already.
    """
    try:
        yield
    except CommitWriterError as e:
        if e.exit_code is None:
            e.exit_code = exit_code
        raise


@contextlib.contextmanager
def handle_commitwriter_exception(exit_on_fail: bool = True):
    """
    Report errors raised inside the block on the diagnostic stream and
    convert them into a typer exit with the matching exit code.
    """
    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except CommitWriterError as e:
        logger.error(f"{Fore.RED}Error:{Style.RESET_ALL} {e.message}")
        if e.details:
            logger.error(f"Details: {e.details}")
        if e.__cause__ is not None:
            logger.debug(f"Caused by: {e.__cause__!r}")
        if not exit_on_fail:
            raise
        raise typer.Exit(e.exit_code if e.exit_code is not None else ExitCode.GENERIC)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        raise typer.Exit(ExitCode.INTERRUPTED)
    except Exception:
        logger.exception("Unexpected error")
        if not exit_on_fail:
            raise
        raise typer.Exit(ExitCode.GENERIC)
