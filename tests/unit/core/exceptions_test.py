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

import pytest
import typer

from commitwriter.constants import ExitCode
from commitwriter.core.exceptions import (
    BackendError,
    BackendStatusError,
    BackendUnavailableError,
    CommitWriterError,
    ConfigurationError,
    DecodeError,
    ExhaustedRetriesError,
    FileSystemError,
    HookFileError,
    ProcessError,
    RequestSerializationError,
    SummaryLoadError,
    TransportError,
    backend_timeout,
    backend_unreachable,
    git_not_found,
    handle_commitwriter_exception,
    stage_exit_code,
)


def test_exception_inheritance():
    assert issubclass(BackendError, CommitWriterError)
    assert issubclass(TransportError, BackendError)
    assert issubclass(BackendUnavailableError, TransportError)
    assert issubclass(BackendStatusError, BackendError)
    assert issubclass(DecodeError, BackendError)
    assert issubclass(RequestSerializationError, BackendError)
    assert issubclass(ProcessError, CommitWriterError)
    assert issubclass(SummaryLoadError, FileSystemError)
    assert issubclass(HookFileError, FileSystemError)
    assert issubclass(ExhaustedRetriesError, CommitWriterError)
    assert issubclass(ConfigurationError, CommitWriterError)


def test_retriable_flags():
    assert TransportError("x").retriable is True
    assert RequestSerializationError("x").retriable is False


def test_git_not_found():
    exc = git_not_found()
    assert isinstance(exc, ProcessError)
    assert "Git is not installed" in exc.message
    assert "Please install git" in exc.details


def test_backend_unreachable_has_hint():
    exc = backend_unreachable("http://localhost:11434/api/tags")
    assert isinstance(exc, BackendUnavailableError)
    assert "ollama serve" in exc.message
    assert exc.exit_code == ExitCode.PROBE


def test_backend_timeout():
    exc = backend_timeout("http://localhost:11434/api/generate", 300)
    assert isinstance(exc, TransportError)
    assert "timed out after 300 seconds" in exc.message


def test_hook_file_error_exit_codes():
    assert HookFileError("open", "f").exit_code == ExitCode.HOOK_OPEN
    assert HookFileError("write", "f").exit_code == ExitCode.HOOK_WRITE
    assert HookFileError("replace", "f").exit_code == ExitCode.HOOK_REPLACE


def test_stage_exit_code_stamps_unassigned_errors():
    with pytest.raises(TransportError) as exc_info:
        with stage_exit_code(ExitCode.STYLING):
            raise TransportError("down")
    assert exc_info.value.exit_code == ExitCode.STYLING


def test_stage_exit_code_keeps_existing_code():
    with pytest.raises(SummaryLoadError) as exc_info:
        with stage_exit_code(ExitCode.STYLING):
            raise SummaryLoadError("could not load summary")
    assert exc_info.value.exit_code == ExitCode.SUMMARY_LOAD


def test_handler_converts_to_exit_code():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_commitwriter_exception():
            raise HookFileError("write", "COMMIT_EDITMSG")
    assert exc_info.value.exit_code == ExitCode.HOOK_WRITE


def test_handler_unexpected_error_exits_generic():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_commitwriter_exception():
            raise RuntimeError("boom")
    assert exc_info.value.exit_code == ExitCode.GENERIC


def test_handler_can_reraise():
    with pytest.raises(ConfigurationError):
        with handle_commitwriter_exception(exit_on_fail=False):
            raise ConfigurationError("bad")
