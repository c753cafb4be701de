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

import subprocess
from unittest.mock import Mock, patch

import pytest

from commitwriter.core.exceptions import ProcessError
from commitwriter.core.git_interface.diff_source import DiffSource
from commitwriter.core.git_interface.interface import GitInterface
from commitwriter.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)

STAGED = "diff --git a/a.py b/a.py\n+print('staged')\n"
UNSTAGED = "diff --git a/b.py b/b.py\n+print('unstaged')\n"

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_git():
    return Mock(spec=GitInterface)


@pytest.fixture
def diff_source(mock_git):
    return DiffSource(mock_git)


# -----------------------------------------------------------------------------
# DiffSource
# -----------------------------------------------------------------------------


def test_staged_diff_wins(mock_git, diff_source):
    mock_git.run_git_text_out.return_value = STAGED

    assert diff_source.acquire_diff() == STAGED
    mock_git.run_git_text_out.assert_called_once_with(["diff", "--staged"])


def test_falls_back_to_unstaged(mock_git, diff_source):
    mock_git.run_git_text_out.side_effect = ["  \n", UNSTAGED]

    assert diff_source.acquire_diff() == UNSTAGED
    assert [c.args[0] for c in mock_git.run_git_text_out.call_args_list] == [
        ["diff", "--staged"],
        ["diff"],
    ]


def test_both_empty_is_not_an_error(mock_git, diff_source):
    mock_git.run_git_text_out.side_effect = ["", ""]

    assert diff_source.acquire_diff() == ""


def test_staged_failure_propagates(mock_git, diff_source):
    mock_git.run_git_text_out.side_effect = ProcessError(
        "git diff --staged failed", output="fatal: not a git repository"
    )

    with pytest.raises(ProcessError):
        diff_source.acquire_diff()

    mock_git.run_git_text_out.assert_called_once()


def test_unstaged_failure_propagates(mock_git, diff_source):
    mock_git.run_git_text_out.side_effect = [
        "",
        ProcessError("git diff failed", output="boom"),
    ]

    with pytest.raises(ProcessError) as exc_info:
        diff_source.acquire_diff()

    assert exc_info.value.output == "boom"


# -----------------------------------------------------------------------------
# SubprocessGitInterface
# -----------------------------------------------------------------------------


@patch("commitwriter.core.git_interface.SubprocessGitInterface.subprocess.run")
def test_subprocess_returns_output(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(
        ["git", "diff"], 0, stdout=STAGED
    )

    git = SubprocessGitInterface(tmp_path)

    assert git.run_git_text_out(["diff"]) == STAGED
    _, kwargs = mock_run.call_args
    assert kwargs["cwd"] == str(tmp_path)
    assert kwargs["stderr"] == subprocess.STDOUT


@patch("commitwriter.core.git_interface.SubprocessGitInterface.subprocess.run")
def test_subprocess_nonzero_exit_raises_with_combined_output(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(
        ["git", "diff", "--staged"], 128, stdout="fatal: not a git repository\n"
    )

    with pytest.raises(ProcessError) as exc_info:
        SubprocessGitInterface(".").run_git_text_out(["diff", "--staged"])

    assert exc_info.value.returncode == 128
    assert "not a git repository" in exc_info.value.output
    assert "not a git repository" in exc_info.value.details


@patch("commitwriter.core.git_interface.SubprocessGitInterface.subprocess.run")
def test_subprocess_missing_git(mock_run):
    mock_run.side_effect = FileNotFoundError("git")

    with pytest.raises(ProcessError) as exc_info:
        SubprocessGitInterface(".").run_git_text_out(["diff"])

    assert "Git is not installed" in exc_info.value.message
