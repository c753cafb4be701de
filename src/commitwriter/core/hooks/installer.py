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

import shlex
import stat
from pathlib import Path

from loguru import logger

from commitwriter.constants import HOOK_NAME, PROG_NAME
from commitwriter.core.exceptions import FileSystemError
from commitwriter.core.git_interface.interface import GitInterface

HOOK_TEMPLATE = """#!/bin/sh
# Git hook: {hook_name}
# $1 = path to commit message file
# installed by {prog}

{command} --hook "$1" --tone {tone} --force
"""


def render_hook(tone: str, command: str = PROG_NAME) -> str:
    return HOOK_TEMPLATE.format(
        hook_name=HOOK_NAME,
        prog=PROG_NAME,
        command=command,
        tone=shlex.quote(tone),
    )


def resolve_hooks_dir(git_interface: GitInterface) -> Path:
    """Hooks directory of the repository, honouring ``core.hooksPath``."""
    hooks_dir = Path(
        git_interface.run_git_text_out(["rev-parse", "--git-path", "hooks"]).strip()
    )
    if not hooks_dir.is_absolute():
        hooks_dir = Path(git_interface.repo_path) / hooks_dir
    return hooks_dir


def install_hook(git_interface: GitInterface, tone: str, force: bool = False) -> Path:
    """
    Write a ``prepare-commit-msg`` hook that runs commit-writer against the
    message file git passes in, and make it executable.

    Raises:
        FileSystemError: a hook already exists and ``force`` is not set, or
            the hook could not be written.
    """
    hook_path = resolve_hooks_dir(git_interface) / HOOK_NAME

    if hook_path.exists() and not force:
        raise FileSystemError(
            f"A {HOOK_NAME} hook already exists: {hook_path}",
            "Re-run with --force to replace it",
        )

    try:
        hook_path.parent.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(render_hook(tone), encoding="utf-8")
        mode = hook_path.stat().st_mode
        hook_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        raise FileSystemError(f"Failed to install hook at {hook_path}", str(e)) from e

    logger.info(f"Installed {HOOK_NAME} hook at {hook_path}")
    return hook_path
