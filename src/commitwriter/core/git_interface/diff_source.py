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

from loguru import logger

from .interface import GitInterface


class DiffSource:
    """
    Produces the unified diff the summarizer works from.

    Staged changes win. When nothing is staged the unstaged working tree diff
    is used instead. Both being empty is not an error.
    """

    STAGED_ARGS = ["diff", "--staged"]
    UNSTAGED_ARGS = ["diff"]

    def __init__(self, git_interface: GitInterface):
        self.git_interface = git_interface

    def acquire_diff(self) -> str:
        staged = self.git_interface.run_git_text_out(self.STAGED_ARGS)
        if staged.strip():
            logger.debug(f"Using staged diff ({len(staged)} bytes)")
            return staged

        logger.debug("Staged diff is empty, falling back to unstaged changes")
        unstaged = self.git_interface.run_git_text_out(self.UNSTAGED_ARGS)
        if not unstaged.strip():
            logger.warning("No staged or unstaged changes found, diff is empty")
        return unstaged
