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
from pathlib import Path

from loguru import logger

from commitwriter.core.exceptions import ProcessError, git_not_found

from .interface import GitInterface


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path | None = None) -> None:
        # Ensure repo_path is a Path object for consistency
        if repo_path is None:
            self.repo_path = Path(".")
        elif isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path)

    def run_git_text_out(
        self,
        args: list[str],
        cwd: str | Path | None = None,
    ) -> str:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git text command: {' '.join(cmd)} cwd={effective_cwd}")

        try:
            result = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                errors="replace",
                stdout=subprocess.PIPE,
                # combined output, stderr is part of the diagnostic payload
                stderr=subprocess.STDOUT,
                check=False,
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise git_not_found() from e
        except OSError as e:
            raise ProcessError(f"Failed to run {' '.join(cmd)}", str(e)) from e

        output = result.stdout or ""
        logger.debug(
            f"git output (text): {output[:2000]}"
            + ("...(truncated)" if len(output) > 2000 else "")
        )
        logger.debug(f"git returncode: {result.returncode}")

        if result.returncode != 0:
            logger.warning(
                f"Git text command failed: {' '.join(cmd)} code={result.returncode}"
            )
            raise ProcessError(
                f"{' '.join(cmd)} failed with exit code {result.returncode}",
                f"output={output.strip()}",
                returncode=result.returncode,
                output=output,
            )

        return output
