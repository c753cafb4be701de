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

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from pydantic import Field

from commitwriter.constants import (
    DEFAULT_GENERATE_TIMEOUT,
    DEFAULT_OLLAMA_URL,
    DEFAULT_STYLE_MODEL,
    DEFAULT_SUMMARIZER_MODEL,
    DEFAULT_TONE,
    STYLE_TEMPERATURE,
    SUMMARIZER_TEMPERATURE,
    SUMMARY_ATTEMPTS,
)
from commitwriter.core.backend import BackendClient
from commitwriter.core.git_interface.diff_source import DiffSource
from commitwriter.core.git_interface.interface import GitInterface
from commitwriter.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)


@dataclass
class GlobalConfig:
    ollama_url: str = DEFAULT_OLLAMA_URL
    summarizer_model: str = DEFAULT_SUMMARIZER_MODEL
    style_model: str = DEFAULT_STYLE_MODEL
    tone: str = DEFAULT_TONE
    hook_file: str | None = None
    force: bool = False
    strip_labels: bool = False
    save_summary: str | None = None
    load_summary: str | None = None
    timeout: Annotated[float, Field(gt=0)] = DEFAULT_GENERATE_TIMEOUT
    summary_attempts: Annotated[int, Field(ge=1)] = SUMMARY_ATTEMPTS
    summarizer_temperature: Annotated[float, Field(ge=0.0, le=2.0)] = (
        SUMMARIZER_TEMPERATURE
    )
    style_temperature: Annotated[float, Field(ge=0.0, le=2.0)] = STYLE_TEMPERATURE
    debug: bool = False


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    git_interface: GitInterface
    diff_source: DiffSource
    client: BackendClient
    config: GlobalConfig

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        git_interface = SubprocessGitInterface(repo_path)
        diff_source = DiffSource(git_interface)
        client = BackendClient(config.ollama_url, timeout=config.timeout)

        return GlobalContext(repo_path, git_interface, diff_source, client, config)
