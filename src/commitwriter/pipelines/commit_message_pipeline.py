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

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from loguru import logger

from commitwriter.constants import ExitCode
from commitwriter.context import GlobalConfig
from commitwriter.core.backend import BackendClient, GenerationRequest
from commitwriter.core.exceptions import (
    BackendError,
    ExhaustedRetriesError,
    SummaryLoadError,
    stage_exit_code,
)
from commitwriter.core.git_interface.diff_source import DiffSource
from commitwriter.core.logging.logging import status
from commitwriter.core.utils.sanitize import strip_labels
from commitwriter.summarization.prompts import (
    build_style_prompt,
    build_summary_prompt,
)


class PipelineState(Enum):
    LOADING_SUMMARY = "loading_summary"
    SUMMARIZING = "summarizing"
    STYLING = "styling"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineResult:
    message: str
    summary: str | None
    summary_loaded: bool = False


class CommitMessagePipeline:
    """
    Drives the two generation stages: a deterministic factual summary of the
    diff, then a high temperature rewrite of that summary in the requested
    tone.

    A saved summary can be loaded instead of running the first stage, in
    which case neither the backend probe nor git are touched before styling.
    """

    def __init__(
        self,
        config: GlobalConfig,
        client: BackendClient,
        prober: Callable[[str], None],
        diff_source: DiffSource,
    ):
        self.config = config
        self.client = client
        self.prober = prober
        self.diff_source = diff_source
        self.state: PipelineState | None = None

    def run(self) -> PipelineResult:
        try:
            if self.config.load_summary:
                self.state = PipelineState.LOADING_SUMMARY
                summary = self._load_summary(self.config.load_summary)
            else:
                self.state = PipelineState.SUMMARIZING
                summary = self._summarize()
                if self.config.save_summary:
                    self._save_summary(self.config.save_summary, summary)

            self.state = PipelineState.STYLING
            message = self._style(summary)
        except BaseException:
            self.state = PipelineState.FAILED
            raise

        self.state = PipelineState.DONE
        return PipelineResult(
            message=message,
            summary=summary,
            summary_loaded=bool(self.config.load_summary),
        )

    def _load_summary(self, path: str) -> str:
        status(f"Loading summary from {path}")
        try:
            summary = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SummaryLoadError(f"could not load summary from {path}", str(e)) from e

        status(f"Summary loaded ({len(summary.encode('utf-8'))} bytes)")
        return summary

    def _summarize(self) -> str:
        with stage_exit_code(ExitCode.PROBE):
            status(f"Checking Ollama availability at {self.config.ollama_url}")
            self.prober(self.config.ollama_url)
            status("Ollama reachable")

        with stage_exit_code(ExitCode.DIFF):
            status("Gathering git diff (staged or unstaged)")
            diff = self.diff_source.acquire_diff()
            status(f"Diff collected ({len(diff.encode('utf-8'))} bytes)")

        request = GenerationRequest(
            model=self.config.summarizer_model,
            prompt=build_summary_prompt(diff),
            stream=False,
            options={"temperature": self.config.summarizer_temperature},
        )

        status(f"Calling summarizer model '{self.config.summarizer_model}'")
        with stage_exit_code(ExitCode.SUMMARIZER):
            return self._generate_with_retries(request, self.config.summary_attempts)

    def _generate_with_retries(self, request: GenerationRequest, attempts: int) -> str:
        # any successful attempt is accepted, the output shape is not validated
        last_error: BackendError | None = None
        for attempt in range(1, attempts + 1):
            try:
                summary = self.client.generate(request)
            except BackendError as e:
                if not e.retriable:
                    raise
                last_error = e
                logger.warning(
                    f"summarizer call error (attempt {attempt}/{attempts}): {e}"
                )
                continue

            status(f"Summary received (attempt {attempt})")
            return summary

        raise ExhaustedRetriesError(attempts, last_error) from last_error

    def _save_summary(self, path: str, summary: str) -> None:
        status(f"Saving summary to {path}")
        try:
            Path(path).write_text(summary, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Warning: failed to save summary: {e}")
            return
        status("Summary saved successfully")

    def _style(self, summary: str) -> str:
        request = GenerationRequest(
            model=self.config.style_model,
            prompt=build_style_prompt(self.config.tone, summary),
            stream=False,
            options={"temperature": self.config.style_temperature},
        )

        status(
            f"Calling style model '{self.config.style_model}' with tone: {self.config.tone}"
        )
        with stage_exit_code(ExitCode.STYLING):
            message = self.client.generate(request)
        status("Final message generated")

        message = message.strip()
        if self.config.strip_labels:
            message = strip_labels(message)
        return message
