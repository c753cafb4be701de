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

from pathlib import Path

import typer
from loguru import logger

from commitwriter.constants import (
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LEGACY_OLLAMA_URL_ENV,
    LOCAL_CONFIG_FILE,
)
from commitwriter.context import GlobalConfig, GlobalContext
from commitwriter.core.config.config_loader import ConfigLoader
from commitwriter.core.exceptions import handle_commitwriter_exception
from commitwriter.core.hooks.installer import install_hook
from commitwriter.core.logging.logging import setup_logger, status
from commitwriter.core.sink import persist_message
from commitwriter.pipelines.commit_init import create_commit_message_pipeline
from commitwriter.runtimeutil import get_log_dir_callback, version_callback


def setup_config_args(**kwargs):
    config_args = {}

    for key, item in kwargs.items():
        if item is not None:
            config_args[key] = item

    return config_args


def load_global_config(custom_config: str | None, **input_args) -> GlobalConfig:
    config, used_configs, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        setup_config_args(**input_args),
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        Path(custom_config) if custom_config else None,
        fallback_env={"ollama_url": LEGACY_OLLAMA_URL_ENV},
    )
    logger.debug(f"Used {used_configs} to build config (defaults used: {used_defaults}).")
    return config


def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for commit-writer live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the git repository to operate on.",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    ollama_url: str | None = typer.Option(
        None, "--ollama", help="Ollama generate URL (defaults to $OLLAMA_URL)."
    ),
    summarizer_model: str | None = typer.Option(
        None, "--summ-model", help="Summarizer model."
    ),
    style_model: str | None = typer.Option(
        None, "--style-model", help="Styling model."
    ),
    tone: str | None = typer.Option(
        None, "--tone", help="Tone for the stylistic rewrite."
    ),
    hook_file: str | None = typer.Option(
        None, "--hook", help="Path of the git commit message file to write into."
    ),
    force: bool | None = typer.Option(
        None, "--force", help="Overwrite the existing commit message in the hook file."
    ),
    strip_labels: bool | None = typer.Option(
        None, "--no-labels", help="Remove Title:/Body: labels from the output."
    ),
    save_summary: str | None = typer.Option(
        None,
        "--save-summary",
        help="Save the factual summary to a file (for review or reuse).",
    ),
    load_summary: str | None = typer.Option(
        None,
        "--load-summary",
        help="Load the summary from a file and skip the summarizer model.",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Timeout in seconds for each generation call."
    ),
    debug: bool | None = typer.Option(
        None, "--debug", help="Enable debug logging."
    ),
    install: bool = typer.Option(
        False,
        "--install-hook",
        help="Install a prepare-commit-msg hook using --tone, then exit.",
    ),
) -> None:
    """
    Turn the current git diff into a styled commit message.

    A first model writes a factual summary of the diff, a second one
    rewrites it in the requested tone. The result is printed on stdout and,
    with --hook, written into the commit message file.

    Examples:
        # print a message for the staged (or unstaged) changes
        commit-writer --tone "increasingly insane Victorian author"

        # from a prepare-commit-msg hook
        commit-writer --hook "$1" --force
    """
    # initial setup of logger, will be updated once the config is known
    setup_logger("generate", debug=debug or False)

    with handle_commitwriter_exception(exit_on_fail=True):
        config = load_global_config(
            custom_config,
            ollama_url=ollama_url,
            summarizer_model=summarizer_model,
            style_model=style_model,
            tone=tone,
            hook_file=hook_file,
            force=force,
            strip_labels=strip_labels,
            save_summary=save_summary,
            load_summary=load_summary,
            timeout=timeout,
            debug=debug,
        )

        if config.debug:
            setup_logger("generate", debug=True)
            logger.debug(f"Resolved config: {config}")

        global_context = GlobalContext.from_global_config(config, Path(repo_path))

        if install:
            install_hook(global_context.git_interface, config.tone, force=config.force)
            raise typer.Exit(0)

        pipeline = create_commit_message_pipeline(global_context)
        result = pipeline.run()

        typer.echo(result.message)

        persist_message(config.hook_file, result.message, config.force)
        status("Done")
