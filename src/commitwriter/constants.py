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

from enum import IntEnum
from pathlib import Path

from platformdirs import user_config_dir, user_log_path

APP_NAME = "commitwriter"
PROG_NAME = "commit-writer"
ENV_APP_PREFIX = "COMMIT_WRITER_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "commitwriter.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# backend defaults (ollama compatible)
DEFAULT_OLLAMA_URL = "http://localhost:11434/api/generate"
LEGACY_OLLAMA_URL_ENV = "OLLAMA_URL"
LIVENESS_PATH = "/api/tags"
DEFAULT_GENERATE_TIMEOUT = 300.0
PROBE_TIMEOUT = 3.0

DEFAULT_SUMMARIZER_MODEL = "gemma3:4B"
DEFAULT_STYLE_MODEL = "mistral:7b"
DEFAULT_TONE = "chaotic, wild, funny"

SUMMARY_ATTEMPTS = 2
SUMMARIZER_TEMPERATURE = 0.0
STYLE_TEMPERATURE = 0.9

HOOK_DELIMITER = "# Suggested commit message (auto-generated):"
HOOK_NAME = "prepare-commit-msg"


class ExitCode(IntEnum):
    """Process exit codes, one per failing stage so hook scripts can branch on them."""

    PROBE = 1
    DIFF = 2
    SUMMARY_LOAD = 2
    SUMMARIZER = 3
    STYLING = 4
    HOOK_OPEN = 5
    HOOK_WRITE = 6
    HOOK_REPLACE = 7
    GENERIC = 1
    INTERRUPTED = 130
