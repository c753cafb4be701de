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

from loguru import logger

from commitwriter.constants import HOOK_DELIMITER
from commitwriter.core.exceptions import HookFileError
from commitwriter.core.logging.logging import status


def persist_message(path: str | Path | None, message: str, overwrite: bool) -> None:
    """
    Write the final commit message to the file git hands to the
    ``prepare-commit-msg`` hook.

    A missing file, or ``overwrite``, replaces the content with the message.
    Otherwise the message is appended after a delimiter comment and whatever
    the file already held is kept.

    Raises:
        HookFileError: with ``operation`` set to ``open``, ``write`` or
            ``replace`` depending on which step failed.
    """
    if not path:
        return

    target = Path(path)
    exists = target.exists()

    if exists and not overwrite:
        status(f"Appending suggested message to {target}")
        _append(target, message)
    else:
        if overwrite:
            status(f"Writing suggested message to {target} (overwrite)")
        else:
            status(f"Writing suggested message to {target}")
        _replace(target, message)

    status(f"Hook file updated: {target}")


def _append(target: Path, message: str) -> None:
    try:
        handle = open(target, "a", encoding="utf-8")
    except OSError as e:
        raise HookFileError("open", str(target), str(e)) from e

    try:
        handle.write(f"\n{HOOK_DELIMITER}\n{message}\n")
        # close flushes, a failure here means the write did not land
        handle.close()
    except OSError as e:
        raise HookFileError("write", str(target), str(e)) from e
    finally:
        if not handle.closed:
            try:
                handle.close()
            except OSError as e:
                logger.warning(f"failed to close hook file: {e}")


def _replace(target: Path, message: str) -> None:
    try:
        target.write_text(f"{message}\n", encoding="utf-8")
    except OSError as e:
        raise HookFileError("replace", str(target), str(e)) from e
