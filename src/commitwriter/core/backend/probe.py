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

import httpx
from loguru import logger

from commitwriter.constants import LIVENESS_PATH, PROBE_TIMEOUT
from commitwriter.core.exceptions import (
    BackendStatusError,
    ConfigurationError,
    backend_unreachable,
)


def liveness_url(base_url: str) -> str:
    """Replace the path of ``base_url`` with the model listing path."""
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"invalid ollama URL: {base_url}", str(e)) from e

    if not url.scheme or not url.host:
        raise ConfigurationError(
            f"invalid ollama URL: {base_url}",
            "Expected an absolute URL such as http://localhost:11434/api/generate",
        )

    return str(url.copy_with(path=LIVENESS_PATH))


def probe_backend(
    base_url: str,
    timeout: float = PROBE_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> None:
    """
    Cheap liveness check run once before any generation call.

    Raises:
        BackendUnavailableError: nothing is listening at the URL
        BackendStatusError: the backend answered with status >= 400
    """
    url = liveness_url(base_url)
    logger.debug(f"Probing backend at {url}")

    with httpx.Client(timeout=timeout, transport=transport) as client:
        try:
            response = client.get(url)
        except httpx.RequestError as e:
            logger.debug(f"Liveness probe failed: {e!r}")
            raise backend_unreachable(url) from e

    if response.status_code >= 400:
        raise BackendStatusError(
            response.status_code,
            response.text.strip(),
            f"ollama tags endpoint returned status {response.status_code}: "
            f"{response.text.strip()}",
        )

    logger.debug(f"Backend answered liveness probe with {response.status_code}")
