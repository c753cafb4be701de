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

"""Blocking client for an ollama compatible ``/api/generate`` endpoint."""

import httpx
from loguru import logger

from commitwriter.constants import DEFAULT_GENERATE_TIMEOUT
from commitwriter.core.backend.models import GenerationChunk, GenerationRequest
from commitwriter.core.exceptions import (
    BackendStatusError,
    DecodeError,
    TransportError,
    backend_timeout,
)
from commitwriter.core.logging.utils import time_block
from commitwriter.core.utils.sanitize import normalize_model_output


class BackendClient:
    """
    Performs one text generation call per ``generate`` invocation.

    The response body is consumed as newline-delimited JSON and the
    ``response`` fragments are joined in arrival order. The joined text is
    normalized before it is returned.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = DEFAULT_GENERATE_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        # injectable for tests (httpx.MockTransport)
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout, transport=self._transport, follow_redirects=True
        )

    def generate(self, request: GenerationRequest) -> str:
        body = request.to_json()

        logger.debug(
            f"Calling backend url={self.endpoint_url} model={request.model} "
            f"prompt_chars={len(request.prompt)} options={dict(request.options)}"
        )

        with time_block(f"generate[{request.model}]"), self._client() as client:
            try:
                http_request = client.build_request(
                    "POST",
                    self.endpoint_url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
                response = client.send(http_request, stream=True)
            except httpx.TimeoutException as e:
                raise backend_timeout(self.endpoint_url, self.timeout) from e
            except (httpx.RequestError, httpx.InvalidURL) as e:
                raise TransportError(
                    f"Failed to reach backend at {self.endpoint_url}", str(e)
                ) from e

            try:
                return self._consume(response)
            finally:
                self._close(response)

    def _consume(self, response: httpx.Response) -> str:
        try:
            if response.status_code >= 400:
                response.read()
                raise BackendStatusError(response.status_code, response.text)

            fragments = []
            for line in response.iter_lines():
                if not line.strip():
                    continue
                chunk = GenerationChunk.from_line(line)
                fragments.append(chunk.response)
                if chunk.done:
                    logger.debug(f"Backend signalled done after {len(fragments)} chunk(s)")
        except httpx.TimeoutException as e:
            raise backend_timeout(self.endpoint_url, self.timeout) from e
        except httpx.DecodingError as e:
            raise DecodeError(
                f"Could not decode response body from {self.endpoint_url}", str(e)
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"Connection to backend at {self.endpoint_url} failed mid-response",
                str(e),
            ) from e

        return normalize_model_output("".join(fragments))

    @staticmethod
    def _close(response: httpx.Response) -> None:
        try:
            response.close()
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"failed to close response body: {e}")
