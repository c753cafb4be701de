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
import pytest

from commitwriter.core.backend import liveness_url, probe_backend
from commitwriter.core.exceptions import (
    BackendStatusError,
    BackendUnavailableError,
    ConfigurationError,
)

# -----------------------------------------------------------------------------
# liveness_url
# -----------------------------------------------------------------------------


def test_liveness_url_replaces_path():
    assert (
        liveness_url("http://localhost:11434/api/generate")
        == "http://localhost:11434/api/tags"
    )


def test_liveness_url_without_path():
    assert liveness_url("http://10.0.0.2:8080") == "http://10.0.0.2:8080/api/tags"


def test_liveness_url_rejects_relative_url():
    with pytest.raises(ConfigurationError):
        liveness_url("localhost-without-scheme")


# -----------------------------------------------------------------------------
# probe_backend
# -----------------------------------------------------------------------------


def test_probe_success_hits_tags_endpoint():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"models": []})

    probe_backend(
        "http://localhost:11434/api/generate", transport=httpx.MockTransport(handler)
    )

    assert seen == [("GET", "/api/tags")]


def test_probe_accepts_redirect_status():
    def handler(request):
        return httpx.Response(302, headers={"Location": "/elsewhere"})

    probe_backend("http://localhost:11434", transport=httpx.MockTransport(handler))


def test_probe_connection_failure_is_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUnavailableError) as exc_info:
        probe_backend("http://localhost:11434", transport=httpx.MockTransport(handler))

    assert "ollama serve" in exc_info.value.message


def test_probe_undecodable_body_is_unreachable():
    def handler(request):
        return httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, content=b"notgzip"
        )

    with pytest.raises(BackendUnavailableError):
        probe_backend("http://localhost:11434", transport=httpx.MockTransport(handler))


def test_probe_status_error_carries_status_and_body():
    def handler(request):
        return httpx.Response(503, text="  warming up \n")

    with pytest.raises(BackendStatusError) as exc_info:
        probe_backend("http://localhost:11434", transport=httpx.MockTransport(handler))

    assert exc_info.value.status_code == 503
    assert exc_info.value.body == "warming up"
    assert "503" in exc_info.value.message
