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

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from commitwriter.core.exceptions import DecodeError, RequestSerializationError


@dataclass(frozen=True)
class GenerationRequest:
    """
    One text generation call, in the shape the ollama ``/api/generate``
    endpoint expects.
    """

    model: str
    prompt: str
    stream: bool = False
    options: Mapping[str, float | int | bool] = field(default_factory=dict)

    def __post_init__(self):
        # freeze the options so the request is immutable once built
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def to_payload(self) -> dict:
        payload = {"model": self.model, "prompt": self.prompt, "stream": self.stream}
        if self.options:
            payload["options"] = dict(self.options)
        return payload

    def to_json(self) -> bytes:
        try:
            return json.dumps(self.to_payload(), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RequestSerializationError(
                "Failed to serialize generation request", str(e)
            ) from e


@dataclass(frozen=True)
class GenerationChunk:
    """A single newline-delimited JSON object of a generate response."""

    response: str
    done: bool
    model: str | None = None
    created_at: str | None = None

    @classmethod
    def from_line(cls, line: str) -> "GenerationChunk":
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise DecodeError(
                "Failed to decode backend response", f"{e}; line={line[:200]!r}"
            ) from e

        if not isinstance(data, dict):
            raise DecodeError(
                "Failed to decode backend response",
                f"expected a JSON object, got {type(data).__name__}",
            )

        fragment = data.get("response") or ""
        if not isinstance(fragment, str):
            raise DecodeError(
                "Failed to decode backend response",
                f"'response' must be a string, got {type(fragment).__name__}",
            )

        return cls(
            response=fragment,
            done=bool(data.get("done", False)),
            model=data.get("model"),
            created_at=data.get("created_at"),
        )
