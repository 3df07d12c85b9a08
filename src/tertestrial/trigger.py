"""Decoding of client trigger messages.

Clients send one JSON object per line. Each line becomes either a `Trigger`
or a `DecodeError`; decoding is pure and never raises for text input.

Wire format:

    {"filename": "src/foo.py", "line": "12"}

Both keys are optional, both must be JSON strings when present and appear at
most once, and any other keys are ignored. Parser diagnostics are
pydantic-core's own wording.
"""

from __future__ import annotations

import json
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import from_json

from tertestrial.errors import DecodeError


class Trigger(BaseModel):
    """A "run tests" command received from the client.

    Fields are hints for the dispatcher. `line` stays text; it is never parsed
    as a number here.
    """

    filename: str | None = None
    line: str | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
    )

    def to_json_line(self) -> str:
        """Encode as a compact JSON line, omitting absent fields."""

        return self.model_dump_json(exclude_none=True) + "\n"


DecodeResult: TypeAlias = Trigger | DecodeError

_FIELDS: tuple[str, ...] = ("filename", "line")


def _diagnostic(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


def _duplicate_fields(line: str) -> list[str]:
    """Recognized keys that appear more than once in the top-level object."""

    # Nested objects are closed first, so the last call sees the top level.
    calls: list[list[str]] = []

    def _pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        calls.append([key for key, _ in pairs])
        return dict(pairs)

    json.loads(line, object_pairs_hook=_pairs)
    keys = calls[-1]
    return [field for field in _FIELDS if keys.count(field) > 1]


def decode(line: str) -> DecodeResult:
    """Decode a single client line into a `Trigger` or a `DecodeError`."""

    try:
        # NaN and Infinity are not JSON.
        data = from_json(line, allow_inf_nan=False)
    except ValueError as e:
        return DecodeError.from_client_line(line, str(e))

    if isinstance(data, dict):
        duplicates = _duplicate_fields(line)
        if duplicates:
            return DecodeError.from_client_line(line, f"duplicate field `{duplicates[0]}`")

    try:
        return Trigger.model_validate(data)
    except ValidationError as e:
        return DecodeError.from_client_line(line, _diagnostic(e))


def encode(trigger: Trigger) -> str:
    """Client-side counterpart of `decode`."""

    return trigger.to_json_line()
