"""User-facing error records.

Errors here are values handed back to the caller, not exceptions. The caller
decides whether to surface them and keep going or to stop.
"""

from __future__ import annotations

from dataclasses import dataclass

TITLE_PREFIX = "cannot parse command received from client: "
DETAIL_PREFIX = "Error message from JSON parser: "
CLIENT_HINT = "This is a problem with your Tertestrial client."


@dataclass(frozen=True, slots=True)
class DecodeError:
    """A client message that could not be turned into a command.

    `title` is short and carries the offending line verbatim; `detail` carries
    the parser diagnostic and says where the defect lies. Callers may render
    either one on its own.
    """

    title: str
    detail: str

    @classmethod
    def from_client_line(cls, line: str, diagnostic: str) -> DecodeError:
        return cls(
            title=f"{TITLE_PREFIX}{line}",
            detail=f"{DETAIL_PREFIX}{diagnostic}\n{CLIENT_HINT}",
        )

    def render(self) -> str:
        return f"{self.title}\n\n{self.detail}"
