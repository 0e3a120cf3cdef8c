"""Data contracts shared by the image pipeline and the orchestration engine.

Architectural role:
    Defines the per-invocation records passed between `fluxtool.image.client`,
    `fluxtool.image.extractor`, `fluxtool.image.persistence`, and
    `fluxtool.core.engine`. None of them outlive a single tool call.

Control-flow interaction:
    - `UpstreamResponse` is produced by the client and inspected by the engine.
    - `ImagePayload` / `NotFound` are the two extraction outcomes.
    - `PersistenceOutcome` reports where bytes actually landed.
    - `ToolResult` is the success/failure variant returned to API adapters.

Determinism:
    The data classes are purely structural and state-free.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class UpstreamResponse:
    """Transport-level view of one provider response.

    Attributes:
        status_code: HTTP status code.
        reason: HTTP reason phrase (may be empty).
        ok: Whether the status code indicates success.
        body: Decoded JSON body, or raw text when the body was not JSON.
    """

    status_code: int
    reason: str
    ok: bool
    body: Any = None


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image string located in a provider response.

    Attributes:
        data: Encoded image string exactly as found.
        source: Dotted field path it was read from (for example `result.image`).
    """

    data: str
    source: str


@dataclass(frozen=True)
class NotFound:
    """Extraction outcome when no candidate field holds a usable string."""

    tried: tuple[str, ...] = ()


@dataclass(frozen=True)
class PersistenceOutcome:
    """Where the image was written.

    Attributes:
        path: Absolute path actually written (primary or fallback).
        primary_path: Path originally requested by the caller.
        used_fallback: True iff the primary attempt failed.
        remediation: Copy command from `path` to `primary_path`; only set when
            `used_fallback` is true.
    """

    path: str
    primary_path: str
    used_fallback: bool = False
    remediation: str | None = None


class FailureKind(str, Enum):
    """Failure categories surfaced by the orchestration engine."""

    TRANSPORT = "transport"
    PAYLOAD_NOT_FOUND = "payload_not_found"
    PAYLOAD_INVALID = "payload_invalid"
    PERSISTENCE = "persistence"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ToolResult:
    """Single textual result of one tool invocation.

    Attributes:
        ok: True for the success variant (including fallback saves).
        text: Human-readable message returned to the host transport.
        kind: Failure category; `None` on success.
        outcome: Persistence details on success.
        details: Optional structured context for logging/tests (status code,
            upstream body, ...). Never required by adapters.
    """

    ok: bool
    text: str
    kind: FailureKind | None = None
    outcome: PersistenceOutcome | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, text: str, outcome: PersistenceOutcome) -> "ToolResult":
        return cls(ok=True, text=text, outcome=outcome)

    @classmethod
    def failure(cls, kind: FailureKind, text: str, **details: Any) -> "ToolResult":
        return cls(ok=False, text=text, kind=kind, details=dict(details))
