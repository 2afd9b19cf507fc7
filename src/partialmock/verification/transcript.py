from __future__ import annotations

from typing import TYPE_CHECKING, Any

from partialmock.common.canonical_json import canonical_dumps_bytes, canonical_dumps_str
from partialmock.common.hashing import sha256_prefixed

if TYPE_CHECKING:
    from partialmock.generator.controller import PartialMockController

TRANSCRIPT_VERSION = "partialmock-transcript-0.1"


def transcript_payload(controller: "PartialMockController") -> dict[str, Any]:
    return {
        "version": TRANSCRIPT_VERSION,
        "type_name": controller.type_name,
        "methods": list(controller.methods),
        "calls": [call.to_obj() for call in controller.all_calls()],
    }


def render_transcript(controller: "PartialMockController") -> str:
    """Render the instance-wide call log as canonical JSON."""
    return canonical_dumps_str(transcript_payload(controller))


def transcript_digest(controller: "PartialMockController") -> str:
    return sha256_prefixed(canonical_dumps_bytes(transcript_payload(controller)))
