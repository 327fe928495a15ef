from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from js2mqtt.errors import PayloadOverflowError
from js2mqtt.events import DecodedEvent, EventKind

PAYLOAD_CAPACITY = 256

_FIELDS = ("time", "value", "type", "number")
_RANGES = {
    "time": (0, 2**32 - 1),
    "value": (-(2**15), 2**15 - 1),
    "number": (0, 255),
}


@dataclass(frozen=True, slots=True)
class Payload:
    """Serialized event bytes, never longer than ``PAYLOAD_CAPACITY``."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) > PAYLOAD_CAPACITY:
            raise PayloadOverflowError(
                f"payload of {len(self.data)} bytes exceeds {PAYLOAD_CAPACITY}"
            )

    def __len__(self) -> int:
        return len(self.data)

    def text(self) -> str:
        return self.data.decode("utf-8")


def _render(event: DecodedEvent) -> bytes:
    document = {
        "time": event.timestamp_ms,
        "value": event.value,
        "type": event.kind.value,
        "number": event.index,
    }
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def encode(event: DecodedEvent) -> Payload:
    return Payload(_render(event))


def decode_payload(data: bytes | str) -> DecodedEvent:
    """Parse a wire payload back into a :class:`DecodedEvent`.

    Raises ``ValueError`` when the document is not a well-formed event.
    """
    document: Any = json.loads(data)
    if not isinstance(document, dict) or tuple(document) != _FIELDS:
        raise ValueError(f"expected keys {_FIELDS}, got {document!r}")

    for key, (low, high) in _RANGES.items():
        value = document[key]
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer, got {value!r}")
        if not low <= value <= high:
            raise ValueError(f"{key}={value} outside [{low}, {high}]")

    try:
        kind = EventKind(document["type"])
    except ValueError:
        raise ValueError(f"unknown event type {document['type']!r}") from None

    return DecodedEvent(
        timestamp_ms=document["time"],
        value=document["value"],
        kind=kind,
        index=document["number"],
    )


# Longest possible rendering: widest value of every field.
MAX_PAYLOAD_LENGTH = len(
    _render(
        DecodedEvent(
            timestamp_ms=_RANGES["time"][1],
            value=_RANGES["value"][0],
            kind=EventKind.BUTTON,
            index=_RANGES["number"][1],
        )
    )
)
if MAX_PAYLOAD_LENGTH > PAYLOAD_CAPACITY:
    raise PayloadOverflowError(
        f"worst-case payload of {MAX_PAYLOAD_LENGTH} bytes exceeds {PAYLOAD_CAPACITY}"
    )
