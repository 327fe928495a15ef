######################################################################
#
#  events.py - joystick event records and their decoding
#
#  Layout follows struct js_event from linux/joystick.h:
#    __u32 time; __s16 value; __u8 type; __u8 number;
#
######################################################################

from __future__ import annotations

import collections
import enum
import struct
from dataclasses import dataclass

JS_EVENT_BUTTON = 0x01
JS_EVENT_AXIS = 0x02
JS_EVENT_INIT = 0x80  # initial state burst sent when the device is opened

RAW_EVENT_FORMAT = "IhBB"
RAW_EVENT_SIZE = struct.calcsize(RAW_EVENT_FORMAT)

RawEvent = collections.namedtuple("RawEvent", ["time", "value", "type", "number"])


def unpack(buff: bytes) -> RawEvent:
    return RawEvent._make(struct.unpack(RAW_EVENT_FORMAT, buff))


class EventKind(str, enum.Enum):
    BUTTON = "button"
    AXIS = "axis"


@dataclass(frozen=True, slots=True)
class DecodedEvent:
    timestamp_ms: int
    value: int
    kind: EventKind
    index: int


def decode(raw: RawEvent, ignore_init: bool = False) -> DecodedEvent | None:
    """Classify a raw record as a button or axis event.

    Records carrying neither the button nor the axis bit are dropped, which
    includes a bare ``JS_EVENT_INIT``. With ``ignore_init`` the init-flagged
    state burst is dropped as well. The button bit wins if both bits are set.
    Numeric fields are copied verbatim.
    """
    if (raw.type & (JS_EVENT_BUTTON | JS_EVENT_AXIS)) == 0:
        return None
    if ignore_init and raw.type & JS_EVENT_INIT:
        return None

    kind = EventKind.BUTTON if raw.type & JS_EVENT_BUTTON else EventKind.AXIS
    return DecodedEvent(
        timestamp_ms=raw.time,
        value=raw.value,
        kind=kind,
        index=raw.number,
    )
