from __future__ import annotations

from typing import BinaryIO

from js2mqtt.errors import DeviceOpenError, DeviceReadError
from js2mqtt.events import RAW_EVENT_SIZE, RawEvent, unpack
from js2mqtt.logging import get_logger

logger = get_logger(__name__)


class JoystickReader:
    """Reads whole ``js_event`` records from an open device handle.

    There is no resynchronisation: anything other than a full record is a
    ``DeviceReadError``.
    """

    def __init__(self, file: BinaryIO, path: str = "<device>") -> None:
        self._file = file
        self.path = path

    @property
    def ready(self) -> bool:
        return not self._file.closed

    def read_record(self) -> RawEvent:
        try:
            buff = self._file.read(RAW_EVENT_SIZE)
        except OSError as exc:
            raise DeviceReadError(
                f"Cannot read joystick events from {self.path}: {exc.strerror or exc}"
            ) from exc

        if not buff:
            raise DeviceReadError(f"Cannot read joystick events from {self.path}: device closed")
        if len(buff) != RAW_EVENT_SIZE:
            raise DeviceReadError(
                f"Cannot read joystick events from {self.path}: "
                f"short read of {len(buff)} bytes, expected {RAW_EVENT_SIZE}"
            )
        return unpack(buff)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "JoystickReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_device(path: str) -> JoystickReader:
    """Open ``path`` read-only, unbuffered so each read maps to one syscall."""
    try:
        file = open(path, "rb", buffering=0)
    except OSError as exc:
        raise DeviceOpenError(
            f"Cannot open joystick device {path}: {exc.strerror or exc}"
        ) from exc
    logger.debug("Opened joystick device %s", path)
    return JoystickReader(file, path)
