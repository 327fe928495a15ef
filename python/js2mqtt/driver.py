from __future__ import annotations

import enum
from typing import Callable

from js2mqtt.config import BridgeConfig
from js2mqtt.errors import BridgeError, DeviceReadError, EchoError, PublishError
from js2mqtt.events import decode
from js2mqtt.logging import get_logger
from js2mqtt.payload import Payload, encode
from js2mqtt.publisher import Publisher
from js2mqtt.reader import JoystickReader

logger = get_logger(__name__)

EchoSink = Callable[[str], None]


class PipelineState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class PipelineDriver:
    """Read, decode, encode and publish joystick events, one at a time.

    Any reader or publisher failure terminates the pipeline and propagates;
    restarting is left to the process supervisor.
    """

    def __init__(
        self,
        config: BridgeConfig,
        reader: JoystickReader,
        publisher: Publisher,
        echo: EchoSink | None = None,
    ) -> None:
        self.config = config
        self._reader = reader
        self._publisher = publisher
        self._echo = echo
        self._target = config.target
        self.state = PipelineState.IDLE
        self.published = 0

    def start(self) -> None:
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"cannot start a pipeline in state {self.state.value}")
        if not self._reader.ready:
            self.state = PipelineState.TERMINATED
            raise DeviceReadError("Cannot read joystick events: device is not open")
        if not self._publisher.ready:
            self.state = PipelineState.TERMINATED
            raise PublishError("publish(): MQTT session is not started")
        self.state = PipelineState.RUNNING
        if not self._publisher.connected:
            logger.info("MQTT broker not connected yet, events are queued until it is")
        logger.debug("Pipeline running, publishing to %s", self._target.topic)

    def step(self) -> Payload | None:
        """Process one record; return the published payload, or ``None`` if dropped."""
        if self.state is not PipelineState.RUNNING:
            raise RuntimeError(f"cannot step a pipeline in state {self.state.value}")

        try:
            raw = self._reader.read_record()
            event = decode(raw, ignore_init=self.config.ignore_init)
            if event is None:
                logger.debug("Dropped event with type 0x%02x", raw.type)
                return None

            payload = encode(event)
            if self.config.debug and self._echo is not None:
                try:
                    self._echo(payload.text())
                except OSError as exc:
                    raise EchoError(f"Cannot echo event to stdout: {exc}") from exc

            self._publisher.publish(self._target, payload)
        except BridgeError:
            self.state = PipelineState.TERMINATED
            raise

        self.published += 1
        return payload

    def run(self) -> None:
        self.start()
        while True:
            self.step()
