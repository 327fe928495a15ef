import struct
from types import SimpleNamespace

import paho.mqtt.client
import pytest

from js2mqtt.events import JS_EVENT_AXIS, JS_EVENT_BUTTON, RAW_EVENT_FORMAT, RawEvent


class FakeMQTTClient:
    """Minimal subset of the paho MQTT client API recording every call."""

    def __init__(self, publish_rc: int = paho.mqtt.client.MQTT_ERR_SUCCESS) -> None:
        self.publish_rc = publish_rc
        self.published: list[tuple[str, bytes, int, bool]] = []
        self.connect_args: tuple | None = None
        self.loop_started = False
        self.disconnected = False
        self.connected = False
        self.on_connect = None
        self.on_disconnect = None

    def connect_async(self, host: str, port: int, keepalive: int) -> None:
        if port <= 0:
            raise ValueError("Invalid port number.")
        self.connect_args = (host, port, keepalive)

    def loop_start(self) -> int:
        self.loop_started = True
        return paho.mqtt.client.MQTT_ERR_SUCCESS

    def loop_stop(self) -> None:
        self.loop_started = False

    def disconnect(self) -> None:
        self.disconnected = True

    def is_connected(self) -> bool:
        # connect_async only schedules the connection; tests flip this by hand
        return self.connected and not self.disconnected

    def publish(self, topic: str, payload: bytes, qos: int = 0, retain: bool = False):
        self.published.append((topic, payload, qos, retain))
        # Match the paho-mqtt MQTTMessageInfo attribute used by the publisher.
        return SimpleNamespace(rc=self.publish_rc, mid=len(self.published))


class FakeSession:
    """Stands in for :class:`js2mqtt.session.MqttSession`."""

    def __init__(self, rcs=None, ready: bool = True, connected: bool = True) -> None:
        self._rcs = list(rcs or [])
        self.ready = ready
        self.connected = connected
        self.calls: list[tuple[str, bytes, int, bool]] = []
        self.closed = False

    def publish(self, topic: str, payload: bytes, qos: int, retain: bool):
        self.calls.append((topic, payload, qos, retain))
        rc = self._rcs.pop(0) if self._rcs else paho.mqtt.client.MQTT_ERR_SUCCESS
        return SimpleNamespace(rc=rc, mid=len(self.calls))

    def is_connected(self) -> bool:
        return self.connected

    def close(self) -> None:
        self.closed = True


def axis(time: int, value: int, number: int, extra: int = 0) -> RawEvent:
    return RawEvent(time, value, JS_EVENT_AXIS | extra, number)


def button(time: int, value: int, number: int, extra: int = 0) -> RawEvent:
    return RawEvent(time, value, JS_EVENT_BUTTON | extra, number)


def pack(event: RawEvent) -> bytes:
    return struct.pack(RAW_EVENT_FORMAT, *event)


def records(*events: RawEvent) -> bytes:
    return b"".join(pack(event) for event in events)


@pytest.fixture
def fake_client() -> FakeMQTTClient:
    return FakeMQTTClient()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
