from __future__ import annotations

from dataclasses import dataclass

import paho.mqtt.client

from js2mqtt.errors import PublishError
from js2mqtt.logging import get_logger
from js2mqtt.payload import Payload

logger = get_logger(__name__)

QOS_AT_LEAST_ONCE = 1


@dataclass(frozen=True, slots=True)
class PublishTarget:
    topic: str
    qos: int = QOS_AT_LEAST_ONCE
    retain: bool = False

    def __post_init__(self) -> None:
        if not self.topic:
            raise ValueError("topic must not be empty")
        if self.qos != QOS_AT_LEAST_ONCE:
            raise ValueError("events are published with at-least-once delivery (qos=1)")
        if self.retain:
            raise ValueError("events are never retained")


class Publisher:
    """Hands payloads to the MQTT session, one send attempt per call."""

    def __init__(self, session) -> None:
        self._session = session

    @property
    def ready(self) -> bool:
        return self._session.ready

    @property
    def connected(self) -> bool:
        return self._session.is_connected()

    def publish(self, target: PublishTarget, payload: Payload) -> None:
        try:
            info = self._session.publish(
                target.topic, payload.data, qos=target.qos, retain=target.retain
            )
        except (ValueError, OSError) as exc:
            raise PublishError(f"publish() to {target.topic}: {exc}") from exc

        if info.rc == paho.mqtt.client.MQTT_ERR_SUCCESS:
            return
        # paho keeps QoS > 0 messages and sends them once the connection is up
        if info.rc == paho.mqtt.client.MQTT_ERR_NO_CONN and target.qos > 0:
            logger.debug("Broker not connected, message %s to %s queued", info.mid, target.topic)
            return
        raise PublishError(
            f"publish() to {target.topic}: {paho.mqtt.client.error_string(info.rc)}"
        )
