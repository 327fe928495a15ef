from __future__ import annotations

from typing import Any

import paho.mqtt.client

from js2mqtt.errors import SessionError
from js2mqtt.logging import get_logger

logger = get_logger(__name__)

DEFAULT_KEEPALIVE = 60


class MqttSession:
    """Owns the paho client and its background network loop.

    The session is usable as soon as :meth:`connect` returns; QoS 1
    publishes are queued by paho until the broker connection is up.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._started = False
        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect

    @classmethod
    def connect(
        cls,
        host: str,
        port: int,
        keepalive: int = DEFAULT_KEEPALIVE,
        client_id: str = "",
    ) -> "MqttSession":
        client = paho.mqtt.client.Client(
            paho.mqtt.client.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        session = cls(client)
        session.start(host, port, keepalive)
        return session

    def start(self, host: str, port: int, keepalive: int) -> None:
        logger.info("Connecting to MQTT broker %s:%s", host, port)
        try:
            self._client.connect_async(host, port, keepalive)
        except (ValueError, OSError) as exc:
            raise SessionError(f"connect_async(): {exc}") from exc

        rc = self._client.loop_start()
        if rc != paho.mqtt.client.MQTT_ERR_SUCCESS:
            raise SessionError(f"loop_start(): {paho.mqtt.client.error_string(rc)}")
        self._started = True

    @property
    def ready(self) -> bool:
        return self._started

    def is_connected(self) -> bool:
        return self._client.is_connected()

    def publish(self, topic: str, payload: bytes, qos: int, retain: bool) -> Any:
        return self._client.publish(topic, payload, qos=qos, retain=retain)

    def close(self) -> None:
        if not self._started:
            return
        self._started = False
        self._client.loop_stop()
        self._client.disconnect()

    def _on_connect(self, client, userdata, flags, reason_code, properties) -> None:
        if reason_code.is_failure:
            logger.warning("MQTT broker refused connection: %s", reason_code)
        else:
            logger.info("Connected to MQTT broker")

    def _on_disconnect(self, client, userdata, flags, reason_code, properties) -> None:
        logger.warning("Disconnected from MQTT broker: %s", reason_code)
