from __future__ import annotations

import os
from dataclasses import dataclass

from js2mqtt.errors import ConfigurationError
from js2mqtt.publisher import PublishTarget
from js2mqtt.session import DEFAULT_KEEPALIVE

DEFAULT_DEVICE = "/dev/input/js0"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1883
DEFAULT_TOPIC = "/joystick"

ENV_DEVICE = "JS2MQTT_DEVICE"
ENV_HOST = "JS2MQTT_HOST"
ENV_PORT = "JS2MQTT_PORT"
ENV_TOPIC = "JS2MQTT_TOPIC"
ENV_DEBUG = "JS2MQTT_DEBUG"
ENV_IGNORE_INIT = "JS2MQTT_IGNORE_INIT"
ENV_KEEPALIVE = "JS2MQTT_KEEPALIVE"
ENV_CLIENT_ID = "JS2MQTT_CLIENT_ID"


def parse_port(text: str | int) -> int:
    try:
        port = int(text)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid port specified: {text}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"Invalid port specified: {text}")
    return port


def _parse_keepalive(text: str | int) -> int:
    try:
        keepalive = int(text)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid keep-alive specified: {text}") from None
    if keepalive < 0:
        raise ConfigurationError(f"Invalid keep-alive specified: {text}")
    return keepalive


def _parse_flag(text: str) -> bool:
    return text.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class BridgeConfig:
    """Settings for one bridge process; built once at startup."""

    device_path: str = DEFAULT_DEVICE
    broker_host: str = DEFAULT_HOST
    broker_port: int = DEFAULT_PORT
    topic: str = DEFAULT_TOPIC
    debug: bool = False
    ignore_init: bool = False
    keepalive: int = DEFAULT_KEEPALIVE
    client_id: str = ""

    def __post_init__(self) -> None:
        parse_port(self.broker_port)
        _parse_keepalive(self.keepalive)
        if not self.topic:
            raise ConfigurationError("Invalid topic specified: topic must not be empty")

    @property
    def target(self) -> PublishTarget:
        return PublishTarget(topic=self.topic)

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        def get_env(name: str, default: str) -> str:
            return os.environ.get(name, default)

        return cls(
            device_path=get_env(ENV_DEVICE, DEFAULT_DEVICE),
            broker_host=get_env(ENV_HOST, DEFAULT_HOST),
            broker_port=parse_port(get_env(ENV_PORT, str(DEFAULT_PORT))),
            topic=get_env(ENV_TOPIC, DEFAULT_TOPIC),
            debug=_parse_flag(get_env(ENV_DEBUG, "")),
            ignore_init=_parse_flag(get_env(ENV_IGNORE_INIT, "")),
            keepalive=_parse_keepalive(get_env(ENV_KEEPALIVE, str(DEFAULT_KEEPALIVE))),
            client_id=get_env(ENV_CLIENT_ID, ""),
        )
