from types import SimpleNamespace

import paho.mqtt.client
import pytest

from conftest import FakeMQTTClient
from js2mqtt.errors import SessionError
from js2mqtt.session import MqttSession


def test_start_connects_asynchronously_and_runs_loop(fake_client):
    session = MqttSession(fake_client)
    assert not session.ready

    session.start("broker.local", 1883, 60)

    assert fake_client.connect_args == ("broker.local", 1883, 60)
    assert fake_client.loop_started
    assert session.ready


def test_invalid_connect_arguments_raise_session_error(fake_client):
    with pytest.raises(SessionError, match="connect_async"):
        MqttSession(fake_client).start("broker.local", 0, 60)


def test_loop_start_failure_raises_session_error():
    client = FakeMQTTClient()
    client.loop_start = lambda: paho.mqtt.client.MQTT_ERR_INVAL
    session = MqttSession(client)
    with pytest.raises(SessionError, match="loop_start"):
        session.start("localhost", 1883, 60)
    assert not session.ready


def test_publish_passes_through_to_client(fake_client):
    session = MqttSession(fake_client)
    info = session.publish("/joystick", b"{}", qos=1, retain=False)
    assert info.rc == paho.mqtt.client.MQTT_ERR_SUCCESS
    assert fake_client.published == [("/joystick", b"{}", 1, False)]


def test_close_stops_loop_once(fake_client):
    session = MqttSession(fake_client)
    session.start("localhost", 1883, 60)
    session.close()
    assert not fake_client.loop_started
    assert fake_client.disconnected
    assert not session.ready

    fake_client.disconnected = False
    session.close()
    assert not fake_client.disconnected


def test_connection_callbacks_are_installed(fake_client):
    MqttSession(fake_client)
    ok = SimpleNamespace(is_failure=False)
    refused = SimpleNamespace(is_failure=True)
    fake_client.on_connect(fake_client, None, None, ok, None)
    fake_client.on_connect(fake_client, None, None, refused, None)
    fake_client.on_disconnect(fake_client, None, None, refused, None)


def test_connect_builds_paho_client(monkeypatch):
    created = []

    def fake_client_factory(*args, **kwargs):
        client = FakeMQTTClient()
        created.append((args, kwargs))
        return client

    monkeypatch.setattr(paho.mqtt.client, "Client", fake_client_factory)
    session = MqttSession.connect("localhost", 1883, keepalive=30, client_id="js")

    assert session.ready
    (args, kwargs), = created
    assert args == (paho.mqtt.client.CallbackAPIVersion.VERSION2,)
    assert kwargs == {"client_id": "js", "clean_session": True}


def test_is_connected_follows_client(fake_client):
    session = MqttSession(fake_client)
    session.start("localhost", 1883, 60)
    assert not session.is_connected()

    fake_client.connected = True
    assert session.is_connected()
