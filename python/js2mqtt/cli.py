######################################################################
#
#  cli.py - js2mqtt process entry point
#
#  Reads a Linux joystick device and relays every button/axis event
#  as a JSON object to an MQTT topic.
#
######################################################################

from typing import Optional

import typer

from js2mqtt import __version__
from js2mqtt.config import (
    DEFAULT_DEVICE,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TOPIC,
    ENV_CLIENT_ID,
    ENV_DEBUG,
    ENV_DEVICE,
    ENV_HOST,
    ENV_IGNORE_INIT,
    ENV_KEEPALIVE,
    ENV_PORT,
    ENV_TOPIC,
    BridgeConfig,
    parse_port,
)
from js2mqtt.driver import PipelineDriver
from js2mqtt.errors import BridgeError
from js2mqtt.logging import get_logger
from js2mqtt.publisher import Publisher
from js2mqtt.reader import open_device
from js2mqtt.session import DEFAULT_KEEPALIVE, MqttSession

logger = get_logger(__name__)

HELP = """Listen for joystick events and forward them to a MQTT server.

This program listens for Linux joystick events as described here:
https://www.kernel.org/doc/Documentation/input/joystick-api.txt

It then decodes those events into the following JSON format:

    {"time": <event timestamp in milliseconds>,
     "value": <signed 16-bit value>,
     "type": <"button"|"axis">,
     "number": <axis or button number>}
"""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


VERSION_TEXT = f"""js2mqtt {__version__}
Copyright 2020 Cedric Priscal
https://github.com/cepr/js2mqtt

   Licensed under the Apache License, Version 2.0 (the "License");
   you may not use this file except in compliance with the License.
   You may obtain a copy of the License at

       http://www.apache.org/licenses/LICENSE-2.0

   Unless required by applicable law or agreed to in writing, software
   distributed under the License is distributed on an "AS IS" BASIS,
   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
   See the License for the specific language governing permissions and
   limitations under the License.
"""


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(VERSION_TEXT, err=True)
        raise typer.Exit()


def build_config(
    device: str,
    host: str,
    port: str,
    topic: str,
    debug: bool,
    ignore_init: bool,
    keepalive: int,
    client_id: str,
) -> BridgeConfig:
    return BridgeConfig(
        device_path=device,
        broker_host=host,
        broker_port=parse_port(port),
        topic=topic,
        debug=debug,
        ignore_init=ignore_init,
        keepalive=keepalive,
        client_id=client_id,
    )


def serve(config: BridgeConfig) -> None:
    """Open the device and the broker session, then run until a failure."""
    logger.info(
        "publishing events from %s to %s:%d...",
        config.device_path,
        config.broker_host,
        config.broker_port,
    )
    with open_device(config.device_path) as reader:
        session = MqttSession.connect(
            config.broker_host,
            config.broker_port,
            keepalive=config.keepalive,
            client_id=config.client_id,
        )
        try:
            driver = PipelineDriver(config, reader, Publisher(session), echo=typer.echo)
            driver.run()
        finally:
            session.close()


@app.command(help=HELP)
def run(
    device: str = typer.Option(
        DEFAULT_DEVICE, "-i", "--device", envvar=ENV_DEVICE,
        help="Path to the joystick device.",
    ),
    host: str = typer.Option(
        DEFAULT_HOST, "-o", "--host", envvar=ENV_HOST,
        help="MQTT server address.",
    ),
    # parsed by parse_port so a bad value surfaces as a ConfigurationError
    port: str = typer.Option(
        str(DEFAULT_PORT), "-p", "--port", envvar=ENV_PORT,
        help="MQTT server port.",
    ),
    topic: str = typer.Option(
        DEFAULT_TOPIC, "-t", "--topic", envvar=ENV_TOPIC,
        help="MQTT topic.",
    ),
    debug: bool = typer.Option(
        False, "-d", "--debug", envvar=ENV_DEBUG,
        help="Display the JSON object on the standard output.",
    ),
    ignore_init: bool = typer.Option(
        False, "--ignore-init", envvar=ENV_IGNORE_INIT,
        help="Drop the initial state events sent when the device is opened.",
    ),
    keepalive: int = typer.Option(
        DEFAULT_KEEPALIVE, "-k", "--keepalive", envvar=ENV_KEEPALIVE, min=0,
        help="MQTT keep-alive interval in seconds.",
    ),
    client_id: str = typer.Option(
        "", "--client-id", envvar=ENV_CLIENT_ID,
        help="MQTT client id. Empty for a broker-assigned id.",
    ),
    version: Optional[bool] = typer.Option(
        None, "-v", "--version", callback=_version_callback, is_eager=True,
        help="Display version and exit.",
    ),
) -> None:
    try:
        config = build_config(
            device, host, port, topic, debug, ignore_init, keepalive, client_id
        )
        serve(config)
    except BridgeError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=exc.exit_code) from exc


def main() -> None:
    app(prog_name="js2mqtt")
