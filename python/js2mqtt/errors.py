class BridgeError(Exception):
    """Base class for every failure that ends the bridge process."""

    exit_code = 1


class ConfigurationError(BridgeError):
    pass


class DeviceOpenError(BridgeError):
    pass


class DeviceReadError(BridgeError):
    """Read failure or short read from the joystick device."""


class SessionError(BridgeError):
    """The MQTT session could not be set up."""


class PublishError(BridgeError):
    pass


class PayloadOverflowError(BridgeError, ValueError):
    """An encoded event does not fit the payload buffer."""


class EchoError(BridgeError):
    """The debug echo could not be written to stdout."""
