"""Forward Linux joystick events to an MQTT broker."""

__version__ = "0.1"
