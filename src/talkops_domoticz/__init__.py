"""TalkOps extension for Domoticz home automation."""

__version__ = "1.0.0"
