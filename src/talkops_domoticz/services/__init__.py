"""Service layer: Domoticz access, poll cycle, publishing and actions."""
