"""Exceptions raised while rendering a fan chart."""


class FanChartError(Exception):
    """Base class for all chart errors."""


class ConfigurationOutOfRange(FanChartError, ValueError):
    """A configuration value lies outside its documented bounds."""

    def __init__(self, name: str, value, allowed: str):
        self.name = name
        self.value = value
        self.allowed = allowed
        super().__init__(f"{name}={value!r} is out of range (allowed: {allowed})")


class InvalidRoot(FanChartError):
    """The root person is missing or could not be turned into a tree."""


class DegenerateGeometry(FanChartError):
    """A wedge has no angular width, so nothing can be placed in it."""


class MeasurementUnavailable(FanChartError):
    """The text measurement collaborator could not measure a string."""
