"""
errors.py

Exceptions raised by the commute heatmap.
"""


class CommuteHeatmapError(Exception):
    """Base class for every error raised by this project."""


class ConfigurationError(CommuteHeatmapError):
    """Missing API key or unknown provider setting."""


class ProviderError(CommuteHeatmapError):
    """A route-matrix call failed (transport, non-2xx, empty or malformed body)."""


class GeocodingError(CommuteHeatmapError):
    """An address could not be geocoded."""


class TrafficLoadError(CommuteHeatmapError):
    """Loading travel times for a time period failed as a whole."""


class LoadInProgressError(TrafficLoadError):
    """A load was requested while another one is still running."""


class DestinationNotFoundError(CommuteHeatmapError, KeyError):
    """No destination with the given id."""

    def __str__(self):
        return f"No destination with id {self.args[0]!r}" if self.args else "No destination"
