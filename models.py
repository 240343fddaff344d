"""
models.py

Data model shared by the provider clients, the sample store and the
aggregation engine.
"""

from dataclasses import dataclass, field
from typing import List


# -----------------------------------------------------
# ENUMERATED VALUES
# -----------------------------------------------------
RUSH = "rush"
OFFPEAK = "offpeak"
COMBINED = "combined"

FETCH_PERIODS = (RUSH, OFFPEAK)
TIME_PERIODS = (RUSH, OFFPEAK, COMBINED)

INDIVIDUAL = "individual"
COMPARISON = "comparison"
VIEW_MODES = (INDIVIDUAL, COMPARISON)

PER_TRIP = "per-trip"
WEEKLY = "weekly"
DISPLAY_MODES = (PER_TRIP, WEEKLY)

ALL_DESTINATIONS = "all"

STATUS_OK = "OK"
STATUS_FAILED = "FAILED"


# -----------------------------------------------------
# GRID / GEOMETRY
# -----------------------------------------------------
@dataclass(frozen=True)
class GridPoint:
    address: str
    display_name: str


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lng: float
    formatted_address: str


# -----------------------------------------------------
# DESTINATIONS
# -----------------------------------------------------
@dataclass
class Destination:
    """
    A place the user travels to, with how often they go there each week.
    lat/lng always come from geocoding `address`.
    """

    id: str
    name: str
    address: str
    lat: float
    lng: float
    rush_trips: int = 0
    offpeak_trips: int = 0

    def trips_for(self, time_period: str) -> int:
        if time_period == RUSH:
            return self.rush_trips
        if time_period == OFFPEAK:
            return self.offpeak_trips
        raise ValueError(f"No trip count for time period {time_period!r}")

    @property
    def total_trips(self) -> int:
        return self.rush_trips + self.offpeak_trips

    @property
    def location(self) -> LatLng:
        return LatLng(self.lat, self.lng)


# -----------------------------------------------------
# PROVIDER SAMPLES
# -----------------------------------------------------
@dataclass(frozen=True)
class SampleResult:
    origin: str
    neighborhood: str
    duration: float  # seconds
    distance: float  # meters
    status: str

    @property
    def is_ok(self) -> bool:
        return self.status == STATUS_OK


@dataclass
class DestinationSampleSet:
    destination_id: str
    destination_name: str
    destination_address: str
    results: List[SampleResult] = field(default_factory=list)


# -----------------------------------------------------
# VIEW + OUTPUT
# -----------------------------------------------------
@dataclass(frozen=True)
class ViewConfig:
    time_period: str = RUSH
    view_mode: str = INDIVIDUAL
    destination_filter: str = ALL_DESTINATIONS
    display_mode: str = PER_TRIP

    def __post_init__(self):
        if self.time_period not in TIME_PERIODS:
            raise ValueError(f"Unknown time period: {self.time_period!r}")
        if self.view_mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {self.view_mode!r}")
        if self.display_mode not in DISPLAY_MODES:
            raise ValueError(f"Unknown display mode: {self.display_mode!r}")
        if not self.destination_filter:
            raise ValueError("Destination filter must be 'all' or a destination id")

    @property
    def is_single_destination(self) -> bool:
        return self.destination_filter != ALL_DESTINATIONS


@dataclass(frozen=True)
class ReducedPoint:
    origin: str
    neighborhood: str
    duration: float  # seconds

    @property
    def minutes(self) -> int:
        return round(self.duration / 60)


@dataclass(frozen=True)
class ColorEncoding:
    color: str
    intensity: float
    rgb: tuple
