"""
destinations.py

User-managed destination list.

Coordinates always come from the geocoder: adding a destination or changing
its address geocodes first and only then touches the list, so a failed
geocode leaves everything as it was. Removing a destination does not touch
samples that were already fetched for it.
"""

import logging
import time

import config
from errors import DestinationNotFoundError
from models import Destination

logger = logging.getLogger(__name__)


def default_destinations():
    """
    Starting set: an Oakland office, a Palo Alto office and a San Jose client.
    """
    return [
        Destination(
            id="oakland-mandela",
            name="Oakland Office",
            address="2140 Mandela Pkwy, Oakland, CA 94607",
            lat=37.8199,
            lng=-122.2946,
            rush_trips=5,
            offpeak_trips=0,
        ),
        Destination(
            id="palo-alto",
            name="Palo Alto Office",
            address="University Ave, Palo Alto, CA 94301",
            lat=37.4419,
            lng=-122.1430,
            rush_trips=2,
            offpeak_trips=0,
        ),
        Destination(
            id="san-jose",
            name="San Jose Client",
            address="Downtown San Jose, CA 95113",
            lat=37.3382,
            lng=-121.8863,
            rush_trips=1,
            offpeak_trips=0,
        ),
    ]


def validate_trips(value, label="trips"):
    """
    Trip counts are whole numbers of trips per week in [0, MAX_TRIPS_PER_WEEK].
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be a whole number, got {value!r}")
    if value < 0 or value > config.MAX_TRIPS_PER_WEEK:
        raise ValueError(f"{label} must be between 0 and {config.MAX_TRIPS_PER_WEEK}, got {value}")
    return value


def _require_text(value, label):
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label} must not be empty")
    return value


class DestinationSet:
    """
    Ordered collection of destinations keyed by id.
    """

    def __init__(self, geocoder, destinations=None, clock=time.time):
        self.geocoder = geocoder
        self.clock = clock
        self._destinations = []
        for destination in destinations or []:
            if any(d.id == destination.id for d in self._destinations):
                raise ValueError(f"Duplicate destination id: {destination.id!r}")
            self._destinations.append(destination)

    def __iter__(self):
        return iter(list(self._destinations))

    def __len__(self):
        return len(self._destinations)

    def __contains__(self, destination_id):
        return any(d.id == destination_id for d in self._destinations)

    def get(self, destination_id) -> Destination:
        for destination in self._destinations:
            if destination.id == destination_id:
                return destination
        raise DestinationNotFoundError(destination_id)

    def total_weekly_trips(self) -> int:
        return sum(d.total_trips for d in self._destinations)

    def _new_id(self):
        base = f"dest-{int(self.clock() * 1000)}"
        candidate, suffix = base, 1
        while candidate in self:
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    # -----------------------------------------------------
    # Mutations
    # -----------------------------------------------------
    def add(self, name, address, rush_trips=config.DEFAULT_RUSH_TRIPS,
            offpeak_trips=config.DEFAULT_OFFPEAK_TRIPS) -> Destination:
        """
        Geocode `address` and append a new destination.
        GeocodingError propagates and nothing is added.
        """
        name = _require_text(name, "name")
        address = _require_text(address, "address")
        validate_trips(rush_trips, "rush_trips")
        validate_trips(offpeak_trips, "offpeak_trips")

        result = self.geocoder.geocode(address)

        destination = Destination(
            id=self._new_id(),
            name=name,
            address=result.formatted_address,
            lat=result.lat,
            lng=result.lng,
            rush_trips=rush_trips,
            offpeak_trips=offpeak_trips,
        )
        self._destinations.append(destination)
        logger.info("Added destination %s (%s)", destination.name, destination.address)
        return destination

    def update_address(self, destination_id, address) -> Destination:
        """
        Re-geocode and replace the address + coordinates. An unchanged address
        is a no-op; on GeocodingError the old values stay.
        """
        destination = self.get(destination_id)
        address = _require_text(address, "address")
        if address == destination.address:
            return destination

        result = self.geocoder.geocode(address)

        destination.address = result.formatted_address
        destination.lat = result.lat
        destination.lng = result.lng
        logger.info("Moved destination %s to %s", destination.name, destination.address)
        return destination

    def rename(self, destination_id, name) -> Destination:
        destination = self.get(destination_id)
        destination.name = _require_text(name, "name")
        return destination

    def set_trips(self, destination_id, rush_trips=None, offpeak_trips=None) -> Destination:
        """Change trip counts. Never geocodes."""
        destination = self.get(destination_id)
        if rush_trips is not None:
            validate_trips(rush_trips, "rush_trips")
        if offpeak_trips is not None:
            validate_trips(offpeak_trips, "offpeak_trips")

        if rush_trips is not None:
            destination.rush_trips = rush_trips
        if offpeak_trips is not None:
            destination.offpeak_trips = offpeak_trips
        return destination

    def remove(self, destination_id) -> Destination:
        destination = self.get(destination_id)
        self._destinations.remove(destination)
        logger.info("Removed destination %s", destination.name)
        return destination
