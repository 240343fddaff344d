"""
route_matrix.py

Client for the Google Routes API (computeRouteMatrix).

One call = a batch of grid origins (by address) to a single destination
(by lat/lng) for one departure profile. Larger grids are split into
batches, and several destinations are queried one after another, with a
pause in between to stay under upstream rate limits.
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import requests

import config
from errors import ConfigurationError, ProviderError
from grid import neighborhood_for
from models import (
    OFFPEAK,
    RUSH,
    STATUS_FAILED,
    STATUS_OK,
    DestinationSampleSet,
    SampleResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_ORIGIN = "Unknown"

DEPARTURE_HOURS = {
    RUSH: config.RUSH_HOUR,
    OFFPEAK: config.OFFPEAK_HOUR,
}


# =======================================================
# Request helpers
# =======================================================

def departure_time(time_period: str, now: datetime) -> datetime:
    """
    Next occurrence of the period's clock time. If today's target has
    already passed (or is exactly now), use the same time tomorrow.
    """
    if time_period not in DEPARTURE_HOURS:
        raise ValueError(f"Unknown time period: {time_period!r}")

    target = now.replace(hour=DEPARTURE_HOURS[time_period], minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return target


def format_timestamp(moment: datetime) -> str:
    """RFC 3339 UTC timestamp, e.g. 2026-10-16T00:00:00Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=ZoneInfo(config.TIMEZONE))
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_request_body(origins, destination, departure: str):
    return {
        "origins": [{"waypoint": {"address": address}} for address in origins],
        "destinations": [
            {
                "waypoint": {
                    "location": {
                        "latLng": {
                            "latitude": destination.lat,
                            "longitude": destination.lng,
                        }
                    }
                }
            }
        ],
        "travelMode": "DRIVE",
        "routingPreference": "TRAFFIC_AWARE",
        "departureTime": departure,
    }


# =======================================================
# Response parsing
# =======================================================

def parse_duration(value) -> float:
    """
    "1234s" -> 1234.0. Missing durations parse as 0.
    """
    if not value:
        return 0.0
    text = str(value).strip()
    if text.endswith("s"):
        text = text[:-1]
    return float(text)


def parse_route_matrix(payload, origins):
    """
    Map route-matrix elements back onto origin addresses.

    An empty or absent status object means success; anything else is a
    FAILED sample, never an exception.
    """
    elements = payload if isinstance(payload, list) else [payload]

    results = []
    for element in elements:
        if not isinstance(element, dict):
            raise ProviderError(f"Unexpected route matrix element: {element!r}")

        origin_index = element.get("originIndex", 0)
        if 0 <= origin_index < len(origins):
            origin = origins[origin_index]
        else:
            origin = UNKNOWN_ORIGIN

        status = STATUS_FAILED if element.get("status") else STATUS_OK
        try:
            duration = parse_duration(element.get("duration"))
        except ValueError as e:
            raise ProviderError(f"Bad duration {element.get('duration')!r}") from e

        logger.debug(
            "Origin %s: %r -> %s, %.0fs, condition=%s",
            origin_index, origin, status, duration, element.get("condition", "unknown"),
        )
        results.append(
            SampleResult(
                origin=origin,
                neighborhood=neighborhood_for(origin),
                duration=duration,
                distance=float(element.get("distanceMeters") or 0),
                status=status,
            )
        )
    return results


def _batches(items, size):
    for start in range(0, len(items), size):
        yield items[start:start + size]


def _default_clock():
    return datetime.now(ZoneInfo(config.TIMEZONE))


# =======================================================
# Client
# =======================================================

class RouteMatrixClient:
    """
    Travel-time provider client.

    `clock` returns the current (aware) datetime and `sleep` performs the
    inter-request delay; tests inject a fixed clock and a no-op sleep.
    """

    def __init__(
        self,
        api_key=None,
        session=None,
        timeout=config.REQUEST_TIMEOUT_SECONDS,
        clock=None,
        sleep=time.sleep,
        batch_size=config.BATCH_SIZE,
        batch_delay=config.BATCH_DELAY_SECONDS,
        destination_delay=config.DESTINATION_DELAY_SECONDS,
    ):
        self.api_key = api_key or config.GOOGLE_MAPS_API_KEY
        if not self.api_key:
            raise ConfigurationError("GOOGLE_MAPS_API_KEY is not set")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.session = session or requests.Session()
        self.timeout = timeout
        self.clock = clock or _default_clock
        self.sleep = sleep
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.destination_delay = destination_delay

    def _headers(self):
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": config.ROUTES_FIELD_MASK,
        }

    def fetch_travel_times(self, origins, destination, time_period: str):
        """
        Single route-matrix call: `origins` (addresses) -> `destination`
        (anything with .lat/.lng). Returns one SampleResult per element.
        Raises ProviderError when the call itself fails.
        """
        origins = list(origins)
        departure = format_timestamp(departure_time(time_period, self.clock()))
        body = build_request_body(origins, destination, departure)

        logger.info("Routes API: %d origins, departure %s (%s)", len(origins), departure, time_period)
        try:
            response = self.session.post(
                config.ROUTES_API_URL,
                json=body,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(f"Failed to fetch traffic data: {e}") from e

        if not response.ok:
            raise ProviderError(
                f"Failed to fetch traffic data: Routes API error: "
                f"{response.status_code} - {response.text}"
            )

        if not response.text.strip():
            raise ProviderError("Failed to fetch traffic data: Empty response from Routes API")

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("Failed to fetch traffic data: malformed JSON") from e

        results = parse_route_matrix(payload, origins)
        valid = sum(1 for r in results if r.is_ok)
        logger.info("Routes API valid results: %d/%d", valid, len(results))
        return results

    def fetch_grid_travel_times(self, origins, destination, time_period: str, strict=True):
        """
        Query a whole grid for one destination in batches of `batch_size`.

        A failed batch is skipped and the remaining batches still run. With
        `strict`, a failure of the first batch is re-raised instead, since
        nothing has been obtained yet.
        """
        origins = list(origins)
        batches = list(_batches(origins, self.batch_size))
        logger.info("Processing %d batches for %s", len(batches), time_period)

        all_results = []
        for index, batch in enumerate(batches):
            if index > 0 and self.batch_delay:
                self.sleep(self.batch_delay)
            try:
                results = self.fetch_travel_times(batch, destination, time_period)
            except ProviderError as e:
                if strict and index == 0:
                    raise
                logger.warning("Error fetching batch %d/%d for %s: %s", index + 1, len(batches), time_period, e)
                continue
            all_results.extend(results)

        logger.info("Total results for %s: %d", time_period, len(all_results))
        return all_results

    def fetch_travel_times_multi_destination(self, origins, destinations, time_period: str):
        """
        Fetch the grid for each destination, one destination at a time.

        Only the first destination's first batch is strict. Later batches
        that fail are skipped, and a later destination with no results at
        all is left out of the returned list.
        """
        origins = list(origins)
        destinations = list(destinations)
        logger.info(
            "Routes API multi-destination: %d origins to %d destinations",
            len(origins), len(destinations),
        )

        sample_sets = []
        for index, destination in enumerate(destinations):
            if index > 0 and self.destination_delay:
                self.sleep(self.destination_delay)
            results = self.fetch_grid_travel_times(
                origins, destination.location, time_period, strict=(index == 0)
            )
            if index > 0 and not results:
                logger.warning("No results for destination %s, skipping", destination.name)
                continue

            sample_sets.append(
                DestinationSampleSet(
                    destination_id=destination.id,
                    destination_name=destination.name,
                    destination_address=destination.address,
                    results=results,
                )
            )
        return sample_sets
