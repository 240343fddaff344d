"""
geocoding.py

Turn free-text addresses into (lat, lng) + a canonical address string.
Two backends: the Google Geocoding API and OSM/Nominatim through OSMnx.
"""

import logging

import osmnx as ox
import requests

import config
from errors import ConfigurationError, GeocodingError
from models import GeocodeResult

logger = logging.getLogger(__name__)


class GoogleGeocoder:
    """
    Google Geocoding API client. Only the first result is used.
    """

    def __init__(self, api_key=None, session=None, timeout=config.REQUEST_TIMEOUT_SECONDS):
        self.api_key = api_key or config.GOOGLE_MAPS_API_KEY
        if not self.api_key:
            raise ConfigurationError("GOOGLE_MAPS_API_KEY is not set")
        self.session = session or requests.Session()
        self.timeout = timeout

    def geocode(self, address: str) -> GeocodeResult:
        address = _require_address(address)
        logger.info("Geocoding address: %s", address)

        try:
            response = self.session.get(
                config.GEOCODE_API_URL,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GeocodingError(f"Failed to geocode address: {e}") from e

        if not response.ok:
            raise GeocodingError(
                f"Failed to geocode address: Geocoding API error: {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError("Failed to geocode address: malformed response") from e

        status = data.get("status", "UNKNOWN")
        results = data.get("results") or []
        if status != "OK" or not results:
            raise GeocodingError(f"Geocoding failed: {status}")

        first = results[0]
        try:
            location = first["geometry"]["location"]
            result = GeocodeResult(
                lat=float(location["lat"]),
                lng=float(location["lng"]),
                formatted_address=first.get("formatted_address") or address,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError("Failed to geocode address: malformed result") from e

        logger.debug("Geocoded %r to (%.4f, %.4f)", address, result.lat, result.lng)
        return result


class OsmGeocoder:
    """
    Nominatim through OSMnx. No key needed; the input address is kept as
    the formatted address since ox.geocode only returns coordinates.
    """

    def geocode(self, address: str) -> GeocodeResult:
        address = _require_address(address)
        try:
            lat, lon = ox.geocode(address)
        except Exception as e:
            raise GeocodingError(f"Failed to geocode address: {e}") from e
        logger.debug("Geocoded %r to (%.4f, %.4f) via OSM", address, lat, lon)
        return GeocodeResult(lat=float(lat), lng=float(lon), formatted_address=address)


def _require_address(address):
    address = (address or "").strip()
    if not address:
        raise GeocodingError("Address is empty")
    return address


def make_geocoder(kind=None, **kwargs):
    """
    Build the geocoder named by `kind` ("google" or "osm"), defaulting to
    config.GEOCODER.
    """
    kind = kind or config.GEOCODER
    if kind == "google":
        return GoogleGeocoder(**kwargs)
    if kind == "osm":
        return OsmGeocoder()
    raise ConfigurationError(f"Unknown geocoder: {kind!r}")


def geocode(address: str) -> GeocodeResult:
    """
    Shortcut: geocode with the configured backend.
    """
    return make_geocoder().geocode(address)
