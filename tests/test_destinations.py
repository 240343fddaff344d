"""Tests for the destination set lifecycle."""

import pytest

from aggregation import reduce_travel_times
from conftest import ok, sample_set
from destinations import DestinationSet, default_destinations, validate_trips
from errors import DestinationNotFoundError, GeocodingError
from models import ViewConfig
from sample_store import RawSampleStore


def test_add_uses_geocoded_address(geocoder) -> None:
    """Test a new destination takes the geocoder's coordinates and formatted address."""
    destinations = DestinationSet(geocoder, clock=lambda: 1760000000.5)

    added = destinations.add("Office", "2140 Mandela Pkwy, Oakland", rush_trips=5, offpeak_trips=0)

    assert added.id == "dest-1760000000500"
    assert added.address == "2140 Mandela Pkwy, Oakland, CA 94607, USA"
    assert (added.lat, added.lng) == (37.8199, -122.2946)
    assert len(destinations) == 1
    assert destinations.total_weekly_trips() == 5


def test_add_generates_unique_ids(geocoder) -> None:
    """Test two adds in the same millisecond get distinct ids."""
    destinations = DestinationSet(geocoder, clock=lambda: 1.0)

    first = destinations.add("A", "2140 Mandela Pkwy, Oakland")
    second = destinations.add("B", "University Ave, Palo Alto")

    assert first.id != second.id
    assert (first.rush_trips, first.offpeak_trips) == (1, 1)


def test_add_geocoding_failure_leaves_set_unchanged(geocoder) -> None:
    """Test a failed geocode raises and inserts nothing."""
    destinations = DestinationSet(geocoder, default_destinations())

    with pytest.raises(GeocodingError):
        destinations.add("Nowhere", "123 Fake St")

    assert [d.id for d in destinations] == ["oakland-mandela", "palo-alto", "san-jose"]


def test_add_validates_before_geocoding(geocoder) -> None:
    """Test invalid input is rejected without a geocoding call."""
    destinations = DestinationSet(geocoder)

    with pytest.raises(ValueError):
        destinations.add("", "2140 Mandela Pkwy, Oakland")
    with pytest.raises(ValueError):
        destinations.add("Office", "2140 Mandela Pkwy, Oakland", rush_trips=-1)
    with pytest.raises(ValueError):
        destinations.add("Office", "2140 Mandela Pkwy, Oakland", offpeak_trips=21)

    assert geocoder.calls == []
    assert len(destinations) == 0


def test_update_address_regeocodes(geocoder) -> None:
    """Test an address edit replaces address and coordinates together."""
    destinations = DestinationSet(geocoder, default_destinations())

    updated = destinations.update_address("san-jose", "University Ave, Palo Alto")

    assert updated.address == "University Ave, Palo Alto, CA 94301, USA"
    assert (updated.lat, updated.lng) == (37.4419, -122.1430)


def test_update_address_failure_keeps_previous(geocoder) -> None:
    """Test a failed re-geocode discards the edit."""
    destinations = DestinationSet(geocoder, default_destinations())
    before = destinations.get("oakland-mandela")
    address, lat, lng = before.address, before.lat, before.lng

    with pytest.raises(GeocodingError):
        destinations.update_address("oakland-mandela", "somewhere unknown")

    after = destinations.get("oakland-mandela")
    assert (after.address, after.lat, after.lng) == (address, lat, lng)


def test_update_same_address_is_noop(geocoder) -> None:
    """Test re-entering the current address does not geocode."""
    destinations = DestinationSet(geocoder, default_destinations())

    destinations.update_address("palo-alto", "University Ave, Palo Alto, CA 94301")

    assert geocoder.calls == []


def test_set_trips_never_geocodes(geocoder) -> None:
    """Test trip edits are independent of geocoding."""
    destinations = DestinationSet(geocoder, default_destinations())

    destinations.set_trips("palo-alto", offpeak_trips=3)
    destinations.set_trips("san-jose", rush_trips=0)

    assert destinations.get("palo-alto").rush_trips == 2
    assert destinations.get("palo-alto").offpeak_trips == 3
    assert destinations.get("san-jose").rush_trips == 0
    assert geocoder.calls == []


def test_set_trips_rejects_invalid(geocoder) -> None:
    """Test a bad trip count leaves both counts untouched."""
    destinations = DestinationSet(geocoder, default_destinations())

    with pytest.raises(ValueError):
        destinations.set_trips("palo-alto", rush_trips=4, offpeak_trips=2.5)

    assert destinations.get("palo-alto").rush_trips == 2


def test_rename(geocoder) -> None:
    """Test renaming keeps everything else."""
    destinations = DestinationSet(geocoder, default_destinations())
    destinations.rename("san-jose", "SJ Client")
    assert destinations.get("san-jose").name == "SJ Client"
    assert geocoder.calls == []


def test_unknown_id(geocoder) -> None:
    """Test operations on a missing id raise DestinationNotFoundError."""
    destinations = DestinationSet(geocoder)
    with pytest.raises(DestinationNotFoundError):
        destinations.remove("ghost")
    with pytest.raises(KeyError):
        destinations.set_trips("ghost", rush_trips=1)


def test_duplicate_ids_rejected(geocoder) -> None:
    """Test the initial list must have unique ids."""
    with pytest.raises(ValueError):
        DestinationSet(geocoder, default_destinations() + default_destinations()[:1])


def test_remove_leaves_store_and_is_skipped(geocoder) -> None:
    """Test removing a destination keeps fetched samples, which aggregation then ignores."""
    destinations = DestinationSet(geocoder, default_destinations())
    store = RawSampleStore(
        rush=[sample_set("oakland-mandela", ok("O", 600)), sample_set("palo-alto", ok("O", 3000))]
    )

    destinations.remove("palo-alto")
    points = reduce_travel_times(store, destinations, ViewConfig())

    assert "palo-alto" not in destinations
    assert [s.destination_id for s in store.rush] == ["oakland-mandela", "palo-alto"]
    assert [(p.origin, p.duration) for p in points] == [("O", 600)]


def test_validate_trips() -> None:
    """Test the accepted trip count range."""
    assert validate_trips(0) == 0
    assert validate_trips(20) == 20
    for bad in (-1, 21, 1.5, "3", True, None):
        with pytest.raises(ValueError):
            validate_trips(bad)
