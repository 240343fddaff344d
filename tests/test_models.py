"""Tests for the data model."""

import pytest

from conftest import destination, failed, ok
from models import ReducedPoint, ViewConfig


def test_view_config_defaults() -> None:
    """Test the default view: rush, individual, all destinations, per trip."""
    view = ViewConfig()
    assert (view.time_period, view.view_mode, view.destination_filter, view.display_mode) == (
        "rush", "individual", "all", "per-trip",
    )
    assert not view.is_single_destination
    assert ViewConfig(destination_filter="dest-1").is_single_destination


@pytest.mark.parametrize(
    "kwargs",
    [
        {"time_period": "evening"},
        {"view_mode": "heatmap"},
        {"display_mode": "monthly"},
        {"destination_filter": ""},
    ],
)
def test_view_config_rejects_unknown_values(kwargs) -> None:
    """Test invalid view settings raise ValueError."""
    with pytest.raises(ValueError):
        ViewConfig(**kwargs)


def test_destination_trips() -> None:
    """Test per-period trip lookup."""
    d = destination("a", rush_trips=3, offpeak_trips=2)
    assert d.trips_for("rush") == 3
    assert d.trips_for("offpeak") == 2
    assert d.total_trips == 5
    with pytest.raises(ValueError):
        d.trips_for("combined")


def test_sample_and_point_helpers() -> None:
    """Test status and minute helpers."""
    assert ok("O", 10).is_ok
    assert not failed("O").is_ok
    assert ReducedPoint("O", "O", 1290).minutes == 22
