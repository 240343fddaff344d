"""Tests for the heatmap renderer and reports."""

import matplotlib.pyplot as plt

from conftest import destination
from models import LatLng, ReducedPoint, ViewConfig
from visualization import (
    build_markers,
    describe_view,
    generate_google_maps_link,
    legend_text,
    plot_heatmap,
    summary_frame,
)

COORDS = {
    "fast": LatLng(37.79, -122.40),
    "slow": LatLng(37.75, -122.50),
    "zero": LatLng(37.70, -122.45),
}

POINTS = [
    ReducedPoint("slow", "Outer Sunset", 2400),
    ReducedPoint("fast", "Union Square", 1200),
    ReducedPoint("nowhere", "Unknown Location", 1800),
    ReducedPoint("zero", "Zero", 0),
]


def test_build_markers() -> None:
    """Test markers skip unplaceable and zero-duration points and scale radius."""
    markers = build_markers(POINTS, COORDS)

    assert [m["origin"] for m in markers] == ["slow", "fast"]
    slow, fast = markers
    assert slow["color"] == "rgb(255,0,0)"
    assert abs(slow["radius"] - 20) < 1e-9
    assert fast["color"] == "rgb(0,255,0)"
    assert abs(fast["radius"] - (8 + 0.3 * 12)) < 1e-9
    assert fast["minutes"] == 20


def test_plot_heatmap_saves_file(tmp_path) -> None:
    """Test the map is written to disk, creating parent directories."""
    out = tmp_path / "maps" / "heatmap.png"

    fig = plot_heatmap(POINTS, COORDS, [destination("a", rush_trips=1)], save_path=str(out), show=False)

    assert out.exists()
    assert fig is not None
    plt.close("all")


def test_plot_heatmap_empty(tmp_path) -> None:
    """Test an empty result still renders a legend-only map."""
    out = tmp_path / "empty.png"
    plot_heatmap([], COORDS, save_path=str(out), show=False)
    assert out.exists()
    plt.close("all")


def test_summary_frame_sorted() -> None:
    """Test the summary table lists fastest first."""
    frame = summary_frame(POINTS)

    assert list(frame.columns) == ["neighborhood", "origin", "minutes", "duration_s"]
    assert list(frame["origin"]) == ["zero", "fast", "nowhere", "slow"]
    assert summary_frame([]).empty


def test_legend_text() -> None:
    """Test legend wording with and without data."""
    assert legend_text([ReducedPoint("a", "A", 600), ReducedPoint("b", "B", 1800)]) == (
        "Fast: 10 min   Avg: 20 min   Slow: 30 min"
    )
    assert "no data" in legend_text([])


def test_describe_view() -> None:
    """Test view titles."""
    destinations = [destination("oak")]

    assert describe_view(ViewConfig()) == "Rush Hour (5 PM) - travel time per trip - all destinations"
    assert describe_view(
        ViewConfig(view_mode="comparison", destination_filter="oak", display_mode="weekly"), destinations
    ) == "time lost to traffic per week - Oak"


def test_generate_google_maps_link() -> None:
    """Test directions URL building."""
    assert generate_google_maps_link([(37.79, -122.4), (37.82, -122.29)]) == (
        "https://www.google.com/maps/dir/37.79,-122.4/37.82,-122.29"
    )
