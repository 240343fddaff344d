"""
visualization.py

Draw the commute heatmap (matplotlib), tabulate it (pandas) and build
Google Maps URLs.
"""

import logging
import os

import matplotlib.pyplot as plt
import pandas as pd

from colormap import colorize_points, legend_summary
from models import (
    COMBINED,
    COMPARISON,
    OFFPEAK,
    RUSH,
    WEEKLY,
)

logger = logging.getLogger(__name__)

DESTINATION_COLOR = "#8B5CF6"

PERIOD_LABELS = {
    RUSH: "Rush Hour (5 PM)",
    OFFPEAK: "Off-Peak (3 AM)",
    COMBINED: "Combined (weighted by trips)",
}


def build_markers(points, coordinates):
    """
    One marker per point that has coordinates and a positive duration.
    Colors and sizes are relative to the drawn set.
    """
    drawable = [p for p in points if p.duration > 0]
    markers = []
    for point, encoding in colorize_points(drawable):
        coords = coordinates.get(point.origin)
        if coords is None:
            logger.debug("No coordinates found for address: %s", point.origin)
            continue
        markers.append(
            {
                "lat": coords.lat,
                "lng": coords.lng,
                "color": encoding.color,
                "rgb": encoding.rgb,
                "radius": 8 + encoding.intensity * 12,
                "label": point.neighborhood,
                "minutes": point.minutes,
                "origin": point.origin,
            }
        )
    logger.info("Rendering %d of %d points", len(markers), len(points))
    return markers


def describe_view(view, destinations=()):
    """
    Short title for the active view, e.g. "Rush Hour (5 PM) - travel time
    per trip - all destinations".
    """
    if view.view_mode == COMPARISON:
        what = "time lost to traffic"
    else:
        what = PERIOD_LABELS[view.time_period] + " - travel time"
    scale = "per week" if view.display_mode == WEEKLY else "per trip"

    target = "all destinations"
    if view.is_single_destination:
        names = {d.id: d.name for d in destinations}
        target = names.get(view.destination_filter, view.destination_filter)

    return f"{what} {scale} - {target}"


def legend_text(points):
    summary = legend_summary(points)
    if summary is None:
        return "Fast / Medium / Slow (no data)"
    return (
        f"Fast: {summary['fast']} min   "
        f"Avg: {summary['average']} min   "
        f"Slow: {summary['slow']} min"
    )


def plot_heatmap(points, coordinates, destinations=(), title=None, save_path=None, show=True):
    """
    Scatter the grid markers (color + size = relative travel time) and the
    destinations on lon/lat axes.
    """
    markers = build_markers(points, coordinates)

    fig, ax = plt.subplots(figsize=(10, 10))
    if markers:
        ax.scatter(
            [m["lng"] for m in markers],
            [m["lat"] for m in markers],
            s=[(m["radius"] * 1.5) ** 2 for m in markers],
            c=[tuple(channel / 255 for channel in m["rgb"]) for m in markers],
            alpha=0.6,
            edgecolors="white",
            linewidths=2,
            zorder=2,
        )
        for m in markers:
            ax.annotate(
                f"{m['label']}\n{m['minutes']} min",
                (m["lng"], m["lat"]),
                fontsize=6,
                ha="center",
                va="bottom",
                xytext=(0, 8),
                textcoords="offset points",
            )

    for destination in destinations:
        ax.scatter(
            [destination.lng],
            [destination.lat],
            s=160,
            c=DESTINATION_COLOR,
            edgecolors="white",
            linewidths=3,
            marker="o",
            zorder=3,
        )
        ax.annotate(destination.name, (destination.lng, destination.lat), fontsize=8, color=DESTINATION_COLOR,
                    xytext=(6, 6), textcoords="offset points")

    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(title or "San Francisco commute heatmap")
    fig.text(0.5, 0.02, legend_text(points), ha="center")

    if save_path is not None:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(save_path, bbox_inches="tight")
        logger.info("Saved heatmap to %s", save_path)

    if show:
        plt.show()
    else:
        plt.close(fig)
    return fig


def summary_frame(points):
    """
    Table of reduced points, fastest first.
    """
    frame = pd.DataFrame(
        [
            {
                "neighborhood": p.neighborhood,
                "origin": p.origin,
                "minutes": p.minutes,
                "duration_s": p.duration,
            }
            for p in points
        ],
        columns=["neighborhood", "origin", "minutes", "duration_s"],
    )
    return frame.sort_values("duration_s", kind="stable").reset_index(drop=True)


def generate_google_maps_link(latlons):
    """
    Given a list of (lat, lon) pairs in order,
    return a Google Maps directions URL.
    """
    base = "https://www.google.com/maps/dir/"
    segments = [f"{lat},{lon}" for lat, lon in latlons]
    return base + "/".join(segments)
