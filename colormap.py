"""
colormap.py

Map reduced durations to marker color and size.

The scale is relative: 0 is the fastest point of the current result set and
1 the slowest, so colors have to be recomputed whenever the set changes.
"""

import math

from models import ColorEncoding

MIN_INTENSITY = 0.3
MAX_INTENSITY = 1.0


def normalize(duration, min_duration, max_duration) -> float:
    """
    Linear position of `duration` in [min, max], clamped to [0, 1].
    A degenerate range (max <= min) maps everything to 0.
    """
    if max_duration <= min_duration:
        return 0.0
    value = (duration - min_duration) / (max_duration - min_duration)
    return max(0.0, min(1.0, value))


def colorize(duration, min_duration, max_duration) -> ColorEncoding:
    """
    Green (fast) -> yellow -> red (slow), plus a size intensity in [0.3, 1.0].
    """
    value = normalize(duration, min_duration, max_duration)

    if value <= 0.5:
        # green -> yellow
        red = math.floor(255 * value * 2)
        green = 255
    else:
        # yellow -> red
        red = 255
        green = math.floor(255 * (1 - (value - 0.5) * 2))
    blue = 0

    return ColorEncoding(
        color=f"rgb({red},{green},{blue})",
        intensity=MIN_INTENSITY + value * (MAX_INTENSITY - MIN_INTENSITY),
        rgb=(red, green, blue),
    )


def duration_range(points):
    """(min, max) duration of `points`, or None for an empty set."""
    durations = [p.duration for p in points]
    if not durations:
        return None
    return min(durations), max(durations)


def colorize_points(points):
    """
    Encode every point against the set's own min/max.
    Returns a list of (point, ColorEncoding) pairs in input order.
    """
    points = list(points)
    bounds = duration_range(points)
    if bounds is None:
        return []
    low, high = bounds
    return [(p, colorize(p.duration, low, high)) for p in points]


def legend_summary(points):
    """
    Fast / average / slow values in whole minutes, or None when there is
    nothing to show.
    """
    durations = [p.duration for p in points]
    if not durations:
        return None
    return {
        "fast": round(min(durations) / 60),
        "average": round(sum(durations) / len(durations) / 60),
        "slow": round(max(durations) / 60),
        "count": len(durations),
    }
