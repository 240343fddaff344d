"""
aggregation.py

Reduce raw per-destination travel-time samples to one value per grid origin
for the currently selected view.

Views combine four choices (see models.ViewConfig):
    time_period          rush | offpeak | combined
    view_mode            individual (trip-weighted travel time)
                         comparison (time lost to traffic: rush - off-peak)
    destination_filter   all | <destination id>
    display_mode         per-trip | weekly

Everything here is pure: no I/O, no mutation of the inputs, and missing or
FAILED samples are handled by leaving origins out, never by raising.
"""

from collections import OrderedDict
from statistics import fmean

from models import (
    COMBINED,
    COMPARISON,
    OFFPEAK,
    RUSH,
    WEEKLY,
    ReducedPoint,
)


# =======================================================
# Join + selection
# =======================================================

def destination_lookup(destinations):
    """
    Index destinations by id. Sample sets whose id is not in here belong to
    destinations removed after the fetch and contribute nothing.
    """
    return {destination.id: destination for destination in destinations}


def _resolve_periods(store, time_period):
    if time_period == COMBINED:
        if store.is_empty(RUSH) or store.is_empty(OFFPEAK):
            return ()
        return (RUSH, OFFPEAK)
    return (time_period,)


def _is_selected(destination_id, config):
    return not config.is_single_destination or destination_id == config.destination_filter


def _weighted_contributions(store, lookup, config):
    """
    Yield (period, sample_set, weight) for every sample set that carries
    weight under `config`. Zero-weight pairs are skipped here, so they never
    reach a weighted sum.
    """
    for period in _resolve_periods(store, config.time_period):
        for sample_set in store.get(period):
            if not _is_selected(sample_set.destination_id, config):
                continue
            destination = lookup.get(sample_set.destination_id)
            if destination is None:
                continue
            weight = destination.trips_for(period)
            if weight <= 0:
                continue
            yield period, sample_set, weight


def _ok_results(sample_set):
    # a missing duration parses as 0 and counts as no sample
    return (result for result in sample_set.results if result.is_ok and result.duration > 0)


# =======================================================
# Individual view: trip-weighted mean travel time
# =======================================================

def _reduce_individual(store, lookup, config):
    # origin -> [weighted duration sum, weight sum, neighborhood]
    totals = OrderedDict()
    for _, sample_set, weight in _weighted_contributions(store, lookup, config):
        for result in _ok_results(sample_set):
            entry = totals.setdefault(result.origin, [0.0, 0, result.neighborhood])
            entry[0] += result.duration * weight
            entry[1] += weight

    return [
        ReducedPoint(origin=origin, neighborhood=neighborhood, duration=weighted / weight)
        for origin, (weighted, weight, neighborhood) in totals.items()
        if weight > 0
    ]


# =======================================================
# Comparison view: traffic delay
# =======================================================

def _reduce_comparison_all(store, lookup):
    """
    Simple (unweighted) mean across destinations, rush and off-peak averaged
    independently, then subtracted.
    """
    durations = {RUSH: OrderedDict(), OFFPEAK: OrderedDict()}
    neighborhoods = {}

    for period in (RUSH, OFFPEAK):
        for sample_set in store.get(period):
            destination = lookup.get(sample_set.destination_id)
            if destination is None or destination.total_trips <= 0:
                continue
            for result in _ok_results(sample_set):
                durations[period].setdefault(result.origin, []).append(result.duration)
                neighborhoods.setdefault(result.origin, result.neighborhood)

    points = []
    for origin, rush_durations in durations[RUSH].items():
        offpeak_durations = durations[OFFPEAK].get(origin)
        if not offpeak_durations:
            continue
        delay = fmean(rush_durations) - fmean(offpeak_durations)
        if delay <= 0:
            continue
        points.append(ReducedPoint(origin=origin, neighborhood=neighborhoods[origin], duration=delay))
    return points


def _first_ok_by_origin(sample_sets, destination_id):
    samples = OrderedDict()
    for sample_set in sample_sets:
        if sample_set.destination_id != destination_id:
            continue
        for result in _ok_results(sample_set):
            samples.setdefault(result.origin, result)
    return samples


def _reduce_comparison_single(store, lookup, destination_id):
    destination = lookup.get(destination_id)
    if destination is None or destination.rush_trips <= 0:
        return []

    rush = _first_ok_by_origin(store.get(RUSH), destination_id)
    offpeak = _first_ok_by_origin(store.get(OFFPEAK), destination_id)

    points = []
    for origin, rush_sample in rush.items():
        offpeak_sample = offpeak.get(origin)
        if offpeak_sample is None:
            continue
        delay = rush_sample.duration - offpeak_sample.duration
        if delay <= 0:
            continue
        points.append(ReducedPoint(origin=origin, neighborhood=rush_sample.neighborhood, duration=delay))
    return points


def _reduce_comparison(store, lookup, config):
    if store.is_empty(RUSH) or store.is_empty(OFFPEAK):
        return []
    if config.is_single_destination:
        return _reduce_comparison_single(store, lookup, config.destination_filter)
    return _reduce_comparison_all(store, lookup)


# =======================================================
# Weekly scaling
# =======================================================

def weekly_trip_count(store, destinations, config) -> int:
    """
    Trips per week behind the current selection.

    Individual views sum the applicable trip count of every contributing
    (destination, period) pair. Comparison views count rush trips only,
    since the delay is paid once per rush-hour trip.
    """
    lookup = destination_lookup(destinations)

    if config.view_mode == COMPARISON:
        if config.is_single_destination:
            destination = lookup.get(config.destination_filter)
            return destination.rush_trips if destination is not None else 0
        fetched = {s.destination_id for s in store.get(RUSH)}
        return sum(
            lookup[destination_id].rush_trips
            for destination_id in fetched
            if destination_id in lookup and lookup[destination_id].total_trips > 0
        )

    counted = {}
    for period, sample_set, weight in _weighted_contributions(store, lookup, config):
        counted[(period, sample_set.destination_id)] = weight
    return sum(counted.values())


# =======================================================
# Entry point
# =======================================================

def reduce_travel_times(store, destinations, config):
    """
    Reduce `store` to one ReducedPoint per origin under `config`.

    store         RawSampleStore (rush / offpeak slots of DestinationSampleSet)
    destinations  current Destination objects; the join key is the id
    config        ViewConfig

    Durations are seconds per trip, or per week when display_mode is
    "weekly". Origins without a usable sample are absent from the result.
    """
    destinations = list(destinations)
    lookup = destination_lookup(destinations)

    if config.view_mode == COMPARISON:
        points = _reduce_comparison(store, lookup, config)
    else:
        points = _reduce_individual(store, lookup, config)

    if config.display_mode == WEEKLY and points:
        trips = weekly_trip_count(store, destinations, config)
        points = [
            ReducedPoint(origin=p.origin, neighborhood=p.neighborhood, duration=p.duration * trips)
            for p in points
        ]
    return points
