"""
main.py

Command-line front end for the commute heatmap.
Review destinations, load traffic data once, then explore views for free.
"""

import logging
import os

import config
from aggregation import reduce_travel_times
from destinations import DestinationSet, default_destinations
from errors import CommuteHeatmapError, GeocodingError, TrafficLoadError
from geocoding import make_geocoder
from grid import locate_grid_points
from models import (
    ALL_DESTINATIONS,
    COMBINED,
    COMPARISON,
    INDIVIDUAL,
    OFFPEAK,
    PER_TRIP,
    RUSH,
    WEEKLY,
    ViewConfig,
)
from route_matrix import RouteMatrixClient
from sample_store import TrafficDataLoader
from visualization import (
    describe_view,
    generate_google_maps_link,
    legend_text,
    plot_heatmap,
    summary_frame,
)

MAX_NEW_DESTINATIONS = 5


def configure_logging(debug=config.DEBUG):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(module)s] %(message)s",
    )


def prompt_trips(label, default):
    """
    Ask for a weekly trip count; blank keeps the default.
    """
    while True:
        raw = input(f"  {label} trips/week [default={default}]: ").strip()
        if raw == "":
            return default
        try:
            value = int(raw)
        except ValueError:
            print("  Please enter a whole number.")
            continue
        if 0 <= value <= config.MAX_TRIPS_PER_WEEK:
            return value
        print(f"  Please enter a number between 0 and {config.MAX_TRIPS_PER_WEEK}.")


def print_destinations(destinations):
    print("\nDestinations:")
    for i, d in enumerate(destinations, start=1):
        print(f"  {i}) {d.name}: {d.address}  [rush {d.rush_trips}/wk, off-peak {d.offpeak_trips}/wk]")
    print(f"Total weekly trips: {destinations.total_weekly_trips()}")


def prompt_new_destinations(destinations, max_new=MAX_NEW_DESTINATIONS):
    """
    Ask the user for up to `max_new` extra destinations.
    A destination whose address cannot be geocoded is not added.
    """
    print(f"\nAdd up to {max_new} destinations.")
    print("Press Enter with no name to finish.\n")

    added = 0
    while added < max_new:
        name = input(f"Destination #{added + 1} name (or press Enter to stop): ").strip()
        if name == "":
            break
        address = input("  Address: ").strip()
        rush = prompt_trips("Rush hour", config.DEFAULT_RUSH_TRIPS)
        offpeak = prompt_trips("Off-peak", config.DEFAULT_OFFPEAK_TRIPS)
        try:
            destination = destinations.add(name, address, rush, offpeak)
        except GeocodingError as e:
            print(f"  Geocoding Error: {e}")
            continue
        except ValueError as e:
            print(f"  Invalid destination: {e}")
            continue
        print(f"  Located at {destination.lat:.4f}, {destination.lng:.4f}")
        added += 1
    return added


def prompt_choice(question, options, default):
    """
    options: list of (value, label). Returns the chosen value.
    """
    print(f"\n{question}")
    for i, (_, label) in enumerate(options, start=1):
        print(f"  {i}) {label}")
    raw = input(f"Choose 1-{len(options)} [default={default}]: ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(options):
        return options[int(raw) - 1][0]
    return options[default - 1][0]


def prompt_view(destinations):
    view_mode = prompt_choice(
        "View:",
        [(INDIVIDUAL, "Travel time"), (COMPARISON, "Time lost to traffic (rush - off-peak)")],
        default=1,
    )

    time_period = RUSH
    if view_mode == INDIVIDUAL:
        time_period = prompt_choice(
            "Time period:",
            [(RUSH, "Rush hour (5 PM)"), (OFFPEAK, "Off-peak (3 AM)"), (COMBINED, "Combined (weighted by trips)")],
            default=1,
        )

    destination_filter = prompt_choice(
        "Destinations:",
        [(ALL_DESTINATIONS, "All destinations")] + [(d.id, d.name) for d in destinations],
        default=1,
    )
    display_mode = prompt_choice(
        "Show durations:",
        [(PER_TRIP, "Per trip"), (WEEKLY, "Weekly total")],
        default=1,
    )
    return ViewConfig(
        time_period=time_period,
        view_mode=view_mode,
        destination_filter=destination_filter,
        display_mode=display_mode,
    )


def show_view(store, destinations, view, coordinates):
    points = reduce_travel_times(store, destinations, view)
    title = describe_view(view, destinations)

    print(f"\n=== {title} ===")
    if not points:
        print("No travel-time data for this view.")
        return points

    table = summary_frame(points)
    print(table.to_string(index=False))
    print(legend_text(points))
    os.makedirs(os.path.dirname(config.SUMMARY_CSV_PATH), exist_ok=True)
    table.to_csv(config.SUMMARY_CSV_PATH, index=False)

    fastest = coordinates.get(table.loc[0, "origin"])
    target = next(iter(destinations), None)
    if fastest is not None and target is not None:
        print("\nGoogle Maps directions from the fastest point:")
        print(generate_google_maps_link([(fastest.lat, fastest.lng), (target.lat, target.lng)]))

    try:
        plot_heatmap(points, coordinates, destinations, title=title,
                     save_path=config.MAP_OUTPUT_PATH, show=False)
        print(f"\nMap saved to {config.MAP_OUTPUT_PATH}")
    except (OSError, ValueError) as e:
        print(f"[main] Could not plot heatmap: {e}")
    return points


def main():
    configure_logging()
    print("=== San Francisco Commute Heatmap ===")

    try:
        geocoder = make_geocoder()
        client = RouteMatrixClient()
    except CommuteHeatmapError as e:
        print(f"[main] {e}")
        return 1

    # 1. Destinations
    destinations = DestinationSet(geocoder, default_destinations())
    print_destinations(destinations)
    prompt_new_destinations(destinations)
    print_destinations(destinations)

    # 2. Load traffic data (rush, then off-peak)
    loader = TrafficDataLoader(client)
    print("\nLoading traffic data...")
    try:
        store = loader.load_all_data(destinations)
    except TrafficLoadError as e:
        print(f"[main] {e}")
        return 1

    coordinates = locate_grid_points(loader.origins)

    # 3. Views are computed from the loaded samples, no new requests
    while True:
        view = prompt_view(destinations)
        show_view(store, destinations, view, coordinates)
        again = input("\nTry another view? [y/N]: ").strip().lower()
        if again != "y":
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
