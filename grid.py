"""
grid.py

Fixed sampling grid of San Francisco origins. The provider is queried by
address; the coordinate table is only used to place markers on the map.
"""

import logging

import osmnx as ox

from models import GridPoint, LatLng

logger = logging.getLogger(__name__)

UNKNOWN_NEIGHBORHOOD = "Unknown Location"


SF_GRID = (
    # Major intersections and landmarks
    GridPoint("Market St & Montgomery St, San Francisco, CA", "Financial District"),
    GridPoint("Union Square, San Francisco, CA", "Union Square"),
    GridPoint("Chinatown, San Francisco, CA", "Chinatown"),
    GridPoint("North Beach, San Francisco, CA", "North Beach"),
    GridPoint("Fisherman's Wharf, San Francisco, CA", "Fisherman's Wharf"),
    # SOMA and Mission Bay
    GridPoint("SOMA, San Francisco, CA", "SOMA"),
    GridPoint("Mission Bay, San Francisco, CA", "Mission Bay"),
    GridPoint("Potrero Hill, San Francisco, CA", "Potrero Hill"),
    # Mission District
    GridPoint("Mission District, San Francisco, CA", "Mission District"),
    GridPoint("16th Street Mission BART, San Francisco, CA", "16th St Mission"),
    GridPoint("24th Street Mission BART, San Francisco, CA", "24th St Mission"),
    # Castro and Noe Valley
    GridPoint("Castro District, San Francisco, CA", "Castro"),
    GridPoint("Noe Valley, San Francisco, CA", "Noe Valley"),
    # Hayes Valley and Haight
    GridPoint("Hayes Valley, San Francisco, CA", "Hayes Valley"),
    GridPoint("Haight Ashbury, San Francisco, CA", "Haight-Ashbury"),
    # Richmond
    GridPoint("Inner Richmond, San Francisco, CA", "Inner Richmond"),
    GridPoint("Outer Richmond, San Francisco, CA", "Outer Richmond"),
    GridPoint("Geary Blvd & 19th Ave, San Francisco, CA", "Richmond (Geary)"),
    # Sunset
    GridPoint("Inner Sunset, San Francisco, CA", "Inner Sunset"),
    GridPoint("Outer Sunset, San Francisco, CA", "Outer Sunset"),
    # Pacific Heights and Marina
    GridPoint("Pacific Heights, San Francisco, CA", "Pacific Heights"),
    GridPoint("Marina District, San Francisco, CA", "Marina District"),
    GridPoint("Russian Hill, San Francisco, CA", "Russian Hill"),
    GridPoint("Nob Hill, San Francisco, CA", "Nob Hill"),
    GridPoint("Columbus Ave & Broadway, San Francisco, CA", "North Beach (Broadway)"),
    GridPoint("Chestnut St & Fillmore St, San Francisco, CA", "Marina (Chestnut)"),
    GridPoint("Palace of Fine Arts, San Francisco, CA", "Palace of Fine Arts"),
    GridPoint("Fillmore St & California St, San Francisco, CA", "Pac Heights (Fillmore)"),
    GridPoint("Divisadero St & California St, San Francisco, CA", "Pac Heights (Divisadero)"),
    GridPoint("Clement St & 6th Ave, San Francisco, CA", "Inner Richmond (Clement)"),
    GridPoint("Clement St & 19th Ave, San Francisco, CA", "Mid Richmond (Clement)"),
    # Western Addition and Fillmore
    GridPoint("Western Addition, San Francisco, CA", "Western Addition"),
    GridPoint("Fillmore District, San Francisco, CA", "Fillmore"),
    GridPoint("Japantown, San Francisco, CA", "Japantown"),
    GridPoint("Alamo Square, San Francisco, CA", "Alamo Square"),
    # Presidio
    GridPoint("Presidio, San Francisco, CA", "Presidio"),
    GridPoint("Presidio Heights, San Francisco, CA", "Presidio Heights"),
    # Central
    GridPoint("West Portal, San Francisco, CA", "West Portal"),
    GridPoint("Twin Peaks, San Francisco, CA", "Twin Peaks"),
    # BART stations
    GridPoint("Powell Street BART, San Francisco, CA", "Powell BART"),
    GridPoint("Montgomery Street BART, San Francisco, CA", "Montgomery BART"),
    GridPoint("Civic Center BART, San Francisco, CA", "Civic Center BART"),
    # Universities and landmarks
    GridPoint("UCSF Parnassus, San Francisco, CA", "UCSF Parnassus"),
    GridPoint("USF, San Francisco, CA", "University of San Francisco"),
    GridPoint("Golden Gate Park, San Francisco, CA", "Golden Gate Park"),
    # Corridors
    GridPoint("Van Ness Ave & Geary St, San Francisco, CA", "Van Ness Corridor"),
    GridPoint("Market St & Castro St, San Francisco, CA", "Castro Station"),
    GridPoint("Irving St & 19th Ave, San Francisco, CA", "Inner Sunset (Irving)"),
    # Southern Mission
    GridPoint("Bernal Heights, San Francisco, CA", "Bernal Heights"),
    GridPoint("Dogpatch, San Francisco, CA", "Dogpatch"),
)

_NEIGHBORHOODS = {point.address: point.display_name for point in SF_GRID}


# Approximate marker positions
GRID_COORDINATES = {
    "Market St & Montgomery St, San Francisco, CA": LatLng(37.7944, -122.4019),
    "Union Square, San Francisco, CA": LatLng(37.7879, -122.4075),
    "Chinatown, San Francisco, CA": LatLng(37.7901, -122.4046),
    "North Beach, San Francisco, CA": LatLng(37.8006, -122.4103),
    "Fisherman's Wharf, San Francisco, CA": LatLng(37.8084, -122.4089),
    "SOMA, San Francisco, CA": LatLng(37.7749, -122.4194),
    "Mission Bay, San Francisco, CA": LatLng(37.7685, -122.3901),
    "Potrero Hill, San Francisco, CA": LatLng(37.7659, -122.4077),
    "Mission District, San Francisco, CA": LatLng(37.7599, -122.4148),
    "16th Street Mission BART, San Francisco, CA": LatLng(37.7647, -122.4194),
    "24th Street Mission BART, San Francisco, CA": LatLng(37.7521, -122.4186),
    "Castro District, San Francisco, CA": LatLng(37.7609, -122.4350),
    "Noe Valley, San Francisco, CA": LatLng(37.7503, -122.4336),
    "Hayes Valley, San Francisco, CA": LatLng(37.7760, -122.4236),
    "Haight Ashbury, San Francisco, CA": LatLng(37.7692, -122.4481),
    "Inner Richmond, San Francisco, CA": LatLng(37.7800, -122.4647),
    "Outer Richmond, San Francisco, CA": LatLng(37.7756, -122.4944),
    "Geary Blvd & 19th Ave, San Francisco, CA": LatLng(37.7805, -122.4777),
    "Inner Sunset, San Francisco, CA": LatLng(37.7644, -122.4751),
    "Outer Sunset, San Francisco, CA": LatLng(37.7534, -122.4984),
    "Pacific Heights, San Francisco, CA": LatLng(37.7956, -122.4339),
    "Marina District, San Francisco, CA": LatLng(37.8021, -122.4378),
    "Russian Hill, San Francisco, CA": LatLng(37.8014, -122.4189),
    "Nob Hill, San Francisco, CA": LatLng(37.7918, -122.4156),
    "Columbus Ave & Broadway, San Francisco, CA": LatLng(37.7980, -122.4066),
    "Chestnut St & Fillmore St, San Francisco, CA": LatLng(37.8003, -122.4361),
    "Palace of Fine Arts, San Francisco, CA": LatLng(37.8029, -122.4484),
    "Fillmore St & California St, San Francisco, CA": LatLng(37.7889, -122.4339),
    "Divisadero St & California St, San Francisco, CA": LatLng(37.7877, -122.4399),
    "Clement St & 6th Ave, San Francisco, CA": LatLng(37.7829, -122.4643),
    "Clement St & 19th Ave, San Francisco, CA": LatLng(37.7817, -122.4782),
    "Western Addition, San Francisco, CA": LatLng(37.7844, -122.4394),
    "Fillmore District, San Francisco, CA": LatLng(37.7844, -122.4331),
    "Japantown, San Francisco, CA": LatLng(37.7856, -122.4297),
    "Alamo Square, San Francisco, CA": LatLng(37.7756, -122.4339),
    "Presidio, San Francisco, CA": LatLng(37.8021, -122.4647),
    "Presidio Heights, San Francisco, CA": LatLng(37.7889, -122.4594),
    "West Portal, San Francisco, CA": LatLng(37.7394, -122.4661),
    "Twin Peaks, San Francisco, CA": LatLng(37.7544, -122.4478),
    "Powell Street BART, San Francisco, CA": LatLng(37.7844, -122.4078),
    "Montgomery Street BART, San Francisco, CA": LatLng(37.7889, -122.4019),
    "Civic Center BART, San Francisco, CA": LatLng(37.7794, -122.4131),
    "UCSF Parnassus, San Francisco, CA": LatLng(37.7629, -122.4583),
    "USF, San Francisco, CA": LatLng(37.7766, -122.4491),
    "Golden Gate Park, San Francisco, CA": LatLng(37.7694, -122.4862),
    "Van Ness Ave & Geary St, San Francisco, CA": LatLng(37.7870, -122.4208),
    "Market St & Castro St, San Francisco, CA": LatLng(37.7626, -122.4348),
    "Irving St & 19th Ave, San Francisco, CA": LatLng(37.7644, -122.4751),
    "Bernal Heights, San Francisco, CA": LatLng(37.7414, -122.4161),
    "Dogpatch, San Francisco, CA": LatLng(37.7575, -122.3886),
}


def fetch_grid():
    """
    Return the grid origin addresses in catalog order.
    """
    return [point.address for point in SF_GRID]


def neighborhood_for(address: str) -> str:
    return _NEIGHBORHOODS.get(address, UNKNOWN_NEIGHBORHOOD)


def locate_grid_points(addresses, geocode_missing=False):
    """
    Map each origin address to marker coordinates.

    Addresses outside the coordinate table are resolved with OSMnx when
    `geocode_missing` is set; anything still unresolved is left out.
    """
    located = {}
    for address in addresses:
        coords = GRID_COORDINATES.get(address)
        if coords is None and geocode_missing:
            try:
                lat, lon = ox.geocode(address)
                coords = LatLng(lat, lon)
            except Exception as e:
                logger.warning("Could not geocode grid address %r: %s", address, e)
        if coords is None:
            logger.debug("No coordinates found for address: %s", address)
            continue
        located[address] = coords
    return located
