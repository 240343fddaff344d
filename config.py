"""
config.py

Global configuration for the commute heatmap.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Google Maps Platform key (Routes API + Geocoding API)
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")

ROUTES_API_URL = "https://routes.googleapis.com/distanceMatrix/v2:computeRouteMatrix"
ROUTES_FIELD_MASK = "originIndex,destinationIndex,duration,distanceMeters,status,condition"
GEOCODE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"

# "google" or "osm" (Nominatim through OSMnx, no key needed)
GEOCODER = os.getenv("COMMUTE_GEOCODER", "google")

# Departure profiles, local clock hour in TIMEZONE
TIMEZONE = "America/Los_Angeles"
RUSH_HOUR = 17      # 5 PM
OFFPEAK_HOUR = 3    # 3 AM

# Upstream rate limiting
BATCH_SIZE = 25
BATCH_DELAY_SECONDS = 0.2
DESTINATION_DELAY_SECONDS = 0.5
REQUEST_TIMEOUT_SECONDS = 30

# Destination trip counts (per week)
MAX_TRIPS_PER_WEEK = 20
DEFAULT_RUSH_TRIPS = 1
DEFAULT_OFFPEAK_TRIPS = 1

# Map output
MAP_OUTPUT_PATH = "output/commute_heatmap.png"
SUMMARY_CSV_PATH = "output/commute_summary.csv"

# Debug flag
DEBUG = os.getenv("COMMUTE_DEBUG", "0") == "1"
