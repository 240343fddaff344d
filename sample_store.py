"""
sample_store.py

Raw travel-time samples per time period, and the load step that fills them.

Each completed load replaces a whole time-period slot. Nothing is merged:
after the destination set changes, a full reload is needed to bring the
store back in line.
"""

import logging
import threading

from errors import LoadInProgressError, ProviderError, TrafficLoadError
from grid import fetch_grid
from models import FETCH_PERIODS, OFFPEAK, RUSH

logger = logging.getLogger(__name__)


def _check_period(time_period):
    if time_period not in FETCH_PERIODS:
        raise ValueError(f"Unknown time period: {time_period!r}")


class RawSampleStore:
    """
    {rush: [DestinationSampleSet], offpeak: [DestinationSampleSet]}
    """

    def __init__(self, rush=None, offpeak=None):
        self._slots = {
            RUSH: list(rush or []),
            OFFPEAK: list(offpeak or []),
        }
        self._locks = {period: threading.Lock() for period in FETCH_PERIODS}

    @property
    def rush(self):
        return self._slots[RUSH]

    @property
    def offpeak(self):
        return self._slots[OFFPEAK]

    def get(self, time_period):
        _check_period(time_period)
        return self._slots[time_period]

    def replace(self, time_period, sample_sets):
        _check_period(time_period)
        with self._locks[time_period]:
            self._slots[time_period] = list(sample_sets)

    def is_empty(self, time_period):
        return not self.get(time_period)

    def destination_ids(self, time_period=None):
        periods = FETCH_PERIODS if time_period is None else (time_period,)
        ids = set()
        for period in periods:
            ids.update(s.destination_id for s in self.get(period))
        return ids

    def clear(self):
        for period in FETCH_PERIODS:
            self.replace(period, [])


class TrafficDataLoader:
    """
    Fetch orchestration: grid x destinations for one period at a time,
    rush before off-peak, never two loads at once.
    """

    def __init__(self, client, store=None, origins=None):
        self.client = client
        self.store = store if store is not None else RawSampleStore()
        self.origins = list(origins) if origins is not None else fetch_grid()
        self._busy = False
        self._busy_lock = threading.Lock()

    @property
    def is_loading(self):
        return self._busy

    def load_period(self, destinations, time_period):
        """
        Fetch every destination for `time_period` and replace that slot.
        On a hard provider failure the slot keeps its previous contents.
        """
        _check_period(time_period)
        destinations = list(destinations)
        logger.info("Starting %s data fetch for %d addresses", time_period, len(self.origins))

        try:
            sample_sets = self.client.fetch_travel_times_multi_destination(
                self.origins, destinations, time_period
            )
        except ProviderError as e:
            logger.error("Error fetching %s travel times: %s", time_period, e)
            raise TrafficLoadError(f"Loading {time_period} travel times failed: {e}") from e

        self.store.replace(time_period, sample_sets)
        logger.info(
            "Stored %d destination sample sets for %s", len(sample_sets), time_period
        )
        return sample_sets

    def load_all_data(self, destinations):
        """
        Load rush data to completion, then off-peak.
        """
        with self._busy_lock:
            if self._busy:
                raise LoadInProgressError("A traffic data load is already in progress")
            self._busy = True

        try:
            destinations = list(destinations)
            for period in FETCH_PERIODS:
                self.load_period(destinations, period)
        finally:
            self._busy = False
        return self.store

    def stale_destination_ids(self, destinations):
        """Ids with samples in the store but no longer in the destination set."""
        current = {d.id for d in destinations}
        return self.store.destination_ids() - current

    def missing_destination_ids(self, destinations):
        """Ids in the destination set that have no samples for some period."""
        missing = set()
        for period in FETCH_PERIODS:
            fetched = self.store.destination_ids(period)
            missing.update(d.id for d in destinations if d.id not in fetched)
        return missing
