"""Monitor - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components:

    feed fetch -> record snapshot -> novelty tracking -> alert dispatch
    record snapshot + filter criteria -> filtered records -> exports

Only one fetch cycle runs at a time. A trigger that arrives while a cycle
is in flight is coalesced into a single follow-up cycle. The novelty state
is written only by the thread running the cycle.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from typing import Callable

from quakewatch.core.config import Config
from quakewatch.core.earthquake import Earthquake
from quakewatch.core.errors import ExportError, FetchError
from quakewatch.core.export import ExportFile, build_csv_export, export_filename, to_kml
from quakewatch.core.filters import FilterCriteria, default_criteria, filter_earthquakes
from quakewatch.core.formatter import MarkerStyle, style_marker
from quakewatch.core.novelty import NoveltyTracker, count_recent
from quakewatch.shell.alert_dispatcher import AlertDispatcher
from quakewatch.shell.capabilities import FileSaver
from quakewatch.shell.feed_fetcher import FeedFetcher
from quakewatch.shell.kmz_writer import build_kmz_export
from quakewatch.shell.scheduler import PollingScheduler
from quakewatch.shell.usgs_client import USGSClient


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MonitorStatus:
    """Loading and freshness status for display.

    Attributes:
        loading: A fetch is in flight
        last_updated: When the last successful fetch completed
        last_error: Message of the last fetch failure, cleared on success
    """
    loading: bool = False
    last_updated: datetime | None = None
    last_error: str | None = None


@dataclass
class CycleResult:
    """Result of a single refresh cycle.

    Attributes:
        earthquakes_fetched: Records admitted by the fetch
        novel: Records announced this cycle
        error: Fetch error message if the cycle failed
        discarded: True if the result arrived after shutdown
    """
    earthquakes_fetched: int = 0
    novel: list[Earthquake] = field(default_factory=list)
    error: str | None = None
    discarded: bool = False

    @property
    def success(self) -> bool:
        """Returns True if the fetch succeeded and was applied."""
        return self.error is None and not self.discarded

    @property
    def summary(self) -> str:
        """Human-readable summary of the cycle."""
        if self.error:
            return f"Fetch failed: {self.error}"
        if self.discarded:
            return "Fetch discarded after shutdown"
        return f"Fetched {self.earthquakes_fetched} earthquakes, {len(self.novel)} new"


class Monitor:
    """Coordinates earthquake polling, alerting, filtering and export.

    This class wires together:
    - Feed fetcher (USGS data, validated and classified)
    - Novelty tracker (which records to announce)
    - Alert dispatcher (cue, speech and alert requests)
    - Polling scheduler (fixed-interval refresh)
    - File saver (export delivery)
    """

    def __init__(
        self,
        config: Config,
        feed_fetcher: FeedFetcher | None = None,
        dispatcher: AlertDispatcher | None = None,
        file_saver: FileSaver | None = None,
        scheduler: PollingScheduler | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize monitor with configuration.

        Args:
            config: Application configuration
            feed_fetcher: Feed fetcher (created if not provided)
            dispatcher: Alert dispatcher (created if not provided)
            file_saver: Export destination (exports are returned only if None)
            scheduler: Polling scheduler (created if not provided)
            clock: Returns the current UTC instant
        """
        self.config = config
        self.feed_fetcher = feed_fetcher or FeedFetcher(
            USGSClient(
                base_url=config.feed_url,
                timeout=config.request_timeout_seconds,
            )
        )
        self.dispatcher = dispatcher or AlertDispatcher()
        self.file_saver = file_saver
        self.scheduler = scheduler or PollingScheduler(config.polling_interval_seconds)
        self.clock = clock

        self.novelty = NoveltyTracker(
            window=config.novelty_window,
            retention=config.announced_retention,
        )

        self._lock = threading.Lock()
        # Serializes alert dispatch against shutdown's speech cancel
        self._dispatch_lock = threading.RLock()
        self._records: tuple[Earthquake, ...] = ()
        self._criteria = default_criteria(clock().date())
        self._status = MonitorStatus()
        self._fetch_running = False
        self._rerun_requested = False
        self._closed = False

    # ----- read side -----

    @property
    def records(self) -> tuple[Earthquake, ...]:
        """Snapshot of the last successful fetch."""
        with self._lock:
            return self._records

    @property
    def criteria(self) -> FilterCriteria:
        with self._lock:
            return self._criteria

    @property
    def status(self) -> MonitorStatus:
        with self._lock:
            return self._status

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def _filtered_view(self) -> tuple[list[Earthquake], FilterCriteria]:
        with self._lock:
            records, criteria = self._records, self._criteria
        return filter_earthquakes(records, criteria), criteria

    def filtered_records(self) -> list[Earthquake]:
        """Records in the current snapshot matching the current criteria."""
        records, _ = self._filtered_view()
        return records

    def marker_styles(self) -> list[tuple[Earthquake, MarkerStyle]]:
        """Filtered records paired with their map marker style."""
        now = self.clock()
        return [
            (e, style_marker(e, now, self.config.recent_window))
            for e in self.filtered_records()
        ]

    def recent_count(self) -> int:
        """Number of snapshot records inside the recent display window."""
        return count_recent(list(self.records), self.clock(), self.config.recent_window)

    def set_criteria(self, criteria: FilterCriteria) -> list[Earthquake]:
        """Replace the filter criteria and return the re-filtered records."""
        with self._lock:
            self._criteria = criteria
        logger.debug("Filter criteria set to %s", criteria)
        return self.filtered_records()

    # ----- refresh cycle -----

    def refresh_now(self) -> CycleResult | None:
        """Run a refresh cycle, or coalesce into the one in flight.

        Returns:
            Result of the last cycle run by this call, or None if another
            caller's cycle was running and will run once more instead
        """
        with self._lock:
            if self._closed:
                return None
            if self._fetch_running:
                self._rerun_requested = True
                logger.debug("Refresh already running, coalescing trigger")
                return None
            self._fetch_running = True

        try:
            while True:
                result = self._run_cycle()
                with self._lock:
                    if not self._rerun_requested or self._closed:
                        self._fetch_running = False
                        return result
                    self._rerun_requested = False
        except Exception:
            with self._lock:
                self._fetch_running = False
                self._rerun_requested = False
                self._status = replace(self._status, loading=False)
            raise

    def _fetch_window(self) -> tuple[date, date]:
        today = self.clock().date()
        # USGS treats a bare endtime date as midnight, so ask for tomorrow
        return self.config.feed_start_date, today + timedelta(days=1)

    def _run_cycle(self) -> CycleResult:
        """Fetch, replace the snapshot, track novelty and dispatch alerts."""
        with self._lock:
            self._status = replace(self._status, loading=True)

        start_date, end_date = self._fetch_window()

        try:
            earthquakes = self.feed_fetcher.fetch(start_date, end_date, self.config.bounds)
        except FetchError as e:
            logger.error("Failed to fetch earthquakes: %s", str(e))
            with self._lock:
                self._status = replace(self._status, loading=False, last_error=str(e))
            return CycleResult(error=str(e))

        now = self.clock()

        with self._lock:
            if self._closed:
                logger.info("Discarding fetch result received after shutdown")
                return CycleResult(earthquakes_fetched=len(earthquakes), discarded=True)
            self._records = tuple(earthquakes)
            self._status = MonitorStatus(loading=False, last_updated=now)

        novel = self.novelty.update(earthquakes, now)

        logger.info(
            "%d new earthquakes (of %d total)",
            len(novel),
            len(earthquakes),
        )

        if novel:
            with self._dispatch_lock:
                if self.closed:
                    logger.info("Skipping alerts for %d earthquakes after shutdown", len(novel))
                    return CycleResult(earthquakes_fetched=len(earthquakes), discarded=True)
                self.dispatcher.dispatch(novel)

        return CycleResult(earthquakes_fetched=len(earthquakes), novel=novel)

    # ----- exports -----

    def _save(self, export: ExportFile) -> ExportFile:
        if self.file_saver is not None:
            try:
                self.file_saver.save(export)
            except ExportError:
                raise
            except Exception as e:
                raise ExportError(f"Failed to save {export.filename}: {e}") from e
        return export

    def export_csv(self) -> ExportFile:
        """Render the filtered records as CSV and hand them to the file saver.

        Raises:
            ExportError: If saving fails
        """
        records, criteria = self._filtered_view()
        export = build_csv_export(records, criteria, self.config.export_basename)
        logger.info("Exporting %d earthquakes to %s", len(records), export.filename)
        return self._save(export)

    def export_kmz(self) -> ExportFile:
        """Render the filtered records as KMZ and hand them to the file saver.

        Raises:
            ExportError: If the archive cannot be built or saved
        """
        records, criteria = self._filtered_view()
        filename = export_filename(criteria, "kmz", self.config.export_basename)
        export = build_kmz_export(to_kml(records), filename)
        logger.info("Exporting %d earthquakes to %s", len(records), export.filename)
        return self._save(export)

    # ----- lifecycle -----

    def start(self) -> CycleResult | None:
        """Run the first cycle and start polling on the configured interval."""
        result = self.refresh_now()
        if not self.closed:
            self.scheduler.start(self.refresh_now)
        return result

    def shutdown(self) -> None:
        """Stop polling and cancel in-flight speech.

        A fetch still in flight is allowed to finish, but its result is
        discarded.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        self.scheduler.stop()
        with self._dispatch_lock:
            self.dispatcher.cancel()
        logger.info("Monitor shut down")
