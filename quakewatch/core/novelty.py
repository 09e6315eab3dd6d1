"""Novelty tracking - Pure functions plus a small state holder.

A record is "novel" in a cycle when it was not in the previous cycle's
fetch, has never been announced, and occurred within the freshness window.
Announced ids are kept with the instant they were announced so the set can
be bounded: an entry older than the retention period can never pass the
freshness test again, so pruning it cannot cause a repeat alert.

Note: The coordinator owns the NoveltyTracker and is the only writer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from quakewatch.core.earthquake import Earthquake, get_earthquake_ids


# Records older than this are never announced
DEFAULT_NOVELTY_WINDOW = timedelta(hours=1)

# Visual "recently occurred" marking, independent of alerting
DEFAULT_RECENT_WINDOW = timedelta(days=2)

# How long an announced id is remembered
DEFAULT_ANNOUNCED_RETENTION = timedelta(hours=24)


@dataclass(frozen=True)
class NoveltyState:
    """Snapshot of novelty bookkeeping between cycles.

    Attributes:
        seen_last_cycle: IDs returned by the previous fetch
        announced: ID -> instant it was announced
    """
    seen_last_cycle: frozenset[str] = field(default_factory=frozenset)
    announced: dict[str, datetime] = field(default_factory=dict)

    @property
    def announced_ids(self) -> set[str]:
        """IDs that have already been alerted."""
        return set(self.announced)


@dataclass(frozen=True)
class NoveltyUpdate:
    """Result of advancing novelty state by one cycle.

    Attributes:
        novel: Records to announce, in fetch order
        state: State to carry into the next cycle
    """
    novel: list[Earthquake]
    state: NoveltyState


def is_within_window(earthquake: Earthquake, now: datetime, window: timedelta) -> bool:
    """Check if an earthquake occurred within `window` before `now`.

    Pure function.
    """
    return earthquake.time >= now - window


def find_novel_earthquakes(
    earthquakes: list[Earthquake],
    state: NoveltyState,
    now: datetime,
    window: timedelta = DEFAULT_NOVELTY_WINDOW,
) -> list[Earthquake]:
    """Select records that are new this cycle and fresh enough to announce.

    Pure function. Order of `earthquakes` is preserved.

    Args:
        earthquakes: Records from the current fetch
        state: Novelty state from the previous cycle
        now: Current instant
        window: Freshness window

    Returns:
        Novel earthquakes
    """
    return [
        e for e in earthquakes
        if e.id not in state.seen_last_cycle
        and e.id not in state.announced
        and is_within_window(e, now, window)
    ]


def prune_announced(
    announced: dict[str, datetime],
    now: datetime,
    retention: timedelta = DEFAULT_ANNOUNCED_RETENTION,
) -> dict[str, datetime]:
    """Drop announced IDs older than the retention period.

    Pure function.
    """
    cutoff = now - retention
    return {i: at for i, at in announced.items() if at >= cutoff}


def advance_novelty(
    earthquakes: list[Earthquake],
    state: NoveltyState,
    now: datetime,
    window: timedelta = DEFAULT_NOVELTY_WINDOW,
    retention: timedelta | None = DEFAULT_ANNOUNCED_RETENTION,
) -> NoveltyUpdate:
    """Compute the novel records for a cycle and the next state.

    Pure function.

    - announced becomes announced ∪ ids(novel), pruned by retention
    - seen_last_cycle is replaced by the ids of this fetch

    Args:
        earthquakes: Records from the current fetch
        state: Novelty state from the previous cycle
        now: Current instant
        window: Freshness window for announcing
        retention: How long to remember announced IDs (None keeps forever)

    Returns:
        NoveltyUpdate with novel records and the new state
    """
    novel = find_novel_earthquakes(earthquakes, state, now, window)

    announced = dict(state.announced)
    for earthquake in novel:
        announced[earthquake.id] = now

    if retention is not None:
        announced = prune_announced(announced, now, retention)

    return NoveltyUpdate(
        novel=novel,
        state=NoveltyState(
            seen_last_cycle=frozenset(get_earthquake_ids(earthquakes)),
            announced=announced,
        ),
    )


class NoveltyTracker:
    """Holds NoveltyState across cycles for a single coordinator."""

    def __init__(
        self,
        window: timedelta = DEFAULT_NOVELTY_WINDOW,
        retention: timedelta | None = DEFAULT_ANNOUNCED_RETENTION,
        state: NoveltyState | None = None,
    ) -> None:
        self.window = window
        self.retention = retention
        self.state = state or NoveltyState()

    def update(self, earthquakes: list[Earthquake], now: datetime) -> list[Earthquake]:
        """Advance one cycle and return the records to announce."""
        result = advance_novelty(
            earthquakes,
            self.state,
            now,
            window=self.window,
            retention=self.retention,
        )
        self.state = result.state
        return result.novel


def is_recent(
    earthquake: Earthquake,
    now: datetime,
    window: timedelta = DEFAULT_RECENT_WINDOW,
) -> bool:
    """Check if an earthquake should be marked as recently occurred.

    Pure function. Uses the display window, not the alerting window.
    """
    return is_within_window(earthquake, now, window)


def count_recent(
    earthquakes: list[Earthquake],
    now: datetime,
    window: timedelta = DEFAULT_RECENT_WINDOW,
) -> int:
    """Count earthquakes inside the recent display window."""
    return sum(1 for e in earthquakes if is_recent(e, now, window))
