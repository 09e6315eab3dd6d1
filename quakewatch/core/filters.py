"""Record filtering - Pure functions.

Slices the current record snapshot by an inclusive date range and a
minimum magnitude. Filtering never mutates its input.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from quakewatch.core.earthquake import Earthquake


# Earliest start date offered by default
DEFAULT_START_DATE = date(2000, 1, 1)


@dataclass(frozen=True)
class FilterCriteria:
    """Caller-owned filter settings.

    Attributes:
        start_date: Inclusive lower bound, None for no bound
        end_date: Inclusive upper bound, None for no bound
        min_magnitude: Minimum magnitude (inclusive)
    """
    start_date: date | None = None
    end_date: date | None = None
    min_magnitude: float = 0.0

    @property
    def start(self) -> datetime | None:
        """Lower bound as an aware datetime (start of day for dates)."""
        if self.start_date is None:
            return None
        return _as_datetime(self.start_date, time.min)

    @property
    def end(self) -> datetime | None:
        """Upper bound as an aware datetime (end of day for dates)."""
        if self.end_date is None:
            return None
        return _as_datetime(self.end_date, time.max)


def _as_datetime(value: date, day_time: time) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime.combine(value, day_time, tzinfo=timezone.utc)


def default_criteria(today: date) -> FilterCriteria:
    """Initial criteria: everything since 2000-01-01 through today."""
    return FilterCriteria(
        start_date=DEFAULT_START_DATE,
        end_date=today,
        min_magnitude=0.0,
    )


def matches_criteria(earthquake: Earthquake, criteria: FilterCriteria) -> bool:
    """Check if an earthquake passes the filter.

    Pure function. Records without a magnitude never pass.
    """
    if earthquake.time is None or earthquake.magnitude is None:
        return False

    start = criteria.start
    if start is not None and earthquake.time < start:
        return False

    end = criteria.end
    if end is not None and earthquake.time > end:
        return False

    return earthquake.magnitude >= criteria.min_magnitude


def filter_earthquakes(
    earthquakes: list[Earthquake] | tuple[Earthquake, ...],
    criteria: FilterCriteria,
) -> list[Earthquake]:
    """Filter earthquakes by date range and minimum magnitude.

    Pure function, order-preserving and idempotent.

    Args:
        earthquakes: Records to filter
        criteria: Filter settings

    Returns:
        New list with the matching earthquakes
    """
    return [e for e in earthquakes if matches_criteria(e, criteria)]
