"""Alert planning - Pure functions.

Turns the novel records of one cycle into the requests the presentation
layer should act on: one spoken announcement per record, a single audio cue
for the cycle, and one headline for the most recent record.
"""

from dataclasses import dataclass, field
from datetime import datetime

from quakewatch.core.earthquake import Earthquake
from quakewatch.core.formatter import (
    format_announcement,
    format_iso_time,
    format_magnitude,
    format_place,
    short_location_name,
)


@dataclass(frozen=True)
class Announcement:
    """A spoken announcement for one novel earthquake.

    Attributes:
        earthquake_id: ID of the announced earthquake
        location: Short location name
        magnitude: Magnitude, None if unknown
        time: Origin time
        text: Phrase to speak
    """
    earthquake_id: str
    location: str
    magnitude: float | None
    time: datetime
    text: str


@dataclass(frozen=True)
class HeadlineAlert:
    """Full-detail alert for the most recent novel earthquake.

    Attributes:
        earthquake_id: ID of the earthquake
        place: Full place string
        magnitude: Magnitude, None if unknown
        time: Origin time
        url: USGS detail link, if any
    """
    earthquake_id: str
    place: str
    magnitude: float | None
    time: datetime
    url: str | None = None

    @property
    def text(self) -> str:
        """Headline text with full-precision time."""
        return (
            f"M{format_magnitude(self.magnitude)} earthquake - {self.place} "
            f"at {format_iso_time(self.time)}"
        )


@dataclass(frozen=True)
class AlertPlan:
    """Everything to request for one cycle.

    Attributes:
        play_cue: Whether to play the audio cue (once per cycle)
        announcements: One per novel earthquake, in order
        headline: Alert for the last novel earthquake
    """
    play_cue: bool = False
    announcements: list[Announcement] = field(default_factory=list)
    headline: HeadlineAlert | None = None

    @property
    def is_empty(self) -> bool:
        return not self.play_cue and not self.announcements and self.headline is None


def make_announcement(earthquake: Earthquake) -> Announcement:
    """Build the announcement for a single earthquake.

    Pure function.
    """
    return Announcement(
        earthquake_id=earthquake.id,
        location=short_location_name(earthquake.place),
        magnitude=earthquake.magnitude,
        time=earthquake.time,
        text=format_announcement(earthquake),
    )


def make_headline(earthquake: Earthquake) -> HeadlineAlert:
    """Build the headline alert for an earthquake.

    Pure function.
    """
    return HeadlineAlert(
        earthquake_id=earthquake.id,
        place=format_place(earthquake.place),
        magnitude=earthquake.magnitude,
        time=earthquake.time,
        url=earthquake.url,
    )


def plan_alerts(novel: list[Earthquake]) -> AlertPlan:
    """Plan the alert requests for a cycle's novel earthquakes.

    Pure function.

    Args:
        novel: Novel earthquakes in fetch order (last is most recent)

    Returns:
        AlertPlan, empty when there is nothing new
    """
    if not novel:
        return AlertPlan()

    return AlertPlan(
        play_cue=True,
        announcements=[make_announcement(e) for e in novel],
        headline=make_headline(novel[-1]),
    )
