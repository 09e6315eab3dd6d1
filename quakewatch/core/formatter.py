"""Display formatting - Pure functions.

This module formats earthquake fields into text for announcements, export
files and map markers. Missing values become explicit sentinels.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from quakewatch.core.earthquake import Earthquake
from quakewatch.core.novelty import DEFAULT_RECENT_WINDOW, is_recent

# East Africa Time is UTC+3
EAT = timezone(timedelta(hours=3), name="EAT")

UNKNOWN_LOCATION = "Unknown location"

RECENT_COLOR = "#ff4444"


def format_magnitude(magnitude: float | None, missing: str = "N/A") -> str:
    """Format a magnitude to one decimal place.

    Pure function.
    """
    if magnitude is None:
        return missing
    return f"{magnitude:.1f}"


def format_depth(depth_km: float | None) -> str:
    """Format a depth in km to one decimal place, "Unknown" if absent.

    Pure function.
    """
    if depth_km is None:
        return "Unknown"
    return f"{depth_km:.1f}"


def format_place(place: str | None) -> str:
    """Return the place text, or a sentinel when empty."""
    return place or UNKNOWN_LOCATION


def format_local_time(event_time: datetime) -> str:
    """Format an origin time in East Africa Time for display."""
    return event_time.astimezone(EAT).strftime("%Y-%m-%d %H:%M:%S EAT")


def format_iso_time(event_time: datetime) -> str:
    """Format an origin time as ISO 8601 UTC with milliseconds.

    e.g. 2024-03-01T12:30:05.120Z
    """
    utc = event_time.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def short_location_name(place: str | None) -> str:
    """Reduce a USGS place string to a short spoken name.

    Pure function.

    "52 km NNE of Mekele, Ethiopia" -> "Mekele"
    """
    if not place:
        return UNKNOWN_LOCATION

    name = place
    marker = name.find("of ")
    if marker != -1:
        name = name[marker + len("of "):]

    name = name.split(",", 1)[0].strip()
    return name or UNKNOWN_LOCATION


def format_announcement(earthquake: Earthquake) -> str:
    """Format the spoken announcement for a newly detected earthquake.

    Pure function.
    """
    magnitude = format_magnitude(earthquake.magnitude, missing="unknown")
    location = short_location_name(earthquake.place)
    return f"New earthquake detected. Magnitude {magnitude} at {location}."


def get_magnitude_color(magnitude: float | None) -> str:
    """Get the marker color for a magnitude.

    Pure function.
    """
    if magnitude is None:
        return "#6c757d"
    if magnitude >= 6:
        return "#dc3545"
    if magnitude >= 5:
        return "#fd7e14"
    if magnitude >= 4:
        return "#ffc107"
    return "#6c757d"


def format_earthquake_summary(earthquake: Earthquake) -> str:
    """Format a one-line summary of an earthquake.

    Pure function.

    Args:
        earthquake: Earthquake to summarize

    Returns:
        One-line summary string
    """
    return (
        f"M{format_magnitude(earthquake.magnitude)} - {format_place(earthquake.place)} "
        f"at {format_local_time(earthquake.time)} "
        f"(depth: {format_depth(earthquake.depth_km)} km)"
    )


@dataclass(frozen=True)
class MarkerStyle:
    """How a map marker should be drawn for an earthquake.

    Attributes:
        color: Stroke and fill color
        radius: Circle radius in pixels
        weight: Stroke weight
        recent: Whether the event falls in the recent display window
    """
    color: str
    radius: float
    weight: int
    recent: bool


def style_marker(
    earthquake: Earthquake,
    now: datetime,
    recent_window: timedelta = DEFAULT_RECENT_WINDOW,
) -> MarkerStyle:
    """Compute the marker style for an earthquake.

    Pure function. Recent events are highlighted regardless of magnitude.
    """
    recent = is_recent(earthquake, now, recent_window)
    magnitude = earthquake.magnitude or 0.0

    return MarkerStyle(
        color=RECENT_COLOR if recent else get_magnitude_color(earthquake.magnitude),
        radius=max(magnitude * 1.5, 4),
        weight=3 if recent else 2,
        recent=recent,
    )
