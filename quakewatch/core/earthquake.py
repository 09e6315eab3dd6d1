"""Earthquake data models and parsing - Pure functions.

This module handles parsing USGS GeoJSON data into typed Earthquake objects.
A feature is admitted only when it carries an id, an origin time and a
three-element coordinate triple; every other field is optional and is
rendered downstream as an explicit sentinel.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake record.

    Attributes:
        id: Unique USGS event ID
        place: Human-readable location description (may be empty)
        magnitude: Earthquake magnitude, None when the feed has none
        time: Origin time (UTC)
        longitude: Epicenter longitude
        latitude: Epicenter latitude
        depth_km: Depth in kilometers, None when unknown
        url: USGS event detail URL (optional)
    """
    id: str
    place: str
    magnitude: float | None
    time: datetime
    longitude: float
    latitude: float
    depth_km: float | None = None
    url: str | None = None


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def parse_earthquake(feature: dict[str, Any]) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if the
    feature is structurally incomplete.

    Args:
        feature: GeoJSON feature dict from USGS API

    Returns:
        Earthquake object or None if parsing fails
    """
    if not isinstance(feature, dict):
        return None

    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        if not isinstance(props, dict) or not isinstance(geometry, dict):
            return None

        coords = geometry.get("coordinates") or []
        if not isinstance(coords, (list, tuple)):
            return None

        event_id = feature.get("id")
        if not event_id:
            return None

        if len(coords) != 3:
            return None

        # USGS uses milliseconds since epoch
        time_ms = props.get("time")
        if time_ms is None:
            return None

        event_time = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)

        return Earthquake(
            id=str(event_id),
            place=_optional_str(props.get("place")) or "",
            magnitude=_optional_float(props.get("mag")),
            time=event_time,
            longitude=float(coords[0]),
            latitude=float(coords[1]),
            depth_km=_optional_float(coords[2]),
            url=_optional_str(props.get("url")),
        )
    except (KeyError, TypeError, ValueError, OverflowError, OSError):
        return None


def parse_earthquakes(geojson: dict[str, Any]) -> list[Earthquake]:
    """Parse USGS GeoJSON response into list of Earthquakes.

    Pure function: drops malformed features silently.

    Args:
        geojson: Full GeoJSON FeatureCollection from USGS API

    Returns:
        List of valid Earthquake objects, sorted by time (oldest first)
    """
    features = geojson.get("features") or []
    earthquakes = []

    for feature in features:
        earthquake = parse_earthquake(feature)
        if earthquake is not None:
            earthquakes.append(earthquake)

    # Oldest first, so the last element is the most recent event
    return sorted(earthquakes, key=lambda e: e.time)


def get_earthquake_ids(earthquakes: list[Earthquake]) -> set[str]:
    """Extract IDs from a list of earthquakes."""
    return {e.id for e in earthquakes}
