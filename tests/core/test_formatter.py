"""Unit tests for display formatting.

Pure function tests - no mocks needed.
"""

from datetime import datetime, timedelta, timezone

import pytest

from quakewatch.core.earthquake import Earthquake
from quakewatch.core.formatter import (
    format_announcement,
    format_depth,
    format_earthquake_summary,
    format_iso_time,
    format_local_time,
    format_magnitude,
    get_magnitude_color,
    short_location_name,
    style_marker,
)


NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake for testing."""
    return Earthquake(
        id="us7000m1",
        place="52 km NNE of Mekele, Ethiopia",
        magnitude=4.56,
        time=datetime(2024, 3, 1, 9, 30, 5, 120000, tzinfo=timezone.utc),
        longitude=39.7,
        latitude=13.9,
        depth_km=10.0,
        url="https://earthquake.usgs.gov/earthquakes/eventpage/us7000m1",
    )


class TestFormatMagnitude:
    """Tests for format_magnitude() function."""

    def test_one_decimal(self):
        assert format_magnitude(4.56) == "4.6"
        assert format_magnitude(5.0) == "5.0"

    def test_none_is_na(self):
        assert format_magnitude(None) == "N/A"

    def test_custom_sentinel(self):
        assert format_magnitude(None, missing="unknown") == "unknown"


class TestFormatDepth:
    """Tests for format_depth() function."""

    def test_one_decimal(self):
        assert format_depth(10.04) == "10.0"

    def test_none_is_unknown(self):
        assert format_depth(None) == "Unknown"


class TestShortLocationName:
    """Tests for short_location_name() function."""

    def test_directional_phrase(self):
        assert short_location_name("52 km NNE of Mekele, Ethiopia") == "Mekele"

    def test_no_directional_phrase(self):
        assert short_location_name("Afar region, Ethiopia") == "Afar region"

    def test_no_comma(self):
        assert short_location_name("10 km S of Awash") == "Awash"

    def test_trims_whitespace(self):
        assert short_location_name("  Dallol  ") == "Dallol"

    def test_empty(self):
        assert short_location_name("") == "Unknown location"
        assert short_location_name(None) == "Unknown location"


class TestFormatAnnouncement:
    """Tests for format_announcement() function."""

    def test_template(self, sample_earthquake):
        assert format_announcement(sample_earthquake) == (
            "New earthquake detected. Magnitude 4.6 at Mekele."
        )

    def test_unknown_magnitude(self, sample_earthquake):
        quake = Earthquake(**{**sample_earthquake.__dict__, "magnitude": None})
        assert format_announcement(quake) == (
            "New earthquake detected. Magnitude unknown at Mekele."
        )


class TestTimeFormatting:
    """Tests for time formatting helpers."""

    def test_iso_time_has_milliseconds(self, sample_earthquake):
        assert format_iso_time(sample_earthquake.time) == "2024-03-01T09:30:05.120Z"

    def test_local_time_is_eat(self, sample_earthquake):
        assert format_local_time(sample_earthquake.time) == "2024-03-01 12:30:05 EAT"


class TestMagnitudeColor:
    """Tests for marker colors."""

    @pytest.mark.parametrize("magnitude,color", [
        (6.0, "#dc3545"),
        (5.1, "#fd7e14"),
        (4.0, "#ffc107"),
        (3.9, "#6c757d"),
        (None, "#6c757d"),
    ])
    def test_magnitude_color(self, magnitude, color):
        assert get_magnitude_color(magnitude) == color


class TestStyleMarker:
    """Tests for style_marker() function."""

    def test_recent_event_highlighted(self, sample_earthquake):
        style = style_marker(sample_earthquake, NOW)
        assert style.recent is True
        assert style.color == "#ff4444"
        assert style.weight == 3

    def test_old_event_colored_by_magnitude(self, sample_earthquake):
        style = style_marker(sample_earthquake, NOW + timedelta(days=3))
        assert style.recent is False
        assert style.color == "#ffc107"
        assert style.weight == 2

    def test_radius_has_minimum(self, sample_earthquake):
        small = Earthquake(**{**sample_earthquake.__dict__, "magnitude": 1.0})
        assert style_marker(small, NOW).radius == 4
        assert style_marker(sample_earthquake, NOW).radius == pytest.approx(6.84)


class TestFormatEarthquakeSummary:
    """Tests for format_earthquake_summary() function."""

    def test_includes_key_fields(self, sample_earthquake):
        summary = format_earthquake_summary(sample_earthquake)
        assert "M4.6" in summary
        assert "Mekele" in summary
        assert "10.0 km" in summary

    def test_missing_fields(self, sample_earthquake):
        quake = Earthquake(**{
            **sample_earthquake.__dict__,
            "magnitude": None,
            "place": "",
            "depth_km": None,
        })
        summary = format_earthquake_summary(quake)
        assert "MN/A" in summary
        assert "Unknown location" in summary
        assert "Unknown km" in summary
