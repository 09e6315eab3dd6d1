"""Unit tests for earthquake parsing.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

from datetime import datetime, timezone

from quakewatch.core.earthquake import (
    get_earthquake_ids,
    parse_earthquake,
    parse_earthquakes,
)


# Sample USGS GeoJSON feature for testing
SAMPLE_FEATURE = {
    "type": "Feature",
    "id": "us7000abcd",
    "properties": {
        "mag": 4.6,
        "place": "45 km NE of Semera, Ethiopia",
        "time": 1703001600000,  # 2023-12-19 16:00:00 UTC
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/us7000abcd",
    },
    "geometry": {
        "type": "Point",
        "coordinates": [41.3, 12.1, 10.0],  # lon, lat, depth
    },
}


def _feature(event_id, time_ms, **props):
    return {
        "id": event_id,
        "properties": {"time": time_ms, **props},
        "geometry": {"coordinates": [40.0, 9.0, 10.0]},
    }


class TestParseEarthquake:
    """Tests for parse_earthquake() pure function."""

    def test_parses_valid_feature(self):
        """Should parse a valid GeoJSON feature into Earthquake."""
        result = parse_earthquake(SAMPLE_FEATURE)

        assert result is not None
        assert result.id == "us7000abcd"
        assert result.magnitude == 4.6
        assert result.place == "45 km NE of Semera, Ethiopia"
        assert result.longitude == 41.3
        assert result.latitude == 12.1
        assert result.depth_km == 10.0
        assert result.url.endswith("us7000abcd")

    def test_parses_time_correctly(self):
        """Should convert milliseconds to datetime."""
        result = parse_earthquake(SAMPLE_FEATURE)

        assert result is not None
        expected_time = datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)
        assert result.time == expected_time

    def test_keeps_missing_magnitude_as_none(self):
        """A missing magnitude is not a reason to drop the feature."""
        feature = _feature("a", 1703001600000, place="Afar", mag=None)
        result = parse_earthquake(feature)
        assert result is not None
        assert result.magnitude is None

    def test_missing_optional_fields(self):
        """Place, url and depth may be absent."""
        feature = {
            "id": "a",
            "properties": {"time": 1703001600000},
            "geometry": {"coordinates": [40.0, 9.0, None]},
        }
        result = parse_earthquake(feature)
        assert result is not None
        assert result.place == ""
        assert result.url is None
        assert result.depth_km is None

    def test_returns_none_for_missing_id(self):
        """Should return None if id is missing."""
        feature = {**SAMPLE_FEATURE, "id": None}
        assert parse_earthquake(feature) is None

    def test_returns_none_for_missing_time(self):
        """Should return None if time is missing."""
        feature = {
            "id": "test",
            "properties": {"mag": 3.0},
            "geometry": {"coordinates": [40.0, 9.0, 10.0]},
        }
        assert parse_earthquake(feature) is None

    def test_returns_none_for_two_coordinates(self):
        """Should return None unless coordinates are a triple."""
        feature = {
            "id": "test",
            "properties": {"mag": 3.0, "time": 1703001600000},
            "geometry": {"coordinates": [40.0, 9.0]},
        }
        assert parse_earthquake(feature) is None

    def test_returns_none_for_missing_geometry(self):
        """Should return None if geometry is absent."""
        feature = {"id": "test", "properties": {"time": 1703001600000}, "geometry": None}
        assert parse_earthquake(feature) is None

    def test_returns_none_for_non_dict(self):
        """Should return None for junk entries."""
        assert parse_earthquake(None) is None
        assert parse_earthquake("feature") is None

    def test_returns_none_for_non_dict_properties(self):
        """Properties that are not an object make the feature malformed."""
        feature = {**SAMPLE_FEATURE, "properties": "oops"}
        assert parse_earthquake(feature) is None

    def test_returns_none_for_non_dict_geometry(self):
        """Geometry that is not an object makes the feature malformed."""
        feature = {**SAMPLE_FEATURE, "geometry": [41.3, 12.1, 10.0]}
        assert parse_earthquake(feature) is None

    def test_returns_none_for_non_list_coordinates(self):
        feature = {**SAMPLE_FEATURE, "geometry": {"coordinates": "41.3,12.1,10.0"}}
        assert parse_earthquake(feature) is None

    def test_non_string_place_and_url_become_empty(self):
        """Non-text place and url are treated as absent."""
        feature = _feature("a", 1703001600000, place=42, url=["not", "a", "url"])
        result = parse_earthquake(feature)
        assert result is not None
        assert result.place == ""
        assert result.url is None

    def test_returns_none_for_non_numeric_coordinates(self):
        """Should return None when coordinates are not numbers."""
        feature = _feature("a", 1703001600000)
        feature["geometry"]["coordinates"] = ["x", "y", "z"]
        assert parse_earthquake(feature) is None


class TestParseEarthquakes:
    """Tests for parse_earthquakes() pure function."""

    def test_drops_malformed_features(self):
        """Should keep only admissible features."""
        geojson = {
            "features": [
                SAMPLE_FEATURE,
                {"id": "bad", "properties": {}, "geometry": {"coordinates": []}},
            ]
        }
        result = parse_earthquakes(geojson)
        assert [e.id for e in result] == ["us7000abcd"]

    def test_wrongly_typed_members_do_not_abort(self):
        """A feature with a non-object member is dropped, the rest survive."""
        geojson = {
            "features": [
                {**SAMPLE_FEATURE, "id": "bad-props", "properties": "oops"},
                {**SAMPLE_FEATURE, "id": "bad-geometry", "geometry": [1, 2, 3]},
                SAMPLE_FEATURE,
            ]
        }
        result = parse_earthquakes(geojson)
        assert [e.id for e in result] == ["us7000abcd"]

    def test_sorts_oldest_first(self):
        """The most recent earthquake should be last."""
        geojson = {
            "features": [
                _feature("newest", 3000),
                _feature("oldest", 1000),
                _feature("middle", 2000),
            ]
        }
        result = parse_earthquakes(geojson)
        assert [e.id for e in result] == ["oldest", "middle", "newest"]

    def test_empty_collection(self):
        """Should return empty list when there are no features."""
        assert parse_earthquakes({"features": []}) == []
        assert parse_earthquakes({}) == []


class TestGetEarthquakeIds:
    """Tests for get_earthquake_ids() function."""

    def test_extracts_ids(self):
        geojson = {"features": [_feature("a", 1000), _feature("b", 2000)]}
        assert get_earthquake_ids(parse_earthquakes(geojson)) == {"a", "b"}

    def test_empty_list(self):
        assert get_earthquake_ids([]) == set()
