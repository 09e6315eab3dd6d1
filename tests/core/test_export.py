"""Unit tests for CSV and KML export.

Pure function tests - no mocks needed.
"""

import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone

import pytest

from quakewatch.core.earthquake import Earthquake
from quakewatch.core.export import (
    CSV_HEADERS,
    CSV_MEDIA_TYPE,
    KML_NAMESPACE,
    build_csv_export,
    export_filename,
    format_csv_row,
    format_placemark_description,
    to_csv,
    to_kml,
)
from quakewatch.core.filters import FilterCriteria


NS = {"kml": KML_NAMESPACE}


def parse_kml(earthquakes):
    return ET.fromstring(to_kml(earthquakes).encode("utf-8"))


@pytest.fixture
def earthquakes():
    """Two complete records and one with every optional field missing."""
    return [
        Earthquake(
            id="us1",
            place="52 km NNE of Mekele, Ethiopia",
            magnitude=4.5,
            time=datetime(2024, 3, 1, 9, 30, 0, tzinfo=timezone.utc),
            longitude=39.71234567,
            latitude=13.9,
            depth_km=10.456,
            url="https://earthquake.usgs.gov/earthquakes/eventpage/us1",
        ),
        Earthquake(
            id="us2",
            place="Afar region",
            magnitude=3.25,
            time=datetime(2024, 3, 2, 0, 0, 0, tzinfo=timezone.utc),
            longitude=41.0,
            latitude=12.5,
            depth_km=5.0,
            url="https://earthquake.usgs.gov/earthquakes/eventpage/us2",
        ),
        Earthquake(
            id="us3",
            place="",
            magnitude=None,
            time=datetime(2024, 3, 3, 0, 0, 0, tzinfo=timezone.utc),
            longitude=40.0,
            latitude=9.0,
            depth_km=None,
            url=None,
        ),
    ]


class TestToCsv:
    """Tests for to_csv() function."""

    def test_starts_with_bom(self, earthquakes):
        assert to_csv(earthquakes).startswith("\ufeff")

    def test_header(self, earthquakes):
        first_line = to_csv(earthquakes).lstrip("\ufeff").split("\n")[0]
        assert first_line == "id,place,magnitude,time,longitude,latitude,depth,url"
        assert len(CSV_HEADERS) == 8

    def test_line_count(self, earthquakes):
        """Header plus one line per record."""
        assert len(to_csv(earthquakes).split("\n")) == len(earthquakes) + 1

    def test_empty_has_only_header(self):
        assert len(to_csv([]).split("\n")) == 1

    def test_place_with_comma_is_quoted(self, earthquakes):
        row = format_csv_row(earthquakes[0])
        assert row.startswith('us1,"52 km NNE of Mekele, Ethiopia",')

    def test_place_without_comma_not_quoted(self, earthquakes):
        assert format_csv_row(earthquakes[1]).startswith("us2,Afar region,")

    def test_embedded_quotes_not_escaped(self, earthquakes):
        quake = Earthquake(**{**earthquakes[1].__dict__, "place": 'near "Dallol", Afar'})
        assert '"near "Dallol", Afar"' in format_csv_row(quake)

    def test_number_precision(self, earthquakes):
        fields = format_csv_row(earthquakes[0]).split('"')[-1].split(",")
        # after the quoted place: "", magnitude, time, lon, lat, depth, url
        assert fields[1:] == [
            "4.50",
            "2024-03-01T09:30:00.000Z",
            "39.712346",
            "13.900000",
            "10.46",
            "https://earthquake.usgs.gov/earthquakes/eventpage/us1",
        ]

    def test_missing_values_are_empty(self, earthquakes):
        assert format_csv_row(earthquakes[2]) == (
            "us3,,,2024-03-03T00:00:00.000Z,40.000000,9.000000,,"
        )


class TestExportFilename:
    """Tests for export file naming."""

    def test_embeds_date_range(self):
        criteria = FilterCriteria(start_date=date(2000, 1, 1), end_date=date(2024, 3, 1))
        assert export_filename(criteria, "csv") == "ethiopia_earthquakes_2000-01-01_to_2024-03-01.csv"

    def test_unset_bounds(self):
        assert export_filename(FilterCriteria(), "kmz") == "ethiopia_earthquakes_any_to_any.kmz"

    def test_csv_export_file(self, earthquakes):
        criteria = FilterCriteria(start_date=date(2024, 3, 1), end_date=date(2024, 3, 3))
        export = build_csv_export(earthquakes, criteria)
        assert export.filename == "ethiopia_earthquakes_2024-03-01_to_2024-03-03.csv"
        assert export.media_type == CSV_MEDIA_TYPE
        assert export.content.startswith(b"\xef\xbb\xbf")


class TestToKml:
    """Tests for to_kml() function."""

    def test_well_formed(self, earthquakes):
        root = parse_kml(earthquakes)
        assert root.tag == f"{{{KML_NAMESPACE}}}kml"

    def test_one_placemark_per_record_in_order(self, earthquakes):
        root = parse_kml(earthquakes)
        placemarks = root.findall(".//kml:Placemark", NS)
        assert [p.get("id") for p in placemarks] == ["us1", "us2", "us3"]

    def test_point_elevation_is_zero(self, earthquakes):
        root = parse_kml(earthquakes)
        for coords in root.findall(".//kml:Point/kml:coordinates", NS):
            lon, lat, elevation = coords.text.split(",")
            assert elevation == "0"

    def test_coordinates_lon_lat_order(self, earthquakes):
        root = parse_kml(earthquakes[:1])
        coords = root.find(".//kml:Point/kml:coordinates", NS)
        assert coords.text == "39.71234567,13.9,0"

    def test_placemark_name(self, earthquakes):
        root = parse_kml(earthquakes)
        names = [p.find("kml:name", NS).text for p in root.findall(".//kml:Placemark", NS)]
        assert names == [
            "M4.5 - 52 km NNE of Mekele, Ethiopia",
            "M3.2 - Afar region",
            "MN/A - Unknown location",
        ]

    def test_shared_style(self, earthquakes):
        root = parse_kml(earthquakes)
        assert len(root.findall(".//kml:Style", NS)) == 1
        style_urls = {p.find("kml:styleUrl", NS).text for p in root.findall(".//kml:Placemark", NS)}
        assert style_urls == {"#earthquakeIcon"}

    def test_extended_data(self, earthquakes):
        root = parse_kml(earthquakes)
        placemark = root.findall(".//kml:Placemark", NS)[2]
        data = {
            d.get("name"): d.find("kml:value", NS).text
            for d in placemark.findall("kml:ExtendedData/kml:Data", NS)
        }
        assert data == {
            "magnitude": "Unknown",
            "depth": "Unknown",
            "time": "2024-03-03T00:00:00.000Z",
        }

    def test_control_characters_stripped(self, earthquakes):
        """Text with XML-illegal characters still yields a parseable document."""
        quake = Earthquake(**{
            **earthquakes[0].__dict__,
            "place": "10 km N of\x01 Semera, Ethiopia",
            "url": "https://example.com/\x0bevent",
        })
        root = parse_kml([quake])
        placemark = root.find(".//kml:Placemark", NS)
        assert placemark.find("kml:name", NS).text == "M4.5 - 10 km N of Semera, Ethiopia"
        assert "https://example.com/event" in placemark.find("kml:description", NS).text

    def test_empty_document(self):
        root = parse_kml([])
        assert root.findall(".//kml:Placemark", NS) == []


class TestPlacemarkDescription:
    """Tests for format_placemark_description() function."""

    def test_contains_fields_and_link(self, earthquakes):
        html = format_placemark_description(earthquakes[0])
        assert "4.5" in html
        assert "Mekele" in html
        assert "2024-03-01 12:30:00 EAT" in html
        assert "10.5 km" in html
        assert 'href="https://earthquake.usgs.gov/earthquakes/eventpage/us1"' in html

    def test_no_link_without_url(self, earthquakes):
        assert "href" not in format_placemark_description(earthquakes[2])
