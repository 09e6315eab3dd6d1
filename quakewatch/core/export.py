"""Export serialization - Pure functions.

Renders a filtered record set as CSV text or as a KML document. Both
serializers are total: absent optional fields become empty fields or
"Unknown" sentinels.

CSV limitation: a place containing a comma is wrapped in double quotes, but
double quotes inside the place are written as-is, not doubled.

KML text drops control characters that XML 1.0 cannot carry.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from quakewatch.core.earthquake import Earthquake
from quakewatch.core.filters import FilterCriteria
from quakewatch.core.formatter import (
    format_depth,
    format_iso_time,
    format_local_time,
    format_magnitude,
    format_place,
)


CSV_MEDIA_TYPE = "text/csv"
KMZ_MEDIA_TYPE = "application/vnd.google-earth.kmz"

CSV_HEADERS = ("id", "place", "magnitude", "time", "longitude", "latitude", "depth", "url")

BYTE_ORDER_MARK = "\ufeff"

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
KML_STYLE_ID = "earthquakeIcon"
KML_ICON_HREF = "http://maps.google.com/mapfiles/kml/shapes/earthquake.png"

DEFAULT_BASENAME = "ethiopia_earthquakes"

# Characters XML 1.0 forbids even when escaped
XML_ILLEGAL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f]")


@dataclass(frozen=True)
class ExportFile:
    """A rendered export ready to be saved.

    Attributes:
        filename: Suggested file name (embeds the date range)
        media_type: MIME type
        content: File bytes
    """
    filename: str
    media_type: str
    content: bytes


def _fixed(value: float | None, places: int) -> str:
    if value is None:
        return ""
    return f"{value:.{places}f}"


def _csv_place(place: str) -> str:
    if "," in place:
        return f'"{place}"'
    return place


def format_csv_row(earthquake: Earthquake) -> str:
    """Format one earthquake as a CSV row.

    Pure function.
    """
    return ",".join([
        earthquake.id,
        _csv_place(earthquake.place or ""),
        _fixed(earthquake.magnitude, 2),
        format_iso_time(earthquake.time) if earthquake.time else "",
        _fixed(earthquake.longitude, 6),
        _fixed(earthquake.latitude, 6),
        _fixed(earthquake.depth_km, 2),
        earthquake.url or "",
    ])


def to_csv(earthquakes: list[Earthquake]) -> str:
    """Render earthquakes as CSV text prefixed with a UTF-8 byte-order mark.

    Pure function. Produces a header line plus one line per earthquake,
    with no trailing newline.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(format_csv_row(e) for e in earthquakes)
    return BYTE_ORDER_MARK + "\n".join(lines)


def _date_label(criteria: FilterCriteria) -> str:
    start = criteria.start_date.isoformat()[:10] if criteria.start_date else "any"
    end = criteria.end_date.isoformat()[:10] if criteria.end_date else "any"
    return f"{start}_to_{end}"


def export_filename(
    criteria: FilterCriteria,
    extension: str,
    basename: str = DEFAULT_BASENAME,
) -> str:
    """Build an export file name embedding the active date range.

    e.g. ethiopia_earthquakes_2000-01-01_to_2024-03-01.csv
    """
    return f"{basename}_{_date_label(criteria)}.{extension}"


def build_csv_export(
    earthquakes: list[Earthquake],
    criteria: FilterCriteria,
    basename: str = DEFAULT_BASENAME,
) -> ExportFile:
    """Render a CSV export file.

    Pure function.
    """
    return ExportFile(
        filename=export_filename(criteria, "csv", basename),
        media_type=CSV_MEDIA_TYPE,
        content=to_csv(earthquakes).encode("utf-8"),
    )


def format_placemark_name(earthquake: Earthquake) -> str:
    """Placemark title, e.g. "M4.5 - 20 km W of Dubti, Ethiopia"."""
    return f"M{format_magnitude(earthquake.magnitude)} - {format_place(earthquake.place)}"


def format_placemark_description(earthquake: Earthquake) -> str:
    """HTML fragment shown in the placemark balloon.

    Pure function.
    """
    parts = [
        f"<b>Magnitude:</b> {format_magnitude(earthquake.magnitude)}<br/>",
        f"<b>Location:</b> {format_place(earthquake.place)}<br/>",
        f"<b>Time:</b> {format_local_time(earthquake.time)}<br/>",
        f"<b>Depth:</b> {format_depth(earthquake.depth_km)} km<br/>",
    ]
    if earthquake.url:
        parts.append(f'<a href="{earthquake.url}">View on USGS</a>')
    return "".join(parts)


def _xml_text(text: str) -> str:
    return XML_ILLEGAL_CHARS.sub("", text)


def _sub(parent: ET.Element, tag: str, text: str | None = None) -> ET.Element:
    element = ET.SubElement(parent, tag)
    if text is not None:
        element.text = _xml_text(text)
    return element


def _add_placemark(document: ET.Element, earthquake: Earthquake) -> None:
    placemark = _sub(document, "Placemark", None)
    placemark.set("id", _xml_text(earthquake.id))
    _sub(placemark, "name", format_placemark_name(earthquake))
    _sub(placemark, "description", format_placemark_description(earthquake))
    _sub(placemark, "styleUrl", f"#{KML_STYLE_ID}")

    extended = _sub(placemark, "ExtendedData")
    for name, value in (
        ("magnitude", format_magnitude(earthquake.magnitude, missing="Unknown")),
        ("depth", format_depth(earthquake.depth_km)),
        ("time", format_iso_time(earthquake.time)),
    ):
        data = _sub(extended, "Data")
        data.set("name", name)
        _sub(data, "value", value)

    # Elevation is always 0; depth lives in ExtendedData
    point = _sub(placemark, "Point")
    _sub(point, "coordinates", f"{earthquake.longitude},{earthquake.latitude},0")


def to_kml(earthquakes: list[Earthquake], name: str = "Ethiopia Earthquakes") -> str:
    """Render earthquakes as a KML document.

    Pure function. One Placemark per earthquake, in input order, all sharing
    a single icon style.

    Args:
        earthquakes: Records to render
        name: Document name

    Returns:
        KML document text with XML declaration
    """
    kml = ET.Element("kml", xmlns=KML_NAMESPACE)
    document = _sub(kml, "Document")
    _sub(document, "name", name)

    style = _sub(document, "Style")
    style.set("id", KML_STYLE_ID)
    icon_style = _sub(style, "IconStyle")
    _sub(icon_style, "scale", "1.1")
    icon = _sub(icon_style, "Icon")
    _sub(icon, "href", KML_ICON_HREF)

    for earthquake in earthquakes:
        _add_placemark(document, earthquake)

    body = ET.tostring(kml, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body
