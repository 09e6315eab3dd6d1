"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake data parsing
- Region classification
- Novelty tracking
- Record filtering
- Alert planning and message formatting
- CSV/KML serialization

All functions here are deterministic and have no I/O.
"""

from quakewatch.core.earthquake import Earthquake, parse_earthquakes
from quakewatch.core.classifier import classify
from quakewatch.core.novelty import NoveltyState, NoveltyTracker, advance_novelty
from quakewatch.core.filters import FilterCriteria, filter_earthquakes
from quakewatch.core.alerts import AlertPlan, plan_alerts
from quakewatch.core.formatter import format_magnitude, short_location_name
from quakewatch.core.export import ExportFile, to_csv, to_kml
from quakewatch.core.errors import ExportError, FetchError, MonitorError

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_earthquakes",
    # Classifier
    "classify",
    # Novelty
    "NoveltyState",
    "NoveltyTracker",
    "advance_novelty",
    # Filters
    "FilterCriteria",
    "filter_earthquakes",
    # Alerts
    "AlertPlan",
    "plan_alerts",
    # Formatter
    "format_magnitude",
    "short_location_name",
    # Export
    "ExportFile",
    "to_csv",
    "to_kml",
    # Errors
    "MonitorError",
    "FetchError",
    "ExportError",
]
