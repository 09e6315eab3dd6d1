"""Feed Fetcher - Imperative Shell.

Retrieves one window of the feed, keeps the structurally complete features
and drops those the classifier places outside the region.
"""

import logging
from datetime import date

from quakewatch.core.classifier import classify
from quakewatch.core.earthquake import Earthquake, parse_earthquakes
from quakewatch.core.geo import BoundingBox
from quakewatch.shell.usgs_client import USGSClient, USGSQueryParams


logger = logging.getLogger(__name__)


def select_region_earthquakes(earthquakes: list[Earthquake]) -> list[Earthquake]:
    """Keep only earthquakes whose place text is inside the region."""
    return [e for e in earthquakes if classify(e.place)]


class FeedFetcher:
    """Fetches, validates and classifies feed records.

    This is part of the imperative shell - it performs one HTTP request per
    call through the USGS client.
    """

    def __init__(self, usgs_client: USGSClient | None = None) -> None:
        self.usgs_client = usgs_client or USGSClient()

    def fetch(
        self,
        start_date: date,
        end_date: date,
        bounds: BoundingBox,
    ) -> list[Earthquake]:
        """Fetch the records for a date window and bounding box.

        Args:
            start_date: First day requested
            end_date: Last day requested
            bounds: Bounding box sent to the feed

        Returns:
            Admitted in-region earthquakes, oldest first

        Raises:
            FetchError: If the feed could not be retrieved or decoded
        """
        geojson = self.usgs_client.fetch_earthquakes(USGSQueryParams(
            bounds=bounds,
            start_date=start_date,
            end_date=end_date,
        ))

        parsed = parse_earthquakes(geojson)
        admitted = select_region_earthquakes(parsed)

        logger.info(
            "Admitted %d of %d features (%d malformed, %d outside region)",
            len(admitted),
            len(geojson["features"]),
            len(geojson["features"]) - len(parsed),
            len(parsed) - len(admitted),
        )

        return admitted
