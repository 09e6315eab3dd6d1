"""USGS API Client - Imperative Shell.

This module handles HTTP communication with the USGS Earthquake API.
All I/O is contained here; business logic is in the core module.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import requests

from quakewatch.core.config import USGS_API_BASE
from quakewatch.core.errors import FetchError
from quakewatch.core.geo import BoundingBox


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


@dataclass
class USGSQueryParams:
    """Parameters for USGS API query.

    Attributes:
        bounds: Geographic bounding box (optional)
        start_date: Fetch earthquakes on or after this date
        end_date: Fetch earthquakes up to this date
        order_by: USGS ordering, oldest first by default
    """
    bounds: BoundingBox | None = None
    start_date: date | None = None
    end_date: date | None = None
    order_by: str = "time-asc"


class USGSClient:
    """Client for fetching earthquake data from USGS API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS client.

        Args:
            base_url: USGS API base URL
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _build_params(self, query: USGSQueryParams) -> dict[str, str]:
        """Build query parameters for USGS API request.

        Args:
            query: Query parameters

        Returns:
            Dict of URL query parameters
        """
        params: dict[str, str] = {
            "format": "geojson",
            "orderby": query.order_by,
        }

        if query.start_date is not None:
            params["starttime"] = query.start_date.isoformat()[:10]

        if query.end_date is not None:
            params["endtime"] = query.end_date.isoformat()[:10]

        if query.bounds is not None:
            params["minlatitude"] = str(query.bounds.min_latitude)
            params["maxlatitude"] = str(query.bounds.max_latitude)
            params["minlongitude"] = str(query.bounds.min_longitude)
            params["maxlongitude"] = str(query.bounds.max_longitude)

        return params

    def fetch_earthquakes(self, query: USGSQueryParams) -> dict[str, Any]:
        """Fetch earthquake data from USGS API.

        This method performs HTTP I/O.

        Args:
            query: Query parameters

        Returns:
            Raw GeoJSON FeatureCollection from USGS

        Raises:
            FetchError: On transport failure, non-2xx status or a payload
                that is not a feature collection
        """
        params = self._build_params(query)

        logger.info(
            "Fetching earthquakes from USGS",
            extra={"params": params},
        )

        try:
            response = self.session.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as e:
            raise FetchError(f"USGS request timed out: {e}") from e
        except requests.RequestException as e:
            raise FetchError(f"USGS request failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"USGS returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            raise FetchError("USGS response is not a feature collection")

        logger.info(
            "Fetched %d features from USGS",
            len(data["features"]),
        )

        return data
