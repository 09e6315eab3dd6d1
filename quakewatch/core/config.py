"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta

from quakewatch.core.export import DEFAULT_BASENAME
from quakewatch.core.geo import ETHIOPIA_BOUNDS, BoundingBox


USGS_API_BASE = "https://earthquake.usgs.gov/fdsnws/event/1/query"


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: USGS FDSN event query endpoint
        bounds: Bounding box sent with every feed query
        feed_start_date: Earliest date requested from the feed
        polling_interval_seconds: How often to refresh the feed
        request_timeout_seconds: HTTP timeout for feed requests
        novelty_window_minutes: Only events this fresh are announced
        recent_window_hours: Events this fresh are marked as recent on display
        announced_retention_hours: How long announced IDs are remembered
        export_basename: Prefix for export file names
    """
    feed_url: str = USGS_API_BASE
    bounds: BoundingBox = field(default_factory=lambda: ETHIOPIA_BOUNDS)
    feed_start_date: date = date(2000, 1, 1)
    polling_interval_seconds: int = 300
    request_timeout_seconds: int = 30
    novelty_window_minutes: int = 60
    recent_window_hours: int = 48
    announced_retention_hours: int = 24
    export_basename: str = DEFAULT_BASENAME

    @property
    def novelty_window(self) -> timedelta:
        return timedelta(minutes=self.novelty_window_minutes)

    @property
    def recent_window(self) -> timedelta:
        return timedelta(hours=self.recent_window_hours)

    @property
    def announced_retention(self) -> timedelta:
        return timedelta(hours=self.announced_retention_hours)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_bounds(bounds: BoundingBox, field_name: str) -> list[ValidationError]:
    """Validate a bounding box.

    Pure function.
    """
    errors = []

    errors.extend(validate_coordinates(
        bounds.min_latitude, bounds.min_longitude,
        f"{field_name}.min",
    ))
    errors.extend(validate_coordinates(
        bounds.max_latitude, bounds.max_longitude,
        f"{field_name}.max",
    ))

    if bounds.min_latitude > bounds.max_latitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_latitude ({bounds.min_latitude}) > max_latitude ({bounds.max_latitude})",
        ))

    if bounds.min_longitude > bounds.max_longitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_longitude ({bounds.min_longitude}) > max_longitude ({bounds.max_longitude})",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_bounds(config.bounds, "bounds"))

    for name in (
        "polling_interval_seconds",
        "request_timeout_seconds",
        "novelty_window_minutes",
        "recent_window_hours",
        "announced_retention_hours",
    ):
        value = getattr(config, name)
        if value <= 0:
            errors.append(ValidationError(
                field=name,
                message=f"Must be positive, got {value}",
            ))

    # A pruned ID must be too old to ever be novel again
    if config.announced_retention <= config.novelty_window:
        errors.append(ValidationError(
            field="announced_retention_hours",
            message=(
                f"Retention ({config.announced_retention_hours}h) must exceed "
                f"the novelty window ({config.novelty_window_minutes}min)"
            ),
        ))

    if config.recent_window < config.novelty_window:
        errors.append(ValidationError(
            field="recent_window_hours",
            message="Recent display window is shorter than the novelty window",
            severity="warning",
        ))

    if not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL is not an HTTP(S) URL: {config.feed_url}",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
