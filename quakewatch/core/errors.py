"""Error types surfaced to callers of the monitor.

Failures are split by kind so a presentation layer can react differently:
keep showing stale data after a FetchError, offer a retry after an
ExportError.
"""


class MonitorError(Exception):
    """Base class for errors raised by the earthquake monitor."""


class FetchError(MonitorError):
    """Retrieving or decoding the upstream feed failed.

    Raised for transport failures, non-success HTTP responses and payloads
    that are not a feature collection. Prior state is left untouched.
    """


class ExportError(MonitorError):
    """Building or saving an export file failed."""
