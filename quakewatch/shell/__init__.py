"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS API client (HTTP)
- Feed fetcher (HTTP + core validation/classification)
- Alert dispatcher (presentation capabilities)
- KMZ writer (archives)
- Polling scheduler (background thread)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakewatch.shell.usgs_client import USGSClient
from quakewatch.shell.feed_fetcher import FeedFetcher
from quakewatch.shell.alert_dispatcher import AlertDispatcher
from quakewatch.shell.scheduler import PollingScheduler
from quakewatch.shell.config_loader import load_config, Config

__all__ = [
    "USGSClient",
    "FeedFetcher",
    "AlertDispatcher",
    "PollingScheduler",
    "load_config",
    "Config",
]
