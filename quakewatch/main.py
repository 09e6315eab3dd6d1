"""Command-line entry point.

A thin wrapper that loads configuration, builds a Monitor with
logging-backed capabilities and runs it:

    quakewatch run                      # poll until interrupted
    quakewatch once                     # single refresh cycle
    quakewatch export --format kmz --start 2024-01-01 --min-magnitude 4
"""

import argparse
import logging
import os
import sys
import threading
from datetime import date

from quakewatch.core.errors import ExportError
from quakewatch.core.filters import FilterCriteria
from quakewatch.core.formatter import format_earthquake_summary
from quakewatch.monitor import Monitor
from quakewatch.shell.alert_dispatcher import AlertDispatcher
from quakewatch.shell.capabilities import (
    DirectoryFileSaver,
    LoggingAlertSink,
    LoggingCuePlayer,
    LoggingSpeaker,
)
from quakewatch.shell.config_loader import ConfigError, load_config


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_monitor(config_path: str | None, output_dir: str = ".") -> Monitor:
    """Create a Monitor whose capabilities write to the log and disk."""
    config = load_config(config_path)
    dispatcher = AlertDispatcher(
        cue_player=LoggingCuePlayer(),
        speaker=LoggingSpeaker(),
        alert_sink=LoggingAlertSink(),
    )
    return Monitor(
        config,
        dispatcher=dispatcher,
        file_saver=DirectoryFileSaver(output_dir),
    )


def _run(monitor: Monitor) -> int:
    stop = threading.Event()
    monitor.start()
    logger.info("Monitoring; press Ctrl+C to stop")
    try:
        while not stop.wait(1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        monitor.shutdown()
    return 0


def _once(monitor: Monitor) -> int:
    result = monitor.refresh_now()
    monitor.shutdown()
    if result is None:
        return 1

    logger.info("Completed: %s", result.summary)
    for earthquake in monitor.filtered_records()[-10:]:
        print(format_earthquake_summary(earthquake))
    return 0 if result.success else 1


def _export(monitor: Monitor, args: argparse.Namespace) -> int:
    result = monitor.refresh_now()
    monitor.shutdown()
    if result is None or not result.success:
        logger.error("Cannot export: %s", result.summary if result else "no data")
        return 1

    criteria = FilterCriteria(
        start_date=args.start if args.start is not None else monitor.criteria.start_date,
        end_date=args.end if args.end is not None else monitor.criteria.end_date,
        min_magnitude=args.min_magnitude,
    )
    monitor.set_criteria(criteria)

    try:
        if args.format == "kmz":
            export = monitor.export_kmz()
        else:
            export = monitor.export_csv()
    except ExportError as e:
        logger.error("Export failed: %s", str(e))
        return 1

    print(export.filename)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Monitor the USGS feed for earthquakes in Ethiopia",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to YAML config (default: $CONFIG_PATH or config/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Poll the feed until interrupted")
    subparsers.add_parser("once", help="Run a single refresh cycle")

    export_parser = subparsers.add_parser("export", help="Export filtered earthquakes")
    export_parser.add_argument(
        "--format", "-f",
        choices=("csv", "kmz"),
        default="csv",
        help="Export format (default: csv)",
    )
    export_parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=None,
        help="First day to include (YYYY-MM-DD, default: 2000-01-01)",
    )
    export_parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=None,
        help="Last day to include (YYYY-MM-DD, default: today)",
    )
    export_parser.add_argument(
        "--min-magnitude", "-m",
        type=float,
        default=0.0,
        help="Minimum magnitude (default: 0)",
    )
    export_parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default=".",
        help="Directory to write the export into (default: current directory)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging()

    try:
        monitor = build_monitor(args.config, getattr(args, "output_dir", "."))
    except ConfigError as e:
        logger.error("%s", str(e))
        return 2

    if args.command == "run":
        return _run(monitor)
    if args.command == "once":
        return _once(monitor)
    return _export(monitor, args)


if __name__ == "__main__":
    sys.exit(main())
