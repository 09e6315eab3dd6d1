"""Presentation capabilities - Imperative Shell.

The monitor never plays audio, speaks or writes files itself. The
presentation layer hands it objects implementing these protocols; the
monitor only issues requests. Logging and directory-backed implementations
are provided for the command line.
"""

import logging
from pathlib import Path
from typing import Protocol

from quakewatch.core.alerts import Announcement, HeadlineAlert
from quakewatch.core.errors import ExportError
from quakewatch.core.export import ExportFile


logger = logging.getLogger(__name__)


class CuePlayer(Protocol):
    def play_cue(self) -> None: ...


class Speaker(Protocol):
    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class AlertSink(Protocol):
    def on_announcement(self, announcement: Announcement) -> None: ...

    def on_headline(self, headline: HeadlineAlert) -> None: ...


class FileSaver(Protocol):
    def save(self, export: ExportFile) -> str: ...


class NullCuePlayer:
    """Cue player that does nothing."""

    def play_cue(self) -> None:
        pass


class NullSpeaker:
    """Speaker that does nothing."""

    def speak(self, text: str) -> None:
        pass

    def cancel(self) -> None:
        pass


class LoggingCuePlayer:
    """Writes cue requests to the log."""

    def play_cue(self) -> None:
        logger.info("*** alert cue ***")


class LoggingSpeaker:
    """Writes speech requests to the log."""

    def speak(self, text: str) -> None:
        logger.info("Speaking: %s", text)

    def cancel(self) -> None:
        logger.info("Speech cancelled")


class LoggingAlertSink:
    """Writes alert events to the log."""

    def on_announcement(self, announcement: Announcement) -> None:
        logger.info("New earthquake %s at %s", announcement.earthquake_id, announcement.location)

    def on_headline(self, headline: HeadlineAlert) -> None:
        logger.warning("%s", headline.text)


class DirectoryFileSaver:
    """Saves export files into a directory."""

    def __init__(self, directory: str | Path = ".") -> None:
        self.directory = Path(directory)

    def save(self, export: ExportFile) -> str:
        """Write the export to disk.

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        path = self.directory / export.filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(export.content)
        except OSError as e:
            raise ExportError(f"Failed to save {path}: {e}") from e

        logger.info("Saved %s (%d bytes)", path, len(export.content))
        return str(path)
