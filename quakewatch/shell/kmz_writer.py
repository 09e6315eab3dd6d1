"""KMZ Writer - Imperative Shell.

Packages a KML document as a KMZ archive: a zip holding a single entry,
doc.kml.
"""

import io
import logging
import zipfile

from quakewatch.core.errors import ExportError
from quakewatch.core.export import KMZ_MEDIA_TYPE, ExportFile


logger = logging.getLogger(__name__)


KML_ENTRY_NAME = "doc.kml"


def build_kmz(kml: str) -> bytes:
    """Compress a KML document into KMZ bytes.

    Raises:
        ExportError: If the archive cannot be built
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(KML_ENTRY_NAME, kml.encode("utf-8"))
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        logger.error("Failed to build KMZ archive: %s", str(e))
        raise ExportError(f"Failed to build KMZ archive: {e}") from e

    content = buffer.getvalue()
    logger.info("Built KMZ archive: %d bytes", len(content))
    return content


def build_kmz_export(kml: str, filename: str) -> ExportFile:
    """Build a KMZ export file from a KML document."""
    return ExportFile(
        filename=filename,
        media_type=KMZ_MEDIA_TYPE,
        content=build_kmz(kml),
    )
