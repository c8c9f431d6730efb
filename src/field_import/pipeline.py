"""Field boundary import pipeline.

One call takes one uploaded file through dispatch, extraction and validation
and returns an ``ImportOutcome`` value. Failures never escape as exceptions:
every ``GeometryImportError`` is turned into an ``ImportFailed``. Each call is
independent; nothing is cached between imports.
"""

from __future__ import annotations

import logging

from .errors import (
    BareShapefileUnsupported,
    GeometryImportError,
    ParseError,
    UnsupportedFileFormat,
)
from .formats import FileFormat, detect_format
from .geojson_reader import read_geojson
from .kml_reader import read_kml
from .models import (
    Geometry,
    ImportFailed,
    ImportOutcome,
    ImportSucceeded,
    Notification,
    RawFile,
)
from .shapefile_reader import ShapefileDecoder, read_zipped_shapefile
from .validation import validate_geometry

logger = logging.getLogger(__name__)

SUCCESS_TITLE = "import success"
ERROR_TITLE = "error"


def import_file(
    raw: RawFile,
    *,
    strict: bool = False,
    decoder: ShapefileDecoder | None = None,
    max_bytes: int | None = None,
) -> ImportOutcome:
    """Import a single uploaded file as a Polygon or MultiPolygon.

    Args:
        raw: The uploaded file.
        strict: Reject KML rings containing malformed coordinate tokens.
        decoder: Replacement shapefile decoder (see ``shapefile_reader``).
        max_bytes: Largest accepted content size, if limited.
    """
    try:
        file_format = dispatch(raw.name)
        if max_bytes is not None and len(raw.content) > max_bytes:
            raise ParseError(f"File is larger than the {max_bytes} byte limit")
        geometry = extract(raw, file_format, strict=strict, decoder=decoder)
        polygon = validate_geometry(geometry)
    except GeometryImportError as exc:
        logger.warning("Import of %s failed (%s): %s", raw.name, exc.kind.value, exc.message)
        return ImportFailed(error_kind=exc.kind, message=exc.message)

    logger.info("Imported %s from %s", polygon.type, raw.name)
    return ImportSucceeded(geometry=polygon, source_file_name=raw.name)


def dispatch(file_name: str) -> FileFormat:
    """Classify ``file_name`` and reject names no reader can handle.

    Raises:
        BareShapefileUnsupported: A lone ``.shp`` file.
        UnsupportedFileFormat: Any unrecognised extension.
    """
    file_format = detect_format(file_name)
    if file_format is FileFormat.BARE_SHAPEFILE_UNSUPPORTED:
        raise BareShapefileUnsupported(file_name)
    if file_format is FileFormat.UNKNOWN:
        raise UnsupportedFileFormat(file_name)

    logger.info("Reading %s as %s", file_name, file_format.value)
    return file_format


def extract(
    raw: RawFile,
    file_format: FileFormat,
    *,
    strict: bool = False,
    decoder: ShapefileDecoder | None = None,
) -> Geometry:
    """Run the reader for ``file_format`` over the file content.

    ``file_format`` is one that ``dispatch`` accepted.
    """
    if file_format is FileFormat.GEOJSON:
        return read_geojson(raw.content)
    if file_format is FileFormat.KML:
        return read_kml(raw.content, strict=strict)
    return read_zipped_shapefile(raw.content, decoder=decoder)


def notification_for(outcome: ImportOutcome) -> Notification:
    """Build the message shown to the user for a finished import."""
    if isinstance(outcome, ImportSucceeded):
        return Notification(title=SUCCESS_TITLE, detail=outcome.source_file_name)
    return Notification(title=ERROR_TITLE, detail=outcome.message)
