"""File format detection by file name extension."""

from __future__ import annotations

from enum import Enum


class FileFormat(str, Enum):
    GEOJSON = "geojson"
    KML = "kml"
    ZIPPED_SHAPEFILE = "zipped_shapefile"
    BARE_SHAPEFILE_UNSUPPORTED = "bare_shapefile_unsupported"
    UNKNOWN = "unknown"


# Checked in order; first matching suffix wins.
SUFFIX_FORMATS: tuple[tuple[tuple[str, ...], FileFormat], ...] = (
    ((".geojson", ".json"), FileFormat.GEOJSON),
    ((".kml",), FileFormat.KML),
    ((".zip",), FileFormat.ZIPPED_SHAPEFILE),
    ((".shp",), FileFormat.BARE_SHAPEFILE_UNSUPPORTED),
)

ACCEPTED_SUFFIXES = tuple(suffix for suffixes, _ in SUFFIX_FORMATS for suffix in suffixes)


def detect_format(file_name: str) -> FileFormat:
    """Classify a file by a case-insensitive match on its name suffix.

    MIME types and content are never consulted.
    """
    name = (file_name or "").lower()
    for suffixes, file_format in SUFFIX_FORMATS:
        if name.endswith(suffixes):
            return file_format
    return FileFormat.UNKNOWN
