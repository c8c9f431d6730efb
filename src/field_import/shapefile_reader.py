"""Zipped shapefile reader.

A shapefile is a multi-file format, so it is only accepted as a ZIP archive.
Decoding of the binary records is delegated to pyshp; its GeoJSON-shaped
``__geo_interface__`` output goes through the GeoJSON reader, which keeps the
first feature's geometry.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import PurePosixPath
from typing import Any, Callable

import shapefile

from .errors import ExternalDecodeError
from .geojson_reader import extract_geometry
from .models import Geometry

logger = logging.getLogger(__name__)

# bytes of a ZIP archive -> GeoJSON-like value
ShapefileDecoder = Callable[[bytes], Any]

REQUIRED_EXTS = (".shp", ".dbf")
COMPANION_EXTS = {".shp", ".shx", ".dbf"}


def read_zipped_shapefile(
    data: bytes, *, decoder: ShapefileDecoder | None = None
) -> Geometry:
    """Decode a zipped shapefile and return its first geometry.

    Args:
        data: Bytes of the ZIP archive.
        decoder: Replacement for ``decode_zipped_shapefile``.

    Raises:
        ExternalDecodeError: The decoder failed; carries its message verbatim.
        NoGeometryFound: The decoded collection has no features.
    """
    decode = decoder or decode_zipped_shapefile
    try:
        geojson = decode(data)
    except Exception as exc:
        raise ExternalDecodeError(str(exc) or type(exc).__name__) from exc

    return extract_geometry(geojson)


def decode_zipped_shapefile(data: bytes) -> dict[str, Any]:
    """Read the shapefile inside a ZIP archive into a GeoJSON FeatureCollection."""
    members = _read_members(data)

    missing = [ext for ext in REQUIRED_EXTS if ext not in members]
    if missing:
        raise ValueError(f"Zip archive is missing required file(s): {', '.join(missing)}")

    shx = members.get(".shx")
    with shapefile.Reader(
        shp=io.BytesIO(members[".shp"]),
        shx=io.BytesIO(shx) if shx is not None else None,
        dbf=io.BytesIO(members[".dbf"]),
    ) as sf:
        logger.debug("Decoding %s shapefile with %d record(s)", sf.shapeTypeName, len(sf))
        return sf.__geo_interface__


def _read_members(data: bytes) -> dict[str, bytes]:
    """Return the first .shp/.shx/.dbf member of the archive, keyed by extension."""
    members: dict[str, bytes] = {}
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        for name in zf.namelist():
            # macOS archivers add resource-fork copies under __MACOSX/
            if name.startswith("__MACOSX/") or name.endswith("/"):
                continue
            ext = PurePosixPath(name).suffix.lower()
            if ext in COMPANION_EXTS and ext not in members:
                members[ext] = zf.read(name)
    return members
