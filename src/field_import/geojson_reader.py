"""GeoJSON reader: selects a single geometry from Feature, FeatureCollection
or bare geometry documents.

Only the first feature of a collection is used; multi-feature import is not
supported.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from .errors import NoGeometryFound, ParseError, UnsupportedGeometryType
from .models import ACCEPTED_GEOMETRY_TYPES, GEOMETRY_ADAPTER, GEOMETRY_TYPES, Geometry

logger = logging.getLogger(__name__)


def read_geojson(data: bytes) -> Geometry:
    """Decode GeoJSON bytes and return the geometry they carry.

    Raises:
        ParseError: The bytes are not UTF-8 or not valid JSON, or a known
            geometry type has malformed or non-finite coordinates.
        NoGeometryFound: The document holds no geometry reference.
    """
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"GeoJSON file is not valid UTF-8: {exc.reason}") from exc

    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc

    return extract_geometry(value)


def extract_geometry(value: Any) -> Geometry:
    """Pick the geometry out of a parsed GeoJSON value.

    Rules, in order:
    - ``Feature``: its ``geometry`` member (``null`` means not found)
    - ``FeatureCollection``: the geometry of the first feature
    - ``Polygon`` / ``MultiPolygon``: the value itself
    """
    geometry = _select_geometry(value)
    if geometry is None:
        raise NoGeometryFound()
    return to_geometry(geometry)


def to_geometry(value: Any) -> Geometry:
    """Convert a GeoJSON geometry object into its typed model."""
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        raise NoGeometryFound()

    geometry_type = value["type"]
    if geometry_type not in GEOMETRY_TYPES:
        raise UnsupportedGeometryType(geometry_type)

    try:
        return GEOMETRY_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ParseError(
            f"Malformed {geometry_type} geometry: {exc.error_count()} invalid value(s)"
        ) from exc


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON.
    raise ParseError(f"Invalid JSON: non-finite number {name}")


def _select_geometry(value: Any) -> Any:
    if not isinstance(value, dict):
        return None

    geojson_type = value.get("type")
    if geojson_type == "Feature":
        return value.get("geometry")

    if geojson_type == "FeatureCollection":
        features = value.get("features")
        if not isinstance(features, list) or not features:
            return None
        if len(features) > 1:
            logger.debug("Using first of %d features", len(features))
        first = features[0]
        return first.get("geometry") if isinstance(first, dict) else None

    if geojson_type in ACCEPTED_GEOMETRY_TYPES:
        return value

    return None
