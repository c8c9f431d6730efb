"""KML reader: builds a polygon from the first ``<coordinates>`` element.

KML coordinates are always WGS84 (EPSG:4326) in ``longitude,latitude,altitude``
format. Altitude is discarded. Interior rings and additional geometries in the
same document are not read.
"""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET

from .errors import InsufficientRingPoints, NoGeometryFound, ParseError
from .models import Point2D, Polygon

logger = logging.getLogger(__name__)

MIN_RING_POINTS = 3


def read_kml(data: bytes, *, strict: bool = False) -> Polygon:
    """Read KML bytes and return a single-ring polygon.

    Args:
        data: Raw KML document.
        strict: Fail on the first malformed coordinate token instead of
            dropping it.

    Raises:
        NoGeometryFound: No ``<coordinates>`` element, or the XML is unreadable.
        InsufficientRingPoints: Fewer than three valid ring vertices.
        ParseError: ``strict`` is set and a token is malformed.
    """
    text = _find_coordinates_text(data)
    if text is None:
        raise NoGeometryFound("No <coordinates> element found in KML file")

    ring = parse_ring(text, strict=strict)
    return Polygon(coordinates=[[[lng, lat] for lng, lat in ring]])


def parse_ring(text: str, *, strict: bool = False) -> list[Point2D]:
    """Parse a KML ``<coordinates>`` text block into a closed ring.

    Format: ``lon,lat[,alt] lon,lat[,alt] ...`` (whitespace-separated tuples).
    Tokens whose longitude or latitude is not a finite number are dropped.
    The ring needs three vertices besides a closing point; it is closed by
    repeating the first.
    """
    points: list[Point2D] = []
    dropped = 0
    for token in text.split():
        point = _parse_token(token)
        if point is None:
            if strict:
                raise ParseError(f"Invalid KML coordinate: {token!r}")
            dropped += 1
            continue
        points.append(point)

    if dropped:
        logger.debug("Dropped %d invalid coordinate token(s)", dropped)

    # An already closed ring counts its repeated first point once.
    vertices = points[:-1] if len(points) > 1 and points[0] == points[-1] else points
    if len(vertices) < MIN_RING_POINTS:
        raise InsufficientRingPoints(len(vertices))

    return [*vertices, vertices[0]]


def _find_coordinates_text(data: bytes) -> str | None:
    # Unreadable XML is treated the same as a document without coordinates.
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        logger.debug("KML is not well-formed XML: %s", exc)
        return None

    for elem in root.iter():
        if isinstance(elem.tag, str) and _local_name(elem.tag) == "coordinates":
            return "".join(elem.itertext())
    return None


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_token(token: str) -> Point2D | None:
    parts = token.split(",")
    if len(parts) < 2:
        return None
    lng = _to_finite(parts[0])
    lat = _to_finite(parts[1])
    if lng is None or lat is None:
        return None
    return (lng, lat)


def _to_finite(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
