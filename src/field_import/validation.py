"""Geometry type check applied to every extracted geometry."""

from __future__ import annotations

from .errors import UnsupportedGeometryType
from .models import GeometryBase, MultiPolygon, Polygon


def validate_geometry(geometry: GeometryBase) -> Polygon | MultiPolygon:
    """Return ``geometry`` unchanged if it is a Polygon or MultiPolygon.

    Raises:
        UnsupportedGeometryType: Any other geometry, naming its type.
    """
    if isinstance(geometry, (Polygon, MultiPolygon)):
        return geometry
    raise UnsupportedGeometryType(geometry.type)
