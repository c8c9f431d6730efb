"""Field export writers: GeoJSON, KML and CSV with a WKT column.

These write a saved field boundary in the same formats the importers read,
so an exported file can be imported again.
"""

from __future__ import annotations

import csv
import io
import re
import unicodedata
import xml.etree.ElementTree as ET
from typing import Any

from .models import GeometryBase, LineString, MultiPolygon, Point, Polygon

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
CSV_BOM = "\ufeff"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]+")


def to_feature_collection(
    name: str, geometry: GeometryBase, properties: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Wrap a field boundary in a one-feature GeoJSON FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": geometry.to_geojson(),
                "properties": {"name": name, **(properties or {})},
            }
        ],
    }


def to_kml(name: str, geometry: GeometryBase, properties: dict[str, Any] | None = None) -> str:
    """Write a KML 2.2 document with one Placemark per polygon.

    Only the outer ring of each polygon is written.
    """
    polygons = _polygon_rings(geometry)

    kml = ET.Element("kml", xmlns=KML_NAMESPACE)
    document = ET.SubElement(kml, "Document")
    ET.SubElement(document, "name").text = name

    for idx, rings in enumerate(polygons, start=1):
        placemark = ET.SubElement(document, "Placemark")
        ET.SubElement(placemark, "name").text = f"{name} {idx}" if len(polygons) > 1 else name

        if properties:
            extended = ET.SubElement(placemark, "ExtendedData")
            for key, value in properties.items():
                data = ET.SubElement(extended, "Data", name=str(key))
                ET.SubElement(data, "value").text = "" if value is None else str(value)

        polygon = ET.SubElement(placemark, "Polygon")
        outer = ET.SubElement(polygon, "outerBoundaryIs")
        ring = ET.SubElement(outer, "LinearRing")
        ET.SubElement(ring, "coordinates").text = " ".join(
            f"{position[0]},{position[1]},0" for position in rings[0]
        )

    ET.indent(kml)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(kml, encoding="unicode")


def to_wkt(geometry: GeometryBase) -> str:
    """Well-known text for points, lines and polygons; empty for other types."""
    if isinstance(geometry, Point):
        return f"POINT ({_pair(geometry.coordinates)})"
    if isinstance(geometry, LineString):
        return f"LINESTRING ({_ring(geometry.coordinates)})"
    if isinstance(geometry, Polygon):
        return f"POLYGON ({_rings(geometry.coordinates)})"
    if isinstance(geometry, MultiPolygon):
        polys = ", ".join(f"({_rings(rings)})" for rings in geometry.coordinates)
        return f"MULTIPOLYGON ({polys})"
    return ""


def to_csv(name: str, geometry: GeometryBase, properties: dict[str, Any] | None = None) -> str:
    """One-row CSV of the field's name, properties and WKT geometry.

    Starts with a UTF-8 BOM so spreadsheet tools pick the right encoding.
    """
    properties = properties or {}
    headers = ["name", *properties, "wkt"]
    row = [name, *("" if v is None else str(v) for v in properties.values()), to_wkt(geometry)]

    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(headers)
    csv.writer(buf, lineterminator="", quoting=csv.QUOTE_ALL).writerow(row)
    return CSV_BOM + buf.getvalue()


def safe_filename(name: str, fallback: str) -> str:
    """ASCII file base name for ``name``, or ``fallback`` if none is left."""
    decomposed = unicodedata.normalize("NFKD", name)
    ascii_name = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    base = _UNSAFE_CHARS.sub("_", ascii_name).strip("_").lower()
    return base if re.search(r"[a-z0-9]", base) else fallback


def _polygon_rings(geometry: GeometryBase) -> list[list[list[list[float]]]]:
    if isinstance(geometry, Polygon):
        return [geometry.coordinates]
    if isinstance(geometry, MultiPolygon):
        return geometry.coordinates
    return []


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _pair(position: list[float]) -> str:
    return f"{_number(position[0])} {_number(position[1])}"


def _ring(positions: list[list[float]]) -> str:
    return ", ".join(_pair(p) for p in positions)


def _rings(rings: list[list[list[float]]]) -> str:
    return ", ".join(f"({_ring(r)})" for r in rings)
