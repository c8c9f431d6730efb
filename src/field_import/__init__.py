"""Field boundary import from GeoJSON, KML and zipped shapefiles."""

from .errors import (
    BareShapefileUnsupported,
    ErrorKind,
    ExternalDecodeError,
    GeometryImportError,
    InsufficientRingPoints,
    NoGeometryFound,
    ParseError,
    UnsupportedFileFormat,
    UnsupportedGeometryType,
)
from .export import safe_filename, to_csv, to_feature_collection, to_kml, to_wkt
from .formats import FileFormat, detect_format
from .geojson_reader import extract_geometry, read_geojson
from .kml_reader import parse_ring, read_kml
from .models import (
    Geometry,
    ImportFailed,
    ImportOutcome,
    ImportSucceeded,
    MultiPolygon,
    Notification,
    Polygon,
    RawFile,
)
from .pipeline import import_file, notification_for
from .shapefile_reader import decode_zipped_shapefile, read_zipped_shapefile
from .validation import validate_geometry

__all__ = [
    "BareShapefileUnsupported",
    "ErrorKind",
    "ExternalDecodeError",
    "FileFormat",
    "Geometry",
    "GeometryImportError",
    "ImportFailed",
    "ImportOutcome",
    "ImportSucceeded",
    "InsufficientRingPoints",
    "MultiPolygon",
    "NoGeometryFound",
    "Notification",
    "ParseError",
    "Polygon",
    "RawFile",
    "UnsupportedFileFormat",
    "UnsupportedGeometryType",
    "decode_zipped_shapefile",
    "detect_format",
    "extract_geometry",
    "import_file",
    "notification_for",
    "parse_ring",
    "read_geojson",
    "read_kml",
    "read_zipped_shapefile",
    "safe_filename",
    "to_csv",
    "to_feature_collection",
    "to_kml",
    "to_wkt",
    "validate_geometry",
]
