"""Error taxonomy for field boundary imports.

Every failure an import can end in is a ``GeometryImportError`` subclass.
Extractors and the validator raise them; the pipeline turns them into an
``ImportFailed`` value so that no exception ever reaches the caller.

Each error exposes ``kind`` (an ``ErrorKind``) and ``to_error_dict()``
for a stable structured payload suitable for logging and API responses.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable name of an import failure."""

    PARSE_ERROR = "ParseError"
    NO_GEOMETRY_FOUND = "NoGeometryFound"
    INSUFFICIENT_RING_POINTS = "InsufficientRingPoints"
    UNSUPPORTED_GEOMETRY_TYPE = "UnsupportedGeometryType"
    UNSUPPORTED_FILE_FORMAT = "UnsupportedFileFormat"
    BARE_SHAPEFILE_UNSUPPORTED = "BareShapefileUnsupported"
    EXTERNAL_DECODE_ERROR = "ExternalDecodeError"


class GeometryImportError(Exception):
    """Base class for every import failure.

    Attributes:
        message: Human-readable description, shown to the user as-is.
        kind: The ``ErrorKind`` of the concrete subclass.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def context(self) -> dict[str, object]:
        """Kind-specific fields added to ``to_error_dict()``."""
        return {}

    def to_error_dict(self) -> dict[str, object]:
        return {"kind": self.kind.value, "message": self.message, **self.context()}


class ParseError(GeometryImportError):
    """The file content is not syntactically valid for its format."""

    kind = ErrorKind.PARSE_ERROR


class NoGeometryFound(GeometryImportError):
    """The file parsed but holds no usable geometry."""

    kind = ErrorKind.NO_GEOMETRY_FOUND

    def __init__(self, message: str = "No geometry found in file") -> None:
        super().__init__(message)


class InsufficientRingPoints(GeometryImportError):
    """Fewer than three valid coordinate pairs remained for a ring."""

    kind = ErrorKind.INSUFFICIENT_RING_POINTS

    def __init__(self, valid_points: int) -> None:
        self.valid_points = valid_points
        super().__init__(
            f"A polygon needs at least 3 valid coordinates, found {valid_points}"
        )

    def context(self) -> dict[str, object]:
        return {"valid_points": self.valid_points}


class UnsupportedGeometryType(GeometryImportError):
    """A geometry was extracted but it is not a Polygon or MultiPolygon."""

    kind = ErrorKind.UNSUPPORTED_GEOMETRY_TYPE

    def __init__(self, geometry_type: str) -> None:
        self.geometry_type = geometry_type
        super().__init__(
            f"Only Polygon or MultiPolygon geometries can be imported, got {geometry_type}"
        )

    def context(self) -> dict[str, object]:
        return {"geometry_type": self.geometry_type}


class UnsupportedFileFormat(GeometryImportError):
    """The file name has no recognised extension."""

    kind = ErrorKind.UNSUPPORTED_FILE_FORMAT

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(
            f"Unsupported file format: {file_name}. "
            "Use .geojson, .json, .kml or a zipped Shapefile (.zip)"
        )

    def context(self) -> dict[str, object]:
        return {"file_name": self.file_name}


class BareShapefileUnsupported(GeometryImportError):
    """A lone ``.shp`` was supplied without its companion files."""

    kind = ErrorKind.BARE_SHAPEFILE_UNSUPPORTED

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(
            "Please upload the Shapefile as a ZIP archive: put the .shp, .dbf, "
            ".shx and .prj files together in a single .zip file"
        )

    def context(self) -> dict[str, object]:
        return {"file_name": self.file_name}


class ExternalDecodeError(GeometryImportError):
    """The Shapefile decoder rejected the archive; its message is passed through."""

    kind = ErrorKind.EXTERNAL_DECODE_ERROR


class ConfigValidationError(ValueError):
    """Raised when a service setting is out of its valid range."""

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")
