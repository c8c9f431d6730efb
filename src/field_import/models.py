"""Pydantic data models for field boundary import."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .errors import ErrorKind

# Longitude and latitude, optionally followed by altitude; always finite.
Coordinate = Annotated[float, Field(allow_inf_nan=False)]
Position = Annotated[list[Coordinate], Field(min_length=2)]
# Closed ring: at least three vertices plus the repeated first one.
LinearRing = Annotated[list[Position], Field(min_length=4)]
PolygonRings = Annotated[list[LinearRing], Field(min_length=1)]
Point2D = tuple[float, float]

ACCEPTED_GEOMETRY_TYPES = ("Polygon", "MultiPolygon")


class GeometryBase(BaseModel):
    """Common shape of every GeoJSON geometry."""

    model_config = ConfigDict(frozen=True)

    type: str
    bbox: list[float] | None = None

    def to_geojson(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Point(GeometryBase):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(GeometryBase):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: list[Position]


class LineString(GeometryBase):
    type: Literal["LineString"] = "LineString"
    coordinates: Annotated[list[Position], Field(min_length=2)]


class MultiLineString(GeometryBase):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: list[list[Position]]


class Polygon(GeometryBase):
    """A polygon as a list of linear rings, exterior first."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: PolygonRings


class MultiPolygon(GeometryBase):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: Annotated[list[PolygonRings], Field(min_length=1)]


class GeometryCollection(GeometryBase):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: list["Geometry"]


Geometry = Annotated[
    Union[
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]

GeometryCollection.model_rebuild()

GEOMETRY_ADAPTER: TypeAdapter[Geometry] = TypeAdapter(Geometry)
GEOMETRY_TYPES = frozenset(
    ["Point", "MultiPoint", "LineString", "MultiLineString", "Polygon", "MultiPolygon", "GeometryCollection"]
)


class RawFile(BaseModel):
    """An uploaded file, held in memory for a single import attempt."""

    name: str
    content: bytes = b""


class ImportSucceeded(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    geometry: Geometry
    source_file_name: str


class ImportFailed(BaseModel):
    status: Literal["failed"] = "failed"
    error_kind: ErrorKind
    message: str


ImportOutcome = Annotated[Union[ImportSucceeded, ImportFailed], Field(discriminator="status")]


class Notification(BaseModel):
    """Title and detail handed to the notification layer."""

    title: str
    detail: str


class ImportResponse(BaseModel):
    outcome: ImportOutcome
    notification: Notification


class FieldExportRequest(BaseModel):
    """A saved field boundary to be written out as a file."""

    name: str
    geometry: Geometry
    properties: dict[str, Any] = Field(default_factory=dict)
