import io
import json
import zipfile
from pathlib import Path

import pytest
import shapefile

SQUARE = [[100.0, 13.0], [101.0, 13.0], [101.0, 14.0], [100.0, 14.0], [100.0, 13.0]]

KML_POLYGON = """\
<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>North field</name>
      <Polygon>
        <outerBoundaryIs>
          <LinearRing>
            <coordinates>
              100.0,13.0,0 101.0,13.0,0 101.0,14.0,0
            </coordinates>
          </LinearRing>
        </outerBoundaryIs>
      </Polygon>
    </Placemark>
  </Document>
</kml>"""


@pytest.fixture
def polygon():
    return {"type": "Polygon", "coordinates": [SQUARE]}


@pytest.fixture
def feature_collection_bytes(polygon):
    collection = {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": polygon, "properties": {"name": "a"}},
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [0.0, 0.0]},
                "properties": {"name": "b"},
            },
        ],
    }
    return json.dumps(collection).encode()


@pytest.fixture
def kml_bytes():
    return KML_POLYGON.encode()


def _zip_dir(directory: Path, exts=(".shp", ".shx", ".dbf")) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for path in sorted(directory.iterdir()):
            if path.suffix in exts:
                zf.writestr(path.name, path.read_bytes())
    return buf.getvalue()


@pytest.fixture
def make_shapefile_zip(tmp_path):
    """Build a zipped shapefile on disk with pyshp and return its bytes."""

    def make(shape_type=shapefile.POLYGON, parts_list=(), exts=(".shp", ".shx", ".dbf")):
        directory = tmp_path / f"shp_{shape_type}_{len(list(tmp_path.iterdir()))}"
        directory.mkdir()
        with shapefile.Writer(str(directory / "fields"), shapeType=shape_type) as w:
            w.field("name", "C")
            for idx, parts in enumerate(parts_list):
                if shape_type == shapefile.POLYGON:
                    w.poly(parts)
                else:
                    w.line(parts)
                w.record(f"field {idx}")
        return _zip_dir(directory, exts)

    return make
