"""Tests for the FastAPI import and export endpoints."""

import json
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from field_import.server import app

SQUARE = [[100.0, 13.0], [101.0, 13.0], [101.0, 14.0], [100.0, 14.0], [100.0, 13.0]]


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
class TestImportEndpoint:
    async def test_geojson_upload(self, client, polygon):
        files = {"file": ("field.geojson", json.dumps(polygon).encode(), "application/geo+json")}
        resp = await client.post("/import", files=files)
        assert resp.status_code == 200
        data = resp.json()
        assert data["outcome"]["status"] == "succeeded"
        assert data["outcome"]["geometry"] == polygon
        assert data["outcome"]["source_file_name"] == "field.geojson"
        assert data["notification"] == {"title": "import success", "detail": "field.geojson"}

    async def test_kml_upload(self, client, kml_bytes):
        files = {"file": ("north.kml", kml_bytes, "application/vnd.google-earth.kml+xml")}
        resp = await client.post("/import", files=files)
        geometry = resp.json()["outcome"]["geometry"]
        assert geometry["type"] == "Polygon"
        assert geometry["coordinates"][0] == [[100.0, 13.0], [101.0, 13.0], [101.0, 14.0], [100.0, 13.0]]

    async def test_zip_upload(self, client, make_shapefile_zip):
        ring = [[100.0, 13.0], [100.0, 14.0], [101.0, 14.0], [101.0, 13.0], [100.0, 13.0]]
        files = {"file": ("fields.zip", make_shapefile_zip(parts_list=[[ring]]), "application/zip")}
        resp = await client.post("/import", files=files)
        assert resp.json()["outcome"]["geometry"]["type"] == "Polygon"

    async def test_failure_is_a_value(self, client):
        line = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        files = {"file": ("route.geojson", json.dumps({"type": "Feature", "geometry": line}).encode(), "application/json")}
        resp = await client.post("/import", files=files)
        assert resp.status_code == 200
        data = resp.json()
        assert data["outcome"]["status"] == "failed"
        assert data["outcome"]["error_kind"] == "UnsupportedGeometryType"
        assert data["notification"]["title"] == "error"
        assert data["notification"]["detail"] == data["outcome"]["message"]

    @pytest.mark.parametrize(
        "name, kind",
        [("data.txt", "UnsupportedFileFormat"), ("shape.shp", "BareShapefileUnsupported")],
    )
    async def test_rejected_names_are_not_read(self, client, monkeypatch, name, kind):
        read = AsyncMock(return_value=b"")
        monkeypatch.setattr("starlette.datastructures.UploadFile.read", read)
        files = {"file": (name, b"ignored", "application/octet-stream")}
        resp = await client.post("/import", files=files)
        assert resp.json()["outcome"]["error_kind"] == kind
        read.assert_not_awaited()

    async def test_missing_file_field(self, client):
        resp = await client.post("/import")
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestExportEndpoint:
    def _body(self, geometry=None):
        return {
            "name": "North Field",
            "geometry": geometry or {"type": "Polygon", "coordinates": [SQUARE]},
            "properties": {"crop_type": "rice"},
        }

    async def test_geojson(self, client):
        resp = await client.post("/export/geojson", json=self._body())
        assert resp.status_code == 200
        assert resp.headers["content-disposition"] == "attachment; filename=north_field.geojson"
        feature = resp.json()["features"][0]
        assert feature["geometry"]["coordinates"] == [SQUARE]
        assert feature["properties"]["crop_type"] == "rice"

    async def test_kml(self, client):
        resp = await client.post("/export/kml", json=self._body())
        assert resp.status_code == 200
        assert "application/vnd.google-earth.kml+xml" in resp.headers["content-type"]
        assert "<coordinates>100.0,13.0,0" in resp.text

    async def test_csv(self, client):
        resp = await client.post("/export/csv", json=self._body())
        assert resp.headers["content-disposition"].endswith("north_field.csv")
        assert "POLYGON ((100 13" in resp.text

    async def test_wkt(self, client):
        resp = await client.post("/export/wkt", json=self._body())
        assert resp.text.startswith("POLYGON ((100 13, 101 13")

    async def test_rejects_non_polygon(self, client):
        body = self._body({"type": "Point", "coordinates": [1.0, 2.0]})
        resp = await client.post("/export/kml", json=body)
        assert resp.status_code == 422
        assert resp.json()["detail"]["geometry_type"] == "Point"

    async def test_unknown_format(self, client):
        resp = await client.post("/export/gpkg", json=self._body())
        assert resp.status_code == 422

    @pytest.mark.parametrize("format", ["wkt", "kml", "csv", "geojson"])
    @pytest.mark.parametrize("coordinates", [[[[1.0]]], [], [[]], [[[1.0, 2.0]]]])
    async def test_rejects_malformed_polygon(self, client, format, coordinates):
        body = self._body({"type": "Polygon", "coordinates": coordinates})
        resp = await client.post(f"/export/{format}", json=body)
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}
