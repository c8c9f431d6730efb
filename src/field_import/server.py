"""FastAPI server for field boundary import and export."""

from __future__ import annotations

import json
import logging

from fastapi import FastAPI, HTTPException, Path, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from .config import ImportSettings, configure_logging
from .errors import GeometryImportError
from .export import safe_filename, to_csv, to_feature_collection, to_kml, to_wkt
from .models import FieldExportRequest, ImportFailed, ImportResponse, RawFile
from .pipeline import dispatch, import_file, notification_for
from .validation import validate_geometry

logger = logging.getLogger(__name__)

settings = ImportSettings.from_env()
configure_logging(settings.log_level)

app = FastAPI(title="Field Import", version="0.1.0")

EXPORT_MEDIA_TYPES = {
    "geojson": ("application/geo+json", ".geojson"),
    "kml": ("application/vnd.google-earth.kml+xml; charset=utf-8", ".kml"),
    "csv": ("text/csv; charset=utf-8", ".csv"),
    "wkt": ("text/plain; charset=utf-8", ".wkt"),
}


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/import", response_model=ImportResponse, response_model_exclude_none=True)
async def import_boundary(file: UploadFile) -> ImportResponse:
    """Import one uploaded .geojson, .json, .kml or zipped shapefile.

    Always answers 200: failures are reported in the outcome, not as HTTP errors.
    """
    file_name = file.filename or ""

    # Rejected names never have their body read.
    try:
        dispatch(file_name)
    except GeometryImportError as exc:
        logger.warning("Rejected upload %s (%s)", file_name, exc.kind.value)
        outcome = ImportFailed(error_kind=exc.kind, message=exc.message)
        return ImportResponse(outcome=outcome, notification=notification_for(outcome))

    content = await file.read()
    outcome = await run_in_threadpool(
        import_file,
        RawFile(name=file_name, content=content),
        strict=settings.strict_coordinates,
        max_bytes=settings.max_upload_bytes,
    )
    return ImportResponse(outcome=outcome, notification=notification_for(outcome))


@app.post("/export/{format}")
async def export_boundary(
    request: FieldExportRequest,
    format: str = Path(pattern="^(geojson|kml|csv|wkt)$"),
) -> Response:
    """Return a field boundary as a downloadable file."""
    try:
        geometry = validate_geometry(request.geometry)
    except GeometryImportError as exc:
        raise HTTPException(status_code=422, detail=exc.to_error_dict()) from exc

    if format == "geojson":
        body = json.dumps(to_feature_collection(request.name, geometry, request.properties), indent=2)
    elif format == "kml":
        body = to_kml(request.name, geometry, request.properties)
    elif format == "csv":
        body = to_csv(request.name, geometry, request.properties)
    else:
        body = to_wkt(geometry)

    media_type, extension = EXPORT_MEDIA_TYPES[format]
    filename = safe_filename(request.name, "field") + extension
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
