from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from aurora.application import get_console_service
from aurora.core.marketplaces import MARKETPLACE_PROFILES, is_marketplace

router = APIRouter(prefix="/catalog", tags=["catalog"])

TEMPLATE_ERROR = "Could not parse template. Ensure it's a clean CSV."


@router.get("")
async def get_catalog() -> dict:
    snapshot = get_console_service().snapshot()
    return {
        "raw_catalog": snapshot["raw_catalog"],
        "selected_marketplace": snapshot["selected_marketplace"],
        "items": snapshot["catalog_rows"],
    }


@router.put("/raw")
async def set_raw_catalog(payload: dict) -> dict:
    text = payload.get("text")
    if text is None:
        raise HTTPException(status_code=400, detail="text is required")
    service = get_console_service()
    service.set_raw_catalog(str(text))
    return {"raw_catalog": str(text)}


@router.post("/raw/sample")
async def load_sample_catalog() -> dict:
    service = get_console_service()
    return {"raw_catalog": service.load_sample_catalog()}


@router.put("/marketplace")
async def select_marketplace(payload: dict) -> dict:
    marketplace = payload.get("marketplace")
    if not is_marketplace(marketplace):
        raise HTTPException(
            status_code=400,
            detail=f"marketplace must be one of {', '.join(MARKETPLACE_PROFILES)}",
        )
    service = get_console_service()
    service.select_marketplace(marketplace)
    return {"selected_marketplace": marketplace, "items": []}


@router.post("/generate")
async def generate_catalog() -> dict:
    service = get_console_service()
    outcome = service.generate_catalog()
    return {
        "intent": outcome.intent,
        "message": outcome.message.model_dump(),
        "announce": outcome.announce,
        "items": [row.model_dump(mode="json") for row in outcome.catalog_rows],
    }


@router.get("/export")
async def export_catalog() -> Response:
    service = get_console_service()
    try:
        filename, content = service.export_catalog()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/templates")
async def upload_template(file: UploadFile = File(...)) -> dict:
    """Inspect a marketplace template and report the headers it expects."""
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="Uploaded file must have a filename")
        payload = await file.read()
    finally:
        await file.close()

    preview = get_console_service().preview_template(file.filename, payload)
    if preview is None:
        raise HTTPException(status_code=400, detail=TEMPLATE_ERROR)
    return {
        "filename": file.filename,
        "headers": preview.headers,
        "row_count": preview.row_count,
        "rows": preview.rows,
        "summary": f"Detected {preview.row_count} rows with headers: {', '.join(preview.headers)}",
    }
