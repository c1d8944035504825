from __future__ import annotations

from fastapi import APIRouter, HTTPException

from aurora.application import get_console_service

router = APIRouter(prefix="/commands", tags=["commands"])


@router.post("")
async def run_command(payload: dict) -> dict:
    """Interpret one spoken or typed command against the current console state."""
    text = str(payload.get("text") or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="text is required")

    service = get_console_service()
    outcome = service.run_command(text)
    return {
        "intent": outcome.intent,
        "message": outcome.message.model_dump(),
        "announce": outcome.announce,
        "state": service.snapshot(),
    }
