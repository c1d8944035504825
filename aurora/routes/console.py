from __future__ import annotations

from fastapi import APIRouter

from aurora.application import get_console_service
from aurora.core.marketplaces import MARKETPLACE_PROFILES

router = APIRouter(tags=["console"])


@router.get("/messages")
async def list_messages() -> dict:
    service = get_console_service()
    return {"items": [message.model_dump() for message in service.list_messages()]}


@router.get("/marketplaces")
async def list_marketplaces() -> dict:
    return {
        "items": [
            {"key": key, **profile.model_dump()}
            for key, profile in MARKETPLACE_PROFILES.items()
        ]
    }


@router.get("/state")
async def get_state() -> dict:
    return get_console_service().snapshot()
