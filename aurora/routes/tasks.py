from __future__ import annotations

from fastapi import APIRouter, HTTPException

from aurora.application import get_console_service
from aurora.core.schema import TASK_STATUSES

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks() -> dict:
    service = get_console_service()
    return {"items": [task.model_dump() for task in service.list_tasks()]}


@router.post("")
async def add_task(payload: dict) -> dict:
    title = str(payload.get("title") or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="title is required")
    service = get_console_service()
    task = service.add_manual_task(title)
    return task.model_dump()


@router.patch("/{task_id}")
async def update_task(task_id: str, payload: dict) -> dict:
    status = str(payload.get("status") or "")
    if status not in TASK_STATUSES:
        raise HTTPException(status_code=400, detail=f"status must be one of {', '.join(TASK_STATUSES)}")
    service = get_console_service()
    try:
        task = service.update_task_status(task_id, status)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="task not found") from exc
    return task.model_dump()
