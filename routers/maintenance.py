# routers/maintenance.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from core.session_manager import SessionManager
from dependencies.auth import get_assistant, get_console
from models.enums import MaintenanceStatus
from models.maintenance import MaintenanceCreate, MaintenanceFeedback, MaintenanceRequest
from services.assistant import AssistantClient


router = APIRouter(
    prefix="/maintenance",
    tags=["Maintenance"],
)


@router.get("/", response_model=List[MaintenanceRequest])
def list_requests(console: SessionManager = Depends(get_console)):
    return console.maintenance_requests()


# -----------------------------------------------------
# SUBMIT (submit-maintenance)
# Gated before an attached photo is analysed; a failed
# analysis simply files the request without annotations.
# -----------------------------------------------------
@router.post("/", response_model=MaintenanceRequest, status_code=201)
async def submit(
    payload: MaintenanceCreate,
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.ensure_allowed("submit_maintenance")
    analysis = None
    if payload.image_base64:
        analysis = await assistant.analyze_image(
            payload.image_base64,
            payload.image_mime_type or "image/jpeg",
        )
    return console.submit_maintenance(
        payload.category,
        payload.description,
        priority=payload.priority,
        analysis=analysis,
    )


# -----------------------------------------------------
# ADVANCE STATUS (approve-maintenance)
# -----------------------------------------------------
@router.post("/{request_id}/advance", response_model=MaintenanceRequest)
def advance(
    request_id: str,
    target: Optional[MaintenanceStatus] = None,
    console: SessionManager = Depends(get_console),
):
    return console.advance_maintenance(request_id, target)


# -----------------------------------------------------
# RATE A COMPLETED REQUEST
# -----------------------------------------------------
@router.post("/{request_id}/feedback", response_model=MaintenanceRequest)
async def feedback(
    request_id: str,
    payload: MaintenanceFeedback,
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.ensure_allowed("rate_maintenance")
    sentiment = await assistant.sentiment(payload.feedback or f"Rated {payload.rating} out of 5")
    return console.rate_maintenance(request_id, payload.rating, sentiment)
