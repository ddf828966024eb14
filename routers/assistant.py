# routers/assistant.py

import base64
from typing import List

from fastapi import APIRouter, Depends, Response

from core.session_manager import SessionManager
from dependencies.auth import get_assistant, get_console
from models.assistant import (
    ChatMessage,
    ChatRequest,
    CompatibilityReport,
    CompatibilityRequest,
    SentimentRequest,
    SentimentResult,
)
from services.assistant import AssistantClient


router = APIRouter(
    prefix="/assistant",
    tags=["Assistant"],
)


@router.get("/history", response_model=List[ChatMessage])
def history(
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.require_tab("assistant")
    return assistant.chat_history


@router.get("/status")
def status(assistant: AssistantClient = Depends(get_assistant)):
    return {"is_composing": assistant.is_composing}


# -----------------------------------------------------
# CONVERSATIONAL TURN
# -----------------------------------------------------
@router.post("/chat", response_model=ChatMessage)
async def chat(
    payload: ChatRequest,
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.require_tab("assistant")
    return await assistant.converse(payload.text)


@router.post("/compatibility", response_model=CompatibilityReport)
async def compatibility(
    payload: CompatibilityRequest,
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.require_session()
    return await assistant.compatibility(payload.resident_a, payload.resident_b)


@router.post("/sentiment", response_model=SentimentResult)
async def sentiment(
    payload: SentimentRequest,
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.require_session()
    return SentimentResult(sentiment=await assistant.sentiment(payload.text))


# -----------------------------------------------------
# SYSTEM STATUS ANNOUNCEMENT (raw PCM, 24 kHz mono)
# -----------------------------------------------------
@router.post("/announce")
async def announce(
    console: SessionManager = Depends(get_console),
    assistant: AssistantClient = Depends(get_assistant),
):
    console.require_session()
    audio = await assistant.synthesize()
    if audio is None:
        return Response(status_code=204)
    return {"audio_base64": base64.b64encode(audio).decode("ascii"), "sample_rate": 24000}
