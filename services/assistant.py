# services/assistant.py

"""
Client for the external AI collaborator (Gemini `generateContent` REST API).

Every call is fallible and slow, so each one runs in a worker thread via
`asyncio.to_thread` and degrades to a fixed default on any failure. Nothing
here ever raises into the mutation pipeline.
"""

import asyncio
import base64
import json
from threading import Lock
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from core.config import Settings, settings as default_settings
from core.errors import CollaboratorUnavailable
from core.logging_config import logger
from models.assistant import ChatMessage, CompatibilityReport, IssueAnalysis
from models.enums import Sentiment
from models.user import StudentPreferences


CHAT_FALLBACK = "The Housing Core is currently undergoing a scheduled sync. Please try again in 60 seconds."
EMPTY_REPLY_FALLBACK = "The Housing Core is resyncing..."
GREETING = "UDMS Virtual Assistant Online. System Status: Nominal."
STATUS_ANNOUNCEMENT = "UDMS Pro Logistics Core is online. All protocols are synchronized."

DEFAULT_COMPATIBILITY = CompatibilityReport(
    score=65,
    summary="Profiles show standard alignment. Safe pairing recommended.",
    pros=["Shared academic focus"],
    cons=["Minor schedule variance"],
)

CONCIERGE_INSTRUCTION = """You are the UDMS Pro Ultimate Housing Concierge, a state-of-the-art interface for dormitory management.

MANDATORY POLICIES:
- Quiet Hours: 10 PM - 7 AM.
- Guest Registration: 24h notice required.
- Emergency Protocol: If 'LOCKDOWN' is active, advise students to stay in rooms and lock doors.

TONE: Authoritative yet encouraging.
GAMIFICATION: Remind students they earn XP for following rules and reporting issues."""


# -----------------------------------------------------
# Response schemas (Gemini structured output)
# -----------------------------------------------------
ISSUE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "problem": {"type": "STRING"},
        "severity": {"type": "NUMBER"},
        "priority": {"type": "STRING"},
        "estimatedCost": {"type": "STRING"},
    },
    "required": ["problem", "severity", "priority"],
}

COMPATIBILITY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "NUMBER"},
        "summary": {"type": "STRING"},
        "pros": {"type": "ARRAY", "items": {"type": "STRING"}},
        "cons": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["score", "summary", "pros", "cons"],
}


class AssistantClient:

    def __init__(self, config: Settings = default_settings, http: Optional[requests.Session] = None):
        self.config = config
        self._http = http or requests.Session()
        self._in_flight = 0
        self._lock = Lock()
        self.chat_history: List[ChatMessage] = [ChatMessage(role="model", text=GREETING)]

    @property
    def is_composing(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    # =====================================================
    # TRANSPORT
    # =====================================================
    def _generate(self, model: str, body: Dict[str, Any]) -> Dict[str, Any]:
        if not self.config.GEMINI_API_KEY:
            raise CollaboratorUnavailable("GEMINI_API_KEY is not configured")

        url = f"{self.config.GEMINI_BASE_URL}/models/{model}:generateContent"
        try:
            response = self._http.post(
                url,
                params={"key": self.config.GEMINI_API_KEY},
                json=body,
                timeout=self.config.ASSISTANT_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise CollaboratorUnavailable(f"{model} request failed: {e}") from e
        except ValueError as e:
            raise CollaboratorUnavailable(f"{model} returned malformed JSON: {e}") from e

    async def _call(self, model: str, body: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            self._in_flight += 1
        try:
            return await asyncio.to_thread(self._generate, model, body)
        finally:
            with self._lock:
                self._in_flight -= 1

    @staticmethod
    def _first_part(payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            part = payload["candidates"][0]["content"]["parts"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise CollaboratorUnavailable(f"Unexpected response shape: {e}") from e
        if not isinstance(part, dict):
            raise CollaboratorUnavailable(f"Unexpected content part: {type(part).__name__}")
        return part

    def _text(self, payload: Dict[str, Any]) -> str:
        text = self._first_part(payload).get("text")
        if text is not None and not isinstance(text, str):
            raise CollaboratorUnavailable(f"Reply text was {type(text).__name__}, not a string")
        return text or ""

    def _json(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            data = json.loads(self._text(payload) or "{}")
        except ValueError as e:
            raise CollaboratorUnavailable(f"Structured reply was not JSON: {e}") from e
        if not isinstance(data, dict):
            raise CollaboratorUnavailable("Structured reply was not an object")
        return data

    # =====================================================
    # CONVERSATIONAL TURN
    # =====================================================
    async def chat(self, history: List[ChatMessage]) -> str:
        body = {
            "contents": [
                {"role": "user" if m.role == "user" else "model", "parts": [{"text": m.text}]}
                for m in history
            ],
            "systemInstruction": {"parts": [{"text": CONCIERGE_INSTRUCTION}]},
            "generationConfig": {"temperature": 0.6},
        }
        try:
            return self._text(await self._call(self.config.GEMINI_CHAT_MODEL, body))
        except CollaboratorUnavailable as e:
            logger.error(f"Assistant chat failed: {e}")
            return CHAT_FALLBACK

    async def converse(self, text: str) -> ChatMessage:
        """Append a user turn to the retained history and the reply after it."""
        self.chat_history.append(ChatMessage(role="user", text=text))
        reply = await self.chat(list(self.chat_history))
        message = ChatMessage(role="model", text=reply or EMPTY_REPLY_FALLBACK)
        self.chat_history.append(message)
        return message

    # =====================================================
    # IMAGE ANALYSIS
    # =====================================================
    async def analyze_image(self, image_base64: str, mime_type: str) -> Optional[IssueAnalysis]:
        body = {
            "contents": [{
                "parts": [
                    {"inlineData": {"data": image_base64, "mimeType": mime_type}},
                    {"text": "Analyze this image of a maintenance issue. Identify the problem, estimate the "
                             "severity (1-10), and suggest a priority level (Low, Medium, High). Format as JSON."},
                ]
            }],
            "generationConfig": {"responseMimeType": "application/json", "responseSchema": ISSUE_SCHEMA},
        }
        try:
            data = self._json(await self._call(self.config.GEMINI_CHAT_MODEL, body))
            return IssueAnalysis(
                problem=data.get("problem"),
                severity=round(data.get("severity")),
                priority=str(data.get("priority", "")).capitalize(),
                estimated_cost=data.get("estimatedCost"),
            )
        except CollaboratorUnavailable as e:
            logger.error(f"Image analysis failed: {e}")
        except (ValidationError, TypeError) as e:
            logger.error(f"Image analysis returned an unusable result: {e}")
        return None

    # =====================================================
    # ROOMMATE COMPATIBILITY
    # =====================================================
    async def compatibility(self, resident_a: StudentPreferences, resident_b: StudentPreferences) -> CompatibilityReport:
        prompt = (
            "Perform deep-layer compatibility analysis for the UDMS platform:\n"
            f"Resident A: {resident_a.model_dump_json()}\n"
            f"Resident B: {resident_b.model_dump_json()}"
        )
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json", "responseSchema": COMPATIBILITY_SCHEMA},
        }
        try:
            data = self._json(await self._call(self.config.GEMINI_PRO_MODEL, body))
            if isinstance(data.get("score"), float):
                data["score"] = round(data["score"])
            return CompatibilityReport.model_validate(data)
        except CollaboratorUnavailable as e:
            logger.warning(f"Compatibility scoring unavailable: {e}")
        except ValidationError as e:
            logger.warning(f"Compatibility scoring returned an unusable result: {e}")
        return DEFAULT_COMPATIBILITY.model_copy(deep=True)

    # =====================================================
    # SENTIMENT
    # =====================================================
    async def sentiment(self, text: str) -> Sentiment:
        body = {
            "contents": [{"parts": [{
                "text": f'Analyze sentiment of feedback: "{text}". Response: POSITIVE, NEUTRAL, or NEGATIVE.'
            }]}],
        }
        try:
            label = self._text(await self._call(self.config.GEMINI_CHAT_MODEL, body)).strip().upper()
        except CollaboratorUnavailable as e:
            logger.warning(f"Sentiment analysis unavailable: {e}")
            return Sentiment.neutral

        if label in Sentiment.list():
            return Sentiment(label)
        logger.debug(f"Unrecognised sentiment label '{label}', using NEUTRAL")
        return Sentiment.neutral

    # =====================================================
    # SPEECH
    # =====================================================
    async def synthesize(self, text: str = STATUS_ANNOUNCEMENT) -> Optional[bytes]:
        """16-bit PCM at 24 kHz, or None when synthesis fails."""
        body = {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": "Kore"}}},
            },
        }
        try:
            part = self._first_part(await self._call(self.config.GEMINI_TTS_MODEL, body))
            data = (part.get("inlineData") or {}).get("data")
            if not data:
                return None
            return base64.b64decode(data)
        except CollaboratorUnavailable as e:
            logger.error(f"Speech synthesis failed: {e}")
        except ValueError as e:
            logger.error(f"Speech synthesis returned undecodable audio: {e}")
        return None
