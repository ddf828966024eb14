# models/assistant.py

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from .enums import Priority, Sentiment
from .user import StudentPreferences


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str
    is_nudge: bool = False


class ChatRequest(BaseModel):
    text: str = Field(..., min_length=1)


class IssueAnalysis(BaseModel):
    problem: str
    severity: int = Field(..., ge=1, le=10)
    priority: Priority
    estimated_cost: Optional[str] = None


class CompatibilityReport(BaseModel):
    score: int = Field(..., ge=0, le=100)
    summary: str
    pros: List[str] = []
    cons: List[str] = []


class CompatibilityRequest(BaseModel):
    resident_a: StudentPreferences
    resident_b: StudentPreferences


class SentimentRequest(BaseModel):
    text: str


class SentimentResult(BaseModel):
    sentiment: Sentiment
