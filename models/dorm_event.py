# models/dorm_event.py

from typing import List
from pydantic import BaseModel


class DormEvent(BaseModel):
    id: str
    title: str
    description: str
    location: str
    time: str
    xp_reward: int = 0
    icon: str = ""
    # grows monotonically; each identity appears at most once
    attendees: List[str] = []
