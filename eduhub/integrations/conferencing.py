"""Video conferencing (Zoom / Google Meet) for parent-teacher conferences."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ConferenceProviderName(str, Enum):
    ZOOM = "zoom"
    GOOGLE_MEET = "google-meet"


class VideoConference(BaseModel):
    id: Optional[str] = None
    link: Optional[str] = None
    provider: ConferenceProviderName
    scheduled_at: datetime
    duration: int  # minutes


class ConferenceProvider:
    name: ConferenceProviderName

    def create_meeting(self, topic: str, starts_at: datetime, duration: int) -> VideoConference:
        raise NotImplementedError


class StubConferenceProvider(ConferenceProvider):
    """Records the requested slot without contacting any meeting service, so no link is issued."""

    def __init__(self, name: ConferenceProviderName = ConferenceProviderName.GOOGLE_MEET):
        self.name = name

    def create_meeting(self, topic: str, starts_at: datetime, duration: int) -> VideoConference:
        return VideoConference(provider=self.name, scheduled_at=starts_at, duration=duration)


def schedule_parent_teacher_conference(
    provider: ConferenceProvider,
    teacher_id: int,
    student_id: int,
    scheduled_at: datetime,
    duration: int = 30,
) -> VideoConference:
    if duration <= 0:
        raise ValueError("duration must be positive")
    return provider.create_meeting("Parent-Teacher Conference", scheduled_at, duration)
