from __future__ import annotations
import re
from datetime import datetime, time
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from recrut_core.domain.candidate import ApiModel


class InterviewStatus(str, Enum):
    PLANNED = "planned"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    InterviewStatus.PLANNED: "Planifié",
    InterviewStatus.CONFIRMED: "Confirmé",
    InterviewStatus.COMPLETED: "Terminé",
    InterviewStatus.CANCELLED: "Annulé",
}


# HH:MM ou HH:MM:SS (éventuellement suivi de fractions / fuseau)
_TIME_RE = re.compile(r"^(?P<h>[01]?\d|2[0-3]):(?P<m>[0-5]\d)(?::(?P<s>[0-5]\d))?")


class InterviewCandidate(ApiModel):
    id: int
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""


class Interview(ApiModel):
    id: int
    title: str = ""
    description: Optional[str] = None
    date: str
    start_time: str = Field(default="00:00", alias="startTime")
    duration: int = 0
    status: InterviewStatus = InterviewStatus.PLANNED
    location: Optional[str] = None
    meeting_link: Optional[str] = Field(default=None, alias="meetingLink")
    candidate: Optional[InterviewCandidate] = None
    participant_ids: List[int] = Field(default_factory=list, alias="participantIds")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        datetime.fromisoformat(v[:10])
        return v

    @field_validator("start_time", mode="before")
    @classmethod
    def _check_start_time(cls, v):
        if v is None or v == "":
            return "00:00"
        if not isinstance(v, str) or not _TIME_RE.match(v):
            raise ValueError(f"heure de début invalide: {v!r}")
        return v

    def starts_at(self) -> datetime:
        """Date + heure de début, naïve (heure locale). `date` peut être un ISO complet."""
        day = datetime.fromisoformat(self.date[:10]).date()
        m = _TIME_RE.match(self.start_time)
        return datetime.combine(day, time(int(m["h"]), int(m["m"]), int(m["s"] or 0)))

    def is_upcoming(self, now: datetime) -> bool:
        return self.starts_at() >= now and self.status != InterviewStatus.CANCELLED
