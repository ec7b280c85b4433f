from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Tuple

from recrut_core.domain.interview import Interview
from recrut_core.ports.api import ApiTransport


class InterviewService:
    def __init__(self, api: ApiTransport) -> None:
        self.api = api

    def list_interviews(self, organization_id: Optional[int]) -> List[Interview]:
        return Interview.parse_list(self.api.get("/interviews", params={"organizationId": organization_id}))

    def list_my_interviews(self, organization_id: Optional[int] = None) -> List[Interview]:
        return Interview.parse_list(self.api.get("/interviews/me/interviews", params={"organizationId": organization_id}))


def split_interviews(interviews: List[Interview], now: datetime) -> Tuple[List[Interview], List[Interview]]:
    """Sépare entretiens à venir (début >= now, non annulés) et passés (ou annulés)."""
    upcoming: List[Interview] = []
    past: List[Interview] = []
    for it in interviews:
        (upcoming if it.is_upcoming(now) else past).append(it)
    return upcoming, past
