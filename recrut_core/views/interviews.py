from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Tuple

from recrut_core.domain.interview import Interview
from recrut_core.errors import ApiError
from recrut_core.ports.notifier import Notifier
from recrut_core.services.interview_service import InterviewService, split_interviews
from recrut_core.views.base import PageState


class MyInterviewsPage(PageState):
    def __init__(
        self,
        service: InterviewService,
        notifier: Notifier,
        organization_id: Optional[int] = None,
        is_candidate: bool = True,
    ) -> None:
        super().__init__(notifier, organization_id)
        self.service = service
        self.is_candidate = is_candidate
        self.interviews: List[Interview] = []

    def load(self) -> None:
        if not self.is_candidate:
            self.is_loading = False
            return
        self.is_loading = True
        try:
            self.interviews = self.service.list_my_interviews(self.organization_id)
        except ApiError as e:
            self._fail("interviews_fetch_failed", e, "Erreur lors du chargement de vos entretiens")
            self.interviews = []
        finally:
            self.is_loading = False

    def split(self, now: Optional[datetime] = None) -> Tuple[List[Interview], List[Interview]]:
        return split_interviews(self.interviews, now or datetime.now())
