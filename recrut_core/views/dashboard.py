from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import pandas as pd

from recrut_core.analytics import interviews_on, recent_candidates, state_counts
from recrut_core.domain.candidate import Candidate
from recrut_core.domain.user import CurrentUser
from recrut_core.errors import ApiError
from recrut_core.ports.notifier import Notifier
from recrut_core.services.candidate_service import CandidateService
from recrut_core.services.interview_service import InterviewService
from recrut_core.services.session_service import SessionService
from recrut_core.utils.logging import get_logger
from recrut_core.views.base import PageState


logger = get_logger(__name__)


@dataclass
class DashboardStats:
    candidates_count: int = 0
    interviews_today: int = 0
    unread_notifications: int = 0
    documents_count: int = 0
    recent_candidates: List[Candidate] = field(default_factory=list)
    by_state: Optional[pd.Series] = None


class DashboardPage(PageState):
    """Tableau de bord recruteur: métriques et candidatures récentes."""

    def __init__(
        self,
        session: SessionService,
        candidates: CandidateService,
        interviews: InterviewService,
        notifier: Notifier,
    ) -> None:
        super().__init__(notifier)
        self.session = session
        self.candidates = candidates
        self.interviews = interviews
        self.user: Optional[CurrentUser] = None
        self.stats = DashboardStats()

    @property
    def greeting_name(self) -> str:
        return (self.user.name if self.user else "") or "Recruteur"

    def load(self, today: Optional[date] = None) -> None:
        self.is_loading = True
        try:
            self.user = self.session.load_current_user()
            org = self.user.organization_id
            if not org:
                logger.error("Aucune organisation trouvée")
                return
            self.organization_id = org

            cands = self.candidates.list_candidates(org)
            unread = self.session.unread_notifications(org)
            itvs = self.interviews.list_interviews(org)
            docs = self.session.list_documents(org)

            self.stats = DashboardStats(
                candidates_count=len(cands),
                interviews_today=len(interviews_on(itvs, today or date.today())),
                unread_notifications=unread,
                documents_count=len(docs),
                recent_candidates=recent_candidates(cands, 5),
                by_state=state_counts(cands),
            )
        except ApiError as e:
            self._fail("dashboard_fetch_failed", e, "Erreur lors du chargement du tableau de bord")
            self.stats = DashboardStats()
        finally:
            self.is_loading = False
