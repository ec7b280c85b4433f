from __future__ import annotations
from typing import List, Optional

from recrut_core.domain.candidate import Candidate, CandidateState, StateHistory
from recrut_core.errors import ApiError
from recrut_core.ports.notifier import Notifier
from recrut_core.services.candidate_service import CandidateService
from recrut_core.views.base import PageState


CANCEL_COMMENT = "Candidature annulée par le candidat"


class ApplicationsPage(PageState):
    """Mes candidatures (rôle candidat): suivi, annulation, suppression, historique."""

    def __init__(
        self,
        service: CandidateService,
        notifier: Notifier,
        organization_id: Optional[int] = None,
        is_candidate: bool = True,
    ) -> None:
        super().__init__(notifier, organization_id)
        self.service = service
        self.is_candidate = is_candidate
        self.applications: List[Candidate] = []
        self.selected_candidate_id: Optional[int] = None
        self.is_history_open = False
        self.history: List[StateHistory] = []
        self.is_loading_history = False

    def load(self) -> None:
        if not self.is_candidate:
            self.is_loading = False
            return
        self.is_loading = True
        try:
            self.applications = self.service.list_my_applications()
        except ApiError as e:
            self._fail("applications_fetch_failed", e, "Erreur lors du chargement de vos candidatures")
            self.applications = []
        finally:
            self.is_loading = False

    @staticmethod
    def can_cancel(application: Candidate) -> bool:
        return not application.is_closed

    def cancel(self, application: Candidate) -> bool:
        if not self.can_cancel(application):
            self.notifier.info("Cette candidature ne peut plus être annulée")
            return False
        try:
            self.service.change_state(
                application.id,
                CandidateState.ANNULE,
                organization_id=application.organization_id,
                comment=CANCEL_COMMENT,
            )
        except ApiError as e:
            self._fail("application_cancel_failed", e, "Erreur lors de l'annulation de la candidature")
            return False
        self.notifier.success("Candidature annulée avec succès")
        self.load()
        return True

    def delete(self, application: Candidate) -> bool:
        try:
            self.service.delete_candidate(application.organization_id, application.id)
        except ApiError as e:
            self._fail("application_delete_failed", e, "Erreur lors de la suppression de la candidature")
            return False
        self.notifier.success("Candidature supprimée avec succès")
        self.load()
        return True

    # --- Historique ---
    def fetch_history(self, candidate_id: int, candidate_org_id: Optional[int] = None) -> None:
        org = candidate_org_id or self.organization_id
        if not org:
            self.notifier.error("Impossible de déterminer l'organisation")
            return
        self.is_loading_history = True
        try:
            self.history = self.service.get_history(candidate_id, org)
        except ApiError as e:
            self._fail("history_fetch_failed", e, "Erreur lors du chargement de l'historique")
            self.history = []
        finally:
            self.is_loading_history = False

    def open_history(self, application: Candidate) -> None:
        self.selected_candidate_id = application.id
        self.is_history_open = True
        self.fetch_history(application.id, application.organization_id)

    def close_history(self) -> None:
        self.is_history_open = False
        self.selected_candidate_id = None
        self.history = []
