from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from recrut_core.domain.candidate import Candidate, CandidateState, StateHistory
from recrut_core.domain.document import Document
from recrut_core.domain.job import Form, JobOffer
from recrut_core.errors import ApiError
from recrut_core.ports.notifier import Notifier
from recrut_core.services.candidate_service import CandidateService
from recrut_core.utils.logging import get_logger
from recrut_core.views.base import PageState


logger = get_logger(__name__)

ALL_STATES = "ALL"
REQUIRED_FIELDS_MSG = "Veuillez remplir tous les champs obligatoires"


@dataclass
class CandidateForm:
    """Valeurs brutes du formulaire de création / modification (chaînes)."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    job_offer_id: str = ""
    form_id: str = ""
    notes: str = ""

    @classmethod
    def from_candidate(cls, c: Candidate) -> "CandidateForm":
        return cls(
            first_name=c.first_name,
            last_name=c.last_name,
            email=c.email,
            phone=c.phone or "",
            job_offer_id=str(c.job_offer.id) if c.job_offer else "",
            form_id=str(c.form.id) if c.form else "",
            notes=c.notes or "",
        )

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, "")

    def is_complete(self) -> bool:
        return bool(self.first_name and self.last_name and self.email)

    def to_payload(self, include_form: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }
        if self.phone:
            payload["phone"] = self.phone
        if self.job_offer_id:
            payload["jobOfferId"] = int(self.job_offer_id)
        if include_form and self.form_id:
            payload["formId"] = int(self.form_id)
        if self.notes:
            payload["notes"] = self.notes
        return payload


class CandidatesPage(PageState):
    """Candidathèque: liste filtrable, changement d'état, historique, documents, CRUD."""

    def __init__(self, service: CandidateService, notifier: Notifier, organization_id: Optional[int] = None) -> None:
        super().__init__(notifier, organization_id)
        self.service = service
        self.candidates: List[Candidate] = []
        self.search_query = ""
        self.selected_state: str = ALL_STATES
        self.selected_candidate_id: Optional[int] = None

        self.is_history_open = False
        self.history: List[StateHistory] = []
        self.is_loading_history = False

        self.is_documents_open = False
        self.documents: List[Document] = []
        self.is_loading_documents = False
        self.downloaded: Optional[Tuple[str, bytes]] = None

        self.is_create_open = False
        self.is_edit_open = False
        self.is_submitting = False
        self.form = CandidateForm()
        self.job_offers: List[JobOffer] = []
        self.forms: List[Form] = []

    # --- Chargement ---
    def load(self) -> None:
        self.is_loading = True
        try:
            self.candidates = self.service.list_candidates(self.organization_id)
        except ApiError as e:
            self._fail("candidates_fetch_failed", e, "Erreur lors du chargement des candidats")
            self.candidates = []
        finally:
            self.is_loading = False

    def load_choices(self) -> None:
        """Offres et formulaires pour les listes déroulantes; un échec donne une liste vide."""
        if not self.organization_id:
            return
        try:
            self.job_offers = self.service.list_job_offers(self.organization_id)
        except ApiError as e:
            logger.warning("job_offers_fetch_failed", extra={"error": str(e)})
            self.job_offers = []
        try:
            self.forms = self.service.list_forms(self.organization_id)
        except ApiError as e:
            logger.warning("forms_fetch_failed", extra={"error": str(e)})
            self.forms = []

    # --- Filtres ---
    def select_state(self, state: str) -> None:
        self.selected_state = state if state == ALL_STATES else CandidateState(state).value

    def clear_filters(self) -> None:
        self.search_query = ""
        self.selected_state = ALL_STATES

    def filtered(self) -> List[Candidate]:
        return [
            c for c in self.candidates
            if c.matches(self.search_query)
            and (self.selected_state == ALL_STATES or c.state.value == self.selected_state)
        ]

    def find(self, candidate_id: Optional[int]) -> Optional[Candidate]:
        return next((c for c in self.candidates if c.id == candidate_id), None)

    # --- Changement d'état (optimiste) ---
    def change_state(self, candidate_id: int, new_state: CandidateState) -> bool:
        new_state = CandidateState(new_state)
        candidate = self.find(candidate_id)
        if candidate is not None and candidate.state == new_state:
            self.notifier.info("Le candidat est déjà dans cet état")
            return False

        self.candidates = [
            c.model_copy(update={"state": new_state}) if c.id == candidate_id else c
            for c in self.candidates
        ]
        org = (candidate.organization_id if candidate else None) or self.organization_id
        try:
            self.service.change_state(candidate_id, new_state, organization_id=org)
        except ApiError as e:
            self._fail("candidate_state_change_failed", e, "Erreur lors de la mise à jour du statut")
            self.load()
            return False

        self.notifier.success(f"Statut mis à jour : {new_state.label}")
        if self.is_history_open and self.selected_candidate_id == candidate_id:
            self.fetch_history(candidate_id)
        return True

    # --- Historique ---
    def fetch_history(self, candidate_id: int) -> None:
        if not self.organization_id:
            return
        self.is_loading_history = True
        try:
            self.history = self.service.get_history(candidate_id, self.organization_id)
        except ApiError as e:
            self._fail("history_fetch_failed", e, "Erreur lors du chargement de l'historique")
            self.history = []
        finally:
            self.is_loading_history = False

    def open_history(self, candidate_id: int) -> None:
        self.selected_candidate_id = candidate_id
        self.is_history_open = True
        self.fetch_history(candidate_id)

    def close_history(self) -> None:
        self.is_history_open = False
        self.selected_candidate_id = None
        self.history = []

    # --- Documents ---
    def open_documents(self, candidate_id: int) -> None:
        if not self.organization_id:
            return
        self.selected_candidate_id = candidate_id
        self.is_documents_open = True
        self.is_loading_documents = True
        try:
            self.documents = self.service.list_documents(candidate_id, self.organization_id)
        except ApiError as e:
            self._fail("documents_fetch_failed", e, "Erreur lors du chargement des documents")
            self.documents = []
        finally:
            self.is_loading_documents = False

    def close_documents(self) -> None:
        self.is_documents_open = False
        self.selected_candidate_id = None
        self.documents = []
        self.downloaded = None

    def download_document(self, document: Document) -> Optional[bytes]:
        if not self.organization_id:
            return None
        try:
            data = self.service.download_document(document.id, self.organization_id)
        except ApiError as e:
            self._fail("document_download_failed", e, "Erreur lors du téléchargement du document")
            return None
        self.downloaded = (document.display_name, data)
        self.notifier.success("Document prêt au téléchargement")
        return data

    # --- Création / modification / suppression ---
    def open_create(self) -> None:
        self.form.reset()
        self.is_create_open = True

    def close_create(self) -> None:
        if not self.is_submitting:
            self.form.reset()
        self.is_create_open = False

    def create(self) -> bool:
        if not self.organization_id or not self.form.is_complete():
            self.notifier.error(REQUIRED_FIELDS_MSG)
            return False
        self.is_submitting = True
        try:
            self.service.create_candidate(self.organization_id, self.form.to_payload())
        except ApiError as e:
            self._fail("candidate_create_failed", e, "Erreur lors de la création du candidat")
            return False
        finally:
            self.is_submitting = False
        self.notifier.success("Candidat créé avec succès")
        self.is_create_open = False
        self.form.reset()
        self.load()
        return True

    def open_edit(self, candidate: Candidate) -> None:
        self.selected_candidate_id = candidate.id
        self.form = CandidateForm.from_candidate(candidate)
        self.is_edit_open = True

    def close_edit(self) -> None:
        if not self.is_submitting:
            self.form.reset()
            self.selected_candidate_id = None
        self.is_edit_open = False

    def update(self) -> bool:
        if not self.organization_id or not self.selected_candidate_id or not self.form.is_complete():
            self.notifier.error(REQUIRED_FIELDS_MSG)
            return False
        self.is_submitting = True
        try:
            self.service.update_candidate(
                self.organization_id, self.selected_candidate_id, self.form.to_payload(include_form=False)
            )
        except ApiError as e:
            self._fail("candidate_update_failed", e, "Erreur lors de la modification du candidat")
            return False
        finally:
            self.is_submitting = False
        self.notifier.success("Candidat modifié avec succès")
        self.is_edit_open = False
        self.selected_candidate_id = None
        self.form.reset()
        self.load()
        return True

    def delete(self, candidate_id: int) -> bool:
        if not self.organization_id:
            return False
        try:
            self.service.delete_candidate(self.organization_id, candidate_id)
        except ApiError as e:
            self._fail("candidate_delete_failed", e, "Erreur lors de la suppression du candidat")
            return False
        self.notifier.success("Candidat supprimé avec succès")
        self.load()
        return True
