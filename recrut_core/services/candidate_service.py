from __future__ import annotations
from typing import Any, Dict, List, Optional

from recrut_core.domain.candidate import Candidate, CandidateState, StateHistory
from recrut_core.domain.document import Document
from recrut_core.domain.job import Form, JobOffer
from recrut_core.errors import MissingOrganizationError
from recrut_core.ports.api import ApiTransport
from recrut_core.utils.logging import get_logger


logger = get_logger(__name__)


def _org_params(organization_id: Optional[int]) -> Dict[str, Any]:
    return {"organizationId": organization_id}


def _require_org(organization_id: Optional[int]) -> int:
    if not organization_id:
        raise MissingOrganizationError()
    return organization_id


class CandidateService:
    """Accès aux endpoints /candidates (recruteur et candidat)."""

    def __init__(self, api: ApiTransport) -> None:
        self.api = api

    # --- Lecture ---
    def list_candidates(self, organization_id: Optional[int] = None) -> List[Candidate]:
        return Candidate.parse_list(self.api.get("/candidates", params=_org_params(organization_id)))

    def list_my_applications(self) -> List[Candidate]:
        # Pas d'organizationId: toutes les candidatures de toutes les organisations
        return Candidate.parse_list(self.api.get("/candidates/me/applications"))

    def get_history(self, candidate_id: int, organization_id: Optional[int]) -> List[StateHistory]:
        org = _require_org(organization_id)
        return StateHistory.parse_list(self.api.get(f"/candidates/{candidate_id}/history", params=_org_params(org)))

    def list_documents(self, candidate_id: int, organization_id: Optional[int]) -> List[Document]:
        org = _require_org(organization_id)
        return Document.parse_list(self.api.get(f"/candidates/{candidate_id}/documents", params=_org_params(org)))

    def download_document(self, document_id: int, organization_id: Optional[int]) -> bytes:
        org = _require_org(organization_id)
        return self.api.get_bytes(f"/documents/{document_id}/download", params=_org_params(org))

    def list_job_offers(self, organization_id: Optional[int]) -> List[JobOffer]:
        org = _require_org(organization_id)
        return JobOffer.parse_list(self.api.get("/forms/job-offers", params=_org_params(org)))

    def list_forms(self, organization_id: Optional[int]) -> List[Form]:
        org = _require_org(organization_id)
        return Form.parse_list(self.api.get("/forms", params=_org_params(org)))

    # --- Écriture ---
    def create_candidate(self, organization_id: Optional[int], payload: Dict[str, Any]) -> Any:
        org = _require_org(organization_id)
        logger.info("candidate_create", extra={"organization_id": org})
        return self.api.post("/candidates", json=payload, params=_org_params(org))

    def update_candidate(self, organization_id: Optional[int], candidate_id: int, payload: Dict[str, Any]) -> Any:
        org = _require_org(organization_id)
        logger.info("candidate_update", extra={"organization_id": org, "candidate_id": candidate_id})
        return self.api.patch(f"/candidates/{candidate_id}", json=payload, params=_org_params(org))

    def delete_candidate(self, organization_id: Optional[int], candidate_id: int) -> Any:
        org = _require_org(organization_id)
        logger.info("candidate_delete", extra={"organization_id": org, "candidate_id": candidate_id})
        return self.api.delete(f"/candidates/{candidate_id}", params=_org_params(org))

    def change_state(
        self,
        candidate_id: int,
        new_state: CandidateState,
        organization_id: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> Any:
        """PATCH de l'état. Les transitions sont validées côté serveur uniquement."""
        body: Dict[str, Any] = {"newState": CandidateState(new_state).value}
        if comment:
            body["comment"] = comment
        logger.info("candidate_state_change", extra={"candidate_id": candidate_id, "new_state": body["newState"]})
        return self.api.patch(f"/candidates/{candidate_id}/state", json=body, params=_org_params(organization_id))
