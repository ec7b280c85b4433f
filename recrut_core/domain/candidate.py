from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recrut_core.errors import ApiError


class CandidateState(str, Enum):
    NOUVEAU = "nouveau"
    PRESELECTIONNE = "preselectionne"
    ENTRETIEN_PLANIFIE = "entretien_planifie"
    EN_ENTRETIEN = "en_entretien"
    ACCEPTE = "accepte"
    REFUSE = "refuse"
    ANNULE = "annule"

    @property
    def label(self) -> str:
        return STATE_LABELS[self]


STATE_LABELS = {
    CandidateState.NOUVEAU: "Nouveau",
    CandidateState.PRESELECTIONNE: "Présélectionné",
    CandidateState.ENTRETIEN_PLANIFIE: "Entretien Planifié",
    CandidateState.EN_ENTRETIEN: "En Entretien",
    CandidateState.ACCEPTE: "Accepté",
    CandidateState.REFUSE: "Refusé",
    CandidateState.ANNULE: "Annulé",
}

# Couleurs (fond, texte) des pastilles d'état
STATE_COLORS = {
    CandidateState.NOUVEAU: ("#eff6ff", "#1d4ed8"),
    CandidateState.PRESELECTIONNE: ("#faf5ff", "#7e22ce"),
    CandidateState.ENTRETIEN_PLANIFIE: ("#fff7ed", "#c2410c"),
    CandidateState.EN_ENTRETIEN: ("#fefce8", "#a16207"),
    CandidateState.ACCEPTE: ("#ecfdf5", "#047857"),
    CandidateState.REFUSE: ("#f9fafb", "#6b7280"),
    CandidateState.ANNULE: ("#fef2f2", "#b91c1c"),
}

# États à partir desquels un candidat ne peut plus annuler sa candidature
CLOSED_STATES = frozenset({CandidateState.ANNULE, CandidateState.ACCEPTE, CandidateState.REFUSE})


def state_label(value: object) -> str:
    try:
        return CandidateState(value).label
    except ValueError:
        return str(value)


class ApiModel(BaseModel):
    """Base des modèles REST: alias camelCase, champs inconnus ignorés."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def parse_list(cls, rows: Any) -> list:
        """Valide une liste JSON; une réponse mal formée devient une ApiError."""
        try:
            return [cls.model_validate(r) for r in (rows or [])]
        except ValidationError as e:
            raise ApiError(f"Réponse inattendue du serveur ({cls.__name__})") from e

    @classmethod
    def parse_one(cls, row: Any):
        try:
            return cls.model_validate(row or {})
        except ValidationError as e:
            raise ApiError(f"Réponse inattendue du serveur ({cls.__name__})") from e


class JobOfferRef(ApiModel):
    id: int
    title: str = ""


class FormRef(ApiModel):
    id: int
    name: str = ""


class ManagerRef(ApiModel):
    id: int
    name: str = ""
    email: Optional[str] = None


class OrganizationRef(ApiModel):
    id: int
    name: str = ""


class Candidate(ApiModel):
    id: int
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: Optional[str] = None
    state: CandidateState = CandidateState.NOUVEAU
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    organization_id: Optional[int] = Field(default=None, alias="organizationId")
    notes: Optional[str] = None
    job_offer: Optional[JobOfferRef] = Field(default=None, alias="jobOffer")
    form: Optional[FormRef] = None
    manager: Optional[ManagerRef] = None
    organization: Optional[OrganizationRef] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @property
    def is_closed(self) -> bool:
        return self.state in CLOSED_STATES

    def matches(self, query: str) -> bool:
        """Recherche plein texte insensible à la casse sur prénom, nom et email."""
        q = (query or "").lower()
        if not q:
            return True
        return q in self.first_name.lower() or q in self.last_name.lower() or q in self.email.lower()


class StateHistory(ApiModel):
    id: Optional[str] = Field(default=None, alias="_id")
    candidate_id: int = Field(alias="candidateId")
    organization_id: Optional[int] = Field(default=None, alias="organizationId")
    previous_state: Optional[str] = Field(default=None, alias="previousState")
    new_state: str = Field(alias="newState")
    changed_by: Optional[int] = Field(default=None, alias="changedBy")
    changed_by_name: str = Field(default="", alias="changedByName")
    comment: Optional[str] = None
    changed_at: Optional[datetime] = Field(default=None, alias="changedAt")
