from __future__ import annotations
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from recrut_core.domain.candidate import ApiModel


class UserRole(str, Enum):
    ADMIN = "admin"
    RH = "rh"
    MANAGER = "manager"
    CANDIDATE = "candidate"


# Rôles autorisés à modifier / supprimer un candidat
STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.RH, UserRole.MANAGER})


class Membership(ApiModel):
    organization_id: int = Field(alias="organizationId")
    role: Optional[UserRole] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v):
        # rôle inconnu ou absent => None plutôt qu'une erreur de validation
        if isinstance(v, str):
            v = v.strip().lower()
            return v if v in {r.value for r in UserRole} else None
        return v


class CurrentUser(ApiModel):
    id: int
    name: str = ""
    email: str = ""
    user_organizations: List[Membership] = Field(default_factory=list, alias="userOrganizations")

    @property
    def organization_id(self) -> Optional[int]:
        return self.user_organizations[0].organization_id if self.user_organizations else None

    @property
    def role(self) -> Optional[UserRole]:
        return self.user_organizations[0].role if self.user_organizations else None

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE
