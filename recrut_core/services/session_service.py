from __future__ import annotations
from typing import Callable, List, Optional

from recrut_core.domain.document import Document
from recrut_core.domain.user import CurrentUser
from recrut_core.errors import ApiError
from recrut_core.ports.api import ApiTransport
from recrut_core.utils.logging import get_logger


logger = get_logger(__name__)


class SessionService:
    """Utilisateur courant, compteurs transverses et déconnexion."""

    def __init__(self, api: ApiTransport) -> None:
        self.api = api

    def load_current_user(self) -> CurrentUser:
        return CurrentUser.parse_one(self.api.get("/users/me"))

    def unread_notifications(self, organization_id: int) -> int:
        data = self.api.get("/notifications/count", params={"organizationId": organization_id})
        if not isinstance(data, dict):
            return 0
        try:
            return int(data.get("count") or 0)
        except (TypeError, ValueError):
            return 0

    def list_documents(self, organization_id: int) -> List[Document]:
        return Document.parse_list(self.api.get("/documents", params={"organizationId": organization_id}))

    def logout(self, clear_token: Optional[Callable[[], None]] = None) -> None:
        """Déconnexion côté serveur; le jeton local est effacé même si l'appel échoue."""
        try:
            self.api.post("/auth/logout")
        except ApiError as e:
            logger.error("Erreur lors de la déconnexion: %s", e.message)
        finally:
            if clear_token is not None:
                clear_token()
