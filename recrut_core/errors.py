from __future__ import annotations
from typing import Any, Optional


class ApiError(Exception):
    """Erreur unique remontée par le client REST (HTTP >= 400, réseau, JSON invalide)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class MissingOrganizationError(ApiError):
    def __init__(self, message: str = "Impossible de déterminer l'organisation") -> None:
        super().__init__(message)


def extract_error_message(payload: Any, default: str) -> str:
    """Extrait au mieux le message d'erreur d'un corps de réponse.

    Le backend renvoie `{"message": "..."}` ou, pour les erreurs de validation,
    `{"message": ["...", "..."]}` : on garde alors le premier élément.
    """
    if not isinstance(payload, dict):
        return default
    msg = payload.get("message")
    if isinstance(msg, list):
        msg = msg[0] if msg else None
    if isinstance(msg, str) and msg.strip():
        return msg
    return default


def message_for(exc: Exception, default: str) -> str:
    if isinstance(exc, MissingOrganizationError):
        return exc.message
    if isinstance(exc, ApiError) and exc.payload is not None:
        return extract_error_message(exc.payload, default)
    return default
