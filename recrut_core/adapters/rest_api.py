from __future__ import annotations
from typing import Any, Dict, Optional

import requests

from recrut_core.config.settings import AppConfig, get_app_config
from recrut_core.errors import ApiError, extract_error_message
from recrut_core.utils.logging import get_logger


logger = get_logger(__name__)


class RestApiClient:
    """Client HTTP partagé vers l'API de recrutement.

    Ajoute le jeton Bearer à chaque requête et convertit toute erreur (statut >= 400,
    erreur réseau, JSON invalide) en `ApiError`. Pas de retry, pas de cache.
    """

    def __init__(self, base_url: str, token: str = "", timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.set_token(token)

    # --- Jeton ---
    def set_token(self, token: str) -> None:
        self.token = (token or "").strip()
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"
        else:
            self.session.headers.pop("Authorization", None)

    def clear_token(self) -> None:
        self.set_token("")
        self.session.cookies.pop("token", None)

    # --- Helpers ---
    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        # organizationId=None => paramètre omis (endpoints non scopés)
        if not params:
            return None
        cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
        return cleaned or None

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        params = self._clean_params(kwargs.pop("params", None))
        logger.debug("api_request", extra={"method": method, "url": url, "params": params})
        try:
            resp = self.session.request(method, url, params=params, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("api_network_error", extra={"method": method, "url": url, "error": str(e)})
            raise ApiError(f"Erreur réseau: {e}") from e
        if resp.status_code >= 400:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            message = extract_error_message(payload, f"Erreur HTTP {resp.status_code}")
            logger.warning("api_http_error", extra={"method": method, "url": url, "status": resp.status_code, "error": message})
            raise ApiError(message, status_code=resp.status_code, payload=payload)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("Réponse JSON invalide", status_code=resp.status_code) from e

    # --- API ---
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json(self._request("GET", path, params=params))

    def get_bytes(self, path: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        return self._request("GET", path, params=params).content

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json(self._request("POST", path, json=json, params=params))

    def patch(self, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json(self._request("PATCH", path, json=json, params=params))

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json(self._request("DELETE", path, params=params))


def build_api_client(token: Optional[str] = None, config: Optional[AppConfig] = None) -> RestApiClient:
    cfg = config or get_app_config()
    return RestApiClient(
        base_url=cfg.api_base_url,
        token=token if token is not None else cfg.api_token,
        timeout=cfg.api_timeout,
    )
