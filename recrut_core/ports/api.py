from __future__ import annotations
from typing import Any, Dict, Optional, Protocol


class ApiTransport(Protocol):
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any: ...

    def get_bytes(self, path: str, params: Optional[Dict[str, Any]] = None) -> bytes: ...

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> Any: ...

    def patch(self, path: str, json: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> Any: ...

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any: ...
