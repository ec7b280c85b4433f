from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field

from recrut_core.domain.candidate import ApiModel


class Document(ApiModel):
    id: int
    filename: str = ""
    original_name: str = Field(default="", alias="originalName")
    type: str = "document"
    mime_type: str = Field(default="", alias="mimeType")
    size: int = 0
    description: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @property
    def display_name(self) -> str:
        return self.original_name or self.filename or f"document-{self.id}"


def format_size(size: int) -> str:
    """Taille lisible: 512 o, 12.3 Ko, 4.5 Mo."""
    n = float(size or 0)
    if n < 1024:
        return f"{int(n)} o"
    for unit in ("Ko", "Mo", "Go"):
        n /= 1024.0
        if n < 1024 or unit == "Go":
            return f"{n:.1f} {unit}"
    return f"{n:.1f} Go"
