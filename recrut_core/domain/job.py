from __future__ import annotations
from typing import Optional

from recrut_core.domain.candidate import ApiModel


class JobOffer(ApiModel):
    id: int
    title: str = ""
    description: Optional[str] = None


class Form(ApiModel):
    id: int
    name: str = ""
    description: Optional[str] = None
