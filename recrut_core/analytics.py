from __future__ import annotations
from datetime import date
from typing import List

import pandas as pd

from recrut_core.domain.candidate import Candidate, CandidateState, STATE_LABELS
from recrut_core.domain.interview import Interview


CANDIDATE_COLUMNS = ["id", "prenom", "nom", "email", "telephone", "etat", "offre", "cree_le"]


def candidates_frame(candidates: List[Candidate]) -> pd.DataFrame:
    """DataFrame tabulaire des candidats (export CSV, tableau Streamlit)."""
    rows = [
        {
            "id": c.id,
            "prenom": c.first_name,
            "nom": c.last_name,
            "email": c.email,
            "telephone": c.phone or "",
            "etat": c.state.label,
            "offre": c.job_offer.title if c.job_offer else "",
            "cree_le": c.created_at,
        }
        for c in candidates
    ]
    return pd.DataFrame(rows, columns=CANDIDATE_COLUMNS)


def state_counts(candidates: List[Candidate]) -> pd.Series:
    """Nombre de candidats par état, réindexé sur tous les états (libellés)."""
    s = pd.Series([c.state for c in candidates], dtype=object)
    counts = s.value_counts().reindex(list(CandidateState), fill_value=0)
    counts.index = [STATE_LABELS[st] for st in counts.index]
    return counts.astype(int)


def recent_candidates(candidates: List[Candidate], n: int = 5) -> List[Candidate]:
    """Les n candidats les plus récents (createdAt décroissant, sans date en dernier)."""
    dated = [c for c in candidates if c.created_at is not None]
    undated = [c for c in candidates if c.created_at is None]
    dated.sort(key=lambda c: c.created_at.timestamp(), reverse=True)
    return (dated + undated)[:n]


def interviews_on(interviews: List[Interview], day: date) -> List[Interview]:
    # Comparaison sur le préfixe ISO de la date (le backend peut renvoyer un datetime complet)
    prefix = day.isoformat()
    return [i for i in interviews if (i.date or "").startswith(prefix)]
