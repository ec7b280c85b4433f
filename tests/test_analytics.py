from datetime import date

from conftest import make_candidate
from recrut_core.analytics import CANDIDATE_COLUMNS, candidates_frame, interviews_on, recent_candidates, state_counts
from recrut_core.domain.candidate import Candidate
from recrut_core.domain.interview import Interview


def _cands(*rows):
    return [Candidate.model_validate(r) for r in rows]


def test_candidates_frame_columns():
    df = candidates_frame(_cands(make_candidate(1, jobOffer={"id": 2, "title": "Comptable"})))
    assert list(df.columns) == CANDIDATE_COLUMNS
    assert df.loc[0, "etat"] == "Nouveau"
    assert df.loc[0, "offre"] == "Comptable"


def test_candidates_frame_empty():
    df = candidates_frame([])
    assert df.empty
    assert list(df.columns) == CANDIDATE_COLUMNS


def test_state_counts_reindexed_on_all_states():
    counts = state_counts(_cands(make_candidate(1), make_candidate(2), make_candidate(3, state="refuse")))
    assert len(counts) == 7
    assert counts["Nouveau"] == 2
    assert counts["Refusé"] == 1
    assert counts["Annulé"] == 0


def test_recent_candidates_sorted_desc():
    cands = _cands(*[make_candidate(i) for i in range(1, 8)])
    recent = recent_candidates(cands, 5)
    assert [c.id for c in recent] == [7, 6, 5, 4, 3]


def test_recent_candidates_undated_last():
    cands = _cands(make_candidate(1, createdAt=None), make_candidate(2))
    assert [c.id for c in recent_candidates(cands)] == [2, 1]


def test_interviews_on_prefix_match():
    its = [
        Interview.model_validate({"id": 1, "date": "2025-05-20T00:00:00.000Z"}),
        Interview.model_validate({"id": 2, "date": "2025-05-20"}),
        Interview.model_validate({"id": 3, "date": "2025-05-21"}),
    ]
    assert [i.id for i in interviews_on(its, date(2025, 5, 20))] == [1, 2]
