import pandas as pd

import scripts.export_candidates as export
from conftest import FakeApi, make_candidate
from recrut_core.errors import ApiError


def test_export_to_csv_with_state_filter(tmp_path, monkeypatch):
    api = FakeApi({("GET", "/candidates"): [make_candidate(1), make_candidate(2, state="accepte")]})
    monkeypatch.setattr(export, "build_api_client", lambda token=None: api)
    out = tmp_path / "c.csv"
    rc = export.main(["--organization-id", "3", "--output", str(out), "--state", "accepte"])
    assert rc == 0
    assert api.calls[0][2] == {"organizationId": 3}
    df = pd.read_csv(out)
    assert df["id"].tolist() == [2]
    assert df["etat"].tolist() == ["Accepté"]


def test_export_api_failure_returns_1(monkeypatch, capsys):
    api = FakeApi({("GET", "/candidates"): ApiError("Non autorisé", status_code=401)})
    monkeypatch.setattr(export, "build_api_client", lambda token=None: api)
    assert export.main([]) == 1
    assert "Non autorisé" in capsys.readouterr().err
