#!/usr/bin/env python3
from __future__ import annotations
import argparse
import sys

from recrut_core.adapters.rest_api import build_api_client
from recrut_core.analytics import candidates_frame
from recrut_core.domain.candidate import CandidateState
from recrut_core.errors import ApiError
from recrut_core.services.candidate_service import CandidateService


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export de la liste des candidats d'une organisation en CSV")
    parser.add_argument("--organization-id", type=int, default=None, help="Organisation à exporter (sinon toutes celles du jeton)")
    parser.add_argument("--output", type=str, default="-", help="Fichier CSV de sortie ('-' = stdout)")
    parser.add_argument("--state", type=str, default=None, choices=[s.value for s in CandidateState], help="Filtrer sur un statut")
    parser.add_argument("--token", type=str, default=None, help="Jeton Bearer (défaut: API_TOKEN)")
    args = parser.parse_args(argv)

    service = CandidateService(build_api_client(token=args.token))
    try:
        candidates = service.list_candidates(args.organization_id)
    except ApiError as e:
        print(f"Erreur API: {e.message}", file=sys.stderr)
        return 1

    if args.state:
        candidates = [c for c in candidates if c.state.value == args.state]

    df = candidates_frame(candidates)
    if args.output == "-":
        df.to_csv(sys.stdout, index=False)
    else:
        df.to_csv(args.output, index=False, encoding="utf-8")
        print(f"Exported {len(df)} candidates to {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
