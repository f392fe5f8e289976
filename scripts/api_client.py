"""Lightweight REST client for the ffmgmt API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the ffmgmt REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("league", type=Path, nargs="?", help="League JSON export to analyse")
    parser.add_argument("--solver", choices=("greedy", "exact"), default=None, help="Optimal lineup strategy")
    parser.add_argument("--season", action="append", default=[], help="Season id to analyse (repeatable)")
    parser.add_argument("--weeks", action="store_true", help="Request per-week detail")
    parser.add_argument("--resolve-slots", nargs="+", metavar="SLOT", help="Show eligibility for slot tokens and exit")
    parser.add_argument("--output", type=Path, help="Write the full JSON response here")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=120.0) as client:
        if args.resolve_slots:
            resp = client.post("/slots/resolve", json={"slots": args.resolve_slots})
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.league is None:
            raise SystemExit("a league JSON file is required unless using --resolve-slots")

        try:
            league = json.loads(args.league.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid league JSON: {exc}") from exc

        params: dict[str, object] = {"include_weeks": args.weeks}
        if args.solver:
            params["solver"] = args.solver
        if args.season:
            params["season"] = args.season
        resp = client.post("/analyze", json=league, params=params)
        if resp.status_code in {400, 422}:
            raise SystemExit(f"analysis rejected: {resp.text}")
        resp.raise_for_status()
        payload = resp.json()

    for season in payload["seasons"]:
        print(f"Season {season['season_id']}: champion {season['champion_team_id'] or '-'}")
        for entry in season["standings"]:
            regular = entry["regular"]
            print(f"  {entry['name']:<24} {entry['record']['record']:>8}  Mgmt {regular['management_percent']:6.2f}%")
    print(f"{len(payload['careers'])} careers")
    if args.output:
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Saved response to {args.output}")


if __name__ == "__main__":
    main()
