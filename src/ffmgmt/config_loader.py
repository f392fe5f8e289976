"""Persist and load CLI analysis profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class AnalysisProfile:
    solver: Optional[str] = None
    seasons: List[str] = field(default_factory=list)
    default_slots: List[str] = field(default_factory=list)
    playoff_start_week: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "AnalysisProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            solver=data.get("solver"),
            seasons=[str(season) for season in data.get("seasons", [])],
            default_slots=list(data.get("default_slots", [])),
            playoff_start_week=data.get("playoff_start_week"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "solver": self.solver,
            "seasons": self.seasons,
            "default_slots": self.default_slots,
            "playoff_start_week": self.playoff_start_week,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
