"""Persist and load CLI scoring profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from pyfbb.config import ScoringWeights, default_weights
from pyfbb.ingest import IdConfig


@dataclass
class ScoringProfile:
    weights: ScoringWeights = field(default_factory=default_weights)
    id_config: IdConfig = field(default_factory=lambda: IdConfig(source="MLBAMID"))

    @classmethod
    def load(cls, path: Path) -> "ScoringProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        weights = data.get("weights")
        id_data = data.get("id_config") or {}
        return cls(
            weights=ScoringWeights.model_validate(weights) if weights else default_weights(),
            id_config=IdConfig(
                source=id_data.get("source", "MLBAMID"),
                custom_column=id_data.get("custom_column"),
            ),
        )

    def save(self, path: Path) -> None:
        payload = {
            "weights": self.weights.model_dump(mode="json", by_alias=True),
            "id_config": {
                "source": self.id_config.source,
                "custom_column": self.id_config.custom_column,
            },
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
