# services/ranking_service.py
import json
import logging
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
from sqlalchemy.engine import Engine

from core.models import Candidate, RankingMethod, RankingOptions, RankingResult
from core.profiles import (
    DEFAULT_RANKING_WEIGHTS,
    PROFILE_CRITERIA,
    StudentProfile,
    build_candidates_from_profiles,
    default_pairwise_matrix,
)
from core.ranking import run_algorithm
from core.weights import build_pairwise_matrix_from_weights
from persistence.repositories.profile_repo import ProfileRepo
from services.config import RankingSettings

logger = logging.getLogger(__name__)


class RankingService:
    def __init__(self, engine: Engine, settings: Optional[RankingSettings] = None):
        self.engine = engine
        self.settings = settings or RankingSettings()
        self.profile_repo = ProfileRepo(engine)

    def load_candidates(self) -> Tuple[List[StudentProfile], List[Candidate]]:
        profiles = self.profile_repo.list_approved()
        logger.info("Loaded %d approved profile(s)", len(profiles))
        return profiles, build_candidates_from_profiles(profiles)

    def build_options(
        self,
        method: RankingMethod,
        weights: Mapping[str, float],
        criteria_order: Sequence[str] = PROFILE_CRITERIA,
    ) -> RankingOptions:
        pairwise = None
        if method is RankingMethod.AHP:
            if dict(weights) == dict(DEFAULT_RANKING_WEIGHTS):
                pairwise = default_pairwise_matrix(criteria_order)
            else:
                pairwise = build_pairwise_matrix_from_weights(criteria_order, weights)
        return RankingOptions(
            criteria_types=dict(self.settings.criteria_types),
            pairwise_matrix=pairwise,
            criteria_order=list(criteria_order),
        )

    def validate(self, candidates: Sequence[Candidate], weights: Mapping[str, float]) -> Tuple[bool, List[str]]:
        issues: List[str] = []

        if not candidates:
            issues.append("No approved profiles to rank yet.")
        else:
            active = [k for k in candidates[0].metrics if k in weights]
            if not active:
                issues.append("Weights do not cover any ranking criterion.")
            elif sum(abs(float(weights[k] or 0.0)) for k in active) == 0:
                issues.append("All weights are zero. Give at least one criterion a weight.")

        if any(float(w or 0.0) < 0 for w in weights.values()):
            logger.warning("Negative weights supplied; their magnitude is used")

        for msg in issues:
            logger.warning("Ranking validation: %s", msg)
        return (len(issues) == 0), issues

    def rank(
        self,
        candidates: Sequence[Candidate],
        method: Union[RankingMethod, str, None] = None,
        weights: Optional[Mapping[str, float]] = None,
    ) -> RankingResult:
        selected = RankingMethod.parse(method or self.settings.method, fallback=self.settings.method)
        weights = dict(weights if weights is not None else self.settings.weights)
        options = self.build_options(selected, weights)

        result = run_algorithm(selected, candidates, weights, options)
        logger.info("Ranked %d candidate(s) with %s", len(result.results), selected.value)
        return result

    def rank_approved(
        self,
        method: Union[RankingMethod, str, None] = None,
        weights: Optional[Mapping[str, float]] = None,
    ) -> Tuple[List[StudentProfile], RankingResult]:
        profiles, candidates = self.load_candidates()
        return profiles, self.rank(candidates, method, weights)

    @staticmethod
    def results_frame(result: RankingResult) -> pd.DataFrame:
        """One row per ranked candidate with flattened breakdown columns."""
        rows = []
        for entry in result.results:
            row = {"rank": entry.rank, "id": entry.id, "label": entry.label, "score": entry.score}
            bd = entry.breakdown
            for k, v in bd.normalized.items():
                row[f"normalized.{k}"] = v
            for k, v in (bd.weighted or {}).items():
                row[f"weighted.{k}"] = v
            for k, v in (bd.weighted_contributions or {}).items():
                row[f"contribution.{k}"] = v
            if bd.ideal_best_distance is not None:
                row["d_best"] = bd.ideal_best_distance
                row["d_worst"] = bd.ideal_worst_distance
            rows.append(row)
        if not rows:
            return pd.DataFrame(columns=["rank", "id", "label", "score"])
        return pd.DataFrame(rows)

    @staticmethod
    def results_json(result: RankingResult) -> str:
        # meta carries StudentProfile objects; keep only the uid for export
        payload = result.to_dict()
        for row in payload["results"]:
            row["meta"] = {"uid": (row.get("meta") or {}).get("uid")}
        return json.dumps(payload, indent=2)
