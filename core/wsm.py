# core/wsm.py
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

import numpy as np

from core.matrix import build_matrix, ensure_candidates, select_criteria
from core.models import Candidate, CriteriaTypes, RankingBreakdown, RankingMethod, RankingResult, is_benefit
from core.normalization import min_max_normalize
from core.ranker import rank_results
from core.weights import normalize_weights, weight_vector


@dataclass(frozen=True)
class WeightedSumArtifacts:
    normalized_matrix: np.ndarray  # r_ij
    contributions: np.ndarray      # r_ij * w_j
    scores: np.ndarray             # sum_j r_ij * w_j


def compute_weighted_sum(normalized: np.ndarray, weights: np.ndarray) -> WeightedSumArtifacts:
    if normalized.ndim != 2:
        raise ValueError("matrix must be 2D")
    if weights.shape != (normalized.shape[1],):
        raise ValueError("weights must have shape (n,)")
    contributions = normalized * weights
    return WeightedSumArtifacts(
        normalized_matrix=normalized,
        contributions=contributions,
        scores=contributions.sum(axis=1),
    )


def additive_breakdowns(art: WeightedSumArtifacts, columns: Sequence[str]) -> List[RankingBreakdown]:
    return [
        RankingBreakdown(
            normalized={k: float(art.normalized_matrix[i, j]) for j, k in enumerate(columns)},
            weighted_contributions={k: float(art.contributions[i, j]) for j, k in enumerate(columns)},
        )
        for i in range(art.normalized_matrix.shape[0])
    ]


def calculate_wsm(
    candidates: Sequence[Candidate],
    weights: Mapping[str, float],
    criteria_types: Optional[CriteriaTypes] = None,
    criteria: Optional[Sequence[str]] = None,
) -> RankingResult:
    ensure_candidates(candidates)
    columns = select_criteria(candidates, weights, criteria)
    normalized_weights = normalize_weights(weights, columns)
    matrix = build_matrix(candidates, columns)
    flags = [is_benefit(c, criteria_types) for c in columns]

    art = compute_weighted_sum(min_max_normalize(matrix, flags), weight_vector(normalized_weights, columns))
    return rank_results(RankingMethod.WSM, art.scores.tolist(), candidates, additive_breakdowns(art, columns))
