# core/saw.py
from typing import Mapping, Optional, Sequence

import numpy as np

from core.matrix import build_matrix, ensure_candidates, select_criteria
from core.models import Candidate, RankingMethod, RankingResult
from core.normalization import reference_normalize
from core.numeric import safe_divisor
from core.ranker import rank_results
from core.weights import normalize_weights, weight_vector
from core.wsm import additive_breakdowns, compute_weighted_sum


def reference_ceilings(
    matrix: np.ndarray,
    columns: Sequence[str],
    reference_values: Optional[Mapping[str, float]] = None,
) -> np.ndarray:
    """
    Per-column divisor. Without a reference map each column is divided by
    its own maximum (1 when that maximum is 0). A supplied map is used as-is:
    criteria missing from it, or set to 0, are divided by 1.
    """
    if reference_values is None:
        if not matrix.shape[0]:
            return np.ones(len(columns))
        return safe_divisor(matrix.max(axis=0))
    refs = np.array([float(reference_values.get(k) or 0.0) for k in columns], dtype=float)
    return safe_divisor(refs)


def calculate_saw(
    candidates: Sequence[Candidate],
    weights: Mapping[str, float],
    reference_values: Optional[Mapping[str, float]] = None,
    criteria: Optional[Sequence[str]] = None,
) -> RankingResult:
    """
    Simple Additive Weighting. Values are divided by a ceiling and never
    inverted, so cost criteria are scored as if higher were better.
    """
    ensure_candidates(candidates)
    columns = select_criteria(candidates, weights, criteria)
    normalized_weights = normalize_weights(weights, columns)
    matrix = build_matrix(candidates, columns)

    normalized = reference_normalize(matrix, reference_ceilings(matrix, columns, reference_values))
    art = compute_weighted_sum(normalized, weight_vector(normalized_weights, columns))
    return rank_results(RankingMethod.SAW, art.scores.tolist(), candidates, additive_breakdowns(art, columns))
