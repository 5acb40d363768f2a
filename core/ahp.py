# core/ahp.py
from typing import Mapping, Optional, Sequence

from core.matrix import ensure_candidates
from core.models import Candidate, RankingResult
from core.saw import calculate_saw
from core.weights import derive_ahp_weights


def calculate_ahp(
    candidates: Sequence[Candidate],
    pairwise_matrix: Sequence[Sequence[float]],
    criteria_order: Sequence[str],
    reference_values: Optional[Mapping[str, float]] = None,
) -> RankingResult:
    """
    Derive criterion weights from the pairwise comparisons and score with SAW.

    AHP only supplies the weights, so the returned result is SAW's own
    (method == RankingMethod.SAW).
    """
    ensure_candidates(candidates)
    weights = derive_ahp_weights(pairwise_matrix, criteria_order)
    return calculate_saw(candidates, weights, reference_values)
