# core/topsis.py
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

import numpy as np

from core.matrix import build_matrix, ensure_candidates, select_criteria
from core.models import Candidate, CriteriaTypes, RankingBreakdown, RankingMethod, RankingResult, is_benefit
from core.normalization import vector_normalize
from core.numeric import safe_divide
from core.ranker import rank_results
from core.weights import normalize_weights, weight_vector


@dataclass(frozen=True)
class TopsisArtifacts:
    normalized_matrix: np.ndarray  # r_ij
    weighted_matrix: np.ndarray    # v_ij
    pis: np.ndarray                # A*
    nis: np.ndarray                # A-
    s_pos: np.ndarray              # S*
    s_neg: np.ndarray              # S-
    c_star: np.ndarray             # C*


def compute_topsis(
    matrix: np.ndarray,
    weights: np.ndarray,
    benefit_flags: Sequence[bool],
) -> TopsisArtifacts:
    """
    matrix: shape (m, n)
    weights: shape (n,) already normalized to sum to 1
    benefit_flags: length n, False marks a cost criterion
    """
    if matrix.ndim != 2:
        raise ValueError("matrix must be 2D")
    m, n = matrix.shape
    if weights.shape != (n,):
        raise ValueError("weights must have shape (n,)")
    if len(benefit_flags) != n:
        raise ValueError("benefit_flags length must match number of criteria")
    if m == 0:
        raise ValueError("matrix must have at least one row")

    r = vector_normalize(matrix)
    v = r * weights

    flags = np.asarray(benefit_flags, dtype=bool)
    col_max = v.max(axis=0)
    col_min = v.min(axis=0)
    pis = np.where(flags, col_max, col_min)
    nis = np.where(flags, col_min, col_max)

    s_pos = np.sqrt(((v - pis) ** 2).sum(axis=1))
    s_neg = np.sqrt(((v - nis) ** 2).sum(axis=1))
    # both distances are 0 only when the row is both ideals; score 0 then
    c_star = safe_divide(s_neg, s_pos + s_neg)

    return TopsisArtifacts(
        normalized_matrix=r,
        weighted_matrix=v,
        pis=pis,
        nis=nis,
        s_pos=s_pos,
        s_neg=s_neg,
        c_star=c_star,
    )


def calculate_topsis(
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

    art = compute_topsis(matrix, weight_vector(normalized_weights, columns), flags)

    breakdowns: List[RankingBreakdown] = []
    for i in range(len(candidates)):
        breakdowns.append(
            RankingBreakdown(
                normalized={k: float(art.normalized_matrix[i, j]) for j, k in enumerate(columns)},
                weighted={k: float(art.weighted_matrix[i, j]) for j, k in enumerate(columns)},
                ideal_best_distance=float(art.s_pos[i]),
                ideal_worst_distance=float(art.s_neg[i]),
            )
        )

    return rank_results(RankingMethod.TOPSIS, art.c_star.tolist(), candidates, breakdowns)
