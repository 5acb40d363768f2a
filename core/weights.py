# core/weights.py
from typing import Dict, List, Mapping, Sequence

import numpy as np

from core.errors import AllWeightsZero, MalformedPairwiseMatrix
from core.numeric import is_zero, safe_divisor

# floor for zero weights when building ratio matrices (float64 machine epsilon)
WEIGHT_FLOOR = float(np.finfo(float).eps)


def normalize_weights(weights: Mapping[str, float], criteria: Sequence[str]) -> Dict[str, float]:
    """
    Scale |w| over the active criteria so they sum to 1.
    Recomputed on every call; the active subset depends on the candidates.
    """
    magnitudes = np.array([abs(float(weights.get(k) or 0.0)) for k in criteria], dtype=float)
    total = float(magnitudes.sum())
    if is_zero(total):
        raise AllWeightsZero()
    return {k: float(v) for k, v in zip(criteria, magnitudes / total)}


def weight_vector(normalized: Mapping[str, float], criteria: Sequence[str]) -> np.ndarray:
    return np.array([normalized[k] for k in criteria], dtype=float)


def validate_pairwise_matrix(pairwise: Sequence[Sequence[float]], criteria_order: Sequence[str]) -> np.ndarray:
    n = len(criteria_order)
    if len(pairwise) != n:
        raise MalformedPairwiseMatrix()
    for row in pairwise:
        if len(row) != n:
            raise MalformedPairwiseMatrix("Each row inside pairwise matrix must match criteria length.")
    return np.array([[float(v or 0.0) for v in row] for row in pairwise], dtype=float).reshape(n, n)


def derive_ahp_weights(pairwise: Sequence[Sequence[float]], criteria_order: Sequence[str]) -> Dict[str, float]:
    """
    Column-normalize the comparison matrix, then average each row.

    [[1, 2], [0.5, 1]] over ("cgpa", "certificates") -> {cgpa: 2/3, certificates: 1/3}
    """
    a = validate_pairwise_matrix(pairwise, criteria_order)
    n = len(criteria_order)
    if n == 0:
        return {}
    col_sums = safe_divisor(a.sum(axis=0))
    priorities = (a / col_sums).sum(axis=1) / n
    return {k: float(p) for k, p in zip(criteria_order, priorities)}


def build_pairwise_matrix_from_weights(criteria: Sequence[str], weights: Mapping[str, float]) -> List[List[float]]:
    """Consistent comparison matrix with cell (i, j) = w_i / w_j."""
    sanitized = [abs(float(weights.get(k) or 0.0)) or WEIGHT_FLOOR for k in criteria]
    return [[wi / wj for wj in sanitized] for wi in sanitized]
