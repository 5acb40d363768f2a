# core/normalization.py
from typing import Sequence

import numpy as np

from core.numeric import safe_divide, safe_divisor


def _check_2d(matrix: np.ndarray) -> None:
    if matrix.ndim != 2:
        raise ValueError("matrix must be 2D")


def vector_normalize(matrix: np.ndarray) -> np.ndarray:
    """Divide each column by its Euclidean norm; all-zero columns stay zero."""
    _check_2d(matrix)
    denom = np.sqrt((matrix ** 2).sum(axis=0))
    return safe_divide(matrix, denom)


def min_max_normalize(matrix: np.ndarray, benefit_flags: Sequence[bool]) -> np.ndarray:
    """
    Rescale each column to [0, 1] using its min and max.

    benefit: (x - min) / span
    cost:    (max - x) / span
    A constant column has span 1, so every cell becomes 0.
    """
    _check_2d(matrix)
    m, n = matrix.shape
    if len(benefit_flags) != n:
        raise ValueError("benefit_flags length must match number of criteria")
    if m == 0:
        return matrix.copy()

    col_min = matrix.min(axis=0)
    col_max = matrix.max(axis=0)
    span = safe_divisor(col_max - col_min)

    flags = np.asarray(benefit_flags, dtype=bool)
    benefit = (matrix - col_min) / span
    cost = (col_max - matrix) / span
    return np.where(flags, benefit, cost)


def reference_normalize(matrix: np.ndarray, references: np.ndarray) -> np.ndarray:
    """Divide each column by its reference ceiling (zero references become 1)."""
    _check_2d(matrix)
    if references.shape != (matrix.shape[1],):
        raise ValueError("references must have shape (n,)")
    return safe_divide(matrix, references)
