# core/matrix.py
import math
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np

from core.errors import EmptyCandidateSet, NoOverlappingCriteria
from core.models import Candidate


def ensure_candidates(candidates: Sequence[Candidate]) -> None:
    if not candidates:
        raise EmptyCandidateSet()


def select_criteria(
    candidates: Sequence[Candidate],
    weights: Mapping[str, float],
    criteria: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Active criteria for the batch.

    Without an explicit `criteria` schema the columns are the metric keys of
    candidates[0] that also carry a weight, in that candidate's key order.
    With a schema, the schema's members that carry a weight are used in
    schema order and no candidate is inspected.
    """
    ensure_candidates(candidates)
    source = criteria if criteria is not None else list(candidates[0].metrics.keys())
    columns = [c for c in source if c in weights]
    if not columns:
        raise NoOverlappingCriteria()
    return columns


def _as_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return float(value or 0)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def build_matrix(candidates: Sequence[Candidate], criteria: Sequence[str]) -> np.ndarray:
    """rows = candidates, cols = criteria; missing or non-numeric cells become 0."""
    ensure_candidates(candidates)
    return np.array(
        [[_as_number(c.metrics.get(k)) for k in criteria] for c in candidates],
        dtype=float,
    ).reshape(len(candidates), len(criteria))
