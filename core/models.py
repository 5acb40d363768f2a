# core/models.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from core.errors import UnknownRankingMethod

logger = logging.getLogger(__name__)

CriteriaWeights = Dict[str, float]
PairwiseMatrix = List[List[float]]


class RankingMethod(str, Enum):
    TOPSIS = "TOPSIS"
    WSM = "WSM"
    SAW = "SAW"
    AHP = "AHP"

    @classmethod
    def parse(
        cls,
        value: Union["RankingMethod", str],
        fallback: Optional["RankingMethod"] = None,
    ) -> "RankingMethod":
        """
        Resolve a selector. Unknown values return `fallback` (with a warning)
        or raise UnknownRankingMethod when no fallback is given.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            if fallback is None:
                raise UnknownRankingMethod(value)
            logger.warning("Unknown ranking method %r, falling back to %s", value, fallback.value)
            return fallback


class CriterionDirection(str, Enum):
    BENEFIT = "benefit"
    COST = "cost"


CriteriaTypes = Mapping[str, Union[CriterionDirection, str]]


def is_benefit(criterion: str, criteria_types: Optional[CriteriaTypes]) -> bool:
    # anything not marked cost (case-insensitive) counts as benefit
    direction = (criteria_types or {}).get(criterion) or CriterionDirection.BENEFIT
    raw = direction.value if isinstance(direction, CriterionDirection) else str(direction)
    return raw.strip().lower() != CriterionDirection.COST.value


@dataclass(frozen=True)
class Candidate:
    id: str
    label: str
    metrics: Mapping[str, Any]
    meta: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class RankingBreakdown:
    normalized: Dict[str, float]
    weighted: Optional[Dict[str, float]] = None
    weighted_contributions: Optional[Dict[str, float]] = None
    ideal_best_distance: Optional[float] = None
    ideal_worst_distance: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"normalized": dict(self.normalized)}
        if self.weighted is not None:
            out["weighted"] = dict(self.weighted)
        if self.weighted_contributions is not None:
            out["weighted_contributions"] = dict(self.weighted_contributions)
        if self.ideal_best_distance is not None:
            out["ideal_best_distance"] = self.ideal_best_distance
        if self.ideal_worst_distance is not None:
            out["ideal_worst_distance"] = self.ideal_worst_distance
        return out


@dataclass(frozen=True)
class RankingResultEntry:
    id: str
    label: str
    score: float
    rank: int
    breakdown: RankingBreakdown
    meta: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "score": self.score,
            "rank": self.rank,
            "breakdown": self.breakdown.to_dict(),
            "meta": self.meta,
        }


@dataclass(frozen=True)
class RankingResult:
    method: RankingMethod
    results: List[RankingResultEntry]

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method.value, "results": [r.to_dict() for r in self.results]}


@dataclass(frozen=True)
class RankingOptions:
    """Algorithm-specific inputs accepted by run_algorithm."""
    criteria_types: Optional[CriteriaTypes] = None
    pairwise_matrix: Optional[Sequence[Sequence[float]]] = None
    criteria_order: Optional[Sequence[str]] = None
    reference_values: Optional[Mapping[str, float]] = None
    criteria: Optional[Sequence[str]] = None

    @classmethod
    def coerce(cls, options: Union["RankingOptions", Mapping[str, Any], None]) -> "RankingOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {k: options[k] for k in cls.__dataclass_fields__ if k in options}
        return cls(**known)
