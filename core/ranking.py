# core/ranking.py
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from core.ahp import calculate_ahp
from core.errors import MissingAhpInputs
from core.models import Candidate, RankingMethod, RankingOptions, RankingResult
from core.saw import calculate_saw
from core.topsis import calculate_topsis
from core.wsm import calculate_wsm

logger = logging.getLogger(__name__)

# selector used when a caller passes a method name that is not recognised
DEFAULT_METHOD = RankingMethod.TOPSIS


def run_algorithm(
    method: Union[RankingMethod, str],
    candidates: Sequence[Candidate],
    weights: Mapping[str, float],
    options: Union[RankingOptions, Mapping[str, Any], None] = None,
    fallback: Optional[RankingMethod] = DEFAULT_METHOD,
) -> RankingResult:
    """
    Single entry point for all four algorithms.

    Unknown method names resolve to `fallback` (TOPSIS); pass fallback=None
    to raise UnknownRankingMethod instead.
    """
    selected = RankingMethod.parse(method, fallback=fallback)
    opts = RankingOptions.coerce(options)
    logger.debug("Running %s over %d candidate(s)", selected.value, len(candidates))

    if selected is RankingMethod.WSM:
        return calculate_wsm(candidates, weights, opts.criteria_types, opts.criteria)
    if selected is RankingMethod.SAW:
        return calculate_saw(candidates, weights, opts.reference_values, opts.criteria)
    if selected is RankingMethod.AHP:
        if opts.pairwise_matrix is None or opts.criteria_order is None:
            raise MissingAhpInputs()
        return calculate_ahp(candidates, opts.pairwise_matrix, opts.criteria_order, opts.reference_values)
    return calculate_topsis(candidates, weights, opts.criteria_types, opts.criteria)
