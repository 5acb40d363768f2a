# core/ranker.py
from typing import List, Sequence

from core.models import Candidate, RankingBreakdown, RankingMethod, RankingResult, RankingResultEntry

SCORE_DECIMALS = 6


def rank_results(
    method: RankingMethod,
    scores: Sequence[float],
    candidates: Sequence[Candidate],
    breakdowns: Sequence[RankingBreakdown],
) -> RankingResult:
    """
    Order by score descending and assign ranks 1..N by position.

    Equal scores keep their input order and still get distinct consecutive
    ranks.
    """
    if not (len(scores) == len(candidates) == len(breakdowns)):
        raise ValueError("scores, candidates and breakdowns must be index-aligned")

    order = sorted(range(len(scores)), key=lambda i: (-float(scores[i]), i))

    results: List[RankingResultEntry] = []
    for rank, idx in enumerate(order, start=1):
        candidate = candidates[idx]
        results.append(
            RankingResultEntry(
                id=candidate.id,
                label=candidate.label,
                score=round(float(scores[idx]), SCORE_DECIMALS),
                rank=rank,
                breakdown=breakdowns[idx],
                meta=candidate.meta,
            )
        )
    return RankingResult(method=method, results=results)
