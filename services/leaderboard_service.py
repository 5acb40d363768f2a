# services/leaderboard_service.py
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

import pandas as pd

from core.models import RankingResult
from core.profiles import StudentProfile


class LeaderboardCategory(str, Enum):
    OVERALL = "overall"
    ACADEMIC = "academic"
    SPORTS = "sports"
    HACKATHON = "hackathon"
    INTERNSHIP = "internship"


# categories ranked by how many entries a profile has; zero-entry profiles are left out
_COUNT_FIELDS = {
    LeaderboardCategory.SPORTS: "sports",
    LeaderboardCategory.HACKATHON: "hackathons",
    LeaderboardCategory.INTERNSHIP: "internships",
}


@dataclass(frozen=True)
class RankingStats:
    total_students: int
    avg_cgpa: float
    total_achievements: int


def by_cgpa(profiles: Sequence[StudentProfile]) -> List[StudentProfile]:
    return sorted(profiles, key=lambda p: -float(p.cgpa))


def overall_order(profiles: Sequence[StudentProfile], result: Optional[RankingResult]) -> List[StudentProfile]:
    by_id = {p.id: p for p in profiles}
    ordered = [by_id[e.id] for e in (result.results if result else []) if e.id in by_id]
    return ordered or by_cgpa(profiles)


def leaderboard(
    profiles: Sequence[StudentProfile],
    category: LeaderboardCategory,
    result: Optional[RankingResult] = None,
) -> List[StudentProfile]:
    category = LeaderboardCategory(category)
    if category is LeaderboardCategory.OVERALL:
        return overall_order(profiles, result)
    if category is LeaderboardCategory.ACADEMIC:
        return by_cgpa(profiles)

    attr = _COUNT_FIELDS[category]
    with_entries = [p for p in profiles if len(getattr(p, attr))]
    return sorted(with_entries, key=lambda p: -len(getattr(p, attr)))


def all_leaderboards(
    profiles: Sequence[StudentProfile],
    result: Optional[RankingResult] = None,
) -> Dict[LeaderboardCategory, List[StudentProfile]]:
    return {c: leaderboard(profiles, c, result) for c in LeaderboardCategory}


def ranking_stats(profiles: Sequence[StudentProfile]) -> RankingStats:
    if not profiles:
        return RankingStats(total_students=0, avg_cgpa=0.0, total_achievements=0)
    return RankingStats(
        total_students=len(profiles),
        avg_cgpa=round(sum(float(p.cgpa) for p in profiles) / len(profiles), 2),
        total_achievements=sum(p.achievement_count for p in profiles),
    )


def leaderboard_frame(profiles: Sequence[StudentProfile]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "rank": i,
                "name": p.name,
                "uid": p.uid,
                "branch": p.branch,
                "year": p.year,
                "cgpa": p.cgpa,
                "certificates": len(p.certificates),
                "hackathons": len(p.hackathons),
                "internships": len(p.internships),
                "sports": len(p.sports),
            }
            for i, p in enumerate(profiles, start=1)
        ],
        columns=["rank", "name", "uid", "branch", "year", "cgpa",
                 "certificates", "hackathons", "internships", "sports"],
    )
