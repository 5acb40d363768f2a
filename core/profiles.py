# core/profiles.py
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from core.models import Candidate, CriterionDirection
from core.weights import build_pairwise_matrix_from_weights


class VerificationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Certificate:
    title: str
    category: str = ""
    year: str = ""
    proof_link: str = ""


@dataclass(frozen=True)
class Internship:
    company: str
    role: str = ""
    duration: str = ""


@dataclass(frozen=True)
class Hackathon:
    event_name: str
    position: str = ""
    year: str = ""


@dataclass(frozen=True)
class SportAchievement:
    sport: str
    level: str = ""
    position: str = ""


@dataclass(frozen=True)
class ExtracurricularActivity:
    activity_name: str
    year: str = ""


@dataclass(frozen=True)
class StudentProfile:
    id: str
    name: str
    uid: str
    cgpa: float
    user_id: str = ""
    email: str = ""
    year: int = 1
    branch: str = ""
    major: str = ""
    skills: List[str] = field(default_factory=list)
    certificates: List[Certificate] = field(default_factory=list)
    internships: List[Internship] = field(default_factory=list)
    hackathons: List[Hackathon] = field(default_factory=list)
    sports: List[SportAchievement] = field(default_factory=list)
    extracurricular: List[ExtracurricularActivity] = field(default_factory=list)
    verification_status: VerificationStatus = VerificationStatus.PENDING
    rejection_reason: Optional[str] = None
    submitted_at: str = ""
    reviewed_at: Optional[str] = None

    @property
    def achievement_count(self) -> int:
        return (
            len(self.certificates)
            + len(self.internships)
            + len(self.hackathons)
            + len(self.sports)
            + len(self.extracurricular)
        )


# fixed metric schema produced by build_candidates_from_profiles
PROFILE_CRITERIA: Tuple[str, ...] = (
    "cgpa",
    "certificates",
    "hackathons",
    "internships",
    "sports",
    "extracurricular",
    "skills",
)

DEFAULT_RANKING_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "cgpa": 0.4,
    "certificates": 0.15,
    "hackathons": 0.15,
    "internships": 0.15,
    "sports": 0.1,
    "extracurricular": 0.05,
    "skills": 0.05,
})

DEFAULT_CRITERIA_TYPES: Mapping[str, CriterionDirection] = MappingProxyType(
    {k: CriterionDirection.BENEFIT for k in PROFILE_CRITERIA}
)


def profile_metrics(profile: StudentProfile) -> dict:
    return {
        "cgpa": float(profile.cgpa),
        "certificates": len(profile.certificates),
        "hackathons": len(profile.hackathons),
        "internships": len(profile.internships),
        "sports": len(profile.sports),
        "extracurricular": len(profile.extracurricular),
        "skills": len(profile.skills),
    }


def build_candidates_from_profiles(profiles: Sequence[StudentProfile]) -> List[Candidate]:
    return [
        Candidate(
            id=p.id,
            label=p.name,
            metrics=profile_metrics(p),
            meta={"uid": p.uid, "profile": p},
        )
        for p in profiles
    ]


def default_pairwise_matrix(criteria: Sequence[str] = PROFILE_CRITERIA) -> List[List[float]]:
    return build_pairwise_matrix_from_weights(criteria, DEFAULT_RANKING_WEIGHTS)
