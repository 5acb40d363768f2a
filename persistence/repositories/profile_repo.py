# persistence/repositories/profile_repo.py
import json
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection, Engine

from core.profiles import (
    Certificate,
    ExtracurricularActivity,
    Hackathon,
    Internship,
    SportAchievement,
    StudentProfile,
    VerificationStatus,
)

# profile attribute -> (table, record type, {record field: column})
ACHIEVEMENT_TABLES = {
    "certificates": (
        "student_certificates",
        Certificate,
        {"title": "title", "category": "category", "year": "year", "proof_link": "proof_link"},
    ),
    "hackathons": (
        "student_hackathons",
        Hackathon,
        {"event_name": "event_name", "position": "position", "year": "year"},
    ),
    "sports": (
        "sports_achievements",
        SportAchievement,
        {"sport": "sport", "level": "level", "position": "position"},
    ),
    "internships": (
        "student_internships",
        Internship,
        {"company": "company", "role": "role", "duration": "duration"},
    ),
    "extracurricular": (
        "extracurricular_activities",
        ExtracurricularActivity,
        {"activity_name": "activity_name", "year": "year"},
    ),
}


def _skills(value: Any) -> List[str]:
    # text[] on Postgres, JSON text elsewhere
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(s) for s in value]
    raw = str(value).strip()
    if not raw:
        return []
    if raw.startswith("["):
        return [str(s) for s in json.loads(raw)]
    return [s.strip() for s in raw.strip("{}").split(",") if s.strip()]


class ProfileRepo:
    def __init__(self, engine: Engine):
        self.engine = engine

    def list_profiles(self, status: Optional[VerificationStatus] = None) -> List[StudentProfile]:
        sql = """
        SELECT id, user_id, name, uid, email, year, branch, major, cgpa, skills,
               verification_status, rejection_reason, submitted_at, reviewed_at
        FROM student_profiles
        {where}
        ORDER BY submitted_at DESC
        """
        params: Dict[str, Any] = {}
        where = ""
        if status is not None:
            where = "WHERE verification_status = :status"
            params["status"] = VerificationStatus(status).value

        with self.engine.begin() as conn:
            rows = [dict(r) for r in conn.execute(text(sql.format(where=where)), params).mappings().all()]
            achievements = self._load_achievements(conn, [str(r["id"]) for r in rows])

        return [self._to_profile(r, achievements.get(str(r["id"]), {})) for r in rows]

    def list_approved(self) -> List[StudentProfile]:
        return self.list_profiles(VerificationStatus.APPROVED)

    def _load_achievements(self, conn: Connection, profile_ids: Sequence[str]) -> Dict[str, Dict[str, list]]:
        out: Dict[str, Dict[str, list]] = defaultdict(lambda: defaultdict(list))
        if not profile_ids:
            return out

        for attr, (table, record_type, columns) in ACHIEVEMENT_TABLES.items():
            sql = text(
                f"SELECT profile_id, {', '.join(columns.values())} FROM {table} "
                "WHERE profile_id IN :ids ORDER BY created_at"
            ).bindparams(bindparam("ids", expanding=True))
            for r in conn.execute(sql, {"ids": list(profile_ids)}).mappings().all():
                record = record_type(**{f: (r[c] if r[c] is not None else "") for f, c in columns.items()})
                out[str(r["profile_id"])][attr].append(record)
        return out

    @staticmethod
    def _to_profile(row: Dict[str, Any], achievements: Dict[str, list]) -> StudentProfile:
        return StudentProfile(
            id=str(row["id"]),
            user_id=str(row.get("user_id") or ""),
            name=row["name"],
            uid=str(row["uid"]),
            email=row.get("email") or "",
            year=int(row.get("year") or 1),
            branch=row.get("branch") or "",
            major=row.get("major") or "",
            cgpa=float(row.get("cgpa") or 0.0),
            skills=_skills(row.get("skills")),
            certificates=list(achievements.get("certificates", [])),
            internships=list(achievements.get("internships", [])),
            hackathons=list(achievements.get("hackathons", [])),
            sports=list(achievements.get("sports", [])),
            extracurricular=list(achievements.get("extracurricular", [])),
            verification_status=VerificationStatus(row["verification_status"]),
            rejection_reason=row.get("rejection_reason"),
            submitted_at=str(row.get("submitted_at") or ""),
            reviewed_at=str(row["reviewed_at"]) if row.get("reviewed_at") else None,
        )
