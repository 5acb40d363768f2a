"""
Pytest configuration and fixtures for the ranking engine tests.

Markers:
    @pytest.mark.db - Tests that run against an in-memory SQLite engine

Usage:
    pytest                 # Run everything
    pytest -m "not db"     # Engine-only tests
"""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from core.models import Candidate
from core.profiles import (
    Certificate,
    ExtracurricularActivity,
    Hackathon,
    Internship,
    SportAchievement,
    StudentProfile,
    VerificationStatus,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "db: Tests using an in-memory SQLite database")


@pytest.fixture
def candidates():
    """Three students with a mixed benefit/cost metric set."""
    return [
        Candidate(id="s1", label="Asha", metrics={"cgpa": 9.1, "certificates": 2, "backlogs": 0}, meta={"uid": "U1"}),
        Candidate(id="s2", label="Bilal", metrics={"cgpa": 7.4, "certificates": 5, "backlogs": 1}, meta={"uid": "U2"}),
        Candidate(id="s3", label="Chen", metrics={"cgpa": 8.2, "certificates": 3, "backlogs": 3}, meta={"uid": "U3"}),
    ]


@pytest.fixture
def weights():
    return {"cgpa": 0.5, "certificates": 0.3, "backlogs": 0.2}


@pytest.fixture
def profiles():
    return [
        StudentProfile(
            id="p1",
            name="Asha",
            uid="U1",
            cgpa=9.1,
            branch="CSE",
            year=3,
            skills=["python", "sql"],
            certificates=[Certificate(title="AWS"), Certificate(title="GCP")],
            hackathons=[Hackathon(event_name="HackIndia", position="1")],
            verification_status=VerificationStatus.APPROVED,
        ),
        StudentProfile(
            id="p2",
            name="Bilal",
            uid="U2",
            cgpa=7.4,
            branch="ECE",
            year=2,
            internships=[Internship(company="Acme", role="Intern", duration="3 months")],
            sports=[SportAchievement(sport="Chess", level="State"), SportAchievement(sport="Football")],
            extracurricular=[ExtracurricularActivity(activity_name="Drama Club")],
            verification_status=VerificationStatus.APPROVED,
        ),
        StudentProfile(
            id="p3",
            name="Chen",
            uid="U3",
            cgpa=8.2,
            branch="ME",
            year=4,
            skills=["cad"],
            internships=[Internship(company="Foo"), Internship(company="Bar")],
            verification_status=VerificationStatus.APPROVED,
        ),
    ]


SCHEMA = """
CREATE TABLE student_profiles (
    id TEXT PRIMARY KEY, user_id TEXT, name TEXT, uid TEXT, email TEXT, year INTEGER,
    branch TEXT, major TEXT, cgpa REAL, skills TEXT, verification_status TEXT,
    rejection_reason TEXT, submitted_at TEXT, reviewed_at TEXT
);
CREATE TABLE student_certificates (
    id INTEGER PRIMARY KEY, profile_id TEXT, title TEXT, category TEXT, year TEXT,
    proof_link TEXT, created_at TEXT
);
CREATE TABLE student_hackathons (
    id INTEGER PRIMARY KEY, profile_id TEXT, event_name TEXT, position TEXT, year TEXT, created_at TEXT
);
CREATE TABLE sports_achievements (
    id INTEGER PRIMARY KEY, profile_id TEXT, sport TEXT, level TEXT, position TEXT, created_at TEXT
);
CREATE TABLE student_internships (
    id INTEGER PRIMARY KEY, profile_id TEXT, company TEXT, role TEXT, duration TEXT, created_at TEXT
);
CREATE TABLE extracurricular_activities (
    id INTEGER PRIMARY KEY, profile_id TEXT, activity_name TEXT, year TEXT, created_at TEXT
)
"""


@pytest.fixture
def engine():
    """In-memory SQLite engine seeded with two approved and one pending profile."""
    eng = create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}, future=True)
    with eng.begin() as conn:
        for stmt in SCHEMA.split(";"):
            conn.execute(text(stmt))

        conn.execute(
            text("""
                INSERT INTO student_profiles
                    (id, user_id, name, uid, email, year, branch, major, cgpa, skills,
                     verification_status, rejection_reason, submitted_at, reviewed_at)
                VALUES (:id, :user_id, :name, :uid, :email, :year, :branch, :major, :cgpa, :skills,
                        :status, NULL, :submitted_at, NULL)
            """),
            [
                {"id": "p1", "user_id": "u1", "name": "Asha", "uid": "U1", "email": "asha@example.edu",
                 "year": 3, "branch": "CSE", "major": "AI", "cgpa": 9.1, "skills": '["python", "sql"]',
                 "status": "approved", "submitted_at": "2024-01-02"},
                {"id": "p2", "user_id": "u2", "name": "Bilal", "uid": "U2", "email": "bilal@example.edu",
                 "year": 2, "branch": "ECE", "major": "", "cgpa": 7.4, "skills": "{vhdl,matlab}",
                 "status": "approved", "submitted_at": "2024-01-05"},
                {"id": "p3", "user_id": "u3", "name": "Chen", "uid": "U3", "email": "chen@example.edu",
                 "year": 4, "branch": "ME", "major": "", "cgpa": 8.2, "skills": None,
                 "status": "pending", "submitted_at": "2024-01-07"},
            ],
        )
        conn.execute(
            text("""
                INSERT INTO student_certificates (profile_id, title, category, year, proof_link, created_at)
                VALUES (:pid, :title, 'cloud', '2023', 'https://example.edu/proof', :created_at)
            """),
            [
                {"pid": "p1", "title": "AWS", "created_at": "2023-01-01"},
                {"pid": "p1", "title": "GCP", "created_at": "2023-02-01"},
                {"pid": "p3", "title": "Azure", "created_at": "2023-03-01"},
            ],
        )
        conn.execute(
            text("""
                INSERT INTO student_internships (profile_id, company, role, duration, created_at)
                VALUES ('p2', 'Acme', 'Intern', '3 months', '2023-06-01')
            """)
        )
        conn.execute(
            text("""
                INSERT INTO sports_achievements (profile_id, sport, level, position, created_at)
                VALUES ('p2', 'Chess', 'State', NULL, '2023-07-01')
            """)
        )
    yield eng
    eng.dispose()
