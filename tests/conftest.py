"""Shared fixtures: temporary SQLite store, fake text generator, API client."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database.db import init_db, make_engine
from dependencies.providers import get_inference_bridge, get_store
from main import app
from schemas.grades import Grade
from schemas.students import Student
from schemas.subjects import Subject
from services.llm.inference import InferenceBridge
from services.storage import RecordStore

from fakes import FakeGenerator


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_student():
    def _make(id, major="CS", enrollment_date="2023 Fall", gender="Male", age=20, **kw):
        return Student(
            id=id,
            first_name=kw.get("first_name", f"First{id}"),
            last_name=kw.get("last_name", f"Last{id}"),
            email=kw.get("email", f"student{id}@example.edu"),
            major=major,
            enrollment_date=enrollment_date,
            gender=gender,
            age=age,
        )
    return _make


@pytest.fixture
def make_grade():
    counter = iter(range(1, 10_000))

    def _make(student_id, grade, subject_id=1, semester="2024 Spring"):
        return Grade(
            id=next(counter),
            student_id=student_id,
            subject_id=subject_id,
            grade=grade,
            semester=semester,
            created_at="2024-01-15T00:00:00+00:00",
        )
    return _make


@pytest.fixture
def sample_records(make_student, make_grade):
    """Three students, two subjects, three grade rows.

    GPAs: Alice 3.50 (95, 85), Bob 3.70 (91), Cara has no grades (0).
    """
    students = [
        make_student(1, major="CS", enrollment_date="2022 Fall", gender="Female", age=20),
        make_student(2, major="Math", enrollment_date="2023 Spring", gender="Male", age=22),
        make_student(3, major="CS", enrollment_date="2023 Fall", gender="Female", age=19),
    ]
    subjects = [
        Subject(id=1, name="Calculus", code="MATH101"),
        Subject(id=2, name="Programming", code="CS101", description="Intro"),
    ]
    grades = [
        make_grade(1, 95, subject_id=1),
        make_grade(1, 85, subject_id=2),
        make_grade(2, 91, subject_id=1),
    ]
    return students, grades, subjects


# ---------------------------------------------------------------------------
# Storage / API
# ---------------------------------------------------------------------------

@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> RecordStore:
    return RecordStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def client(store, generator):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_inference_bridge] = lambda: InferenceBridge(generator)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def student_payload():
    return {
        "first_name": "Alice",
        "last_name": "Kim",
        "email": "alice@example.edu",
        "major": "CS",
        "enrollment_date": "2023 Fall",
        "gender": "Female",
        "age": 20,
    }
